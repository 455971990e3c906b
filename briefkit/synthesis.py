"""Synthesis steps shared by the CLI and the web API."""

import logging
from collections import namedtuple
from concurrent.futures import ThreadPoolExecutor

from . import openai_client
from .answers import build_clarifying_answers
from .prd import (
    branch_name_for,
    build_prd_json,
    build_prd_markdown,
    build_prompt_markdown,
    merge_feature_overrides,
)

logger = logging.getLogger(__name__)

Synthesis = namedtuple('Synthesis', ['names', 'branch_name', 'clarifying_answers', 'prd_data'])


def synthesize(brief, interview, summary=None, feedback=None, client=None, model=None):
    """Infer names from the brief and run one full PRD synthesis call."""
    names = openai_client.coerce_names(
        openai_client.infer_names_from_brief(brief, client=client, model=model), brief
    )
    clarifying_answers = build_clarifying_answers(brief, interview, summary, feedback)
    return synthesize_with_names(names, clarifying_answers, client=client, model=model)


def synthesize_with_names(names, clarifying_answers, client=None, model=None):
    branch_name = branch_name_for(names.feature_name)
    prd_data = openai_client.generate_prd_data(
        names.project_name,
        names.feature_name,
        names.description,
        branch_name,
        clarifying_answers,
        client=client,
        model=model,
    )
    if not isinstance(prd_data, dict):
        prd_data = {}
    logger.info(
        f"Synthesized PRD for {names.feature_name!r}: "
        f"{len(prd_data.get('features') or [])} features, {len(prd_data.get('userStories') or [])} stories"
    )
    return Synthesis(names, branch_name, clarifying_answers, prd_data)


def build_preview(brief, interview, feedback=None, client=None, model=None):
    prd_data = synthesize(brief, interview, feedback=feedback, client=client, model=model).prd_data
    features = prd_data.get('features')
    stories = prd_data.get('userStories')
    return {
        'features': features if isinstance(features, list) else [],
        'userStories': stories if isinstance(stories, list) else [],
    }


def build_artifacts(synthesis, feature_overrides=None):
    """Full PRD data with overrides applied, plus every rendered artifact."""
    names = synthesis.names
    prd_data = dict(synthesis.prd_data)
    prd_data['features'] = merge_feature_overrides(prd_data.get('features'), feature_overrides)

    prd_markdown = build_prd_markdown(prd_data, names.feature_name)
    prd_json = build_prd_json(
        prd_data.get('project') or names.project_name,
        prd_data.get('branchName') or synthesis.branch_name,
        prd_data.get('description') or names.description,
        prd_data.get('userStories'),
    )
    return {
        **prd_data,
        'prdMarkdown': prd_markdown,
        'prdJson': prd_json,
        'promptMarkdown': build_prompt_markdown(),
    }


def run_turn(brief, history, feedback=None, with_preview=True, client=None, model=None):
    """Request the next interview step and refresh the preview concurrently.

    Both calls are waited on. Returns ``(raw_step, preview)``; ``preview``
    is None when ``with_preview`` is false. If either call fails its error
    is raised once both have finished.
    """
    # snapshot so the worker threads never see later appends
    history = list(history)
    if not with_preview:
        return openai_client.generate_interview_step(brief, history, client=client, model=model), None

    with ThreadPoolExecutor(max_workers=2) as executor:
        step_future = executor.submit(
            openai_client.generate_interview_step, brief, history, client=client, model=model
        )
        preview_future = executor.submit(
            build_preview, brief, history, feedback, client=client, model=model
        )
        step_error = step_future.exception()
        preview_error = preview_future.exception()

    if step_error is not None:
        raise step_error
    if preview_error is not None:
        raise preview_error
    return step_future.result(), preview_future.result()
