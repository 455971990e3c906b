"""Render PRD data into markdown, prd.json and prompt.md, and resolve output paths.

Everything in here is a pure function of its inputs: rendering the same data
twice yields byte-identical output.
"""

import os
import re
from collections import namedtuple

from .agent_prompt import PROMPT_TEMPLATE

PLACEHOLDER = "TBD"
FR_PREFIX = re.compile(r'^FR-\d+:', re.IGNORECASE)

OutputPaths = namedtuple('OutputPaths', ['tasks_dir', 'prd_path', 'prd_json_path', 'prompt_path'])


def kebab_case(value):
    value = re.sub(r'[^a-z0-9]+', '-', (value or "").lower())
    return value.strip('-')


def branch_name_for(feature_name):
    return "feature/" + re.sub(r'\s+', '-', (feature_name or "").lower())


def ensure_list(value, fallback=None):
    """Return ``value`` if it is a non-empty list, otherwise the fallback.

    The default fallback is a single ``TBD`` placeholder.
    """
    if fallback is None:
        fallback = [PLACEHOLDER]
    if not isinstance(value, list) or not value:
        return list(fallback)
    return value


def _bullets(items):
    return "\n".join(f"- {item}" for item in items)


def _text(value):
    return "" if value is None else str(value)


def number_functional_requirements(requirements):
    numbered = []
    for index, item in enumerate(ensure_list(requirements), start=1):
        item = _text(item)
        numbered.append(item if FR_PREFIX.match(item) else f"FR-{index}: {item}")
    return numbered


def render_story(story):
    criteria = ensure_list(story.get('acceptanceCriteria'))
    return "\n".join([
        f"### {_text(story.get('id'))}: {_text(story.get('title'))}",
        f"**Description:** {_text(story.get('description'))}",
        "",
        "**Acceptance Criteria:**",
        "\n".join(f"- [ ] {item}" for item in criteria),
    ])


def build_prd_markdown(prd_data, feature_name):
    """Render the human-readable PRD.

    Sections always appear in the same order. Missing or empty list fields
    render as a single ``TBD`` bullet; an empty story list renders ``TBD``
    with no story headings.
    """
    stories = [story for story in ensure_list(prd_data.get('userStories'), []) if isinstance(story, dict)]
    story_blocks = "\n\n".join(render_story(story) for story in stories)

    return "\n".join([
        f"# PRD: {feature_name}",
        "",
        "## Introduction/Overview",
        _text(prd_data.get('introduction')) or PLACEHOLDER,
        "",
        "## Goals",
        _bullets(ensure_list(prd_data.get('goals'))),
        "",
        "## User Stories",
        story_blocks or PLACEHOLDER,
        "",
        "## Functional Requirements",
        _bullets(number_functional_requirements(prd_data.get('functionalRequirements'))),
        "",
        "## Non-Goals (Out of Scope)",
        _bullets(ensure_list(prd_data.get('nonGoals'))),
        "",
        "## Design Considerations (Optional)",
        _bullets(ensure_list(prd_data.get('designConsiderations'))),
        "",
        "## Technical Considerations (Optional)",
        _bullets(ensure_list(prd_data.get('technicalConsiderations'))),
        "",
        "## Success Metrics",
        _bullets(ensure_list(prd_data.get('successMetrics'))),
        "",
        "## Open Questions",
        _bullets(ensure_list(prd_data.get('openQuestions'))),
        "",
    ])


def build_prd_json(project, branch_name, description, user_stories):
    """Build the story-tracking document consumed by the agent loop.

    ``priority`` is the story's position in ``user_stories``, not its id.
    Entries that are not objects are dropped before numbering.
    ``passes`` and ``notes`` start empty and are never filled in here.
    """
    stories = user_stories if isinstance(user_stories, list) else []
    stories = [story for story in stories if isinstance(story, dict)]
    return {
        'project': project,
        'branchName': branch_name,
        'description': description,
        'userStories': [
            {
                'id': story.get('id'),
                'title': story.get('title'),
                'description': story.get('description'),
                'acceptanceCriteria': ensure_list(story.get('acceptanceCriteria')),
                'priority': index,
                'passes': False,
                'notes': "",
            }
            for index, story in enumerate(stories, start=1)
        ],
    }


def build_prompt_markdown():
    return PROMPT_TEMPLATE


def merge_feature_overrides(features, overrides):
    """Apply user edits to model-produced features by position.

    A non-empty override ``name`` or ``summary`` replaces the original, and
    ``userStoryIds`` is replaced only by a non-empty list. Indices without an
    override pass through; overrides past the end have no target.
    """
    features = features if isinstance(features, list) else []
    if not isinstance(overrides, list):
        return list(features)

    merged = []
    for index, feature in enumerate(features):
        override = overrides[index] if index < len(overrides) else None
        if not isinstance(override, dict) or not isinstance(feature, dict):
            merged.append(feature)
            continue
        result = dict(feature)
        for key in ('name', 'summary'):
            if override.get(key):
                result[key] = override[key]
        story_ids = override.get('userStoryIds')
        if isinstance(story_ids, list) and story_ids:
            result['userStoryIds'] = list(story_ids)
        merged.append(result)
    return merged


def resolve_feature_stories(feature, stories):
    """Stories referenced by ``feature``, in ``userStoryIds`` order.

    Ids that match no story are skipped; the first story wins on duplicate ids.
    """
    by_id = {}
    for story in stories or []:
        if isinstance(story, dict) and story.get('id') is not None:
            by_id.setdefault(story['id'], story)
    story_ids = feature.get('userStoryIds') if isinstance(feature, dict) else None
    if not isinstance(story_ids, list):
        return []
    return [by_id[story_id] for story_id in story_ids if story_id in by_id]


def resolve_output_paths(feature_name, output_dir=None):
    base_dir = output_dir or os.getcwd()
    tasks_dir = os.path.join(base_dir, 'tasks')
    return OutputPaths(
        tasks_dir=tasks_dir,
        prd_path=os.path.join(tasks_dir, f"prd-{kebab_case(feature_name)}.md"),
        prd_json_path=os.path.join(base_dir, 'prd.json'),
        prompt_path=os.path.join(base_dir, 'prompt.md'),
    )
