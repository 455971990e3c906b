"""OpenAI completion gateway and the four prompt generators built on it."""

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from functools import wraps

from openai import OpenAI

from . import config, prompts
from .json_utils import extract_json

logger = logging.getLogger(__name__)

DEFAULT_PROJECT_NAME = "Project"
DEFAULT_FEATURE_NAME = "Core Feature"


class CompletionSource(str, Enum):
    STRUCTURED = "structured"
    RECOVERED = "recovered"


@dataclass
class CompletionResult:
    """JSON object decoded from a completion, and which attempt produced it."""
    data: dict
    source: CompletionSource


@dataclass
class InterviewStep:
    message: str = ""
    done: bool = False
    summary: list = None

    def to_dict(self):
        return {'message': self.message, 'done': self.done, 'summary': self.summary}


@dataclass
class InferredNames:
    project_name: str = DEFAULT_PROJECT_NAME
    feature_name: str = DEFAULT_FEATURE_NAME
    description: str = ""


@dataclass
class ClarifyingQuestion:
    question: str
    options: list = field(default_factory=list)


def get_openai_client():
    return OpenAI(api_key=config.get_openai_api_key())


def monitor_llm_call(func):
    """Log start, duration and failure of a model call."""
    @wraps(func)
    def wrapper(*args, **kwargs):
        name = func.__name__
        start_time = time.time()
        logger.info(f"[START] {name}")
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            logger.error(f"[ERROR] {name} failed after {time.time() - start_time:.2f}s: {e}")
            raise
        logger.info(f"[DONE] {name} completed in {time.time() - start_time:.2f}s")
        return result
    return wrapper


def _message_content(response):
    choices = getattr(response, 'choices', None) or []
    if not choices:
        return ""
    return choices[0].message.content or ""


def generate_json_response(system, user, temperature=0.2, model=None, client=None):
    """Ask the model for a JSON object.

    The first request asks for strict JSON output. If it fails for any
    reason the request is sent once more without the JSON response format
    and the object is pulled out of the raw text. A failure of that second
    request propagates to the caller.
    """
    client = client or get_openai_client()
    payload = {
        'model': model or config.get_model(),
        'temperature': temperature,
        'messages': [
            {'role': 'system', 'content': system},
            {'role': 'user', 'content': user},
        ],
    }

    try:
        response = client.chat.completions.create(**payload, response_format={'type': 'json_object'})
        return CompletionResult(extract_json(_message_content(response)), CompletionSource.STRUCTURED)
    except Exception as e:
        logger.warning(f"JSON mode completion failed, retrying without it: {e}")

    response = client.chat.completions.create(**payload)
    return CompletionResult(extract_json(_message_content(response)), CompletionSource.RECOVERED)


@monitor_llm_call
def generate_clarifying_questions(feature_name, description, is_new_project, client=None, model=None):
    user = prompts.clarifying_questions_prompt(feature_name, description, is_new_project)
    return generate_json_response(
        prompts.CLARIFYING_QUESTIONS_SYSTEM, user, temperature=0.3, model=model, client=client
    ).data


@monitor_llm_call
def generate_interview_step(brief, history, client=None, model=None):
    """Next interview question for ``brief`` given the full transcript so far."""
    user = prompts.interview_step_prompt(brief, history)
    return generate_json_response(
        prompts.INTERVIEW_SYSTEM, user, temperature=0.3, model=model, client=client
    ).data


@monitor_llm_call
def infer_names_from_brief(brief, client=None, model=None):
    return generate_json_response(
        prompts.NAMING_SYSTEM, prompts.naming_prompt(brief), temperature=0.2, model=model, client=client
    ).data


@monitor_llm_call
def generate_prd_data(project_name, feature_name, description, branch_name, clarifying_answers,
                      client=None, model=None):
    user = prompts.prd_data_prompt(project_name, feature_name, description, branch_name, clarifying_answers)
    return generate_json_response(
        prompts.PRD_SYSTEM, user, temperature=0.25, model=model, client=client
    ).data


def coerce_interview_step(data):
    data = data if isinstance(data, dict) else {}
    message = data.get('message')
    summary = data.get('summary')
    return InterviewStep(
        message=message if isinstance(message, str) else "",
        done=bool(data.get('done')),
        summary=summary if isinstance(summary, list) else None,
    )


def coerce_names(data, brief):
    data = data if isinstance(data, dict) else {}
    return InferredNames(
        project_name=data.get('projectName') or DEFAULT_PROJECT_NAME,
        feature_name=data.get('featureName') or DEFAULT_FEATURE_NAME,
        description=data.get('description') or brief,
    )


def coerce_questions(data):
    questions = []
    for item in (data or {}).get('questions') or []:
        if not isinstance(item, dict) or not item.get('question'):
            continue
        options = item.get('options')
        questions.append(ClarifyingQuestion(
            question=str(item['question']),
            options=[str(option) for option in options] if isinstance(options, list) else [],
        ))
    return questions
