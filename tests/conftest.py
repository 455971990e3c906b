import json
import threading
from types import SimpleNamespace

import pytest

from briefkit import prompts


def completion(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


class FakeOpenAI:
    """Stands in for ``openai.OpenAI``; answers chat completions by system prompt."""

    def __init__(self, steps=None, names=None, prd=None, questions=None):
        self.steps = list(steps or [])
        self.names = names or {}
        self.prd = prd or {}
        self.questions = questions or {'questions': []}
        self.calls = []
        self._lock = threading.Lock()
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._create))

    def _create(self, **kwargs):
        system = kwargs['messages'][0]['content']
        with self._lock:
            self.calls.append(kwargs)
            if system == prompts.INTERVIEW_SYSTEM:
                payload = self.steps.pop(0)
            elif system == prompts.NAMING_SYSTEM:
                payload = self.names
            elif system == prompts.PRD_SYSTEM:
                payload = self.prd
            elif system == prompts.CLARIFYING_QUESTIONS_SYSTEM:
                payload = self.questions
            else:
                raise AssertionError(f"unexpected system prompt: {system[:40]}")
        return completion(json.dumps(payload))

    def user_prompts(self, system):
        return [call['messages'][1]['content'] for call in self.calls if call['messages'][0]['content'] == system]


@pytest.fixture
def sample_prd():
    return {
        'project': "Tasker",
        'branchName': "feature/task-tracking",
        'description': "Track personal tasks",
        'introduction': "A lightweight task tracker for individuals.",
        'goals': ["Capture tasks quickly", "Never miss a due date"],
        'features': [
            {'name': "Task CRUD", 'summary': "Create and edit tasks", 'userStoryIds': ["US-001"]},
        ],
        'userStories': [
            {
                'id': "US-001",
                'title': "Create a task",
                'description': "As a user, I want to add a task so that I remember it.",
                'acceptanceCriteria': ["Task appears in the list", "Typecheck passes"],
            },
            {
                'id': "US-002",
                'title': "Complete a task",
                'description': "As a user, I want to tick off a task so that my list stays short.",
                'acceptanceCriteria': [],
            },
        ],
        'functionalRequirements': ["Support login", "FR-9: Legacy item"],
        'nonGoals': ["Team collaboration"],
        'designConsiderations': [],
        'technicalConsiderations': ["SQLite storage"],
        'successMetrics': ["Task added in under 5 seconds"],
        'openQuestions': [],
    }


@pytest.fixture
def sample_names():
    return {'projectName': "Tasker", 'featureName': "Task Tracking", 'description': "Track personal tasks"}


@pytest.fixture
def fake_openai(sample_names, sample_prd):
    def build(steps=None, **kwargs):
        kwargs.setdefault('names', sample_names)
        kwargs.setdefault('prd', sample_prd)
        return FakeOpenAI(steps=steps, **kwargs)
    return build
