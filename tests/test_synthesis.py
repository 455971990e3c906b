import threading

import pytest

from briefkit import openai_client, prompts, synthesis
from briefkit.openai_client import InferredNames


def test_synthesize_uses_inferred_names(fake_openai):
    client = fake_openai()

    result = synthesis.synthesize(
        "Build a task tracker",
        [{'question': "Who?", 'answer': "Me"}],
        ["Solo"],
        ['Feature "Task CRUD": due dates'],
        client=client,
    )

    assert result.names.feature_name == "Task Tracking"
    assert result.branch_name == "feature/task-tracking"
    assert "Summary:\n- Solo" in result.clarifying_answers
    user = client.user_prompts(prompts.PRD_SYSTEM)[0]
    assert "- Project: Tasker" in user
    assert "- Feature: Task Tracking" in user
    assert 'Feedback:\n- Feature "Task CRUD": due dates' in user


def test_synthesize_defaults_when_naming_is_empty(fake_openai):
    client = fake_openai(names={})
    result = synthesis.synthesize("Build a task tracker", [], client=client)
    assert result.names == InferredNames("Project", "Core Feature", "Build a task tracker")
    assert result.branch_name == "feature/core-feature"


def test_preview_returns_features_and_stories(fake_openai, sample_prd):
    preview = synthesis.build_preview("Build a task tracker", [], client=fake_openai())
    assert preview == {'features': sample_prd['features'], 'userStories': sample_prd['userStories']}


def test_preview_defaults_to_empty_lists(fake_openai):
    preview = synthesis.build_preview("brief", [], client=fake_openai(prd={'features': "oops"}))
    assert preview == {'features': [], 'userStories': []}


def test_artifacts_merge_overrides_and_fall_back_to_inferred_names(fake_openai):
    client = fake_openai(prd={'userStories': [{'id': "US-001", 'title': "t", 'description': "d"}],
                              'features': [{'name': "A", 'summary': "a", 'userStoryIds': ["US-001"]}]})
    result = synthesis.synthesize("Build a task tracker", [], client=client)

    artifacts = synthesis.build_artifacts(result, [{'name': "Renamed"}])

    assert artifacts['features'] == [{'name': "Renamed", 'summary': "a", 'userStoryIds': ["US-001"]}]
    assert artifacts['prdMarkdown'].startswith("# PRD: Task Tracking\n")
    assert artifacts['prdJson']['project'] == "Tasker"
    assert artifacts['prdJson']['branchName'] == "feature/task-tracking"
    assert artifacts['prdJson']['description'] == "Track personal tasks"
    assert artifacts['prdJson']['userStories'][0]['priority'] == 1
    assert artifacts['promptMarkdown'].startswith("# Ralph Development Instructions")


def test_run_turn_without_preview(fake_openai):
    client = fake_openai(steps=[{'message': "Next?", 'done': False}])
    step, preview = synthesis.run_turn("brief", [], with_preview=False, client=client)
    assert step['message'] == "Next?"
    assert preview is None
    assert client.user_prompts(prompts.PRD_SYSTEM) == []


def test_run_turn_issues_both_calls_concurrently(monkeypatch):
    barrier = threading.Barrier(2, timeout=5)

    def fake_step(brief, history, client=None, model=None):
        barrier.wait()
        return {'message': "Next?", 'done': False}

    def fake_preview(brief, history, feedback=None, client=None, model=None):
        barrier.wait()
        return {'features': [], 'userStories': []}

    monkeypatch.setattr(openai_client, 'generate_interview_step', fake_step)
    monkeypatch.setattr(synthesis, 'build_preview', fake_preview)

    step, preview = synthesis.run_turn("brief", [{'question': "q", 'answer': "a"}])

    assert step == {'message': "Next?", 'done': False}
    assert preview == {'features': [], 'userStories': []}


def test_run_turn_waits_for_both_then_raises(monkeypatch):
    finished = []

    def failing_step(brief, history, client=None, model=None):
        raise RuntimeError("model down")

    def slow_preview(brief, history, feedback=None, client=None, model=None):
        finished.append(True)
        return {'features': [], 'userStories': []}

    monkeypatch.setattr(openai_client, 'generate_interview_step', failing_step)
    monkeypatch.setattr(synthesis, 'build_preview', slow_preview)

    with pytest.raises(RuntimeError, match="model down"):
        synthesis.run_turn("brief", [])
    assert finished == [True]
