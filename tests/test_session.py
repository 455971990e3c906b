import pytest

from briefkit.errors import GenerationError, InvalidTransitionError, MissingInputError
from briefkit.openai_client import InterviewStep
from briefkit.session import InterviewSession, SessionState


def started(brief="Build a task tracker", question="Who is it for?"):
    session = InterviewSession()
    session.start(brief)
    session.receive_step(InterviewStep(message=question))
    return session


def test_happy_path_transitions():
    session = started()
    assert session.state is SessionState.INTERVIEW_IN_PROGRESS
    assert session.turn_number == 1

    turn = session.answer("Solo developers")
    assert turn == {'question': "Who is it for?", 'answer': "Solo developers"}
    assert session.turn_number == 2
    assert session.current_question is None

    session.receive_step(InterviewStep(message="All set", done=True, summary=["Solo devs"]))
    assert session.state is SessionState.INTERVIEW_DONE
    assert session.current_question is None
    assert session.summary == ["Solo devs"]
    assert session.closing_message == "All set"

    session.mark_generated({'prdMarkdown': "# PRD: X"})
    assert session.state is SessionState.GENERATED


def test_blank_brief_is_rejected():
    with pytest.raises(MissingInputError, match="Brief is required"):
        InterviewSession().start("   ")


def test_blank_answer_is_recorded_as_no_answer():
    session = started()
    assert session.answer("   ")['answer'] == "(no answer)"


def test_cannot_answer_without_pending_question():
    session = started()
    session.answer("first")
    with pytest.raises(InvalidTransitionError):
        session.answer("second")


def test_missing_question_is_an_error():
    session = InterviewSession()
    session.start("brief")
    with pytest.raises(GenerationError, match="Interview question missing"):
        session.receive_step(InterviewStep(message="  "))


def test_summary_is_replaced_not_merged():
    session = started()
    session.receive_step(InterviewStep(message="Next?", summary=["one"]))
    session.answer("x")
    session.receive_step(InterviewStep(message="Again?", summary=["two"]))
    assert session.summary == ["two"]


def test_no_steps_after_done():
    session = started()
    session.finish()
    assert session.state is SessionState.INTERVIEW_DONE
    with pytest.raises(InvalidTransitionError):
        session.receive_step(InterviewStep(message="More?"))
    with pytest.raises(InvalidTransitionError):
        session.answer("late")


def test_generate_requires_finished_interview():
    with pytest.raises(InvalidTransitionError):
        started().mark_generated({})


def test_feedback_accumulates_and_feeds_answers():
    session = started()
    session.answer("Solo devs")
    session.finish()
    session.set_preview({
        'features': [{'name': "Task CRUD"}],
        'userStories': [{'id': "US-001", 'title': "Create a task"}],
    })
    session.add_feature_message(0, "needs due dates")
    session.add_feature_message(0, "and tags")
    session.add_story_message("US-001", "keyboard shortcut")

    assert session.feedback_lines() == [
        'Feature "Task CRUD": needs due dates',
        'Feature "Task CRUD": and tags',
        "Story US-001: Create a task: keyboard shortcut",
    ]
    text = session.clarifying_answers()
    assert text.startswith("Brief: Build a task tracker\n\nQ1: Who is it for?\nA1: Solo devs")
    assert 'Feedback:\n- Feature "Task CRUD": needs due dates' in text


def test_blank_feedback_is_rejected():
    session = started()
    with pytest.raises(MissingInputError):
        session.add_feature_message(0, "  ")
    with pytest.raises(MissingInputError):
        session.add_story_message("", "note")


def test_feedback_not_allowed_before_start():
    with pytest.raises(InvalidTransitionError):
        InterviewSession().add_feature_message(0, "note")


def test_restart_clears_everything():
    session = started()
    session.answer("Solo devs")
    session.receive_step(InterviewStep(message="Done", done=True, summary=["s"]))
    session.set_preview({'features': [{'name': "A"}], 'userStories': []})
    session.add_feature_message(0, "note")
    session.add_story_message("US-001", "note")
    session.mark_generated({'ok': True})

    session.restart()

    assert session == InterviewSession()
    session.start("Another idea")
    assert session.brief == "Another idea"


def test_appended_turn_survives_later_failure():
    session = started()
    session.answer("Solo devs")
    with pytest.raises(GenerationError):
        session.receive_step(InterviewStep(message=""))
    assert len(session.history) == 1
