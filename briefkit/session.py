"""Interview session state machine.

One ``InterviewSession`` holds everything a single CLI run (or browser tab)
accumulates: brief, turns, summary, the pending question, feedback messages
and the latest preview. Transitions are methods; calling one from a state
that does not allow it raises ``InvalidTransitionError``.

    NOT_STARTED -> INTERVIEW_IN_PROGRESS -> INTERVIEW_DONE -> GENERATED
    restart() returns to NOT_STARTED from anywhere.
"""

from dataclasses import dataclass, field
from enum import Enum

from .answers import NO_ANSWER, build_clarifying_answers, collect_feedback_lines
from .errors import GenerationError, InvalidTransitionError, MissingInputError


class SessionState(str, Enum):
    NOT_STARTED = "not_started"
    INTERVIEW_IN_PROGRESS = "interview_in_progress"
    INTERVIEW_DONE = "interview_done"
    GENERATED = "generated"


@dataclass
class InterviewSession:
    state: SessionState = SessionState.NOT_STARTED
    brief: str = ""
    history: list = field(default_factory=list)
    summary: list = None
    current_question: str = None
    closing_message: str = None
    feature_messages: dict = field(default_factory=dict)
    story_messages: dict = field(default_factory=dict)
    preview: dict = None
    result: dict = None

    def _require(self, *states):
        if self.state not in states:
            allowed = ", ".join(state.value for state in states)
            raise InvalidTransitionError(f"Not allowed in state {self.state.value} (expected {allowed})")

    @property
    def turn_number(self):
        return len(self.history) + 1

    @property
    def awaiting_answer(self):
        return self.state is SessionState.INTERVIEW_IN_PROGRESS and bool(self.current_question)

    def start(self, brief):
        self._require(SessionState.NOT_STARTED)
        brief = (brief or "").strip()
        if not brief:
            raise MissingInputError("Brief is required.")
        self.brief = brief
        self.state = SessionState.INTERVIEW_IN_PROGRESS

    def receive_step(self, step):
        """Apply an interview step returned by the model."""
        self._require(SessionState.INTERVIEW_IN_PROGRESS)
        if step.summary is not None:
            self.summary = list(step.summary)
        if step.done:
            self.current_question = None
            self.closing_message = step.message.strip() or None
            self.state = SessionState.INTERVIEW_DONE
            return
        if not step.message.strip():
            raise GenerationError("Interview question missing.")
        self.current_question = step.message.strip()

    def answer(self, text):
        """Record an answer to the pending question and return the new turn."""
        if not self.awaiting_answer:
            raise InvalidTransitionError("No question is waiting for an answer")
        turn = {'question': self.current_question, 'answer': (text or "").strip() or NO_ANSWER}
        self.history.append(turn)
        self.current_question = None
        return turn

    def finish(self):
        self._require(SessionState.INTERVIEW_IN_PROGRESS)
        self.current_question = None
        self.state = SessionState.INTERVIEW_DONE

    def add_feature_message(self, index, message):
        self._require(SessionState.INTERVIEW_IN_PROGRESS, SessionState.INTERVIEW_DONE)
        message = _clean_message(message)
        if index < 0:
            raise MissingInputError("Feature index must not be negative.")
        self.feature_messages.setdefault(index, []).append(message)

    def add_story_message(self, story_id, message):
        self._require(SessionState.INTERVIEW_IN_PROGRESS, SessionState.INTERVIEW_DONE)
        message = _clean_message(message)
        story_id = (story_id or "").strip()
        if not story_id:
            raise MissingInputError("Story id is required.")
        self.story_messages.setdefault(story_id, []).append(message)

    def set_preview(self, preview):
        self._require(SessionState.INTERVIEW_IN_PROGRESS, SessionState.INTERVIEW_DONE)
        self.preview = preview

    @property
    def preview_features(self):
        return (self.preview or {}).get('features') or []

    @property
    def preview_stories(self):
        return (self.preview or {}).get('userStories') or []

    def feedback_lines(self):
        return collect_feedback_lines(
            self.preview_features, self.preview_stories, self.feature_messages, self.story_messages
        )

    def clarifying_answers(self):
        return build_clarifying_answers(self.brief, self.history, self.summary, self.feedback_lines())

    def mark_generated(self, result):
        self._require(SessionState.INTERVIEW_DONE)
        self.result = result
        self.state = SessionState.GENERATED

    def restart(self):
        self.state = SessionState.NOT_STARTED
        self.brief = ""
        self.history = []
        self.summary = None
        self.current_question = None
        self.closing_message = None
        self.feature_messages = {}
        self.story_messages = {}
        self.preview = None
        self.result = None


def _clean_message(message):
    message = (message or "").strip()
    if not message:
        raise MissingInputError("Feedback message is empty.")
    return message
