"""Turn interview history, summaries and feedback into the synthesis input text.

The text built here is the only way interview answers and user feedback
reach the PRD generator, so the format is kept deterministic.
"""

NO_ANSWER = "(no answer)"


def format_history(history):
    """Render interview turns as ``Q{n}/A{n}`` blocks separated by blank lines."""
    return "\n\n".join(_history_blocks(history))


def _history_blocks(history):
    return [
        f"Q{index}: {turn.get('question', '')}\nA{index}: {turn.get('answer', '')}"
        for index, turn in enumerate(history or [], start=1)
    ]


def format_summary(summary):
    if not isinstance(summary, list) or not summary:
        return ""
    return "Summary:\n" + "\n".join(f"- {item}" for item in summary)


def format_feedback(feedback):
    """Build the ``Feedback:`` block; non-string and blank entries are dropped."""
    if not isinstance(feedback, list):
        return ""
    items = [item.strip() for item in feedback if isinstance(item, str)]
    items = [item for item in items if item]
    if not items:
        return ""
    return "Feedback:\n" + "\n".join(f"- {item}" for item in items)


def build_clarifying_answers(brief, interview, summary=None, feedback=None):
    """Concatenate brief, Q/A blocks, summary and feedback, skipping empty blocks."""
    blocks = [f"Brief: {brief}"]
    blocks.extend(_history_blocks(interview))
    blocks.append(format_summary(summary))
    blocks.append(format_feedback(feedback))
    return "\n\n".join(block for block in blocks if block)


def collect_feedback_lines(features, stories, feature_messages, story_messages):
    """Flatten the per-feature and per-story feedback maps into feedback lines.

    Feature entries come first, in map insertion order, then story entries.
    Features are named from the current preview by positional index; story
    titles are looked up by id. Missing targets fall back to the index or id.
    """
    features = features or []
    story_titles = {}
    for story in stories or []:
        if isinstance(story, dict) and story.get('id'):
            story_titles.setdefault(story['id'], story.get('title'))

    lines = []
    for index, messages in (feature_messages or {}).items():
        feature = features[index] if 0 <= index < len(features) else None
        name = feature.get('name') if isinstance(feature, dict) else None
        label = name or f"Feature {index + 1}"
        for message in messages:
            lines.append(f'Feature "{label}": {message}')

    for story_id, messages in (story_messages or {}).items():
        title = story_titles.get(story_id) or story_id
        for message in messages:
            lines.append(f"Story {story_id}: {title}: {message}")
    return lines


def build_numbered_answers(answers):
    """Format answers to clarifying questions for the simple flow.

    ``answers`` is a list of ``{"question", "answer"}`` dicts.
    """
    blocks = []
    for index, item in enumerate(answers or [], start=1):
        answer = item.get('answer') or NO_ANSWER
        blocks.append(f"{index}. {item.get('question', '')}\nAnswer: {answer}")
    return "\n\n".join(blocks)
