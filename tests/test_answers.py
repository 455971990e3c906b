from briefkit.answers import (
    build_clarifying_answers,
    build_numbered_answers,
    collect_feedback_lines,
    format_history,
)


def test_brief_history_and_feedback_without_summary():
    text = build_clarifying_answers(
        "Build a task tracker",
        [{'question': "Who?", 'answer': "PMs"}],
        None,
        ['Feature "Auth": clarify login'],
    )
    assert text == (
        "Brief: Build a task tracker\n\n"
        "Q1: Who?\nA1: PMs\n\n"
        "Feedback:\n- Feature \"Auth\": clarify login"
    )
    assert text.count("Q1:") == 1
    assert "Summary:" not in text
    assert text.count("Feedback:") == 1


def test_summary_block_and_ordering():
    text = build_clarifying_answers(
        "Brief",
        [{'question': "Q one", 'answer': "A one"}, {'question': "Q two", 'answer': "A two"}],
        ["Solo users", "Web only"],
    )
    assert text.index("Q1: Q one") < text.index("Q2: Q two") < text.index("Summary:")
    assert "Summary:\n- Solo users\n- Web only" in text
    assert "Feedback:" not in text


def test_empty_blocks_are_omitted():
    assert build_clarifying_answers("Just a brief", [], [], []) == "Brief: Just a brief"


def test_feedback_drops_blank_and_non_string_entries():
    text = build_clarifying_answers("B", [], None, ["  keep me  ", "", "   ", 42, None])
    assert text == "Brief: B\n\nFeedback:\n- keep me"


def test_format_history_matches_interview_prompt_blocks():
    history = [{'question': "Who?", 'answer': "Me"}, {'question': "Why?", 'answer': "Speed"}]
    assert format_history(history) == "Q1: Who?\nA1: Me\n\nQ2: Why?\nA2: Speed"


def test_collect_feedback_lines_features_then_stories():
    features = [{'name': "Auth"}, {'name': "Search"}]
    stories = [{'id': "US-002", 'title': "Find tasks"}]
    feature_messages = {1: ["faster please"], 0: ["clarify login", "add SSO"]}
    story_messages = {"US-002": ["fuzzy match"]}

    lines = collect_feedback_lines(features, stories, feature_messages, story_messages)

    assert lines == [
        'Feature "Search": faster please',
        'Feature "Auth": clarify login',
        'Feature "Auth": add SSO',
        "Story US-002: Find tasks: fuzzy match",
    ]


def test_collect_feedback_lines_fallbacks():
    lines = collect_feedback_lines(
        [{'name': ""}], [], {0: ["name me"], 3: ["gone"]}, {"US-404": ["missing"]}
    )
    assert lines == [
        'Feature "Feature 1": name me',
        'Feature "Feature 4": gone',
        "Story US-404: US-404: missing",
    ]


def test_numbered_answers_for_simple_flow():
    text = build_numbered_answers([
        {'question': "Who is it for?", 'answer': "A. Individuals"},
        {'question': "Platform?", 'answer': ""},
    ])
    assert text == "1. Who is it for?\nAnswer: A. Individuals\n\n2. Platform?\nAnswer: (no answer)"
