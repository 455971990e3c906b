from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from briefkit.errors import MissingInputError
from briefkit.transcription import extract_transcript, transcribe_audio


@pytest.mark.parametrize('payload, expected', [
    ("plain text", "plain text"),
    ({'text': "hello"}, "hello"),
    ({'text': {'text': "nested"}}, "nested"),
    ({'transcript': "from transcript"}, "from transcript"),
    ({'segments': ["one", {'text': "two"}, {'start': 0}, ""]}, "one two"),
    ({'other': "nope"}, ""),
    (None, ""),
    (42, ""),
])
def test_extract_transcript_shapes(payload, expected):
    assert extract_transcript(payload) == expected


def test_text_wins_over_transcript():
    assert extract_transcript({'text': "first", 'transcript': "second"}) == "first"


def test_extract_from_sdk_object():
    response = SimpleNamespace(model_dump=lambda: {'text': "from sdk"})
    assert extract_transcript(response) == "from sdk"


def test_transcribe_audio_calls_client(monkeypatch):
    monkeypatch.delenv("OPENAI_TRANSCRIBE_MODEL", raising=False)
    client = MagicMock()
    client.audio.transcriptions.create.return_value = {'text': "Build a task tracker"}

    text = transcribe_audio("brief.webm", b"audio-bytes", "audio/webm", client=client)

    assert text == "Build a task tracker"
    kwargs = client.audio.transcriptions.create.call_args.kwargs
    assert kwargs['file'] == ("brief.webm", b"audio-bytes", "audio/webm")
    assert kwargs['model'] == "whisper-1"


def test_transcribe_audio_requires_data():
    with pytest.raises(MissingInputError):
        transcribe_audio("empty.webm", b"", client=MagicMock())
