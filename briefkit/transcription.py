"""Speech-to-text for recorded briefs and answers."""

import logging

from . import config
from .errors import MissingInputError
from .openai_client import get_openai_client, monitor_llm_call

logger = logging.getLogger(__name__)


def _as_mapping(payload):
    if hasattr(payload, 'model_dump'):
        return payload.model_dump()
    if isinstance(payload, dict):
        return payload
    return None


def _segment_text(segment):
    if isinstance(segment, str):
        return segment
    segment = _as_mapping(segment)
    if segment and isinstance(segment.get('text'), str):
        return segment['text']
    return ""


def extract_transcript(payload):
    """Pull transcript text out of the shapes transcription services return.

    Tries a bare string, ``text``, nested ``text.text``, ``transcript`` and
    finally ``segments`` joined with spaces. Anything else yields ``""``.
    """
    if isinstance(payload, str):
        return payload
    record = _as_mapping(payload)
    if not record:
        return ""
    text = record.get('text')
    if isinstance(text, str):
        return text
    if isinstance(text, dict) and isinstance(text.get('text'), str):
        return text['text']
    if isinstance(record.get('transcript'), str):
        return record['transcript']
    segments = record.get('segments')
    if isinstance(segments, list):
        return " ".join(part for part in (_segment_text(segment) for segment in segments) if part)
    return ""


@monitor_llm_call
def transcribe_audio(filename, data, content_type=None, client=None, model=None):
    if not data:
        raise MissingInputError("Missing audio file")
    client = client or get_openai_client()
    upload = (filename or 'audio.webm', data, content_type) if content_type else (filename or 'audio.webm', data)
    logger.info(f"Transcribing {len(data)} bytes from {upload[0]}")
    response = client.audio.transcriptions.create(file=upload, model=model or config.get_transcribe_model())
    return extract_transcript(response)
