"""Helpers for reading JSON out of model replies and writing JSON artifacts."""

import json

from .errors import NoJsonObjectError


def extract_json(text):
    """Parse the span between the first ``{`` and the last ``}`` of ``text``.

    Models sometimes wrap their JSON in prose. This assumes a single object
    and no stray braces around it; it does not track brace depth. Parse
    errors from :func:`json.loads` propagate unchanged.
    """
    if not text:
        raise NoJsonObjectError("No text to parse as JSON")
    first = text.find('{')
    last = text.rfind('}')
    if first == -1 or last == -1 or last <= first:
        raise NoJsonObjectError("No JSON object found in response")
    return json.loads(text[first:last + 1])


def safe_json_stringify(value):
    return json.dumps(value, indent=2, ensure_ascii=False)
