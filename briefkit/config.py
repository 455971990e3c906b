"""Environment-backed configuration.

``.env`` is loaded once on import; values are read from the environment at
call time so tests and long-running processes see updates.
"""

import os

from dotenv import load_dotenv

from .errors import ConfigurationError

load_dotenv()

DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_TRANSCRIBE_MODEL = "whisper-1"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 5000


def get_openai_api_key() -> str:
    api_key = os.getenv("OPENAI_API_KEY")
    if not api_key:
        raise ConfigurationError("OPENAI_API_KEY is not set")
    return api_key


def openai_configured() -> bool:
    return bool(os.getenv("OPENAI_API_KEY"))


def get_model() -> str:
    return os.getenv("OPENAI_MODEL") or DEFAULT_MODEL


def get_transcribe_model() -> str:
    return os.getenv("OPENAI_TRANSCRIBE_MODEL") or DEFAULT_TRANSCRIBE_MODEL


def get_log_level() -> str:
    return (os.getenv("BRIEFKIT_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper()


def get_log_file():
    return os.getenv("BRIEFKIT_LOG_FILE") or None


def get_host() -> str:
    return os.getenv("HOST") or DEFAULT_HOST


def get_port() -> int:
    return int(os.environ.get("PORT", DEFAULT_PORT))
