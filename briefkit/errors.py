"""Exception types raised across BriefKit."""


class BriefKitError(Exception):
    """Base class for all BriefKit errors."""


class MissingInputError(BriefKitError, ValueError):
    """A required input (brief, audio file, ...) was not provided."""


class ConfigurationError(BriefKitError):
    """Required configuration such as the OpenAI API key is missing."""


class NoJsonObjectError(BriefKitError, ValueError):
    """Model output did not contain a JSON object."""


class GenerationError(BriefKitError):
    """The model replied, but not with something usable."""


class InvalidTransitionError(BriefKitError):
    """An interview session operation is not allowed in the current state."""
