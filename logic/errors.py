"""Error taxonomy surfaced by the proxy, the extractor and the curator.

Every error carries a short user-facing ``message`` and the HTTP status the
server answers with, so a single exception handler can render any of them.
"""

from __future__ import annotations


class PaletteError(Exception):
    """Base class for failures shown to the end user."""

    status_code = 500
    default_message = "Something went wrong."

    def __init__(self, message: str | None = None, *, status_code: int | None = None) -> None:
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ConfigurationError(PaletteError):
    """The server is missing its Gemini credential."""

    default_message = "Missing GEMINI_API_KEY in server env."


class PromptValidationError(PaletteError):
    """The request was rejected before any network call."""

    status_code = 400
    default_message = "Missing prompt."


class MissingPreferencesError(PromptValidationError):
    """Every preference field was blank."""

    default_message = "Add at least one preference so the palette feels personal."


class UpstreamError(PaletteError):
    """Gemini answered with a non-2xx status."""

    status_code = 502
    default_message = "Gemini API error."


class UnexpectedError(PaletteError):
    """Network or runtime fault; details stay in the server log."""

    default_message = "Unexpected server error."


class SubmissionInProgressError(PaletteError):
    """A generation is already running for this session."""

    status_code = 409
    default_message = "A palette is already being curated."


class ExtractionError(PaletteError):
    """The model reply could not be turned into recommendations."""

    status_code = 502
    reason = "extraction failure"


class ResponseParseError(ExtractionError):
    reason = "parse failure"
    default_message = "Gemini response could not be parsed as JSON."

    def __init__(self, original_error: Exception, message: str | None = None) -> None:
        self.original_error = original_error
        super().__init__(message)


class ResponseShapeError(ExtractionError):
    reason = "not an array"
    default_message = "Gemini response was not a JSON array."


class EmptyRecommendationsError(ExtractionError):
    reason = "no usable colors"
    default_message = "Gemini response did not include usable colors."


__all__ = [
    "ConfigurationError",
    "EmptyRecommendationsError",
    "ExtractionError",
    "MissingPreferencesError",
    "PaletteError",
    "PromptValidationError",
    "ResponseParseError",
    "ResponseShapeError",
    "SubmissionInProgressError",
    "UnexpectedError",
    "UpstreamError",
]
