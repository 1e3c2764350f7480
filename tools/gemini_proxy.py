"""Server-side relay between the page and the Gemini generateContent API."""

from __future__ import annotations

import logging
from typing import Any, List, Optional

import requests
from pydantic import BaseModel, Field, ValidationError

from logic.errors import ConfigurationError, PromptValidationError, UnexpectedError, UpstreamError
from polish_app.config import PolishConfig
from polish_app.logging_config import get_logger, log_event
from tools.observability import instrument_tool

LOGGER = get_logger(__name__)


class PromptRequest(BaseModel):
    """Body accepted by ``POST /api/gemini``."""

    prompt: str = Field(min_length=1, strict=True)


class _Part(BaseModel):
    text: Optional[str] = None


class _Content(BaseModel):
    parts: List[_Part] = []


class _Candidate(BaseModel):
    content: Optional[_Content] = None


class _GenerateContentResponse(BaseModel):
    candidates: List[_Candidate] = []


class _ErrorDetail(BaseModel):
    message: Optional[str] = None


class _ErrorResponse(BaseModel):
    error: Optional[_ErrorDetail] = None


def _first_text(payload: Any) -> str:
    """Return ``candidates[0].content.parts[0].text`` or an empty string."""

    try:
        parsed = _GenerateContentResponse.model_validate(payload or {})
    except ValidationError:
        LOGGER.warning("Gemini payload did not match the expected shape")
        return ""
    if not parsed.candidates:
        return ""
    content = parsed.candidates[0].content
    if content is None or not content.parts:
        return ""
    return content.parts[0].text or ""


def _error_message(payload: Any) -> Optional[str]:
    try:
        parsed = _ErrorResponse.model_validate(payload or {})
    except ValidationError:
        return None
    return parsed.error.message if parsed.error else None


class GeminiProxy:
    """Holds the credential and forwards prompts to Gemini.

    The page never sees the API key; it only talks to this relay.
    """

    def __init__(self, config: PolishConfig, session: requests.Session | None = None) -> None:
        self.config = config
        self._http = session or requests

    @property
    def endpoint(self) -> str:
        model = self.config.model.removeprefix("models/")
        return f"{self.config.api_base}/models/{model}:generateContent"

    def validate_prompt(self, payload: Any) -> str:
        """Check configuration first, then the request body; no network I/O."""

        if not self.config.has_api_key:
            raise ConfigurationError()
        if not isinstance(payload, dict):
            raise PromptValidationError()
        try:
            return PromptRequest.model_validate(payload).prompt
        except ValidationError as exc:
            raise PromptValidationError() from exc

    def relay(self, payload: Any) -> str:
        """Validate a ``{prompt}`` body and return Gemini's reply text."""

        return self.generate(self.validate_prompt(payload))

    @instrument_tool("gemini_generate_content")
    def generate(self, prompt: str) -> str:
        """Send ``prompt`` to Gemini and return the first candidate's text.

        Raises:
            ConfigurationError: No API key is configured.
            PromptValidationError: ``prompt`` is empty or not a string.
            UpstreamError: Gemini answered with a non-2xx status.
            UnexpectedError: The request failed before a response arrived.
        """

        if not self.config.has_api_key:
            raise ConfigurationError()
        if not isinstance(prompt, str) or not prompt:
            raise PromptValidationError()

        body = {"contents": [{"role": "user", "parts": [{"text": prompt}]}]}
        try:
            response = self._http.post(
                self.endpoint,
                json=body,
                headers={
                    "Content-Type": "application/json",
                    "x-goog-api-key": self.config.api_key,
                },
                timeout=self.config.timeout_seconds,
            )
        except requests.RequestException as exc:
            log_event(
                LOGGER,
                logging.ERROR,
                "gemini_request_failed",
                model=self.config.model,
                error_type=type(exc).__name__,
                exc_info=True,
            )
            raise UnexpectedError() from exc

        try:
            data = response.json()
        except ValueError:
            data = None

        if not 200 <= response.status_code < 300:
            log_event(
                LOGGER,
                logging.WARNING,
                "gemini_upstream_error",
                model=self.config.model,
                status_code=response.status_code,
            )
            raise UpstreamError(_error_message(data), status_code=response.status_code)

        text = _first_text(data)
        log_event(
            LOGGER,
            logging.INFO,
            "gemini_reply_received",
            model=self.config.model,
            status_code=response.status_code,
            reply_length=len(text),
        )
        return text


__all__ = ["GeminiProxy", "PromptRequest"]
