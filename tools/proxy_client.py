"""Page-side callers of the Gemini relay."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

import requests

from logic.errors import UnexpectedError, UpstreamError
from tools.gemini_proxy import GeminiProxy

LOGGER = logging.getLogger(__name__)


class ProxyClient(ABC):
    """Send a prompt to the relay and return the raw reply text."""

    @abstractmethod
    def complete(self, prompt: str) -> str:
        """Return the model's reply text for ``prompt``."""


class LocalProxyClient(ProxyClient):
    """Calls the relay in-process; used by the page served from the same app."""

    def __init__(self, proxy: GeminiProxy) -> None:
        self.proxy = proxy

    def complete(self, prompt: str) -> str:
        return self.proxy.relay({"prompt": prompt})


class HttpProxyClient(ProxyClient):
    """Calls ``POST /api/gemini`` on a running relay.

    Selected by ``PROXY_URL`` when the page and the relay run as separate
    processes; only 2xx answers count as success.
    """

    def __init__(self, base_url: str, timeout_seconds: float = 60.0) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds

    def complete(self, prompt: str) -> str:
        url = f"{self.base_url}/api/gemini"
        try:
            response = requests.post(url, json={"prompt": prompt}, timeout=self.timeout_seconds)
        except requests.RequestException as exc:
            LOGGER.error("Relay unreachable", exc_info=exc)
            raise UnexpectedError("Something went wrong.") from exc

        body: Any
        try:
            body = response.json()
        except ValueError:
            body = {}

        if not 200 <= response.status_code < 300:
            message = body.get("error") if isinstance(body, dict) else None
            raise UpstreamError(
                message or f"Gemini API error: {response.status_code}",
                status_code=response.status_code,
            )
        if not isinstance(body, dict):
            return ""
        return body.get("text") or ""


__all__ = ["HttpProxyClient", "LocalProxyClient", "ProxyClient"]
