"""HTTP client for the relay endpoint."""

import json
from pathlib import Path
import sys

import pytest
import requests

sys.path.append(str(Path(__file__).resolve().parents[1]))

from logic.errors import UnexpectedError, UpstreamError
from tools import proxy_client
from tools.proxy_client import HttpProxyClient


def _http_response(status_code: int = 200, payload: object = None, raise_on_json: bool = False) -> requests.Response:
    """Build a real ``requests.Response`` so ``ok`` and ``json()`` behave as in production."""

    response = requests.Response()
    response.status_code = status_code
    response.encoding = "utf-8"
    response._content = b"<html>gateway</html>" if raise_on_json else json.dumps(payload).encode()
    return response


def test_complete_posts_prompt_and_returns_text(monkeypatch: pytest.MonkeyPatch) -> None:
    calls = []

    def _post(url: str, **kwargs: object) -> requests.Response:
        calls.append((url, kwargs))
        return _http_response(200, {"text": "[]"})

    monkeypatch.setattr(proxy_client.requests, "post", _post)

    text = HttpProxyClient("http://localhost:8787/").complete("Suggest shades")

    assert text == "[]"
    assert calls[0][0] == "http://localhost:8787/api/gemini"
    assert calls[0][1]["json"] == {"prompt": "Suggest shades"}


def test_missing_text_is_empty(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(proxy_client.requests, "post", lambda *_, **__: _http_response(200, {}))
    assert HttpProxyClient("http://relay").complete("hi") == ""


def test_error_body_is_surfaced(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        proxy_client.requests,
        "post",
        lambda *_, **__: _http_response(500, {"error": "Missing GEMINI_API_KEY in server env."}),
    )

    with pytest.raises(UpstreamError) as excinfo:
        HttpProxyClient("http://relay").complete("hi")

    assert excinfo.value.message == "Missing GEMINI_API_KEY in server env."
    assert excinfo.value.status_code == 500


def test_error_without_body_names_the_status(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        proxy_client.requests, "post", lambda *_, **__: _http_response(502, raise_on_json=True)
    )

    with pytest.raises(UpstreamError) as excinfo:
        HttpProxyClient("http://relay").complete("hi")

    assert excinfo.value.message == "Gemini API error: 502"


def test_unreachable_relay(monkeypatch: pytest.MonkeyPatch) -> None:
    def _boom(*_: object, **__: object) -> None:
        raise requests.ConnectionError("refused")

    monkeypatch.setattr(proxy_client.requests, "post", _boom)

    with pytest.raises(UnexpectedError):
        HttpProxyClient("http://relay").complete("hi")


def test_redirect_status_is_not_success(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        proxy_client.requests, "post", lambda *_, **__: _http_response(304, {"text": "[]"})
    )

    with pytest.raises(UpstreamError) as excinfo:
        HttpProxyClient("http://relay").complete("hi")

    assert excinfo.value.status_code == 304
