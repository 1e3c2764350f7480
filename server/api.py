"""FastAPI server exposing the Gemini relay and the palette page."""

import logging
from typing import Any

from fastapi import Body, Cookie, FastAPI, Request, Response
from fastapi.responses import HTMLResponse, JSONResponse

from agents.palette_curator import PaletteState
from logic.errors import PaletteError, UnexpectedError
from polish_app.app import PolishMuseApp
from polish_app.logging_config import correlation_context, get_logger, log_event
from server.page import render_page

LOGGER = get_logger(__name__)
SESSION_COOKIE = "palette_session"


def create_app(polish_app: PolishMuseApp | None = None) -> FastAPI:
    """Build the FastAPI application around a wired :class:`PolishMuseApp`."""

    muse = polish_app or PolishMuseApp()
    api = FastAPI(title="Polish Muse", version="0.1.0")
    api.state.muse = muse

    @api.exception_handler(PaletteError)
    async def palette_error_handler(_: Request, exc: PaletteError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @api.get("/healthz")
    def healthcheck() -> dict:
        """Readiness check; reports whether a key is set, never the key itself."""

        return {
            "status": "ok",
            "service": "polish-muse",
            "environment": muse.config.environment or "local",
            "model": muse.config.model,
            "api_key_configured": muse.config.has_api_key,
        }

    @api.post("/api/gemini")
    def relay_prompt(payload: Any = Body(None)) -> dict:
        """Forward ``{prompt}`` to Gemini and answer ``{text}``."""

        with correlation_context():
            try:
                text = muse.proxy.relay(payload)
            except PaletteError:
                raise
            except Exception as exc:
                log_event(LOGGER, logging.ERROR, "relay_crashed", exc_info=True)
                raise UnexpectedError() from exc
        return {"text": text}

    @api.get("/", response_class=HTMLResponse)
    def palette_page(palette_session: str | None = Cookie(None)) -> HTMLResponse:
        """Serve the form and the session's current palette.

        Visitors without a known session see the example set; a session is
        only created by their first submission.
        """

        curator = muse.sessions.peek(palette_session)
        return HTMLResponse(render_page(curator.state if curator else PaletteState()))

    @api.get("/api/palette")
    def current_palette(palette_session: str | None = Cookie(None)) -> dict:
        curator = muse.sessions.peek(palette_session)
        return (curator.state if curator else PaletteState()).to_dict()

    @api.post("/api/palette")
    def generate_palette(
        response: Response,
        payload: Any = Body(None),
        palette_session: str | None = Cookie(None),
    ) -> dict:
        """Run one submission for the session and return what it now displays.

        Failures come back as ``error`` alongside the unchanged palette.
        """

        session_id, curator = muse.sessions.get(palette_session)
        response.set_cookie(SESSION_COOKIE, session_id, httponly=True, samesite="lax")
        preferences = payload if isinstance(payload, dict) else {}
        with correlation_context():
            state = curator.submit(preferences)
        return state.to_dict()

    return api


app = create_app()


def get_app() -> FastAPI:
    """Expose the FastAPI instance for ASGI servers."""

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("server.api:app", host="0.0.0.0", port=app.state.muse.config.port, reload=False)
