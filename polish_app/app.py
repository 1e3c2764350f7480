"""Polish Muse app bootstrap."""

import logging

from agents.palette_curator import PaletteCurator
from memory.palette_sessions import SessionRegistry
from polish_app.config import PolishConfig
from polish_app.logging_config import configure_logging, get_logger, log_event
from tools.gemini_proxy import GeminiProxy
from tools.proxy_client import HttpProxyClient, LocalProxyClient, ProxyClient

LOGGER = get_logger(__name__)


class PolishMuseApp:
    """Wires together the configuration, the Gemini relay and page sessions."""

    def __init__(self, config: PolishConfig | None = None, client: ProxyClient | None = None) -> None:
        self.config = config or PolishConfig.from_env()
        configure_logging()

        self.proxy = GeminiProxy(self.config)
        self.client = client or self._build_client()
        self.sessions = SessionRegistry(
            lambda: PaletteCurator(self.client), max_sessions=self.config.max_sessions
        )

        log_event(
            LOGGER,
            logging.INFO,
            "app_configured",
            model=self.config.model,
            environment=self.config.environment or "local",
            api_key_present=self.config.has_api_key,
        )

    def _build_client(self) -> ProxyClient:
        """Use a remote relay when one is configured, else the in-process proxy."""

        if self.config.proxy_url:
            return HttpProxyClient(self.config.proxy_url, timeout_seconds=self.config.timeout_seconds)
        return LocalProxyClient(self.proxy)


__all__ = ["PolishMuseApp"]
