"""Configuration helpers for the Polish Muse web app."""

from dataclasses import dataclass, field
from pathlib import Path
import os
from typing import Dict, Optional

DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"
DEFAULT_GEMINI_API_BASE = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_PORT = 8787
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_MAX_SESSIONS = 1000


@dataclass(frozen=True)
class PolishConfig:
    """Read-once configuration for the proxy and the page.

    Built a single time at startup and handed to the components that need it,
    so the credential never lives in module globals. When ``proxy_url`` is set
    the page talks to that relay over HTTP instead of the in-process one.
    """

    api_key: Optional[str] = field(default=None, repr=False)
    model: str = DEFAULT_GEMINI_MODEL
    port: int = DEFAULT_PORT
    api_base: str = DEFAULT_GEMINI_API_BASE
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    proxy_url: Optional[str] = None
    max_sessions: int = DEFAULT_MAX_SESSIONS
    environment: str | None = None

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)

    @classmethod
    def from_env(cls) -> "PolishConfig":
        """Read ``GEMINI_*``, ``PORT``, ``PROXY_URL`` and ``MAX_SESSIONS``.

        A ``key: value`` file named by ``APP_CONFIG_PATH`` (or
        ``config/environments/<APP_ENV>.yaml``) supplies fallbacks; environment
        variables always win, which keeps the key out of checked-in files.
        """

        env_name = os.getenv("APP_ENV")
        file_values = cls._load_file_values(cls._config_file(env_name))

        def get_value(key: str) -> Optional[str]:
            return os.getenv(key.upper()) or file_values.get(key) or None

        port = get_value("port")
        timeout = get_value("gemini_timeout_seconds")
        max_sessions = get_value("max_sessions")
        proxy_url = get_value("proxy_url")

        return cls(
            api_key=get_value("gemini_api_key"),
            model=get_value("gemini_model") or DEFAULT_GEMINI_MODEL,
            port=int(port) if port else DEFAULT_PORT,
            api_base=(get_value("gemini_api_base") or DEFAULT_GEMINI_API_BASE).rstrip("/"),
            timeout_seconds=float(timeout) if timeout else DEFAULT_TIMEOUT_SECONDS,
            proxy_url=proxy_url.rstrip("/") if proxy_url else None,
            max_sessions=int(max_sessions) if max_sessions else DEFAULT_MAX_SESSIONS,
            environment=env_name,
        )

    @staticmethod
    def _config_file(env_name: Optional[str]) -> Optional[Path]:
        explicit = os.getenv("APP_CONFIG_PATH")
        if explicit:
            return Path(explicit)
        if env_name:
            config_dir = Path(os.getenv("POLISH_CONFIG_DIR", "config/environments"))
            return config_dir / f"{env_name}.yaml"
        return None

    @staticmethod
    def _load_file_values(path: Optional[Path]) -> Dict[str, str]:
        """Read flat ``key: value`` lines; comments and other lines are skipped."""

        if path is None or not path.exists():
            return {}
        values: Dict[str, str] = {}
        for line in path.read_text().splitlines():
            key, sep, raw_value = line.strip().partition(":")
            if not sep or not key or key.startswith("#"):
                continue
            values[key.strip()] = raw_value.strip().strip("\"'")
        return values


__all__ = ["PolishConfig", "DEFAULT_GEMINI_MODEL", "DEFAULT_PORT"]
