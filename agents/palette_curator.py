"""Per-session palette curation: form -> prompt -> relay -> extractor -> display."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping

from logic.errors import MissingPreferencesError, PaletteError, SubmissionInProgressError
from logic.extraction import extract_recommendations
from logic.prompt_builder import build_prompt
from models.recommendation import EXAMPLE_RECOMMENDATIONS, PreferenceSet, RecommendationRecord
from polish_app.logging_config import get_logger, log_event
from tools.proxy_client import ProxyClient

LOGGER = get_logger(__name__)

EXAMPLE_SOURCE = "Example set shown. Generate to personalize."
PERSONALIZED_SOURCE = "Personalized by Gemini based on your inputs."


@dataclass
class PaletteState:
    """What one browser session currently shows."""

    preferences: PreferenceSet = field(default_factory=PreferenceSet)
    recommendations: List[RecommendationRecord] = field(
        default_factory=lambda: list(EXAMPLE_RECOMMENDATIONS)
    )
    source: str = EXAMPLE_SOURCE
    error: str = ""
    pending: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "recommendations": [record.to_dict() for record in self.recommendations],
            "source": self.source,
            "error": self.error,
            "pending": self.pending,
            "has_inputs": self.preferences.has_inputs(),
        }


class PaletteCurator:
    """Owns one session's display state and runs a submission end to end.

    Only one submission runs at a time; a second one raises
    :class:`SubmissionInProgressError` instead of racing the first. Failures
    keep the previously displayed list and surface a short message.
    """

    def __init__(self, client: ProxyClient) -> None:
        self.client = client
        self.state = PaletteState()
        self._lock = threading.Lock()

    def update_preferences(self, payload: Mapping[str, Any] | PreferenceSet) -> PaletteState:
        if not isinstance(payload, PreferenceSet):
            payload = PreferenceSet.from_mapping(payload)
        self.state.preferences = payload
        return self.state

    def submit(self, payload: Mapping[str, Any] | PreferenceSet | None = None) -> PaletteState:
        if not self._lock.acquire(blocking=False):
            raise SubmissionInProgressError()
        try:
            if payload is not None:
                self.update_preferences(payload)
            self.state.error = ""
            self.state.pending = True
            self._generate(self.state.preferences)
        finally:
            self.state.pending = False
            self._lock.release()
        return self.state

    def _generate(self, preferences: PreferenceSet) -> None:
        try:
            if not preferences.has_inputs():
                raise MissingPreferencesError()
            raw = self.client.complete(build_prompt(preferences))
            records = extract_recommendations(raw)
        except PaletteError as exc:
            log_event(
                LOGGER,
                logging.WARNING,
                "palette_generation_failed",
                error_type=type(exc).__name__,
                reason=getattr(exc, "reason", None),
            )
            self.state.error = exc.message
            return
        except Exception:
            log_event(LOGGER, logging.ERROR, "palette_generation_crashed", exc_info=True)
            self.state.error = "Something went wrong."
            return

        self.state.recommendations = records
        self.state.source = PERSONALIZED_SOURCE
        log_event(
            LOGGER,
            logging.INFO,
            "palette_generated",
            record_count=len(records),
        )


__all__ = ["PaletteCurator", "PaletteState", "EXAMPLE_SOURCE", "PERSONALIZED_SOURCE"]
