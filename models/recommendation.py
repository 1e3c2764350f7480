"""Preference and recommendation records shared by the page and the proxy."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, List, Mapping, Tuple

MAX_RECOMMENDATIONS = 6
NOT_SPECIFIED = "Not specified"

SKIN_TONE_OPTIONS: Tuple[str, ...] = ("Fair", "Light", "Medium", "Tan", "Deep")
SEASON_OPTIONS: Tuple[str, ...] = ("Spring", "Summer", "Autumn", "Winter")


@dataclass(frozen=True)
class PreferenceSet:
    """Free-text form fields; an empty string means the field was left unset."""

    skin_tone: str = ""
    occasion: str = ""
    mood: str = ""
    season: str = ""
    outfit_color: str = ""

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any] | None) -> "PreferenceSet":
        """Build from a form payload, ignoring unknown keys and ``None`` values."""

        payload = payload or {}
        values = {}
        for spec in fields(cls):
            value = payload.get(spec.name)
            values[spec.name] = "" if value is None else str(value)
        return cls(**values)

    def has_inputs(self) -> bool:
        return any(value.strip() for value in asdict(self).values())


@dataclass(frozen=True)
class RecommendationRecord:
    """One curated polish shade."""

    name: str
    hex: str
    vibe: str = ""
    occasion: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


EXAMPLE_RECOMMENDATIONS: List[RecommendationRecord] = [
    RecommendationRecord(
        name="Rosewater Silk",
        hex="#E8B9C5",
        vibe="Soft romantic shimmer with a barely-there glow.",
        occasion="Brunch dates or bridal showers",
    ),
    RecommendationRecord(
        name="Velvet Plum",
        hex="#7D3B58",
        vibe="Moody and luxe with berry depth.",
        occasion="Evening events",
    ),
    RecommendationRecord(
        name="Cafe Au Lait",
        hex="#C9A28E",
        vibe="Warm neutral chic that flatters most tones.",
        occasion="Everyday polish",
    ),
    RecommendationRecord(
        name="Petal Glaze",
        hex="#F5DCE6",
        vibe="Airy pastel with a glazed finish.",
        occasion="Spring celebrations",
    ),
]


__all__ = [
    "EXAMPLE_RECOMMENDATIONS",
    "MAX_RECOMMENDATIONS",
    "NOT_SPECIFIED",
    "PreferenceSet",
    "RecommendationRecord",
    "SEASON_OPTIONS",
    "SKIN_TONE_OPTIONS",
]
