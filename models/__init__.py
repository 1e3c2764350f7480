"""Model package exports."""

from models.recommendation import (  # noqa: F401
    EXAMPLE_RECOMMENDATIONS,
    MAX_RECOMMENDATIONS,
    PreferenceSet,
    RecommendationRecord,
)

__all__ = ["EXAMPLE_RECOMMENDATIONS", "MAX_RECOMMENDATIONS", "PreferenceSet", "RecommendationRecord"]
