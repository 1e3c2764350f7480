"""Prompt composition for the polish curator."""

from __future__ import annotations

from typing import List, Tuple

from models.recommendation import NOT_SPECIFIED, PreferenceSet

ROLE_STATEMENT = (
    "You are a nail polish color curator. Based on the client preferences below, "
    "return 4 to 6 nail polish recommendations."
)

OUTPUT_RULES: List[str] = [
    "Respond ONLY with valid JSON.",
    "Return an array of objects.",
    "Each object must include: name, hex, vibe, occasion.",
    "Hex codes must be 6-digit format (e.g., #F2C1D1).",
    "Vibe should be a short phrase describing the feel.",
    "Occasion should be a short phrase for when it fits best.",
    "Make colors flattering, cohesive, and varied (neutrals + statement).",
]

_PREFERENCE_LABELS: Tuple[Tuple[str, str], ...] = (
    ("Skin tone", "skin_tone"),
    ("Occasion", "occasion"),
    ("Mood", "mood"),
    ("Season", "season"),
    ("Outfit color", "outfit_color"),
)


def _bullets(lines: List[str]) -> str:
    return "\n".join(f"- {line}" for line in lines)


def build_prompt(preferences: PreferenceSet) -> str:
    """Render the instruction text sent to Gemini.

    Blank fields read ``Not specified`` so the model never sees an empty line.
    """

    preference_lines = [
        f"{label}: {getattr(preferences, attr) or NOT_SPECIFIED}"
        for label, attr in _PREFERENCE_LABELS
    ]
    return (
        f"{ROLE_STATEMENT}\n\n"
        f"Preferences:\n{_bullets(preference_lines)}\n\n"
        f"Rules:\n{_bullets(OUTPUT_RULES)}"
    )


__all__ = ["build_prompt", "OUTPUT_RULES", "ROLE_STATEMENT"]
