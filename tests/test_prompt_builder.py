"""Prompt composition coverage."""

from pathlib import Path
import sys

sys.path.append(str(Path(__file__).resolve().parents[1]))

from logic.prompt_builder import OUTPUT_RULES, build_prompt
from models.recommendation import PreferenceSet


def test_prompt_includes_each_provided_value() -> None:
    prefs = PreferenceSet(
        skin_tone="Tan",
        occasion="engagement party",
        mood="romantic",
        season="Autumn",
        outfit_color="emerald green",
    )

    prompt = build_prompt(prefs)

    assert "- Skin tone: Tan" in prompt
    assert "- Occasion: engagement party" in prompt
    assert "- Mood: romantic" in prompt
    assert "- Season: Autumn" in prompt
    assert "- Outfit color: emerald green" in prompt
    assert "Not specified" not in prompt


def test_blank_preferences_read_not_specified() -> None:
    prompt = build_prompt(PreferenceSet())

    for label in ("Skin tone", "Occasion", "Mood", "Season", "Outfit color"):
        assert f"- {label}: Not specified" in prompt


def test_partial_preferences_mix_values_and_placeholders() -> None:
    prompt = build_prompt(PreferenceSet(mood="bold"))

    assert "- Mood: bold" in prompt
    assert "- Season: Not specified" in prompt


def test_prompt_states_role_and_output_contract() -> None:
    prompt = build_prompt(PreferenceSet(season="Winter"))

    assert prompt.startswith("You are a nail polish color curator.")
    assert "4 to 6" in prompt
    for rule in OUTPUT_RULES:
        assert f"- {rule}" in prompt
    assert "Respond ONLY with valid JSON." in prompt
    assert "name, hex, vibe, occasion" in prompt
    assert "#F2C1D1" in prompt


def test_prompt_is_deterministic() -> None:
    prefs = PreferenceSet(occasion="vacation")
    assert build_prompt(prefs) == build_prompt(prefs)
