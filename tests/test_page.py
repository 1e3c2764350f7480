"""Rendering of recommendation cards."""

from pathlib import Path
import sys

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from models.recommendation import RecommendationRecord
from server.page import render_shade


@pytest.mark.parametrize("hex_code", ["#E8B9C5", "#abc", "#7D3B58FF"])
def test_valid_hex_colors_the_swatch(hex_code: str) -> None:
    html = render_shade(RecommendationRecord(name="Shade", hex=hex_code))

    assert f'<div class="swatch" style="background-color: {hex_code}">' in html


@pytest.mark.parametrize(
    "hex_code",
    ["#fff;background:url(//x)", "red", "#12345G", "#fff\n", "url(//x)"],
)
def test_malformed_hex_never_reaches_the_style_attribute(hex_code: str) -> None:
    html = render_shade(RecommendationRecord(name="Shade", hex=hex_code))

    assert "style=" not in html
    assert '<div class="swatch"></div>' in html


def test_malformed_hex_is_still_shown_as_text() -> None:
    html = render_shade(RecommendationRecord(name="Odd", hex="#fff;background:url(//x)"))

    assert 'data-hex="#fff;background:url(//x)"' in html
