"""Server-rendered palette page with a small fetch-based form handler."""

from __future__ import annotations

import re
from html import escape
from typing import Iterable, List

from agents.palette_curator import PaletteState
from models.recommendation import SEASON_OPTIONS, SKIN_TONE_OPTIONS, RecommendationRecord

_HEX_COLOR = re.compile(r"#[0-9A-Fa-f]{3,8}")

_STYLE = """
body { margin: 0; font-family: Georgia, serif; background: #fdf7f8; color: #4a2c2a; }
main { display: flex; flex-wrap: wrap; gap: 3rem; max-width: 72rem; margin: 0 auto; padding: 3rem 1.5rem; }
section { flex: 1 1 24rem; }
.card { background: rgba(255,255,255,.8); border-radius: 1.5rem; padding: 1.5rem; box-shadow: 0 10px 40px rgba(196,98,126,.15); }
form { display: grid; gap: 1rem; }
label { display: flex; flex-direction: column; gap: .5rem; font-size: .9rem; }
input, select { border: 1px solid #f2c1d1; border-radius: 1rem; padding: .5rem 1rem; }
button.generate { border: 0; border-radius: 999px; background: #a63d62; color: #fff; padding: .75rem 1.5rem; text-transform: uppercase; letter-spacing: .2em; }
button.generate:disabled { opacity: .6; }
.error { border: 1px solid #fecdd3; background: #fff1f2; color: #be123c; border-radius: 1rem; padding: .5rem 1rem; }
.error:empty { display: none; }
.shade { display: flex; align-items: center; gap: 1rem; border: 1px solid #f2c1d1; border-radius: 1rem; padding: 1rem; margin-top: 1rem; }
.swatch { width: 4rem; height: 4rem; border-radius: 1rem; }
.shade h3 { margin: 0; }
.hex { border: 1px solid #a63d62; border-radius: 999px; background: none; color: #a63d62; padding: .25rem .75rem; }
.source { font-size: .75rem; text-transform: uppercase; letter-spacing: .2em; color: #a63d62; }
"""

_SCRIPT = """
const form = document.getElementById("preferences");
const button = document.getElementById("generate");
const errorBox = document.getElementById("error");
const list = document.getElementById("palette");
const source = document.getElementById("source");

function shadeNode(rec) {
  const card = document.createElement("div");
  card.className = "shade";
  const swatch = document.createElement("div");
  swatch.className = "swatch";
  swatch.style.backgroundColor = rec.hex;
  const body = document.createElement("div");
  const title = document.createElement("h3");
  title.textContent = rec.name;
  const copy = document.createElement("button");
  copy.type = "button";
  copy.className = "hex";
  copy.dataset.hex = rec.hex;
  copy.textContent = rec.hex;
  const vibe = document.createElement("p");
  vibe.textContent = rec.vibe;
  const occasion = document.createElement("p");
  occasion.textContent = "Best for: " + rec.occasion;
  body.append(title, copy, vibe, occasion);
  card.append(swatch, body);
  return card;
}

list.addEventListener("click", (event) => {
  const hex = event.target.dataset && event.target.dataset.hex;
  if (hex) navigator.clipboard.writeText(hex);
});

form.addEventListener("submit", async (event) => {
  event.preventDefault();
  errorBox.textContent = "";
  button.disabled = true;
  button.textContent = "Curating...";
  try {
    const response = await fetch("/api/palette", {
      method: "POST",
      headers: { "Content-Type": "application/json" },
      body: JSON.stringify(Object.fromEntries(new FormData(form))),
    });
    const data = await response.json().catch(() => ({}));
    if (!response.ok) {
      errorBox.textContent = data.error || "Something went wrong.";
      return;
    }
    errorBox.textContent = data.error || "";
    source.textContent = data.source;
    list.replaceChildren(...data.recommendations.map(shadeNode));
  } catch (err) {
    errorBox.textContent = "Something went wrong.";
  } finally {
    button.disabled = false;
    button.textContent = "Generate palette";
  }
});
"""


def _options(values: Iterable[str], selected: str) -> str:
    rendered = ['<option value="">Select</option>']
    for value in values:
        marker = " selected" if value == selected else ""
        rendered.append(f'<option value="{escape(value)}"{marker}>{escape(value)}</option>')
    return "".join(rendered)


def _text_field(label: str, name: str, value: str, placeholder: str) -> str:
    return (
        f"<label>{label}<input name=\"{name}\" value=\"{escape(value)}\" "
        f"placeholder=\"{escape(placeholder)}\"></label>"
    )


def render_shade(record: RecommendationRecord) -> str:
    """Render one recommendation card; every model-supplied value is escaped."""

    name = escape(str(record.name))
    hex_code = escape(str(record.hex))
    # Only well-formed colors reach the style attribute.
    swatch_style = (
        f' style="background-color: {hex_code}"' if _HEX_COLOR.fullmatch(str(record.hex)) else ""
    )
    return (
        '<div class="shade">'
        f'<div class="swatch"{swatch_style}></div>'
        "<div>"
        f"<h3>{name}</h3>"
        f'<button type="button" class="hex" data-hex="{hex_code}">{hex_code}</button>'
        f"<p>{escape(str(record.vibe))}</p>"
        f"<p>Best for: {escape(str(record.occasion))}</p>"
        "</div></div>"
    )


def render_page(state: PaletteState) -> str:
    """Render the full page for one session's current display state."""

    prefs = state.preferences
    hint = (
        "Each shade is tuned to your vibe. Tap a hex code to copy."
        if prefs.has_inputs()
        else "Enter preferences to unlock a personalized edit."
    )
    shades: List[str] = [render_shade(record) for record in state.recommendations]
    palette_html = "".join(shades)
    skin_tones = _options(SKIN_TONE_OPTIONS, prefs.skin_tone)
    seasons = _options(SEASON_OPTIONS, prefs.season)
    text_fields = "\n".join(
        [
            _text_field("Occasion", "occasion", prefs.occasion, "Ex. engagement party, workweek, vacation"),
            _text_field("Mood", "mood", prefs.mood, "Ex. romantic, bold, clean girl, playful"),
            _text_field("Outfit color", "outfit_color", prefs.outfit_color, "Ex. ivory satin, denim, emerald green"),
        ]
    )
    return f"""<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>Polish Muse</title>
<style>{_STYLE}</style>
</head>
<body>
<main>
<section>
<p class="source">Polish Muse</p>
<h1>Your personalized nail polish palette, styled like a beauty editor.</h1>
<p>Tell us the mood, moment, and what you are wearing. Gemini will curate a mix of
neutrals and statements with matching hex codes so you can shop or DIY.</p>
<div class="card">
<form id="preferences">
<label>Skin tone<select name="skin_tone">{skin_tones}</select></label>
<label>Season<select name="season">{seasons}</select></label>
{text_fields}
<div id="error" class="error">{escape(state.error)}</div>
<button id="generate" class="generate" type="submit">Generate palette</button>
</form>
</div>
</section>
<section>
<div class="card">
<h2>Your palette</h2>
<span id="source" class="source">{escape(state.source)}</span>
<p>{hint}</p>
<div id="palette">{palette_html}</div>
</div>
<div class="card">
<p>Style notes</p>
<ul>
<li>Balance sheer, cream, and glossy finishes for dimension.</li>
<li>Keep one shade that works for everyday, one for statement moments.</li>
<li>Match your undertone: rosy for cool, caramel for warm, berry for neutral.</li>
</ul>
</div>
</section>
</main>
<script>{_SCRIPT}</script>
</body>
</html>
"""


__all__ = ["render_page", "render_shade"]
