"""Recover polish recommendations from free-form Gemini replies.

Models asked for "JSON only" still wrap the payload in prose or markdown
fences. Parsing happens in two stages: a strict parse of the whole reply,
then a strict parse of the widest bracket-delimited substring. The greedy
first-to-last match is a heuristic; stray brackets in surrounding prose
defeat it.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, List, Mapping, Optional

from logic.errors import EmptyRecommendationsError, ResponseParseError, ResponseShapeError
from models.recommendation import MAX_RECOMMENDATIONS, RecommendationRecord
from tools.observability import instrument_tool

logger = logging.getLogger(__name__)

_ARRAY_PATTERN = re.compile(r"\[[\s\S]*\]")
_OBJECT_PATTERN = re.compile(r"\{[\s\S]*\}")


def _reject_constant(token: str) -> Any:
    raise ValueError(f"Non-standard JSON constant: {token}")


def _strict_loads(text: str) -> Any:
    # NaN and Infinity are not JSON; nesting past the recursion limit is unparseable.
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except json.JSONDecodeError:
        raise
    except (ValueError, RecursionError) as exc:
        raise json.JSONDecodeError(str(exc), text, 0) from exc


def _candidate_substring(text: str) -> Optional[str]:
    """Return the first array-shaped span, else the first object-shaped span."""

    match = _ARRAY_PATTERN.search(text) or _OBJECT_PATTERN.search(text)
    return match.group(0) if match else None


def parse_response_json(raw: str) -> Any:
    """Parse ``raw`` strictly, falling back to its bracket-delimited payload.

    Raises:
        ResponseParseError: When neither the text nor its candidate substring
            is valid JSON. ``original_error`` keeps the decoder error.
    """

    trimmed = raw.strip()
    try:
        return _strict_loads(trimmed)
    except json.JSONDecodeError as initial_error:
        candidate = _candidate_substring(trimmed)
        if candidate is None:
            raise ResponseParseError(initial_error) from initial_error

    try:
        return _strict_loads(candidate)
    except json.JSONDecodeError as candidate_error:
        raise ResponseParseError(candidate_error) from candidate_error


def _is_usable(item: Any) -> bool:
    return isinstance(item, Mapping) and bool(item.get("name")) and bool(item.get("hex"))


def _to_record(item: Mapping[str, Any]) -> RecommendationRecord:
    return RecommendationRecord(
        name=item["name"],
        hex=item["hex"],
        vibe=item.get("vibe") or "",
        occasion=item.get("occasion") or "",
    )


@instrument_tool("extract_recommendations")
def extract_recommendations(raw: str) -> List[RecommendationRecord]:
    """Turn a Gemini reply into at most six recommendation records.

    Elements without a ``name`` or ``hex`` are dropped without comment.

    Raises:
        ResponseParseError: No JSON could be recovered from ``raw``.
        ResponseShapeError: The recovered JSON is not an array.
        EmptyRecommendationsError: No element survived filtering.
    """

    parsed = parse_response_json(raw or "")
    if not isinstance(parsed, list):
        raise ResponseShapeError()

    records = [_to_record(item) for item in parsed if _is_usable(item)][:MAX_RECOMMENDATIONS]
    if not records:
        raise EmptyRecommendationsError()

    logger.debug(
        "Extracted recommendations",
        extra={"received": len(parsed), "kept": len(records)},
    )
    return records


__all__ = ["extract_recommendations", "parse_response_json"]
