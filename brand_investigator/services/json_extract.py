from __future__ import annotations

import json
import re
from typing import Any

from brand_investigator.errors import AnalysisUnparseable

# Greedy: from the first "{" to the last "}" in the text.
_JSON_OBJECT_PATTERN = re.compile(r"\{[\s\S]*\}")

NO_JSON_FOUND = "No JSON found in response"
PARSE_FAILED = "Failed to parse AI response"


def extract_json(text: str | None) -> dict[str, Any]:
    """Pull the brace-delimited JSON object out of free-form model output.

    Raises AnalysisUnparseable (carrying the raw text) when there is no
    brace-delimited substring or it does not decode to a JSON object.
    """
    raw = text or ""
    match = _JSON_OBJECT_PATTERN.search(raw)
    if not match:
        raise AnalysisUnparseable(NO_JSON_FOUND, raw)
    try:
        parsed = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        raise AnalysisUnparseable(PARSE_FAILED, raw) from e
    if not isinstance(parsed, dict):
        raise AnalysisUnparseable(PARSE_FAILED, raw)
    return parsed


def error_object(exc: AnalysisUnparseable) -> dict[str, Any]:
    """The designated stand-in returned when a response has no usable JSON."""
    return {"error": exc.reason, "raw": exc.raw}


def is_error_object(value: Any) -> bool:
    return isinstance(value, dict) and "error" in value and "raw" in value
