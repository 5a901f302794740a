from __future__ import annotations

import json
import re
from typing import Any

_FENCE_RE = re.compile(r"```(?:json|JSON)?\s*(.*?)```", re.S)


class PayloadParseError(ValueError):
    pass


def _unfence(raw: str) -> str:
    text = (raw or "").strip()
    fenced = _FENCE_RE.search(text)
    if fenced:
        return fenced.group(1).strip()
    return text


def strip_model_wrapping(raw: str) -> str:
    """Drop code fences and prose around the first JSON object in ``raw``."""
    text = _unfence(raw)
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end == -1 or end <= start:
        raise PayloadParseError("Model did not return a JSON object.")
    return text[start : end + 1]


def _loads_or_none(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return None


def parse_json_object(raw: str) -> dict[str, Any]:
    # A clean answer is taken as-is, so fences inside string values survive
    # and a top-level array is rejected rather than mined for an object.
    text = (raw or "").strip()
    parsed = _loads_or_none(text)
    if parsed is None:
        parsed = _loads_or_none(_unfence(text))
    if parsed is None:
        candidate = strip_model_wrapping(text)
        try:
            parsed = json.loads(candidate)
        except json.JSONDecodeError as exc:
            raise PayloadParseError(f"Model output is not valid JSON: {exc.msg}") from exc
    if not isinstance(parsed, dict):
        raise PayloadParseError("Model output is not a JSON object.")
    return parsed
