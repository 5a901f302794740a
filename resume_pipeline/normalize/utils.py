from __future__ import annotations

import re
from typing import Any

_BULLET_CHARS = "•◦▪▫●○■□◆◇▶►-–—*·"
_BULLET_PATTERN = re.compile(rf"^\s*(?:[{re.escape(_BULLET_CHARS)}]|(?:\d+[\.\)]))\s+")
_PLACEHOLDERS = {
    "n/a",
    "na",
    "none",
    "null",
    "nil",
    "not found",
    "not available",
    "not provided",
    "not specified",
    "not mentioned",
    "unknown",
    "-",
}


def normalize_line(line: str) -> str:
    return re.sub(r"\s+", " ", line).strip()


def is_bullet_like(line: str) -> bool:
    return bool(_BULLET_PATTERN.match(line))


def strip_bullet_prefix(line: str) -> str:
    return _BULLET_PATTERN.sub("", line).strip()


def is_placeholder(text: str) -> bool:
    return normalize_line(text).lower().rstrip(".") in _PLACEHOLDERS


def clean_scalar(value: Any) -> str:
    """Collapse a JSON scalar to display text; placeholders and nulls become ``""``."""
    if value is None or isinstance(value, (bool, dict, list)):
        return ""
    text = normalize_line(str(value))
    if is_placeholder(text):
        return ""
    return text


def split_text_items(text: str) -> list[str]:
    """Split a multi-line block into items, one per line, bullets removed."""
    items: list[str] = []
    for raw_line in text.splitlines():
        stripped = normalize_line(raw_line)
        if not stripped:
            continue
        cleaned = strip_bullet_prefix(stripped) if is_bullet_like(stripped) else stripped
        if cleaned and not is_placeholder(cleaned):
            items.append(cleaned)
    return items
