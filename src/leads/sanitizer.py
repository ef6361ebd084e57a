"""Lead sanitization applied before a lead leaves the service."""

from __future__ import annotations

import re
from typing import Any, Dict, Mapping

_ANGLE_BRACKETS_RE = re.compile(r"[<>]")


def sanitize_value(value: Any) -> Any:
    if isinstance(value, str):
        return _ANGLE_BRACKETS_RE.sub("", value).strip()
    return value


def sanitize_lead(lead: Mapping[str, Any]) -> Dict[str, Any]:
    """Return a copy of ``lead`` with angle brackets removed from, and whitespace trimmed around, every string."""
    return {key: sanitize_value(value) for key, value in lead.items()}
