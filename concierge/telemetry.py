# concierge/telemetry.py
"""Structured JSON event lines on top of the standard logging module."""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

# Fields that may carry client-written text
TEXT_FIELDS = ("userText", "reply", "detail")


def truncate_for_log(value: Any, cap: int) -> str:
    """Return ``str(value)`` capped at ``cap`` characters, marking the cut."""
    try:
        s = value if isinstance(value, str) else str(value)
    except Exception:
        return ""
    if cap <= 0:
        return ""
    return s if len(s) <= cap else s[:cap] + "…"


def log_event(
    logger: logging.Logger,
    event_name: str,
    *,
    level: int = logging.INFO,
    caps: Optional[Dict[str, int]] = None,
    **fields: Any,
) -> None:
    """Emit one JSON line ``{"event": event_name, **fields}``.

    ``caps`` maps field names to a maximum length for string values.
    """
    payload: Dict[str, Any] = {"event": event_name}
    payload.update(fields)

    for key, limit in (caps or {}).items():
        if payload.get(key) is not None:
            payload[key] = truncate_for_log(payload[key], int(limit))

    try:
        line = json.dumps(payload, ensure_ascii=False, default=str)
    except (TypeError, ValueError):
        line = str(payload)
    logger.log(level, line)


def text_caps(cap: int) -> Dict[str, int]:
    return {k: cap for k in TEXT_FIELDS}
