# concierge/services/booking.py
from __future__ import annotations

import re
from typing import Iterable

_BOOKING_RE = re.compile(r"\b(book|booking|schedule|appointment|consult|consultation|price|pricing|cost)\b", re.I)


def should_suggest_booking(user_text: str, triggers: Iterable[str] = ()) -> bool:
    t = (user_text or "").strip().lower()
    if not t:
        return False
    if _BOOKING_RE.search(t):
        return True
    return any(x.strip().lower() in t for x in triggers if x and x.strip())


def booking_cta_line(booking_url: str) -> str:
    return f"If you'd like, you can book online here: {booking_url}"
