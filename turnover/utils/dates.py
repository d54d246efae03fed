"""Calendar-date helpers. All dates travel as ISO ``YYYY-MM-DD`` strings."""
from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any, Optional

_ISO_PREFIX = re.compile(r"^(\d{4}-\d{2}-\d{2})", re.ASCII)


def today_iso(now: Optional[datetime] = None) -> str:
    """Return the local calendar date as ``YYYY-MM-DD``."""
    current = now or datetime.now()
    return current.date().isoformat()


def to_iso_date(value: Any) -> Optional[str]:
    """Coerce a date, datetime or date-like string to ``YYYY-MM-DD``.

    Strings with a time part (``2024-06-10T15:00``) keep only the date.
    Anything unrecognisable yields ``None``.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    match = _ISO_PREFIX.match(str(value).strip())
    return match.group(1) if match else None


def on_or_after(day: Optional[str], reference: str) -> bool:
    """True when ``day`` is the same as or later than ``reference``."""
    # fixed-width ISO strings sort chronologically
    return day is not None and day >= reference


__all__ = ["today_iso", "to_iso_date", "on_or_after"]
