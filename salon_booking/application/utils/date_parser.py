from __future__ import annotations

import re
from datetime import date

TIME_24H_PATTERN = re.compile(r"^([0-1]?[0-9]|2[0-3]):([0-5][0-9])$")


def parse_iso_date(text: str | None) -> date | None:
    """Parse a YYYY-MM-DD date. Returns None if the text is not a valid calendar date."""
    if not text:
        return None
    normalized = text.strip()
    if not re.fullmatch(r"\d{4}-\d{2}-\d{2}", normalized):
        return None
    try:
        return date.fromisoformat(normalized)
    except ValueError:
        return None


def parse_time_24h(text: str | None) -> tuple[int, int] | None:
    """Parse "H:MM" or "HH:MM" in 24h form. Returns (hour, minute) or None."""
    if not text:
        return None
    match = TIME_24H_PATTERN.match(text.strip())
    if not match:
        return None
    return int(match.group(1)), int(match.group(2))


def format_time_24h(hour: int, minute: int) -> str:
    return f"{hour:02d}:{minute:02d}"


def is_within_business_hours(hour: int, open_hour: int, close_hour: int) -> bool:
    # The closing hour itself is still bookable (20:30 passes with close_hour=20).
    return open_hour <= hour <= close_hour
