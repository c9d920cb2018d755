from __future__ import annotations

from datetime import date, datetime

from ..core.constants import ISO_DATE_FORMAT


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, ISO_DATE_FORMAT).date()


def format_iso_date(value: date) -> str:
    return value.strftime(ISO_DATE_FORMAT)


def format_display_date(value: date, *, with_weekday: bool = False) -> str:
    """Human readable date, e.g. ``Oct 19, 2026`` or ``Oct 19, 2026 (Mon)``."""
    text = f"{value.strftime('%b')} {value.day}, {value.year}"
    if with_weekday:
        text += f" ({value.strftime('%a')})"
    return text


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
