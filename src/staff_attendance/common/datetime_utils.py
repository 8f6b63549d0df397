from __future__ import annotations

from datetime import date, datetime
from typing import Optional


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_iso_datetime(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    return datetime.fromisoformat(value)


def format_timestamp(value: Optional[datetime]) -> str:
    """Machine-readable timestamp, empty when absent."""
    return value.isoformat() if value else ""


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def resolve_month_year(month: Optional[int], year: Optional[int], *, now: Optional[datetime] = None) -> tuple[int, int]:
    """Fill in a missing month/year with the current calendar month/year."""
    now = now or now_local()
    return (int(month) if month else now.month, int(year) if year else now.year)


def hours_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / 3600
