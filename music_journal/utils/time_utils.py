"""
Date and time helpers for journal timestamps.

Key concepts:
  - Calendar-year windows: ``[Jan 1 00:00, Dec 31 23:59:59.999999]`` inclusive,
    compared on parsed values rather than on string prefixes so full
    end-of-year timestamps are kept.
  - UTC normalisation: aware timestamps are converted to UTC; naive ones are
    taken to already be UTC.
  - Half-up rounding for one-decimal rating displays (``4.25`` -> ``4.3``).
"""

from __future__ import annotations

from datetime import date, datetime, time, timezone
from decimal import ROUND_HALF_UP, Decimal

MONTH_LABELS: tuple[str, ...] = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def utcnow() -> datetime:
    """Return the current UTC datetime with timezone info.

    Prefer this over ``datetime.utcnow()`` (which returns naive datetimes).
    """
    return datetime.now(tz=timezone.utc)


def today() -> date:
    """Return today's calendar date (UTC)."""
    return utcnow().date()


def to_utc(value: datetime) -> datetime:
    """Return ``value`` as an aware UTC datetime.

    Naive datetimes are interpreted as UTC; aware ones are converted.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_year(year: int | str) -> int:
    """Coerce a year given as ``2023`` or ``"2023"`` to ``int``.

    Raises:
        ValueError: If ``year`` is not a whole number.
    """
    if isinstance(year, bool):
        raise ValueError(f"Invalid year: {year!r}")
    if isinstance(year, int):
        return year
    text = str(year).strip()
    if not text.lstrip("-").isdigit():
        raise ValueError(f"Invalid year: {year!r}")
    return int(text)


def year_bounds(year: int) -> tuple[datetime, datetime]:
    """Return the inclusive UTC ``(start, end)`` bounds of a calendar year."""
    start = datetime(year, 1, 1, tzinfo=timezone.utc)
    end = datetime.combine(date(year, 12, 31), time.max, tzinfo=timezone.utc)
    return start, end


def in_year(value: date | datetime, year: int) -> bool:
    """Return ``True`` when ``value`` falls within calendar ``year``.

    ``date`` values are compared directly; ``datetime`` values are normalised
    to UTC first and then checked against :func:`year_bounds`.
    """
    if isinstance(value, datetime):
        start, end = year_bounds(year)
        return start <= to_utc(value) <= end
    return date(year, 1, 1) <= value <= date(year, 12, 31)


def round_half_up(value: float, digits: int = 1) -> float:
    """Round ``value`` half away from zero at ``digits`` decimals."""
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def format_one_decimal(value: float) -> str:
    """Format ``value`` with exactly one decimal, rounding half up."""
    return f"{round_half_up(value, 1):.1f}"
