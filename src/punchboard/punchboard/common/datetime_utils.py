from __future__ import annotations

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mock easier.
    """
    return datetime.now()


def to_whole_seconds(moment: datetime) -> datetime:
    """Drop microseconds; DATETIME columns keep whole seconds only."""
    return moment.replace(microsecond=0)


def hours_between(start: datetime, end: datetime, *, ndigits: int = 2) -> float:
    """Elapsed wall-clock hours from start to end, rounded half-up."""
    hours = Decimal(str((end - start).total_seconds())) / Decimal(3600)
    return float(hours.quantize(Decimal(1).scaleb(-ndigits), rounding=ROUND_HALF_UP))


def isoformat_or_none(value: date | datetime | None) -> str | None:
    return value.isoformat() if value is not None else None
