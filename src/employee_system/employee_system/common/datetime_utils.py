from __future__ import annotations

from datetime import date, datetime, timezone


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def utc_now() -> datetime:
    """Current UTC time as a naive datetime (matches MySQL DATETIME columns)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def epoch_seconds(value: datetime) -> float:
    """UTC epoch seconds, sub-second part kept, for a naive-UTC or aware datetime."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.timestamp()


def to_epoch(value: datetime) -> int:
    """Whole UTC epoch seconds (token claims)."""
    return int(epoch_seconds(value))


def isoformat_or_none(value) -> str | None:
    return value.isoformat() if value is not None else None
