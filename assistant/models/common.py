"""Common types and helpers shared across models."""

from datetime import UTC, date, datetime, timedelta


def utc_now() -> datetime:
    return datetime.now(UTC)


def tomorrow_iso(today: date | None = None) -> str:
    """Default query date for the weather form: tomorrow, YYYY-MM-DD."""
    if today is None:
        today = utc_now().date()
    return (today + timedelta(days=1)).isoformat()
