"""Target-date parsing and the explicit timezone policy for forecast timestamps."""

import re
from datetime import UTC, date, datetime, timedelta, timezone

from assistant.config.schema import TimezonePolicy
from assistant.errors import PreconditionViolation

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_target_date(text: str) -> date:
    """Parse a strict YYYY-MM-DD calendar date.

    Raises PreconditionViolation for any other shape or an impossible date.
    """
    if not isinstance(text, str) or not _DATE_RE.match(text.strip()):
        raise PreconditionViolation(f"Invalid date {text!r}, expected YYYY-MM-DD")
    try:
        return date.fromisoformat(text.strip())
    except ValueError as e:
        raise PreconditionViolation(f"Invalid date {text!r}: {e}") from e


def series_zone(policy: TimezonePolicy, utc_offset_seconds: int) -> timezone:
    """Zone in which sample timestamps are compared."""
    if policy == TimezonePolicy.LOCATION:
        return timezone(timedelta(seconds=utc_offset_seconds))
    return UTC


def sample_timestamp(entry: dict, zone: timezone) -> datetime:
    """Timestamp of one upstream forecast entry, expressed in `zone`.

    Prefers the Unix `dt` field; falls back to `dt_txt`, which OpenWeather
    reports in UTC.
    """
    if "dt" in entry:
        return datetime.fromtimestamp(int(entry["dt"]), tz=UTC).astimezone(zone)
    try:
        naive = datetime.strptime(entry["dt_txt"], "%Y-%m-%d %H:%M:%S")
    except (KeyError, TypeError, ValueError) as e:
        raise PreconditionViolation(f"Forecast entry has no usable timestamp: {e}") from e
    return naive.replace(tzinfo=UTC).astimezone(zone)

