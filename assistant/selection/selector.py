"""Forecast selection: pick the one sample that represents a calendar day.

Two policies are supported:

REFERENCE_HOUR (default)
    The first sample dated on the target day whose time-of-day equals the
    reference hour (noon). Failing that, the first sample dated on the target
    day at any hour.

AT_OR_AFTER
    The first sample whose timestamp is at or after the start of the target
    day, in the series' own zone. A sample on a later day still qualifies.

Both scan the series once in order, so the earliest qualifying sample wins.
Neither raises: when nothing qualifies the result is NOT_FOUND. Callers
validate the date and the ordering beforehand with parse_target_date() and
validate_series().
"""

from collections.abc import Sequence
from datetime import date, time

from assistant.config.schema import SelectionPolicy
from assistant.errors import PreconditionViolation
from assistant.models.forecast import (
    NOT_FOUND,
    ForecastSample,
    MatchRule,
    SelectionResult,
)

DEFAULT_REFERENCE_HOUR = time(12, 0)


def select_forecast(
    samples: Sequence[ForecastSample],
    target_date: date,
    policy: SelectionPolicy = SelectionPolicy.REFERENCE_HOUR,
    reference_hour: time = DEFAULT_REFERENCE_HOUR,
) -> SelectionResult:
    """Select the sample representing target_date under the given policy."""
    if policy == SelectionPolicy.AT_OR_AFTER:
        return _select_at_or_after(samples, target_date)
    return _select_reference_hour(samples, target_date, reference_hour)


def _select_reference_hour(
    samples: Sequence[ForecastSample], target_date: date, reference_hour: time
) -> SelectionResult:
    first_of_day: ForecastSample | None = None
    for sample in samples:
        ts = sample.timestamp
        if ts.date() != target_date:
            continue
        if ts.time() == reference_hour:
            return SelectionResult(sample=sample, rule=MatchRule.REFERENCE_HOUR)
        if first_of_day is None:
            first_of_day = sample

    if first_of_day is not None:
        return SelectionResult(sample=first_of_day, rule=MatchRule.FIRST_OF_DAY)
    return NOT_FOUND


def _select_at_or_after(
    samples: Sequence[ForecastSample], target_date: date
) -> SelectionResult:
    for sample in samples:
        # Sorted input: the first sample not before the target day is the answer.
        if sample.timestamp.date() >= target_date:
            return SelectionResult(sample=sample, rule=MatchRule.AT_OR_AFTER)
    return NOT_FOUND


def validate_series(samples: Sequence[ForecastSample]) -> None:
    """Raise PreconditionViolation unless timestamps are non-decreasing."""
    for prev, cur in zip(samples, samples[1:]):
        if cur.timestamp < prev.timestamp:
            raise PreconditionViolation(
                f"Forecast series not sorted: {cur.timestamp.isoformat()} "
                f"follows {prev.timestamp.isoformat()}"
            )
