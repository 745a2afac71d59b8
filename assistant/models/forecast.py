"""OpenWeather forecast data models and selection results."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import StrEnum


@dataclass(frozen=True)
class ForecastSample:
    timestamp: datetime  # tz-aware, in the zone chosen by the timezone policy
    temp: float
    feels_like: float
    humidity: float
    condition: str
    payload: dict = field(default_factory=dict, compare=False, repr=False)


@dataclass(frozen=True)
class ForecastSeries:
    city_name: str
    utc_offset_seconds: int
    samples: tuple[ForecastSample, ...]


class MatchRule(StrEnum):
    REFERENCE_HOUR = "REFERENCE_HOUR"
    FIRST_OF_DAY = "FIRST_OF_DAY"
    AT_OR_AFTER = "AT_OR_AFTER"
    NOT_FOUND = "NOT_FOUND"


@dataclass(frozen=True)
class SelectionResult:
    sample: ForecastSample | None
    rule: MatchRule

    @property
    def found(self) -> bool:
        return self.sample is not None


NOT_FOUND = SelectionResult(sample=None, rule=MatchRule.NOT_FOUND)


@dataclass(frozen=True)
class WeatherOutcome:
    target_date: date
    series: ForecastSeries
    result: SelectionResult

    @property
    def found(self) -> bool:
        return self.result.found
