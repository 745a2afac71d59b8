"""Weather lookup: fetch a forecast series and select the sample for a date."""

import logging

from assistant.config.schema import SelectionConfig
from assistant.errors import PreconditionViolation
from assistant.ingest.forecast_fetcher import ForecastFetcher
from assistant.models.forecast import WeatherOutcome
from assistant.selection.dates import parse_target_date
from assistant.selection.selector import select_forecast, validate_series

logger = logging.getLogger(__name__)


class WeatherLookup:
    def __init__(self, fetcher: ForecastFetcher, selection: SelectionConfig | None = None):
        self.fetcher = fetcher
        self.selection = selection or SelectionConfig()

    def lookup(self, city: str, date_text: str) -> WeatherOutcome:
        """Resolve the forecast for `city` on `date_text` (YYYY-MM-DD).

        Raises PreconditionViolation for a blank city, a malformed date or an
        unsorted upstream series, and UpstreamError when OpenWeather fails.
        A missing forecast is reported through the outcome, not raised.
        """
        city = (city or "").strip()
        if not city:
            raise PreconditionViolation("City must not be empty")
        target = parse_target_date(date_text)

        series = self.fetcher.fetch(city)
        validate_series(series.samples)
        result = select_forecast(
            series.samples,
            target,
            policy=self.selection.policy,
            reference_hour=self.selection.reference_hour,
        )

        if result.found:
            logger.info(
                "Selected %s forecast for %s on %s (%s)",
                result.sample.timestamp.isoformat(), series.city_name, target, result.rule,
            )
        else:
            logger.warning(
                "No forecast for %s on %s in %d samples",
                series.city_name or city, target, len(series.samples),
            )
        return WeatherOutcome(target_date=target, series=series, result=result)
