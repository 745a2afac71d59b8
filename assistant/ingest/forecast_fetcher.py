"""Forecast fetcher: retrieves an OpenWeather forecast as a ForecastSeries."""

import logging

from assistant.config.schema import TimezonePolicy
from assistant.ingest.openweather_client import OpenWeatherClient
from assistant.models.forecast import ForecastSample, ForecastSeries
from assistant.selection.dates import sample_timestamp, series_zone

logger = logging.getLogger(__name__)


class ForecastFetcher:
    def __init__(
        self,
        client: OpenWeatherClient,
        timezone_policy: TimezonePolicy = TimezonePolicy.UTC,
    ):
        self.client = client
        self.timezone_policy = timezone_policy

    def fetch(self, city: str) -> ForecastSeries:
        """Fetch and parse the forecast for a city. Upstream errors propagate."""
        raw = self.client.get_forecast(city)
        series = parse_forecast(raw, self.timezone_policy)
        logger.info(
            "Fetched %d forecast samples for %s (%s)",
            len(series.samples), series.city_name, city,
        )
        return series


def parse_forecast(
    raw: dict, timezone_policy: TimezonePolicy = TimezonePolicy.UTC
) -> ForecastSeries:
    """Map an OpenWeather /forecast body onto a ForecastSeries.

    Upstream order is kept as-is; ordering is checked by the caller.
    """
    city = raw.get("city") or {}
    offset = int(city.get("timezone", 0) or 0)
    zone = series_zone(timezone_policy, offset)

    samples: list[ForecastSample] = []
    for entry in raw.get("list", []):
        main = entry.get("main") or {}
        weather = entry.get("weather") or [{}]
        samples.append(
            ForecastSample(
                timestamp=sample_timestamp(entry, zone),
                temp=float(main.get("temp", 0.0)),
                feels_like=float(main.get("feels_like", 0.0)),
                humidity=float(main.get("humidity", 0.0)),
                condition=weather[0].get("description", ""),
                payload=entry,
            )
        )

    return ForecastSeries(
        city_name=city.get("name", ""),
        utc_offset_seconds=offset,
        samples=tuple(samples),
    )
