"""OpenWeather 5-day / 3-hour forecast API client."""

import logging

import httpx

from assistant.errors import ConfigurationError, UpstreamError

logger = logging.getLogger(__name__)

OPENWEATHER_BASE_URL = "https://api.openweathermap.org"


class OpenWeatherClient:
    def __init__(
        self,
        api_key: str,
        base_url: str = OPENWEATHER_BASE_URL,
        units: str = "metric",
        lang: str = "zh_tw",
        timeout: float = 15.0,
    ):
        if not api_key:
            raise ConfigurationError("OPENWEATHER_API_KEY not set")
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.units = units
        self.lang = lang
        self.timeout = timeout

    def get_forecast(self, city: str) -> dict:
        """Fetch the 5-day/3-hour forecast for a "City, CC" query.

        OpenWeather reports unknown cities in the body (`cod` != "200"),
        which is raised as a 404 UpstreamError carrying its message.
        """
        url = f"{self.base_url}/data/2.5/forecast"
        params = {
            "q": city,
            "appid": self.api_key,
            "units": self.units,
            "lang": self.lang,
        }
        try:
            resp = httpx.get(url, params=params, timeout=self.timeout)
        except httpx.RequestError as e:
            logger.error("OpenWeather request failed for city=%s: %s", city, e)
            raise UpstreamError(f"OpenWeather request failed: {e}") from e

        try:
            data = resp.json()
        except ValueError as e:
            logger.error("OpenWeather returned non-JSON (%d) for city=%s", resp.status_code, city)
            raise UpstreamError(
                "OpenWeather returned an unreadable response", resp.status_code
            ) from e

        # `cod` is a string on success and sometimes an int on errors
        if str(data.get("cod")) != "200":
            message = data.get("message") or "Could not fetch weather data, check the city name."
            logger.error("OpenWeather rejected city=%s: %s", city, message)
            raise UpstreamError(message, 404)
        return data
