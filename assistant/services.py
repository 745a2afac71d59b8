"""Builds clients and pipelines from an AssistantConfig."""

from assistant.config.schema import AssistantConfig
from assistant.errors import ConfigurationError
from assistant.ingest.forecast_fetcher import ForecastFetcher
from assistant.ingest.genai_client import GenAIClient
from assistant.ingest.github_client import GithubClient
from assistant.ingest.openweather_client import OpenWeatherClient
from assistant.pipeline.fortune import FortuneTeller
from assistant.pipeline.outfit import OutfitAdvisor
from assistant.pipeline.weather_lookup import WeatherLookup


class Services:
    def __init__(self, config: AssistantConfig):
        self.config = config

    def weather_lookup(self) -> WeatherLookup:
        w = self.config.weather
        client = OpenWeatherClient(
            api_key=w.api_key,
            base_url=w.base_url,
            units=w.units,
            lang=w.lang,
            timeout=w.timeout,
        )
        fetcher = ForecastFetcher(client, self.config.selection.timezone)
        return WeatherLookup(fetcher, self.config.selection)

    def github(self) -> GithubClient:
        g = self.config.github
        return GithubClient(
            base_url=g.base_url,
            token=g.token,
            issues_per_page=g.issues_per_page,
            repos_per_page=g.repos_per_page,
            timeout=g.timeout,
        )

    def default_repo(self) -> tuple[str, str]:
        g = self.config.github
        if not g.owner or not g.repo:
            raise ConfigurationError(
                "GitHub repository not configured (set GITHUB_REPO_OWNER and GITHUB_REPO_NAME)"
            )
        return g.owner, g.repo

    def genai(self, api_key: str | None = None) -> GenAIClient:
        """Model client; a caller-supplied key wins over the configured one."""
        g = self.config.genai
        return GenAIClient(
            api_key=api_key or g.api_key,
            model=g.model,
            base_url=g.base_url,
            timeout=g.timeout,
        )

    def outfit_advisor(self, api_key: str | None = None) -> OutfitAdvisor:
        return OutfitAdvisor(self.weather_lookup(), self.genai(api_key))

    def fortune_teller(self, api_key: str | None = None) -> FortuneTeller:
        return FortuneTeller(self.genai(api_key))
