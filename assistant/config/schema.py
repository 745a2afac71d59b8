"""Pydantic v2 configuration schema with strict validation."""

from datetime import time
from enum import StrEnum

from pydantic import BaseModel, Field


class SelectionPolicy(StrEnum):
    REFERENCE_HOUR = "reference-hour"  # reference-hour sample, else first of day
    AT_OR_AFTER = "at-or-after"  # first sample at or after start of day


class TimezonePolicy(StrEnum):
    UTC = "utc"
    LOCATION = "location"  # upstream-reported city offset


class WeatherConfig(BaseModel):
    model_config = {"extra": "forbid"}

    api_key: str = ""
    base_url: str = "https://api.openweathermap.org"
    units: str = "metric"
    lang: str = "zh_tw"
    timeout: float = Field(default=15.0, gt=0.0)


class SelectionConfig(BaseModel):
    model_config = {"extra": "forbid"}

    policy: SelectionPolicy = SelectionPolicy.REFERENCE_HOUR
    reference_hour: time = time(12, 0)
    timezone: TimezonePolicy = TimezonePolicy.UTC


class GithubConfig(BaseModel):
    model_config = {"extra": "forbid"}

    base_url: str = "https://api.github.com"
    owner: str = ""
    repo: str = ""
    token: str = ""
    issues_per_page: int = Field(default=5, ge=1, le=100)
    repos_per_page: int = Field(default=30, ge=1, le=100)
    timeout: float = Field(default=15.0, gt=0.0)


class GenAIConfig(BaseModel):
    model_config = {"extra": "forbid"}

    api_key: str = ""
    model: str = "gemini-2.5-flash"
    base_url: str = "https://generativelanguage.googleapis.com"
    timeout: float = Field(default=60.0, gt=0.0)


class ServerConfig(BaseModel):
    model_config = {"extra": "forbid"}

    host: str = "127.0.0.1"
    port: int = Field(default=3001, ge=1, le=65535)
    cors_origins: list[str] = ["*"]


class AssistantConfig(BaseModel):
    model_config = {"extra": "forbid"}

    weather: WeatherConfig = WeatherConfig()
    selection: SelectionConfig = SelectionConfig()
    github: GithubConfig = GithubConfig()
    genai: GenAIConfig = GenAIConfig()
    server: ServerConfig = ServerConfig()
