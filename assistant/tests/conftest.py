"""Shared test fixtures."""

import json
from pathlib import Path

import pytest
import yaml

from assistant.config.schema import (
    AssistantConfig,
    GenAIConfig,
    GithubConfig,
    WeatherConfig,
)

OWM_URL = "https://test-owm.example.com"
GITHUB_URL = "https://test-github.example.com"
GENAI_URL = "https://test-genai.example.com"


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def taipei_forecast(fixtures_dir: Path) -> dict:
    with open(fixtures_dir / "openweather_forecast_taipei.json") as f:
        return json.load(f)


@pytest.fixture
def test_config() -> AssistantConfig:
    """Config pointing every client at a fake host, with keys set."""
    return AssistantConfig(
        weather=WeatherConfig(api_key="owm-key", base_url=OWM_URL),
        github=GithubConfig(base_url=GITHUB_URL, owner="octo", repo="widget"),
        genai=GenAIConfig(api_key="genai-key", base_url=GENAI_URL),
    )


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "selection": {"policy": "at-or-after", "reference_hour": "09:00:00"},
        "github": {"issues_per_page": 10},
        "server": {"port": 8080},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path


@pytest.fixture
def genai_reply():
    """Factory for generateContent response bodies carrying a text."""

    def _reply(text: str) -> dict:
        content = {"role": "model", "parts": [{"text": text}]}
        return {"candidates": [{"content": content, "finishReason": "STOP"}]}

    return _reply
