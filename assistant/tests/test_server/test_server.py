"""Tests for the FastAPI proxy with upstream APIs mocked by respx."""

import json

import httpx
import pytest
import respx
from fastapi.testclient import TestClient

from assistant.config.schema import AssistantConfig, GithubConfig, WeatherConfig
from assistant.server import create_app

OWM_URL = "https://test-owm.example.com"
GITHUB_URL = "https://test-github.example.com"
GENAI_URL = "https://test-genai.example.com"
FORECAST_URL = f"{OWM_URL}/data/2.5/forecast"
GENERATE_URL = f"{GENAI_URL}/v1beta/models/gemini-2.5-flash:generateContent"


@pytest.fixture
def client(test_config: AssistantConfig) -> TestClient:
    return TestClient(create_app(test_config))


@pytest.fixture
def bare_client() -> TestClient:
    """No keys and no default repository."""
    config = AssistantConfig(
        weather=WeatherConfig(base_url=OWM_URL),
        github=GithubConfig(base_url=GITHUB_URL),
    )
    return TestClient(create_app(config))


class TestWeatherProxy:
    @respx.mock
    def test_found(self, client: TestClient, taipei_forecast: dict):
        route = respx.get(FORECAST_URL).mock(
            return_value=httpx.Response(200, json=taipei_forecast)
        )

        resp = client.get("/api/weather-proxy", params={"city": "Taipei, TW", "date": "2024-06-01"})
        assert resp.status_code == 200
        body = resp.json()
        assert body["city"] == "Taipei"
        assert body["forecast"]["dt_txt"] == "2024-06-01 12:00:00"
        assert body["forecast"]["main"]["temp"] == 29.8

        params = route.calls[0].request.url.params
        assert params["q"] == "Taipei, TW"
        assert params["appid"] == "owm-key"
        assert params["units"] == "metric"
        assert params["lang"] == "zh_tw"

    @pytest.mark.parametrize("params", [{"city": "Taipei"}, {"date": "2024-06-01"}, {}])
    def test_missing_params(self, client: TestClient, params: dict):
        resp = client.get("/api/weather-proxy", params=params)
        assert resp.status_code == 400
        assert resp.json() == {"error": "Missing required city or date parameter"}

    def test_malformed_date(self, client: TestClient):
        resp = client.get("/api/weather-proxy", params={"city": "Taipei", "date": "2024/06/01"})
        assert resp.status_code == 400
        assert "error" in resp.json()

    @respx.mock
    def test_no_sample_for_date(self, client: TestClient, taipei_forecast: dict):
        respx.get(FORECAST_URL).mock(return_value=httpx.Response(200, json=taipei_forecast))

        resp = client.get("/api/weather-proxy", params={"city": "Taipei", "date": "2024-06-05"})
        assert resp.status_code == 404
        assert resp.json()["error"].startswith("No forecast data for 2024-06-05.")

    @respx.mock
    def test_unknown_city(self, client: TestClient, fixtures_dir):
        body = json.loads((fixtures_dir / "openweather_city_not_found.json").read_text())
        respx.get(FORECAST_URL).mock(return_value=httpx.Response(404, json=body))

        resp = client.get("/api/weather-proxy", params={"city": "Atlantis", "date": "2024-06-01"})
        assert resp.status_code == 404
        assert resp.json() == {"error": "city not found"}

    @respx.mock
    def test_transport_failure(self, client: TestClient):
        respx.get(FORECAST_URL).mock(side_effect=httpx.ConnectError("refused"))

        resp = client.get("/api/weather-proxy", params={"city": "Taipei", "date": "2024-06-01"})
        assert resp.status_code == 502
        assert resp.json()["error"] == "Server error while calling an external API."

    def test_missing_key(self, bare_client: TestClient):
        resp = bare_client.get("/api/weather-proxy", params={"city": "Taipei", "date": "2024-06-01"})
        assert resp.status_code == 503
        assert resp.json() == {"error": "OPENWEATHER_API_KEY not set"}


class TestOutfit:
    @respx.mock
    def test_suggestion(self, client: TestClient, taipei_forecast: dict, genai_reply):
        respx.get(FORECAST_URL).mock(return_value=httpx.Response(200, json=taipei_forecast))
        route = respx.post(GENERATE_URL).mock(
            return_value=httpx.Response(200, json=genai_reply("穿短袖 👕"))
        )

        resp = client.post("/api/outfit", json={"city": "Taipei", "date": "2024-06-01"})
        assert resp.status_code == 200
        body = resp.json()
        assert body["suggestion"] == "穿短袖 👕"
        assert body["city"] == "Taipei"
        assert body["forecast"]["dt"] == 1717243200
        assert route.calls[0].request.headers["x-goog-api-key"] == "genai-key"

    @respx.mock
    def test_request_key_wins(self, client: TestClient, taipei_forecast: dict, genai_reply):
        respx.get(FORECAST_URL).mock(return_value=httpx.Response(200, json=taipei_forecast))
        route = respx.post(GENERATE_URL).mock(
            return_value=httpx.Response(200, json=genai_reply("ok"))
        )

        client.post(
            "/api/outfit", json={"city": "Taipei", "date": "2024-06-01", "api_key": "user-key"}
        )
        assert route.calls[0].request.headers["x-goog-api-key"] == "user-key"

    @respx.mock
    def test_not_found_skips_model(self, client: TestClient, taipei_forecast: dict):
        respx.get(FORECAST_URL).mock(return_value=httpx.Response(200, json=taipei_forecast))
        route = respx.post(GENERATE_URL)

        resp = client.post("/api/outfit", json={"city": "Taipei", "date": "2024-06-05"})
        assert resp.status_code == 404
        assert not route.called

    def test_missing_city(self, client: TestClient):
        resp = client.post("/api/outfit", json={"date": "2024-06-01"})
        assert resp.status_code == 400


class TestGithubRoutes:
    @respx.mock
    def test_repos(self, client: TestClient, fixtures_dir):
        repos = json.loads((fixtures_dir / "github_repos.json").read_text())
        respx.get(f"{GITHUB_URL}/users/octo/repos").mock(
            return_value=httpx.Response(200, json=repos)
        )

        resp = client.get("/api/github-repos", params={"owner": "octo"})
        assert resp.status_code == 200
        body = resp.json()
        assert body[0]["name"] == "widget"
        assert set(body[0]) == {"name", "language", "description", "url", "stars", "updatedAt"}

    def test_repos_missing_owner(self, client: TestClient):
        resp = client.get("/api/github-repos")
        assert resp.status_code == 400
        assert resp.json() == {"error": "Missing required owner parameter"}

    @respx.mock
    def test_repos_upstream_status_passthrough(self, client: TestClient):
        respx.get(f"{GITHUB_URL}/users/ghost/repos").mock(
            return_value=httpx.Response(404, json={"message": "Not Found"})
        )

        resp = client.get("/api/github-repos", params={"owner": "ghost"})
        assert resp.status_code == 404
        assert resp.json() == {
            "error": "Not Found",
            "detail": "Check that the GitHub user ghost exists.",
        }

    @respx.mock
    def test_issues_default_repo(self, client: TestClient, fixtures_dir):
        issues = json.loads((fixtures_dir / "github_issues.json").read_text())
        respx.get(f"{GITHUB_URL}/repos/octo/widget/issues").mock(
            return_value=httpx.Response(200, json=issues)
        )

        resp = client.get("/api/github-issues")
        assert resp.status_code == 200
        assert resp.json()[0] == {
            "number": 42,
            "title": "Forecast tab shows yesterday",
            "url": "https://github.com/octo/widget/issues/42",
            "user": "alice",
            "createdAt": "11/19",
        }
        assert len(resp.json()) == 2

    @respx.mock
    def test_issues_explicit_repo(self, bare_client: TestClient):
        respx.get(f"{GITHUB_URL}/repos/facebook/react/issues").mock(
            return_value=httpx.Response(200, json=[])
        )

        resp = bare_client.get("/api/github-issues", params={"owner": "facebook", "repo": "react"})
        assert resp.status_code == 200
        assert resp.json() == []

    def test_issues_without_default_repo(self, bare_client: TestClient):
        resp = bare_client.get("/api/github-issues")
        assert resp.status_code == 500
        assert "GITHUB_REPO_OWNER" in resp.json()["error"]

    @respx.mock
    def test_issues_upstream_failure(self, client: TestClient):
        respx.get(f"{GITHUB_URL}/repos/octo/nope/issues").mock(
            return_value=httpx.Response(404, json={"message": "Not Found"})
        )

        resp = client.get("/api/github-issues", params={"owner": "octo", "repo": "nope"})
        assert resp.status_code == 404
        assert resp.json()["detail"] == (
            "Check that the repository octo/nope is public and correctly named."
        )


class TestFortune:
    @respx.mock
    def test_fortune_card(self, client: TestClient, genai_reply):
        text = '今天中吉 🌸\n{"運勢":"中吉","幸運色":"粉紅色","幸運圖案":"🌸 櫻花"}'
        route = respx.post(GENERATE_URL).mock(
            return_value=httpx.Response(200, json=genai_reply(text))
        )
        history = [{"role": "model", "parts": [{"text": "嗨👋"}]}]

        resp = client.post("/api/fortune", json={"message": "幫我看今天的運勢", "history": history})
        assert resp.status_code == 200
        body = resp.json()
        assert body["reply"] == text
        assert body["fortune"]["幸運色"] == "粉紅色"
        assert [m["role"] for m in body["history"]] == ["model", "user", "model"]

        sent = json.loads(route.calls[0].request.content)
        assert len(sent["contents"]) == 3

    @respx.mock
    def test_plain_chat(self, client: TestClient, genai_reply):
        respx.post(GENERATE_URL).mock(return_value=httpx.Response(200, json=genai_reply("hi")))

        resp = client.post("/api/fortune", json={"message": "hello"})
        assert resp.status_code == 200
        assert resp.json()["fortune"] is None

    def test_empty_message(self, client: TestClient):
        resp = client.post("/api/fortune", json={"message": "  "})
        assert resp.status_code == 400

    def test_bad_history_role(self, client: TestClient):
        history = [{"role": "system", "parts": [{"text": "x"}]}]
        resp = client.post("/api/fortune", json={"message": "hi", "history": history})
        assert resp.status_code == 422

    @pytest.mark.parametrize(
        "history",
        [
            [{"role": "user", "parts": ["hello"]}],
            [{"role": "user", "parts": "hello"}],
            ["hello"],
            [{"parts": [{"text": "x"}]}],
        ],
    )
    def test_malformed_history_rejected(self, client: TestClient, history: list):
        resp = client.post("/api/fortune", json={"message": "hi", "history": history})
        assert resp.status_code == 422

    def test_missing_key(self, bare_client: TestClient):
        resp = bare_client.post("/api/fortune", json={"message": "hello"})
        assert resp.status_code == 503
        assert resp.json() == {"error": "GEMINI_API_KEY not set"}

    @respx.mock
    def test_upstream_rejects_key(self, client: TestClient):
        respx.post(GENERATE_URL).mock(
            return_value=httpx.Response(400, json={"error": {"message": "API key not valid"}})
        )

        resp = client.post("/api/fortune", json={"message": "hello"})
        assert resp.status_code == 400
        assert resp.json() == {"error": "API key not valid"}


class TestHealth:
    def test_configured(self, client: TestClient):
        assert client.get("/api/health").json() == {
            "status": "ok",
            "openweather": True,
            "github_repo": True,
            "genai": True,
        }

    def test_bare(self, bare_client: TestClient):
        body = bare_client.get("/api/health").json()
        assert body["openweather"] is False
        assert body["genai"] is False
