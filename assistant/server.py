"""Assistant proxy: FastAPI app forwarding browser requests to upstream APIs."""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from assistant.config.schema import AssistantConfig
from assistant.errors import ConfigurationError, PreconditionViolation, UpstreamError
from assistant.models.chat import ChatMessage, Role
from assistant.reporting.formatters import (
    issue_to_json,
    not_found_message,
    outcome_to_json,
    repo_to_json,
)
from assistant.services import Services

logger = logging.getLogger(__name__)


class Part(BaseModel):
    text: str = ""


class Content(BaseModel):
    role: Role
    parts: list[Part] = []


class FortuneRequest(BaseModel):
    message: str = ""
    history: list[Content] = []
    api_key: str | None = None


class OutfitRequest(BaseModel):
    city: str = ""
    date: str = ""
    api_key: str | None = None


def _error(status_code: int, message: str, detail: str | None = None) -> JSONResponse:
    body = {"error": message}
    if detail:
        body["detail"] = detail
    return JSONResponse(status_code=status_code, content=body)


def create_app(config: AssistantConfig) -> FastAPI:
    services = Services(config)

    app = FastAPI(title="Fortune & Weather Assistant", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Error relabeling ────────────────────────────────────────────

    @app.exception_handler(PreconditionViolation)
    async def _bad_input(request: Request, exc: PreconditionViolation):
        return _error(400, str(exc))

    @app.exception_handler(ConfigurationError)
    async def _not_configured(request: Request, exc: ConfigurationError):
        logger.error("%s %s: %s", request.method, request.url.path, exc)
        return _error(503, str(exc))

    @app.exception_handler(UpstreamError)
    async def _upstream(request: Request, exc: UpstreamError):
        if exc.status_code is None:
            return _error(502, "Server error while calling an external API.", exc.message)
        return _error(exc.status_code, exc.message, exc.detail)

    # ── Weather ─────────────────────────────────────────────────────

    @app.get("/api/weather-proxy")
    def weather_proxy(city: str | None = None, date: str | None = None):
        """Forecast sample for a city on a date, with the resolved city name."""
        if not city or not date:
            return _error(400, "Missing required city or date parameter")
        outcome = services.weather_lookup().lookup(city, date)
        if not outcome.found:
            return _error(404, not_found_message(date))
        return outcome_to_json(outcome)

    @app.post("/api/outfit")
    def outfit(req: OutfitRequest):
        """Forecast plus a generated outfit suggestion."""
        if not req.city.strip() or not req.date:
            return _error(400, "Missing required city or date parameter")
        suggestion = services.outfit_advisor(req.api_key).suggest(req.city, req.date)
        if suggestion.text is None:
            return _error(404, not_found_message(req.date))
        body = outcome_to_json(suggestion.outcome)
        body["suggestion"] = suggestion.text
        return body

    # ── GitHub ──────────────────────────────────────────────────────

    @app.get("/api/github-repos")
    def github_repos(owner: str | None = None):
        if not owner or not owner.strip():
            return _error(400, "Missing required owner parameter")
        repos = services.github().list_repos(owner.strip())
        return [repo_to_json(r) for r in repos]

    @app.get("/api/github-issues")
    def github_issues(owner: str | None = None, repo: str | None = None):
        """Open issues; owner/repo fall back to the configured repository."""
        if not owner or not repo:
            try:
                owner, repo = services.default_repo()
            except ConfigurationError as e:
                return _error(500, str(e))
        issues = services.github().list_issues(owner, repo)
        return [issue_to_json(i) for i in issues]

    # ── Fortune chat ────────────────────────────────────────────────

    @app.post("/api/fortune")
    def fortune(req: FortuneRequest):
        if not req.message.strip():
            return _error(400, "Message must not be empty")
        history = [ChatMessage.from_content(c.model_dump(mode="json")) for c in req.history]
        reply = services.fortune_teller(req.api_key).reply(history, req.message)
        return {
            "reply": reply.text,
            "fortune": reply.card,
            "history": [m.to_content() for m in reply.history],
        }

    # ── Health ──────────────────────────────────────────────────────

    @app.get("/api/health")
    def health():
        return {
            "status": "ok",
            "openweather": bool(config.weather.api_key),
            "github_repo": bool(config.github.owner and config.github.repo),
            "genai": bool(config.genai.api_key),
        }

    return app
