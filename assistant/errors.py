"""Exceptions shared by the clients, pipelines and the HTTP layer."""


class AssistantError(Exception):
    """Base exception for this application."""


class PreconditionViolation(AssistantError, ValueError):
    """Caller handed the selector input it must validate first."""


class ConfigurationError(AssistantError):
    """A required setting (API key, default repository) is missing."""


class UpstreamError(AssistantError):
    """A third-party API failed or rejected the request."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        detail: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.detail = detail
