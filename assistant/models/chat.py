"""Chat turn models."""

from dataclasses import dataclass
from enum import StrEnum

from assistant.errors import PreconditionViolation
from assistant.models.forecast import WeatherOutcome


class Role(StrEnum):
    USER = "user"
    MODEL = "model"


@dataclass(frozen=True)
class ChatMessage:
    role: Role
    text: str

    def to_content(self) -> dict:
        """Shape used by the generateContent API."""
        return {"role": self.role.value, "parts": [{"text": self.text}]}

    @classmethod
    def from_content(cls, content: dict) -> "ChatMessage":
        parts = content.get("parts") or []
        text = "".join(p.get("text", "") for p in parts)
        try:
            role = Role(content.get("role", "user"))
        except ValueError as e:
            raise PreconditionViolation(f"Unknown chat role: {content.get('role')!r}") from e
        return cls(role=role, text=text)


@dataclass(frozen=True)
class FortuneReply:
    text: str
    card: dict | None
    history: tuple[ChatMessage, ...]


@dataclass(frozen=True)
class OutfitSuggestion:
    outcome: WeatherOutcome
    text: str | None  # None when no forecast was found
