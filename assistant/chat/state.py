"""Application state for the chat front-end and its update function.

All front-end state lives in one frozen AppState. It changes only through
reduce(state, event), which returns a new state. Side effects (HTTP calls)
happen outside and report back as events. to_dict()/from_dict() give a
JSON-safe snapshot.
"""

from dataclasses import dataclass, field, replace
from enum import StrEnum

from assistant.config.defaults import DEFAULT_CITY, DEFAULT_GITHUB_OWNER, GREETING
from assistant.models.chat import ChatMessage, Role
from assistant.models.common import tomorrow_iso


class Tab(StrEnum):
    FORTUNE = "fortune"
    WEATHER = "weather"
    GITHUB = "github"


@dataclass(frozen=True)
class AppState:
    active_tab: Tab = Tab.FORTUNE
    history: tuple[ChatMessage, ...] = (ChatMessage(Role.MODEL, GREETING),)
    fortune: dict | None = None
    weather_city: str = DEFAULT_CITY
    weather_date: str = field(default_factory=tomorrow_iso)
    repo_owner: str = DEFAULT_GITHUB_OWNER
    repos: tuple[str, ...] = ()
    selected_repo: str | None = None
    issues: tuple[dict, ...] = ()
    loading: frozenset[Tab] = frozenset()
    errors: tuple[tuple[Tab, str], ...] = ()

    def error_for(self, tab: Tab) -> str:
        return dict(self.errors).get(tab, "")

    def to_dict(self) -> dict:
        return {
            "active_tab": self.active_tab.value,
            "history": [m.to_content() for m in self.history],
            "fortune": self.fortune,
            "weather_city": self.weather_city,
            "weather_date": self.weather_date,
            "repo_owner": self.repo_owner,
            "repos": list(self.repos),
            "selected_repo": self.selected_repo,
            "issues": [dict(i) for i in self.issues],
            "loading": sorted(t.value for t in self.loading),
            "errors": {t.value: msg for t, msg in self.errors},
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AppState":
        return cls(
            active_tab=Tab(data["active_tab"]),
            history=tuple(ChatMessage.from_content(c) for c in data["history"]),
            fortune=data.get("fortune"),
            weather_city=data["weather_city"],
            weather_date=data["weather_date"],
            repo_owner=data["repo_owner"],
            repos=tuple(data.get("repos", [])),
            selected_repo=data.get("selected_repo"),
            issues=tuple(data.get("issues", [])),
            loading=frozenset(Tab(t) for t in data.get("loading", [])),
            errors=tuple((Tab(t), msg) for t, msg in data.get("errors", {}).items()),
        )


# ── Events ──────────────────────────────────────────────────────────


@dataclass(frozen=True)
class SwitchTab:
    tab: Tab


@dataclass(frozen=True)
class SetWeatherQuery:
    city: str
    date: str


@dataclass(frozen=True)
class SetRepoOwner:
    owner: str


@dataclass(frozen=True)
class RequestStarted:
    tab: Tab


@dataclass(frozen=True)
class RequestFailed:
    tab: Tab
    message: str


@dataclass(frozen=True)
class UserSaid:
    text: str


@dataclass(frozen=True)
class ModelReplied:
    text: str
    tab: Tab = Tab.FORTUNE
    fortune: dict | None = None


@dataclass(frozen=True)
class ReposLoaded:
    names: tuple[str, ...]


@dataclass(frozen=True)
class RepoSelected:
    name: str


@dataclass(frozen=True)
class IssuesLoaded:
    issues: tuple[dict, ...]


Event = (
    SwitchTab | SetWeatherQuery | SetRepoOwner | RequestStarted | RequestFailed
    | UserSaid | ModelReplied | ReposLoaded | RepoSelected | IssuesLoaded
)


def _finish(state: AppState, tab: Tab, **changes) -> AppState:
    return replace(
        state,
        loading=state.loading - {tab},
        errors=tuple((t, m) for t, m in state.errors if t != tab),
        **changes,
    )


def reduce(state: AppState, event: Event) -> AppState:
    """Apply one event and return the next state."""
    if isinstance(event, SwitchTab):
        return replace(state, active_tab=event.tab)
    if isinstance(event, SetWeatherQuery):
        return replace(state, weather_city=event.city, weather_date=event.date)
    if isinstance(event, SetRepoOwner):
        return replace(
            state, repo_owner=event.owner, repos=(), selected_repo=None, issues=()
        )
    if isinstance(event, RequestStarted):
        return replace(
            state,
            loading=state.loading | {event.tab},
            errors=tuple((t, m) for t, m in state.errors if t != event.tab),
        )
    if isinstance(event, RequestFailed):
        failed = _finish(state, event.tab)
        changes = {"issues": ()} if event.tab == Tab.GITHUB else {}
        return replace(failed, errors=(*failed.errors, (event.tab, event.message)), **changes)
    if isinstance(event, UserSaid):
        return replace(
            state,
            history=(*state.history, ChatMessage(Role.USER, event.text)),
            fortune=None,
        )
    if isinstance(event, ModelReplied):
        return _finish(
            state,
            event.tab,
            history=(*state.history, ChatMessage(Role.MODEL, event.text)),
            fortune=event.fortune if event.fortune is not None else state.fortune,
        )
    if isinstance(event, ReposLoaded):
        return _finish(
            state,
            Tab.GITHUB,
            repos=event.names,
            selected_repo=event.names[0] if event.names else None,
            issues=(),
        )
    if isinstance(event, RepoSelected):
        return replace(state, selected_repo=event.name)
    if isinstance(event, IssuesLoaded):
        return _finish(state, Tab.GITHUB, issues=event.issues)
    raise TypeError(f"Unknown event: {event!r}")
