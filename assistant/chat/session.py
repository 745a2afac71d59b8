"""Terminal chat session: parses commands, runs services, reduces state."""

import json
import logging
import re

from assistant.chat.state import (
    AppState,
    IssuesLoaded,
    ModelReplied,
    RepoSelected,
    ReposLoaded,
    RequestFailed,
    RequestStarted,
    SetRepoOwner,
    SetWeatherQuery,
    SwitchTab,
    Tab,
    UserSaid,
    reduce,
)
from assistant.errors import AssistantError
from assistant.reporting.formatters import (
    format_issues_text,
    format_repos_text,
    issue_to_json,
    not_found_message,
)
from assistant.services import Services

logger = logging.getLogger(__name__)

_TRAILING_DATE_RE = re.compile(r"^(?P<city>.*?)\s*(?P<date>\d{4}-\d{2}-\d{2})?$")

HELP_TEXT = """Commands:
  /weather [city] [YYYY-MM-DD]  forecast and outfit advice
  /repos [owner]                list public repositories
  /issues [repo]                open issues of a repository
  /tab fortune|weather|github   switch tab
  /state                        dump state as JSON
  /help                         this text
  /quit                         leave
Anything else is sent to the fortune teller."""

WEATHER_PREFIX = "☀️ 天氣與穿搭建議：\n"


class ChatSession:
    def __init__(self, services: Services, state: AppState | None = None):
        self.services = services
        self.state = state or AppState()
        self.closed = False

    def dispatch(self, event) -> None:
        self.state = reduce(self.state, event)

    def handle(self, line: str) -> list[str]:
        """Process one input line and return the lines to print."""
        line = line.strip()
        if not line:
            return []
        if not line.startswith("/"):
            return self._fortune(line)

        command, _, rest = line[1:].partition(" ")
        rest = rest.strip()
        if command == "quit":
            self.closed = True
            return []
        if command == "help":
            return [HELP_TEXT]
        if command == "state":
            return [json.dumps(self.state.to_dict(), ensure_ascii=False, indent=2)]
        if command == "tab":
            try:
                self.dispatch(SwitchTab(Tab(rest)))
            except ValueError:
                return [f"Unknown tab: {rest!r}"]
            return [f"Tab: {self.state.active_tab}"]
        if command == "weather":
            return self._weather(rest)
        if command == "repos":
            return self._repos(rest)
        if command == "issues":
            return self._issues(rest)
        return [f"Unknown command: /{command} (try /help)"]

    def _fail(self, tab: Tab, message: str) -> list[str]:
        self.dispatch(RequestFailed(tab, message))
        return [f"⚠ {message}"]

    def _fortune(self, text: str) -> list[str]:
        prior = self.state.history
        self.dispatch(UserSaid(text))
        self.dispatch(RequestStarted(Tab.FORTUNE))
        try:
            reply = self.services.fortune_teller().reply(prior, text)
        except AssistantError as e:
            logger.warning("Fortune request failed: %s", e)
            return self._fail(Tab.FORTUNE, str(e))
        self.dispatch(ModelReplied(reply.text, Tab.FORTUNE, reply.card))
        return [reply.text]

    def _weather(self, rest: str) -> list[str]:
        match = _TRAILING_DATE_RE.match(rest)
        city = match.group("city") or self.state.weather_city
        date = match.group("date") or self.state.weather_date
        self.dispatch(SetWeatherQuery(city, date))
        self.dispatch(RequestStarted(Tab.WEATHER))
        try:
            suggestion = self.services.outfit_advisor().suggest(city, date)
        except AssistantError as e:
            logger.warning("Weather request failed: %s", e)
            return self._fail(Tab.WEATHER, str(e))
        if suggestion.text is None:
            return self._fail(Tab.WEATHER, not_found_message(date))
        text = WEATHER_PREFIX + suggestion.text
        self.dispatch(ModelReplied(text, Tab.WEATHER))
        return [text]

    def _repos(self, owner: str) -> list[str]:
        if owner:
            self.dispatch(SetRepoOwner(owner))
        owner = self.state.repo_owner
        self.dispatch(RequestStarted(Tab.GITHUB))
        try:
            repos = self.services.github().list_repos(owner)
        except AssistantError as e:
            return self._fail(Tab.GITHUB, str(e))
        self.dispatch(ReposLoaded(tuple(r.name for r in repos)))
        out = [format_repos_text(owner, repos)]
        if self.state.selected_repo:
            out.extend(self._issues(self.state.selected_repo))
        return out

    def _issues(self, repo: str) -> list[str]:
        if repo:
            self.dispatch(RepoSelected(repo))
        repo = self.state.selected_repo
        owner = self.state.repo_owner
        if not repo:
            return self._fail(Tab.GITHUB, "Select a repository first (/repos then /issues <repo>).")
        self.dispatch(RequestStarted(Tab.GITHUB))
        try:
            issues = self.services.github().list_issues(owner, repo)
        except AssistantError as e:
            return self._fail(Tab.GITHUB, str(e))
        self.dispatch(IssuesLoaded(tuple(issue_to_json(i) for i in issues)))
        return [format_issues_text(owner, repo, issues)]
