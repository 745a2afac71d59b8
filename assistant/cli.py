"""CLI entry point for the fortune & weather assistant."""

import argparse
import json
import logging

from dotenv import load_dotenv

from assistant.chat.session import ChatSession
from assistant.config.defaults import QUICK_PROMPTS
from assistant.config.loader import get_config_value, load_config, redacted
from assistant.config.schema import SelectionPolicy
from assistant.errors import AssistantError
from assistant.reporting.formatters import (
    format_forecast_text,
    format_issues_text,
    format_repos_text,
    outcome_to_json,
)
from assistant.services import Services

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = "ops/configs/default.yaml"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="assistant",
        description="Fortune & weather assistant proxy",
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG, help="Config YAML path (optional)"
    )

    sub = parser.add_subparsers(dest="command")

    # serve
    serve_p = sub.add_parser("serve", help="Run the HTTP proxy")
    serve_p.add_argument("--host", help="Bind address (default from config)")
    serve_p.add_argument("--port", type=int, help="Port (default from config)")

    # forecast
    fc_p = sub.add_parser("forecast", help="Show the selected forecast for a date")
    fc_p.add_argument("city", help='City query, e.g. "Taipei, TW"')
    fc_p.add_argument("date", help="Target date YYYY-MM-DD")
    fc_p.add_argument(
        "--policy", choices=[p.value for p in SelectionPolicy], help="Selection policy"
    )
    fc_p.add_argument("--json", action="store_true", help="Print the raw sample")

    # repos / issues
    repos_p = sub.add_parser("repos", help="List public repositories of a user")
    repos_p.add_argument("owner")
    issues_p = sub.add_parser("issues", help="List open issues of a repository")
    issues_p.add_argument("owner", nargs="?")
    issues_p.add_argument("repo", nargs="?")

    # fortune / chat
    fortune_p = sub.add_parser("fortune", help="Ask the fortune teller once")
    fortune_p.add_argument("message")
    sub.add_parser("chat", help="Interactive terminal chat")

    # config show / config get
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config (secrets masked)")
    get_p = config_sub.add_parser("get", help="Display one config value")
    get_p.add_argument("key", help="Dotted key, e.g. selection.policy")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    load_dotenv()
    config = load_config(args.config)

    try:
        if args.command == "serve":
            return _cmd_serve(config, args)
        elif args.command == "forecast":
            return _cmd_forecast(config, args)
        elif args.command == "repos":
            return _cmd_repos(config, args)
        elif args.command == "issues":
            return _cmd_issues(config, args)
        elif args.command == "fortune":
            return _cmd_fortune(config, args)
        elif args.command == "chat":
            return _cmd_chat(config)
        elif args.command == "config":
            return _cmd_config(config, args)
    except AssistantError as e:
        print(f"Error: {e}")
        return 1
    parser.print_help()
    return 1


def _cmd_serve(config, args) -> int:
    import uvicorn

    from assistant.server import create_app

    if not config.weather.api_key:
        logger.error("OPENWEATHER_API_KEY is not set; refusing to start")
        return 1
    if not config.github.owner or not config.github.repo:
        logger.warning(
            "GITHUB_REPO_OWNER or GITHUB_REPO_NAME not set; "
            "/api/github-issues needs explicit owner and repo"
        )
    if not config.genai.api_key:
        logger.warning("GEMINI_API_KEY not set; AI routes need a key in the request")

    host = args.host or config.server.host
    port = args.port or config.server.port
    logger.info("Proxy listening on http://%s:%d", host, port)
    uvicorn.run(create_app(config), host=host, port=port)
    return 0


def _cmd_forecast(config, args) -> int:
    if args.policy:
        config = config.model_copy(
            update={
                "selection": config.selection.model_copy(
                    update={"policy": SelectionPolicy(args.policy)}
                )
            }
        )
    outcome = Services(config).weather_lookup().lookup(args.city, args.date)
    if args.json and outcome.found:
        print(json.dumps(outcome_to_json(outcome), ensure_ascii=False, indent=2))
    else:
        print(format_forecast_text(outcome))
    return 0 if outcome.found else 1


def _cmd_repos(config, args) -> int:
    repos = Services(config).github().list_repos(args.owner)
    print(format_repos_text(args.owner, repos))
    return 0


def _cmd_issues(config, args) -> int:
    services = Services(config)
    if args.owner and args.repo:
        owner, repo = args.owner, args.repo
    else:
        owner, repo = services.default_repo()
    issues = services.github().list_issues(owner, repo)
    print(format_issues_text(owner, repo, issues))
    return 0


def _cmd_fortune(config, args) -> int:
    reply = Services(config).fortune_teller().reply([], args.message)
    print(reply.text)
    if reply.card:
        print(json.dumps(reply.card, ensure_ascii=False))
    return 0


def _cmd_chat(config) -> int:
    session = ChatSession(Services(config))
    print(session.state.history[0].text)
    print("Try: " + " | ".join(QUICK_PROMPTS))
    print("(/help for commands)")
    while not session.closed:
        try:
            line = input("> ")
        except EOFError:
            break
        for out in session.handle(line):
            print(out)
    return 0


def _cmd_config(config, args) -> int:
    if args.config_command == "show":
        print(json.dumps(redacted(config), indent=2, ensure_ascii=False))
        return 0
    elif args.config_command == "get":
        try:
            value = get_config_value(config, args.key)
        except (KeyError, AttributeError) as e:
            print(f"Error: {e}")
            return 1
        if args.key.split(".")[-1] in ("api_key", "token") and value:
            value = "***"
        print(value)
        return 0
    else:
        print("Use: config show | config get key")
        return 1
