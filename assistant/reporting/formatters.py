"""Output formatters: JSON shapes for the browser and text for the terminal."""

from assistant.models.forecast import WeatherOutcome
from assistant.models.github import IssueSummary, RepoSummary


def repo_to_json(r: RepoSummary) -> dict:
    return {
        "name": r.name,
        "language": r.language,
        "description": r.description,
        "url": r.url,
        "stars": r.stars,
        "updatedAt": r.updated_at,
    }


def issue_to_json(i: IssueSummary) -> dict:
    return {
        "number": i.number,
        "title": i.title,
        "url": i.url,
        "user": i.user,
        "createdAt": i.created_at,
    }


def outcome_to_json(outcome: WeatherOutcome) -> dict:
    """Response envelope for a found forecast: raw sample plus resolved city."""
    return {
        "forecast": outcome.result.sample.payload,
        "city": outcome.series.city_name,
    }


def not_found_message(target_date: str) -> str:
    return (
        f"No forecast data for {target_date}. "
        "Try another date (within the next 5 days) or location."
    )


def format_forecast_text(outcome: WeatherOutcome) -> str:
    if not outcome.found:
        return not_found_message(outcome.target_date.isoformat())
    s = outcome.result.sample
    return "\n".join([
        f"{outcome.series.city_name} @ {s.timestamp.strftime('%Y-%m-%d %H:%M %Z')}",
        f"  {s.condition or 'n/a'}",
        f"  Temp: {s.temp:.1f}°C (feels like {s.feels_like:.1f}°C)",
        f"  Humidity: {s.humidity:.0f}%",
    ])


def format_repos_text(owner: str, repos: list[RepoSummary]) -> str:
    if not repos:
        return f"{owner} has no public repositories."
    lines = [f"{owner}: {len(repos)} public repositories"]
    for r in repos:
        lines.append(f"  {r.name} ({r.language or 'N/A'}) ★{r.stars}")
    return "\n".join(lines)


def format_issues_text(owner: str, repo: str, issues: list[IssueSummary]) -> str:
    if not issues:
        return f"{owner}/{repo} has no open issues."
    lines = [f"{owner}/{repo} open issues:"]
    for i in issues:
        lines.append(f"  #{i.number} {i.title} (by {i.user} on {i.created_at})")
    return "\n".join(lines)
