"""YAML config loader with environment overlay and dotted-key lookup."""

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from assistant.config.defaults import ENV_OVERRIDES
from assistant.config.schema import AssistantConfig


def load_config(
    path: str | Path | None = None, environ: Mapping[str, str] | None = None
) -> AssistantConfig:
    """Load and validate config from an optional YAML file.

    Non-empty environment variables listed in ENV_OVERRIDES win over the file.
    A missing path is not an error; the schema defaults apply.
    """
    raw: dict[str, Any] = {}
    if path is not None and Path(path).exists():
        with open(path) as f:
            raw = yaml.safe_load(f) or {}
        # a section holding only comments loads as None
        raw = {section: body or {} for section, body in raw.items()}

    if environ is None:
        environ = os.environ
    for env_name, dotted_key in ENV_OVERRIDES.items():
        value = environ.get(env_name, "").strip()
        if value:
            section, key = dotted_key.split(".", 1)
            raw[section] = {**(raw.get(section) or {}), key: value}

    return AssistantConfig(**raw)


def get_config_value(config: AssistantConfig, dotted_key: str) -> Any:
    """Get a config value by dotted key path. E.g. 'github.issues_per_page'."""
    parts = dotted_key.split(".")
    obj: Any = config
    for part in parts:
        if isinstance(obj, list):
            obj = obj[int(part)]
        elif hasattr(obj, part):
            obj = getattr(obj, part)
        elif isinstance(obj, dict):
            obj = obj[part]
        else:
            raise KeyError(f"Config key not found: {dotted_key}")
    return obj


def redacted(config: AssistantConfig) -> dict[str, Any]:
    """Config as a JSON-ready dict with secrets masked."""
    data = config.model_dump(mode="json")
    for section, key in (("weather", "api_key"), ("github", "token"), ("genai", "api_key")):
        if data[section][key]:
            data[section][key] = "***"
    return data
