"""
config.py

Responsibility: Load client settings into a typed, immutable model.

Sources, later ones winning:
1) built-in defaults
2) an optional YAML file (top-level mapping)
3) environment: GITHUB_TOKEN, GITHUB_API_URL

The CLI should treat the loaded result as the single source of truth.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml

from ghrepos.executor import DEFAULT_API_BASE, DEFAULT_USER_AGENT

_KNOWN_KEYS = {"api_base", "token", "user_agent", "per_page", "read_only"}


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class ClientConfig:
    api_base: str = DEFAULT_API_BASE
    token: str | None = None
    user_agent: str = DEFAULT_USER_AGENT
    per_page: int = 100
    read_only: bool = False


def _read_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise ConfigError(f"Config file does not exist: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Config file is not valid YAML: {path}") from e
    if not isinstance(data, dict):
        raise ConfigError("Config file must be a mapping/object at the top level.")
    unknown = sorted(str(k) for k in data if k not in _KNOWN_KEYS)
    if unknown:
        raise ConfigError(f"Unknown config key(s): {', '.join(unknown)}")
    return data


def _per_page(raw: Any) -> int:
    try:
        value = int(raw)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"`per_page` must be an integer, got {raw!r}") from e
    # GitHub caps page size at 100.
    if not 1 <= value <= 100:
        raise ConfigError(f"`per_page` must be between 1 and 100, got {value}")
    return value


def load_config(path: str | Path | None = None, env: Mapping[str, str] | None = None) -> ClientConfig:
    """
    Load a `ClientConfig`.

    Recognised YAML keys:
    - api_base: str
    - token: str
    - user_agent: str
    - per_page: int (1..100)
    - read_only: bool
    """
    env = os.environ if env is None else env
    data = _read_yaml(Path(path)) if path is not None else {}

    api_base = str(env.get("GITHUB_API_URL") or data.get("api_base") or DEFAULT_API_BASE).strip()
    if not api_base.startswith(("http://", "https://")):
        raise ConfigError(f"`api_base` must be an http(s) URL, got {api_base!r}")

    token = env.get("GITHUB_TOKEN") or data.get("token")
    if token is not None:
        token = str(token).strip() or None

    read_only = data.get("read_only", False)
    if not isinstance(read_only, bool):
        raise ConfigError("`read_only` must be a boolean when provided.")

    return ClientConfig(
        api_base=api_base.rstrip("/"),
        token=token,
        user_agent=str(data.get("user_agent") or DEFAULT_USER_AGENT).strip(),
        per_page=_per_page(data.get("per_page", 100)),
        read_only=read_only,
    )
