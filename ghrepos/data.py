"""
data.py

Responsibility: Input types for the repository endpoints and their JSON encoding.

Payload records are frozen; endpoint code derives new values with
`dataclasses.replace` instead of mutating what the caller passed in.
"""

from __future__ import annotations

import enum
import json
from dataclasses import dataclass, fields
from typing import Any, Union


class RepoPublicity(str, enum.Enum):
    """Filter for the repository listing endpoints (`type` query parameter)."""

    ALL = "all"
    OWNER = "owner"
    MEMBER = "member"
    PUBLIC = "public"
    PRIVATE = "private"


@dataclass(frozen=True)
class NewRepo:
    name: str
    description: str | None = None
    homepage: str | None = None
    private: bool | None = None
    has_issues: bool | None = None
    has_projects: bool | None = None
    has_wiki: bool | None = None
    auto_init: bool | None = None
    gitignore_template: str | None = None
    license_template: str | None = None
    allow_squash_merge: bool | None = None
    allow_merge_commit: bool | None = None
    allow_rebase_merge: bool | None = None


@dataclass(frozen=True)
class EditRepo:
    """
    Fields to change on an existing repository. `None` means "leave as is".
    """

    name: str | None = None
    description: str | None = None
    homepage: str | None = None
    private: bool | None = None
    has_issues: bool | None = None
    has_projects: bool | None = None
    has_wiki: bool | None = None
    default_branch: str | None = None
    allow_squash_merge: bool | None = None
    allow_merge_commit: bool | None = None
    allow_rebase_merge: bool | None = None
    archived: bool | None = None


@dataclass(frozen=True)
class FromTemplateRepo:
    name: str
    owner: str | None = None
    description: str | None = None
    private: bool | None = None


Payload = Union[NewRepo, EditRepo, FromTemplateRepo]


def to_json(payload: Payload) -> dict[str, Any]:
    """
    Return the JSON object for a payload, omitting unset (None) fields.
    Key order follows the field declaration order.
    """
    out: dict[str, Any] = {}
    for f in fields(payload):
        value = getattr(payload, f.name)
        if value is not None:
            out[f.name] = value
    return out


def encode(value: Payload | dict[str, Any]) -> bytes:
    obj = value if isinstance(value, dict) else to_json(value)
    return json.dumps(obj, separators=(",", ":")).encode("utf-8")


def payload_from_mapping(cls: type, raw: dict[str, Any]) -> Any:
    """
    Build a payload record from a plain mapping (e.g. parsed YAML/JSON).
    Unknown keys are rejected so typos do not get silently dropped.
    """
    known = {f.name for f in fields(cls)}
    unknown = sorted(str(k) for k in raw if k not in known)
    if unknown:
        raise ValueError(f"Unknown {cls.__name__} field(s): {', '.join(unknown)}")
    return cls(**raw)
