"""
request.py

Responsibility: Define the inert request descriptor and its low-level constructors.

A `Request` describes one GitHub REST call without performing it:
- method, path segments, query string and (optional) encoded body
- a capability tag (read-only vs read-write)
- the shape of the expected response (record, sequence, or no content)

Endpoint modules build descriptors through `query`, `paged_query` and `command`.
Executing them is the job of `executor.py`.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple, Union
from urllib.parse import quote

QueryString = Tuple[Tuple[str, Optional[str]], ...]


class Method(str, enum.Enum):
    GET = "GET"
    POST = "POST"
    PATCH = "PATCH"
    DELETE = "DELETE"


class Capability(enum.Enum):
    """What a request is allowed to do to server state."""

    RO = "ro"
    RW = "rw"


class ResponseShape(enum.Enum):
    RECORD = "record"
    SEQUENCE = "sequence"
    NO_CONTENT = "no-content"


@dataclass(frozen=True)
class FetchAll:
    """Follow pagination until the last page."""


@dataclass(frozen=True)
class FetchAtLeast:
    """Stop following pagination once at least `count` items were collected."""

    count: int


FetchCount = Union[FetchAll, FetchAtLeast]

FETCH_ALL = FetchAll()


@dataclass(frozen=True)
class Request:
    method: Method
    paths: tuple[str, ...]
    query: QueryString = ()
    body: bytes | None = None
    capability: Capability = Capability.RO
    shape: ResponseShape = ResponseShape.RECORD
    fetch_count: FetchCount | None = None

    @property
    def url_path(self) -> str:
        return "/" + "/".join(self.paths)

    @property
    def is_paged(self) -> bool:
        return self.fetch_count is not None

    @property
    def has_body(self) -> bool:
        return bool(self.body)


def to_path_part(name: str) -> str:
    """
    Encode an identifier as a single URL path segment.

    Everything outside the RFC 3986 unreserved set is percent-encoded, so a
    name can never introduce extra segments (`/`), a query (`?`) or a fragment (`#`).
    """
    return quote(str(name), safe="")


def _query_string(qs: Iterable[tuple[str, str | None]]) -> QueryString:
    return tuple((k, v) for k, v in qs)


def query(paths: Iterable[str], qs: Iterable[tuple[str, str | None]]) -> Request:
    return Request(method=Method.GET, paths=tuple(paths), query=_query_string(qs))


def paged_query(
    paths: Iterable[str],
    qs: Iterable[tuple[str, str | None]],
    fetch_count: FetchCount,
) -> Request:
    return Request(
        method=Method.GET,
        paths=tuple(paths),
        query=_query_string(qs),
        shape=ResponseShape.SEQUENCE,
        fetch_count=fetch_count,
    )


def command(
    method: Method,
    paths: Iterable[str],
    body: bytes,
    *,
    shape: ResponseShape = ResponseShape.RECORD,
) -> Request:
    """
    Build a mutating request. Commands are always tagged read-write.
    """
    return Request(
        method=method,
        paths=tuple(paths),
        body=body,
        capability=Capability.RW,
        shape=shape,
    )
