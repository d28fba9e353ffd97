"""
renderer.py

Responsibility: Render a request descriptor as text for inspection.

Formats:
- `json`: a JSON summary of the descriptor
- `http`: the HTTP/1.1 request message that would be sent
- `curl`: an equivalent curl command line

This module intentionally does NOT know about HTTP sessions or the CLI.
"""

from __future__ import annotations

import json
import shlex
from urllib.parse import urlencode

from jinja2 import Environment, StrictUndefined

from ghrepos.executor import API_VERSION, DEFAULT_API_BASE, DEFAULT_USER_AGENT
from ghrepos.request import Request

FORMATS = ("json", "http", "curl")

_HTTP_TEMPLATE = """\
{{ method }} {{ target }} HTTP/1.1
Host: {{ host }}
User-Agent: {{ user_agent }}
Accept: application/vnd.github+json
X-GitHub-Api-Version: {{ api_version }}
Authorization: Bearer $GITHUB_TOKEN
{% if body %}Content-Type: application/json
Content-Length: {{ body_length }}
{% endif %}
{{ body }}"""

_CURL_TEMPLATE = """\
curl -X {{ method }} {{ url | shquote }} \\
  -H {{ ("User-Agent: " ~ user_agent) | shquote }} \\
  -H 'Accept: application/vnd.github+json' \\
  -H 'X-GitHub-Api-Version: {{ api_version }}' \\
  -H "Authorization: Bearer $GITHUB_TOKEN"
{%- if body %} \\
  -H 'Content-Type: application/json' \\
  --data {{ body | shquote }}
{%- endif %}
"""


class RenderError(RuntimeError):
    pass


def _environment() -> Environment:
    env = Environment(
        autoescape=False,
        undefined=StrictUndefined,
        keep_trailing_newline=True,
    )
    env.filters["shquote"] = shlex.quote
    return env


def _target(request: Request) -> str:
    qs = [(k, "" if v is None else v) for k, v in request.query]
    if not qs:
        return request.url_path
    return f"{request.url_path}?{urlencode(qs)}"


def _describe(request: Request) -> dict[str, object]:
    return {
        "method": request.method.value,
        "path": list(request.paths),
        "query": [[k, v] for k, v in request.query],
        "body": request.body.decode("utf-8") if request.has_body else None,
        "capability": request.capability.value,
        "shape": request.shape.value,
        "paged": request.is_paged,
    }


def render_request(
    request: Request,
    fmt: str = "json",
    *,
    api_base: str = DEFAULT_API_BASE,
    user_agent: str = DEFAULT_USER_AGENT,
) -> str:
    if fmt not in FORMATS:
        raise RenderError(f"Unknown format: {fmt!r} (expected one of {', '.join(FORMATS)})")

    if fmt == "json":
        return json.dumps(_describe(request), indent=2) + "\n"

    base = api_base.rstrip("/")
    host, _, prefix = base.split("://", 1)[-1].partition("/")
    body = request.body.decode("utf-8") if request.has_body else ""
    context = {
        "method": request.method.value,
        "target": f"/{prefix}{_target(request)}" if prefix else _target(request),
        "url": f"{base}{_target(request)}",
        "host": host,
        "user_agent": user_agent,
        "api_version": API_VERSION,
        "body": body,
        "body_length": len(request.body or b""),
    }
    source = _HTTP_TEMPLATE if fmt == "http" else _CURL_TEMPLATE
    try:
        return _environment().from_string(source).render(**context)
    except Exception as e:  # noqa: BLE001 - surface as RenderError
        raise RenderError(f"Failed rendering request as {fmt}") from e
