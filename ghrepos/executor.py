"""
executor.py

Responsibility: Run request descriptors against the GitHub REST API.

This module must be the only place that:
- Sends HTTP requests to api.github.com
- Follows pagination for paged queries
- Interprets GitHub API responses / error payloads

Descriptors are built elsewhere (`endpoints.py`); this module never shapes paths or bodies.
"""

from __future__ import annotations

import logging
from typing import Any

import requests

from ghrepos.request import Capability, FetchAtLeast, Request, ResponseShape

logger = logging.getLogger(__name__)

DEFAULT_API_BASE = "https://api.github.com"
DEFAULT_USER_AGENT = "ghrepos"
API_VERSION = "2022-11-28"


class GitHubError(RuntimeError):
    def __init__(self, message: str, *, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class CapabilityError(GitHubError):
    pass


class Executor:
    def __init__(
        self,
        token: str | None = None,
        api_base: str = DEFAULT_API_BASE,
        *,
        capability: Capability = Capability.RW,
        user_agent: str = DEFAULT_USER_AGENT,
        per_page: int = 100,
        timeout: float = 30,
        session: requests.Session | None = None,
    ) -> None:
        self._token = (token or "").strip() or None
        self._api_base = api_base.rstrip("/")
        self._capability = capability
        self._user_agent = user_agent
        self._per_page = per_page
        self._timeout = timeout
        self._session = session or requests.Session()

    def __enter__(self) -> Executor:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._session.close()

    @property
    def capability(self) -> Capability:
        return self._capability

    def _headers(self, *, with_body: bool) -> dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": API_VERSION,
            "User-Agent": self._user_agent,
        }
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        if with_body:
            headers["Content-Type"] = "application/json"
        return headers

    def _send(
        self,
        request: Request,
        url: str,
        params: list[tuple[str, str | None]] | None,
    ) -> requests.Response:
        logger.debug("%s %s", request.method.value, url)
        try:
            r = self._session.request(
                request.method.value,
                url,
                params=params,
                headers=self._headers(with_body=request.has_body),
                data=request.body if request.has_body else None,
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            logger.warning("Request failed %s %s: %s", request.method.value, request.url_path, e)
            raise GitHubError(f"Request failed {request.method.value} {request.url_path}: {e}") from e
        if r.status_code >= 400:
            try:
                payload = r.json()
            except ValueError:
                payload = {"message": r.text}
            message = payload.get("message", payload) if isinstance(payload, dict) else payload
            logger.warning("GitHub API error %s %s %s", r.status_code, request.method.value, request.url_path)
            raise GitHubError(
                f"GitHub API error {r.status_code} {request.method.value} {request.url_path}: {message}",
                status=r.status_code,
            )
        return r

    def _decode(self, request: Request, r: requests.Response) -> Any:
        try:
            return r.json()
        except ValueError as e:
            raise GitHubError(
                f"Response from {request.method.value} {request.url_path} is not JSON",
                status=r.status_code,
            ) from e

    def execute(self, request: Request) -> Any:
        """
        Execute a descriptor and return the decoded JSON result.

        - NO_CONTENT requests return None.
        - Paged queries return one list aggregated across pages.
        """
        if request.capability is Capability.RW and self._capability is Capability.RO:
            raise CapabilityError(
                f"Refusing {request.method.value} {request.url_path}: executor is read-only"
            )

        url = f"{self._api_base}{request.url_path}"
        params = [(k, v) for k, v in request.query]

        if request.is_paged:
            return self._execute_paged(request, url, params)

        r = self._send(request, url, params or None)
        if request.shape is ResponseShape.NO_CONTENT or r.status_code == 204 or not r.content:
            return None
        return self._decode(request, r)

    def _execute_paged(
        self,
        request: Request,
        url: str,
        params: list[tuple[str, str | None]],
    ) -> list[Any]:
        limit = request.fetch_count.count if isinstance(request.fetch_count, FetchAtLeast) else None
        items: list[Any] = []
        next_url: str | None = url
        next_params: list[tuple[str, str | None]] | None = [*params, ("per_page", str(self._per_page))]
        pages = 0

        while next_url is not None:
            r = self._send(request, next_url, next_params)
            page = self._decode(request, r)
            if not isinstance(page, list):
                raise GitHubError(f"Expected a JSON array from {request.url_path}, got {type(page).__name__}")
            items.extend(page)
            pages += 1
            logger.debug("Fetched page %d of %s (%d items so far)", pages, request.url_path, len(items))

            if limit is not None and len(items) >= limit:
                break
            # The `next` link already carries the full query string.
            next_url = r.links.get("next", {}).get("url")
            next_params = None

        return items
