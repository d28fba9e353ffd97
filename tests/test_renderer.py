import json

import pytest

from ghrepos import endpoints
from ghrepos.data import RepoPublicity
from ghrepos.renderer import RenderError, render_request
from ghrepos.request import FETCH_ALL


def test_render_json() -> None:
    out = render_request(endpoints.contributors("octocat", "Hello-World", True, FETCH_ALL))
    data = json.loads(out)
    assert data == {
        "method": "GET",
        "path": ["repos", "octocat", "Hello-World", "contributors"],
        "query": [["anon", "true"]],
        "body": None,
        "capability": "ro",
        "shape": "sequence",
        "paged": True,
    }


def test_render_http_without_body() -> None:
    out = render_request(endpoints.current_user_repos(RepoPublicity.PUBLIC, FETCH_ALL), "http")
    lines = out.splitlines()
    assert lines[0] == "GET /user/repos?type=public HTTP/1.1"
    assert "Host: api.github.com" in lines
    assert "User-Agent: ghrepos" in lines
    assert "Authorization: Bearer $GITHUB_TOKEN" in lines
    assert "Content-Type" not in out
    # The header block is terminated by an empty line.
    assert out.endswith("\n\n")


def test_render_http_keeps_api_base_prefix() -> None:
    out = render_request(
        endpoints.repository("octocat", "Hello-World"),
        "http",
        api_base="https://ghe.example/api/v3/",
        user_agent="my-tool",
    )
    lines = out.splitlines()
    assert lines[0] == "GET /api/v3/repos/octocat/Hello-World HTTP/1.1"
    assert "Host: ghe.example" in lines
    assert "User-Agent: my-tool" in lines


def test_render_http_with_body() -> None:
    out = render_request(endpoints.fork_existing_repo("octocat", "Hello-World", "org"), "http")
    lines = out.splitlines()
    assert lines[0] == "POST /repos/octocat/Hello-World/forks HTTP/1.1"
    assert "Content-Type: application/json" in lines
    assert "Content-Length: 22" in lines
    assert lines[-1] == '{"organization":"org"}'


def test_render_curl() -> None:
    out = render_request(endpoints.delete_repo("octocat", "Hello-World"), "curl", api_base="https://ghe.example/api/v3/")
    assert out.startswith("curl -X DELETE https://ghe.example/api/v3/repos/octocat/Hello-World")
    assert "--data" not in out
    assert out.endswith('$GITHUB_TOKEN"\n')


def test_render_curl_with_body() -> None:
    out = render_request(endpoints.fork_existing_repo("octocat", "Hello-World", "org"), "curl")
    assert "--data '{\"organization\":\"org\"}'" in out


def test_render_unknown_format() -> None:
    with pytest.raises(RenderError):
        render_request(endpoints.repository("octocat", "Hello-World"), "xml")
