import dataclasses

import pytest

from ghrepos.request import (
    FETCH_ALL,
    Capability,
    FetchAtLeast,
    Method,
    Request,
    ResponseShape,
    command,
    paged_query,
    query,
    to_path_part,
)


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("Hello-World", "Hello-World"),
        ("dots.and_under~", "dots.and_under~"),
        ("with space", "with%20space"),
        ("a/b", "a%2Fb"),
        ("q?x#y", "q%3Fx%23y"),
        ("100%", "100%25"),
        ("..", ".."),
    ],
)
def test_to_path_part(name: str, expected: str) -> None:
    assert to_path_part(name) == expected


def test_query_is_read_only_record() -> None:
    req = query(["repos", "o", "r"], [])
    assert req == Request(method=Method.GET, paths=("repos", "o", "r"))
    assert req.capability is Capability.RO
    assert req.url_path == "/repos/o/r"


def test_paged_query_carries_fetch_count() -> None:
    req = paged_query(["user", "repos"], [("type", "all")], FetchAtLeast(3))
    assert req.is_paged
    assert req.fetch_count == FetchAtLeast(3)
    assert req.shape is ResponseShape.SEQUENCE
    assert req.query == (("type", "all"),)


def test_command_is_read_write() -> None:
    req = command(Method.POST, ["user", "repos"], b"{}")
    assert req.capability is Capability.RW
    assert req.has_body
    assert not req.is_paged


def test_request_is_immutable() -> None:
    req = paged_query(["user", "repos"], [], FETCH_ALL)
    with pytest.raises(dataclasses.FrozenInstanceError):
        req.method = Method.DELETE  # type: ignore[misc]
