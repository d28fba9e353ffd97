"""
endpoints.py

Responsibility: Build request descriptors for the GitHub Repos API.

See <https://docs.github.com/en/rest/repos/repos>.

Every function here is pure: it only shapes data into a `Request`. Nothing is
sent, and no input is rejected at this layer; the executor and the server
deal with anything that goes wrong afterwards.
"""

from __future__ import annotations

from dataclasses import replace

from ghrepos.data import EditRepo, FromTemplateRepo, NewRepo, RepoPublicity, encode
from ghrepos.request import (
    FETCH_ALL,
    FetchCount,
    Method,
    QueryString,
    Request,
    ResponseShape,
    command,
    paged_query,
    query,
    to_path_part,
)

__all__ = [
    "current_user_repos",
    "user_repos",
    "organization_repos",
    "repository",
    "contributors",
    "languages_for",
    "tags_for",
    "branches_for",
    "create_repo",
    "create_organization_repo",
    "create_repo_from_template",
    "fork_existing_repo",
    "edit_repo",
    "delete_repo",
]


def _publicity_query(publicity: RepoPublicity) -> QueryString:
    return (("type", RepoPublicity(publicity).value),)


def _repo_path(owner: str, repo: str, *rest: str) -> list[str]:
    return ["repos", to_path_part(owner), to_path_part(repo), *rest]


# Querying repositories


def current_user_repos(publicity: RepoPublicity, fetch_count: FetchCount = FETCH_ALL) -> Request:
    """
    List repositories of the authenticated user.
    GET /user/repos
    """
    return paged_query(["user", "repos"], _publicity_query(publicity), fetch_count)


def user_repos(owner: str, publicity: RepoPublicity, fetch_count: FetchCount = FETCH_ALL) -> Request:
    """
    List public repositories of a user.
    GET /users/{owner}/repos
    """
    return paged_query(["users", to_path_part(owner), "repos"], _publicity_query(publicity), fetch_count)


def organization_repos(org: str, publicity: RepoPublicity, fetch_count: FetchCount = FETCH_ALL) -> Request:
    """
    List repositories of an organization.
    GET /orgs/{org}/repos
    """
    return paged_query(["orgs", to_path_part(org), "repos"], _publicity_query(publicity), fetch_count)


def repository(owner: str, repo: str) -> Request:
    """
    GET /repos/{owner}/{repo}
    """
    return query(_repo_path(owner, repo), [])


def contributors(owner: str, repo: str, anonymous: bool, fetch_count: FetchCount = FETCH_ALL) -> Request:
    """
    List contributors. With `anonymous`, contributors without a GitHub
    account are included too (`anon=true`).
    GET /repos/{owner}/{repo}/contributors
    """
    qs: QueryString = (("anon", "true"),) if anonymous else ()
    return paged_query(_repo_path(owner, repo, "contributors"), qs, fetch_count)


def languages_for(owner: str, repo: str) -> Request:
    """
    Languages of a repository, as a mapping of language name to bytes of code.
    GET /repos/{owner}/{repo}/languages
    """
    return query(_repo_path(owner, repo, "languages"), [])


def tags_for(owner: str, repo: str, fetch_count: FetchCount = FETCH_ALL) -> Request:
    return paged_query(_repo_path(owner, repo, "tags"), [], fetch_count)


def branches_for(owner: str, repo: str, fetch_count: FetchCount = FETCH_ALL) -> Request:
    return paged_query(_repo_path(owner, repo, "branches"), [], fetch_count)


# Create


def create_repo(new_repo: NewRepo) -> Request:
    """
    Create a repository for the authenticated user.
    POST /user/repos
    """
    return command(Method.POST, ["user", "repos"], encode(new_repo))


def create_organization_repo(org: str, new_repo: NewRepo) -> Request:
    """
    POST /orgs/{org}/repos
    """
    return command(Method.POST, ["orgs", to_path_part(org), "repos"], encode(new_repo))


def create_repo_from_template(owner: str, template: str, from_template: FromTemplateRepo) -> Request:
    """
    Create a repository from the template repository `owner/template`.
    POST /repos/{owner}/{template}/generate
    """
    return command(Method.POST, _repo_path(owner, template, "generate"), encode(from_template))


def fork_existing_repo(owner: str, repo: str, organization: str | None = None) -> Request:
    """
    Fork `owner/repo` into the authenticated user's account, or into
    `organization` when one is given.
    POST /repos/{owner}/{repo}/forks
    """
    if organization is None:
        body = b""
    else:
        body = encode({"organization": organization})
    return command(Method.POST, _repo_path(owner, repo, "forks"), body)


# Edit


def edit_repo(owner: str, repo: str, edit: EditRepo) -> Request:
    """
    PATCH /repos/{owner}/{repo}

    The API treats `name` as a rename, so when the caller leaves it unset
    the current repository name is sent instead.
    """
    if edit.name is None:
        edit = replace(edit, name=repo)
    return command(Method.PATCH, _repo_path(owner, repo), encode(edit))


# Delete


def delete_repo(owner: str, repo: str) -> Request:
    """
    DELETE /repos/{owner}/{repo}
    """
    return command(Method.DELETE, _repo_path(owner, repo), b"", shape=ResponseShape.NO_CONTENT)
