"""
cli.py

Responsibility: CLI entrypoint for ghrepos.

Each subcommand maps to one endpoint builder:
1) Build a `Request` from the arguments (`endpoints.py`)
2) Either print it (`--dry-run`, via `renderer.py`) or run it (`executor.py`)
3) Print the decoded JSON result

Keep concerns isolated:
- Request shaping: `endpoints.py`
- Settings: `config.py`
- HTTP: `executor.py`
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Callable

import yaml

from ghrepos import endpoints
from ghrepos.config import ClientConfig, ConfigError, load_config
from ghrepos.data import EditRepo, FromTemplateRepo, NewRepo, RepoPublicity, payload_from_mapping
from ghrepos.executor import Executor, GitHubError
from ghrepos.renderer import FORMATS, RenderError, render_request
from ghrepos.request import FETCH_ALL, Capability, FetchAtLeast, FetchCount, Request


class CLIError(RuntimeError):
    pass


def _fetch_count(args: argparse.Namespace) -> FetchCount:
    if args.limit is None:
        return FETCH_ALL
    if args.limit < 1:
        raise CLIError("--limit must be a positive integer")
    return FetchAtLeast(args.limit)


def _load_payload_file(path: str | None) -> dict[str, Any]:
    if path is None:
        return {}
    p = Path(path)
    if not p.exists():
        raise CLIError(f"Payload file does not exist: {p}")
    try:
        data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise CLIError(f"Payload file is not valid YAML/JSON: {p}") from e
    if not isinstance(data, dict):
        raise CLIError("Payload file must contain a mapping/object.")
    return data


def _payload(cls: type, args: argparse.Namespace, flags: dict[str, Any]) -> Any:
    """
    Merge the optional payload file with explicit flags (flags win; unset flags are ignored).
    """
    raw = _load_payload_file(args.payload)
    raw.update({k: v for k, v in flags.items() if v is not None})
    try:
        return payload_from_mapping(cls, raw)
    except (TypeError, ValueError) as e:
        raise CLIError(f"Invalid {cls.__name__} payload: {e}") from e


# Request builders per subcommand


def list_req(args: argparse.Namespace) -> Request:
    publicity = RepoPublicity(args.type)
    if args.user and args.org:
        raise CLIError("--user and --org are mutually exclusive")
    if args.user:
        return endpoints.user_repos(args.user, publicity, _fetch_count(args))
    if args.org:
        return endpoints.organization_repos(args.org, publicity, _fetch_count(args))
    return endpoints.current_user_repos(publicity, _fetch_count(args))


def get_req(args: argparse.Namespace) -> Request:
    return endpoints.repository(args.owner, args.repo)


def create_req(args: argparse.Namespace) -> Request:
    new_repo = _payload(
        NewRepo,
        args,
        {
            "name": args.name,
            "description": args.description,
            "homepage": args.homepage,
            "private": args.private,
            "auto_init": args.auto_init,
            "gitignore_template": args.gitignore_template,
            "license_template": args.license_template,
        },
    )
    if args.org:
        return endpoints.create_organization_repo(args.org, new_repo)
    return endpoints.create_repo(new_repo)


def create_from_template_req(args: argparse.Namespace) -> Request:
    from_template = _payload(
        FromTemplateRepo,
        args,
        {
            "name": args.name,
            "owner": args.new_owner,
            "description": args.description,
            "private": args.private,
        },
    )
    return endpoints.create_repo_from_template(args.owner, args.template, from_template)


def fork_req(args: argparse.Namespace) -> Request:
    return endpoints.fork_existing_repo(args.owner, args.repo, args.org)


def edit_req(args: argparse.Namespace) -> Request:
    edit = _payload(
        EditRepo,
        args,
        {
            "name": args.name,
            "description": args.description,
            "homepage": args.homepage,
            "private": args.private,
            "default_branch": args.default_branch,
            "archived": args.archived,
        },
    )
    return endpoints.edit_repo(args.owner, args.repo, edit)


def delete_req(args: argparse.Namespace) -> Request:
    return endpoints.delete_repo(args.owner, args.repo)


def contributors_req(args: argparse.Namespace) -> Request:
    return endpoints.contributors(args.owner, args.repo, bool(args.anon), _fetch_count(args))


def languages_req(args: argparse.Namespace) -> Request:
    return endpoints.languages_for(args.owner, args.repo)


def tags_req(args: argparse.Namespace) -> Request:
    return endpoints.tags_for(args.owner, args.repo, _fetch_count(args))


def branches_req(args: argparse.Namespace) -> Request:
    return endpoints.branches_for(args.owner, args.repo, _fetch_count(args))


def _executor(config: ClientConfig, *, read_only: bool) -> Executor:
    capability = Capability.RO if (read_only or config.read_only) else Capability.RW
    return Executor(
        config.token,
        config.api_base,
        capability=capability,
        user_agent=config.user_agent,
        per_page=config.per_page,
    )


def run_cmd(args: argparse.Namespace) -> int:
    build: Callable[[argparse.Namespace], Request] = args.build
    request = build(args)

    try:
        config = load_config(args.config)
    except ConfigError as e:
        raise CLIError(str(e)) from e

    if args.dry_run:
        try:
            sys.stdout.write(render_request(request, args.format, api_base=config.api_base, user_agent=config.user_agent))
        except RenderError as e:
            raise CLIError(str(e)) from e
        return 0

    with _executor(config, read_only=bool(args.read_only)) as ex:
        try:
            result = ex.execute(request)
        except GitHubError as e:
            raise CLIError(str(e)) from e

    if result is not None:
        sys.stdout.write(json.dumps(result, indent=2) + "\n")
    return 0


def _add_owner_repo(p: argparse.ArgumentParser) -> None:
    p.add_argument("owner", help="Repository owner (user or org)")
    p.add_argument("repo", help="Repository name")


def _add_limit(p: argparse.ArgumentParser) -> None:
    p.add_argument("--limit", type=int, default=None, help="Stop paging once at least N items were fetched")


def _add_visibility(p: argparse.ArgumentParser) -> None:
    p.add_argument("--private", dest="private", action="store_true", default=None, help="Make the repo private")
    p.add_argument("--public", dest="private", action="store_false", default=None, help="Make the repo public")


def _build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--dry-run", action="store_true", help="Print the request instead of sending it")
    common.add_argument("--format", choices=FORMATS, default="json", help="Dry-run output format (default: json)")
    common.add_argument("--read-only", action="store_true", help="Refuse requests that modify repositories")

    p = argparse.ArgumentParser(prog="ghrepos", description="ghrepos - GitHub repository endpoints from the command line")
    p.add_argument("--config", default=None, help="Path to a YAML config file")
    p.add_argument("-v", "--verbose", action="store_true", help="Log HTTP activity")
    sub = p.add_subparsers(dest="command", required=True)

    s = sub.add_parser("list", parents=[common], help="List repositories")
    s.add_argument("--user", default=None, help="List repositories of this user")
    s.add_argument("--org", default=None, help="List repositories of this organization")
    s.add_argument("--type", choices=[v.value for v in RepoPublicity], default=RepoPublicity.ALL.value)
    _add_limit(s)
    s.set_defaults(build=list_req)

    s = sub.add_parser("get", parents=[common], help="Show one repository")
    _add_owner_repo(s)
    s.set_defaults(build=get_req)

    s = sub.add_parser("create", parents=[common], help="Create a repository")
    s.add_argument("name", nargs="?", default=None, help="Repository name (or set it in --payload)")
    s.add_argument("--org", default=None, help="Create under this organization")
    s.add_argument("--description", default=None)
    s.add_argument("--homepage", default=None)
    _add_visibility(s)
    s.add_argument("--auto-init", action="store_true", default=None, help="Create an initial commit")
    s.add_argument("--gitignore-template", default=None)
    s.add_argument("--license-template", default=None)
    s.add_argument("--payload", default=None, help="YAML/JSON file with NewRepo fields")
    s.set_defaults(build=create_req)

    s = sub.add_parser("create-from-template", parents=[common], help="Create a repository from a template")
    s.add_argument("owner", help="Template repository owner")
    s.add_argument("template", help="Template repository name")
    s.add_argument("name", nargs="?", default=None, help="New repository name")
    s.add_argument("--new-owner", default=None, help="Owner of the new repository")
    s.add_argument("--description", default=None)
    _add_visibility(s)
    s.add_argument("--payload", default=None, help="YAML/JSON file with FromTemplateRepo fields")
    s.set_defaults(build=create_from_template_req)

    s = sub.add_parser("fork", parents=[common], help="Fork a repository")
    _add_owner_repo(s)
    s.add_argument("--org", default=None, help="Fork into this organization")
    s.set_defaults(build=fork_req)

    s = sub.add_parser("edit", parents=[common], help="Edit a repository")
    _add_owner_repo(s)
    s.add_argument("--name", default=None, help="Rename the repository")
    s.add_argument("--description", default=None)
    s.add_argument("--homepage", default=None)
    _add_visibility(s)
    s.add_argument("--default-branch", default=None)
    s.add_argument("--archived", dest="archived", action="store_true", default=None)
    s.add_argument("--unarchived", dest="archived", action="store_false", default=None)
    s.add_argument("--payload", default=None, help="YAML/JSON file with EditRepo fields")
    s.set_defaults(build=edit_req)

    s = sub.add_parser("delete", parents=[common], help="Delete a repository")
    _add_owner_repo(s)
    s.set_defaults(build=delete_req)

    s = sub.add_parser("contributors", parents=[common], help="List contributors")
    _add_owner_repo(s)
    s.add_argument("--anon", action="store_true", help="Include anonymous contributors")
    _add_limit(s)
    s.set_defaults(build=contributors_req)

    s = sub.add_parser("languages", parents=[common], help="Show language breakdown")
    _add_owner_repo(s)
    s.set_defaults(build=languages_req)

    s = sub.add_parser("tags", parents=[common], help="List tags")
    _add_owner_repo(s)
    _add_limit(s)
    s.set_defaults(build=tags_req)

    s = sub.add_parser("branches", parents=[common], help="List branches")
    _add_owner_repo(s)
    _add_limit(s)
    s.set_defaults(build=branches_req)

    return p


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return int(run_cmd(args))
    except CLIError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
