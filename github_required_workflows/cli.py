"""CLI commands for managing required workflows."""

import argparse
import dataclasses
import json
import logging
import sys
from datetime import datetime

from .encoding import format_timestamp


def _add_paging(parser):
    parser.add_argument("--page", type=int, default=None, help="Page number (1-based)")
    parser.add_argument("--per-page", type=int, default=None, help="Results per page (max 100)")


def _add_workflow_fields(parser):
    parser.add_argument("--path", dest="workflow_file_path", default=None, help="Workflow file path")
    parser.add_argument(
        "--repository-id",
        type=int,
        default=None,
        help="ID of the repository that contains the workflow file",
    )
    parser.add_argument("--scope", choices=["all", "selected"], default=None, help="Which repositories run it")
    parser.add_argument(
        "--selected-repository-id",
        dest="selected_repository_ids",
        type=int,
        action="append",
        default=None,
        metavar="ID",
        help="Repository to run it on when scope is 'selected' (repeatable)",
    )


def _json_default(value):
    if isinstance(value, datetime):
        return format_timestamp(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _emit(result) -> int:
    if result.error is not None:
        status = result.response.status
        prefix = f"HTTP {status}: " if status is not None else ""
        print(f"Error: {prefix}{result.error}", file=sys.stderr)
        return 1
    if result.value is None:
        print(f"Done (HTTP {result.response.status})", file=sys.stderr)
        return 0
    json.dump(dataclasses.asdict(result.value), sys.stdout, indent=2, default=_json_default)
    sys.stdout.write("\n")
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Manage GitHub Actions required workflows",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--api-url",
        default=None,
        help="API base URL (default: $GITHUB_API_URL or https://api.github.com)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log HTTP requests to stderr")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    list_org_parser = subparsers.add_parser("list-org", help="List an organization's required workflows")
    list_org_parser.add_argument("org", help="Organization login")
    _add_paging(list_org_parser)

    create_parser = subparsers.add_parser("create", help="Create a required workflow")
    create_parser.add_argument("org", help="Organization login")
    _add_workflow_fields(create_parser)

    get_parser = subparsers.add_parser("get", help="Get a required workflow by ID")
    get_parser.add_argument("org", help="Organization login")
    get_parser.add_argument("workflow_id", type=int, help="Required workflow ID")

    update_parser = subparsers.add_parser("update", help="Update a required workflow")
    update_parser.add_argument("org", help="Organization login")
    update_parser.add_argument("workflow_id", type=int, help="Required workflow ID")
    _add_workflow_fields(update_parser)

    delete_parser = subparsers.add_parser("delete", help="Delete a required workflow")
    delete_parser.add_argument("org", help="Organization login")
    delete_parser.add_argument("workflow_id", type=int, help="Required workflow ID")

    list_repos_parser = subparsers.add_parser(
        "list-repos",
        help="List repositories selected for a required workflow",
    )
    list_repos_parser.add_argument("org", help="Organization login")
    list_repos_parser.add_argument("workflow_id", type=int, help="Required workflow ID")
    _add_paging(list_repos_parser)

    set_repos_parser = subparsers.add_parser(
        "set-repos",
        help="Replace the repositories selected for a required workflow",
    )
    set_repos_parser.add_argument("org", help="Organization login")
    set_repos_parser.add_argument("workflow_id", type=int, help="Required workflow ID")
    set_repos_parser.add_argument("repo_ids", type=int, nargs="*", metavar="REPO_ID", help="Repository IDs")

    add_repo_parser = subparsers.add_parser("add-repo", help="Add a repository to a required workflow")
    add_repo_parser.add_argument("org", help="Organization login")
    add_repo_parser.add_argument("workflow_id", type=int, help="Required workflow ID")
    add_repo_parser.add_argument("repo_id", type=int, help="Repository ID")

    remove_repo_parser = subparsers.add_parser(
        "remove-repo",
        help="Remove a repository from a required workflow",
    )
    remove_repo_parser.add_argument("org", help="Organization login")
    remove_repo_parser.add_argument("workflow_id", type=int, help="Required workflow ID")
    remove_repo_parser.add_argument("repo_id", type=int, help="Repository ID")

    list_repo_parser = subparsers.add_parser(
        "list-repo",
        help="List the required workflows that run on a repository",
    )
    list_repo_parser.add_argument("owner", help="Repository owner")
    list_repo_parser.add_argument("repo", help="Repository name")
    _add_paging(list_repo_parser)

    get_repo_parser = subparsers.add_parser(
        "get-repo",
        help="Get a required workflow as seen from a repository",
    )
    get_repo_parser.add_argument("owner", help="Repository owner")
    get_repo_parser.add_argument("repo", help="Repository name")
    get_repo_parser.add_argument("workflow_id", type=int, help="Required workflow ID")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    from . import rest
    from .models import CreateUpdateRequiredWorkflowOptions, ListOptions

    client = rest.get_client(base_url=args.api_url)
    actions = client.actions

    if args.command in ("list-org", "list-repos", "list-repo"):
        opts = ListOptions(page=args.page, per_page=args.per_page)
    elif args.command in ("create", "update"):
        opts = CreateUpdateRequiredWorkflowOptions(
            workflow_file_path=args.workflow_file_path,
            repository_id=args.repository_id,
            scope=args.scope,
            selected_repository_ids=args.selected_repository_ids,
        )

    if args.command == "list-org":
        result = actions.list_org_required_workflows(args.org, opts)
    elif args.command == "create":
        result = actions.create_required_workflow(args.org, opts)
    elif args.command == "get":
        result = actions.get_required_workflow_by_id(args.org, args.workflow_id)
    elif args.command == "update":
        result = actions.update_required_workflow(args.org, args.workflow_id, opts)
    elif args.command == "delete":
        result = actions.delete_required_workflow(args.org, args.workflow_id)
    elif args.command == "list-repos":
        result = actions.list_required_workflow_selected_repos(args.org, args.workflow_id, opts)
    elif args.command == "set-repos":
        result = actions.set_required_workflow_selected_repos(args.org, args.workflow_id, args.repo_ids)
    elif args.command == "add-repo":
        result = actions.add_repo_to_required_workflow(args.org, args.workflow_id, args.repo_id)
    elif args.command == "remove-repo":
        result = actions.remove_repo_from_required_workflow(args.org, args.workflow_id, args.repo_id)
    elif args.command == "list-repo":
        result = actions.list_repo_required_workflows(args.owner, args.repo, opts)
    else:
        result = actions.get_repo_required_workflow(args.owner, args.repo, args.workflow_id)

    return _emit(result)


if __name__ == "__main__":
    sys.exit(main())
