"""CLI commands for issue, pull request and search lookups."""

import asyncio
import os
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..github_client.errors import RequestError
from ..github_client.github import GitHubLink
from ..github_client.models import IssueResponse, PaginationMeta, PullResponse
from ..query.types import QueryParams, QueryType
from ..settings.models import GithubAccount, PluginSettings
from ..settings.storage import SettingsStore
from .options import (
    ASSIGNEE_OPTION,
    CREATOR_OPTION,
    DIRECTION_OPTION,
    FILTER_OPTION,
    LABELS_OPTION,
    ORDER_OPTION,
    ORG_OPTION,
    PAGE_OPTION,
    PER_PAGE_OPTION,
    REPO_OPTION,
    SETTINGS_OPTION,
    SKIP_CACHE_OPTION,
    SORT_OPTION,
    STATE_OPTION,
    TYPE_OPTION,
)

console = Console()

T = TypeVar("T")

ENV_ACCOUNT_ID = "env"
QUERY_TYPES = {"issue": QueryType.ISSUE, "pr": QueryType.PULL_REQUEST}


def load_settings(settings_path: str | None) -> PluginSettings:
    """Load settings, adding a GITHUB_TOKEN account when no default is set."""
    settings = SettingsStore(settings_path).load()
    env_token = os.getenv("GITHUB_TOKEN")
    if env_token and settings.default_account is None:
        settings.accounts.append(
            GithubAccount(id=ENV_ACCOUNT_ID, name="GITHUB_TOKEN", token=env_token)
        )
        settings.default_account = ENV_ACCOUNT_ID
    return settings


def run_with_link(
    settings_path: str | None, action: Callable[[GitHubLink], Awaitable[T]]
) -> T:
    """Run an async lookup against a GitHubLink built from settings."""
    try:
        settings = load_settings(settings_path)
    except ValidationError as e:
        console.print(f"❌ Invalid settings file: {escape(str(e))}")
        raise typer.Exit(1)

    async def runner() -> T:
        link = GitHubLink(settings)
        try:
            return await action(link)
        finally:
            await link.aclose()

    try:
        return asyncio.run(runner())
    except RequestError as e:
        console.print(f"❌ GitHub request failed ({e.status}): {escape(str(e))}")
        raise typer.Exit(1)


def parse_filters(filters: list[str] | None) -> dict[str, str]:
    """Parse ``name=value`` qualifier filters, keeping their order."""
    parsed: dict[str, str] = {}
    for item in filters or []:
        name, sep, value = item.partition("=")
        if not sep or not name.strip():
            console.print(f"❌ Invalid filter '{item}'. Expected format: name=value")
            raise typer.Exit(1)
        parsed[name.strip()] = value
    return parsed


def _issue_rows(issues: list[IssueResponse]) -> Table:
    table = Table(title="Issues")
    table.add_column("#", justify="right")
    table.add_column("Title")
    table.add_column("State")
    table.add_column("URL", style="cyan")
    for issue in issues:
        table.add_row(str(issue.number), issue.title, issue.state, issue.html_url)
    return table


def _pull_rows(pulls: list[PullResponse]) -> Table:
    table = Table(title="Pull Requests")
    table.add_column("#", justify="right")
    table.add_column("Title")
    table.add_column("State")
    table.add_column("URL", style="cyan")
    for pull in pulls:
        table.add_row(str(pull.number), pull.title, pull.state, pull.html_url)
    return table


def _print_pagination(meta: PaginationMeta) -> None:
    if meta.next is not None:
        console.print(f"Next page: {meta.next} (last: {meta.last})")


def _query_params(**fields: Any) -> QueryParams:
    return QueryParams(**{k: v for k, v in fields.items() if v is not None})


def issue(
    org: str = typer.Argument(..., help="Organization or user"),
    repo: str = typer.Argument(..., help="Repository name"),
    number: int = typer.Argument(..., help="Issue number"),
    skip_cache: bool = SKIP_CACHE_OPTION,
    settings: str | None = SETTINGS_OPTION,
) -> None:
    """Show a single issue."""
    result = run_with_link(
        settings, lambda link: link.get_issue(org, repo, number, skip_cache)
    )
    console.print(_issue_rows([result]))


def pull(
    org: str = typer.Argument(..., help="Organization or user"),
    repo: str = typer.Argument(..., help="Repository name"),
    number: int = typer.Argument(..., help="Pull request number"),
    skip_cache: bool = SKIP_CACHE_OPTION,
    settings: str | None = SETTINGS_OPTION,
) -> None:
    """Show a single pull request."""
    result = run_with_link(
        settings, lambda link: link.get_pull_request(org, repo, number, skip_cache)
    )
    console.print(_pull_rows([result]))


def issues(
    org: str | None = ORG_OPTION,
    repo: str | None = REPO_OPTION,
    mine: bool = typer.Option(
        False, "--mine", help="Issues of the account token's user"
    ),
    state: str | None = STATE_OPTION,
    labels: list[str] | None = LABELS_OPTION,
    assignee: str | None = ASSIGNEE_OPTION,
    creator: str | None = CREATOR_OPTION,
    sort: str | None = SORT_OPTION,
    direction: str | None = DIRECTION_OPTION,
    page: int | None = PAGE_OPTION,
    per_page: int | None = PER_PAGE_OPTION,
    skip_cache: bool = SKIP_CACHE_OPTION,
    settings: str | None = SETTINGS_OPTION,
) -> None:
    """List issues for a repository, an organization or your own token.

    Examples:
        gh-link issues --org my-org --repo my-repo --state open
        gh-link issues --org my-org --labels bug --labels triage
        gh-link issues --mine
    """
    params = _query_params(
        query_type=QueryType.ISSUE,
        org=org,
        state=state,
        labels=labels or None,
        assignee=assignee,
        creator=creator,
        sort=sort,
        direction=direction,
        page=page,
        per_page=per_page,
    )

    if mine:
        result = run_with_link(
            settings, lambda link: link.get_my_issues(params, org, skip_cache)
        )
    elif org and repo:
        result = run_with_link(
            settings,
            lambda link: link.get_issues_for_repo(params, org, repo, skip_cache),
        )
    elif org:
        result = run_with_link(
            settings,
            lambda link: link.get_issues_for_organization(params, org, skip_cache),
        )
    else:
        console.print("❌ Error: --org is required unless --mine is given")
        raise typer.Exit(1)

    if not result.response:
        console.print("No issues found")
        return
    console.print(_issue_rows(result.response))
    _print_pagination(result.meta)


def pulls(
    org: str = typer.Argument(..., help="Organization or user"),
    repo: str = typer.Argument(..., help="Repository name"),
    state: str | None = STATE_OPTION,
    sort: str | None = SORT_OPTION,
    direction: str | None = DIRECTION_OPTION,
    page: int | None = PAGE_OPTION,
    per_page: int | None = PER_PAGE_OPTION,
    skip_cache: bool = SKIP_CACHE_OPTION,
    settings: str | None = SETTINGS_OPTION,
) -> None:
    """List pull requests for a repository."""
    params = _query_params(
        query_type=QueryType.PULL_REQUEST,
        state=state,
        sort=sort,
        direction=direction,
        page=page,
        per_page=per_page,
    )
    result = run_with_link(
        settings,
        lambda link: link.get_pull_requests_for_repo(params, org, repo, skip_cache),
    )
    if not result.response:
        console.print("No pull requests found")
        return
    console.print(_pull_rows(result.response))
    _print_pagination(result.meta)


def search(
    query: str = typer.Argument("", help="Search terms and qualifiers"),
    query_type: str = TYPE_OPTION,
    filters: list[str] | None = FILTER_OPTION,
    org: str | None = ORG_OPTION,
    sort: str | None = SORT_OPTION,
    order: str | None = ORDER_OPTION,
    page: int | None = PAGE_OPTION,
    per_page: int | None = PER_PAGE_OPTION,
    skip_cache: bool = SKIP_CACHE_OPTION,
    settings: str | None = SETTINGS_OPTION,
) -> None:
    """Search issues or pull requests.

    Examples:
        gh-link search "repo:my-org/my-repo is:open"
        gh-link search bug --type pr --filter 'reason=not planned'
    """
    if query_type not in QUERY_TYPES:
        console.print(f"❌ Invalid type '{query_type}'. Expected: issue or pr")
        raise typer.Exit(1)

    parsed_filters = parse_filters(filters)
    search_query: str | dict[str, str] = query
    if parsed_filters:
        search_query = {"search": query, **parsed_filters}

    params = _query_params(
        query=search_query,
        query_type=QUERY_TYPES[query_type],
        org=org,
        sort=sort,
        order=order,
        page=page,
        per_page=per_page,
    )
    result = run_with_link(
        settings, lambda link: link.search_issues(params, skip_cache)
    )

    console.print(f"Found {result.response.total_count} results")
    if result.response.items:
        console.print(_issue_rows(result.response.items))
    _print_pagination(result.meta)


def checks(
    org: str = typer.Argument(..., help="Organization or user"),
    repo: str = typer.Argument(..., help="Repository name"),
    ref: str = typer.Argument(..., help="Commit SHA, branch or tag"),
    skip_cache: bool = SKIP_CACHE_OPTION,
    settings: str | None = SETTINGS_OPTION,
) -> None:
    """List check runs for a ref."""
    result = run_with_link(
        settings, lambda link: link.list_check_runs_for_ref(org, repo, ref, skip_cache)
    )
    table = Table(title=f"Check runs for {ref}")
    table.add_column("Name")
    table.add_column("Status")
    table.add_column("Conclusion")
    for run in result.check_runs:
        table.add_row(run.name, run.status, run.conclusion or "-")
    console.print(table)


def linked_pr(
    timeline_url: str = typer.Argument(..., help="API URL of the issue timeline"),
    org: str | None = ORG_OPTION,
    skip_cache: bool = SKIP_CACHE_OPTION,
    settings: str | None = SETTINGS_OPTION,
) -> None:
    """Show the pull request that references an issue."""
    url = run_with_link(
        settings, lambda link: link.get_pr_for_issue(timeline_url, org, skip_cache)
    )
    if url is None:
        console.print("No linked pull request")
        return
    console.print(url)
