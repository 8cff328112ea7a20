"""High-level GitHub lookups with per-org account selection."""

import logging

from ..query.params import (
    to_issue_list_params,
    to_org_issue_list_params,
    to_pull_list_params,
    to_search_params,
)
from ..query.types import QueryParams
from ..settings.accounts import AccountResolver, TokenResolver
from ..settings.models import PluginSettings
from .api import GitHubApi
from .models import (
    CheckRunListResponse,
    IssueListResponse,
    IssueResponse,
    IssueSearchResponse,
    MaybePaginated,
    PullListResponse,
    PullResponse,
)
from .timeline import TimelineCrossReferenceResolver

logger = logging.getLogger(__name__)


class GitHubLink:
    """Entry point for issue, pull request and search lookups.

    Picks the account configured for the org being queried, shapes the
    query parameters for the endpoint and goes through the shared
    cached ``GitHubApi``.
    """

    def __init__(self, settings: PluginSettings, api: GitHubApi | None = None):
        """Initialize from explicit settings.

        Args:
            settings: Accounts, default account and page size to use
            api: Request layer to use; built from settings if None
        """
        self.settings = settings
        self.api = api or GitHubApi.from_settings(settings)
        self.accounts = AccountResolver(settings)
        self.tokens = TokenResolver(self.accounts)
        self.timeline = TimelineCrossReferenceResolver(self.api)

    @property
    def default_page_size(self) -> int:
        return self.settings.default_page_size

    def get_token(self, org: str | None = None, query: str | None = None) -> str | None:
        return self.tokens.resolve_token(org, query)

    async def get_issue(
        self, org: str, repo: str, issue: int, skip_cache: bool = False
    ) -> IssueResponse:
        return await self.api.get_issue(
            org, repo, issue, self.get_token(org), skip_cache
        )

    async def get_my_issues(
        self, params: QueryParams, org: str | None = None, skip_cache: bool = False
    ) -> MaybePaginated[IssueListResponse]:
        """Issues for the account's own token; empty without a usable token.

        The empty result carries a PaginationMeta with every relation unset,
        which dumps to ``{}`` with ``exclude_none=True``.
        """
        account = self.accounts.resolve(org)
        if account is None or not account.token:
            logger.debug("No token for org %r, returning no issues", org)
            return MaybePaginated(response=[])

        return await self.api.list_issues_for_token(
            to_issue_list_params(params, self.default_page_size),
            account.token,
            skip_cache,
        )

    async def get_issues_for_repo(
        self, params: QueryParams, org: str, repo: str, skip_cache: bool = False
    ) -> MaybePaginated[IssueListResponse]:
        return await self.api.list_issues_for_repo(
            org,
            repo,
            to_issue_list_params(params, self.default_page_size),
            self.get_token(org),
            skip_cache,
        )

    async def get_issues_for_organization(
        self, params: QueryParams, org: str, skip_cache: bool = False
    ) -> MaybePaginated[IssueListResponse]:
        return await self.api.list_issues_for_organization(
            org,
            to_org_issue_list_params(params, self.default_page_size),
            self.get_token(org),
            skip_cache,
        )

    async def get_pull_request(
        self, org: str, repo: str, pull_request: int, skip_cache: bool = False
    ) -> PullResponse:
        return await self.api.get_pull_request(
            org, repo, pull_request, self.get_token(org), skip_cache
        )

    async def get_pull_requests_for_repo(
        self, params: QueryParams, org: str, repo: str, skip_cache: bool = False
    ) -> MaybePaginated[PullListResponse]:
        return await self.api.list_pull_requests_for_repo(
            org,
            repo,
            to_pull_list_params(params, self.default_page_size),
            self.get_token(org),
            skip_cache,
        )

    async def list_check_runs_for_ref(
        self, org: str, repo: str, ref: str, skip_cache: bool = False
    ) -> CheckRunListResponse:
        return await self.api.list_check_runs_for_ref(
            org, repo, ref, self.get_token(org), skip_cache
        )

    async def search_issues(
        self, params: QueryParams, skip_cache: bool = False
    ) -> MaybePaginated[IssueSearchResponse]:
        search_params = to_search_params(params, self.default_page_size)
        token = self.get_token(params.org, search_params.q)
        return await self.api.search_issues(search_params, token, skip_cache)

    async def get_pr_for_issue(
        self, timeline_url: str, org: str | None = None, skip_cache: bool = False
    ) -> str | None:
        """URL of the pull request cross-referencing an issue, if any."""
        return await self.timeline.find_linked_pull_request_url(
            timeline_url, self.get_token(org), skip_cache
        )

    async def aclose(self) -> None:
        await self.api.aclose()
