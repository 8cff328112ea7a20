"""Cached, deduplicated GitHub REST requests."""

import asyncio
import logging
from dataclasses import replace
from typing import Any, TypeVar

from pydantic import BaseModel, TypeAdapter

from ..query.params import set_page_size
from ..query.types import (
    IssueListParams,
    IssueSearchParams,
    PullListParams,
    to_query_string_params,
)
from ..settings.models import DEFAULT_PAGE_SIZE, PluginSettings
from .cache import CacheEntry, CacheStore, MemoryCacheStore, request_signature
from .errors import RequestError
from .models import (
    CheckRunListResponse,
    IssueListResponse,
    IssueResponse,
    IssueSearchResponse,
    MaybePaginated,
    PaginationMeta,
    PullListResponse,
    PullResponse,
)
from .transport import ApiRequest, ApiResponse, HttpxTransport, Transport

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _retrieve_exception(task: "asyncio.Task[ApiResponse]") -> None:
    # A shared fetch may fail after every waiter has stopped awaiting it
    if not task.cancelled():
        task.exception()


_issue_list = TypeAdapter(IssueListResponse)
_pull_list = TypeAdapter(PullListResponse)


class GitHubApi:
    """GitHub REST client with a response cache and in-flight dedup.

    Every request is keyed by its signature (URL, query string, acting
    credential). A fresh cached response is served without a network call
    unless ``skip_cache`` is set; concurrent calls with the same signature
    share one outstanding request.
    """

    def __init__(
        self,
        transport: Transport | None = None,
        cache: CacheStore | None = None,
        cache_ttl_seconds: float = 180,
        default_page_size: int = DEFAULT_PAGE_SIZE,
    ):
        self.transport = transport or HttpxTransport()
        self.cache = cache if cache is not None else MemoryCacheStore()
        self.cache_ttl_seconds = cache_ttl_seconds
        self.default_page_size = default_page_size
        self._in_flight: dict[str, asyncio.Task[ApiResponse]] = {}

    @classmethod
    def from_settings(
        cls,
        settings: PluginSettings,
        transport: Transport | None = None,
        cache: CacheStore | None = None,
    ) -> "GitHubApi":
        return cls(
            transport=transport or HttpxTransport(base_url=settings.api_url),
            cache=cache,
            cache_ttl_seconds=settings.cache_ttl_seconds,
            default_page_size=settings.default_page_size,
        )

    async def queue_request(
        self,
        request: ApiRequest | str,
        token: str | None = None,
        skip_cache: bool = False,
    ) -> ApiResponse:
        """Fetch a URL through the cache.

        Args:
            request: Request or bare URL (absolute or API-relative)
            token: Token to authenticate with; anonymous if None
            skip_cache: Always go to the network, then refresh the cache

        Returns:
            The decoded response

        Raises:
            RequestError: If GitHub answers with an error status
        """
        if isinstance(request, str):
            request = ApiRequest(url=request)

        # Everything up to the task registration runs without suspending
        key = request_signature(request, token)
        entry = self.cache.get(key)
        if (
            not skip_cache
            and entry is not None
            and entry.is_fresh(self.cache_ttl_seconds)
        ):
            logger.debug("Cache hit: %s", key)
            return entry.response

        pending = self._in_flight.get(key)
        if pending is None or pending.done():
            pending = asyncio.ensure_future(self._fetch(key, request, token, entry))
            self._in_flight[key] = pending
            pending.add_done_callback(_retrieve_exception)
        else:
            logger.debug("Joining in-flight request: %s", key)

        return await asyncio.shield(pending)

    async def _fetch(
        self,
        key: str,
        request: ApiRequest,
        token: str | None,
        cached: CacheEntry | None,
    ) -> ApiResponse:
        if cached is not None and cached.response.etag:
            request = replace(
                request,
                headers={**request.headers, "If-None-Match": cached.response.etag},
            )

        try:
            response = await self.transport.send(request, token)
            if response.not_modified:
                if cached is None:
                    raise RequestError(
                        304,
                        request.url,
                        message="Not modified without a cached response",
                    )
                logger.debug("Revalidated with ETag: %s", key)
                response = cached.response

            self.cache.set(key, CacheEntry(response))
            return response
        finally:
            # Released before any waiter resumes
            if self._in_flight.get(key) is asyncio.current_task():
                del self._in_flight[key]

    async def _get_json(
        self,
        url: str,
        token: str | None,
        skip_cache: bool,
        params: dict[str, Any] | None = None,
    ) -> ApiResponse:
        request = ApiRequest(url=url, params=params or {})
        return await self.queue_request(request, token, skip_cache)

    async def _paginated(
        self,
        url: str,
        params: BaseModel,
        adapter: TypeAdapter[T],
        token: str | None,
        skip_cache: bool,
    ) -> MaybePaginated[T]:
        set_page_size(params, self.default_page_size)
        response = await self._get_json(
            url, token, skip_cache, to_query_string_params(params)
        )
        return MaybePaginated(
            meta=PaginationMeta.from_links(response.links),
            response=adapter.validate_python(response.body or []),
        )

    async def get_issue(
        self,
        org: str,
        repo: str,
        issue_number: int,
        token: str | None = None,
        skip_cache: bool = False,
    ) -> IssueResponse:
        response = await self._get_json(
            f"/repos/{org}/{repo}/issues/{issue_number}", token, skip_cache
        )
        return IssueResponse.model_validate(response.body)

    async def get_pull_request(
        self,
        org: str,
        repo: str,
        pull_number: int,
        token: str | None = None,
        skip_cache: bool = False,
    ) -> PullResponse:
        response = await self._get_json(
            f"/repos/{org}/{repo}/pulls/{pull_number}", token, skip_cache
        )
        return PullResponse.model_validate(response.body)

    async def list_issues_for_repo(
        self,
        org: str,
        repo: str,
        params: IssueListParams,
        token: str | None = None,
        skip_cache: bool = False,
    ) -> MaybePaginated[IssueListResponse]:
        return await self._paginated(
            f"/repos/{org}/{repo}/issues", params, _issue_list, token, skip_cache
        )

    async def list_issues_for_organization(
        self,
        org: str,
        params: IssueListParams,
        token: str | None = None,
        skip_cache: bool = False,
    ) -> MaybePaginated[IssueListResponse]:
        return await self._paginated(
            f"/orgs/{org}/issues", params, _issue_list, token, skip_cache
        )

    async def list_issues_for_token(
        self,
        params: IssueListParams,
        token: str,
        skip_cache: bool = False,
    ) -> MaybePaginated[IssueListResponse]:
        """Issues assigned to the authenticated user across all repositories."""
        return await self._paginated("/issues", params, _issue_list, token, skip_cache)

    async def list_pull_requests_for_repo(
        self,
        org: str,
        repo: str,
        params: PullListParams,
        token: str | None = None,
        skip_cache: bool = False,
    ) -> MaybePaginated[PullListResponse]:
        return await self._paginated(
            f"/repos/{org}/{repo}/pulls", params, _pull_list, token, skip_cache
        )

    async def list_check_runs_for_ref(
        self,
        org: str,
        repo: str,
        ref: str,
        token: str | None = None,
        skip_cache: bool = False,
    ) -> CheckRunListResponse:
        response = await self._get_json(
            f"/repos/{org}/{repo}/commits/{ref}/check-runs", token, skip_cache
        )
        return CheckRunListResponse.model_validate(response.body)

    async def search_issues(
        self,
        params: IssueSearchParams,
        token: str | None = None,
        skip_cache: bool = False,
    ) -> MaybePaginated[IssueSearchResponse]:
        set_page_size(params, self.default_page_size)
        response = await self._get_json(
            "/search/issues", token, skip_cache, to_query_string_params(params)
        )
        return MaybePaginated(
            meta=PaginationMeta.from_links(response.links),
            response=IssueSearchResponse.model_validate(response.body),
        )

    async def aclose(self) -> None:
        close = getattr(self.transport, "aclose", None)
        if close is not None:
            await close()
