"""Tests for the GitHubLink lookups."""

import pytest

from gh_link.github_client.api import GitHubApi
from gh_link.github_client.github import GitHubLink
from gh_link.query.types import QueryParams, QueryType
from gh_link.settings.models import PluginSettings

ISSUE = {
    "id": 1,
    "number": 42,
    "title": "Crash on start",
    "state": "open",
    "html_url": "https://github.com/foo/bar/issues/42",
}


def issue_query(**fields) -> QueryParams:
    return QueryParams(query_type=QueryType.ISSUE, **fields)


@pytest.fixture
def link(settings: PluginSettings, transport) -> GitHubLink:
    api = GitHubApi.from_settings(settings, transport=transport)
    return GitHubLink(settings, api=api)


class TestGitHubLink:
    """Test GitHubLink class."""

    @pytest.mark.asyncio
    async def test_get_issue_uses_org_token(self, link, transport) -> None:
        transport.add("/repos/foo/bar/issues/42", ISSUE)
        issue = await link.get_issue("foo", "bar", 42)

        assert issue.title == "Crash on start"
        assert transport.calls[0][1] == "work-token"

    @pytest.mark.asyncio
    async def test_get_issue_unknown_org_uses_default(self, link, transport) -> None:
        transport.add("/repos/other/bar/issues/42", ISSUE)
        await link.get_issue("other", "bar", 42)
        assert transport.calls[0][1] == "personal-token"

    @pytest.mark.asyncio
    async def test_anonymous_without_account(self, settings, transport) -> None:
        settings.default_account = None
        link = GitHubLink(settings, api=GitHubApi(transport=transport))
        transport.add("/repos/other/bar/issues/42", ISSUE)

        await link.get_issue("other", "bar", 42)
        assert transport.calls[0][1] is None

    @pytest.mark.asyncio
    async def test_get_my_issues_without_token(self, settings, transport) -> None:
        """Test no request is made when no account token resolves."""
        settings.default_account = None
        link = GitHubLink(settings, api=GitHubApi(transport=transport))

        result = await link.get_my_issues(issue_query(), org="unknown")

        assert result.response == []
        assert result.meta.model_dump(exclude_none=True) == {}
        assert result.meta.next is None
        assert transport.calls == []

    @pytest.mark.asyncio
    async def test_get_my_issues_with_empty_token(self, settings, transport) -> None:
        settings.accounts[1].token = ""
        link = GitHubLink(settings, api=GitHubApi(transport=transport))
        result = await link.get_my_issues(issue_query())
        assert result.response == []
        assert transport.calls == []

    @pytest.mark.asyncio
    async def test_get_my_issues(self, link, transport) -> None:
        transport.add("/issues", [ISSUE])
        result = await link.get_my_issues(issue_query(labels=["a", "b"]), org="foo")

        request, token = transport.calls[0]
        assert token == "work-token"
        assert request.params == {"labels": "a,b", "per_page": 25}
        assert result.response[0].number == 42

    @pytest.mark.asyncio
    async def test_get_issues_for_repo(self, link, transport) -> None:
        transport.add("/repos/bar/baz/issues", [ISSUE])
        await link.get_issues_for_repo(
            issue_query(state="closed", sort="created", per_page=5), "bar", "baz"
        )
        request, token = transport.calls[0]
        assert token == "personal-token"
        assert request.params == {"state": "closed", "sort": "created", "per_page": 5}

    @pytest.mark.asyncio
    async def test_get_issues_for_organization(self, link, transport) -> None:
        transport.add("/orgs/foo/issues", [])
        await link.get_issues_for_organization(issue_query(filter="created"), "foo")
        assert transport.calls[0][0].params == {"filter": "created", "per_page": 25}

    @pytest.mark.asyncio
    async def test_get_pull_requests_for_repo(self, link, transport) -> None:
        transport.add("/repos/foo/bar/pulls", [])
        await link.get_pull_requests_for_repo(
            QueryParams(query_type=QueryType.PULL_REQUEST, labels="ignored"),
            "foo",
            "bar",
        )
        assert transport.calls[0][0].params == {"per_page": 25}

    @pytest.mark.asyncio
    async def test_get_pull_request(self, link, transport) -> None:
        transport.add(
            "/repos/foo/bar/pulls/7",
            {**ISSUE, "number": 7, "html_url": "https://github.com/foo/bar/pull/7"},
        )
        pull = await link.get_pull_request("foo", "bar", 7)
        assert pull.number == 7

    @pytest.mark.asyncio
    async def test_list_check_runs_for_ref(self, link, transport) -> None:
        transport.add(
            "/repos/foo/bar/commits/abc123/check-runs",
            {"total_count": 0, "check_runs": []},
        )
        result = await link.list_check_runs_for_ref("foo", "bar", "abc123")
        assert result.total_count == 0
        assert transport.calls[0][1] == "work-token"

    @pytest.mark.asyncio
    async def test_search_takes_token_from_query(self, link, transport) -> None:
        transport.add("/search/issues", {"total_count": 0, "items": []})
        await link.search_issues(
            QueryParams(
                query="repo:my-org/my-repo state:open",
                query_type=QueryType.PULL_REQUEST,
            )
        )

        request, token = transport.calls[0]
        assert token == "work-token"
        assert request.params == {
            "q": "repo:my-org/my-repo state:open type:pr",
            "per_page": 25,
        }

    @pytest.mark.asyncio
    async def test_search_explicit_org_wins(self, link, transport) -> None:
        transport.add("/search/issues", {"total_count": 0, "items": []})
        await link.search_issues(issue_query(query="repo:my-org/x", org="bar"))
        assert transport.calls[0][1] == "personal-token"

    @pytest.mark.asyncio
    async def test_get_pr_for_issue(self, link, transport) -> None:
        url = "https://api.github.com/repos/foo/bar/issues/42/timeline"
        pr_url = "https://github.com/foo/bar/pull/7"
        transport.add(
            url,
            [
                {
                    "event": "cross-referenced",
                    "source": {"issue": {"pull_request": {"html_url": pr_url}}},
                }
            ],
        )
        assert await link.get_pr_for_issue(url, "foo") == pr_url
        assert transport.calls[0][1] == "work-token"

    @pytest.mark.asyncio
    async def test_get_pr_for_missing_timeline(self, link, transport) -> None:
        url = "https://api.github.com/repos/foo/bar/issues/1/timeline"
        assert await link.get_pr_for_issue(url) is None
