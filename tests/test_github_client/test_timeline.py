"""Tests for linked pull request lookup through issue timelines."""

import pytest

from gh_link.github_client.api import GitHubApi
from gh_link.github_client.errors import RequestError
from gh_link.github_client.models import (
    TimelineCrossReferencedEvent,
    TimelineEvent,
    parse_timeline_event,
)
from gh_link.github_client.timeline import (
    TimelineCrossReferenceResolver,
    first_linked_pull_request_url,
)

TIMELINE_URL = "https://api.github.com/repos/foo/bar/issues/42/timeline"
PR_URL = "https://github.com/foo/bar/pull/7"


def cross_reference(pull_request_url: str | None) -> dict:
    issue: dict = {"number": 7, "html_url": "https://github.com/foo/bar/issues/7"}
    if pull_request_url:
        issue["pull_request"] = {"html_url": pull_request_url}
    return {"event": "cross-referenced", "source": {"type": "issue", "issue": issue}}


@pytest.fixture
def resolver(transport) -> TimelineCrossReferenceResolver:
    return TimelineCrossReferenceResolver(GitHubApi(transport=transport))


class TestTimelineCrossReferenceResolver:
    """Test TimelineCrossReferenceResolver class."""

    @pytest.mark.asyncio
    async def test_finds_first_pull_request(self, resolver, transport) -> None:
        transport.add(
            TIMELINE_URL,
            [
                {"event": "labeled", "label": {"name": "bug"}},
                cross_reference(None),
                cross_reference(PR_URL),
                cross_reference("https://github.com/foo/bar/pull/8"),
            ],
        )
        assert await resolver.find_linked_pull_request_url(TIMELINE_URL, "t") == PR_URL

    @pytest.mark.asyncio
    async def test_no_cross_reference(self, resolver, transport) -> None:
        transport.add(TIMELINE_URL, [{"event": "closed"}, cross_reference(None)])
        assert await resolver.find_linked_pull_request_url(TIMELINE_URL) is None

    @pytest.mark.asyncio
    async def test_empty_timeline(self, resolver, transport) -> None:
        transport.add(TIMELINE_URL, [])
        assert await resolver.find_linked_pull_request_url(TIMELINE_URL) is None

    @pytest.mark.asyncio
    async def test_missing_timeline_is_not_an_error(self, resolver, transport) -> None:
        transport.fail(TIMELINE_URL, 404)
        assert await resolver.find_linked_pull_request_url(TIMELINE_URL) is None

    @pytest.mark.asyncio
    async def test_other_errors_propagate(self, resolver, transport) -> None:
        transport.fail(TIMELINE_URL, 403, {"message": "Forbidden"})
        with pytest.raises(RequestError) as exc_info:
            await resolver.find_linked_pull_request_url(TIMELINE_URL)
        assert exc_info.value.status == 403

    @pytest.mark.asyncio
    async def test_null_source_is_not_a_link(self, resolver, transport) -> None:
        transport.add(TIMELINE_URL, [{"event": "cross-referenced", "source": None}])
        assert await resolver.find_linked_pull_request_url(TIMELINE_URL) is None

    @pytest.mark.asyncio
    async def test_malformed_cross_reference_is_skipped(
        self, resolver, transport
    ) -> None:
        transport.add(
            TIMELINE_URL,
            [
                {"event": "cross-referenced", "source": "not an object"},
                {"event": "cross-referenced", "source": {"issue": None}},
                cross_reference(PR_URL),
            ],
        )
        assert await resolver.find_linked_pull_request_url(TIMELINE_URL) == PR_URL

    @pytest.mark.asyncio
    async def test_events_after_match_are_not_parsed(self, resolver, transport) -> None:
        transport.add(TIMELINE_URL, [cross_reference(PR_URL), {"event": 5}])
        assert await resolver.find_linked_pull_request_url(TIMELINE_URL) == PR_URL


def test_parse_timeline_event() -> None:
    linked = parse_timeline_event(cross_reference(PR_URL))
    assert isinstance(linked, TimelineCrossReferencedEvent)
    labeled = parse_timeline_event({"event": "labeled", "label": {"name": "x"}})
    assert isinstance(labeled, TimelineEvent)
    assert labeled.event == "labeled"


def test_first_linked_pull_request_url_ignores_other_events() -> None:
    events = [
        TimelineEvent(event="referenced"),
        TimelineCrossReferencedEvent.model_validate({"event": "cross-referenced"}),
    ]
    assert first_linked_pull_request_url(events) is None


def test_parse_cross_reference_without_source() -> None:
    event = parse_timeline_event({"event": "cross-referenced", "source": None})
    assert isinstance(event, TimelineCrossReferencedEvent)
    assert event.pull_request_url is None


def test_parse_unreadable_cross_reference() -> None:
    event = parse_timeline_event({"event": "cross-referenced", "source": []})
    assert isinstance(event, TimelineEvent)
    assert event.event == "cross-referenced"
