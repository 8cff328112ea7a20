"""Find the pull request linked to an issue through its timeline."""

import logging
from collections.abc import Iterable

from .api import GitHubApi
from .errors import RequestError
from .models import (
    IssueTimelineEvent,
    TimelineCrossReferencedEvent,
    parse_timeline_event,
)

logger = logging.getLogger(__name__)


def first_linked_pull_request_url(events: Iterable[IssueTimelineEvent]) -> str | None:
    """URL of the first cross-referencing pull request among ``events``."""
    for event in events:
        if isinstance(event, TimelineCrossReferencedEvent) and event.pull_request_url:
            return event.pull_request_url
    return None


class TimelineCrossReferenceResolver:
    """Walks issue timelines looking for the pull request that closes them."""

    def __init__(self, api: GitHubApi):
        self.api = api

    async def find_linked_pull_request_url(
        self,
        timeline_url: str,
        token: str | None = None,
        skip_cache: bool = False,
    ) -> str | None:
        """Return the linked pull request URL, or None.

        A 404 means the issue has no timeline and is not an error.

        Raises:
            RequestError: For any other failed request
        """
        try:
            response = await self.api.queue_request(timeline_url, token, skip_cache)
        except RequestError as e:
            if e.is_not_found:
                logger.debug("No timeline at %s", timeline_url)
                return None
            raise

        if not response.body:
            return None

        # Events after the first match are never parsed
        events = (parse_timeline_event(raw) for raw in response.body)
        return first_linked_pull_request_url(events)
