"""Pydantic models for GitHub REST responses.

Only the fields this package reads are declared; everything else GitHub
returns is kept as extra data so callers can still reach it.
API Reference: https://docs.github.com/en/rest
"""

import logging
from typing import Any, Generic, Literal, TypeVar
from urllib.parse import parse_qs, urlparse

from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class GitHubModel(BaseModel):
    """Base for response models; unknown fields are preserved."""

    model_config = ConfigDict(extra="allow")


class GitHubUser(GitHubModel):
    """GitHub user model.

    API Reference: https://docs.github.com/en/rest/users/users
    """

    login: str = Field(..., description="GitHub username/login (string)")
    id: int = Field(..., description="Unique user identifier (integer)")


class GitHubLabel(GitHubModel):
    """GitHub label model.

    API Reference: https://docs.github.com/en/rest/issues/labels
    """

    name: str = Field(..., description="Name of the label (string)")
    color: str | None = Field(None, description="Hexadecimal color without leading #")
    description: str | None = Field(None, description="Short description of the label")


class PullRequestRef(GitHubModel):
    """The ``pull_request`` stub carried by issues that are pull requests."""

    url: str | None = None
    html_url: str | None = None
    merged_at: str | None = None


class IssueResponse(GitHubModel):
    """GitHub issue model (also returned for pull requests by issue endpoints).

    API Reference: https://docs.github.com/en/rest/issues/issues
    """

    id: int = Field(..., description="Unique issue identifier")
    number: int = Field(..., description="Issue number within the repository")
    title: str = Field(..., description="Title of the issue")
    state: str = Field(..., description="'open' or 'closed'")
    html_url: str = Field(..., description="Web URL of the issue")
    url: str | None = Field(None, description="API URL of the issue")
    timeline_url: str | None = Field(None, description="API URL of the issue timeline")
    state_reason: str | None = Field(None, description="completed, not_planned, ...")
    user: GitHubUser | None = None
    labels: list[GitHubLabel | str] = Field(default_factory=list)
    pull_request: PullRequestRef | None = None
    created_at: str | None = None
    updated_at: str | None = None
    closed_at: str | None = None


class PullResponse(GitHubModel):
    """GitHub pull request model.

    API Reference: https://docs.github.com/en/rest/pulls/pulls
    """

    id: int
    number: int
    title: str
    state: str
    html_url: str
    url: str | None = None
    draft: bool | None = None
    merged: bool | None = None
    merged_at: str | None = None
    user: GitHubUser | None = None
    labels: list[GitHubLabel] = Field(default_factory=list)
    created_at: str | None = None
    updated_at: str | None = None


class IssueSearchResponse(GitHubModel):
    """Result page of the issue search endpoint."""

    total_count: int = 0
    incomplete_results: bool = False
    items: list[IssueResponse] = Field(default_factory=list)


class CheckRun(GitHubModel):
    """A single check run.

    API Reference: https://docs.github.com/en/rest/checks/runs
    """

    id: int
    name: str
    status: str
    conclusion: str | None = None
    html_url: str | None = None


class CheckRunListResponse(GitHubModel):
    total_count: int = 0
    check_runs: list[CheckRun] = Field(default_factory=list)


class TimelineEvent(GitHubModel):
    """Any issue timeline event this package does not inspect further."""

    event: str | None = None


class ReferencedIssue(GitHubModel):
    """The issue or pull request on the other end of a cross reference."""

    number: int | None = None
    html_url: str | None = None
    pull_request: PullRequestRef | None = None


class CrossReferenceSource(GitHubModel):
    type: str | None = None
    issue: ReferencedIssue | None = None


class TimelineCrossReferencedEvent(GitHubModel):
    """Another issue or pull request mentioned this issue."""

    event: Literal["cross-referenced"] = "cross-referenced"
    source: CrossReferenceSource | None = None

    @property
    def pull_request_url(self) -> str | None:
        """Web URL of the referencing pull request, if the source is one."""
        issue = self.source.issue if self.source is not None else None
        if issue is None or issue.pull_request is None:
            return None
        return issue.pull_request.html_url


IssueTimelineEvent = TimelineCrossReferencedEvent | TimelineEvent


def parse_timeline_event(raw: dict[str, Any]) -> IssueTimelineEvent:
    """Pick the event model from the event kind.

    A cross reference whose payload does not match the expected shape is
    kept as a plain event so it cannot link to a pull request.
    """
    if raw.get("event") == "cross-referenced":
        try:
            return TimelineCrossReferencedEvent.model_validate(raw)
        except ValidationError as e:
            logger.debug("Unreadable cross-referenced event: %s", e)
    return TimelineEvent.model_validate(raw)


def _page_from_url(url: str) -> int | None:
    pages = parse_qs(urlparse(url).query).get("page")
    if not pages:
        return None
    try:
        return int(pages[0])
    except ValueError:
        return None


class PaginationMeta(BaseModel):
    """Page numbers parsed from the ``Link`` response header.

    A relation GitHub did not send is None; a single-page result has no
    relations at all.
    """

    first: int | None = None
    prev: int | None = None
    next: int | None = None
    last: int | None = None

    @classmethod
    def from_links(cls, links: dict[str, str]) -> "PaginationMeta":
        """Build from ``rel`` to URL relations."""
        return cls(
            **{
                rel: _page_from_url(url)
                for rel, url in links.items()
                if rel in cls.model_fields
            }
        )


class MaybePaginated(BaseModel, Generic[T]):
    """A response page plus its pagination links."""

    meta: PaginationMeta = Field(default_factory=PaginationMeta)
    response: T


IssueListResponse = list[IssueResponse]
PullListResponse = list[PullResponse]
