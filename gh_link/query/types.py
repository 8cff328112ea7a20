"""Caller-facing query shape and GitHub parameter shapes."""

from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator


class QueryType(str, Enum):
    """Kind of GitHub resource a query targets."""

    ISSUE = "issue"
    PULL_REQUEST = "pull_request"


class RawQuery(BaseModel):
    """A search query given as a ready-made string."""

    text: str = Field("", description="Search string in GitHub qualifier syntax")


class FilterQuery(BaseModel):
    """A search query given as a free-text seed plus qualifier filters."""

    search: str = Field("", description="Free-text part of the query")
    filters: dict[str, str] = Field(
        default_factory=dict,
        description="Qualifier name to value, serialized in insertion order",
    )

    @classmethod
    def from_mapping(cls, value: Mapping[str, Any]) -> "FilterQuery":
        """Build from a flat ``{search?, qualifier: value, ...}`` mapping."""
        search = value.get("search") or ""
        filters = {
            str(key): str(val)
            for key, val in value.items()
            if key != "search" and val is not None
        }
        return cls(search=str(search), filters=filters)


class QueryParams(BaseModel):
    """Query options shared by list and search call sites."""

    query: RawQuery | FilterQuery | None = None
    query_type: QueryType
    org: str | None = None
    assignee: str | None = None
    creator: str | None = None
    direction: str | None = None
    labels: str | list[str] | None = None
    mentioned: str | None = None
    page: int | None = None
    per_page: int | None = None
    since: str | None = None
    sort: str | None = None
    order: str | None = None
    state: str | None = None
    filter: str | None = None

    @field_validator("query", mode="before")
    @classmethod
    def _coerce_query(cls, value: Any) -> Any:
        if isinstance(value, str):
            return RawQuery(text=value)
        if isinstance(value, Mapping):
            return FilterQuery.from_mapping(value)
        return value


class IssueListParams(BaseModel):
    """Parameters of the issue list endpoints (repo, org and token scoped)."""

    assignee: str | None = None
    creator: str | None = None
    direction: str | None = None
    labels: str | None = None
    mentioned: str | None = None
    page: int | None = None
    per_page: int | None = None
    since: str | None = None
    sort: str | None = None
    state: str | None = None
    filter: str | None = None


class PullListParams(BaseModel):
    """Parameters of the pull request list endpoint."""

    direction: str | None = None
    page: int | None = None
    per_page: int | None = None
    sort: str | None = None
    state: str | None = None


class IssueSearchParams(BaseModel):
    """Parameters of the issue search endpoint."""

    q: str
    sort: str | None = None
    order: str | None = None
    page: int | None = None
    per_page: int | None = None


def to_query_string_params(params: BaseModel) -> dict[str, Any]:
    """Dump a parameter model to the fields that should be sent."""
    return params.model_dump(exclude_none=True)
