"""Shape QueryParams into the parameter objects each endpoint expects."""

from typing import Protocol

from .mapping import map_object
from .search import serialize_query_params
from .sort import (
    issue_list_sort_from_query,
    pull_list_sort_from_query,
    search_sort_from_query,
)
from .types import IssueListParams, IssueSearchParams, PullListParams, QueryParams


class _Paged(Protocol):
    per_page: int | None


def join_labels(params: QueryParams) -> str | None:
    """Labels as the comma separated string the list endpoints take."""
    if isinstance(params.labels, list):
        return ",".join(params.labels)
    return params.labels


ISSUE_LIST_FIELDS = {
    "assignee": True,
    "creator": True,
    "direction": True,
    "labels": join_labels,
    "mentioned": True,
    "page": True,
    "per_page": True,
    "since": True,
    "sort": issue_list_sort_from_query,
    "state": True,
}

# The org endpoint additionally accepts `filter` (assigned, created, ...)
ORG_ISSUE_LIST_FIELDS = {**ISSUE_LIST_FIELDS, "filter": True}

PULL_LIST_FIELDS = {
    "direction": True,
    "page": True,
    "per_page": True,
    "sort": pull_list_sort_from_query,
    "state": True,
}

SEARCH_FIELDS = {
    "q": serialize_query_params,
    "sort": search_sort_from_query,
    "order": lambda params: params.order,
    "page": lambda params: params.page,
    "per_page": lambda params: params.per_page,
}


def set_page_size(params: _Paged, default_page_size: int) -> None:
    """Fill in per_page with the configured default when it is unset."""
    if params.per_page is None:
        params.per_page = default_page_size


def to_issue_list_params(
    params: QueryParams, default_page_size: int
) -> IssueListParams:
    list_params = IssueListParams.model_validate(
        map_object(params, ISSUE_LIST_FIELDS, True, True)
    )
    set_page_size(list_params, default_page_size)
    return list_params


def to_org_issue_list_params(
    params: QueryParams, default_page_size: int
) -> IssueListParams:
    list_params = IssueListParams.model_validate(
        map_object(params, ORG_ISSUE_LIST_FIELDS, True, True)
    )
    set_page_size(list_params, default_page_size)
    return list_params


def to_pull_list_params(params: QueryParams, default_page_size: int) -> PullListParams:
    list_params = PullListParams.model_validate(
        map_object(params, PULL_LIST_FIELDS, True, True)
    )
    set_page_size(list_params, default_page_size)
    return list_params


def to_search_params(params: QueryParams, default_page_size: int) -> IssueSearchParams:
    search_params = IssueSearchParams.model_validate(
        map_object(params, SEARCH_FIELDS, True, True)
    )
    set_page_size(search_params, default_page_size)
    return search_params
