"""Query shapes, parameter translation and search serialization."""

from .mapping import map_object
from .params import (
    set_page_size,
    to_issue_list_params,
    to_org_issue_list_params,
    to_pull_list_params,
    to_search_params,
)
from .search import append_filter, serialize_query_params
from .types import (
    FilterQuery,
    IssueListParams,
    IssueSearchParams,
    PullListParams,
    QueryParams,
    QueryType,
    RawQuery,
)

__all__ = [
    "FilterQuery",
    "IssueListParams",
    "IssueSearchParams",
    "PullListParams",
    "QueryParams",
    "QueryType",
    "RawQuery",
    "append_filter",
    "map_object",
    "serialize_query_params",
    "set_page_size",
    "to_issue_list_params",
    "to_org_issue_list_params",
    "to_pull_list_params",
    "to_search_params",
]
