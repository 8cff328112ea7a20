"""Translate caller sort names into what each GitHub endpoint accepts."""

import logging

from .types import QueryParams

logger = logging.getLogger(__name__)

ISSUE_LIST_SORTS = frozenset({"created", "updated", "comments"})
PULL_LIST_SORTS = frozenset({"created", "updated", "popularity", "long-running"})
SEARCH_SORTS = frozenset(
    {
        "comments",
        "reactions",
        "reactions-+1",
        "reactions--1",
        "reactions-smile",
        "reactions-thinking_face",
        "reactions-heart",
        "reactions-tada",
        "interactions",
        "created",
        "updated",
    }
)


def _normalize(sort: str | None) -> str | None:
    if sort is None:
        return None
    # Accept "long_running" as well as the API spelling "long-running"
    return sort.strip().lower().replace("_", "-") or None


def _translate(params: QueryParams, allowed: frozenset[str], kind: str) -> str | None:
    sort = _normalize(params.sort)
    if sort is None:
        return None
    if sort not in allowed:
        logger.debug("Dropping sort %r unsupported by %s endpoint", params.sort, kind)
        return None
    return sort


def issue_list_sort_from_query(params: QueryParams) -> str | None:
    return _translate(params, ISSUE_LIST_SORTS, "issue list")


def pull_list_sort_from_query(params: QueryParams) -> str | None:
    return _translate(params, PULL_LIST_SORTS, "pull list")


def search_sort_from_query(params: QueryParams) -> str | None:
    # reaction sorts keep their underscores, e.g. reactions-thinking_face
    sort = params.sort.strip().lower() if params.sort else None
    if not sort:
        return None
    if sort not in SEARCH_SORTS:
        logger.debug("Dropping sort %r unsupported by search endpoint", params.sort)
        return None
    return sort
