"""GitHub search query string building."""

from .types import FilterQuery, QueryParams, QueryType, RawQuery


def append_filter(query: str, qualifier: str, value: str) -> str:
    """Append a ``qualifier:value`` pair to a search query.

    Values containing spaces are quoted unless they already carry quotes.

    Example:
        >>> append_filter("bug", "reason", "not planned")
        'bug reason:"not planned"'
    """
    value = value.strip()
    if " " in value and '"' not in value:
        value = f'"{value}"'
    return f"{query} {qualifier}:{value}"


def _type_qualifier(query_type: QueryType) -> str:
    if query_type == QueryType.ISSUE:
        return "issue"
    if query_type == QueryType.PULL_REQUEST:
        return "pr"
    raise RuntimeError(f"Unreachable case: query type {query_type!r} not supported")


def serialize_query_params(params: QueryParams) -> str:
    """Build the ``q`` parameter of the search endpoint.

    Structured filters are appended in insertion order and the mandatory
    ``type:issue``/``type:pr`` qualifier always comes last.

    Example:
        >>> serialize_query_params(QueryParams(query="is:open", query_type="issue"))
        "is:open type:issue"
    """
    query_type = _type_qualifier(params.query_type)
    source = params.query

    if source is None:
        query = ""
    elif isinstance(source, RawQuery):
        query = source.text
    elif isinstance(source, FilterQuery):
        query = source.search
        for qualifier, value in source.filters.items():
            query = append_filter(query, qualifier, value)
    else:
        raise RuntimeError(f"Unreachable case: query {type(source).__name__}")

    query = query.strip()
    qualifier = f"type:{query_type}"
    # Already serialized queries keep a single type qualifier
    if query.split(" ")[-1] == qualifier:
        return query
    return append_filter(query, "type", query_type).strip()
