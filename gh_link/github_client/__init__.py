"""GitHub client package for API interaction."""

from .api import GitHubApi
from .cache import MemoryCacheStore, request_signature
from .errors import RequestError
from .github import GitHubLink
from .models import (
    CheckRunListResponse,
    IssueResponse,
    IssueSearchResponse,
    MaybePaginated,
    PaginationMeta,
    PullResponse,
)
from .timeline import TimelineCrossReferenceResolver
from .transport import ApiRequest, ApiResponse, HttpxTransport

__all__ = [
    "ApiRequest",
    "ApiResponse",
    "CheckRunListResponse",
    "GitHubApi",
    "GitHubLink",
    "HttpxTransport",
    "IssueResponse",
    "IssueSearchResponse",
    "MaybePaginated",
    "MemoryCacheStore",
    "PaginationMeta",
    "PullResponse",
    "RequestError",
    "TimelineCrossReferenceResolver",
    "request_signature",
]
