"""HTTP transport for the GitHub REST API."""

import logging
from dataclasses import dataclass, field
from typing import Any, Protocol

import httpx

from .. import __version__
from .errors import RequestError

logger = logging.getLogger(__name__)

USER_AGENT = f"gh-link/{__version__}"
API_VERSION = "2022-11-28"


@dataclass(frozen=True)
class ApiRequest:
    """A GET request against a GitHub URL (absolute or API-relative)."""

    url: str
    params: dict[str, Any] = field(default_factory=dict)
    headers: dict[str, str] = field(default_factory=dict)


@dataclass
class ApiResponse:
    """Decoded GitHub response."""

    status: int
    body: Any = None
    headers: dict[str, str] = field(default_factory=dict)
    links: dict[str, str] = field(default_factory=dict)

    @property
    def etag(self) -> str | None:
        return self.headers.get("etag")

    @property
    def not_modified(self) -> bool:
        return self.status == 304


class Transport(Protocol):
    """Issues a request and returns its response or raises RequestError."""

    async def send(self, request: ApiRequest, token: str | None) -> ApiResponse: ...


def build_headers(
    token: str | None, extra: dict[str, str] | None = None
) -> dict[str, str]:
    """Standard GitHub API headers, with bearer auth when a token is given."""
    headers = {
        "Accept": "application/vnd.github+json",
        "X-GitHub-Api-Version": API_VERSION,
        "User-Agent": USER_AGENT,
    }
    if token:
        headers["Authorization"] = f"Bearer {token}"
    if extra:
        headers.update(extra)
    return headers


def _decode_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


class HttpxTransport:
    """Transport backed by a shared ``httpx.AsyncClient``."""

    def __init__(
        self,
        base_url: str = "https://api.github.com",
        client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ):
        """Initialize transport.

        Args:
            base_url: Base URL for API-relative request URLs
            client: Client to reuse; one is created (and owned) if None
            timeout: Request timeout in seconds for an owned client
        """
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(
            base_url=base_url, timeout=timeout, follow_redirects=True
        )

    async def send(self, request: ApiRequest, token: str | None) -> ApiResponse:
        """Issue a GET and decode the response.

        Raises:
            RequestError: For non-2xx responses other than 304, and for
                transport failures (status 0)
        """
        headers = build_headers(token, request.headers)
        try:
            response = await self.client.get(
                request.url, params=request.params or None, headers=headers
            )
        except httpx.HTTPError as e:
            raise RequestError(
                0, request.url, message=f"Request to {request.url} failed: {e}"
            ) from e

        body = _decode_body(response)
        if response.status_code != 304 and not response.is_success:
            raise RequestError(response.status_code, str(response.url), body)

        logger.debug("GET %s -> %s", response.url, response.status_code)
        return ApiResponse(
            status=response.status_code,
            body=body,
            headers={key.lower(): value for key, value in response.headers.items()},
            links={
                rel: link["url"]
                for rel, link in response.links.items()
                if "url" in link
            },
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()
