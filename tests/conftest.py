"""Test configuration and fixtures."""

import asyncio
from pathlib import Path
from typing import Any

import pytest

from gh_link.github_client.errors import RequestError
from gh_link.github_client.transport import ApiRequest, ApiResponse
from gh_link.settings.models import GithubAccount, PluginSettings


class FakeTransport:
    """Transport returning canned responses and recording every send."""

    def __init__(self) -> None:
        self.responses: dict[str, ApiResponse | RequestError] = {}
        self.calls: list[tuple[ApiRequest, str | None]] = []
        self.delay = 0.0

    def add(
        self,
        url: str,
        body: Any,
        status: int = 200,
        headers: dict[str, str] | None = None,
        links: dict[str, str] | None = None,
    ) -> None:
        self.responses[url] = ApiResponse(
            status=status, body=body, headers=headers or {}, links=links or {}
        )

    def fail(self, url: str, status: int, body: Any = None) -> None:
        self.responses[url] = RequestError(status, url, body)

    async def send(self, request: ApiRequest, token: str | None) -> ApiResponse:
        self.calls.append((request, token))
        # Suspend so concurrent callers can observe the in-flight request
        await asyncio.sleep(self.delay)
        result = self.responses.get(request.url)
        if result is None:
            raise RequestError(404, request.url, {"message": "Not Found"})
        if isinstance(result, RequestError):
            raise result
        return result


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def settings() -> PluginSettings:
    """Two accounts, the second being the default."""
    return PluginSettings(
        accounts=[
            GithubAccount(
                id="work", name="Work", orgs=["foo", "my-org"], token="work-token"
            ),
            GithubAccount(
                id="default", name="Personal", orgs=["bar"], token="personal-token"
            ),
        ],
        default_account="default",
        default_page_size=25,
    )


@pytest.fixture
def settings_file(tmp_path: Path) -> Path:
    """Path for a settings file that does not exist yet."""
    return tmp_path / "config" / "settings.json"
