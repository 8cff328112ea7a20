"""Pydantic models for account and plugin settings."""

import uuid

from pydantic import BaseModel, Field

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_PAGE_SIZE = 10
DEFAULT_CACHE_TTL_SECONDS = 180


def parse_orgs(value: str) -> list[str]:
    """Split a comma separated orgs string into trimmed entries.

    Example:
        >>> parse_orgs("my-org, other-user")
        ["my-org", "other-user"]
    """
    return [org.strip() for org in value.split(",") if org.strip()]


class GithubAccount(BaseModel):
    """A GitHub credential and the orgs/users it should be used for."""

    id: str = Field(
        default_factory=lambda: str(uuid.uuid4()),
        description="Unique account identifier",
    )
    name: str = Field(..., description="Display name of the account")
    orgs: list[str] = Field(
        default_factory=list,
        description="Organizations and users this account is used for (exact match)",
    )
    token: str = Field("", description="OAuth or personal access token")

    def is_complete(self) -> bool:
        """Whether the account has the fields required to be saved."""
        return bool(self.name) and bool(self.token)


class PluginSettings(BaseModel):
    """Settings consumed by the request orchestration layer."""

    accounts: list[GithubAccount] = Field(
        default_factory=list, description="Configured accounts, in lookup order"
    )
    default_account: str | None = Field(
        None, description="Id of the account used when no org matches"
    )
    default_page_size: int = Field(
        DEFAULT_PAGE_SIZE, ge=1, le=100, description="per_page when none is given"
    )
    cache_ttl_seconds: int = Field(
        DEFAULT_CACHE_TTL_SECONDS,
        ge=0,
        description="Seconds a cached response is served without revalidation",
    )
    api_url: str = Field(DEFAULT_API_URL, description="GitHub REST API base URL")

    def get_account(self, account_id: str) -> GithubAccount | None:
        """Find an account by id."""
        return next((acc for acc in self.accounts if acc.id == account_id), None)
