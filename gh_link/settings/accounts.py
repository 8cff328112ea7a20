"""Account and token resolution for multi-account setups."""

import logging
import re

from .models import GithubAccount, PluginSettings

logger = logging.getLogger(__name__)

# First `repo:org/` qualifier in a raw search string
TOKEN_MATCH_PATTERN = re.compile(r"repo:([\w\-]+)/")


class AccountResolver:
    """Pick the account configured for an org, or the default account."""

    def __init__(self, settings: PluginSettings):
        self.settings = settings

    def resolve(self, candidate_org: str | None = None) -> GithubAccount | None:
        """Return the first account listing ``candidate_org``.

        Falls back to the default account when nothing matches, and to
        None when no default account is configured.
        """
        for account in self.settings.accounts:
            if any(saved_org == candidate_org for saved_org in account.orgs):
                return account

        if self.settings.default_account is None:
            return None
        return self.settings.get_account(self.settings.default_account)


class TokenResolver:
    """Resolve the token for an explicit org or one embedded in a search query."""

    def __init__(self, accounts: AccountResolver):
        self.accounts = accounts

    @staticmethod
    def org_from_query(query: str) -> str | None:
        """Extract the org of the first ``repo:org/name`` qualifier.

        Example:
            >>> TokenResolver.org_from_query("repo:my-org/my-repo state:open")
            "my-org"
        """
        match = TOKEN_MATCH_PATTERN.search(query)
        return match.group(1) if match else None

    def resolve_token(
        self, org: str | None = None, raw_query: str | None = None
    ) -> str | None:
        effective_org = org
        if not org and raw_query:
            effective_org = self.org_from_query(raw_query)
            logger.debug("Org %r parsed from query %r", effective_org, raw_query)

        account = self.accounts.resolve(effective_org)
        if account is None:
            return None
        return account.token
