"""JSON persistence of plugin settings for the command line."""

import os
from pathlib import Path

from rich.console import Console

from .models import GithubAccount, PluginSettings, parse_orgs

console = Console()

SETTINGS_ENV_VAR = "GH_LINK_SETTINGS"
DEFAULT_SETTINGS_PATH = Path.home() / ".config" / "gh-link" / "settings.json"


def resolve_settings_path(path: str | Path | None = None) -> Path:
    """Pick the settings file: explicit path, then env var, then default."""
    if path:
        return Path(path)
    env_path = os.getenv(SETTINGS_ENV_VAR)
    if env_path:
        return Path(env_path)
    return DEFAULT_SETTINGS_PATH


class SettingsStore:
    """Loads and saves PluginSettings as a JSON file."""

    def __init__(self, path: str | Path | None = None):
        """Initialize settings store.

        Args:
            path: Settings file location. If None, resolved from the
                GH_LINK_SETTINGS env var or the per-user default.
        """
        self.path = resolve_settings_path(path)

    def load(self) -> PluginSettings:
        """Load settings, returning defaults when the file does not exist.

        Raises:
            pydantic.ValidationError: If the file content is not valid settings
        """
        if not self.path.exists():
            return PluginSettings()
        return PluginSettings.model_validate_json(self.path.read_text(encoding="utf-8"))

    def save(self, settings: PluginSettings) -> Path:
        """Write settings to disk."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(settings.model_dump_json(indent=2), encoding="utf-8")
        return self.path

    def add_account(
        self, name: str, token: str, orgs: str = "", make_default: bool = False
    ) -> GithubAccount:
        """Create and persist a new account.

        Args:
            name: Account display name (required)
            token: GitHub token (required)
            orgs: Comma separated orgs and users the account applies to
            make_default: Also make the new account the default account

        Returns:
            The saved account with its generated id

        Raises:
            ValueError: If name or token is empty
        """
        account = GithubAccount(
            name=name.strip(), token=token.strip(), orgs=parse_orgs(orgs)
        )
        if not account.is_complete():
            raise ValueError("Account name and token are required")

        settings = self.load()
        settings.accounts.append(account)
        if make_default or settings.default_account is None:
            settings.default_account = account.id
        self.save(settings)
        console.print(f"Saved account {account.name} ({account.id}) to {self.path}")
        return account

    def remove_account(self, account_id: str) -> bool:
        """Remove an account by id. Returns False if it was not found."""
        settings = self.load()
        account = settings.get_account(account_id)
        if account is None:
            return False

        settings.accounts.remove(account)
        if settings.default_account == account_id:
            settings.default_account = None
        self.save(settings)
        return True

    def set_default(self, account_id: str) -> None:
        """Make an existing account the default account.

        Raises:
            ValueError: If no account has the given id
        """
        settings = self.load()
        if settings.get_account(account_id) is None:
            raise ValueError(f"Account {account_id} not found")
        settings.default_account = account_id
        self.save(settings)
