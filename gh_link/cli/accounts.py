"""CLI commands for managing GitHub accounts."""

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..settings.models import PluginSettings
from ..settings.storage import SettingsStore
from .options import SETTINGS_OPTION

console = Console()
app = typer.Typer(
    help="Manage GitHub accounts and the orgs they are used for",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _load(store: SettingsStore) -> PluginSettings:
    try:
        return store.load()
    except ValidationError as e:
        console.print(f"❌ Invalid settings file {store.path}: {escape(str(e))}")
        raise typer.Exit(1)


def _mask(token: str) -> str:
    if len(token) <= 8:
        return "*" * len(token)
    return f"{token[:4]}…{token[-4:]}"


@app.command(name="list")
def list_accounts(settings: str | None = SETTINGS_OPTION) -> None:
    """List configured accounts."""
    store = SettingsStore(settings)
    current = _load(store)
    if not current.accounts:
        console.print(f"No accounts configured in {store.path}")
        return

    table = Table(title="GitHub Accounts")
    table.add_column("Id", style="dim")
    table.add_column("Name")
    table.add_column("Orgs and users")
    table.add_column("Token")
    table.add_column("Default")
    for account in current.accounts:
        table.add_row(
            account.id,
            account.name,
            ", ".join(account.orgs),
            _mask(account.token),
            "✓" if account.id == current.default_account else "",
        )
    console.print(table)


@app.command()
def add(
    name: str = typer.Option(..., "--name", "-n", help="Account name"),
    token: str = typer.Option(
        ..., "--token", help="OAuth or personal access token", envvar="GH_LINK_TOKEN"
    ),
    orgs: str = typer.Option(
        "", "--orgs", help="Comma separated orgs and users for this account"
    ),
    default: bool = typer.Option(False, "--default", help="Make this the default"),
    settings: str | None = SETTINGS_OPTION,
) -> None:
    """Add an account."""
    store = SettingsStore(settings)
    _load(store)
    try:
        account = store.add_account(name, token, orgs, make_default=default)
    except ValueError as e:
        console.print(f"❌ {e}")
        raise typer.Exit(1)
    console.print(f"✅ Added account {account.name}")


@app.command()
def remove(
    account_id: str = typer.Argument(..., help="Id of the account to remove"),
    settings: str | None = SETTINGS_OPTION,
) -> None:
    """Remove an account."""
    store = SettingsStore(settings)
    _load(store)
    if not store.remove_account(account_id):
        console.print(f"❌ Account {account_id} not found")
        raise typer.Exit(1)
    console.print(f"✅ Removed account {account_id}")


@app.command(name="default")
def set_default(
    account_id: str = typer.Argument(..., help="Id of the account to use by default"),
    settings: str | None = SETTINGS_OPTION,
) -> None:
    """Choose the account used when no org matches."""
    store = SettingsStore(settings)
    _load(store)
    try:
        store.set_default(account_id)
    except ValueError as e:
        console.print(f"❌ {e}")
        raise typer.Exit(1)
    console.print(f"✅ Default account is now {account_id}")
