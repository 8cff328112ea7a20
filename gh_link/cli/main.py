"""Main CLI entry point."""

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

from . import accounts
from .query import checks, issue, issues, linked_pr, pull, pulls, search

app = typer.Typer(
    name="gh-link",
    help="GitHub issue, pull request and search lookups with account selection",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)
console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Configure logging for all commands."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


app.command(name="issue")(issue)
app.command(name="pull")(pull)
app.command(name="issues")(issues)
app.command(name="pulls")(pulls)
app.command(name="search")(search)
app.command(name="checks")(checks)
app.command(name="linked-pr")(linked_pr)
app.add_typer(accounts.app, name="accounts")


@app.command()
def version() -> None:
    """Show version information."""
    from gh_link import __version__

    console.print(f"gh-link v{__version__}")


if __name__ == "__main__":
    app()
