"""Standardized CLI option definitions for consistent shorthand mappings.

This module provides centralized option definitions so every command
spells shared options the same way.
"""

import typer

# Core options
ORG_OPTION = typer.Option(None, "--org", "-o", help="GitHub organization or user")
REPO_OPTION = typer.Option(None, "--repo", "-r", help="GitHub repository name")

SETTINGS_OPTION = typer.Option(
    None,
    "--settings",
    help=(
        "Settings file (default: $GH_LINK_SETTINGS or "
        "~/.config/gh-link/settings.json)"
    ),
)

SKIP_CACHE_OPTION = typer.Option(
    False, "--skip-cache", help="Always fetch from GitHub, then refresh the cache"
)

# Filter options
STATE_OPTION = typer.Option(None, "--state", "-s", help="open, closed or all")
LABELS_OPTION = typer.Option(
    None, "--labels", "-l", help="Filter by labels (can be used multiple times)"
)
ASSIGNEE_OPTION = typer.Option(None, "--assignee", help="Filter by assignee login")
CREATOR_OPTION = typer.Option(None, "--creator", help="Filter by creator login")
SORT_OPTION = typer.Option(None, "--sort", help="Sort field, e.g. created or updated")
DIRECTION_OPTION = typer.Option(None, "--direction", help="asc or desc")
ORDER_OPTION = typer.Option(None, "--order", help="Search result order: asc or desc")

# Pagination options
PAGE_OPTION = typer.Option(None, "--page", "-p", help="Page number to fetch")
PER_PAGE_OPTION = typer.Option(
    None, "--per-page", help="Results per page (default from settings)"
)

# Search options
TYPE_OPTION = typer.Option("issue", "--type", "-t", help="issue or pr")
FILTER_OPTION = typer.Option(
    None,
    "--filter",
    "-f",
    help="Qualifier filter as name=value (can be used multiple times)",
)
