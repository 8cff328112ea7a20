"""Account settings and credential resolution."""

from .accounts import AccountResolver, TokenResolver
from .models import GithubAccount, PluginSettings, parse_orgs
from .storage import SettingsStore

__all__ = [
    "AccountResolver",
    "GithubAccount",
    "PluginSettings",
    "SettingsStore",
    "TokenResolver",
    "parse_orgs",
]
