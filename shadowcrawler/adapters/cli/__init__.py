"""Sous-package CLI - re-exporte les commandes publiques."""

from shadowcrawler.adapters.cli.commands import (
    check,
    clear,
    crawl,
    folders,
    list_videos,
    search,
    stats,
)

__all__ = [
    "check",
    "clear",
    "crawl",
    "folders",
    "list_videos",
    "search",
    "stats",
]
