"""
Import Sources.

Registry of the blogging platforms whose RSS feeds can be imported, with
per-platform handle parsing, validation and feed URL construction.

Example:
    from bublr_import.sources import resolve_feed

    feed = resolve_feed("substack", "my-letter.substack.com")
    feed["feed_url"]  # "https://my-letter.substack.com/feed"
"""

from bublr_import.sources.registry import (
    PLATFORMS,
    FeedSource,
    get_platform,
    list_platforms,
    resolve_feed,
)

__all__ = [
    "PLATFORMS",
    "FeedSource",
    "get_platform",
    "list_platforms",
    "resolve_feed",
]
