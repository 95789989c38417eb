"""Import source registry.

Describes each blogging platform articles can be imported from: how the
user-supplied handle or blog address is cleaned and validated, and which
RSS feed serves its posts. Nothing here performs network I/O.
"""

import re
from dataclasses import dataclass
from typing import Any, Optional

from bublr_import.core.exceptions import (
    InvalidInputError,
    InvalidPlatformError,
    MissingInputError,
)

_LEADING_AT = re.compile(r"^@")
_SCHEME = re.compile(r"^https?://")
_TRAILING_SLASH = re.compile(r"/$")


@dataclass(frozen=True)
class FeedSource:
    """A platform that publishes importable posts over RSS.

    Attributes:
        id: Platform identifier, shared with the normalizer's Platform values.
        name: Display name.
        color: Brand color for the import picker.
        description: One-line description for the import picker.
        placeholder: Input hint describing the expected handle or URL.
        feed_template: Feed URL with a ``{username}`` placeholder.
        strip_patterns: Applied in order to turn user input into a handle.
        valid_pattern: A cleaned handle must match this completely.
        alternate_template: Fallback feed URL format, if the platform has one.
    """

    id: str
    name: str
    color: str
    description: str
    placeholder: str
    feed_template: str
    strip_patterns: tuple[re.Pattern, ...]
    valid_pattern: re.Pattern
    alternate_template: Optional[str] = None

    def parse_username(self, value: str) -> str:
        cleaned = value.strip()
        for pattern in self.strip_patterns:
            cleaned = pattern.sub("", cleaned)
        return cleaned.strip()

    def validate_input(self, value: str) -> bool:
        cleaned = self.parse_username(value)
        return bool(cleaned) and self.valid_pattern.fullmatch(cleaned) is not None

    def feed_url(self, username: str) -> str:
        return self.feed_template.format(username=username)

    def alternate_feed_url(self, username: str) -> Optional[str]:
        if self.alternate_template is None:
            return None
        return self.alternate_template.format(username=username)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "color": self.color,
            "description": self.description,
            "placeholder": self.placeholder,
        }


PLATFORMS: dict[str, FeedSource] = {
    "medium": FeedSource(
        id="medium",
        name="Medium",
        color="#000000",
        description="Import your Medium articles",
        placeholder="@username",
        feed_template="https://medium.com/feed/@{username}",
        strip_patterns=(_LEADING_AT,),
        valid_pattern=re.compile(r"[a-zA-Z0-9._-]+"),
    ),
    "substack": FeedSource(
        id="substack",
        name="Substack",
        color="#FF6719",
        description="Import your Substack newsletter posts",
        placeholder="newsletter-name (from newsletter-name.substack.com)",
        feed_template="https://{username}.substack.com/feed",
        strip_patterns=(re.compile(r"\.substack\.com.*$"),),
        valid_pattern=re.compile(r"[a-zA-Z0-9-]+"),
    ),
    "blogger": FeedSource(
        id="blogger",
        name="Blogger",
        color="#FF5722",
        description="Import your Blogger/Blogspot posts",
        placeholder="blogname (from blogname.blogspot.com)",
        feed_template="https://{username}.blogspot.com/feeds/posts/default?alt=rss&max-results=50",
        strip_patterns=(_SCHEME, re.compile(r"\.blogspot\.com.*$"), _TRAILING_SLASH),
        valid_pattern=re.compile(r"[a-zA-Z0-9-]+"),
        alternate_template="https://{username}.blogspot.com/feeds/posts/default",
    ),
    "hashnode": FeedSource(
        id="hashnode",
        name="Hashnode",
        color="#2962FF",
        description="Import your Hashnode blog posts",
        placeholder="username (from username.hashnode.dev)",
        feed_template="https://{username}.hashnode.dev/rss.xml",
        strip_patterns=(re.compile(r"\.hashnode\.dev.*$"),),
        valid_pattern=re.compile(r"[a-zA-Z0-9-]+"),
    ),
    "wordpress": FeedSource(
        id="wordpress",
        name="WordPress",
        color="#21759B",
        description="Import from WordPress.com blogs",
        placeholder="blogname (from blogname.wordpress.com)",
        feed_template="https://{username}.wordpress.com/feed/",
        strip_patterns=(_SCHEME, re.compile(r"\.wordpress\.com.*$")),
        valid_pattern=re.compile(r"[a-zA-Z0-9-]+"),
        alternate_template="https://{username}.wordpress.com/feed/rss/",
    ),
    "ghost": FeedSource(
        id="ghost",
        name="Ghost",
        color="#15171A",
        description="Import from Ghost blogs (requires full URL)",
        placeholder="Full blog URL (e.g., blog.example.com)",
        feed_template="https://{username}/rss/",
        strip_patterns=(_SCHEME, _TRAILING_SLASH),
        # Ghost blogs live on arbitrary hosts; any dotted host is accepted.
        valid_pattern=re.compile(r".*\..*"),
        alternate_template="https://{username}/rss",
    ),
    "devto": FeedSource(
        id="devto",
        name="DEV.to",
        color="#0A0A0A",
        description="Import your DEV.to articles",
        placeholder="username",
        feed_template="https://dev.to/feed/{username}",
        strip_patterns=(_LEADING_AT,),
        valid_pattern=re.compile(r"[a-zA-Z0-9_]+"),
    ),
}


def get_platform(platform_id: str) -> Optional[FeedSource]:
    """Return the feed source for ``platform_id``, or None if unknown."""
    return PLATFORMS.get(platform_id)


def list_platforms() -> list[FeedSource]:
    """List all importable platforms in display order."""
    return list(PLATFORMS.values())


def resolve_feed(platform_id: Optional[str], username: Optional[str]) -> dict[str, Any]:
    """Resolve a platform handle to its feed URLs.

    Args:
        platform_id: Platform identifier (e.g. "substack").
        username: Handle or blog address as typed by the user.

    Returns:
        Dict with platform, cleaned username, feed_url and alternate_feed_url.

    Raises:
        MissingInputError: If platform or username is missing.
        InvalidPlatformError: If the platform is not registered.
        InvalidInputError: If the username fails the platform's format check.
    """
    if not platform_id:
        raise MissingInputError("platform", "Platform is required")
    if not username:
        raise MissingInputError("username", "Username/URL is required")

    source = get_platform(platform_id)
    if source is None:
        raise InvalidPlatformError(platform_id)
    if not source.validate_input(username):
        raise InvalidInputError(source.name, username)

    parsed = source.parse_username(username)
    return {
        "platform": source.id,
        "username": parsed,
        "feed_url": source.feed_url(parsed),
        "alternate_feed_url": source.alternate_feed_url(parsed),
    }
