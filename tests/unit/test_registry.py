"""Unit tests for the import source registry."""

import pytest

from bublr_import.core.exceptions import (
    InvalidInputError,
    InvalidPlatformError,
    MissingInputError,
    PermanentError,
)
from bublr_import.normalizer import Platform
from bublr_import.sources import PLATFORMS, get_platform, list_platforms, resolve_feed


class TestRegistry:
    """Platform descriptors."""

    def test_display_order(self):
        """Platforms are listed in import-picker order."""
        assert [source.id for source in list_platforms()] == [
            "medium", "substack", "blogger", "hashnode", "wordpress", "ghost", "devto",
        ]

    def test_every_source_has_a_rule_set(self):
        """Each importable platform maps to a normalizer platform."""
        for source_id in PLATFORMS:
            assert Platform.resolve(source_id) is not Platform.GENERIC

    def test_unknown_platform(self):
        """Unknown identifiers return None."""
        assert get_platform("myspace") is None

    def test_to_dict_fields(self):
        """Serialized descriptors carry display fields only."""
        assert get_platform("medium").to_dict() == {
            "id": "medium",
            "name": "Medium",
            "color": "#000000",
            "description": "Import your Medium articles",
            "placeholder": "@username",
        }


class TestUsernameParsing:
    """Handle cleaning and validation per platform."""

    @pytest.mark.parametrize(
        "platform_id,value,expected",
        [
            ("medium", "@jane.doe", "jane.doe"),
            ("medium", "  jane_doe  ", "jane_doe"),
            ("substack", "mynews.substack.com/archive", "mynews"),
            ("blogger", "https://myblog.blogspot.com/", "myblog"),
            ("blogger", "myblog/", "myblog"),
            ("hashnode", "dev-notes.hashnode.dev", "dev-notes"),
            ("wordpress", "http://site.wordpress.com/2024/", "site"),
            ("ghost", "https://blog.example.com/", "blog.example.com"),
            ("devto", "@ben", "ben"),
        ],
    )
    def test_parse_username(self, platform_id, value, expected):
        """URLs and prefixes are reduced to the bare handle."""
        assert get_platform(platform_id).parse_username(value) == expected

    @pytest.mark.parametrize(
        "platform_id,value",
        [
            ("medium", "jane doe"),
            ("substack", "my_news"),
            ("blogger", "my.blog"),
            ("hashnode", "   "),
            ("wordpress", "site!"),
            ("ghost", "localhost"),
            ("devto", "ben-dover"),
        ],
    )
    def test_invalid_input(self, platform_id, value):
        """Handles outside the platform's character set are rejected."""
        assert get_platform(platform_id).validate_input(value) is False

    @pytest.mark.parametrize(
        "platform_id,value",
        [
            ("medium", "@jane.doe"),
            ("substack", "my-news"),
            ("ghost", "blog.example.com"),
            ("devto", "ben_dover"),
        ],
    )
    def test_valid_input(self, platform_id, value):
        """Well-formed handles are accepted."""
        assert get_platform(platform_id).validate_input(value) is True


class TestResolveFeed:
    """Feed URL resolution."""

    def test_medium(self):
        """Medium feeds live under the @handle."""
        assert resolve_feed("medium", "@jane") == {
            "platform": "medium",
            "username": "jane",
            "feed_url": "https://medium.com/feed/@jane",
            "alternate_feed_url": None,
        }

    def test_blogger_has_alternate(self):
        """Blogger resolves an RSS feed plus the Atom default."""
        result = resolve_feed("blogger", "https://myblog.blogspot.com")

        assert result["feed_url"] == (
            "https://myblog.blogspot.com/feeds/posts/default?alt=rss&max-results=50"
        )
        assert result["alternate_feed_url"] == "https://myblog.blogspot.com/feeds/posts/default"

    def test_ghost_uses_host(self):
        """Ghost feeds hang off the blog's own host."""
        result = resolve_feed("ghost", "https://blog.example.com/")

        assert result["feed_url"] == "https://blog.example.com/rss/"
        assert result["alternate_feed_url"] == "https://blog.example.com/rss"

    @pytest.mark.parametrize(
        "platform_id,username,error,message",
        [
            (None, "jane", MissingInputError, "Platform is required"),
            ("", "jane", MissingInputError, "Platform is required"),
            ("medium", None, MissingInputError, "Username/URL is required"),
            ("medium", "", MissingInputError, "Username/URL is required"),
            ("myspace", "jane", InvalidPlatformError, "Invalid platform"),
            ("substack", "bad_name", InvalidInputError, "Invalid Substack username/URL format"),
            ("devto", "a-b", InvalidInputError, "Invalid DEV.to username/URL format"),
        ],
    )
    def test_errors(self, platform_id, username, error, message):
        """Each failure raises a client error with its message."""
        with pytest.raises(error) as exc_info:
            resolve_feed(platform_id, username)

        assert exc_info.value.message == message
        assert isinstance(exc_info.value, PermanentError)
