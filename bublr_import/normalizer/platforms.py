"""Platform-specific rule sets.

Each source platform wraps article bodies in its own widgets, cards and
footers. The rule sets below remove or flatten those before the universal
pass runs. Order within a set matters: image extraction always runs before
anything that could discard the ``<img>`` it reads.

Class names are matched against the platforms' current markup conventions
(e.g. Ghost ``kg-card``, WordPress ``wp-block-*``) as they appear in feeds.
"""

import re

from bs4 import Tag

from bublr_import.normalizer.rules import (
    Rule,
    all_of,
    attribute_mentions,
    bookmark_to_link,
    class_contains,
    class_equals,
    class_prefix,
    comment_rule,
    delete,
    element_rule,
    figure_to_image,
    has_attribute,
    is_blank,
    meaningful_children,
    strip_attributes,
    tag_is,
    text_rule,
    trailing_text_rule,
    unwrap,
)
from bublr_import.normalizer.schema import Platform

_TRAILING_ELLIPSIS = re.compile(r"\.\.\.\s*\Z")
_WP_BLOCK_COMMENT = re.compile(r"/?wp:", re.IGNORECASE)
_LIQUID_TAG = re.compile(r"\{% \w+[^%]*%\}")


# =============================================================================
# Medium
# =============================================================================


def _is_continue_reading_link(tag: Tag) -> bool:
    return (
        tag.name == "a"
        and tag.find(True) is None
        and tag.get_text().lstrip().lower().startswith("continue reading")
    )


def _is_attribution_paragraph(tag: Tag) -> bool:
    return tag.name == "p" and "originally published" in tag.get_text().lower()


def _is_medium_link_paragraph(tag: Tag) -> bool:
    if tag.name != "p":
        return False
    children = meaningful_children(tag)
    return (
        len(children) == 1
        and isinstance(children[0], Tag)
        and attribute_mentions("a", "medium.com")(children[0])
    )


MEDIUM_RULES: tuple[Rule, ...] = (
    element_rule("medium-figures", tag_is("figure"), figure_to_image),
    element_rule("medium-tracking-pixels", attribute_mentions("img", "medium.com/stat", "1x1"), delete),
    element_rule("medium-continue-reading", _is_continue_reading_link, delete),
    trailing_text_rule("medium-trailing-ellipsis", _TRAILING_ELLIPSIS),
    element_rule("medium-attribution", _is_attribution_paragraph, delete),
    element_rule("medium-link-paragraphs", _is_medium_link_paragraph, delete),
)


# =============================================================================
# Substack
# =============================================================================


def _is_subscription_widget(tag: Tag) -> bool:
    return (
        class_prefix("div", "subscription-widget")(tag)
        or class_prefix("div", "subscribe-widget")(tag)
    )


SUBSTACK_RULES: tuple[Rule, ...] = (
    element_rule("substack-subscription-widgets", _is_subscription_widget, delete),
    element_rule("substack-image-containers", class_equals("div", "captioned-image-container"), unwrap),
    element_rule("substack-figures", tag_is("figure"), figure_to_image),
    element_rule("substack-share-buttons", class_prefix("div", "share"), delete),
    element_rule("substack-subscribe-links", class_contains("a", "subscribe"), delete),
    element_rule("substack-post-footer", class_prefix("div", "post-footer"), delete),
)


# =============================================================================
# Blogger
# =============================================================================


def _is_more_marker(tag: Tag) -> bool:
    return tag.name == "a" and str(tag.get("name", "")).lower() == "more" and is_blank(tag)


BLOGGER_RULES: tuple[Rule, ...] = (
    element_rule("blogger-post-footer", class_equals("div", "blogger-post-footer"), delete),
    element_rule("blogger-footer", class_equals("div", "post-footer"), delete),
    element_rule("blogger-share-buttons", class_prefix("div", "post-share-buttons"), delete),
    element_rule("blogger-separators", class_equals("div", "separator"), unwrap),
    element_rule("blogger-more-markers", _is_more_marker, delete),
)


# =============================================================================
# Hashnode
# =============================================================================


HASHNODE_RULES: tuple[Rule, ...] = (
    element_rule("hashnode-embeds", class_prefix("div", "embed"), delete),
    element_rule("hashnode-code-language", has_attribute("pre", "data-language"), strip_attributes),
    element_rule("hashnode-reactions", class_prefix("div", "reactions"), delete),
)


# =============================================================================
# WordPress
# =============================================================================


WORDPRESS_RULES: tuple[Rule, ...] = (
    comment_rule("wordpress-block-comments", _WP_BLOCK_COMMENT),
    element_rule("wordpress-galleries", class_prefix("div", "wp-block-gallery"), unwrap),
    element_rule("wordpress-image-blocks", class_prefix("figure", "wp-block-image"), figure_to_image),
    element_rule("wordpress-sharedaddy", class_prefix("div", "sharedaddy"), delete),
    element_rule("wordpress-like-buttons", class_prefix("div", "wp-block-jetpack-like"), delete),
)


# =============================================================================
# Ghost
# =============================================================================


def _has_link(tag: Tag) -> bool:
    return tag.find("a", href=True) is not None


GHOST_RULES: tuple[Rule, ...] = (
    element_rule("ghost-card-wrappers", class_prefix("div", "kg-card"), unwrap),
    element_rule("ghost-image-cards", class_prefix("figure", "kg-card kg-image-card"), figure_to_image),
    element_rule(
        "ghost-bookmark-cards",
        all_of(class_prefix("figure", "kg-card kg-bookmark-card"), _has_link),
        bookmark_to_link,
    ),
    element_rule("ghost-embed-cards", class_prefix("figure", "kg-card kg-embed-card"), delete),
)


# =============================================================================
# DEV.to
# =============================================================================


DEVTO_RULES: tuple[Rule, ...] = (
    text_rule("devto-liquid-tags", _LIQUID_TAG),
    element_rule("devto-liquid-embeds", class_prefix("div", "ltag"), delete),
    element_rule("devto-tag-badges", class_prefix("span", "tag"), delete),
)


PLATFORM_RULES: dict[Platform, tuple[Rule, ...]] = {
    Platform.MEDIUM: MEDIUM_RULES,
    Platform.SUBSTACK: SUBSTACK_RULES,
    Platform.BLOGGER: BLOGGER_RULES,
    Platform.HASHNODE: HASHNODE_RULES,
    Platform.WORDPRESS: WORDPRESS_RULES,
    Platform.GHOST: GHOST_RULES,
    Platform.DEVTO: DEVTO_RULES,
    Platform.GENERIC: (),
}
