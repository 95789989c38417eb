"""Rule primitives for tree-based HTML rewriting.

A rule is a named, in-place transformation of a parsed document that
reports how many rewrites it made. Most rules pair a selector (which
elements?) with an action (what happens to each one):

    rule = element_rule("drop-share", class_prefix("div", "share"), delete)

Selectors and actions are plain callables, so platform rule sets are just
ordered tuples of rules.
"""

import re
from dataclasses import dataclass
from typing import Callable

from bs4 import BeautifulSoup, Comment, NavigableString, Tag

Selector = Callable[[Tag], bool]
Action = Callable[[Tag, BeautifulSoup], None]
Transform = Callable[[BeautifulSoup], int]


@dataclass(frozen=True)
class Rule:
    """A named in-place rewrite of a parsed document."""

    name: str
    transform: Transform

    def apply(self, soup: BeautifulSoup) -> int:
        """Apply the rule and return the number of rewrites made."""
        return self.transform(soup)


def element_rule(name: str, selector: Selector, action: Action) -> Rule:
    """Build a rule that runs ``action`` on every element matching ``selector``.

    Matches are collected before any action runs. Elements destroyed by an
    earlier action (e.g. nested inside a deleted container) are skipped.
    """

    def transform(soup: BeautifulSoup) -> int:
        count = 0
        for element in soup.find_all(selector):
            if element.decomposed:
                continue
            action(element, soup)
            count += 1
        return count

    return Rule(name, transform)


# =============================================================================
# Element helpers
# =============================================================================


def class_string(tag: Tag) -> str:
    """Return the element's class attribute as a single lowercase string."""
    value = tag.get("class")
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        value = " ".join(value)
    return value.strip().lower()


def attribute_text(tag: Tag) -> str:
    """Return every attribute name and value of ``tag`` as one lowercase string."""
    parts = []
    for name, value in tag.attrs.items():
        if isinstance(value, (list, tuple)):
            value = " ".join(value)
        parts.append(f"{name}={value or ''}")
    return " ".join(parts).lower()


def is_text(node) -> bool:
    """True for plain text nodes (comments, doctypes and CDATA excluded)."""
    return type(node) is NavigableString


def meaningful_children(tag: Tag) -> list:
    """Children of ``tag`` other than whitespace-only text."""
    return [
        child for child in tag.children
        if not (is_text(child) and not child.strip())
    ]


def is_blank(tag: Tag) -> bool:
    """True when ``tag`` has no element children and only whitespace text."""
    return tag.find(True) is None and not tag.get_text().strip()


def first_image_src(tag: Tag) -> str | None:
    """Return the first non-empty ``src`` of an ``<img>`` inside ``tag``."""
    for img in tag.find_all("img"):
        src = img.get("src")
        if src:
            return src
    return None


# =============================================================================
# Selectors
# =============================================================================


def tag_is(*names: str) -> Selector:
    wanted = {name.lower() for name in names}
    return lambda tag: tag.name in wanted


def class_prefix(name: str, prefix: str) -> Selector:
    """Match ``<name>`` elements whose class attribute starts with ``prefix``."""
    prefix = prefix.lower()
    return lambda tag: tag.name == name and class_string(tag).startswith(prefix)


def class_equals(name: str, value: str) -> Selector:
    """Match ``<name>`` elements whose class attribute is exactly ``value``."""
    value = value.lower()
    return lambda tag: tag.name == name and class_string(tag) == value


def class_contains(name: str, fragment: str) -> Selector:
    """Match ``<name>`` elements whose class attribute contains ``fragment``."""
    fragment = fragment.lower()
    return lambda tag: tag.name == name and fragment in class_string(tag)


def has_attribute(name: str, attribute: str) -> Selector:
    return lambda tag: tag.name == name and tag.has_attr(attribute)


def attribute_mentions(name: str, *fragments: str) -> Selector:
    """Match ``<name>`` elements where any attribute mentions one of ``fragments``."""
    lowered = [fragment.lower() for fragment in fragments]

    def selector(tag: Tag) -> bool:
        if tag.name != name:
            return False
        text = attribute_text(tag)
        return any(fragment in text for fragment in lowered)

    return selector


def all_of(*selectors: Selector) -> Selector:
    return lambda tag: all(selector(tag) for selector in selectors)


# =============================================================================
# Actions
# =============================================================================


def delete(tag: Tag, soup: BeautifulSoup) -> None:
    """Remove the element and everything inside it."""
    tag.decompose()


def unwrap(tag: Tag, soup: BeautifulSoup) -> None:
    """Replace the element with its children."""
    tag.unwrap()


def replace(tag: Tag, replacement) -> None:
    """Swap ``tag`` for ``replacement`` and destroy the original subtree."""
    tag.replace_with(replacement)
    tag.decompose()


def strip_attributes(tag: Tag, soup: BeautifulSoup) -> None:
    """Drop every attribute from the element."""
    tag.attrs = {}


def keep_attributes(*names: str) -> Action:
    """Drop every attribute except ``names``."""
    keep = set(names)

    def action(tag: Tag, soup: BeautifulSoup) -> None:
        tag.attrs = {key: value for key, value in tag.attrs.items() if key in keep}

    return action


def rename(new_name: str) -> Action:
    """Rename the element and drop its attributes."""

    def action(tag: Tag, soup: BeautifulSoup) -> None:
        tag.name = new_name
        tag.attrs = {}

    return action


def figure_to_image(tag: Tag, soup: BeautifulSoup) -> None:
    """Collapse a figure to a bare ``<img src>``, or delete it if it has no image."""
    src = first_image_src(tag)
    if src is None:
        tag.decompose()
        return
    replace(tag, soup.new_tag("img", attrs={"src": src}))


def bookmark_to_link(tag: Tag, soup: BeautifulSoup) -> None:
    """Turn a bookmark card into a paragraph linking to its first URL."""
    href = tag.find("a", href=True)["href"]
    paragraph = soup.new_tag("p")
    link = soup.new_tag("a", attrs={"href": href})
    link.string = href
    paragraph.append(link)
    replace(tag, paragraph)


# =============================================================================
# Text and comment rules
# =============================================================================


def comment_rule(name: str, pattern: re.Pattern) -> Rule:
    """Build a rule deleting HTML comments whose stripped body matches ``pattern``."""

    def transform(soup: BeautifulSoup) -> int:
        count = 0
        for comment in soup.find_all(string=lambda node: isinstance(node, Comment)):
            if pattern.match(comment.strip()):
                comment.extract()
                count += 1
        return count

    return Rule(name, transform)


def text_rule(name: str, pattern: re.Pattern, replacement: str = "") -> Rule:
    """Build a rule substituting ``pattern`` inside every plain text node."""

    def transform(soup: BeautifulSoup) -> int:
        count = 0
        for node in list(soup.find_all(string=True)):
            if not is_text(node):
                continue
            updated, hits = pattern.subn(replacement, str(node))
            if hits:
                node.replace_with(updated)
                count += hits
        return count

    return Rule(name, transform)


def trailing_text_rule(name: str, pattern: re.Pattern) -> Rule:
    """Build a rule applying ``pattern`` to text that ends the document.

    Only the run of text nodes sitting at the very end of the document
    qualifies; text followed by a closing tag is left alone. The run is
    matched as one string, since deleting an element between two text
    nodes leaves them as separate siblings.
    """

    def transform(soup: BeautifulSoup) -> int:
        tail = []
        for node in reversed(soup.contents):
            if not is_text(node):
                break
            tail.append(node)
        if not tail:
            return 0
        tail.reverse()
        updated, hits = pattern.subn("", "".join(str(node) for node in tail))
        if hits:
            tail[0].replace_with(updated)
            for node in tail[1:]:
                node.extract()
        return hits

    return Rule(name, transform)
