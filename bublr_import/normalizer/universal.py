"""Universal cleaning pass.

Runs after every platform rule set and reduces the document to the editor
schema: paragraphs, h1-h3, blockquote, pre/code, lists, links carrying only
``href`` and images. Tags outside that vocabulary are not targeted and pass
through with their presentation attributes stripped.

The pass is idempotent: cleaning already-clean output changes nothing.
"""

import re

from bs4 import BeautifulSoup, Tag

from bublr_import.normalizer.render import parse, render
from bublr_import.normalizer.rules import (
    Rule,
    delete,
    element_rule,
    is_blank,
    is_text,
    keep_attributes,
    rename,
    strip_attributes,
    tag_is,
)

STRIPPED_ATTRIBUTES = frozenset({"class", "style", "id"})

_EXCESS_NEWLINES = re.compile(r"\n{3,}")
_INTER_TAG_WHITESPACE = re.compile(r">\s+<")


def _is_empty_paragraph(tag: Tag) -> bool:
    if tag.name != "p":
        return False
    breaks = 0
    for child in tag.children:
        if is_text(child):
            if child.strip():
                return False
        elif isinstance(child, Tag) and child.name == "br":
            breaks += 1
        else:
            return False
    return breaks <= 1


def _is_empty_link(tag: Tag) -> bool:
    return tag.name == "a" and is_blank(tag)


def _strip_presentation(soup: BeautifulSoup) -> int:
    count = 0
    for tag in soup.find_all(True):
        kept = {
            name: value for name, value in tag.attrs.items()
            if name.lower() not in STRIPPED_ATTRIBUTES and not name.lower().startswith("data-")
        }
        if len(kept) != len(tag.attrs):
            tag.attrs = kept
            count += 1
    return count


def _prune_emptied(soup: BeautifulSoup) -> int:
    """Drop links and paragraphs left empty by later deletions in this pass.

    Removing an element can empty its parent, so sweeps repeat until one
    removes nothing.
    """
    count = 0
    while True:
        removed = 0
        for selector in (_is_empty_link, _is_empty_paragraph):
            for tag in soup.find_all(selector):
                if not tag.decomposed:
                    tag.decompose()
                    removed += 1
        if not removed:
            return count
        count += removed


UNIVERSAL_RULES: tuple[Rule, ...] = (
    element_rule("drop-scripts", tag_is("script", "style", "noscript", "iframe"), delete),
    element_rule("drop-empty-paragraphs", _is_empty_paragraph, delete),
    element_rule("bare-headings", tag_is("h1", "h2", "h3"), strip_attributes),
    element_rule("demote-headings", tag_is("h4", "h5", "h6"), rename("h3")),
    Rule("strip-presentation-attributes", _strip_presentation),
    element_rule("bare-quotes-and-code", tag_is("blockquote", "pre", "code"), strip_attributes),
    element_rule("links-href-only", tag_is("a"), keep_attributes("href")),
    element_rule("drop-empty-links", _is_empty_link, delete),
    element_rule("bare-lists", tag_is("ul", "ol", "li"), strip_attributes),
    element_rule("drop-rules", tag_is("hr"), delete),
    Rule("prune-emptied", _prune_emptied),
)


def apply_rules(soup: BeautifulSoup, rules: tuple[Rule, ...], rewrites: dict[str, int]) -> None:
    """Apply ``rules`` in order, accumulating non-zero rewrite counts."""
    for rule in rules:
        count = rule.apply(soup)
        if count:
            rewrites[rule.name] = rewrites.get(rule.name, 0) + count


def finalize(soup: BeautifulSoup) -> str:
    """Serialize and tidy whitespace: cap blank lines, drop inter-tag gaps, trim."""
    markup = render(soup)
    markup = _EXCESS_NEWLINES.sub("\n\n", markup)
    markup = _INTER_TAG_WHITESPACE.sub("><", markup)
    return markup.strip()


def universal_clean(html: str) -> str:
    """Run only the universal pass over ``html``."""
    if not html:
        return ""
    soup = parse(html)
    apply_rules(soup, UNIVERSAL_RULES, {})
    return finalize(soup)
