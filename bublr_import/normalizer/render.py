"""HTML parsing and serialization for normalized documents.

Fragments are parsed with lxml's HTML parser, which applies HTML's implied
end tags (``<p>a<p>b`` is two paragraphs, not one nested in the other).

BeautifulSoup's own output writes void elements as ``<img/>`` and
re-escapes entities its own way; the editor import expects
``<img src="..." />`` and otherwise untouched markup, so documents are
written out here instead.
"""

import html

from bs4 import BeautifulSoup, NavigableString, PageElement, Tag

VOID_ELEMENTS = frozenset({
    "area", "base", "br", "col", "embed", "hr", "img", "input",
    "link", "meta", "param", "source", "track", "wbr",
})

# An explicit body keeps leading text out of the parser's implied <p>.
_FRAGMENT_PREFIX = "<body>"


def parse(markup: str) -> BeautifulSoup:
    """Parse an HTML fragment; the returned document holds only its nodes."""
    soup = BeautifulSoup(_FRAGMENT_PREFIX + markup, "lxml")
    body = soup.body
    if body is None:
        return soup
    nodes = list(body.contents)
    soup.clear()
    for node in nodes:
        soup.append(node)
    return soup


def render(node: PageElement) -> str:
    """Serialize a document or element to an HTML string.

    Walks the tree with an explicit stack, so nesting depth is unbounded.
    """
    parts = []
    # Plain str entries are closing tags; everything else is a tree node.
    stack: list = [node]
    while stack:
        item = stack.pop()
        if type(item) is str:
            parts.append(item)
        elif isinstance(item, Tag):
            if not isinstance(item, BeautifulSoup):
                opening = item.name + _render_attributes(item)
                if item.name in VOID_ELEMENTS:
                    parts.append(f"<{opening} />")
                    continue
                parts.append(f"<{opening}>")
                stack.append(f"</{item.name}>")
            stack.extend(reversed(item.contents))
        elif type(item) is NavigableString:
            parts.append(_escape_text(str(item)))
        else:
            # Comments, doctypes, CDATA and processing instructions carry their own delimiters.
            parts.append(item.output_ready())
    return "".join(parts)


def _render_attributes(tag: Tag) -> str:
    parts = []
    for name, value in tag.attrs.items():
        if value is None:
            parts.append(f" {name}")
            continue
        if isinstance(value, (list, tuple)):
            value = " ".join(value)
        parts.append(f' {name}="{html.escape(value, quote=True)}"')
    return "".join(parts)


def _escape_text(text: str) -> str:
    return html.escape(text, quote=False).replace("\xa0", "&nbsp;")
