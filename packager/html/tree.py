"""HTML tree helpers on top of BeautifulSoup.

Elements are `bs4.Tag` (name, ordered attrs, ordered contents) and text is
`bs4.NavigableString`. The `html.parser` builder keeps the authored structure,
so a document without `<head>` stays without one.
"""

from typing import FrozenSet, Iterator, Optional

from bs4 import BeautifulSoup, Tag
from bs4.dammit import EntitySubstitution
from bs4.element import PreformattedString
from bs4.formatter import HTMLFormatter

# https://www.w3.org/TR/html5/dom.html#metadata-content-2
METADATA_CONTENT: FrozenSet[str] = frozenset(
    {
        "base",
        "link",
        "meta",
        "noscript",
        "script",
        "style",
        "template",
        "title",
    }
)


class RawContent(PreformattedString):
    """Text child written to the output as-is, without entity substitution."""

    PREFIX = ""
    SUFFIX = ""


class SourceOrderFormatter(HTMLFormatter):
    """Writes attributes in authored order, void elements as `<x>` and empty attributes bare."""

    def attributes(self, tag: Tag):
        if tag.attrs is None:
            return []
        return [
            (key, None if self.empty_attributes_are_booleans and value == "" else value)
            for key, value in tag.attrs.items()
        ]


HTML_FORMATTER = SourceOrderFormatter(
    entity_substitution=EntitySubstitution.substitute_xml,
    void_element_close_prefix=None,
    empty_attributes_are_booleans=True,
)


def set_raw_content(node: Tag, contents: str) -> None:
    """Replace all children of `node` with `contents`, unparsed."""
    node.string = RawContent(contents)


def parse_html(code: str, parser: str = "html.parser") -> BeautifulSoup:
    return BeautifulSoup(code, parser)


def serialize_html(node: Tag) -> str:
    return node.decode(formatter=HTML_FORMATTER)


def find_tag(root: Tag, name: str) -> Optional[Tag]:
    """First element named `name` in document order, searching the whole tree."""
    return root.find(name)


def walk(root: Tag) -> Iterator[Tag]:
    """Depth-first pre-order iteration over the elements below `root`."""
    for node in root.descendants:
        if isinstance(node, Tag):
            yield node


def is_metadata_content(node: object) -> bool:
    return isinstance(node, Tag) and node.name in METADATA_CONTENT
