"""
Inline content - splices rendered inline bundles into their placeholder nodes.

The build pipeline leaves a placeholder attribute holding an asset's unique key
on every <script>/<style> whose body was compiled as a separate inline bundle.
"""

from typing import Awaitable, Callable, List, Optional, Tuple

from bs4 import BeautifulSoup, Tag
from loguru import logger

from packager.graph.base import BundleGraphAccessor
from packager.html.tree import set_raw_content, walk
from packager.models import Bundle, BundleResult

InlineBundleRenderer = Callable[[Bundle, BundleGraphAccessor], Awaitable[BundleResult]]


def find_inline_bundle(bundle_graph: BundleGraphAccessor, unique_key: str) -> Optional[Bundle]:
    """First bundle in the graph whose main entry carries `unique_key`."""
    for candidate in bundle_graph.traverse_bundles():
        main_asset = candidate.get_main_entry()
        if main_asset is not None and main_asset.unique_key == unique_key:
            return candidate
    return None


async def get_inline_content(
    bundle_graph: BundleGraphAccessor,
    get_inline_bundle_contents: InlineBundleRenderer,
    unique_key: str,
) -> Optional[Tuple[Bundle, str]]:
    """Resolve a placeholder key and render its bundle. None when nothing matches."""
    inline_bundle = find_inline_bundle(bundle_graph, unique_key)
    if inline_bundle is None:
        return None

    result = await get_inline_bundle_contents(inline_bundle, bundle_graph)
    return inline_bundle, result.contents


def find_placeholder_nodes(soup: BeautifulSoup, placeholder_attribute: str) -> List[Tag]:
    return [node for node in walk(soup) if node.get(placeholder_attribute)]


async def replace_inline_content(
    soup: BeautifulSoup,
    bundle_graph: BundleGraphAccessor,
    get_inline_bundle_contents: InlineBundleRenderer,
    placeholder_attribute: str,
) -> BeautifulSoup:
    """
    Replace every placeholder node's content with its rendered inline bundle.

    Placeholders without a matching bundle are left untouched. Renderer
    failures propagate to the caller.

    Args:
        soup: Parsed HTML tree, mutated in place
        bundle_graph: Read-only build graph
        get_inline_bundle_contents: Async renderer for inline bundles
        placeholder_attribute: Attribute holding the inline asset's unique key

    Returns:
        The same tree
    """
    nodes = find_placeholder_nodes(soup, placeholder_attribute)

    for node in nodes:
        unique_key = node[placeholder_attribute]
        inline_content = await get_inline_content(bundle_graph, get_inline_bundle_contents, unique_key)
        if inline_content is None:
            logger.debug(f"No inline bundle for placeholder {unique_key}, leaving <{node.name}> unchanged")
            continue

        inline_bundle, contents = inline_content
        set_raw_content(node, contents)

        if inline_bundle.is_esmodule:
            node["type"] = "module"

        del node[placeholder_attribute]

    return soup
