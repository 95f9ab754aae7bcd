"""
Bundle references - surfaces sibling bundles as <link>/<script> tags.

A <script> in the source HTML may import CSS, which the build pipeline extracts
into a sibling bundle of the JS. The HTML has to reference that bundle itself.
"""

from typing import List, Optional

from bs4 import BeautifulSoup, Tag
from loguru import logger

from packager.graph.base import BundleGraphAccessor
from packager.html.tree import find_tag, is_metadata_content
from packager.models import Bundle
from packager.urls import get_bundle_url


def plan_bundle_references(
    bundle: Bundle, bundle_graph: BundleGraphAccessor, dedupe: bool = False
) -> List[Bundle]:
    """
    Compute the bundles that must be referenced from the HTML bundle.

    Args:
        bundle: The HTML bundle being packaged
        bundle_graph: Read-only build graph
        dedupe: Drop bundles already planned through another dependency

    Returns:
        Bundles in dependency order, followed by non-inline siblings
    """
    planned: List[Bundle] = []

    for dependency in bundle_graph.get_external_dependencies(bundle):
        bundle_group = bundle_graph.resolve_external_dependency(dependency)
        if bundle_group is None:
            # Not every dependency gets its own bundle group
            logger.debug(f"Dependency {dependency.id} of {bundle.id} has no bundle group, skipping")
            continue

        for candidate in bundle_graph.get_bundles_in_bundle_group(bundle_group):
            # The group's entry bundle is the one the HTML already represents
            if any(asset.id == bundle_group.entry_asset_id for asset in candidate.get_entry_assets()):
                continue
            planned.append(candidate)

    # Shared bundles, e.g. a library extracted from two inline scripts
    planned.extend(sibling for sibling in bundle_graph.get_sibling_bundles(bundle) if not sibling.is_inline)

    if dedupe:
        seen = set()
        unique: List[Bundle] = []
        for candidate in planned:
            if candidate.id not in seen:
                seen.add(candidate.id)
                unique.append(candidate)
        planned = unique

    return planned


def build_reference_tag(soup: BeautifulSoup, bundle: Bundle) -> Optional[Tag]:
    """Create the tag referencing a bundle, or None for types without a tag."""
    if bundle.type == "css":
        return soup.new_tag("link", attrs={"rel": "stylesheet", "href": get_bundle_url(bundle)})

    if bundle.type == "js":
        attrs = {}
        if bundle.is_esmodule:
            attrs["type"] = "module"
        attrs["src"] = get_bundle_url(bundle)
        return soup.new_tag("script", attrs=attrs)

    return None


def find_insert_index(container: Tag) -> int:
    """Index of the first element that is not metadata content, 0 if there is none."""
    for index, node in enumerate(container.contents):
        if isinstance(node, Tag) and not is_metadata_content(node):
            return index
    return 0


def add_tags_to_tree(tags: List[Tag], soup: BeautifulSoup) -> None:
    """Place reference tags where they keep the document well-formed."""
    head = find_tag(soup, "head")
    if head is not None:
        for tag in tags:
            head.append(tag)
        return

    html = find_tag(soup, "html")
    container = html if html is not None else soup
    index = find_insert_index(container)

    for offset, tag in enumerate(tags):
        container.insert(index + offset, tag)


def insert_bundle_references(bundles: List[Bundle], soup: BeautifulSoup) -> BeautifulSoup:
    """Synthesize a tag per bundle and insert them into the tree."""
    tags: List[Tag] = []
    for bundle in bundles:
        tag = build_reference_tag(soup, bundle)
        if tag is None:
            logger.debug(f"No reference tag for bundle {bundle.id} of type {bundle.type}")
            continue
        tags.append(tag)

    add_tags_to_tree(tags, soup)
    return soup
