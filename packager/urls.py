"""Bundle URL helpers and the final URL placeholder rewrite."""

import posixpath
from typing import Optional
from urllib.parse import urlsplit, urlunsplit

from loguru import logger

from packager.errors import MissingBundleFieldError
from packager.graph.base import BundleGraphAccessor
from packager.models import Bundle, BundleGroup


def url_join(public_url: str, asset_path: str) -> str:
    """Join a public URL prefix and a bundle path with exactly one separator.

    Scheme and host of absolute URLs are kept, `.`/`..` segments are
    normalized and query/fragment parts of the asset path are carried over.

    Examples:
        url_join("/static", "a.css")              -> "/static/a.css"
        url_join("/static/", "/a.css")            -> "/static/a.css"
        url_join("https://cdn.example", "a.js")   -> "https://cdn.example/a.js"
    """
    base = urlsplit(public_url)
    asset = urlsplit(asset_path)

    path = posixpath.join(base.path, asset.path.lstrip("/"))
    path = posixpath.normpath(path) if path else path
    if path == ".":
        path = ""
    if base.netloc and not path.startswith("/"):
        path = "/" + path

    return urlunsplit((base.scheme, base.netloc, path, asset.query, asset.fragment))


def get_bundle_url(bundle: Bundle) -> str:
    """Public URL of a bundle. Raises MissingBundleFieldError without a target or name."""
    if bundle.target is None:
        raise MissingBundleFieldError("Bundle has no target to build its URL from", bundle.id)
    if not bundle.name:
        raise MissingBundleFieldError("Bundle has no name to build its URL from", bundle.id)
    return url_join(bundle.target.public_url, bundle.name)


def relative_bundle_path(from_bundle: Bundle, to_bundle: Bundle) -> str:
    """POSIX path of `to_bundle` relative to the directory of `from_bundle`."""
    if not from_bundle.name:
        raise MissingBundleFieldError("Bundle has no name to resolve relative paths from", from_bundle.id)
    if not to_bundle.name:
        raise MissingBundleFieldError("Bundle has no name to build its URL from", to_bundle.id)
    start = posixpath.dirname(from_bundle.name) or "."
    return posixpath.relpath(to_bundle.name, start)


def get_main_bundle(bundle_graph: BundleGraphAccessor, bundle_group: BundleGroup) -> Optional[Bundle]:
    """The bundle of a group holding the group's entry asset."""
    for candidate in bundle_graph.get_bundles_in_bundle_group(bundle_group):
        if any(asset.id == bundle_group.entry_asset_id for asset in candidate.get_entry_assets()):
            return candidate
    return None


def replace_url_references(
    bundle: Bundle,
    bundle_graph: BundleGraphAccessor,
    contents: str,
    relative: bool = False,
) -> str:
    """Replace URL dependency placeholders in `contents` with final URLs.

    Args:
        bundle: Bundle whose rendered contents are being finalized
        bundle_graph: Graph used to resolve the URL dependencies
        contents: Rendered contents holding dependency ids as placeholders
        relative: Emit paths relative to `bundle` instead of public URLs

    Returns:
        Contents with every resolvable placeholder replaced
    """
    for dependency in bundle_graph.get_url_dependencies(bundle):
        bundle_group = bundle_graph.resolve_external_dependency(dependency)
        resolved = get_main_bundle(bundle_graph, bundle_group) if bundle_group else None
        if resolved is None or resolved.is_inline:
            logger.debug(f"URL dependency {dependency.id} of {bundle.id} is unresolved, leaving placeholder")
            continue

        url = relative_bundle_path(bundle, resolved) if relative else get_bundle_url(resolved)
        contents = contents.replace(dependency.id, url)

    return contents
