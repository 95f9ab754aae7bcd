"""Default renderer for inline bundles."""

from typing import Optional

from loguru import logger

from packager.config import PackagerConfig
from packager.graph.base import BundleGraphAccessor
from packager.html.packager import HTMLPackager
from packager.models import Bundle, BundleResult
from packager.urls import replace_url_references


class DefaultInlineRenderer:
    """
    Renders inline bundles from their already compiled assets.

    HTML bundles recurse into the HTML packager; every other type is the
    concatenated code of its assets with URL placeholders resolved.

    Usage:
        renderer = DefaultInlineRenderer()
        result = await HTMLPackager().package(bundle, graph, renderer)
    """

    def __init__(self, config: Optional[PackagerConfig] = None):
        self.config = config or PackagerConfig()

    async def __call__(self, bundle: Bundle, bundle_graph: BundleGraphAccessor) -> BundleResult:
        logger.debug(f"Rendering inline bundle {bundle.id} ({bundle.type})")

        if bundle.type == "html":
            return await HTMLPackager(self.config).package(bundle, bundle_graph, self)

        code = self.config.asset_separator.join(asset.code for asset in bundle.traverse_assets())
        contents = replace_url_references(
            bundle=bundle,
            bundle_graph=bundle_graph,
            contents=code,
            relative=False,
        )
        return BundleResult(contents=contents)
