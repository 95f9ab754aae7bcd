"""
HTML Packager - turns a single HTML bundle into its final deployable document.

Pipeline: parse -> insert sibling bundle references -> splice inline bundles
-> serialize -> rewrite URL placeholders.
"""

import inspect
from functools import partial
from typing import Callable, List, Optional

from bs4 import BeautifulSoup
from loguru import logger

from packager.config import PackagerConfig
from packager.errors import PreconditionViolation
from packager.graph.base import BundleGraphAccessor
from packager.html.inline import InlineBundleRenderer, replace_inline_content
from packager.html.references import insert_bundle_references, plan_bundle_references
from packager.html.tree import parse_html, serialize_html
from packager.models import Bundle, BundleResult
from packager.urls import replace_url_references

URLFinalizer = Callable[..., str]


class HTMLPackager:
    """Packages HTML bundles produced by the build pipeline."""

    def __init__(
        self,
        config: Optional[PackagerConfig] = None,
        url_finalizer: URLFinalizer = replace_url_references,
    ):
        """
        Initialize the packager.

        Args:
            config: Packager settings, defaults when omitted
            url_finalizer: Rewrites URL placeholders in the serialized document
        """
        self.config = config or PackagerConfig()
        self.url_finalizer = url_finalizer

    async def package(
        self,
        bundle: Bundle,
        bundle_graph: BundleGraphAccessor,
        get_inline_bundle_contents: InlineBundleRenderer,
    ) -> BundleResult:
        """
        Package an HTML bundle.

        Args:
            bundle: The HTML bundle, holding exactly one asset
            bundle_graph: Read-only build graph
            get_inline_bundle_contents: Async renderer for inline bundles

        Returns:
            BundleResult with the final HTML

        Raises:
            PreconditionViolation: The bundle does not hold exactly one asset
            MissingBundleFieldError: A referenced bundle has no target or name
        """
        assets = list(bundle.traverse_assets())
        if len(assets) != 1:
            raise PreconditionViolation(
                f"HTML bundles must only contain one asset, found {len(assets)}", bundle.id
            )

        asset = assets[0]
        bundles = plan_bundle_references(bundle, bundle_graph, dedupe=self.config.dedupe_references)
        logger.debug(f"Bundle {bundle.id}: {len(bundles)} sibling bundle references planned")

        transforms: List[Callable] = [
            partial(insert_bundle_references, bundles),
            partial(
                replace_inline_content,
                bundle_graph=bundle_graph,
                get_inline_bundle_contents=get_inline_bundle_contents,
                placeholder_attribute=self.config.placeholder_attribute,
            ),
        ]

        soup = parse_html(asset.code, self.config.parser)
        try:
            soup = await self._run_transforms(soup, transforms)
        except Exception as e:
            logger.error(f"Packaging HTML bundle {bundle.id} failed: {e}")
            raise

        contents = self.url_finalizer(
            bundle=bundle,
            bundle_graph=bundle_graph,
            contents=serialize_html(soup),
            relative=False,
        )

        logger.info(f"Packaged HTML bundle {bundle.id} ({len(contents)} chars)")
        return BundleResult(contents=contents)

    @staticmethod
    async def _run_transforms(soup: BeautifulSoup, transforms: List[Callable]) -> BeautifulSoup:
        """Thread one tree through the transforms in order."""
        for transform in transforms:
            result = transform(soup)
            if inspect.isawaitable(result):
                result = await result
            soup = result
        return soup


async def package_html(
    bundle: Bundle,
    bundle_graph: BundleGraphAccessor,
    get_inline_bundle_contents: InlineBundleRenderer,
    config: Optional[PackagerConfig] = None,
) -> BundleResult:
    """Package an HTML bundle with a default HTMLPackager."""
    return await HTMLPackager(config).package(bundle, bundle_graph, get_inline_bundle_contents)
