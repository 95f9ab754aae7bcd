"""Shared builders for packager tests."""

from typing import List, Optional

import pytest

from packager.graph.memory import InMemoryBundleGraph
from packager.models import Asset, Bundle, BundleGroup, BundleResult, Dependency, Environment, OutputFormat, Target


def build_bundle(
    bundle_id: str,
    bundle_type: str,
    name: Optional[str] = None,
    public_url: str = "/static",
    output_format: OutputFormat = OutputFormat.GLOBAL,
    is_inline: bool = False,
    assets: Optional[List[Asset]] = None,
    entry_asset_ids: Optional[List[str]] = None,
) -> Bundle:
    if assets is None:
        assets = [Asset(id=f"{bundle_id}-asset", type=bundle_type)]
    if entry_asset_ids is None:
        entry_asset_ids = [assets[0].id] if assets else []
    return Bundle(
        id=bundle_id,
        type=bundle_type,
        name=name,
        target=Target(public_url=public_url),
        env=Environment(output_format=output_format),
        is_inline=is_inline,
        assets=assets,
        entry_asset_ids=entry_asset_ids,
    )


@pytest.fixture
def make_bundle():
    return build_bundle


@pytest.fixture
def app_graph():
    """
    An index.html referencing app.js, which imports app.css. The page also has
    an inline module script that shares vendor.js with the page.

    <script src="dep-app"> points at the app group; the inline script body is
    the inline-main bundle.
    """
    html = build_bundle(
        "html",
        "html",
        name="index.html",
        assets=[
            Asset(
                id="html-asset",
                type="html",
                code=(
                    "<html><head><title>App</title></head><body>"
                    '<script src="dep-app"></script>'
                    '<script data-parcel-key="inline-key"></script>'
                    "</body></html>"
                ),
            )
        ],
    )
    app_js = build_bundle("app-js", "js", name="app.js", assets=[Asset(id="app-asset", type="js")])
    app_css = build_bundle("app-css", "css", name="app.css", assets=[Asset(id="app-css-asset", type="css")])
    inline_main = build_bundle(
        "inline-main",
        "js",
        output_format=OutputFormat.ESMODULE,
        is_inline=True,
        assets=[Asset(id="inline-asset", type="js", unique_key="inline-key", code="console.log(1)")],
    )
    vendor = build_bundle("vendor-js", "js", name="vendor.js", assets=[Asset(id="vendor-asset", type="js")])

    graph = InMemoryBundleGraph()
    for bundle in [html, app_js, app_css, inline_main, vendor]:
        graph.add_bundle(bundle)

    graph.add_bundle_group(
        BundleGroup(id="g-html", entry_asset_id="html-asset", bundle_ids=["html", "inline-main", "vendor-js"])
    )
    graph.add_bundle_group(BundleGroup(id="g-app", entry_asset_id="app-asset", bundle_ids=["app-js", "app-css"]))
    graph.add_dependency(Dependency(id="dep-app", source_bundle_id="html", bundle_group_id="g-app", is_url=True))
    return graph


class RecordingRenderer:
    """Inline renderer returning canned contents and recording calls."""

    def __init__(self, contents_by_bundle=None):
        self.contents_by_bundle = contents_by_bundle or {}
        self.calls: List[str] = []

    async def __call__(self, bundle, bundle_graph):
        self.calls.append(bundle.id)
        default = "".join(asset.code for asset in bundle.assets)
        return BundleResult(contents=self.contents_by_bundle.get(bundle.id, default))


@pytest.fixture
def renderer():
    return RecordingRenderer()
