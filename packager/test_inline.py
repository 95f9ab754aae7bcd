"""Tests for splicing inline bundles into placeholder nodes."""

import asyncio

import pytest

from packager.graph.memory import InMemoryBundleGraph
from packager.html.inline import find_inline_bundle, replace_inline_content
from packager.html.tree import parse_html, serialize_html
from packager.models import Asset, OutputFormat

PLACEHOLDER = "data-parcel-key"


def inline_graph(make_bundle, *bundles_spec):
    graph = InMemoryBundleGraph()
    for bundle_id, unique_key, code, output_format in bundles_spec:
        graph.add_bundle(
            make_bundle(
                bundle_id,
                "js",
                is_inline=True,
                output_format=output_format,
                assets=[Asset(id=f"{bundle_id}-asset", type="js", unique_key=unique_key, code=code)],
            )
        )
    return graph


def run(soup, graph, renderer):
    return asyncio.run(replace_inline_content(soup, graph, renderer, PLACEHOLDER))


def test_placeholder_is_replaced_and_marker_removed(make_bundle, renderer):
    graph = inline_graph(make_bundle, ("inline", "k1", "run()", OutputFormat.GLOBAL))
    soup = parse_html('<script data-parcel-key="k1"></script>')

    run(soup, graph, renderer)

    assert serialize_html(soup) == "<script>run()</script>"
    assert renderer.calls == ["inline"]


def test_esmodule_bundle_marks_script_as_module(make_bundle, renderer):
    graph = inline_graph(make_bundle, ("inline", "k1", "import('x')", OutputFormat.ESMODULE))
    soup = parse_html('<script data-parcel-key="k1"></script>')

    run(soup, graph, renderer)

    assert serialize_html(soup) == "<script type=\"module\">import('x')</script>"


def test_style_placeholder_gets_css(make_bundle, renderer):
    graph = inline_graph(make_bundle, ("inline-css", "css-key", "", OutputFormat.GLOBAL))
    renderer.contents_by_bundle["inline-css"] = "body > p { color: red }"
    soup = parse_html('<style data-parcel-key="css-key">old</style>')

    run(soup, graph, renderer)

    assert serialize_html(soup) == "<style>body > p { color: red }</style>"


def test_unresolved_placeholder_is_left_unchanged(make_bundle, renderer):
    graph = inline_graph(make_bundle, ("inline", "k1", "run()", OutputFormat.GLOBAL))
    source = '<script data-parcel-key="missing">original()</script>'
    soup = parse_html(source)

    run(soup, graph, renderer)

    assert serialize_html(soup) == source
    assert renderer.calls == []


def test_placeholders_resolve_in_document_order(make_bundle, renderer):
    graph = inline_graph(
        make_bundle,
        ("first", "k1", "one()", OutputFormat.GLOBAL),
        ("second", "k2", "two()", OutputFormat.GLOBAL),
    )
    soup = parse_html('<div><script data-parcel-key="k2"></script></div><script data-parcel-key="k1"></script>')

    run(soup, graph, renderer)

    assert renderer.calls == ["second", "first"]
    assert serialize_html(soup) == "<div><script>two()</script></div><script>one()</script>"


def test_contents_are_spliced_raw(make_bundle, renderer):
    graph = inline_graph(make_bundle, ("fragment", "frag", "", OutputFormat.GLOBAL))
    renderer.contents_by_bundle["fragment"] = "<p>a & b</p>"
    soup = parse_html('<template data-parcel-key="frag"></template>')

    run(soup, graph, renderer)

    assert serialize_html(soup) == "<template><p>a & b</p></template>"


def test_first_matching_bundle_wins(make_bundle):
    graph = inline_graph(
        make_bundle,
        ("first", "same", "", OutputFormat.GLOBAL),
        ("second", "same", "", OutputFormat.GLOBAL),
    )

    assert find_inline_bundle(graph, "same").id == "first"
    assert find_inline_bundle(graph, "other") is None


def test_bundles_without_entry_never_match(make_bundle):
    graph = InMemoryBundleGraph()
    graph.add_bundle(
        make_bundle("no-entry", "js", assets=[Asset(id="a", type="js", unique_key="k")], entry_asset_ids=[])
    )

    assert find_inline_bundle(graph, "k") is None


def test_render_failure_propagates(make_bundle):
    graph = inline_graph(make_bundle, ("inline", "k1", "run()", OutputFormat.GLOBAL))
    soup = parse_html('<script data-parcel-key="k1"></script>')

    async def failing_renderer(bundle, bundle_graph):
        raise RuntimeError(f"cannot render {bundle.id}")

    with pytest.raises(RuntimeError, match="cannot render inline"):
        run(soup, graph, failing_renderer)


def test_unresolved_placeholder_keeps_authored_attributes(make_bundle, renderer):
    graph = inline_graph(make_bundle, ("inline", "k1", "run()", OutputFormat.GLOBAL))
    source = '<script data-parcel-key="missing" defer src="a.js?x=1&amp;y=2" nonce="n1">x()</script>'
    soup = parse_html(source)

    run(soup, graph, renderer)

    assert serialize_html(soup) == source
