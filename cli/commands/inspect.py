"""Inspect command."""

from pathlib import Path

import click
from pydantic import ValidationError

from packager import load_bundle_graph
from packager.errors import PackagingError
from packager.html.references import build_reference_tag, plan_bundle_references
from packager.html.tree import parse_html


@click.command()
@click.argument("manifest", type=click.Path(exists=True, file_okay=True, dir_okay=False, path_type=Path))
@click.argument("bundle_id", required=True)
@click.option("--dedupe", is_flag=True, help="Drop repeated bundles from the plan")
def inspect(manifest: Path, bundle_id: str, dedupe: bool):
    """List the bundle references an HTML bundle would receive."""
    try:
        bundle_graph = load_bundle_graph(manifest)
        bundle = bundle_graph.get_bundle(bundle_id)
        soup = parse_html("")
        for planned in plan_bundle_references(bundle, bundle_graph, dedupe=dedupe):
            tag = build_reference_tag(soup, planned)
            # Types without a tag never reach the output
            if tag is None:
                continue
            url = tag.get("href") if tag.name == "link" else tag.get("src")
            click.echo(f"{planned.type}\t{url}")
    except KeyError:
        click.echo(f"❌ Unknown bundle: {bundle_id}", err=True)
        raise click.Abort()
    except (PackagingError, ValidationError) as e:
        click.echo(f"❌ {e}", err=True)
        raise click.Abort()
