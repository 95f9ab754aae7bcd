"""Package command."""

import asyncio
from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError

from packager import DefaultInlineRenderer, HTMLPackager, load_bundle_graph, load_config
from packager.errors import PackagingError


def package_bundle(manifest_path: Path, bundle_id: str, config_path: Optional[Path] = None) -> str:
    """Package one HTML bundle from a manifest and return the final HTML (internal function)."""
    config = load_config(config_path)
    bundle_graph = load_bundle_graph(manifest_path)

    try:
        bundle = bundle_graph.get_bundle(bundle_id)
    except KeyError:
        raise PackagingError("Unknown bundle", bundle_id)

    if bundle.type != "html":
        raise PackagingError(f"Expected an html bundle, got {bundle.type}", bundle_id)

    packager = HTMLPackager(config)
    result = asyncio.run(packager.package(bundle, bundle_graph, DefaultInlineRenderer(config)))
    return result.contents


@click.command()
@click.argument("manifest", type=click.Path(exists=True, file_okay=True, dir_okay=False, path_type=Path))
@click.argument("bundle_id", required=True)
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path), help="Write HTML to this file")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, file_okay=True, dir_okay=False, path_type=Path),
    help="JSON packager config",
)
def package(manifest: Path, bundle_id: str, output: Optional[Path], config_path: Optional[Path]):
    """Package an HTML bundle from a bundle graph manifest."""
    try:
        contents = package_bundle(manifest, bundle_id, config_path)
    except (PackagingError, ValidationError) as e:
        click.echo(f"❌ Packaging failed: {e}", err=True)
        raise click.Abort()
    except OSError as e:
        click.echo(f"❌ Could not read input: {e}", err=True)
        raise click.Abort()

    if output is None:
        click.echo(contents)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    with open(output, "w", encoding="utf-8") as f:
        f.write(contents)

    click.echo(f"✅ Wrote {output}", err=True)
