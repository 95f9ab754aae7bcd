"""CLI entrypoint."""

import sys

import click
from loguru import logger

from packager import __version__

from .commands.package import package
from .commands.inspect import inspect


def configure_logging(verbose: bool) -> None:
    """Send loguru output to stderr at the requested level."""
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING")


@click.group()
@click.version_option(version=__version__, prog_name="html-packager")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
def cli(verbose: bool):
    """HTML packager - assemble deployable HTML from a bundle graph."""
    configure_logging(verbose)


cli.add_command(package)
cli.add_command(inspect)


if __name__ == "__main__":
    cli()
