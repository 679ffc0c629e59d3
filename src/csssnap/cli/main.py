"""csssnap CLI entry point: Click group with subcommands."""

import logging

import click

from csssnap import __version__


@click.group()
@click.version_option(version=__version__, prog_name="csssnap")
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr.")
def cli(verbose: bool) -> None:
    """csssnap - check HTML elements against compiled CSS module styles."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# Import and register subcommands
from csssnap.cli.parse import parse, specificity  # noqa: E402
from csssnap.cli.rules import rules  # noqa: E402
from csssnap.cli.check import check  # noqa: E402

cli.add_command(parse)
cli.add_command(specificity)
cli.add_command(rules)
cli.add_command(check)
