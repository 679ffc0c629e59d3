"""CLI command: csssnap rules -- list the rules of compiled CSS files."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from csssnap.stylesheet import StylesheetParseError, StylesheetRegistry, stylesheet_id


@click.command()
@click.argument("cssfiles", nargs=-1, required=True, type=click.Path(exists=True))
def rules(cssfiles: tuple[str, ...]) -> None:
    """Parse compiled CSS files and list their rules in cascade order."""
    registry = StylesheetRegistry()
    for cssfile in cssfiles:
        path = Path(cssfile)
        try:
            registry.add(stylesheet_id(str(path.resolve())), path.read_text(encoding="utf-8"))
        except StylesheetParseError as exc:
            click.echo(f"Parse error in {path.name}: {exc}", err=True)
            sys.exit(1)

    for rule in registry.rules:
        click.echo(rule.key)
        for prop, value in rule.declarations.items():
            click.echo(f"  {prop}: {value}")
    click.echo()
    click.echo(f"Summary: {len(registry.rules)} rule(s) in {len(registry)} stylesheet(s)")
