"""CLI command: csssnap check -- assert styles on an element of an HTML file."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from csssnap.config import MatchConfig, Resolution
from csssnap.dom import describe_element, load_document, select_one
from csssnap.matching import resolve
from csssnap.selector import ParsingError
from csssnap.stylesheet import StylesheetParseError, StylesheetRegistry, stylesheet_id


def _parse_expectations(items: tuple[str, ...]) -> dict[str, str]:
    expected: dict[str, str] = {}
    for item in items:
        prop, sep, value = item.partition("=")
        if not sep or not prop.strip():
            raise click.BadParameter(f"expected PROPERTY=VALUE, got {item!r}")
        expected[prop.strip()] = value.strip()
    return expected


@click.command()
@click.argument("htmlfile", type=click.Path(exists=True))
@click.option(
    "--css", "cssfiles", multiple=True, type=click.Path(exists=True),
    help="Compiled CSS file to register (repeatable).",
)
@click.option("--selector", "-s", required=True, help="Selector of the element to check.")
@click.option(
    "--expect", "-e", "expectations", multiple=True, required=True,
    help="Expected style as PROPERTY=VALUE (repeatable).",
)
@click.option("--cascade", is_flag=True, help="Compare only the winning declaration.")
def check(
    htmlfile: str,
    cssfiles: tuple[str, ...],
    selector: str,
    expectations: tuple[str, ...],
    cascade: bool,
) -> None:
    """Check that an element in HTMLFILE has the expected CSS styles.

    Style modules embedded in the document (``<style data-css-module>``) are
    registered alongside any --css files.  Exits with code 0 if every
    expected property matches, or code 1 otherwise.
    """
    expected = _parse_expectations(expectations)
    config = MatchConfig(resolution=Resolution.CASCADE if cascade else Resolution.ANY)

    registry = StylesheetRegistry()
    try:
        document = load_document(Path(htmlfile).read_text(encoding="utf-8"))
        registry.add_from_document(document, config.module_attribute)
        for cssfile in cssfiles:
            path = Path(cssfile)
            registry.add(stylesheet_id(str(path.resolve())), path.read_text(encoding="utf-8"))
    except StylesheetParseError as exc:
        click.echo(f"Parse error: {exc}", err=True)
        sys.exit(1)

    try:
        element = select_one(document, selector)
    except ParsingError as exc:
        click.echo(f"Invalid selector {selector!r}: {exc}", err=True)
        sys.exit(1)
    if element is None:
        click.echo(f"No element matches {selector!r}", err=True)
        sys.exit(1)

    result = resolve(element, registry, expected, config)
    if result.matched_all:
        click.echo(f"OK: {describe_element(element)} matches {len(expected)} style(s)")
        sys.exit(0)

    click.echo(result.describe())
    sys.exit(1)
