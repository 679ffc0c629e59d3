"""CLI commands: csssnap parse / csssnap specificity -- inspect selectors."""

from __future__ import annotations

import sys

import click

from csssnap.selector import ParsingError, calculate, parse_selector
from csssnap.selector.ast import (
    AttributeSelector,
    Combinator,
    Node,
)


def _echo_tree(node: Node, indent: int = 0) -> None:
    pad = "  " * indent
    if isinstance(node, Combinator):
        name = "descendant" if node.operator == " " else node.operator
        click.echo(f"{pad}Combinator {name}")
        _echo_tree(node.left, indent + 1)
        _echo_tree(node.right, indent + 1)
        return
    click.echo(f"{pad}CompoundSelector")
    for simple in node.selectors:
        kind = "AttributeSelector" if isinstance(simple, AttributeSelector) else "Selector"
        click.echo(f"{pad}  {kind} {simple}")


@click.command()
@click.argument("selector")
def parse(selector: str) -> None:
    """Parse a selector and print its syntax tree.

    Exits with code 1 and the error position if the selector is invalid.
    """
    try:
        node = parse_selector(selector)
    except ParsingError as exc:
        click.echo(f"Invalid selector {selector!r}", err=True)
        click.echo(f"  {exc}", err=True)
        failing_line = selector.split("\n")[exc.line - 1]
        click.echo(f"  {failing_line}", err=True)
        click.echo(f"  {' ' * (exc.column - 1)}^", err=True)
        sys.exit(1)

    _echo_tree(node)
    click.echo(f"Normalized: {node}")


@click.command()
@click.argument("selectors", nargs=-1, required=True)
def specificity(selectors: tuple[str, ...]) -> None:
    """Print the specificity of each selector, highest first."""
    scored = sorted(
        ((calculate(s), s) for s in selectors), key=lambda item: item[0], reverse=True
    )
    for score, selector in scored:
        click.echo(f"{score}  {selector}")
