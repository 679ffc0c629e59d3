"""Selector matching against lxml elements, evaluated over the selector AST."""

from __future__ import annotations

from typing import Iterator

from lxml import etree

from csssnap.selector.ast import (
    ADJACENT_SIBLING,
    CHILD,
    DESCENDANT,
    GENERAL_SIBLING,
    AttributeExpression,
    AttributeSelector,
    Combinator,
    CompoundSelector,
    Node,
    Selector,
)
from csssnap.selector.parser import parse_selector

__all__ = ["compile_selector", "matches"]


def compile_selector(selector: str | Node) -> Node:
    if isinstance(selector, str):
        return parse_selector(selector)
    return selector


def matches(element: etree._Element, selector: str | Node) -> bool:
    """True if *element* is the subject of *selector*.

    Raises :class:`~csssnap.selector.errors.ParsingError` for an invalid
    selector string.
    """
    compounds, operators = _flatten(compile_selector(selector))
    return _match_from(compounds, operators, len(compounds) - 1, element)


def _flatten(node: Node) -> tuple[list[CompoundSelector], list[str]]:
    """Unroll a right-nested combinator chain into compounds and operators.

    ``a > b c`` becomes ``([a, b, c], [">", " "])``.
    """
    compounds: list[CompoundSelector] = []
    operators: list[str] = []
    while isinstance(node, Combinator):
        compounds.append(node.left)
        operators.append(node.operator)
        node = node.right
    compounds.append(node)
    return compounds, operators


def _match_from(
    compounds: list[CompoundSelector],
    operators: list[str],
    index: int,
    element: etree._Element,
) -> bool:
    if not _matches_compound(compounds[index], element):
        return False
    if index == 0:
        return True
    candidates = _related(element, operators[index - 1])
    return any(_match_from(compounds, operators, index - 1, c) for c in candidates)


def _related(element: etree._Element, operator: str) -> Iterator[etree._Element]:
    """Elements that may match the compound to the left of *operator*."""
    if operator in (CHILD, DESCENDANT):
        parent = element.getparent()
        while parent is not None:
            yield parent
            if operator == CHILD:
                return
            parent = parent.getparent()
    elif operator in (ADJACENT_SIBLING, GENERAL_SIBLING):
        for sibling in element.itersiblings(preceding=True):
            if not isinstance(sibling.tag, str):
                continue
            yield sibling
            if operator == ADJACENT_SIBLING:
                return
    else:
        raise ValueError(f"Unknown combinator {operator!r}")


def _matches_compound(compound: CompoundSelector, element: etree._Element) -> bool:
    for simple in compound.selectors:
        if isinstance(simple, AttributeSelector):
            if not _matches_attribute(simple.expression, element):
                return False
        elif not _matches_simple(simple, element):
            return False
    return True


def _matches_simple(selector: Selector, element: etree._Element) -> bool:
    if selector.is_universal:
        return True
    if selector.is_id:
        return element.get("id") == selector.name
    if selector.is_class:
        return selector.name in (element.get("class") or "").split()
    return str(element.tag).lower() == selector.value.lower()


def _matches_attribute(expression: AttributeExpression, element: etree._Element) -> bool:
    actual = element.get(expression.attribute.lower())
    if actual is None:
        return False
    if expression.operator is None or expression.value is None:
        return True

    expected = expression.value.value
    operator = expression.operator
    if operator == "=":
        return actual == expected
    if operator == "~=":
        return bool(expected) and expected in actual.split()
    if operator == "|=":
        return actual == expected or actual.startswith(f"{expected}-")
    if operator == "^=":
        return bool(expected) and actual.startswith(expected)
    if operator == "$=":
        return bool(expected) and actual.endswith(expected)
    if operator == "*=":
        return bool(expected) and expected in actual
    raise ValueError(f"Unknown attribute operator {operator!r}")
