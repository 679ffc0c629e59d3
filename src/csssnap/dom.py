"""Document helpers over lxml HTML trees.

Element queries go through :func:`csssnap.matching.matcher.matches`, so the
selectors accepted here are those of :mod:`csssnap.selector`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

import lxml.html
from lxml import etree

from csssnap.selector.ast import Node

__all__ = [
    "StyleSource",
    "describe_element",
    "is_element",
    "load_document",
    "query_style_sources",
    "select",
    "select_one",
]


@dataclass(frozen=True)
class StyleSource:
    """A ``<style>`` element carrying a compiled style module."""

    identifier: str
    css_text: str


def load_document(markup: str) -> lxml.html.HtmlElement:
    """Parse HTML *markup* (a full document or a fragment) into its root element."""
    return lxml.html.document_fromstring(markup)


def is_element(node: object) -> bool:
    """True for element nodes; comments and processing instructions are excluded."""
    return isinstance(node, etree._Element) and isinstance(node.tag, str)


def iter_elements(root: etree._Element) -> Iterator[etree._Element]:
    for node in root.iter():
        if is_element(node):
            yield node


def select(root: etree._Element, selector: str | Node) -> list[etree._Element]:
    """All elements under (and including) *root* matching *selector*, in document order."""
    from csssnap.matching.matcher import compile_selector, matches

    node = compile_selector(selector)
    return [el for el in iter_elements(root) if matches(el, node)]


def select_one(root: etree._Element, selector: str | Node) -> etree._Element | None:
    found = select(root, selector)
    return found[0] if found else None


def query_style_sources(
    document: etree._Element, attribute: str = "data-css-module"
) -> list[StyleSource]:
    """Style module sources declared in *document*, in document order."""
    return [
        StyleSource(identifier=el.get(attribute), css_text=el.text or "")
        for el in select(document, f"style[{attribute}]")
    ]


def describe_element(element: etree._Element) -> str:
    """Short opening-tag rendering used in reports, e.g. ``<div id="a" class="b">``."""
    parts = [str(element.tag)]
    for name in ("id", "class"):
        value = element.get(name)
        if value:
            parts.append(f'{name}="{value}"')
    return f"<{' '.join(parts)}>"
