"""Selector specificity, computed from selector text.

Works on the flattened text of a selector rather than its AST, so it also
scores selectors the parser does not accept (pseudo-classes, pseudo-elements).
Each whitespace- or combinator-separated part contributes independently.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

__all__ = ["Specificity", "calculate"]

logger = logging.getLogger(__name__)

_ATTRIBUTE_RE = re.compile(r"\[[^\]]*\]")
_PSEUDO_ELEMENT_RE = re.compile(r"::[a-zA-Z][\w-]*(?:\([^)]*\))?")
_PSEUDO_CLASS_RE = re.compile(r":[a-zA-Z][\w-]*(?:\([^)]*\))?")
_PART_SPLIT_RE = re.compile(r"\s*[>+~]\s*|\s+")
_ID_RE = re.compile(r"#[\w-]+")
_CLASS_RE = re.compile(r"\.[\w-]+")
_TYPE_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9-]*")


@dataclass(frozen=True, order=True)
class Specificity:
    """``(ids, classes, types)``, compared lexicographically.

    ``classes`` counts class, attribute and pseudo-class selectors; ``types``
    counts type selectors and pseudo-elements.
    """

    ids: int = 0
    classes: int = 0
    types: int = 0

    def __add__(self, other: Specificity) -> Specificity:
        return Specificity(
            self.ids + other.ids,
            self.classes + other.classes,
            self.types + other.types,
        )

    def __str__(self) -> str:
        return f"({self.ids},{self.classes},{self.types})"


def _calculate_part(part: str) -> Specificity:
    ids = len(_ID_RE.findall(part))
    classes = len(_CLASS_RE.findall(part))
    types = 1 if _TYPE_RE.match(part) else 0
    return Specificity(ids, classes, types)


def calculate(selector: str) -> Specificity:
    """Return the specificity of a single (comma-free) selector."""
    text, attributes = _ATTRIBUTE_RE.subn(" ", selector)
    text, pseudo_elements = _PSEUDO_ELEMENT_RE.subn(" ", text)
    text, pseudo_classes = _PSEUDO_CLASS_RE.subn(" ", text)

    specificity = Specificity(0, attributes + pseudo_classes, pseudo_elements)
    for part in _PART_SPLIT_RE.split(text.strip()):
        if part:
            specificity += _calculate_part(part)

    logger.debug("Specificity of %r is %s", selector, specificity)
    return specificity
