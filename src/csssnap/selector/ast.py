"""Selector AST: a closed set of immutable node types.

``str(node)`` renders a node back to selector text that parses to an equal
node.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from csssnap.selector.tokenizer import Token

__all__ = [
    "AttributeExpression",
    "AttributeSelector",
    "Combinator",
    "CompoundSelector",
    "Node",
    "Selector",
    "SimpleSelector",
    "StringLiteral",
    "DESCENDANT",
    "CHILD",
    "ADJACENT_SIBLING",
    "GENERAL_SIBLING",
]

DESCENDANT = " "
CHILD = ">"
ADJACENT_SIBLING = "+"
GENERAL_SIBLING = "~"


@dataclass(frozen=True)
class Selector:
    """A type, id (``#name``), class (``.name``) or universal (``*``) selector."""

    value: str

    @property
    def is_id(self) -> bool:
        return self.value.startswith("#")

    @property
    def is_class(self) -> bool:
        return self.value.startswith(".")

    @property
    def is_universal(self) -> bool:
        return self.value == "*"

    @property
    def name(self) -> str:
        """The value without its ``#`` or ``.`` prefix."""
        if self.is_id or self.is_class:
            return self.value[1:]
        return self.value

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class StringLiteral:
    """A quoted attribute value; ``value`` excludes the quotes."""

    value: str
    quote: str = '"'

    def __str__(self) -> str:
        return f"{self.quote}{self.value}{self.quote}"


@dataclass(frozen=True)
class AttributeExpression:
    attribute: str
    operator: str | None = None  # "=", "~=", "|=", "^=", "$=", "*="
    value: Selector | StringLiteral | None = None

    def __str__(self) -> str:
        if self.operator is None or self.value is None:
            return self.attribute
        return f"{self.attribute}{self.operator}{self.value}"


@dataclass(frozen=True)
class AttributeSelector:
    expression: AttributeExpression

    def __str__(self) -> str:
        return f"[{self.expression}]"


SimpleSelector = Union[Selector, AttributeSelector]


@dataclass(frozen=True)
class CompoundSelector:
    """Simple selectors that all apply to the same element, e.g. ``a.b[c]``."""

    selectors: tuple[SimpleSelector, ...]

    def __str__(self) -> str:
        return "".join(str(s) for s in self.selectors)


@dataclass(frozen=True)
class Combinator:
    """``left`` and ``right`` joined by a structural relationship.

    ``operator`` is one of :data:`DESCENDANT`, :data:`CHILD`,
    :data:`ADJACENT_SIBLING` or :data:`GENERAL_SIBLING`.  ``token`` is the
    source token and takes no part in equality.
    """

    operator: str
    left: CompoundSelector
    right: Node
    token: Token | None = field(default=None, compare=False, repr=False)

    def __str__(self) -> str:
        if self.operator == DESCENDANT:
            return f"{self.left} {self.right}"
        return f"{self.left} {self.operator} {self.right}"


Node = Union[Combinator, CompoundSelector]
