"""Lark-based parser that turns CSS text into a flat list of parsed rules."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from lark import Lark, Token, Transformer
from lark.exceptions import UnexpectedInput

__all__ = ["ParsedRule", "StylesheetParseError", "parse_css"]

logger = logging.getLogger(__name__)

GRAMMAR_PATH = Path(__file__).parent / "grammar.lark"


class StylesheetParseError(Exception):
    """Raised when CSS source cannot be parsed."""

    def __init__(
        self, message: str, line: int | None = None, column: int | None = None
    ):
        self.line = line
        self.column = column
        super().__init__(message)


@dataclass(frozen=True)
class ParsedRule:
    """One style rule: its comma-joined selector text and declarations in order."""

    selector_text: str
    declarations: tuple[tuple[str, str], ...]


class _AtRule:
    """Marker for at-rules, which carry no style rules of their own here."""

    def __init__(self, keyword: str):
        self.keyword = keyword


class CssTransformer(Transformer):  # type: ignore[type-arg]
    """Transform a Lark parse tree into :class:`ParsedRule` objects."""

    def declaration(self, items: list[Token]) -> tuple[str, str]:
        return (str(items[0]), str(items[1]).strip())

    def declaration_list(
        self, items: list[tuple[str, str] | None]
    ) -> tuple[tuple[str, str], ...]:
        return tuple(item for item in items if item is not None)

    def rule(self, items: list[object]) -> ParsedRule:
        selector_text = " ".join(str(items[0]).split())
        return ParsedRule(selector_text, items[1])  # type: ignore[arg-type]

    def at_rule(self, items: list[Token]) -> _AtRule:
        return _AtRule(str(items[0]))

    def start(self, items: list[object]) -> list[ParsedRule]:
        rules: list[ParsedRule] = []
        for item in items:
            if isinstance(item, ParsedRule):
                rules.append(item)
            else:
                logger.debug("Skipping at-rule %s", getattr(item, "keyword", item))
        return rules


@lru_cache(maxsize=1)
def _parser() -> Lark:
    return Lark(
        GRAMMAR_PATH.read_text(encoding="utf-8"),
        parser="lalr",
        start="start",
    )


def parse_css(source: str) -> list[ParsedRule]:
    """Parse CSS *source* into its top-level style rules, in source order."""
    try:
        tree = _parser().parse(source)
    except UnexpectedInput as e:
        raise StylesheetParseError(
            f"Invalid stylesheet: {e}", line=e.line, column=e.column
        ) from e
    rules = CssTransformer().transform(tree)
    logger.debug("Parsed %d rule(s) from %d character(s)", len(rules), len(source))
    return rules
