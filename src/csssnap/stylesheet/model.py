"""Stylesheet model: StylesheetRule and Stylesheet."""

from __future__ import annotations

from dataclasses import dataclass, field

from csssnap.stylesheet.parser import parse_css


@dataclass(frozen=True)
class StylesheetRule:
    """A rule pairing its individual selectors with property declarations.

    Property names are kept exactly as written (kebab-case CSS names).  The
    hash covers the declaration items, so the mapping must not be mutated
    after construction.
    """

    selectors: tuple[str, ...]
    declarations: dict[str, str] = field(default_factory=dict)

    @property
    def key(self) -> str:
        return ", ".join(self.selectors)

    def __hash__(self) -> int:
        return hash((self.selectors, tuple(self.declarations.items())))


def split_selectors(selector_text: str) -> tuple[str, ...]:
    """Split a comma-joined selector list into trimmed individual selectors."""
    return tuple(part.strip() for part in selector_text.split(",") if part.strip())


class Stylesheet:
    """Parsed contents of one style module.

    Parsing happens eagerly in the constructor; malformed CSS raises
    :class:`~csssnap.stylesheet.parser.StylesheetParseError`.  Rules sharing a
    selector list are merged, later declarations overriding earlier ones.
    """

    def __init__(self, identifier: str, content: str) -> None:
        self.identifier = identifier
        self.content = content
        self.rules: dict[str, StylesheetRule] = {}
        self._extract_rules()

    def _extract_rules(self) -> None:
        for parsed in parse_css(self.content):
            selectors = split_selectors(parsed.selector_text)
            declarations: dict[str, str] = {}
            for prop, value in parsed.declarations:
                declarations[prop] = value

            key = ", ".join(selectors)
            # A repeated selector list moves to its latest position in source order
            existing = self.rules.pop(key, None)
            if existing is not None:
                declarations = {**existing.declarations, **declarations}
            self.rules[key] = StylesheetRule(selectors=selectors, declarations=declarations)

    @property
    def rules_list(self) -> list[StylesheetRule]:
        return list(self.rules.values())

    def __repr__(self) -> str:
        return f"Stylesheet(identifier={self.identifier!r}, rules={len(self.rules)})"
