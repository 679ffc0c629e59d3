"""Selector parser error types."""

from __future__ import annotations

from csssnap.selector.tokenizer import Position


class ParsingError(Exception):
    """Raised when a selector cannot be parsed.

    Carries the position of the token at which parsing failed.  ``selector``
    is filled in by :func:`csssnap.selector.parse_selector` so that reports
    can show the offending input.
    """

    def __init__(
        self, message: str, position: Position, selector: str | None = None
    ):
        self.message = message
        self.position = position
        self.selector = selector
        super().__init__(f"Parsing Error [{position}]: {message}")

    @property
    def line(self) -> int:
        return self.position.line

    @property
    def column(self) -> int:
        return self.position.column

    @property
    def offset(self) -> int:
        return self.position.offset
