"""Character-level tokenizer for CSS selectors.

Every character becomes exactly one token; runs of letters are merged into
names later by the parser.  Tokenizing never fails: characters without a
dedicated type become ``OTHER`` tokens and are rejected by the parser.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

__all__ = ["Position", "Token", "TokenType", "tokenize"]


class TokenType(Enum):
    """Lexical class of a single selector character."""

    LETTER = "letter"
    DIGIT = "digit"
    MINUS = "minus"
    UNDERSCORE = "underscore"
    WHITESPACE = "whitespace"
    HASH = "hash"
    PERIOD = "period"
    LEFT_BRACKET = "left_bracket"
    RIGHT_BRACKET = "right_bracket"
    LEFT_PAREN = "left_paren"
    RIGHT_PAREN = "right_paren"
    EQUALS = "equals"
    QUOTE = "quote"
    COMMA = "comma"
    LEFT_ANGLE_BRACKET = "left_angle_bracket"
    RIGHT_ANGLE_BRACKET = "right_angle_bracket"
    PLUS = "plus"
    TILDE = "tilde"
    PIPE = "pipe"
    CARET = "caret"
    DOLLAR = "dollar"
    ASTERISK = "asterisk"
    COLON = "colon"
    OTHER = "other"


_PUNCTUATION: dict[str, TokenType] = {
    "-": TokenType.MINUS,
    "_": TokenType.UNDERSCORE,
    "#": TokenType.HASH,
    ".": TokenType.PERIOD,
    "[": TokenType.LEFT_BRACKET,
    "]": TokenType.RIGHT_BRACKET,
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    "=": TokenType.EQUALS,
    '"': TokenType.QUOTE,
    "'": TokenType.QUOTE,
    ",": TokenType.COMMA,
    ">": TokenType.LEFT_ANGLE_BRACKET,
    "<": TokenType.RIGHT_ANGLE_BRACKET,
    "+": TokenType.PLUS,
    "~": TokenType.TILDE,
    "|": TokenType.PIPE,
    "^": TokenType.CARET,
    "$": TokenType.DOLLAR,
    "*": TokenType.ASTERISK,
    ":": TokenType.COLON,
}


@dataclass(frozen=True)
class Position:
    """Location of a token in the selector text.

    ``line`` and ``column`` are 1-based; ``offset`` is the 0-based index of
    the token in the token sequence, which equals the character index.
    """

    line: int
    column: int
    offset: int

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


@dataclass(frozen=True)
class Token:
    type: TokenType
    value: str
    position: Position


def _classify(char: str) -> TokenType:
    if char.isascii() and char.isalpha():
        return TokenType.LETTER
    if char.isascii() and char.isdigit():
        return TokenType.DIGIT
    if char.isspace():
        return TokenType.WHITESPACE
    return _PUNCTUATION.get(char, TokenType.OTHER)


def tokenize(selector: str) -> list[Token]:
    """Split *selector* into one position-tagged token per character."""
    tokens: list[Token] = []
    line = 1
    column = 1

    for offset, char in enumerate(selector):
        tokens.append(Token(_classify(char), char, Position(line, column, offset)))
        if char == "\n":
            line += 1
            column = 1
        else:
            column += 1

    return tokens
