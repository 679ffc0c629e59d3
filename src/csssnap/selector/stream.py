"""Repositionable read head over a selector token sequence."""

from __future__ import annotations

from csssnap.selector.errors import ParsingError
from csssnap.selector.tokenizer import Position, Token, TokenType


class TokenStream:
    """Cursor over tokens with lookahead and a stack of saved offsets.

    ``store_position`` / ``restore_position`` / ``clear_position`` implement
    backtracking: a speculative parse pushes a checkpoint, then either pops it
    (success) or rewinds to it (failure).
    """

    def __init__(self, tokens: list[Token]) -> None:
        self._tokens = tokens
        self.position = 0
        self._checkpoints: list[int] = []

    # --- reading ---------------------------------------------------------------

    def peek(self) -> Token | None:
        """Return the next token without consuming it, or None at the end."""
        if self.position < len(self._tokens):
            return self._tokens[self.position]
        return None

    def consume(self) -> Token | None:
        """Consume and return the next token, or None at the end."""
        token = self.peek()
        if token is not None:
            self.position += 1
        return token

    def consume_if(self, *types: TokenType) -> Token | None:
        """Consume the next token only if its type is one of *types*."""
        token = self.peek()
        if token is not None and token.type in types:
            return self.consume()
        return None

    def consume_expect(self, *types: TokenType) -> Token:
        """Consume the next token, which must be one of *types*.

        Raises :class:`ParsingError` at the current position otherwise; the
        offending token is left unconsumed.
        """
        token = self.peek()
        if token is None or token.type not in types:
            expected = ", ".join(t.value for t in types)
            raise ParsingError(
                f"Expected token of type {expected}, but got {self.describe_next()}",
                self.error_position(),
            )
        self.position += 1
        return token

    def describe_next(self) -> str:
        """Type name of the next token, for error messages."""
        token = self.peek()
        return token.type.value if token is not None else "end of input"

    def eat_whitespace(self) -> None:
        """Consume every whitespace token directly ahead."""
        while self.consume_if(TokenType.WHITESPACE) is not None:
            pass

    def expect_end_of_input(self) -> None:
        self.eat_whitespace()
        token = self.peek()
        if token is not None:
            raise ParsingError(
                f"Expected end of input, but got token of type {token.type.value}",
                self.error_position(),
            )

    # --- checkpoints -----------------------------------------------------------

    def store_position(self) -> None:
        self._checkpoints.append(self.position)

    def clear_position(self) -> None:
        self._checkpoints.pop()

    def restore_position(self) -> None:
        self.position = self._checkpoints.pop()

    # --- error locations -------------------------------------------------------

    def error_position(self) -> Position:
        """Position of the next token, or just past the last one at the end."""
        token = self.peek()
        if token is not None:
            return token.position
        if not self._tokens:
            return Position(1, 1, 0)
        last = self._tokens[-1].position
        if self._tokens[-1].value == "\n":
            return Position(last.line + 1, 1, last.offset + 1)
        return Position(last.line, last.column + 1, last.offset + 1)
