"""Backtracking parser for CSS selectors.

Grammar::

    name            := letter (letter | digit | '-' | '_')*
    identifier      := '#' name
    class           := '.' name
    universal       := '*'
    string          := quote any-char* quote
    attr-expr       := name [ ws? ('~'|'|'|'^'|'$'|'*')? '=' ws? (string | name) ]
    attribute       := '[' attr-expr ']'
    simple-selector := identifier | class | attribute | universal | name
    compound        := simple-selector+
    complex         := compound ws? ('>'|'+'|'~') ws? complex
                     | compound ws+ complex
                     | compound
    selector        := ws? complex ws? end-of-input

Each production raises :class:`ParsingError` on failure.  The ``_try_parse*``
combinators turn those failures into :class:`ParseResult` values, rewinding the
token stream so the next alternative starts from the same place.  Every
failure is also offered to ``_record_error``; when the whole parse fails, the
error that got furthest into the input is reported.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Callable, Generic, TypeVar

from csssnap.selector.ast import (
    DESCENDANT,
    AttributeExpression,
    AttributeSelector,
    Combinator,
    CompoundSelector,
    Node,
    Selector,
    SimpleSelector,
    StringLiteral,
)
from csssnap.selector.errors import ParsingError
from csssnap.selector.stream import TokenStream
from csssnap.selector.tokenizer import TokenType, tokenize

__all__ = ["ParseResult", "SelectorParser", "parse_selector"]

T = TypeVar("T")

_NAME_PART = (TokenType.LETTER, TokenType.DIGIT, TokenType.MINUS, TokenType.UNDERSCORE)
_OPERATOR_PREFIX = (
    TokenType.TILDE,
    TokenType.PIPE,
    TokenType.CARET,
    TokenType.DOLLAR,
    TokenType.ASTERISK,
)
_COMBINATORS = (TokenType.LEFT_ANGLE_BRACKET, TokenType.PLUS, TokenType.TILDE)


@dataclass(frozen=True)
class ParseResult(Generic[T]):
    """Outcome of a speculative parse: a value, or the errors that stopped it."""

    value: T | None = None
    errors: tuple[ParsingError, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors


class SelectorParser:
    """Parse a single selector string into a :data:`~csssnap.selector.ast.Node`."""

    def __init__(self, selector: str) -> None:
        self.selector = selector
        self._stream = TokenStream(tokenize(selector))
        self._deepest_error: ParsingError | None = None

    # ---- entry point ----

    def parse(self) -> Node:
        """Parse the whole input; raises :class:`ParsingError` on failure."""
        try:
            self._stream.eat_whitespace()
            node = self._parse_complex_selector()
            self._stream.expect_end_of_input()
        except ParsingError as exc:
            error = exc
            deepest = self._deepest_error
            if deepest is not None and deepest.offset > exc.offset:
                error = deepest
            error.selector = self.selector
            if error is exc:
                raise
            raise error from None
        return node

    # ---- combinators ----

    def _record_error(self, error: ParsingError) -> None:
        # Among errors at the same offset, the first one seen is kept.
        if self._deepest_error is None or error.offset > self._deepest_error.offset:
            self._deepest_error = error

    def _try_parse(self, parse_fn: Callable[[], T]) -> ParseResult[T]:
        self._stream.store_position()
        try:
            value = parse_fn()
        except ParsingError as exc:
            self._stream.restore_position()
            self._record_error(exc)
            return ParseResult(errors=(exc,))
        self._stream.clear_position()
        return ParseResult(value=value)

    def _try_parse_multiple(self, *parse_fns: Callable[[], T]) -> ParseResult[T]:
        errors: list[ParsingError] = []
        for parse_fn in parse_fns:
            result = self._try_parse(parse_fn)
            if result.ok:
                return result
            errors.extend(result.errors)
        return ParseResult(errors=tuple(errors))

    def _try_parse_until(self, parse_fn: Callable[[], T]) -> ParseResult[list[T]]:
        values: list[T] = []
        while True:
            start = self._stream.position
            result = self._try_parse(parse_fn)
            if not result.ok:
                if values:
                    return ParseResult(value=values)
                return ParseResult(value=values, errors=result.errors)
            values.append(result.value)  # type: ignore[arg-type]
            if self._stream.position == start:
                return ParseResult(value=values)

    def _unwrap(self, result: ParseResult[T], message: str | None = None) -> T:
        """Return the value of *result* or raise.

        With *message*, raises a new error at the current position; otherwise
        re-raises the collected error that reached furthest.
        """
        if result.ok:
            return result.value  # type: ignore[return-value]
        if message is not None:
            raise ParsingError(message, self._stream.error_position())
        raise max(result.errors, key=lambda e: e.offset)

    # ---- simple selectors ----

    def _parse_name(self) -> str:
        value = self._stream.consume_expect(TokenType.LETTER).value
        while True:
            token = self._stream.consume_if(*_NAME_PART)
            if token is None:
                return value
            value += token.value

    def _parse_type_selector(self) -> Selector:
        return Selector(self._parse_name())

    def _parse_identifier(self) -> Selector:
        self._stream.consume_expect(TokenType.HASH)
        return Selector(f"#{self._parse_name()}")

    def _parse_class(self) -> Selector:
        self._stream.consume_expect(TokenType.PERIOD)
        return Selector(f".{self._parse_name()}")

    def _parse_universal(self) -> Selector:
        self._stream.consume_expect(TokenType.ASTERISK)
        return Selector("*")

    def _parse_string(self) -> StringLiteral:
        quote = self._stream.consume_expect(TokenType.QUOTE).value
        chars: list[str] = []
        while True:
            token = self._stream.consume()
            if token is None:
                raise ParsingError(
                    "Unterminated string literal", self._stream.error_position()
                )
            if token.type is TokenType.QUOTE and token.value == quote:
                return StringLiteral("".join(chars), quote)
            chars.append(token.value)

    def _parse_expression(self) -> AttributeExpression:
        attribute = self._parse_name()

        def parse_comparison() -> tuple[str, Selector | StringLiteral]:
            self._stream.eat_whitespace()
            prefix = self._stream.consume_if(*_OPERATOR_PREFIX)
            self._stream.consume_expect(TokenType.EQUALS)
            self._stream.eat_whitespace()
            value = self._unwrap(
                self._try_parse_multiple(self._parse_string, self._parse_type_selector),
                "Expected string or name as attribute selector value",
            )
            operator = f"{prefix.value}=" if prefix is not None else "="
            return operator, value

        comparison = self._try_parse(parse_comparison)
        if not comparison.ok:
            return AttributeExpression(attribute)
        operator, value = comparison.value  # type: ignore[misc]
        return AttributeExpression(attribute, operator, value)

    def _parse_attribute_selector(self) -> AttributeSelector:
        self._stream.consume_expect(TokenType.LEFT_BRACKET)
        expression = self._parse_expression()
        self._stream.consume_expect(TokenType.RIGHT_BRACKET)
        return AttributeSelector(expression)

    def _parse_simple_selector(self) -> SimpleSelector:
        start = self._stream.error_position()
        result: ParseResult[SimpleSelector] = self._try_parse_multiple(
            self._parse_identifier,
            self._parse_class,
            self._parse_attribute_selector,
            self._parse_universal,
            self._parse_type_selector,
        )
        if result.ok:
            return result.value  # type: ignore[return-value]
        deepest = max(result.errors, key=lambda e: e.offset)
        if deepest.offset > start.offset:
            raise deepest
        raise ParsingError(
            f"Expected selector, but got {self._stream.describe_next()}", start
        )

    def _parse_compound_selector(self) -> CompoundSelector:
        selectors = self._unwrap(self._try_parse_until(self._parse_simple_selector))
        return CompoundSelector(tuple(selectors))

    # ---- combinators ----

    def _parse_operator_combinator(self) -> Combinator:
        left = self._parse_compound_selector()
        self._stream.eat_whitespace()
        token = self._stream.consume_expect(*_COMBINATORS)
        self._stream.eat_whitespace()
        right = self._parse_complex_selector()
        return Combinator(token.value, left, right, token)

    def _parse_descendant_combinator(self) -> Combinator:
        left = self._parse_compound_selector()
        token = self._stream.consume_expect(TokenType.WHITESPACE)
        self._stream.eat_whitespace()
        right = self._parse_complex_selector()
        return Combinator(DESCENDANT, left, right, token)

    def _parse_complex_selector(self) -> Node:
        result: ParseResult[Node] = self._try_parse_multiple(
            self._parse_operator_combinator,
            self._parse_descendant_combinator,
            self._parse_compound_selector,
        )
        return self._unwrap(result)


@lru_cache(maxsize=512)
def parse_selector(selector: str) -> Node:
    """Parse *selector*, caching results; failures are not cached."""
    return SelectorParser(selector).parse()
