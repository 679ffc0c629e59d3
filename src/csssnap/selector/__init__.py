from csssnap.selector.errors import ParsingError
from csssnap.selector.parser import SelectorParser, parse_selector
from csssnap.selector.specificity import Specificity, calculate
from csssnap.selector.tokenizer import Position, Token, TokenType, tokenize

__all__ = [
    "ParsingError",
    "Position",
    "SelectorParser",
    "Specificity",
    "Token",
    "TokenType",
    "calculate",
    "parse_selector",
    "tokenize",
]
