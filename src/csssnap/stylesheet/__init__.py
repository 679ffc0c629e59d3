from csssnap.stylesheet.model import Stylesheet, StylesheetRule
from csssnap.stylesheet.parser import StylesheetParseError, parse_css
from csssnap.stylesheet.registry import StylesheetRegistry, stylesheet_id

__all__ = [
    "Stylesheet",
    "StylesheetParseError",
    "StylesheetRegistry",
    "StylesheetRule",
    "parse_css",
    "stylesheet_id",
]
