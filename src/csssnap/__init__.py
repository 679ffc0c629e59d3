"""csssnap - style assertions for HTML elements against compiled style modules."""

__version__ = "0.1.0"

from csssnap.assertions import assert_css_style  # noqa: E402
from csssnap.config import MatchConfig, Resolution  # noqa: E402
from csssnap.matching import MatchInputError, MatchResult, resolve  # noqa: E402
from csssnap.selector import ParsingError, parse_selector  # noqa: E402
from csssnap.stylesheet import StylesheetRegistry  # noqa: E402

__all__ = [
    "MatchConfig",
    "MatchInputError",
    "MatchResult",
    "ParsingError",
    "Resolution",
    "StylesheetRegistry",
    "assert_css_style",
    "parse_selector",
    "resolve",
    "__version__",
]
