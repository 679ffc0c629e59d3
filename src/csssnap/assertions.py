"""Assertion helpers for use in tests."""

from __future__ import annotations

from typing import Mapping

from csssnap.config import MatchConfig
from csssnap.matching.resolver import ExpectedValue, MatchResult, resolve
from csssnap.stylesheet.registry import StylesheetRegistry


def assert_css_style(
    element: object,
    expected: Mapping[str, ExpectedValue],
    registry: StylesheetRegistry,
    config: MatchConfig | None = None,
) -> MatchResult:
    """Assert that *element* is styled with every property in *expected*.

    Raises AssertionError listing every unmatched property.
    """
    result = resolve(element, registry, expected, config)
    if not result.matched_all:
        raise AssertionError(result.describe())
    return result
