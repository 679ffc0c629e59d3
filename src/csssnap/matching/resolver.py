"""Style-match resolver: which declared values apply to an element."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Mapping, Union

from lxml import etree

from csssnap.config import MatchConfig, Resolution
from csssnap.dom import describe_element, is_element
from csssnap.matching.matcher import matches
from csssnap.selector.errors import ParsingError
from csssnap.selector.specificity import Specificity, calculate
from csssnap.stylesheet.model import StylesheetRule
from csssnap.stylesheet.registry import StylesheetRegistry

__all__ = [
    "MatchInputError",
    "MatchResult",
    "RuleMatch",
    "UnmatchedProperty",
    "find_matching_rules",
    "format_value",
    "kebab_case",
    "resolve",
]

logger = logging.getLogger(__name__)

ExpectedValue = Union[str, int, float]

_UPPER_RE = re.compile(r"[A-Z]")
_MS_PREFIX_RE = re.compile(r"ms[A-Z]")


class MatchInputError(ValueError):
    """Raised when resolve() is given something it cannot match against."""


@dataclass(frozen=True)
class RuleMatch:
    """One selector of a rule that matched the element.

    ``order`` is the rule's index in the registry's rule list.
    """

    selector: str
    rule: StylesheetRule
    order: int

    @property
    def specificity(self) -> Specificity:
        return calculate(self.selector)


@dataclass(frozen=True)
class UnmatchedProperty:
    """An expected property with no satisfying declaration.

    ``actual`` is the value that was found instead, if any.
    """

    property: str
    expected: str
    actual: str | None = None

    def __str__(self) -> str:
        if self.actual is None:
            return f"{self.property}: {self.expected} (not declared)"
        return f"{self.property}: {self.expected} (found {self.actual})"


@dataclass(frozen=True)
class MatchResult:
    element: etree._Element
    unmatched: list[UnmatchedProperty]
    matches: list[RuleMatch]

    @property
    def matched_all(self) -> bool:
        return not self.unmatched

    def describe(self) -> str:
        lines = [f"Expected {describe_element(self.element)} to have CSS style:"]
        lines.extend(f"  {item}" for item in self.unmatched)
        if not self.matches:
            lines.append("No stylesheet rule matches this element.")
        return "\n".join(lines)


def kebab_case(name: str) -> str:
    """Convert a camelCase style name to its CSS property name.

    ``backgroundColor`` -> ``background-color``, ``WebkitTransition`` ->
    ``-webkit-transition``, ``msTransform`` -> ``-ms-transform`` (the ``ms``
    vendor prefix is written in lowercase); custom properties (``--x``) are
    left alone.
    """
    if name.startswith("--"):
        return name
    if _MS_PREFIX_RE.match(name):
        name = f"-{name}"
    return _UPPER_RE.sub(lambda m: f"-{m.group(0).lower()}", name)


def format_value(value: ExpectedValue) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def find_matching_rules(
    element: etree._Element, rules: list[StylesheetRule]
) -> list[RuleMatch]:
    """Every (selector, rule) pair whose selector matches *element*.

    Selectors the parser does not support are skipped.
    """
    found: list[RuleMatch] = []
    for order, rule in enumerate(rules):
        for selector in rule.selectors:
            try:
                matched = matches(element, selector)
            except ParsingError as exc:
                logger.debug("Skipping unsupported selector %r: %s", selector, exc)
                continue
            if matched:
                found.append(RuleMatch(selector=selector, rule=rule, order=order))
    return found


def _check_any(
    prop: str, expected: str, candidates: list[RuleMatch]
) -> UnmatchedProperty | None:
    values = [m.rule.declarations[prop] for m in candidates if prop in m.rule.declarations]
    if expected in values:
        return None
    return UnmatchedProperty(prop, expected, values[-1] if values else None)


def _check_cascade(
    prop: str, expected: str, candidates: list[RuleMatch]
) -> UnmatchedProperty | None:
    declaring = [m for m in candidates if prop in m.rule.declarations]
    if not declaring:
        return UnmatchedProperty(prop, expected)
    winner = max(declaring, key=lambda m: (m.specificity, m.order))
    actual = winner.rule.declarations[prop]
    if actual == expected:
        return None
    return UnmatchedProperty(prop, expected, actual)


def resolve(
    element: object,
    registry: StylesheetRegistry,
    expected: Mapping[str, ExpectedValue],
    config: MatchConfig | None = None,
) -> MatchResult:
    """Check *expected* property values against the rules matching *element*.

    Every expected property is checked, so the result lists all mismatches.
    """
    if not is_element(element):
        raise MatchInputError(f"Expected an HTML element, received {element!r}")
    if not expected:
        raise MatchInputError("No expected styles given")
    config = config or MatchConfig()

    candidates = find_matching_rules(element, registry.rules)  # type: ignore[arg-type]
    logger.debug(
        "%d rule selector(s) match %s",
        len(candidates),
        describe_element(element),  # type: ignore[arg-type]
    )

    check = _check_cascade if config.resolution is Resolution.CASCADE else _check_any
    unmatched: list[UnmatchedProperty] = []
    for name, value in expected.items():
        missing = check(kebab_case(name), format_value(value), candidates)
        if missing is not None:
            unmatched.append(missing)

    return MatchResult(element=element, unmatched=unmatched, matches=candidates)  # type: ignore[arg-type]
