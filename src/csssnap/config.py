"""Matching configuration."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Resolution(Enum):
    """How an expected property value is checked against matching rules.

    ANY: satisfied if any matching rule declares the expected value.
    CASCADE: only the winning declaration (highest specificity, then latest
    in registration order) is compared.
    """

    ANY = "any"
    CASCADE = "cascade"


@dataclass(frozen=True)
class MatchConfig:
    resolution: Resolution = Resolution.ANY
    module_attribute: str = "data-css-module"  # marks <style> elements holding style modules
