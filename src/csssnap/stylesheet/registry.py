"""Registry of parsed stylesheets, keyed by style module identity."""

from __future__ import annotations

import hashlib
import logging
from typing import TYPE_CHECKING

from csssnap.stylesheet.model import Stylesheet, StylesheetRule

if TYPE_CHECKING:
    from lxml.html import HtmlElement

logger = logging.getLogger(__name__)

DEFAULT_MODULE_ATTRIBUTE = "data-css-module"


def stylesheet_id(source_path: str) -> str:
    """Stable identifier for a style source file: the md5 of its path."""
    return hashlib.md5(source_path.encode("utf-8")).hexdigest()


class StylesheetRegistry:
    """Stylesheets known to one test run.

    Construct one per run (or per worker) and pass it to the resolver; call
    :meth:`reset` between runs.  Adding is idempotent per identifier, so a
    style module shared by many tests is parsed once.  Not thread-safe.
    """

    def __init__(self) -> None:
        self._stylesheets: dict[str, Stylesheet] = {}

    def add(self, identifier: str, content: str) -> None:
        """Parse and register *content* under *identifier*, unless already present."""
        if identifier in self._stylesheets:
            logger.debug("Stylesheet %s already registered, skipping", identifier)
            return
        stylesheet = Stylesheet(identifier, content)
        self._stylesheets[identifier] = stylesheet
        logger.info(
            "Registered stylesheet %s (%d rule(s))", identifier, len(stylesheet.rules)
        )

    def add_from_document(
        self, document: HtmlElement, attribute: str = DEFAULT_MODULE_ATTRIBUTE
    ) -> int:
        """Register every style source found in *document*.

        Returns the number of style sources found, including ones that were
        already registered.
        """
        from csssnap.dom import query_style_sources

        sources = query_style_sources(document, attribute)
        for source in sources:
            self.add(source.identifier, source.css_text)
        return len(sources)

    def reset(self) -> None:
        self._stylesheets.clear()

    @property
    def ids(self) -> list[str]:
        return list(self._stylesheets)

    def get(self, identifier: str) -> Stylesheet | None:
        return self._stylesheets.get(identifier)

    @property
    def rules(self) -> list[StylesheetRule]:
        """All rules, in registration order then source order."""
        return [
            rule
            for stylesheet in self._stylesheets.values()
            for rule in stylesheet.rules_list
        ]

    def __contains__(self, identifier: str) -> bool:
        return identifier in self._stylesheets

    def __len__(self) -> int:
        return len(self._stylesheets)

    def __repr__(self) -> str:
        return f"StylesheetRegistry(stylesheets={list(self._stylesheets)})"
