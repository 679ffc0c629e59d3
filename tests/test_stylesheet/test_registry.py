"""Tests for StylesheetRegistry."""

import hashlib
import logging

import pytest

from csssnap.dom import load_document
from csssnap.stylesheet import StylesheetParseError, StylesheetRegistry, stylesheet_id


@pytest.fixture
def registry() -> StylesheetRegistry:
    return StylesheetRegistry()


class TestAdd:
    def test_add_registers_rules(self, registry: StylesheetRegistry) -> None:
        registry.add("m1", ".a { color: red; }")
        assert "m1" in registry
        assert len(registry) == 1
        assert [r.key for r in registry.rules] == [".a"]

    def test_add_is_idempotent(self, registry: StylesheetRegistry) -> None:
        registry.add("m1", ".a { color: red; }")
        registry.add("m1", ".b { color: blue; }")
        assert len(registry) == 1
        assert [r.key for r in registry.rules] == [".a"]

    def test_duplicate_add_is_logged(
        self, registry: StylesheetRegistry, caplog: pytest.LogCaptureFixture
    ) -> None:
        registry.add("m1", ".a { color: red; }")
        with caplog.at_level(logging.DEBUG, logger="csssnap.stylesheet.registry"):
            registry.add("m1", ".a { color: red; }")
        assert "already registered" in caplog.text

    def test_malformed_css_is_not_registered(self, registry: StylesheetRegistry) -> None:
        with pytest.raises(StylesheetParseError):
            registry.add("bad", ".a { color red }")
        assert "bad" not in registry
        assert registry.rules == []

    def test_rules_follow_registration_order(self, registry: StylesheetRegistry) -> None:
        registry.add("m2", ".second { color: red; } .third { color: red; }")
        registry.add("m1", ".first { color: red; }")
        assert [r.key for r in registry.rules] == [".second", ".third", ".first"]
        assert registry.ids == ["m2", "m1"]

    def test_get(self, registry: StylesheetRegistry) -> None:
        registry.add("m1", ".a { color: red; }")
        sheet = registry.get("m1")
        assert sheet is not None
        assert sheet.identifier == "m1"
        assert registry.get("missing") is None


class TestReset:
    def test_reset_clears_everything(self, registry: StylesheetRegistry) -> None:
        registry.add("m1", ".a { color: red; }")
        registry.reset()
        assert len(registry) == 0
        assert registry.rules == []

    def test_add_after_reset_parses_again(self, registry: StylesheetRegistry) -> None:
        registry.add("m1", ".a { color: red; }")
        registry.reset()
        registry.add("m1", ".b { color: red; }")
        assert [r.key for r in registry.rules] == [".b"]


class TestAddFromDocument:
    def test_registers_marked_style_elements(self, registry: StylesheetRegistry) -> None:
        document = load_document(
            "<html><head>"
            '<style data-css-module="aa11">.a { color: red; }</style>'
            "<style>.plain { color: green; }</style>"
            '<style data-css-module="bb22">.b { color: blue; }</style>'
            "</head><body></body></html>"
        )
        count = registry.add_from_document(document)
        assert count == 2
        assert registry.ids == ["aa11", "bb22"]
        assert [r.key for r in registry.rules] == [".a", ".b"]

    def test_custom_attribute(self, registry: StylesheetRegistry) -> None:
        document = load_document(
            '<html><head><style data-module="x">.x { top: 0; }</style></head></html>'
        )
        assert registry.add_from_document(document) == 0
        assert registry.add_from_document(document, attribute="data-module") == 1
        assert "x" in registry

    def test_repeated_scan_counts_but_does_not_reparse(
        self, registry: StylesheetRegistry
    ) -> None:
        document = load_document(
            '<html><head><style data-css-module="aa11">.a { color: red; }</style></head></html>'
        )
        registry.add_from_document(document)
        assert registry.add_from_document(document) == 1
        assert len(registry) == 1


class TestStylesheetId:
    def test_is_md5_of_path(self) -> None:
        path = "/src/components/Card.module.css"
        assert stylesheet_id(path) == hashlib.md5(path.encode()).hexdigest()

    def test_is_stable(self) -> None:
        assert stylesheet_id("a.css") == stylesheet_id("a.css")
        assert stylesheet_id("a.css") != stylesheet_id("b.css")
