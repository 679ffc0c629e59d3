"""Tests for the style-match resolver and assert_css_style."""

import pytest

from csssnap import assert_css_style
from csssnap.config import MatchConfig, Resolution
from csssnap.dom import load_document, select_one
from csssnap.matching import MatchInputError, UnmatchedProperty, resolve
from csssnap.matching.resolver import format_value, kebab_case
from csssnap.stylesheet import StylesheetRegistry

CARD_CSS = """
.card { color: red; padding: 8px 16px; }
.card .title, .card h2 { font-weight: bold; }
#featured { color: blue; }
.card:hover { color: green; }
"""

BUTTON_CSS = """
.button { background-color: #0055ff; color: white; opacity: 0.5; }
.button.primary { font-weight: 600; }
"""

PAGE_HTML = """
<html><body>
  <div id="featured" class="card">
    <h2 class="title">Heading</h2>
    <button class="button primary">Go</button>
  </div>
  <span class="orphan">x</span>
</body></html>
"""


@pytest.fixture
def registry() -> StylesheetRegistry:
    reg = StylesheetRegistry()
    reg.add("card", CARD_CSS)
    reg.add("button", BUTTON_CSS)
    return reg


@pytest.fixture
def doc():
    return load_document(PAGE_HTML)


def _el(doc, selector):
    element = select_one(doc, selector)
    assert element is not None
    return element


CASCADE = MatchConfig(resolution=Resolution.CASCADE)


# ---------------------------------------------------------------------------
# Default resolution: any matching declaration counts
# ---------------------------------------------------------------------------


class TestAnyResolution:
    def test_declared_value_matches(self, registry, doc) -> None:
        result = resolve(_el(doc, ".card"), registry, {"color": "red"})
        assert result.matched_all
        assert result.unmatched == []

    def test_lower_specificity_value_still_counts(self, registry, doc) -> None:
        # #featured overrides the color, but any matching rule satisfies
        result = resolve(_el(doc, ".card"), registry, {"color": "red", "padding": "8px 16px"})
        assert result.matched_all

    def test_mismatch_reports_found_value(self, registry, doc) -> None:
        result = resolve(_el(doc, ".card"), registry, {"color": "purple"})
        assert result.unmatched == [UnmatchedProperty("color", "purple", "blue")]

    def test_undeclared_property(self, registry, doc) -> None:
        result = resolve(_el(doc, ".card"), registry, {"margin": "0"})
        assert result.unmatched == [UnmatchedProperty("margin", "0")]

    def test_every_unmatched_property_is_reported(self, registry, doc) -> None:
        result = resolve(
            _el(doc, ".card"),
            registry,
            {"color": "red", "margin": "0", "padding": "4px"},
        )
        assert [u.property for u in result.unmatched] == ["margin", "padding"]

    def test_descendant_rule_from_selector_list(self, registry, doc) -> None:
        result = resolve(_el(doc, "h2"), registry, {"fontWeight": "bold"})
        assert result.matched_all
        assert {m.selector for m in result.matches} == {".card .title", ".card h2"}

    def test_camel_case_names(self, registry, doc) -> None:
        result = resolve(_el(doc, "button"), registry, {"backgroundColor": "#0055ff"})
        assert result.matched_all

    def test_numeric_values(self, registry, doc) -> None:
        result = resolve(
            _el(doc, "button"), registry, {"fontWeight": 600, "opacity": 0.5}
        )
        assert result.matched_all

    def test_integral_float(self, registry, doc) -> None:
        result = resolve(_el(doc, "button"), registry, {"fontWeight": 600.0})
        assert result.matched_all

    def test_unsupported_selectors_are_skipped(self, registry, doc) -> None:
        result = resolve(_el(doc, ".card"), registry, {"color": "green"})
        assert result.unmatched == [UnmatchedProperty("color", "green", "blue")]
        assert ".card:hover" not in {m.selector for m in result.matches}

    def test_matches_are_hashable(self, registry, doc) -> None:
        result = resolve(_el(doc, "h2"), registry, {"fontWeight": "bold"})
        assert len(set(result.matches)) == 2

    def test_no_matching_rule(self, registry, doc) -> None:
        result = resolve(_el(doc, ".orphan"), registry, {"color": "red"})
        assert result.matches == []
        assert result.unmatched == [UnmatchedProperty("color", "red")]


# ---------------------------------------------------------------------------
# Cascade resolution
# ---------------------------------------------------------------------------


class TestCascadeResolution:
    def test_higher_specificity_wins(self, registry, doc) -> None:
        element = _el(doc, ".card")
        assert resolve(element, registry, {"color": "blue"}, CASCADE).matched_all
        result = resolve(element, registry, {"color": "red"}, CASCADE)
        assert result.unmatched == [UnmatchedProperty("color", "red", "blue")]

    def test_later_rule_wins_on_equal_specificity(self, doc) -> None:
        registry = StylesheetRegistry()
        registry.add("m1", ".title { color: red; } h2.title { color: green; } .card h2 { color: blue; }")
        # h2.title and .card h2 are both (0,1,1); .card h2 comes later
        result = resolve(_el(doc, "h2"), registry, {"color": "blue"}, CASCADE)
        assert result.matched_all

    def test_repeated_selector_list_wins_from_its_latest_position(self) -> None:
        registry = StylesheetRegistry()
        registry.add("m1", ".a { color: red; }\n.b { color: blue; }\n.a { color: green; }")
        element = select_one(load_document('<div class="a b">x</div>'), ".a.b")
        result = resolve(element, registry, {"color": "green"}, CASCADE)
        assert result.matched_all

    def test_registration_order_breaks_ties(self, doc) -> None:
        registry = StylesheetRegistry()
        registry.add("late", ".title { color: blue; }")
        registry.add("early", ".title { color: red; }")
        result = resolve(_el(doc, "h2"), registry, {"color": "red"}, CASCADE)
        assert result.matched_all

    def test_undeclared_property(self, registry, doc) -> None:
        result = resolve(_el(doc, ".card"), registry, {"margin": "0"}, CASCADE)
        assert result.unmatched == [UnmatchedProperty("margin", "0")]


# ---------------------------------------------------------------------------
# Input validation
# ---------------------------------------------------------------------------


class _ExplodingRegistry(StylesheetRegistry):
    @property
    def rules(self):
        raise AssertionError("rules should not be read")


class TestInputValidation:
    def test_empty_expectation_is_rejected_before_matching(self, doc) -> None:
        with pytest.raises(MatchInputError):
            resolve(_el(doc, ".card"), _ExplodingRegistry(), {})

    @pytest.mark.parametrize("value", [None, "div", 42, object()])
    def test_non_element_is_rejected(self, registry, value) -> None:
        with pytest.raises(MatchInputError):
            resolve(value, registry, {"color": "red"})

    def test_comment_node_is_rejected(self, registry) -> None:
        doc = load_document("<html><body><!-- note --><p>x</p></body></html>")
        comment = doc.find("body")[0]
        with pytest.raises(MatchInputError):
            resolve(comment, registry, {"color": "red"})

    def test_input_error_is_a_value_error(self) -> None:
        assert issubclass(MatchInputError, ValueError)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class TestKebabCase:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("color", "color"),
            ("backgroundColor", "background-color"),
            ("borderTopLeftRadius", "border-top-left-radius"),
            ("WebkitTransition", "-webkit-transition"),
            ("msTransform", "-ms-transform"),
            ("msFlexAlign", "-ms-flex-align"),
            ("mask", "mask"),
            ("background-color", "background-color"),
            ("--mainGap", "--mainGap"),
        ],
    )
    def test_conversion(self, name: str, expected: str) -> None:
        assert kebab_case(name) == expected


class TestFormatValue:
    def test_values(self) -> None:
        assert format_value("red") == "red"
        assert format_value(600) == "600"
        assert format_value(1.0) == "1"
        assert format_value(0.5) == "0.5"


# ---------------------------------------------------------------------------
# assert_css_style
# ---------------------------------------------------------------------------


class TestAssertCssStyle:
    def test_passes_and_returns_result(self, registry, doc) -> None:
        result = assert_css_style(_el(doc, ".card"), {"color": "red"}, registry)
        assert result.matched_all

    def test_failure_message_lists_mismatches(self, registry, doc) -> None:
        with pytest.raises(AssertionError) as exc_info:
            assert_css_style(
                _el(doc, ".card"), {"color": "purple", "margin": 0}, registry
            )
        assert str(exc_info.value) == (
            'Expected <div id="featured" class="card"> to have CSS style:\n'
            "  color: purple (found blue)\n"
            "  margin: 0 (not declared)"
        )

    def test_failure_message_when_nothing_matches(self, registry, doc) -> None:
        with pytest.raises(AssertionError) as exc_info:
            assert_css_style(_el(doc, ".orphan"), {"color": "red"}, registry)
        assert str(exc_info.value).endswith("No stylesheet rule matches this element.")

    def test_cascade_config(self, registry, doc) -> None:
        with pytest.raises(AssertionError):
            assert_css_style(_el(doc, ".card"), {"color": "red"}, registry, CASCADE)
