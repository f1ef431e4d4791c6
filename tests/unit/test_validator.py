"""Unit tests for component source validation."""

import pytest

from folio.contexts.rendering.validator import (
    EMPTY_CODE_MESSAGE,
    FORBIDDEN_PATTERNS,
    MISSING_MARKUP_MESSAGE,
    NOT_A_STRING_MESSAGE,
    UNPAIRED_SURROGATE_MESSAGE,
    find_forbidden_constructs,
    validate_component_code,
    validate_customizations,
)

CLEAN_COMPONENT = """
export default function Hero() {
  const data = window.__CUSTOMIZATIONS__;
  return <h1 className="text-4xl">{data.heading}</h1>;
}
"""


@pytest.mark.unit
class TestValidateComponentCode:
    """Tests for validate_component_code."""

    def test_clean_component_is_valid(self):
        result = validate_component_code(CLEAN_COMPONENT)

        assert result.is_valid is True
        assert result.errors == []

    @pytest.mark.parametrize(
        "snippet",
        [
            "fetch('/api/secrets')",
            "fetch ('/api')",
            "await fetch(url, { method: 'POST' })",
        ],
    )
    def test_fetch_is_rejected(self, snippet):
        result = validate_component_code(f"function A() {{ {snippet}; return null; }}")

        assert result.is_valid is False
        assert "Fetch API calls are not allowed" in result.errors

    @pytest.mark.parametrize(
        "snippet, message",
        [
            ("new XMLHttpRequest()", "XMLHttpRequest is not allowed"),
            ("eval('1 + 1')", "eval() is not allowed"),
            ("new Function('return 1')", "Function constructor is not allowed"),
            ("const fs = require('fs')", "require() is not allowed for security reasons"),
        ],
    )
    def test_each_rule_reports_its_message(self, snippet, message):
        result = validate_component_code(f"{snippet}\nreturn <div/>;")

        assert result.errors == [message]

    def test_errors_follow_rule_order_not_match_position(self):
        code = "require('x'); eval('y'); fetch('/z'); return null;"

        result = validate_component_code(code)

        assert result.errors == [
            "Fetch API calls are not allowed",
            "eval() is not allowed",
            "require() is not allowed for security reasons",
        ]

    def test_repeated_match_reports_once(self):
        result = validate_component_code("fetch('/a'); fetch('/b'); return null;")

        assert result.errors == ["Fetch API calls are not allowed"]

    def test_missing_return_is_rejected(self):
        result = validate_component_code("const Card = () => <div>Hi</div>;")

        assert result.is_valid is False
        assert result.errors == [MISSING_MARKUP_MESSAGE]

    def test_jsx_marker_satisfies_markup_rule(self):
        result = validate_component_code("/** @jsx h */ const Card = () => h('div');")

        assert result.is_valid is True

    def test_markup_rule_comes_after_denylist(self):
        result = validate_component_code("const x = eval('1');")

        assert result.errors == ["eval() is not allowed", MISSING_MARKUP_MESSAGE]

    def test_lowercase_function_keyword_is_allowed(self):
        """Only the capitalized Function constructor is denied."""
        result = validate_component_code("function Card() { return null; }")

        assert result.is_valid is True

    def test_obfuscated_eval_is_not_detected(self):
        """Text denylist: runtime-built names slip through."""
        result = validate_component_code("const e = window['ev' + 'al']; return e('1');")

        assert result.is_valid is True

    def test_empty_code_is_rejected(self):
        assert validate_component_code("").errors == [EMPTY_CODE_MESSAGE]
        assert validate_component_code("   \n\t").errors == [EMPTY_CODE_MESSAGE]

    def test_non_string_code_is_rejected(self):
        result = validate_component_code(None)

        assert result.is_valid is False
        assert result.errors == [NOT_A_STRING_MESSAGE]

    def test_unpaired_surrogate_is_rejected(self):
        code = "function Card() { return <p>\ud83d</p>; }"

        assert validate_component_code(code).errors == [UNPAIRED_SURROGATE_MESSAGE]

    def test_astral_characters_are_allowed(self):
        assert validate_component_code("function Card() { return <p>\U0001F600</p>; }").is_valid

    def test_input_is_not_modified(self):
        code = "fetch('/x'); return null;"
        original = str(code)

        validate_component_code(code)

        assert code == original


@pytest.mark.unit
def test_find_forbidden_constructs_matches_declared_rules():
    assert len(FORBIDDEN_PATTERNS) == 5
    assert find_forbidden_constructs("return <div/>;") == []
    assert find_forbidden_constructs("XMLHttpRequest; Function (1)") == [
        "XMLHttpRequest is not allowed",
        "Function constructor is not allowed",
    ]


@pytest.mark.unit
class TestValidateCustomizations:
    """Tests for validate_customizations."""

    def test_string_mapping_is_valid(self):
        result = validate_customizations({"heading": "Hello", "accent": "#fff"})

        assert result.is_valid is True

    def test_empty_mapping_is_valid(self):
        assert validate_customizations({}).is_valid is True

    def test_non_string_values_are_reported_in_order(self):
        result = validate_customizations({"a": 1, "b": "ok", "c": None})

        assert result.errors == [
            "Customization 'a' must be a string, got int",
            "Customization 'c' must be a string, got NoneType",
        ]

    def test_non_string_key_is_reported(self):
        result = validate_customizations({3: "three"})

        assert result.errors == ["Customization field name must be a string: 3"]

    def test_non_mapping_is_rejected(self):
        result = validate_customizations(["heading"])

        assert result.is_valid is False
        assert "must be a mapping" in result.errors[0]
