"""Unit tests for HTML document generation."""

import json
import re

import pytest

from folio.contexts.rendering.data_structures import RenderContext
from folio.contexts.rendering.document import generate_html, serialize_customizations
from folio.contexts.rendering.exceptions import InvalidCustomizationError

COMPONENT = "export default function Card(){return <div>Hi</div>;}"

# Captures the literal assigned to the customization global
LITERAL_PATTERN = re.compile(r"window\.__CUSTOMIZATIONS__ = (.*);\n")


def extract_literal(html: str) -> str:
    match = LITERAL_PATTERN.search(html)
    assert match, "customization literal not found in document"
    return match.group(1)


@pytest.mark.unit
class TestSerializeCustomizations:
    """Tests for serialize_customizations."""

    def test_compact_json(self):
        assert serialize_customizations({"title": "My Portfolio"}) == '{"title":"My Portfolio"}'

    def test_empty_mapping(self):
        assert serialize_customizations({}) == "{}"

    def test_angle_brackets_are_escaped(self):
        literal = serialize_customizations({"bio": "<b>bold</b>"})

        assert "<" not in literal
        assert ">" not in literal
        assert literal == '{"bio":"\\u003cb\\u003ebold\\u003c/b\\u003e"}'

    def test_escaped_literal_parses_back(self):
        values = {"bio": "</script><script>alert(1)</script>", "name": "Zoë"}

        assert json.loads(serialize_customizations(values)) == values

    def test_non_ascii_is_kept(self):
        assert serialize_customizations({"name": "Zoë"}) == '{"name":"Zoë"}'

    def test_non_string_value_raises(self):
        with pytest.raises(InvalidCustomizationError) as exc_info:
            serialize_customizations({"year": 2025})

        assert exc_info.value.field_name == "year"
        assert isinstance(exc_info.value, ValueError)

    def test_non_string_key_raises(self):
        with pytest.raises(InvalidCustomizationError):
            serialize_customizations({1: "one"})


@pytest.mark.unit
class TestGenerateHtml:
    """Tests for generate_html."""

    def test_document_structure(self):
        html = generate_html(RenderContext(COMPONENT, {"title": "My Portfolio"}))

        assert html.startswith("<!DOCTYPE html>")
        assert html.rstrip().endswith("</html>")
        assert '<div id="root"></div>' in html
        assert '<script type="module">' in html
        assert "import React from 'https://esm.sh/react@18';" in html
        assert "import ReactDOM from 'https://esm.sh/react-dom@18/client';" in html
        assert '<script src="https://cdn.tailwindcss.com"></script>' in html
        assert "<title>Portfolio</title>" in html
        assert "box-sizing: border-box;" in html
        assert "-apple-system, BlinkMacSystemFont" in html

    def test_wrapped_component_is_embedded(self):
        html = generate_html(RenderContext(COMPONENT, {}))

        assert "const PortfolioComponent = function Card(){return <div>Hi</div>;}" in html
        assert "export default" not in html

    def test_customizations_assigned_before_component(self):
        html = generate_html(RenderContext(COMPONENT, {"title": "My Portfolio"}))

        injected = html.index('window.__CUSTOMIZATIONS__ = {"title":"My Portfolio"};')
        component = html.index("const PortfolioComponent")
        mount = html.index("ReactDOM.createRoot(document.getElementById('root'))")

        assert injected < component < mount

    def test_mount_passes_customizations_explicitly(self):
        html = generate_html(RenderContext(COMPONENT, {}))

        assert (
            "root.render(React.createElement(PortfolioComponent, "
            "{ customizations: window.__CUSTOMIZATIONS__ }));"
        ) in html

    def test_output_is_deterministic(self):
        context = RenderContext(COMPONENT, {"heading": "Hello", "accent": "#0ea5e9"})

        assert generate_html(context) == generate_html(context)

    def test_round_trip_of_customization_literal(self):
        html = generate_html(RenderContext(COMPONENT, {"heading": "Hello"}))

        assert json.loads(extract_literal(html)) == {"heading": "Hello"}

    def test_script_close_cannot_escape_literal(self):
        payload = "</script><img src=x onerror=alert(1)>"
        html = generate_html(RenderContext(COMPONENT, {"heading": payload}))

        literal = extract_literal(html)
        assert "</script>" not in literal
        assert json.loads(literal) == {"heading": payload}
        # Only the skeleton's own two script elements are closed
        assert html.count("</script>") == 2

    def test_customization_values_are_not_in_markup(self):
        html = generate_html(RenderContext(COMPONENT, {"heading": "<h1>Injected</h1>"}))

        assert "<h1>Injected</h1>" not in html

    def test_jinja_syntax_in_component_is_left_alone(self):
        code = "function A() { return <p>{{ not_a_variable }}</p>; }"

        html = generate_html(RenderContext(code, {}))

        assert "{{ not_a_variable }}" in html

    def test_context_is_not_mutated(self):
        customizations = {"heading": "Hello"}
        context = RenderContext(COMPONENT, customizations)

        generate_html(context)

        assert context.component_code == COMPONENT
        assert customizations == {"heading": "Hello"}

    def test_non_string_customization_fails_loudly(self):
        with pytest.raises(InvalidCustomizationError):
            generate_html(RenderContext(COMPONENT, {"count": 3}))


@pytest.mark.unit
class TestUnpairedSurrogates:
    """Values decoded from JSON can hold lone surrogates; they stay encodable."""

    def test_lone_surrogate_is_written_as_escape(self):
        value = json.loads('"\\ud83d"')

        literal = serialize_customizations({"heading": value})

        assert literal == '{"heading":"\\ud83d"}'
        assert json.loads(literal) == {"heading": value}

    def test_document_with_lone_surrogate_encodes_to_utf8(self):
        html = generate_html(RenderContext(COMPONENT, {"heading": json.loads('"x\\udc00y"')}))

        html.encode("utf-8")
        assert '"x\\udc00y"' in extract_literal(html)
