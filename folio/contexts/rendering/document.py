"""
HTML document generation.

Assembles a self-contained HTML document from a RenderContext: CDN-loaded UI
library, customizations injected as a script-level data literal, and the
wrapped component mounted at the root node.
"""

import json
import re
from pathlib import Path
from typing import Mapping

from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template

from folio.contexts.rendering import defaults
from folio.contexts.rendering.data_structures import RenderContext
from folio.contexts.rendering.exceptions import InvalidCustomizationError
from folio.contexts.rendering.wrapper import wrap_component

TEMPLATES_PATH = Path(__file__).parent / "templates"

# Characters that could close the surrounding <script> element early
SCRIPT_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
}

# Unpaired UTF-16 surrogates are written as \u escapes, as JSON.stringify does
LONE_SURROGATE_PATTERN = re.compile(r"[\ud800-\udfff]")


def _escape_surrogate(match) -> str:
    return f"\\u{ord(match.group()):04x}"


_environment = Environment(
    loader=FileSystemLoader(str(TEMPLATES_PATH)),
    # Output is script and markup assembled from trusted skeleton + escaped data
    autoescape=False,
    undefined=StrictUndefined,
    keep_trailing_newline=False,
)


def get_document_template() -> Template:
    """Load the document skeleton (Jinja2 caches compiled templates)."""
    return _environment.get_template(defaults.DOCUMENT_TEMPLATE_NAME)


def serialize_customizations(customizations: Mapping[str, str]) -> str:
    """
    Serialize customizations to a JSON literal safe inside a <script> block.

    Keys and values must be strings. The literal is compact JSON with non-ASCII
    kept as-is (unpaired surrogates excepted), and every "<" and ">" replaced by
    its \\u escape, so injected values cannot terminate the script element.
    The escapes are valid JSON, so the literal parses back to the original
    mapping.

    Raises:
        InvalidCustomizationError: If a key or value is not a string

    Example:
        >>> serialize_customizations({"title": "</script>"})
        '{"title":"\\\\u003c/script\\\\u003e"}'
    """
    for key, value in customizations.items():
        if not isinstance(key, str):
            raise InvalidCustomizationError(
                "Customization field names must be strings", field_name=repr(key), value=key
            )
        if not isinstance(value, str):
            raise InvalidCustomizationError(
                "Customization values must be strings", field_name=key, value=value
            )

    literal = json.dumps(dict(customizations), separators=(",", ":"), ensure_ascii=False)
    literal = LONE_SURROGATE_PATTERN.sub(_escape_surrogate, literal)
    for char, escaped in SCRIPT_ESCAPES.items():
        literal = literal.replace(char, escaped)
    return literal


def generate_html(context: RenderContext) -> str:
    """
    Generate the complete HTML document for a render context.

    Deterministic: the same context always yields byte-identical output.
    Customization values are only ever embedded inside the escaped data
    literal; they are never concatenated into markup or script text.

    Args:
        context: Component source and customizations

    Returns:
        Full HTML document text

    Raises:
        InvalidCustomizationError: If customizations are not all strings
    """
    return get_document_template().render(
        lang=defaults.DOCUMENT_LANG,
        title=defaults.DOCUMENT_TITLE,
        tailwind_url=defaults.TAILWIND_URL,
        font_stack=defaults.FONT_STACK,
        root_id=defaults.ROOT_ELEMENT_ID,
        react_url=defaults.REACT_URL,
        react_dom_url=defaults.REACT_DOM_URL,
        customizations_global=defaults.CUSTOMIZATIONS_GLOBAL,
        customizations_literal=serialize_customizations(context.customizations),
        component_source=wrap_component(context.component_code),
        entry_point=defaults.ENTRY_POINT,
    )
