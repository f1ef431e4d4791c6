"""
Component source validation.

Scans template component source for constructs that reach the network or
execute code dynamically, before the source is placed into any document.
This is a text denylist, not a sandbox: matching is done on the raw source
and can be bypassed by obfuscation (e.g., building "ev" + "al" at runtime).
"""

import re
from typing import Any, List, Mapping, NamedTuple, Pattern

from folio.contexts.rendering.data_structures import ValidationResult


class ForbiddenPattern(NamedTuple):
    pattern: Pattern[str]
    message: str


# Checked in declaration order; each matching rule contributes one message
FORBIDDEN_PATTERNS: List[ForbiddenPattern] = [
    ForbiddenPattern(re.compile(r"fetch\s*\("), "Fetch API calls are not allowed"),
    ForbiddenPattern(re.compile(r"XMLHttpRequest"), "XMLHttpRequest is not allowed"),
    ForbiddenPattern(re.compile(r"eval\s*\("), "eval() is not allowed"),
    ForbiddenPattern(re.compile(r"Function\s*\("), "Function constructor is not allowed"),
    ForbiddenPattern(
        re.compile(r"require\s*\("), "require() is not allowed for security reasons"
    ),
]

# Substring heuristics for "returns renderable markup" (not a parse)
MARKUP_MARKERS = ("return", "jsx")

MISSING_MARKUP_MESSAGE = "Component must return JSX"
NOT_A_STRING_MESSAGE = "Component code must be a string"
EMPTY_CODE_MESSAGE = "Component code is empty"
UNPAIRED_SURROGATE_MESSAGE = "Component code contains unpaired surrogate characters"

# Code points that cannot be encoded to UTF-8 on their own
LONE_SURROGATE_PATTERN = re.compile(r"[\ud800-\udfff]")


def find_forbidden_constructs(code: str) -> List[str]:
    """
    Return messages for every forbidden pattern found in code.

    Messages follow rule declaration order, not match position.

    Example:
        >>> find_forbidden_constructs("eval(x); fetch('/api')")
        ['Fetch API calls are not allowed', 'eval() is not allowed']
    """
    return [rule.message for rule in FORBIDDEN_PATTERNS if rule.pattern.search(code)]


def returns_markup(code: str) -> bool:
    """True if code contains any of the markup markers."""
    return any(marker in code for marker in MARKUP_MARKERS)


def validate_component_code(code: Any) -> ValidationResult:
    """
    Validate component source before wrapping and document generation.

    Never raises: a non-empty errors list is the failure signal. Callers must
    not wrap or generate a document when is_valid is False.

    Args:
        code: Component source text

    Returns:
        ValidationResult with errors in rule declaration order

    Example:
        >>> validate_component_code("function Card() { return <div/>; }").is_valid
        True
        >>> validate_component_code("fetch('/x'); return null;").errors
        ['Fetch API calls are not allowed']
    """
    if not isinstance(code, str):
        return ValidationResult.from_errors([NOT_A_STRING_MESSAGE])

    if not code.strip():
        return ValidationResult.from_errors([EMPTY_CODE_MESSAGE])

    if LONE_SURROGATE_PATTERN.search(code):
        return ValidationResult.from_errors([UNPAIRED_SURROGATE_MESSAGE])

    errors = find_forbidden_constructs(code)

    if not returns_markup(code):
        errors.append(MISSING_MARKUP_MESSAGE)

    return ValidationResult.from_errors(errors)


def validate_customizations(customizations: Any) -> ValidationResult:
    """
    Check that customizations are a flat mapping of strings to strings.

    One error per offending field, in mapping order. Values are never
    inspected for content: they are embedded as data, not code.
    """
    if not isinstance(customizations, Mapping):
        return ValidationResult.from_errors(
            [f"Customizations must be a mapping, got {type(customizations).__name__}"]
        )

    errors = []
    for key, value in customizations.items():
        if not isinstance(key, str):
            errors.append(f"Customization field name must be a string: {key!r}")
        elif not isinstance(value, str):
            errors.append(
                f"Customization '{key}' must be a string, got {type(value).__name__}"
            )

    return ValidationResult.from_errors(errors)
