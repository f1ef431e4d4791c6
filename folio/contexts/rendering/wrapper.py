"""
Component source wrapping.

Normalizes template source into a script that binds one fixed entry point
(PortfolioComponent) for the document's mount call. Pure regex/string
rewriting with no parsing: unusual shapes (e.g., several const declarations
before the real component) can bind the wrong name.
"""

import re

from folio.contexts.rendering.defaults import ENTRY_POINT, FALLBACK_COMPONENT_NAME

DEFAULT_EXPORT = "export default"

# First declaration wins; group 1 only captures function names.
# Identifiers are ASCII word characters, as in JavaScript regexes.
DECLARATION_PATTERN = re.compile(r"function\s+(\w+)|const\s+(\w+)\s*=", re.ASCII)
CONST_NAME_PATTERN = re.compile(r"const\s+(\w+)", re.ASCII)


def find_component_name(code: str) -> str:
    """
    Name the wrapper binds when the source has no default export.

    Uses the first `function NAME`; if the first declaration is a const
    (or nothing matches), falls back to the first `const NAME`, then to
    FALLBACK_COMPONENT_NAME.

    Example:
        >>> find_component_name("function Hero() { return null; }")
        'Hero'
        >>> find_component_name("const Card = () => null;")
        'Card'
    """
    match = DECLARATION_PATTERN.search(code)
    if match and match.group(1):
        return match.group(1)

    const_match = CONST_NAME_PATTERN.search(code)
    if const_match:
        return const_match.group(1)

    return FALLBACK_COMPONENT_NAME


def wrap_component(code: str) -> str:
    """
    Rewrite component source so that it defines PortfolioComponent.

    Priority (first match wins):
    1. "export default" present: first occurrence becomes
       "const PortfolioComponent =", everything after it kept verbatim
    2. "function" or "const" present: source kept, then
       "const PortfolioComponent = NAME;" appended
    3. otherwise the whole source is treated as an expression

    The input string is never modified; a new string is returned.

    Args:
        code: Validated component source

    Returns:
        Source text binding ENTRY_POINT

    Examples:
        >>> wrap_component("export default function Foo(){ return null; }")
        'const PortfolioComponent = function Foo(){ return null; }'
        >>> wrap_component("(props) => null")
        'const PortfolioComponent = ((props) => null);'
    """
    if DEFAULT_EXPORT in code:
        return code.replace(DEFAULT_EXPORT, f"const {ENTRY_POINT} =", 1)

    if "function" in code or "const" in code:
        return f"{code}\nconst {ENTRY_POINT} = {find_component_name(code)};"

    return f"const {ENTRY_POINT} = ({code});"
