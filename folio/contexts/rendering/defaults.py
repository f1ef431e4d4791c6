"""
Default values for FOLIO document generation.

Fixed, versioned CDN imports and mount names shared by the wrapper and the
document generator. These are presentation defaults and are not exposed to
callers of the render engine.
"""

# Name every wrapped component is bound to before mounting
ENTRY_POINT = "PortfolioComponent"

# Fallback binding when a declaration is present but no name can be captured
FALLBACK_COMPONENT_NAME = "Component"

# Global property holding the injected customization literal
CUSTOMIZATIONS_GLOBAL = "__CUSTOMIZATIONS__"

# DOM node the component is mounted on
ROOT_ELEMENT_ID = "root"

DOCUMENT_TITLE = "Portfolio"
DOCUMENT_LANG = "en"

# UI library imports (pinned major versions)
REACT_URL = "https://esm.sh/react@18"
REACT_DOM_URL = "https://esm.sh/react-dom@18/client"
TAILWIND_URL = "https://cdn.tailwindcss.com"

HTML_MIME_TYPE = "text/html"

FONT_STACK = (
    "-apple-system, BlinkMacSystemFont, 'Segoe UI', 'Roboto', 'Oxygen', 'Ubuntu', "
    "'Cantarell', 'Fira Sans', 'Droid Sans', 'Helvetica Neue', sans-serif"
)

DOCUMENT_TEMPLATE_NAME = "document.html.jinja"
