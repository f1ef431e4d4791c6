"""
Rendering Context

Responsibilities:
- Validates template component source against a denylist of constructs
- Wraps component source into a fixed entry point (PortfolioComponent)
- Generates self-contained HTML documents with injected customizations
- Publishes documents as blob-style preview handles

Owns: Component validation, document generation, preview handles
Never: Persists templates or customizations
"""

from folio.contexts.rendering.data_structures import (
    RenderContext,
    RenderResult,
    ValidationResult,
)
from folio.contexts.rendering.document import generate_html, serialize_customizations
from folio.contexts.rendering.engine import TemplateRenderEngine
from folio.contexts.rendering.exceptions import (
    InvalidCustomizationError,
    PreviewNotFoundError,
)
from folio.contexts.rendering.publisher import PreviewBlob, PreviewPublisher
from folio.contexts.rendering.validator import (
    validate_component_code,
    validate_customizations,
)
from folio.contexts.rendering.wrapper import wrap_component

__all__ = [
    # Pipeline entry point
    "TemplateRenderEngine",
    # Pipeline stages
    "validate_component_code",
    "validate_customizations",
    "wrap_component",
    "generate_html",
    "serialize_customizations",
    "PreviewPublisher",
    "PreviewBlob",
    # Data structures
    "RenderContext",
    "ValidationResult",
    "RenderResult",
    # Exceptions
    "InvalidCustomizationError",
    "PreviewNotFoundError",
]
