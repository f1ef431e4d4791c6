"""
Template render engine.

Runs the render pipeline for one RenderContext:

    validate -> wrap -> generate document -> publish preview

Each stage is a pure function except publishing, which stores the document in
the engine's PreviewPublisher. Validation failure short-circuits the pipeline
and is reported through the returned RenderResult, never by raising.
"""

import time
from typing import Optional

from folio.contexts.rendering.data_structures import (
    RenderContext,
    RenderResult,
    ValidationResult,
)
from folio.contexts.rendering.document import generate_html
from folio.contexts.rendering.logger import (
    _log_debug,
    log_render_result,
    log_render_start,
    log_validation_result,
)
from folio.contexts.rendering.publisher import PreviewPublisher
from folio.contexts.rendering.validator import (
    validate_component_code,
    validate_customizations,
)
from folio.contexts.rendering.wrapper import wrap_component


class TemplateRenderEngine:
    """
    Turns template source plus customizations into previewable documents.

    The engine keeps no per-request state; the only shared resource is the
    publisher's table of live preview handles.

    Example:
        >>> engine = TemplateRenderEngine()
        >>> context = RenderContext(
        ...     component_code="export default function Card(){return <div>Hi</div>;}",
        ...     customizations={"title": "My Portfolio"},
        ... )
        >>> result = engine.render(context)
        >>> engine.publisher.fetch(result.preview_url) == result.html
        True
        >>> engine.release_preview_url(result.preview_url)
    """

    def __init__(self, publisher: Optional[PreviewPublisher] = None):
        self.publisher = publisher if publisher is not None else PreviewPublisher()

    @staticmethod
    def validate_code(code: str) -> ValidationResult:
        return validate_component_code(code)

    @staticmethod
    def wrap_component(code: str) -> str:
        return wrap_component(code)

    @staticmethod
    def generate_html(context: RenderContext) -> str:
        return generate_html(context)

    def validate(self, context: RenderContext) -> ValidationResult:
        """Validate both the component source and the customizations."""
        return validate_component_code(context.component_code).merge(
            validate_customizations(context.customizations)
        )

    def generate_preview_url(self, context: RenderContext) -> str:
        """
        Generate the document and publish it.

        No validation is performed here; use render() for the checked pipeline.
        The caller owns the returned handle and must release it.
        """
        url = self.publisher.publish(generate_html(context))
        _log_debug(f"Published preview {url}")
        return url

    def release_preview_url(self, url: str) -> None:
        self.publisher.revoke(url)
        _log_debug(f"Released preview {url}")

    def render(self, context: RenderContext, publish: bool = True) -> RenderResult:
        """
        Run the full pipeline for one context.

        Args:
            context: Component source and customizations
            publish: Also publish the document and return its handle

        Returns:
            RenderResult; html and preview_url are None when validation failed
        """
        start = time.perf_counter()
        log_render_start(context)

        validation = self.validate(context)
        log_validation_result(validation)

        if not validation.is_valid:
            result = RenderResult(validation=validation)
        else:
            html = generate_html(context)
            preview_url = self.publisher.publish(html) if publish else None
            result = RenderResult(validation=validation, html=html, preview_url=preview_url)

        log_render_result(result, time.perf_counter() - start)
        return result
