"""
Portfolio preview orchestration.

Loads a portfolio by owner and slug, renders it through the template render
engine, and records the outcome in the pipeline event log.
"""

from typing import Optional

from folio.contexts.portfolio.logger import log_preview_result
from folio.contexts.portfolio.portfolio_database import PortfolioDatabase
from folio.contexts.rendering import RenderResult, TemplateRenderEngine
from folio.utils.event_logging import log_pipeline_event


def preview_portfolio(
    db: PortfolioDatabase,
    user_id: str,
    slug: str,
    engine: Optional[TemplateRenderEngine] = None,
) -> RenderResult:
    """
    Render a user's portfolio and publish a preview handle.

    Orchestration function that:
    1. Resolves the portfolio and its template
    2. Builds the RenderContext from stored customizations
    3. Runs the render pipeline (validation failures are returned, not raised)
    4. Logs to both Tier 1 (context logger) and Tier 2 (pipeline events)

    Args:
        db: Open portfolio database
        user_id: Owner of the portfolio
        slug: Portfolio slug (unique per user)
        engine: Render engine that publishes and owns the preview handle.
            When omitted the document is rendered without publishing and
            preview_url is None.

    Returns:
        RenderResult with html (and preview_url when an engine was given)

    Raises:
        PortfolioNotFoundError: If the user has no portfolio with this slug

    Example:
        >>> result = preview_portfolio(db, "user-1", "jane-doe", engine)
        >>> if result.success:
        ...     html = engine.publisher.fetch(result.preview_url)
    """
    publish = engine is not None
    if engine is None:
        engine = TemplateRenderEngine()

    portfolio = db.get_portfolio_by_slug(user_id, slug)
    template = db.get_template(portfolio.template_id)

    result = engine.render(db.render_context(portfolio.id), publish=publish)

    log_preview_result(slug, template.slug, result)

    if result.success:
        log_pipeline_event(
            event_type="preview_published",
            portfolio=slug,
            source="portfolio",
            user_id=user_id,
            template=template.slug,
            document_size=len(result.html),
        )
    else:
        log_pipeline_event(
            event_type="preview_rejected",
            portfolio=slug,
            source="portfolio",
            user_id=user_id,
            template=template.slug,
            errors=result.errors,
        )

    return result
