"""
Portfolio Context

Responsibilities:
- Stores portfolio templates (component source plus catalog metadata)
- Stores user portfolios and their per-field customizations
- Supplies RenderContext values to the rendering context
- Orchestrates portfolio previews and records pipeline events

Owns: Templates, portfolios, customizations
Never: Generates documents itself (delegates to the rendering context)
"""

from folio.contexts.portfolio.data_structures import (
    Customization,
    Portfolio,
    PortfolioTemplate,
)
from folio.contexts.portfolio.customization_files import load_customizations
from folio.contexts.portfolio.portfolio_database import PortfolioDatabase
from folio.contexts.portfolio.preview import preview_portfolio

__all__ = [
    "PortfolioDatabase",
    "preview_portfolio",
    "load_customizations",
    "PortfolioTemplate",
    "Portfolio",
    "Customization",
]
