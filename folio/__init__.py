"""
FOLIO - Portfolio rendering core for a template-driven portfolio builder

Turns template component source plus per-portfolio customizations into
self-contained HTML documents for preview and download.

Architecture:
- Rendering Context: Component validation, wrapping, document generation, preview publishing
- Portfolio Context: Templates, portfolios and customizations storage, preview orchestration
"""

__version__ = "0.1.0"
