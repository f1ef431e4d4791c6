"""
Portfolio context logger.

Provides logging interface for portfolio context with automatic [portfolio] prefix.
All portfolio modules should import from this module, not from utils.logger directly.
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger

from folio.utils.logger import setup_logger as _setup_logger

load_dotenv()

CONTEXT_PREFIX = "[portfolio]"


def setup_portfolio_logger(log_dir: Path) -> Path:
    """
    Setup logger for portfolio context.

    Args:
        log_dir: Directory for this session

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="portfolio",
        log_dir=log_dir,
        settings={"Portfolio database": os.getenv("PORTFOLIO_DB_PATH", "outs/portfolio.db")},
    )


def _log_info(message: str) -> None:
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_preview_result(slug: str, template_slug: str, result) -> None:
    """
    Log the outcome of a portfolio preview.

    Args:
        slug: Portfolio slug
        template_slug: Slug of the template it renders
        result: RenderResult from the render engine
    """
    if result.success:
        _log_success(f"Preview ready for '{slug}' (template '{template_slug}')")
    else:
        _log_warning(f"Preview rejected for '{slug}' (template '{template_slug}')")
        for error in result.errors:
            _log_warning(f"  {error}")
