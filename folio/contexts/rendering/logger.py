"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path
from typing import Mapping

from loguru import logger

from folio.contexts.rendering.publisher import PREVIEW_ORIGIN
from folio.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[render]"


def setup_rendering_logger(log_dir: Path) -> Path:
    """
    Setup logger for rendering context.

    Args:
        log_dir: Directory for this rendering session

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="render",
        log_dir=log_dir,
        settings={"Preview origin": PREVIEW_ORIGIN},
    )


# Wrapper functions with automatic [render] prefix


def _log_info(message: str) -> None:
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level rendering-specific logging helpers


def log_render_start(context) -> None:
    """Log start of a render pipeline run (tolerates malformed contexts)."""
    _log_info("Starting render")
    code, customizations = context.component_code, context.customizations
    if isinstance(code, str):
        _log_debug(f"  Source: {len(code)} chars")
    if isinstance(customizations, Mapping):
        _log_debug(f"  Customizations: {len(customizations)} fields")


def log_validation_result(result, verbose: bool = False) -> None:
    """
    Log validation outcome.

    Args:
        result: ValidationResult from the validator
        verbose: Show every error instead of the first few
    """
    if result.is_valid:
        _log_debug("Validation passed.")
        return

    _log_warning(f"Validation failed: {len(result.errors)} errors")
    error_limit = len(result.errors) if verbose else 5
    for i, err in enumerate(result.errors[:error_limit], 1):
        _log_warning(f"  Error {i}: {err}")
    if len(result.errors) > error_limit:
        _log_warning(f"  ... and {len(result.errors) - error_limit} more errors")


def log_render_result(result, elapsed_time: float) -> None:
    """
    Log the outcome of a render pipeline run.

    Args:
        result: RenderResult from TemplateRenderEngine.render()
        elapsed_time: Time taken by the pipeline
    """
    if not result.success:
        _log_error(f"Render rejected ({elapsed_time * 1000:.1f}ms)")
        return

    _log_success(f"Rendered {len(result.html)} chars ({elapsed_time * 1000:.1f}ms)")
    if result.preview_url:
        _log_debug(f"  Preview: {result.preview_url}")
