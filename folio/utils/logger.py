"""
Session logger setup for Tier 1 (detailed) logging.

Each CLI session (a render, a preview, a store command) gets its own log
directory holding one <context>.log file. The file opens with a session
header recording which Folio build ran, how it was invoked, and the settings
the session resolved from the environment. Context-specific wrappers live in
contexts/{context}/logger.py.
"""

import sys
from pathlib import Path
from typing import Mapping, Optional

from loguru import logger

from folio import __version__

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"
CONSOLE_FORMAT = "{time:HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>"

HEADER_RULE = "=" * 80


def setup_logger(
    context_name: str,
    log_dir: Path,
    settings: Optional[Mapping[str, object]] = None,
) -> Path:
    """
    Start a logging session for one context.

    Replaces any previous sinks with a DEBUG file sink in log_dir and an INFO
    console sink on stdout, then writes the session header.

    Args:
        context_name: Session name, also the log file stem ("render", "portfolio")
        log_dir: Directory for this session (created if missing)
        settings: Environment-derived settings the session runs with

    Returns:
        Path to log file
    """
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()
    logger.add(log_file, format=FILE_FORMAT, level="DEBUG")
    logger.add(sys.stdout, format=CONSOLE_FORMAT, level="INFO", colorize=True)

    log_session_header(context_name, log_file, settings)

    return log_file


def log_session_header(
    context_name: str,
    log_file: Path,
    settings: Optional[Mapping[str, object]] = None,
) -> None:
    """Write the session header: build, invocation, and resolved settings."""
    logger.info(HEADER_RULE)
    logger.info(f"Folio {__version__} {context_name} session")
    logger.info(f"Command: {' '.join(sys.argv)}")
    logger.info(f"Working directory: {Path.cwd()}")
    logger.info(f"Python: {sys.version.split()[0]}")
    logger.info(f"Log file: {log_file}")

    for key, value in (settings or {}).items():
        logger.info(f"{key}: {value}")

    logger.info(HEADER_RULE)
