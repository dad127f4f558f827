"""Logger configuration for the expense calculator."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

try:
    from . import config
except ImportError:  # pragma: no cover - fallback for direct execution
    import config

_CONFIGURED = False


def setup_logger(
    level: Optional[str] = None,
    log_file: Optional[str] = None,
    rotation: str = "10 MB",
    retention: str = "7 days",
) -> None:
    """Configure loguru with a console sink and an optional file sink.

    Args:
        level: Logging level; defaults to ``EXPCALC_LOG_LEVEL``.
        log_file: Optional path to a log file; defaults to ``EXPCALC_LOG_FILE``.
        rotation: Log rotation size (e.g. "10 MB", "1 day").
        retention: Log retention period (e.g. "7 days").
    """
    global _CONFIGURED
    level = level or config.LOG_LEVEL
    log_file = log_file or config.LOG_FILE

    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        level=level,
        colorize=True,
    )

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
            level=level,
            rotation=rotation,
            retention=retention,
            backtrace=True,
            diagnose=False,
        )

    _CONFIGURED = True
    logger.debug(f"Logger initialized with level={level}")


def ensure_logger() -> None:
    """Configure the logger once per process; Streamlit reruns reuse it."""
    if not _CONFIGURED:
        setup_logger()
