"""
Layout context logger.

Provides logging interface for layout context with automatic [layout] prefix.
All layout modules should import from this module, not from utils.logger directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[layout]"


def _log_debug(message: str) -> None:
    """Log debug message with [layout] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_page_break(page_number: int, y: float) -> None:
    """Log a page break triggered by the overflow threshold."""
    _log_debug(f"Page break at y={y:.1f}mm, starting page {page_number}")


def log_layout_result(resume_name: str, result, elapsed_time: float) -> None:
    """Log a finished layout with its page, run and link counts."""
    _log_debug(
        f"Laid out '{resume_name or 'unnamed'}': {result.page_count} page(s), "
        f"{len(result.texts)} text runs, {len(result.links)} links ({elapsed_time * 1000:.1f}ms)"
    )
