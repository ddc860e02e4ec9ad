"""
Editing context logger.

Provides logging interface for editing context with automatic [edit] prefix.
All editing modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path
from typing import Optional, Union

from loguru import logger

from vitae.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[edit]"


def setup_editing_logger(log_dir: Path, document: Optional[Path] = None) -> Path:
    """
    Setup logger for editing context.

    Args:
        log_dir: Directory for this editing session
        document: Resume document being edited, recorded in the provenance header

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="edit",
        log_dir=log_dir,
        extra_provenance={"Document": document},
    )


# Wrapper functions with automatic [edit] prefix


def _log_info(message: str) -> None:
    """Log info message with [edit] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [edit] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [edit] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level editing-specific logging helpers


def log_document_loaded(source: Union[str, Path], resume) -> None:
    """Log a loaded document with its entry counts."""
    _log_info(f"Loaded resume from {source}")
    _log_debug(
        f"  contacts={len(resume.contacts)} education={len(resume.education)} "
        f"experience={len(resume.experience)} tags={len(resume.tags)}"
    )


def log_version_mismatch(source: Union[str, Path], found: str, expected: str) -> None:
    """Warn that a document was written by a different schema version."""
    _log_warning(f"Version mismatch in {source}: document is {found or 'unversioned'}, app is {expected}")


def log_entry_change(action: str, section: str, index: int, label: str) -> None:
    """Log an entry being added, saved or deleted."""
    _log_info(f"{action} {section}[{index}]: {label}")
