"""Timestamp formatting utilities."""

from datetime import datetime


def now() -> str:
    """Compact timestamp for directory names, e.g. '20251114_183502'."""
    return datetime.now().strftime("%Y%m%d_%H%M%S")


def now_exact() -> str:
    """ISO 8601 timestamp with microseconds."""
    return datetime.now().isoformat()


def today() -> str:
    """Current date as 'YYYY-MM-DD'."""
    return datetime.now().strftime("%Y-%m-%d")


def format_timestamp(iso_timestamp: str) -> str:
    """
    Format ISO 8601 timestamp to readable format.

    Args:
        iso_timestamp: ISO 8601 formatted timestamp string

    Returns:
        Timestamp as "YYYY-MM-DD HH:MM:SS", or the input unchanged if it
        cannot be parsed.

    Examples:
        format_timestamp("2025-11-13T18:45:40.572549")
        # "2025-11-13 18:45:40"
    """
    try:
        return datetime.fromisoformat(iso_timestamp).strftime("%Y-%m-%d %H:%M:%S")
    except (ValueError, TypeError):
        return iso_timestamp
