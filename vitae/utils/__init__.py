"""
Shared utilities for VITAE.

Common functionality used across contexts:
- Logger setup with provenance tracking
- Timestamps for log and output directories
- PDF read-back helpers
"""

from vitae.utils.timestamp import now, now_exact, today

__all__ = ["now", "now_exact", "today"]
