"""Custom exceptions for the editing context."""

from pathlib import Path
from typing import Optional, Union


class ResumeLoadError(ValueError):
    """
    Exception raised when a resume document cannot be loaded.

    Attributes:
        message: Error description
        source: File path or label of the document that failed to load
        original_error: The underlying parse error, if any
    """

    def __init__(
        self,
        message: str,
        source: Optional[Union[str, Path]] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.source = source
        self.original_error = original_error

        parts = [message]

        if source is not None:
            parts.append(f"\nSource: {source}")

        if original_error is not None:
            parts.append(f"\nOriginal error: {original_error}")

        super().__init__("\n".join(parts))


class InvalidResumeStructureError(ValueError):
    """
    Exception raised when decoded JSON does not have the resume document shape.

    This is raised when the root is not an object, or a collection field such
    as 'experience' is not a list of objects.
    """

    pass


class EntryNotFoundError(LookupError):
    """Exception raised when an editing operation targets a missing entry."""

    def __init__(self, section: str, index: int):
        self.section = section
        self.index = index
        super().__init__(f"No entry at index {index} in '{section}'")
