"""
Resume document persistence.

Reads and writes the JSON document schema:

    {version, name, email, phone, additionalText,
     contacts[], education[], experience[], tags[]}

Loading is forgiving about missing fields and legacy keys but refuses documents
that are not JSON objects; those surface as ResumeLoadError and never reach the
layout engine.
"""

import json
from pathlib import Path
from typing import Optional, Union

from vitae.contexts.editing.exceptions import InvalidResumeStructureError, ResumeLoadError
from vitae.contexts.editing.logger import (
    _log_debug,
    log_document_loaded,
    log_version_mismatch,
)
from vitae.contexts.editing.resume_data_structure import SCHEMA_VERSION, ResumeDocument


def loads_resume(text: str, source: Union[str, Path] = "<string>") -> ResumeDocument:
    """
    Parse a resume document from JSON text.

    Args:
        text: JSON document
        source: Label used in log messages and errors (e.g., file path)

    Returns:
        Parsed ResumeDocument

    Raises:
        ResumeLoadError: If the text is not valid JSON or not a resume object
    """
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, TypeError) as e:
        raise ResumeLoadError("Resume document is not valid JSON", source=source, original_error=e)

    try:
        resume = ResumeDocument.from_dict(data)
    except InvalidResumeStructureError as e:
        raise ResumeLoadError("Resume document has an invalid structure", source=source, original_error=e)

    if resume.version != SCHEMA_VERSION:
        log_version_mismatch(source, resume.version, SCHEMA_VERSION)

    log_document_loaded(source, resume)
    return resume


def dumps_resume(resume: ResumeDocument, indent: Optional[int] = None) -> str:
    """Encode a resume document as JSON text in the current schema version."""
    return json.dumps(resume.to_dict(), indent=indent, ensure_ascii=False)


def load_resume_file(path: Union[str, Path]) -> ResumeDocument:
    """
    Load a resume document from a JSON file.

    Raises:
        ResumeLoadError: If the file cannot be read or parsed
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ResumeLoadError("Resume document could not be read", source=path, original_error=e)
    return loads_resume(text, source=path)


def save_resume_file(resume: ResumeDocument, path: Union[str, Path], indent: int = 2) -> Path:
    """Write a resume document to a JSON file, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dumps_resume(resume, indent=indent) + "\n", encoding="utf-8")
    _log_debug(f"Saved resume to {path}")
    return path


class ResumeStore:
    """
    File-backed store for the working resume document.

    Holds the single document being edited; every edit is saved immediately
    so the next session starts where the last one stopped.

    Args:
        path: JSON file holding the document

    Example:
        >>> store = ResumeStore(Path("data/resume.json"))
        >>> resume = store.load()
        >>> resume.name = "Jane Doe"
        >>> store.save(resume)
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    @property
    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> ResumeDocument:
        """Load the stored document; an empty document if nothing is stored yet."""
        if not self.exists:
            _log_debug(f"No stored resume at {self.path}, starting empty")
            return ResumeDocument()
        return load_resume_file(self.path)

    def save(self, resume: ResumeDocument) -> Path:
        return save_resume_file(resume, self.path)
