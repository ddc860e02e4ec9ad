"""
Resume editing session.

Applies form edits to a ResumeDocument: top-level fields, and saving or
deleting entries in the contacts, education, experience and tags sections.
After each change the document is saved to the store (when one is attached)
and a preview update is requested from the scheduler (when one is attached).
"""

from typing import Any, Callable, Dict, List, Optional
from urllib.parse import urlsplit

from vitae.contexts.editing.exceptions import EntryNotFoundError
from vitae.contexts.editing.field_names import form_key_for, property_for
from vitae.contexts.editing.logger import _log_debug, _log_warning, log_entry_change
from vitae.contexts.editing.persistence import ResumeStore, dumps_resume, loads_resume
from vitae.contexts.editing.resume_data_structure import (
    DOCUMENT_TEXT_FIELDS,
    RECORD_TYPES,
    ResumeDocument,
)

UNNAMED_ENTRY = "Unnamed Entry"

# Section name -> label shown in the entry picker
ENTRY_LABELS: Dict[str, Callable[[Any], str]] = {
    "contacts": lambda entry: entry.name,
    "education": lambda entry: entry.name,
    "experience": lambda entry: entry.title or entry.company,
    "tags": lambda entry: entry.string,
}


def derive_contact_name(url: str) -> Optional[str]:
    """
    Suggest a display name for a contact URL from its host name.

    The first label of the host (after dropping "www.") is capitalized.

    Returns:
        Suggested name, or None if no host can be found

    Examples:
        >>> derive_contact_name("https://www.github.com/jane")
        'Github'
        >>> derive_contact_name("linkedin.com/in/jane")
        'Linkedin'
    """
    url = (url or "").strip()
    if not url:
        return None
    if not url.startswith(("http://", "https://")):
        url = "https://" + url

    try:
        host = urlsplit(url).hostname
    except ValueError:
        _log_warning(f"Invalid URL for name extraction: {url}")
        return None

    if not host:
        return None

    label = host.removeprefix("www.").split(".")[0]
    if not label:
        return None
    return label[0].upper() + label[1:]


def reconcile_end_date(start_date: str, end_date: str) -> str:
    """Clear an end date that falls before the start date (both YYYY-MM)."""
    if start_date and end_date and end_date < start_date:
        return ""
    return end_date


class ResumeEditor:
    """
    Editing session over one resume document.

    Args:
        resume: Document to edit (a new empty document if None)
        store: Store that receives the document after every change
        scheduler: Preview scheduler asked for an update after every change

    Example:
        >>> editor = ResumeEditor(store=ResumeStore(Path("data/resume.json")))
        >>> index = editor.save_entry("experience", {"experience-title": "Engineer"})
        >>> editor.form_values("experience", index)
        {'experience-title': 'Engineer', ...}
    """

    def __init__(
        self,
        resume: Optional[ResumeDocument] = None,
        store: Optional[ResumeStore] = None,
        scheduler=None,
    ):
        self.resume = resume if resume is not None else ResumeDocument()
        self.store = store
        self.scheduler = scheduler

    def _commit(self) -> None:
        if self.store is not None:
            self.store.save(self.resume)
        if self.scheduler is not None:
            self.scheduler.request_update()

    def _entry(self, section: str, index: int):
        entries = self.resume.section(section)
        if not 0 <= index < len(entries):
            raise EntryNotFoundError(section, index)
        return entries[index]

    def label(self, section: str, entry) -> str:
        return ENTRY_LABELS[section](entry) or UNNAMED_ENTRY

    # Top-level fields

    def update_field(self, name: str, value: str) -> None:
        """
        Set a top-level text field.

        Args:
            name: "name", "email", "phone" or "additional_text"
                (the JSON key "additionalText" is accepted too)
            value: New value

        Raises:
            ValueError: If the field name is unknown
        """
        attr = DOCUMENT_TEXT_FIELDS.get(name, name)
        if attr not in DOCUMENT_TEXT_FIELDS.values():
            raise ValueError(
                f"Unknown field '{name}'. Available fields: {list(DOCUMENT_TEXT_FIELDS.values())}"
            )
        setattr(self.resume, attr, value or "")
        _log_debug(f"Updated {attr}")
        self._commit()

    # Entries

    def save_entry(
        self, section: str, form_values: Dict[str, Any], index: Optional[int] = None
    ) -> int:
        """
        Save a form into a section, adding a new entry or updating an existing one.

        Form values are keyed by form field name ("experience-start-date");
        property names ("startDate") are accepted as well. Other keys are
        ignored. Updating merges the form into the entry, leaving properties
        the form does not carry unchanged.

        Args:
            section: Section name
            form_values: Form field name -> value
            index: Entry to update, or None to add a new entry

        Returns:
            Index of the saved entry

        Raises:
            ValueError: If the section is unknown
            EntryNotFoundError: If index does not point at an entry
        """
        record_type = RECORD_TYPES.get(section)
        if record_type is None:
            raise ValueError(f"Unknown section '{section}'. Available sections: {list(RECORD_TYPES)}")

        values = {}
        for key, value in form_values.items():
            prop = property_for(section, key)
            if prop is None and key in record_type.json_fields:
                prop = key
            if prop is None:
                _log_debug(f"Ignoring form field '{key}' for {section}")
                continue
            values[prop] = value

        if section == "experience" and "endDate" in values:
            start = values.get("startDate")
            if start is None and index is not None:
                start = self._entry(section, index).start_date
            values["endDate"] = reconcile_end_date(start or "", values["endDate"] or "")

        entries = self.resume.section(section)
        if index is None:
            entry = record_type.from_dict(values)
            entries.append(entry)
            index = len(entries) - 1
            action = "Added"
        else:
            merged = {**self._entry(section, index).to_dict(), **values}
            entry = record_type.from_dict(merged)
            entries[index] = entry
            action = "Saved"

        log_entry_change(action, section, index, self.label(section, entry))
        self._commit()
        return index

    def delete_entry(self, section: str, index: int):
        """
        Remove an entry from a section.

        Returns:
            The removed entry

        Raises:
            EntryNotFoundError: If index does not point at an entry
        """
        entry = self._entry(section, index)
        del self.resume.section(section)[index]
        log_entry_change("Deleted", section, index, self.label(section, entry))
        self._commit()
        return entry

    def form_values(self, section: str, index: int) -> Dict[str, Any]:
        """Values of an entry keyed by form field name, for filling its form."""
        entry = self._entry(section, index)
        values = {}
        for prop, value in entry.to_dict().items():
            key = form_key_for(section, prop)
            if key is not None:
                values[key] = value
        return values

    def entry_labels(self, section: str) -> List[str]:
        """Labels of a section's entries, in document order."""
        return [self.label(section, entry) for entry in self.resume.section(section)]

    # Import / export

    def import_json(self, text: str, source: str = "<import>") -> ResumeDocument:
        """
        Replace the document with one parsed from JSON.

        Raises:
            ResumeLoadError: If the JSON cannot be loaded; the current
                document is left untouched
        """
        self.resume = loads_resume(text, source=source)
        self._commit()
        return self.resume

    def export_json(self, indent: Optional[int] = 2) -> str:
        return dumps_resume(self.resume, indent=indent)
