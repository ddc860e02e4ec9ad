"""
Form field names for resume entry editors.

Each editable section has a fixed table mapping the name of a form field to the
document property it fills. The table is used in both directions: saving a form
maps field names to properties, and loading an entry into a form maps
properties back to field names. Documents exported by older versions stored the
raw field names as record keys; migrate_record_keys() translates them.
"""

from typing import Any, Dict, Optional

# Section name (as used on ResumeDocument) -> form field name -> property name
FORM_FIELDS: Dict[str, Dict[str, str]] = {
    "contacts": {
        "contact-form-name-input": "name",
        "contact-form-url-input": "url",
    },
    "education": {
        "education-degree-type": "degreeType",
        "education-name": "name",
        "education-category": "category",
        "education-city": "city",
        "education-state": "state",
        "education-date": "date",
    },
    "experience": {
        "experience-title": "title",
        "experience-company": "company",
        "experience-location": "location",
        "experience-url": "url",
        "experience-start-date": "startDate",
        "experience-end-date": "endDate",
        "experience-summary": "summary",
        "experience-details": "details",
        "experience-category": "category",
    },
    "tags": {
        "tag-string": "string",
        "tag-is-regex": "isRegex",
    },
}

# Section name -> property name -> form field name
PROPERTY_FIELDS: Dict[str, Dict[str, str]] = {
    section: {prop: form_key for form_key, prop in table.items()}
    for section, table in FORM_FIELDS.items()
}

SECTIONS = tuple(FORM_FIELDS)


def _table(section: str, tables: Dict[str, Dict[str, str]]) -> Dict[str, str]:
    if section not in tables:
        raise ValueError(f"Unknown section '{section}'. Available sections: {list(SECTIONS)}")
    return tables[section]


def property_for(section: str, form_key: str) -> Optional[str]:
    """Property filled by a form field, or None if the field is not in the table."""
    return _table(section, FORM_FIELDS).get(form_key)


def form_key_for(section: str, prop: str) -> Optional[str]:
    """Form field that edits a property, or None if the property has no field."""
    return _table(section, PROPERTY_FIELDS).get(prop)


def migrate_record_keys(section: str, record: Dict[str, Any]) -> Dict[str, Any]:
    """
    Rename legacy form field keys in a stored record to property names.

    Keys that are not form field names are kept as they are, so records that
    already use property names pass through unchanged.

    Example:
        >>> migrate_record_keys("experience", {"experience-start-date": "2020-01"})
        {'startDate': '2020-01'}
    """
    table = _table(section, FORM_FIELDS)
    return {table.get(key, key): value for key, value in record.items()}
