"""
Resume Document Data Structures

Defines the resume document and its entry records. Attribute names are
snake_case; the JSON document schema uses the camelCase keys listed in each
record's json_fields table. Keys a record does not know are kept in `extra`,
and values that had to be coerced on load (numbers, null, "yes" flags, bare
string tags) are remembered in `raw`, so a loaded document that is not edited
is written back as it was read.

Collections are plain lists: insertion order is kept and structurally equal
entries are not merged.
"""

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, List

from vitae.contexts.editing.exceptions import InvalidResumeStructureError
from vitae.contexts.editing.field_names import migrate_record_keys

SCHEMA_VERSION = "1.0.0"

CERTIFICATE = "Certificate"


def as_text(value: Any) -> str:
    """Coerce a loaded field value to a string, treating None as empty."""
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


class _Record:
    """Shared JSON conversion for entry records."""

    # JSON key -> attribute name
    json_fields: ClassVar[Dict[str, str]] = {}

    @classmethod
    def _coerce(cls, attr: str, value: Any) -> Any:
        return as_text(value)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]):
        values = {}
        extra = {}
        raw = {}
        for key, value in data.items():
            attr = cls.json_fields.get(key)
            if attr is None:
                extra[key] = value
                continue
            values[attr] = cls._coerce(attr, value)
            if values[attr] != value or type(values[attr]) is not type(value):
                raw[key] = value
        return cls(**values, extra=extra, raw=raw)

    def _stored_value(self, key: str, attr: str) -> Any:
        # The loaded value is written back as long as the field was not edited
        value = getattr(self, attr)
        if key in self.raw and self._coerce(attr, self.raw[key]) == value:
            return self.raw[key]
        return value

    def to_dict(self) -> Dict[str, Any]:
        data = {key: self._stored_value(key, attr) for key, attr in self.json_fields.items()}
        for key, value in self.extra.items():
            data.setdefault(key, value)
        return data

    def to_json_value(self) -> Any:
        """Value stored in the document's JSON collection."""
        return self.to_dict()


@dataclass
class Contact(_Record):
    """
    Additional contact method shown on the contact line.

    Attributes:
        name: Display text (e.g., "GitHub")
        url: Link target; empty means the text is not clickable
    """

    name: str = ""
    url: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)
    raw: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    json_fields: ClassVar[Dict[str, str]] = {"name": "name", "url": "url"}


@dataclass
class EducationRecord(_Record):
    """
    Education or certification entry.

    Attributes:
        degree_type: "Certificate" or a degree name (e.g., "B.S.")
        name: Institution or certificate name
        category: Field of study
        city: Institution city
        state: Institution state
        date: Completion date as YYYY-MM
    """

    degree_type: str = ""
    name: str = ""
    category: str = ""
    city: str = ""
    state: str = ""
    date: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)
    raw: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    json_fields: ClassVar[Dict[str, str]] = {
        "degreeType": "degree_type",
        "name": "name",
        "category": "category",
        "city": "city",
        "state": "state",
        "date": "date",
    }

    @property
    def is_certificate(self) -> bool:
        return self.degree_type == CERTIFICATE


@dataclass
class ExperienceRecord(_Record):
    """
    Work history, project, internship or volunteer entry.

    Attributes:
        title: Job or project title
        company: Company or organization
        location: Location (e.g., state)
        url: Link for the title; empty means no link
        start_date: Start as YYYY-MM
        end_date: End as YYYY-MM or "Present"; empty means "Present"
        summary: One-line summary, shown as the first bullet
        details: Newline separated bullet text
        category: "Work Experience", "Contract", "Internship", "Project",
            "Projects", "Volunteer" or anything else
    """

    title: str = ""
    company: str = ""
    location: str = ""
    url: str = ""
    start_date: str = ""
    end_date: str = ""
    summary: str = ""
    details: str = ""
    category: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)
    raw: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    json_fields: ClassVar[Dict[str, str]] = {
        "title": "title",
        "company": "company",
        "location": "location",
        "url": "url",
        "startDate": "start_date",
        "endDate": "end_date",
        "summary": "summary",
        "details": "details",
        "category": "category",
    }


@dataclass
class Tag(_Record):
    """Job matching tag. Stored and exported only."""

    string: str = ""
    is_regex: bool = False
    extra: Dict[str, Any] = field(default_factory=dict)
    raw: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)
    bare: bool = field(default=False, repr=False, compare=False)

    json_fields: ClassVar[Dict[str, str]] = {"string": "string", "isRegex": "is_regex"}

    @classmethod
    def _coerce(cls, attr: str, value: Any) -> Any:
        if attr == "is_regex":
            if isinstance(value, str):
                return value.strip().lower() in ("true", "1", "yes", "on")
            return bool(value)
        return as_text(value)

    @classmethod
    def from_dict(cls, data: Any) -> "Tag":
        # Early documents stored tags as bare strings
        if isinstance(data, str):
            return cls(string=data, bare=True)
        return super().from_dict(data)

    def to_json_value(self) -> Any:
        if self.bare and not self.is_regex and not self.extra:
            return self.string
        return self.to_dict()


# Section name -> record class
RECORD_TYPES = {
    "contacts": Contact,
    "education": EducationRecord,
    "experience": ExperienceRecord,
    "tags": Tag,
}

# JSON key -> attribute name for top-level text fields
DOCUMENT_TEXT_FIELDS = {
    "name": "name",
    "email": "email",
    "phone": "phone",
    "additionalText": "additional_text",
}


@dataclass
class ResumeDocument:
    """
    Complete resume as edited by the user and consumed by the layout engine.

    Attributes:
        name: Candidate name
        email: Email address
        phone: Phone number
        additional_text: Free text shown under the contact line
        contacts: Additional contact methods
        education: Education and certification entries
        experience: Work history, projects and internships
        tags: Job matching tags (carried through the schema only)
        version: Schema version the document was written with
        extra: Top-level keys the schema does not define, written back as loaded
    """

    name: str = ""
    email: str = ""
    phone: str = ""
    additional_text: str = ""
    contacts: List[Contact] = field(default_factory=list)
    education: List[EducationRecord] = field(default_factory=list)
    experience: List[ExperienceRecord] = field(default_factory=list)
    tags: List[Tag] = field(default_factory=list)
    version: str = SCHEMA_VERSION
    extra: Dict[str, Any] = field(default_factory=dict)
    raw: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ResumeDocument":
        """
        Build a document from decoded JSON.

        Missing fields default to empty values and legacy form field keys in
        entries are migrated to property names.

        Raises:
            InvalidResumeStructureError: If the root is not an object or a
                collection is not a list of entries
        """
        if not isinstance(data, dict):
            raise InvalidResumeStructureError(
                f"Resume document must be a JSON object, got {type(data).__name__}"
            )

        document = cls(version=as_text(data.get("version")))
        for key, attr in DOCUMENT_TEXT_FIELDS.items():
            value = data.get(key)
            setattr(document, attr, as_text(value))
            if key in data and not isinstance(value, str):
                document.raw[key] = value

        known = {"version", *DOCUMENT_TEXT_FIELDS, *RECORD_TYPES}
        document.extra = {key: value for key, value in data.items() if key not in known}

        for section, record_type in RECORD_TYPES.items():
            raw_entries = data.get(section) or []
            if not isinstance(raw_entries, list):
                raise InvalidResumeStructureError(
                    f"'{section}' must be a list, got {type(raw_entries).__name__}"
                )
            entries = []
            for i, raw in enumerate(raw_entries):
                if isinstance(raw, dict):
                    entries.append(record_type.from_dict(migrate_record_keys(section, raw)))
                elif section == "tags" and isinstance(raw, str):
                    entries.append(Tag.from_dict(raw))
                else:
                    raise InvalidResumeStructureError(
                        f"'{section}[{i}]' must be an object, got {type(raw).__name__}"
                    )
            setattr(document, section, entries)

        return document

    def to_dict(self) -> Dict[str, Any]:
        """Encode as the JSON document schema, always stamped with SCHEMA_VERSION."""
        data: Dict[str, Any] = {"version": SCHEMA_VERSION}
        for key, attr in DOCUMENT_TEXT_FIELDS.items():
            value = getattr(self, attr)
            if key in self.raw and as_text(self.raw[key]) == value:
                value = self.raw[key]
            data[key] = value
        for section in RECORD_TYPES:
            data[section] = [entry.to_json_value() for entry in getattr(self, section)]
        for key, value in self.extra.items():
            data.setdefault(key, value)
        return data

    def section(self, name: str) -> list:
        """Entry list for a section name ('contacts', 'education', 'experience', 'tags')."""
        if name not in RECORD_TYPES:
            raise ValueError(f"Unknown section '{name}'. Available sections: {list(RECORD_TYPES)}")
        return getattr(self, name)
