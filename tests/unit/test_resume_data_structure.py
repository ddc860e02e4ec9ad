"""Unit tests for the resume document model and persistence."""

import json

import pytest

from vitae.contexts.editing import (
    SCHEMA_VERSION,
    Contact,
    EducationRecord,
    ExperienceRecord,
    ResumeDocument,
    ResumeLoadError,
    ResumeStore,
    Tag,
    dumps_resume,
    load_resume_file,
    loads_resume,
    save_resume_file,
)
from vitae.contexts.editing.exceptions import InvalidResumeStructureError


@pytest.mark.unit
def test_from_dict_reads_camel_case_keys(jane_doe):
    assert jane_doe.name == "Jane Doe"
    assert jane_doe.phone == "555-1234"
    assert jane_doe.education[0].degree_type == "B.S."
    assert jane_doe.experience[0].start_date == "2020-01"
    assert jane_doe.experience[0].end_date == ""
    assert jane_doe.experience[0].details == "Did X\nDid Y"


@pytest.mark.unit
def test_missing_fields_default_to_empty():
    resume = ResumeDocument.from_dict({"name": "Jane"})

    assert resume.email == ""
    assert resume.additional_text == ""
    assert resume.contacts == []
    assert resume.experience == []
    assert resume.version == ""


@pytest.mark.unit
def test_null_values_become_empty_strings():
    resume = ResumeDocument.from_dict({"name": None, "experience": [{"title": None, "startDate": 2020}]})

    assert resume.name == ""
    assert resume.experience[0].title == ""
    assert resume.experience[0].start_date == "2020"


@pytest.mark.unit
def test_to_dict_uses_schema_keys_and_current_version():
    resume = ResumeDocument(name="Jane", additional_text="Hi", version="0.1.0")
    resume.experience.append(ExperienceRecord(title="E", start_date="2020-01"))

    data = resume.to_dict()

    assert data["version"] == SCHEMA_VERSION
    assert data["additionalText"] == "Hi"
    assert data["experience"][0]["startDate"] == "2020-01"
    assert set(data) == {
        "version", "name", "email", "phone", "additionalText",
        "contacts", "education", "experience", "tags",
    }


@pytest.mark.unit
def test_round_trip_keeps_unknown_keys():
    data = {
        "name": "Jane",
        "experience": [{"title": "E", "favorite": True}],
        "contacts": [{"name": "Github", "url": "https://github.com/j", "icon": "gh"}],
    }
    resume = ResumeDocument.from_dict(data)

    assert resume.experience[0].extra == {"favorite": True}
    out = resume.to_dict()
    assert out["experience"][0]["favorite"] is True
    assert out["contacts"][0]["icon"] == "gh"


@pytest.mark.unit
def test_duplicate_entries_are_kept():
    """Test that structurally equal entries are not merged."""
    entry = {"name": "Github", "url": "https://github.com/j"}
    resume = ResumeDocument.from_dict({"contacts": [entry, dict(entry)]})

    assert len(resume.contacts) == 2
    assert resume.contacts[0] == resume.contacts[1]


@pytest.mark.unit
def test_certificate_flag():
    assert EducationRecord(degree_type="Certificate").is_certificate
    assert not EducationRecord(degree_type="B.S.").is_certificate


@pytest.mark.unit
@pytest.mark.parametrize(
    "raw,expected",
    [
        ({"string": "py", "isRegex": True}, True),
        ({"string": "py", "isRegex": "true"}, True),
        ({"string": "py", "isRegex": "false"}, False),
        ({"string": "py"}, False),
        ("py", False),
    ],
)
def test_tag_is_regex_coercion(raw, expected):
    resume = ResumeDocument.from_dict({"tags": [raw]})
    assert resume.tags[0] == Tag(string="py", is_regex=expected)


@pytest.mark.unit
def test_from_dict_migrates_legacy_keys():
    resume = ResumeDocument.from_dict(
        {"experience": [{"experience-title": "E", "experience-start-date": "2021-02"}]}
    )

    assert resume.experience[0].title == "E"
    assert resume.experience[0].start_date == "2021-02"
    assert resume.experience[0].extra == {}


@pytest.mark.unit
@pytest.mark.parametrize(
    "data",
    [
        [],
        "resume",
        {"experience": {"title": "E"}},
        {"education": ["B.S."]},
    ],
)
def test_from_dict_rejects_wrong_shapes(data):
    with pytest.raises(InvalidResumeStructureError):
        ResumeDocument.from_dict(data)


@pytest.mark.unit
def test_section_lookup():
    resume = ResumeDocument(contacts=[Contact(name="A")])

    assert resume.section("contacts") is resume.contacts
    with pytest.raises(ValueError, match="Unknown section"):
        resume.section("skills")


# Persistence


@pytest.mark.unit
def test_loads_and_dumps_round_trip(jane_doe):
    again = loads_resume(dumps_resume(jane_doe))
    assert again == jane_doe


@pytest.mark.unit
def test_dumps_keeps_non_ascii():
    text = dumps_resume(ResumeDocument(name="José"))
    assert "José" in text


@pytest.mark.unit
def test_loads_invalid_json():
    with pytest.raises(ResumeLoadError) as exc_info:
        loads_resume("{not json", source="broken.json")

    assert exc_info.value.source == "broken.json"
    assert exc_info.value.original_error is not None
    assert "not valid JSON" in str(exc_info.value)
    assert isinstance(exc_info.value, ValueError)


@pytest.mark.unit
def test_loads_wrong_structure():
    with pytest.raises(ResumeLoadError, match="invalid structure"):
        loads_resume(json.dumps({"contacts": "nope"}))


@pytest.mark.unit
def test_load_missing_file(tmp_path):
    with pytest.raises(ResumeLoadError, match="could not be read"):
        load_resume_file(tmp_path / "missing.json")


@pytest.mark.unit
def test_legacy_file_loads_and_migrates(legacy_resume_path, tmp_path):
    resume = load_resume_file(legacy_resume_path)

    assert resume.version == "0.9.0"
    assert resume.contacts[0] == Contact(name="Github", url="https://github.com/samr")
    assert resume.education[1].category == "Data Science"
    assert resume.experience[0].url == "https://example.com/pipeline"
    assert resume.experience[0].extra == {"favorite": True}
    assert resume.tags == [Tag(string="python"), Tag(string="data.*engineer", is_regex=True)]

    target = save_resume_file(resume, tmp_path / "out" / "resume.json")
    data = json.loads(target.read_text(encoding="utf-8"))
    assert data["version"] == SCHEMA_VERSION
    assert data["experience"][0]["startDate"] == "2022-03"
    assert "experience-start-date" not in data["experience"][0]


@pytest.mark.unit
def test_store_starts_empty_and_persists(tmp_path):
    store = ResumeStore(tmp_path / "resume.json")

    assert not store.exists
    assert store.load() == ResumeDocument()

    store.save(ResumeDocument(name="Jane"))
    assert store.exists
    assert store.load().name == "Jane"


@pytest.mark.unit
def test_round_trip_keeps_loaded_values():
    """Test that coerced values are written back as they were read."""
    data = {
        "version": SCHEMA_VERSION,
        "name": "Jane",
        "email": None,
        "phone": 5551234,
        "additionalText": "",
        "contacts": [],
        "education": [
            {"degreeType": "B.S.", "name": "U", "category": "CS", "city": "", "state": "", "date": 201905}
        ],
        "experience": [],
        "tags": ["python", {"string": "rust", "isRegex": "yes"}, {"string": "go", "isRegex": False}],
        "theme": "dark",
    }

    resume = ResumeDocument.from_dict(data)

    assert resume.phone == "5551234"
    assert resume.education[0].date == "201905"
    assert resume.tags[1].is_regex is True
    assert resume.to_dict() == data
    assert loads_resume(dumps_resume(resume)).to_dict() == data


@pytest.mark.unit
def test_edited_values_replace_loaded_values():
    resume = ResumeDocument.from_dict(
        {"phone": 5551234, "education": [{"date": 201905}], "tags": ["python"]}
    )

    resume.phone = "555-0000"
    resume.education[0].date = "2020-05"
    resume.tags[0].is_regex = True

    data = resume.to_dict()
    assert data["phone"] == "555-0000"
    assert data["education"][0]["date"] == "2020-05"
    assert data["tags"][0] == {"string": "python", "isRegex": True}
