"""Unit tests for the resume editing session."""

import pytest

from vitae.contexts.editing import (
    EntryNotFoundError,
    ExperienceRecord,
    ResumeDocument,
    ResumeEditor,
    ResumeLoadError,
    ResumeStore,
    derive_contact_name,
    reconcile_end_date,
)
from vitae.contexts.editing.editor import UNNAMED_ENTRY


class RecordingScheduler:
    """Stands in for PreviewScheduler and counts update requests."""

    def __init__(self):
        self.requests = 0

    def request_update(self, immediate=False):
        self.requests += 1


@pytest.fixture
def scheduler():
    return RecordingScheduler()


@pytest.fixture
def editor(tmp_path, scheduler):
    return ResumeEditor(store=ResumeStore(tmp_path / "resume.json"), scheduler=scheduler)


@pytest.mark.unit
@pytest.mark.parametrize(
    "url,expected",
    [
        ("https://www.github.com/jane", "Github"),
        ("linkedin.com/in/jane", "Linkedin"),
        ("http://gitlab.example.org", "Gitlab"),
        ("  https://WWW.Example.com ", "Example"),
        ("", None),
        ("https://", None),
    ],
)
def test_derive_contact_name(url, expected):
    assert derive_contact_name(url) == expected


@pytest.mark.unit
@pytest.mark.parametrize(
    "start,end,expected",
    [
        ("2020-01", "2021-03", "2021-03"),
        ("2021-03", "2020-01", ""),
        ("2020-01", "2020-01", "2020-01"),
        ("", "2020-01", "2020-01"),
        ("2020-01", "", ""),
    ],
)
def test_reconcile_end_date(start, end, expected):
    assert reconcile_end_date(start, end) == expected


@pytest.mark.unit
def test_update_field_commits(editor, scheduler):
    editor.update_field("name", "Jane Doe")
    editor.update_field("additionalText", "Hello")

    assert editor.resume.name == "Jane Doe"
    assert editor.resume.additional_text == "Hello"
    assert scheduler.requests == 2
    assert editor.store.load().name == "Jane Doe"


@pytest.mark.unit
def test_update_unknown_field(editor):
    with pytest.raises(ValueError, match="Unknown field"):
        editor.update_field("nickname", "JD")


@pytest.mark.unit
def test_save_new_entry_from_form(editor, scheduler):
    index = editor.save_entry(
        "experience",
        {
            "experience-title": "Engineer",
            "experience-start-date": "2020-01",
            "experience-category": "Work Experience",
            "experience-unknown": "ignored",
        },
    )

    assert index == 0
    entry = editor.resume.experience[0]
    assert entry == ExperienceRecord(title="Engineer", start_date="2020-01", category="Work Experience")
    assert scheduler.requests == 1
    assert editor.store.load().experience[0].title == "Engineer"


@pytest.mark.unit
def test_save_accepts_property_names(editor):
    editor.save_entry("contacts", {"name": "Github", "url": "https://github.com/j"})
    assert editor.resume.contacts[0].url == "https://github.com/j"


@pytest.mark.unit
def test_save_existing_entry_merges(editor):
    index = editor.save_entry("experience", {"experience-title": "Engineer", "experience-company": "Acme"})
    editor.save_entry("experience", {"experience-title": "Senior Engineer"}, index=index)

    entry = editor.resume.experience[index]
    assert entry.title == "Senior Engineer"
    assert entry.company == "Acme"
    assert len(editor.resume.experience) == 1


@pytest.mark.unit
def test_save_clears_end_date_before_start(editor):
    index = editor.save_entry(
        "experience", {"experience-start-date": "2021-03", "experience-end-date": "2020-01"}
    )
    assert editor.resume.experience[index].end_date == ""

    # Start date taken from the stored entry when the form omits it
    editor.save_entry("experience", {"experience-end-date": "2019-01"}, index=index)
    assert editor.resume.experience[index].end_date == ""

    editor.save_entry("experience", {"experience-end-date": "2022-01"}, index=index)
    assert editor.resume.experience[index].end_date == "2022-01"


@pytest.mark.unit
def test_save_unknown_section(editor):
    with pytest.raises(ValueError, match="Unknown section"):
        editor.save_entry("skills", {})


@pytest.mark.unit
def test_save_missing_index(editor):
    with pytest.raises(EntryNotFoundError):
        editor.save_entry("education", {"education-name": "U"}, index=3)


@pytest.mark.unit
def test_delete_entry(editor, scheduler):
    editor.save_entry("tags", {"tag-string": "python"})
    editor.save_entry("tags", {"tag-string": "rust"})

    removed = editor.delete_entry("tags", 0)

    assert removed.string == "python"
    assert [t.string for t in editor.resume.tags] == ["rust"]
    assert scheduler.requests == 3
    with pytest.raises(EntryNotFoundError) as exc_info:
        editor.delete_entry("tags", 5)
    assert isinstance(exc_info.value, LookupError)


@pytest.mark.unit
def test_form_values_use_form_keys(editor):
    index = editor.save_entry("education", {"education-name": "State U", "education-date": "2019-05"})
    values = editor.form_values("education", index)

    assert values["education-name"] == "State U"
    assert values["education-date"] == "2019-05"
    assert values["education-degree-type"] == ""
    assert set(values) == {
        "education-degree-type",
        "education-name",
        "education-category",
        "education-city",
        "education-state",
        "education-date",
    }


@pytest.mark.unit
def test_entry_labels(editor):
    editor.save_entry("experience", {"experience-title": "Engineer"})
    editor.save_entry("experience", {"experience-company": "Acme"})
    editor.save_entry("experience", {})

    assert editor.entry_labels("experience") == ["Engineer", "Acme", UNNAMED_ENTRY]


@pytest.mark.unit
def test_import_and_export_json(editor, jane_doe):
    other = ResumeEditor(resume=jane_doe)
    editor.import_json(other.export_json())

    assert editor.resume == jane_doe
    assert editor.store.load() == jane_doe


@pytest.mark.unit
def test_failed_import_keeps_document(editor):
    editor.update_field("name", "Jane")

    with pytest.raises(ResumeLoadError):
        editor.import_json("[1, 2, 3]")
    assert editor.resume.name == "Jane"


@pytest.mark.unit
def test_editor_without_store_or_scheduler():
    editor = ResumeEditor()
    editor.update_field("email", "jane@x.com")
    assert editor.resume == ResumeDocument(email="jane@x.com")
