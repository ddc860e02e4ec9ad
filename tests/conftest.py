"""Shared fixtures for VITAE tests."""

from datetime import date
from pathlib import Path

import pytest

from vitae.contexts.editing import ResumeDocument, load_resume_file
from vitae.contexts.layout import PageLayoutEngine

FIXTURES_PATH = Path(__file__).parent / "fixtures"

# More than three years after the Jane Doe graduation date (2019-05)
REFERENCE_DATE = date(2025, 11, 14)


@pytest.fixture
def fixtures_path() -> Path:
    return FIXTURES_PATH


@pytest.fixture
def jane_doe() -> ResumeDocument:
    return load_resume_file(FIXTURES_PATH / "jane_doe.json")


@pytest.fixture
def legacy_resume_path() -> Path:
    return FIXTURES_PATH / "legacy_resume.json"


@pytest.fixture(scope="session")
def engine() -> PageLayoutEngine:
    return PageLayoutEngine()


@pytest.fixture
def reference_date() -> date:
    return REFERENCE_DATE

