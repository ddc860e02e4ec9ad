"""
Ordering of education and experience entries.

Both orderings are stable: entries with equal keys keep their document order.
Dates compare as 'YYYY-MM' strings, which orders them chronologically and puts
undated entries (the empty string) last in a descending sort.
"""

from typing import Dict, Iterable, List

from vitae.contexts.editing.resume_data_structure import EducationRecord, ExperienceRecord

CATEGORY_PRIORITY: Dict[str, int] = {
    "Work Experience": 1,
    "Contract": 2,
    "Internship": 3,
    "Project": 4,
    "Projects": 4,
    "Volunteer": 5,
}
UNKNOWN_CATEGORY_PRIORITY = 99


def category_priority(category: str) -> int:
    """Rank of an experience category; unrecognized categories rank last."""
    return CATEGORY_PRIORITY.get(category or "", UNKNOWN_CATEGORY_PRIORITY)


def sort_education(records: Iterable[EducationRecord]) -> List[EducationRecord]:
    """Education entries, most recent date first, undated last."""
    return sorted(records, key=lambda record: record.date or "", reverse=True)


def sort_experience(records: Iterable[ExperienceRecord]) -> List[ExperienceRecord]:
    """Experience entries grouped by category priority, most recent start first within a group."""
    # Two stable passes: secondary key first, then primary
    by_start = sorted(records, key=lambda record: record.start_date or "", reverse=True)
    return sorted(by_start, key=lambda record: category_priority(record.category))
