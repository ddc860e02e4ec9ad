"""
Date formatting for resume entries.

Dates are stored as "YYYY-MM" strings (a day component is tolerated and
ignored). Nothing here raises: input that does not parse is shown as typed.
"""

import re
from datetime import date
from typing import Optional

PRESENT = "Present"

# Fixed English abbreviations, independent of the process locale
MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

# ASCII digits only; int() would also take '20_19', ' 2019' and full-width digits
_DIGITS = re.compile(r"\d+", re.ASCII)


def parse_year_month(date_str: Optional[str]) -> Optional[date]:
    """First day of the month named by a 'YYYY-MM' string, or None if it does not parse."""
    if not date_str:
        return None

    parts = date_str.split("-")
    if len(parts) < 2:
        return None

    year_part, month_part = parts[0], parts[1]
    if not (_DIGITS.fullmatch(year_part) and _DIGITS.fullmatch(month_part)):
        return None

    year = int(year_part)
    month = int(month_part)

    if not 1 <= year <= 9999 or not 1 <= month <= 12:
        return None
    return date(year, month, 1)


def format_date(date_str: Optional[str]) -> str:
    """
    Format a 'YYYY-MM' date as 'Mon YYYY'.

    Examples:
        format_date("2021-06")   # "Jun 2021"
        format_date("Present")   # "Present"
        format_date("")          # ""
        format_date("2021")      # "2021" (unparsed, returned as is)
    """
    if not date_str:
        return ""
    if date_str == PRESENT:
        return PRESENT

    parsed = parse_year_month(date_str)
    if parsed is None:
        return date_str
    return f"{MONTH_ABBREVIATIONS[parsed.month - 1]} {parsed.year}"


def years_before(reference_date: date, years: int) -> date:
    """Same calendar day `years` years earlier; Feb 29 falls back to Feb 28."""
    try:
        return reference_date.replace(year=reference_date.year - years)
    except ValueError:
        return reference_date.replace(year=reference_date.year - years, day=28)


def is_older_than_threshold(date_str: Optional[str], reference_date: date, years: int) -> bool:
    """
    True if the month named by date_str starts strictly before
    reference_date minus `years` years. Unparseable dates are never older.
    """
    parsed = parse_year_month(date_str)
    if parsed is None:
        return False
    return parsed < years_before(reference_date, years)


def format_date_range(start_date: Optional[str], end_date: Optional[str]) -> str:
    """
    Format an experience date range.

    A missing end date means the entry is ongoing. Without a start date only
    the end is shown.

    Examples:
        format_date_range("2020-01", "")         # "Jan 2020 - Present"
        format_date_range("2020-01", "2021-03")  # "Jan 2020 - Mar 2021"
        format_date_range("", "2021-03")         # "Mar 2021"
    """
    formatted_end = format_date(end_date or PRESENT)
    formatted_start = format_date(start_date)
    if not formatted_start:
        return formatted_end
    return f"{formatted_start} - {formatted_end}"


def education_date_label(
    date_str: Optional[str],
    reference_date: date,
    years: int = 3,
    graduated_label: str = "Status - Graduated",
) -> str:
    """
    Right-hand label for an education entry.

    Empty when there is no date, the graduated label once the date is more
    than `years` years old, otherwise the formatted date.
    """
    if not date_str:
        return ""
    if is_older_than_threshold(date_str, reference_date, years):
        return graduated_label
    return format_date(date_str)
