"""Calendar date helpers for YYYY-MM-DD strings"""
from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional, Union

DATE_FORMAT = "%Y-%m-%d"
MONTH_ABBR = ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
              "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


def parse_date(value: Union[str, date]) -> date:
    """
    Parse a YYYY-MM-DD string (date and datetime objects pass through as dates)

    Raises:
        ValueError: the string is not exactly a zero-padded YYYY-MM-DD date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    # strptime alone accepts unpadded fields like "2024-1-2"
    if len(value) != 10:
        raise ValueError(f"Invalid date '{value}', expected YYYY-MM-DD")
    return datetime.strptime(value, DATE_FORMAT).date()


def get_today_date_string(today: Optional[date] = None) -> str:
    """
    Get today's local date as YYYY-MM-DD

    Args:
        today: override for the current date (used by tests)
    """
    return (today or date.today()).strftime(DATE_FORMAT)


def get_yesterday_date_string(today: Optional[date] = None) -> str:
    """Get yesterday's local date as YYYY-MM-DD"""
    return ((today or date.today()) - timedelta(days=1)).strftime(DATE_FORMAT)


def format_date_for_display(date_string: str) -> str:
    """
    Format a date string for display

    Returns:
        str: "Jun 5, 2025" style string
    """
    d = parse_date(date_string)
    return f"{MONTH_ABBR[d.month - 1]} {d.day}, {d.year}"


def calculate_life_days(date_string: str, birth_date: Optional[Union[str, date]]) -> Optional[int]:
    """
    Day-of-life number for a date, counting the birth day as day 1

    Returns None if there is no birth date or the date is before birth.
    """
    if not birth_date:
        return None

    diff_days = (parse_date(date_string) - parse_date(birth_date)).days
    if diff_days < 0:
        return None

    return diff_days + 1


def sort_dates_desc(dates: Iterable[str]) -> List[str]:
    """Sort dates from newest to oldest"""
    return sorted(dates, key=parse_date, reverse=True)


def sort_dates_asc(dates: Iterable[str]) -> List[str]:
    return sorted(dates, key=parse_date)
