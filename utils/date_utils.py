"""
Date, Time and Number Parsing Utilities

Sheet cells are messy: times come bare ("14:05") or embedded in a timestamp
("03/02/2025 14:05:00"), numbers come with '%' signs or decimal commas, and
blanks are everywhere. Every parser here degrades to 0 / None instead of
raising, so callers never need their own fallbacks.
"""

import calendar
import math
from typing import Optional, Iterable, Tuple, Any

from models.flight import CalendarDate

# Contract operates three weekly rotations: Monday, Wednesday, Friday
OPERATING_WEEKDAYS: Tuple[int, ...] = (calendar.MONDAY, calendar.WEDNESDAY, calendar.FRIDAY)


def parse_time_to_minutes(value: Any) -> int:
    """
    Parse a cell to minutes from midnight

    Supports:
    - "HH:MM"
    - "HH:MM:SS"
    - "DD/MM/YYYY HH:MM:SS" (time taken after the first space)

    Args:
        value: Cell value

    Returns:
        hours * 60 + minutes, or 0 if the cell is blank or malformed
    """
    if not value:
        return 0

    text = str(value).strip()
    if ' ' in text:
        text = text.split(' ', 1)[1].strip()

    parts = text.split(':')
    if len(parts) < 2:
        return 0

    try:
        hours = int(parts[0])
        minutes = int(parts[1])
    except ValueError:
        return 0

    return hours * 60 + minutes


def minutes_to_time(minutes: Optional[int]) -> str:
    """
    Convert minutes to HH:MM format

    Negative values are clamped to "00:00"; values past midnight wrap.

    Args:
        minutes: Minutes from midnight

    Returns:
        Time string in HH:MM format
    """
    if minutes is None or minutes < 0:
        return "00:00"

    minutes = int(minutes)
    hours = (minutes // 60) % 24
    mins = minutes % 60
    return f"{hours:02d}:{mins:02d}"


def parse_date(value: Any) -> Optional[CalendarDate]:
    """
    Parse "DD/MM/YYYY[ HH:MM:SS]" into a CalendarDate (zero-based month)

    Two-digit years are read as 20YY.

    Returns:
        CalendarDate or None if the cell cannot be read as a date
    """
    if not value:
        return None

    text = str(value).strip()
    if not text:
        return None

    parts = text.split()[0].split('/')
    if len(parts) < 3:
        return None

    try:
        day = int(parts[0])
        month = int(parts[1])
        year = int(parts[2])
    except ValueError:
        return None

    if year < 100:
        year += 2000

    if not 1 <= month <= 12:
        return None

    return CalendarDate(year=year, month=month - 1, day=day)


def to_number(value: Any) -> float:
    """
    Coerce a cell to a number; blanks and junk become 0

    Accepts ints/floats, numeric strings, a trailing '%' and a decimal comma
    ("95,5" -> 95.5).
    """
    if value is None or isinstance(value, bool):
        return 0.0

    if isinstance(value, (int, float)):
        number = float(value)
        return 0.0 if math.isnan(number) or math.isinf(number) else number

    text = str(value).strip().replace('%', '').replace(' ', '')
    if not text:
        return 0.0

    if ',' in text:
        if text.rfind(',') > text.rfind('.'):
            # 1.234,5 -> 1234.5
            text = text.replace('.', '').replace(',', '.')
        else:
            # 1,234.5 -> 1234.5
            text = text.replace(',', '')

    try:
        number = float(text)
    except ValueError:
        return 0.0

    return 0.0 if math.isnan(number) or math.isinf(number) else number


def parse_percentage(value: Any) -> float:
    """Parse a percentage cell such as "87.5%" to 87.5"""
    return to_number(value)


def count_potential_flights(
    month: int,
    year: int,
    weekdays: Iterable[int] = OPERATING_WEEKDAYS
) -> int:
    """
    Count the operating days of a month

    Args:
        month: Zero-based month (0 = January)
        year: Four-digit year
        weekdays: Operating weekdays (calendar.MONDAY == 0)

    Returns:
        Number of days in the month that fall on an operating weekday
    """
    operating = set(weekdays)
    first_weekday, days_in_month = calendar.monthrange(year, month + 1)

    count = 0
    for offset in range(days_in_month):
        if (first_weekday + offset) % 7 in operating:
            count += 1
    return count
