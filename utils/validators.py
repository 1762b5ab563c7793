"""
Input Validation Utilities

Provides validation functions for CSV uploads and dashboard filters.
"""

from typing import Tuple, Optional, List, Any
from datetime import date

from models.segment import Segment

MIN_YEAR = 2000
MAX_YEAR = 2100

ENCODINGS = ['utf-8-sig', 'cp1252', 'latin1']


def decode_content(content: bytes) -> str:
    """Decode bytes with fallback (utf-8 -> cp1252 -> latin1)"""
    if not content:
        return ""

    for enc in ENCODINGS[:-1]:
        try:
            return content.decode(enc)
        except UnicodeDecodeError:
            continue
    # latin1 maps every byte
    return content.decode(ENCODINGS[-1])


class CSVValidator:
    """Validate CSV file contents before processing"""

    # Headers the General summary cannot do without
    REQUIRED_HEADERS = ['previsão decolagem']

    @classmethod
    def validate_sheet(cls, content: bytes) -> Tuple[bool, Optional[str]]:
        """
        Validate flight sheet CSV structure

        Args:
            content: Raw file bytes

        Returns:
            Tuple of (is_valid, error_message)
        """
        text = decode_content(content)
        if not text.strip():
            return False, "CSV file is empty"

        lines = [line for line in text.strip().splitlines() if line.strip(', \t')]

        if len(lines) < 2:
            return False, "CSV file has no data rows"

        header = lines[0].lower()
        missing = [col for col in cls.REQUIRED_HEADERS if col not in header]
        if missing:
            return False, f"Missing required columns: {', '.join(missing)}"

        return True, None


def validate_month(value: Any) -> Tuple[bool, Optional[str], Optional[int]]:
    """
    Validate a zero-based month (0-11)

    Returns:
        Tuple of (is_valid, error_message, parsed_month)
    """
    if value is None or value == '':
        return False, "month is required", None
    try:
        month = int(value)
    except (TypeError, ValueError):
        return False, f"Invalid month: {value}", None
    if not 0 <= month <= 11:
        return False, f"month must be between 0 and 11, got {month}", None
    return True, None, month


def validate_year(value: Any) -> Tuple[bool, Optional[str], Optional[int]]:
    """
    Validate a four-digit year

    Returns:
        Tuple of (is_valid, error_message, parsed_year)
    """
    if value is None or value == '':
        return False, "year is required", None
    try:
        year = int(value)
    except (TypeError, ValueError):
        return False, f"Invalid year: {value}", None
    if not MIN_YEAR <= year <= MAX_YEAR:
        return False, f"year must be between {MIN_YEAR} and {MAX_YEAR}, got {year}", None
    return True, None, year


def validate_segment(value: Any) -> Tuple[bool, Optional[str], Optional[Segment]]:
    """
    Validate an operational segment name

    Returns:
        Tuple of (is_valid, error_message, parsed_segment)
    """
    try:
        return True, None, Segment.from_string(value)
    except ValueError:
        allowed = ', '.join(s.value for s in Segment)
        return False, f"Unknown segment '{value}'. Allowed: {allowed}", None


def default_period(today: Optional[date] = None) -> Tuple[int, int]:
    """Current (zero-based month, year), the dashboard's initial selection"""
    today = today or date.today()
    return today.month - 1, today.year


def validate_file_extension(filename: str, allowed: List[str]) -> Tuple[bool, Optional[str]]:
    """Validate file extension"""
    if not filename:
        return False, "Filename is required"

    ext = filename.rsplit('.', 1)[-1].lower() if '.' in filename else ''

    if ext not in allowed:
        return False, f"File type not allowed. Allowed: {', '.join(allowed)}"

    return True, None
