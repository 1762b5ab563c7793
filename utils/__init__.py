"""
Utility Functions Package
"""

from utils.validators import (
    CSVValidator,
    decode_content,
    validate_month,
    validate_year,
    validate_segment,
    validate_file_extension
)
from utils.date_utils import (
    parse_time_to_minutes,
    minutes_to_time,
    parse_date,
    to_number,
    parse_percentage,
    count_potential_flights
)

__all__ = [
    'CSVValidator',
    'decode_content',
    'validate_month',
    'validate_year',
    'validate_segment',
    'validate_file_extension',
    'parse_time_to_minutes',
    'minutes_to_time',
    'parse_date',
    'to_number',
    'parse_percentage',
    'count_potential_flights'
]
