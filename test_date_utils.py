import pytest

from models.flight import CalendarDate
from utils.date_utils import (
    parse_time_to_minutes,
    minutes_to_time,
    parse_date,
    to_number,
    parse_percentage,
    count_potential_flights
)


@pytest.mark.parametrize('value, expected', [
    ('14:00', 840),
    ('08:05', 485),
    ('08:05:59', 485),
    ('03/02/2025 10:45:00', 645),
    (' 7:30 ', 450),
    ('', 0),
    (None, 0),
    (0, 0),
    ('1400', 0),
    ('ab:cd', 0),
])
def test_parse_time_to_minutes(value, expected):
    assert parse_time_to_minutes(value) == expected


@pytest.mark.parametrize('minutes, expected', [
    (0, '00:00'),
    (485, '08:05'),
    (1439, '23:59'),
    (1440, '00:00'),
    (1505, '01:05'),
    (-30, '00:00'),
    (None, '00:00'),
])
def test_minutes_to_time(minutes, expected):
    assert minutes_to_time(minutes) == expected


def test_format_of_parsed_time_is_identity():
    assert minutes_to_time(parse_time_to_minutes('08:05')) == '08:05'


def test_parse_date_plain_and_with_time():
    assert parse_date('03/02/2025') == CalendarDate(2025, 1, 3)
    assert parse_date('31/12/2024 23:10:00') == CalendarDate(2024, 11, 31)


def test_parse_date_two_digit_year():
    assert parse_date('15/01/26') == CalendarDate(2026, 0, 15)


@pytest.mark.parametrize('value', ['', None, '2025-02-03', '03/02', 'aa/bb/cccc', '03/13/2025'])
def test_parse_date_unparseable(value):
    assert parse_date(value) is None


def test_calendar_date_iso():
    assert CalendarDate(2025, 1, 3).to_iso() == '2025-02-03'


@pytest.mark.parametrize('value, expected', [
    (107, 107.0),
    (12.5, 12.5),
    ('120', 120.0),
    (' 35 ', 35.0),
    ('95,5', 95.5),
    ('1.234,5', 1234.5),
    ('1,234.5', 1234.5),
    ('87%', 87.0),
    ('', 0.0),
    (None, 0.0),
    ('n/a', 0.0),
    (float('nan'), 0.0),
    (True, 0.0),
])
def test_to_number(value, expected):
    assert to_number(value) == expected


def test_parse_percentage():
    assert parse_percentage('92.5%') == 92.5
    assert parse_percentage('') == 0.0


def test_potential_flights_month_with_five_fridays():
    # January 2026 starts on a Thursday: 4 Mondays, 4 Wednesdays, 5 Fridays
    assert count_potential_flights(0, 2026) == 13


def test_potential_flights_february():
    assert count_potential_flights(1, 2025) == 12


def test_potential_flights_custom_weekdays():
    # Every day of a 30-day month
    assert count_potential_flights(3, 2025, weekdays=range(7)) == 30
