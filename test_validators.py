from datetime import date

import pytest

from models.segment import Segment
from utils.validators import (
    CSVValidator,
    decode_content,
    validate_month,
    validate_year,
    validate_segment,
    validate_file_extension,
    default_period
)


def test_valid_sheet():
    content = 'DATA,Previsão Decolagem\n03/02/2025,14:00\n'.encode('cp1252')
    assert CSVValidator.validate_sheet(content) == (True, None)


@pytest.mark.parametrize('content, message', [
    (b'', 'CSV file is empty'),
    (b'DATA,Previs\xc3\xa3o Decolagem\n,,\n', 'CSV file has no data rows'),
    (b'DATA,VOO\n03/02/2025,TP1\n', 'Missing required columns: previs\xe3o decolagem'),
])
def test_invalid_sheet(content, message):
    assert CSVValidator.validate_sheet(content) == (False, message)


def test_decode_content_fallback():
    assert decode_content('Início'.encode('utf-8')) == 'Início'
    assert decode_content('Início'.encode('cp1252')) == 'Início'
    assert decode_content(b'') == ''


def test_decode_content_never_fails():
    # 0x81 is undefined in cp1252
    assert decode_content(b'PAX\x81') == 'PAX\x81'


def test_sheet_in_any_single_byte_encoding_is_readable():
    content = b'DATA,Previs\xe3o Decolagem\n03/02/2025,\x81\n'
    assert CSVValidator.validate_sheet(content) == (True, None)


@pytest.mark.parametrize('value, expected', [(0, 0), ('11', 11), ('5', 5)])
def test_validate_month(value, expected):
    assert validate_month(value) == (True, None, expected)


@pytest.mark.parametrize('value', [None, '', '12', '-1', 'jan'])
def test_validate_month_rejects(value):
    is_valid, error, month = validate_month(value)
    assert not is_valid
    assert error
    assert month is None


def test_validate_year():
    assert validate_year('2025') == (True, None, 2025)
    assert not validate_year('25')[0]
    assert not validate_year('abc')[0]


def test_validate_segment():
    assert validate_segment('limpeza') == (True, None, Segment.CLEANING)
    is_valid, error, segment = validate_segment('catering')
    assert not is_valid
    assert 'geral' in error


def test_validate_file_extension():
    assert validate_file_extension('voos.CSV', ['csv']) == (True, None)
    assert not validate_file_extension('voos', ['csv'])[0]
    assert not validate_file_extension('', ['csv'])[0]


def test_default_period_is_current_month():
    assert default_period(date(2026, 1, 15)) == (0, 2026)
