import pytest

from models.segment import Segment, SEGMENT_LAYOUT, get_layout
from services.column_resolver import (
    find_header,
    segment_headers,
    resolve_columns,
    header_at,
    FIELD_KEYWORDS
)


def test_segment_layout_offsets():
    offsets = [(layout.segment, layout.start, layout.end) for layout in SEGMENT_LAYOUT]
    assert offsets == [
        (Segment.GENERAL, 0, 14),
        (Segment.AHL, 14, 17),
        (Segment.OHD, 17, 19),
        (Segment.RAMP, 19, 26),
        (Segment.CLEANING, 26, 29),
        (Segment.SAFETY, 29, 38),
    ]


def test_segment_layout_is_contiguous():
    for previous, current in zip(SEGMENT_LAYOUT, SEGMENT_LAYOUT[1:]):
        assert previous.end == current.start


def test_only_general_supports_summary():
    supported = [layout.segment for layout in SEGMENT_LAYOUT if layout.summary_supported]
    assert supported == [Segment.GENERAL]


def test_segment_from_string():
    assert Segment.from_string('rampa') is Segment.RAMP
    assert Segment.from_string('RAMP') is Segment.RAMP
    assert Segment.from_string('') is Segment.GENERAL
    with pytest.raises(ValueError):
        Segment.from_string('catering')


def test_find_header_is_case_insensitive_exact():
    headers = ['Previsão Decolagem (UTC)', 'PREVISÃO DECOLAGEM']
    assert find_header(headers, ['Previsão Decolagem']) == 'PREVISÃO DECOLAGEM'


def test_find_header_returns_first_match_in_header_order():
    assert find_header(['VOO', 'ID VOO'], ['ID VOO', 'VOO']) == 'VOO'


def test_find_header_missing():
    assert find_header(['A', 'B'], ['C']) == ''


def test_segment_headers(headers):
    assert segment_headers(headers, Segment.OHD) == ['OHD Registrados', 'OHD Entregues']
    assert len(segment_headers(headers, Segment.SAFETY)) == 9


def test_segment_headers_on_narrow_sheet():
    assert segment_headers(['A', 'B'], Segment.AHL) == []


def test_resolve_general_columns(headers):
    columns = resolve_columns(headers)
    assert columns['std'] == 'Previsão Decolagem'
    assert columns['pax_count'] == 'PAX'
    assert columns['flight_number'] == 'VOO'
    assert 'bags_target' not in columns
    assert set(FIELD_KEYWORDS[Segment.GENERAL]) <= set(columns)


def test_fixed_position_fields_ignore_segment(headers):
    columns = resolve_columns(headers, Segment.SAFETY)
    assert columns['date'] == 'DATA'
    assert columns['id'] == 'ID'
    assert columns['landing_time'] == 'Pouso'


def test_resolution_is_scoped_to_segment(headers):
    # 'PAX' also appears in the AHL range; General keywords are not searched there
    shifted = ['X'] * 14 + headers[14:]
    columns = resolve_columns(shifted, Segment.GENERAL)
    assert columns['pax_count'] == ''
    assert columns['std'] == ''


def test_header_at_out_of_range():
    assert header_at(['A'], 5) == ''
    assert header_at([], 0) == ''


def test_get_layout():
    assert get_layout(Segment.CLEANING).label == '5. Limpeza'
