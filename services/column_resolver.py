"""
Column Resolver

Maps semantic field ids (std, checkin_open, ...) to the header strings of the
loaded sheet. Matching is case-insensitive and exact, and is confined to the
column range of the active segment. A field that cannot be resolved maps to
'' and every consumer treats it as "metric unavailable".
"""

import logging
from typing import List, Dict, Sequence, Optional

from models.flight import ColumnMap
from models.segment import Segment, get_layout

logger = logging.getLogger(__name__)


# Keyword synonyms per segment and field
FIELD_KEYWORDS: Dict[Segment, Dict[str, List[str]]] = {
    Segment.GENERAL: {
        'std': ['Previsão Decolagem'],
        'checkin_open': ['Abertura CHECK IN'],
        'checkin_close': ['Fechamento CHECK IN'],
        'boarding_start': ['Início Embarque'],
        'last_pax_onboard': ['Último PAX a bordo'],
        'pax_count': ['PAX'],
        'orbital_punctuality': ['% de PONTUALIDADE ORBITAL'],
        'base_punctuality': ['% DE PONTUALIDADE DA BASE'],
        'bags_handled': ['BAGS de Mão Atendidos'],
        'checkin_service_time': ['MÉDIA DE TEMPO ATENDIMENTO CHECK IN'],
        'queue_time': ['MÉDIA DE TEMPO AGUARDANDO NA FILA'],
        'flight_number': ['ID VOO', 'VOO'],
    },
}

# Fields read by absolute position in the full header list, not by keyword
FIXED_POSITIONS: Dict[str, int] = {
    'date': 0,
    'id': 1,
    'landing_time': 19,
}


def find_header(headers: Sequence[str], keywords: Sequence[str]) -> str:
    """
    Find the first header equal (ignoring case) to one of the keywords

    Args:
        headers: Ordered header strings to search
        keywords: Accepted spellings of the field

    Returns:
        Matching header, or '' if none
    """
    wanted = {str(k).lower() for k in keywords}
    for header in headers:
        if str(header).lower() in wanted:
            return header
    return ''


def segment_headers(headers: Sequence[str], segment: Segment) -> List[str]:
    """Headers that belong to a segment's column range"""
    layout = get_layout(segment)
    return list(headers[layout.start:layout.end])


def header_at(headers: Sequence[str], position: int) -> str:
    """Header at an absolute position, or '' if the sheet is narrower"""
    if 0 <= position < len(headers):
        return headers[position]
    return ''


def resolve_columns(
    headers: Sequence[str],
    segment: Segment = Segment.GENERAL,
    keywords: Optional[Dict[str, List[str]]] = None
) -> ColumnMap:
    """
    Build the field -> header map for a segment

    Args:
        headers: Full ordered header list of the sheet
        segment: Active operational segment
        keywords: Override of the keyword table (defaults to FIELD_KEYWORDS)

    Returns:
        ColumnMap with every known field present ('' when unresolved)
    """
    if keywords is None:
        keywords = FIELD_KEYWORDS.get(segment, {})

    scoped = segment_headers(headers, segment)
    columns: ColumnMap = {field: find_header(scoped, words) for field, words in keywords.items()}

    for field, position in FIXED_POSITIONS.items():
        columns[field] = header_at(headers, position)

    missing = [field for field, header in columns.items() if not header]
    if missing and headers:
        logger.debug(f"Unresolved columns for segment {segment.value}: {', '.join(missing)}")

    return columns
