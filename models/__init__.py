"""
Models Package - Data Models and Interfaces
"""

from models.flight import (
    FlightRecord,
    ColumnMap,
    CalendarDate,
    SheetTable
)

from models.segment import (
    Segment,
    SegmentLayout,
    SEGMENT_LAYOUT,
    get_layout
)

from models.sla import (
    SlaPolicy,
    SlaCheckpoint,
    CheckpointResult,
    FlightEvaluation,
    CheckpointSummary,
    MonthlySummary
)

__all__ = [
    'FlightRecord',
    'ColumnMap',
    'CalendarDate',
    'SheetTable',
    'Segment',
    'SegmentLayout',
    'SEGMENT_LAYOUT',
    'get_layout',
    'SlaPolicy',
    'SlaCheckpoint',
    'CheckpointResult',
    'FlightEvaluation',
    'CheckpointSummary',
    'MonthlySummary'
]
