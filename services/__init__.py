"""
Services Package - Business Logic Layer
"""

from services.base_service import IDataService, ServiceResult
from services.sheet_service import (
    GoogleSheetsService,
    CsvFileService,
    get_data_service,
    parse_csv_table
)
from services.column_resolver import resolve_columns, segment_headers, find_header
from services.sla_service import (
    CHECKPOINTS,
    evaluate_flight,
    evaluate_flights,
    aggregate_month,
    summarize_segment,
    filter_by_period
)

__all__ = [
    'IDataService',
    'ServiceResult',
    'GoogleSheetsService',
    'CsvFileService',
    'get_data_service',
    'parse_csv_table',
    'resolve_columns',
    'segment_headers',
    'find_header',
    'CHECKPOINTS',
    'evaluate_flight',
    'evaluate_flights',
    'aggregate_month',
    'summarize_segment',
    'filter_by_period'
]
