"""
Data Processor Module for Performance SLA Dashboard
Holds the loaded flight sheet and answers dashboard queries
"""

import logging
from datetime import datetime
from typing import Optional, Dict, Any, List, Tuple

from app.config import get_config
from app.errors import CSVParseError, ValidationError
from models.flight import SheetTable, FlightRecord
from models.segment import Segment, SEGMENT_LAYOUT, get_layout
from models.sla import SlaPolicy
from services.base_service import IDataService, ServiceResult
from services.column_resolver import resolve_columns, segment_headers
from services.sheet_service import get_data_service, parse_csv_table
from services.sla_service import aggregate_month, evaluate_flights, filter_by_period
from utils.date_utils import parse_date
from utils.validators import CSVValidator, decode_content

logger = logging.getLogger(__name__)


def filter_rows(rows: List[FlightRecord], filters: Optional[Dict[str, str]]) -> List[FlightRecord]:
    """
    Keep rows whose cells contain every filter value (case-insensitive)

    Args:
        rows: Sheet rows
        filters: header -> substring; empty values are ignored
    """
    active = {header: str(value).lower() for header, value in (filters or {}).items() if str(value).strip()}
    if not active:
        return list(rows)

    return [
        row for row in rows
        if all(needle in str(row.get(header, '') or '').lower() for header, needle in active.items())
    ]


class DataProcessor:
    def __init__(self, service: Optional[IDataService] = None, policy: Optional[SlaPolicy] = None):
        config = get_config()
        self.service = service if service is not None else get_data_service(config.source)
        self.policy = policy if policy is not None else SlaPolicy.from_string(config.sla.policy)
        self.table = SheetTable(headers=[])
        self.last_error: Optional[str] = None
        self.last_loaded: Optional[datetime] = None

    @property
    def headers(self) -> List[str]:
        return self.table.headers

    @property
    def rows(self) -> List[FlightRecord]:
        return self.table.rows

    def load(self) -> ServiceResult[SheetTable]:
        """
        Fetch the sheet from the configured service

        On failure the previous table is kept and the error is recorded
        verbatim for the dashboard to show.
        """
        result = self.service.get_table()
        if result.success:
            self._set_table(result.data)
        else:
            self.last_error = result.error
            logger.error(f"Load failed: {result.error}")
        return result

    def load_from_content(self, content: bytes, filename: str = 'upload.csv') -> int:
        """Load an uploaded CSV export; returns the number of rows"""
        is_valid, error = CSVValidator.validate_sheet(content)
        if not is_valid:
            raise CSVParseError(filename, reason=error)

        table = parse_csv_table(decode_content(content), source=f"upload:{filename}")
        self._set_table(table)
        return len(table.rows)

    def _set_table(self, table: SheetTable):
        self.table = table
        self.last_error = None
        self.last_loaded = table.fetched_at or datetime.now()
        logger.info(f"Flight sheet ready: {len(table.rows)} rows from {table.source or 'unknown source'}")

    def get_available_periods(self) -> List[Tuple[int, int]]:
        """Distinct (year, zero-based month) pairs present in the date column"""
        date_header = resolve_columns(self.headers).get('date', '')
        if not date_header:
            return []

        periods = set()
        for row in self.rows:
            parsed = parse_date(row.get(date_header))
            if parsed:
                periods.add((parsed.year, parsed.month))
        return sorted(periods)

    def filter_period(self, month: int, year: int) -> List[FlightRecord]:
        """Rows of the selected month/year"""
        columns = resolve_columns(self.headers)
        return filter_by_period(self.rows, columns, month, year)

    def _check_filters(self, filters: Optional[Dict[str, str]]):
        """Column filters must name headers of the loaded sheet"""
        unknown = [header for header in (filters or {}) if header not in self.headers]
        if unknown:
            raise ValidationError(f"Unknown column filter: {', '.join(unknown)}", field='filters')

    def get_flight_evaluations(self, month: int, year: int, filters: Optional[Dict[str, str]] = None):
        """Per-flight SLA evaluations for the selected month/year"""
        self._check_filters(filters)
        columns = resolve_columns(self.headers, Segment.GENERAL)
        records = filter_rows(filter_by_period(self.rows, columns, month, year), filters)
        return evaluate_flights(records, columns)

    def get_dashboard_data(
        self,
        month: int,
        year: int,
        segment: Segment = Segment.GENERAL,
        filters: Optional[Dict[str, str]] = None
    ) -> Dict[str, Any]:
        """
        Get all data for the dashboard selection

        Column filters narrow the period's flights before the summary is
        computed, the same way they narrow the raw table.
        """
        self._check_filters(filters)
        layout = get_layout(segment)
        data = {
            'month': month,
            'year': year,
            'segment': layout.to_dict(),
            'segment_headers': segment_headers(self.headers, segment),
            'summary_supported': layout.summary_supported,
            'summary': None,
            'has_data': False,
            'flight_count': 0,
            'is_filtered': any(str(value).strip() for value in (filters or {}).values()),
            'total_records': len(self.rows),
            'error': self.last_error,
            'last_loaded': self.last_loaded.isoformat() if self.last_loaded else None
        }

        columns = resolve_columns(self.headers, Segment.GENERAL)
        records = filter_rows(filter_by_period(self.rows, columns, month, year), filters)
        data['flight_count'] = len(records)
        data['has_data'] = bool(records)

        if not layout.summary_supported:
            return data

        summary = aggregate_month(records, columns, month, year, self.policy)
        data['summary'] = summary.to_dict() if summary else None
        return data

    def get_table(
        self,
        segment: Optional[Segment] = None,
        filters: Optional[Dict[str, str]] = None
    ) -> Dict[str, Any]:
        """Raw table, optionally narrowed to a segment's columns and filtered"""
        self._check_filters(filters)

        rows = filter_rows(self.rows, filters)
        headers = segment_headers(self.headers, segment) if segment else list(self.headers)
        if segment:
            rows = [{header: row.get(header, '') for header in headers} for row in rows]

        return {
            'headers': headers,
            'rows': rows,
            'row_count': len(rows),
            'total_records': len(self.rows),
            'is_filtered': len(rows) < len(self.rows),
            'groups': [layout.to_dict() for layout in SEGMENT_LAYOUT]
        }


# Singleton instance for the API
_processor = None

def get_processor():
    global _processor
    if _processor is None:
        _processor = DataProcessor()
        if _processor.service.is_available():
            _processor.load()
        else:
            logger.warning(f"{_processor.service.describe()} not available - waiting for upload")
    return _processor

def refresh_data():
    """Re-fetch the sheet on user request"""
    processor = get_processor()
    return processor.load()
