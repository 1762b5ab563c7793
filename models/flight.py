"""
Flight Data Models

Defines data structures for the flight-operations sheet.
"""

from dataclasses import dataclass, field
from typing import Optional, List, Dict, NamedTuple, Union
from datetime import datetime

# One sheet row: header -> cell value
FlightRecord = Dict[str, Union[str, int, float, None]]

# Semantic field id -> header string ('' when unavailable)
ColumnMap = Dict[str, str]


class CalendarDate(NamedTuple):
    """Calendar date parsed from a sheet cell. Month is zero-based."""
    year: int
    month: int
    day: int

    def to_iso(self) -> str:
        return f"{self.year:04d}-{self.month + 1:02d}-{self.day:02d}"


@dataclass
class SheetTable:
    """Rectangular table delivered by a data source"""
    headers: List[str]
    rows: List[FlightRecord] = field(default_factory=list)
    source: str = ''
    fetched_at: Optional[datetime] = None

    def __len__(self) -> int:
        return len(self.rows)

    @property
    def is_empty(self) -> bool:
        return not self.rows
