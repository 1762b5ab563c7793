"""
Operational Segment Models

The flight sheet groups its columns by contract segment. Segments are
positional: each one owns a contiguous run of header columns.
"""

from dataclasses import dataclass
from typing import Dict, Any, Tuple
from enum import Enum


class Segment(Enum):
    """Operational contract segment"""
    GENERAL = "geral"
    AHL = "ahl"
    OHD = "ohd"
    RAMP = "rampa"
    CLEANING = "limpeza"
    SAFETY = "safety"

    @classmethod
    def from_string(cls, value: str) -> 'Segment':
        """Parse segment from its value or name; raises ValueError if unknown"""
        if isinstance(value, cls):
            return value
        if not value:
            return cls.GENERAL
        text = str(value).strip().lower()
        for segment in cls:
            if text in (segment.value, segment.name.lower()):
                return segment
        raise ValueError(f"Unknown segment: {value}")


@dataclass(frozen=True)
class SegmentLayout:
    """Column range and display metadata for one segment"""
    segment: Segment
    label: str
    start: int
    length: int
    color: str
    summary_supported: bool = False

    @property
    def end(self) -> int:
        return self.start + self.length

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            'segment': self.segment.value,
            'label': self.label,
            'start': self.start,
            'length': self.length,
            'end': self.end,
            'color': self.color,
            'summary_supported': self.summary_supported
        }


# Column offsets of the contract sheet. Header text alone is not unique
# across segments, so these positions are authoritative.
SEGMENT_LAYOUT: Tuple[SegmentLayout, ...] = (
    SegmentLayout(Segment.GENERAL, "1. Geral", 0, 14, "#004181", summary_supported=True),
    SegmentLayout(Segment.AHL, "2. AHL", 14, 3, "#0c343d"),
    SegmentLayout(Segment.OHD, "3. OHD", 17, 2, "#fb394e"),
    SegmentLayout(Segment.RAMP, "4. Rampa", 19, 7, "#3c78d8"),
    SegmentLayout(Segment.CLEANING, "5. Limpeza", 26, 3, "#fbbc04"),
    SegmentLayout(Segment.SAFETY, "6. Safety", 29, 9, "#20124d"),
)


def get_layout(segment: Segment) -> SegmentLayout:
    """Look up the layout record of a segment"""
    for layout in SEGMENT_LAYOUT:
        if layout.segment == segment:
            return layout
    raise KeyError(segment)
