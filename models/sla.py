"""
SLA Data Models

Checkpoint definitions, per-flight evaluations and monthly summaries.
"""

from dataclasses import dataclass, field
from typing import Optional, List, Dict, Any
from enum import Enum

from utils.date_utils import minutes_to_time


class SlaPolicy(Enum):
    """
    How a checkpoint's monthly figure is derived.

    ATTAINMENT_AVERAGE is the contract rule in force. The other two are
    earlier versions of the rule, kept so historical reports can be reproduced.
    """
    ATTAINMENT_AVERAGE = "attainment_average"
    CONFORMANCE_RATE = "conformance_rate"
    POTENTIAL_FLIGHTS = "potential_flights"  # deprecated

    @classmethod
    def from_string(cls, value: str) -> 'SlaPolicy':
        """Parse policy from string, defaulting to the canonical rule"""
        if isinstance(value, cls):
            return value
        if not value:
            return cls.ATTAINMENT_AVERAGE
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.ATTAINMENT_AVERAGE

    @property
    def is_deprecated(self) -> bool:
        return self is SlaPolicy.POTENTIAL_FLIGHTS


@dataclass(frozen=True)
class SlaCheckpoint:
    """
    One contractual checkpoint.

    Time checkpoints carry an offset from the scheduled departure (negative
    means before departure) and the column field holding the actual time.
    The baggage checkpoint has no offset.
    """
    key: str
    name: str
    field: str
    offset_minutes: Optional[int]
    target_pct: float

    @property
    def is_time_based(self) -> bool:
        return self.offset_minutes is not None


@dataclass
class CheckpointResult:
    """Outcome of one checkpoint for one flight"""
    conformant: bool
    attainment: float
    actual_minutes: Optional[int] = None
    target_minutes: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        data = {
            'conformant': self.conformant,
            'attainment': round(self.attainment, 1),
        }
        if self.target_minutes is not None:
            data['actual_minutes'] = self.actual_minutes
            data['target_minutes'] = self.target_minutes
            data['actual_time'] = minutes_to_time(self.actual_minutes) if self.actual_minutes else ''
            data['target_time'] = minutes_to_time(self.target_minutes)
        return data


@dataclass
class FlightEvaluation:
    """SLA evaluation of a single flight row"""
    flight_id: str
    flight_number: str
    date: str
    std_minutes: int
    pax_count: float
    results: Dict[str, CheckpointResult] = field(default_factory=dict)

    @property
    def overall_attainment(self) -> float:
        """Mean attainment over all checkpoints"""
        if not self.results:
            return 0.0
        return sum(r.attainment for r in self.results.values()) / len(self.results)

    @property
    def fully_conformant(self) -> bool:
        return bool(self.results) and all(r.conformant for r in self.results.values())

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            'flight_id': self.flight_id,
            'flight_number': self.flight_number,
            'date': self.date,
            'std': minutes_to_time(self.std_minutes) if self.std_minutes else '',
            'pax': self.pax_count,
            'overall_attainment': round(self.overall_attainment, 1),
            'fully_conformant': self.fully_conformant,
            'checkpoints': {key: result.to_dict() for key, result in self.results.items()}
        }


@dataclass
class CheckpointSummary:
    """Monthly figures for one checkpoint"""
    key: str
    name: str
    target_pct: float
    average_attainment: float
    conformant_count: int
    conformance_rate: float
    value: float

    @property
    def meets_target(self) -> bool:
        return self.value >= self.target_pct

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            'key': self.key,
            'name': self.name,
            'meta': self.target_pct,
            'realizado': round(self.value, 1),
            'average_attainment': round(self.average_attainment, 1),
            'conformant_count': self.conformant_count,
            'conformance_rate': round(self.conformance_rate, 1),
            'meets_target': self.meets_target
        }


@dataclass
class MonthlySummary:
    """Aggregated SLA figures for one month/year selection"""
    month: int
    year: int
    total_flights: int
    potential_flights: int
    total_pax: float
    avg_orbital: float
    avg_base: float
    avg_checkin_time: float
    avg_queue_time: float
    policy: SlaPolicy = SlaPolicy.ATTAINMENT_AVERAGE
    checkpoints: List[CheckpointSummary] = field(default_factory=list)

    def get_checkpoint(self, key: str) -> Optional[CheckpointSummary]:
        for checkpoint in self.checkpoints:
            if checkpoint.key == key:
                return checkpoint
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary, rounded for display"""
        return {
            'month': self.month,
            'year': self.year,
            'total_flights': self.total_flights,
            'potential_flights': self.potential_flights,
            'flight_gap': self.total_flights - self.potential_flights,
            'total_pax': int(self.total_pax) if float(self.total_pax).is_integer() else round(self.total_pax, 1),
            'avg_orbital': round(self.avg_orbital, 1),
            'avg_base': round(self.avg_base, 1),
            'avg_checkin_time': round(self.avg_checkin_time, 1),
            'avg_queue_time': round(self.avg_queue_time, 1),
            'policy': self.policy.value,
            'sla': [checkpoint.to_dict() for checkpoint in self.checkpoints]
        }
