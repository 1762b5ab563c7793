"""
SLA Performance Service

Turns flight rows into per-flight checkpoint evaluations and rolls them up
into monthly summaries.

Time checkpoints are measured against the flight's scheduled departure
(STD). All arithmetic is signed integer minutes from midnight: a target
such as STD - 210 may be negative for early-morning departures and is
compared as-is. Only display formatting clamps negatives to "00:00".
"""

import logging
from typing import List, Optional, Sequence, Iterable

from models.flight import FlightRecord, ColumnMap, SheetTable
from models.segment import Segment, get_layout
from models.sla import (
    SlaPolicy,
    SlaCheckpoint,
    CheckpointResult,
    FlightEvaluation,
    CheckpointSummary,
    MonthlySummary
)
from services.column_resolver import resolve_columns
from utils.date_utils import (
    parse_time_to_minutes,
    parse_date,
    to_number,
    parse_percentage,
    count_potential_flights
)

logger = logging.getLogger(__name__)

# Baggage rule: heavy loads must have at least this many hand bags handled at the gate
BAGS_REQUIRED = 35
BAGS_MIN_PAX = 107

CHECKPOINTS: List[SlaCheckpoint] = [
    SlaCheckpoint('checkin_open', 'Abertura Check-in', 'checkin_open', -210, 98.0),
    SlaCheckpoint('checkin_close', 'Fechamento Check-in', 'checkin_close', -60, 98.0),
    SlaCheckpoint('boarding_start', 'Início Embarque', 'boarding_start', -40, 95.0),
    SlaCheckpoint('last_pax_onboard', 'Último Pax a Bordo', 'last_pax_onboard', -10, 95.0),
    SlaCheckpoint('hand_bags', 'Meta Bags Portão', 'bags_handled', None, 95.0),
]


def _cell(record: FlightRecord, columns: ColumnMap, field: str):
    """Cell value for a semantic field; None when the column is unresolved"""
    header = columns.get(field, '')
    if not header:
        return None
    return record.get(header)


def _is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def compute_attainment(actual: int, target: int) -> float:
    """
    Percentage attainment of a time checkpoint

    100 when on time, then one point lost per minute late, floored at 0.
    A zero actual or target means the data is missing and scores 0.
    """
    if actual == 0 or target == 0:
        return 0.0
    if actual <= target:
        return 100.0
    return float(max(0, 100 - (actual - target)))


def evaluate_time_checkpoint(
    checkpoint: SlaCheckpoint,
    record: FlightRecord,
    columns: ColumnMap,
    std_minutes: int
) -> CheckpointResult:
    """Evaluate one STD-relative checkpoint for one flight"""
    if std_minutes <= 0:
        return CheckpointResult(conformant=False, attainment=0.0)

    target = std_minutes + checkpoint.offset_minutes
    value = _cell(record, columns, checkpoint.field)
    if _is_blank(value):
        return CheckpointResult(conformant=False, attainment=0.0, actual_minutes=0, target_minutes=target)

    actual = parse_time_to_minutes(value)
    conformant = actual > 0 and actual <= target
    return CheckpointResult(
        conformant=conformant,
        attainment=compute_attainment(actual, target),
        actual_minutes=actual,
        target_minutes=target
    )


def evaluate_bags_checkpoint(record: FlightRecord, columns: ColumnMap) -> CheckpointResult:
    """Hand-baggage checkpoint; only applies to flights with BAGS_MIN_PAX passengers or more"""
    pax = to_number(_cell(record, columns, 'pax_count'))
    handled = to_number(_cell(record, columns, 'bags_handled'))

    if pax < BAGS_MIN_PAX:
        return CheckpointResult(conformant=True, attainment=100.0)

    return CheckpointResult(
        conformant=handled >= BAGS_REQUIRED,
        attainment=min(100.0, handled / BAGS_REQUIRED * 100)
    )


def evaluate_flight(record: FlightRecord, columns: ColumnMap) -> FlightEvaluation:
    """
    Evaluate all SLA checkpoints of a single flight

    Args:
        record: Sheet row (header -> cell)
        columns: Resolved ColumnMap of the General segment

    Returns:
        FlightEvaluation with one CheckpointResult per checkpoint
    """
    std_minutes = parse_time_to_minutes(_cell(record, columns, 'std'))

    evaluation = FlightEvaluation(
        flight_id=str(_cell(record, columns, 'id') or ''),
        flight_number=str(_cell(record, columns, 'flight_number') or ''),
        date=str(_cell(record, columns, 'date') or ''),
        std_minutes=std_minutes,
        pax_count=to_number(_cell(record, columns, 'pax_count'))
    )

    for checkpoint in CHECKPOINTS:
        if checkpoint.is_time_based:
            result = evaluate_time_checkpoint(checkpoint, record, columns, std_minutes)
        else:
            result = evaluate_bags_checkpoint(record, columns)
        evaluation.results[checkpoint.key] = result

    return evaluation


def evaluate_flights(records: Iterable[FlightRecord], columns: ColumnMap) -> List[FlightEvaluation]:
    """Evaluate every flight row"""
    return [evaluate_flight(record, columns) for record in records]


def filter_by_period(
    records: Iterable[FlightRecord],
    columns: ColumnMap,
    month: int,
    year: int
) -> List[FlightRecord]:
    """Rows whose date column falls in the given zero-based month and year"""
    date_header = columns.get('date', '')
    if not date_header:
        return []

    selected = []
    for record in records:
        parsed = parse_date(record.get(date_header))
        if parsed and parsed.month == month and parsed.year == year:
            selected.append(record)
    return selected


def _policy_value(
    policy: SlaPolicy,
    attainment_sum: float,
    conformant: int,
    total: int,
    potential: int
) -> float:
    if policy is SlaPolicy.CONFORMANCE_RATE:
        return conformant / total * 100
    if policy is SlaPolicy.POTENTIAL_FLIGHTS:
        return conformant / potential * 100 if potential else 0.0
    return attainment_sum / total


def aggregate_month(
    records: Sequence[FlightRecord],
    columns: ColumnMap,
    month: int,
    year: int,
    policy: SlaPolicy = SlaPolicy.ATTAINMENT_AVERAGE
) -> Optional[MonthlySummary]:
    """
    Reduce a month's flights into a MonthlySummary

    Args:
        records: Rows already filtered to (month, year)
        columns: Resolved ColumnMap of the General segment
        month: Zero-based month of the selection
        year: Year of the selection
        policy: How each checkpoint's headline value is derived

    Returns:
        MonthlySummary, or None when there are no flights
    """
    if not records:
        return None

    if policy.is_deprecated:
        logger.warning(f"SLA policy '{policy.value}' is deprecated; use '{SlaPolicy.ATTAINMENT_AVERAGE.value}'")

    total = len(records)
    total_pax = 0.0
    sum_orbital = 0.0
    sum_base = 0.0
    sum_checkin_time = 0.0
    sum_queue_time = 0.0
    attainment_sums = {cp.key: 0.0 for cp in CHECKPOINTS}
    conformant_counts = {cp.key: 0 for cp in CHECKPOINTS}

    for record in records:
        total_pax += to_number(_cell(record, columns, 'pax_count'))
        sum_orbital += parse_percentage(_cell(record, columns, 'orbital_punctuality'))
        sum_base += parse_percentage(_cell(record, columns, 'base_punctuality'))
        sum_checkin_time += to_number(_cell(record, columns, 'checkin_service_time'))
        sum_queue_time += to_number(_cell(record, columns, 'queue_time'))

        evaluation = evaluate_flight(record, columns)
        for key, result in evaluation.results.items():
            attainment_sums[key] += result.attainment
            if result.conformant:
                conformant_counts[key] += 1

    potential = count_potential_flights(month, year)

    checkpoints = []
    for cp in CHECKPOINTS:
        checkpoints.append(CheckpointSummary(
            key=cp.key,
            name=cp.name,
            target_pct=cp.target_pct,
            average_attainment=attainment_sums[cp.key] / total,
            conformant_count=conformant_counts[cp.key],
            conformance_rate=conformant_counts[cp.key] / total * 100,
            value=_policy_value(policy, attainment_sums[cp.key], conformant_counts[cp.key], total, potential)
        ))

    return MonthlySummary(
        month=month,
        year=year,
        total_flights=total,
        potential_flights=potential,
        total_pax=total_pax,
        avg_orbital=sum_orbital / total,
        avg_base=sum_base / total,
        avg_checkin_time=sum_checkin_time / total,
        avg_queue_time=sum_queue_time / total,
        policy=policy,
        checkpoints=checkpoints
    )


def summarize_segment(
    table: SheetTable,
    month: int,
    year: int,
    segment: Segment = Segment.GENERAL,
    policy: SlaPolicy = SlaPolicy.ATTAINMENT_AVERAGE
) -> Optional[MonthlySummary]:
    """
    Monthly summary for a segment selection

    Only segments whose layout declares summary_supported are computed; the
    others only list their headers, so this returns None for them.
    """
    if not get_layout(segment).summary_supported:
        logger.debug(f"No summary for segment {segment.value}: not supported")
        return None

    columns = resolve_columns(table.headers, segment)
    records = filter_by_period(table.rows, columns, month, year)
    return aggregate_month(records, columns, month, year, policy)
