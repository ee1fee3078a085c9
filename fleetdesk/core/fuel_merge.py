"""
Deduplicating merge of fuel records.
"""
from typing import Iterable, List, Tuple

from fleetdesk.schemas.fuel import FuelRecord

RecordKey = Tuple[str, str, str, float]


def record_key(record: FuelRecord) -> RecordKey:
    """Composite identity: plate, CPF, timestamp and value."""
    return (record.card_plate, record.driver_cpf, record.date_time, float(record.value))


def merge_records(existing: Iterable[FuelRecord], incoming: Iterable[FuelRecord]) -> List[FuelRecord]:
    """
    Overwrite-or-insert ``incoming`` into ``existing`` by composite key.

    The result is ordered by timestamp; ties keep first-seen order.
    """
    merged = {record_key(record): record for record in existing}
    for record in incoming:
        merged[record_key(record)] = record
    return sorted(merged.values(), key=lambda record: record.date_time)
