"""
Fuel-card CSV report parsing.

The report is addressed by column position, not by header name. The
positions live in ``FUEL_CSV_LAYOUT``; a new report version only needs a
new layout.
"""
import logging
import math
import re
import unicodedata
from dataclasses import dataclass
from datetime import datetime, timezone, tzinfo
from typing import List, Optional

from fleetdesk.errors import ValidationError
from fleetdesk.schemas.fuel import FuelRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FuelCsvLayout:
    """0-indexed column positions of the fuel-card report."""
    date_time: int = 5
    card_plate: int = 8
    driver_cpf: int = 13
    driver_name: int = 14
    fuel_type: int = 26
    value: int = 29


FUEL_CSV_LAYOUT = FuelCsvLayout()

_LINE_BREAK = re.compile(r"\r?\n")
_DATE_SEPARATORS = re.compile(r"[/-]")
_NUMERIC_PREFIX = re.compile(r"^\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def decode_csv(data: bytes) -> str:
    """Decode as UTF-8, falling back to Latin-1 when bytes do not decode cleanly."""
    text = data.decode("utf-8", errors="replace")
    if "\ufffd" in text:
        return data.decode("latin-1")
    return text


def detect_delimiter(header: str) -> str:
    return ";" if header.count(";") >= header.count(",") else ","


def parse_csv_line(line: str, delimiter: str) -> List[str]:
    """Split one line, honoring double-quoted cells and ``""`` escapes."""
    cells = []
    current = []
    in_quotes = False
    i = 0
    while i < len(line):
        char = line[i]
        if char == '"':
            if in_quotes and i + 1 < len(line) and line[i + 1] == '"':
                current.append('"')
                i += 1
            else:
                in_quotes = not in_quotes
        elif char == delimiter and not in_quotes:
            cells.append("".join(current))
            current = []
        else:
            current.append(char)
        i += 1
    cells.append("".join(current))
    return cells


def parse_currency(value: Optional[str]) -> float:
    """
    Parse a pt-BR amount such as ``1.234,56``.

    Empty, invalid or negative amounts become 0.
    """
    if not value:
        return 0.0
    normalized = value.replace(".", "").replace(",", ".")
    match = _NUMERIC_PREFIX.match(normalized)
    if not match:
        return 0.0
    amount = float(match.group(0))
    if not math.isfinite(amount) or amount < 0:
        return 0.0
    return amount


def to_iso_instant(moment: datetime) -> str:
    """Fixed-width UTC instant, e.g. ``2024-03-05T17:30:00.000Z``."""
    utc = moment.astimezone(timezone.utc)
    return (
        f"{utc.year:04d}-{utc.month:02d}-{utc.day:02d}"
        f"T{utc.hour:02d}:{utc.minute:02d}:{utc.second:02d}.{utc.microsecond // 1000:03d}Z"
    )


def _to_int(text: str) -> Optional[int]:
    text = text.strip()
    if not text:
        return 0
    try:
        return int(text)
    except ValueError:
        return None


def parse_datetime_br(value: Optional[str], tz: tzinfo) -> Optional[str]:
    """
    Parse ``DD/MM/YYYY[ HH:MM[:SS]]`` local to ``tz`` into a UTC ISO instant.

    Returns None when day, month or year is missing or the date is not a
    real calendar date.
    """
    if not value:
        return None
    parts = value.strip().split(" ")
    date_part = parts[0]
    time_part = parts[1] if len(parts) > 1 and parts[1] else "00:00:00"

    date_pieces = [_to_int(p) for p in _DATE_SEPARATORS.split(date_part)]
    if len(date_pieces) < 3:
        return None
    day, month, year = date_pieces[:3]
    if not day or not month or not year:
        return None

    time_pieces = [_to_int(p) for p in time_part.split(":")]
    if any(p is None for p in time_pieces):
        return None
    hour, minute, second = (time_pieces + [0, 0, 0])[:3]

    try:
        moment = datetime(year, month, day, hour, minute, second, tzinfo=tz)
    except ValueError:
        return None
    return to_iso_instant(moment)


def classify_fuel_type(fuel_type: Optional[str]) -> str:
    """Bucket a free-text fuel description into gasoline, ethanol or other."""
    folded = unicodedata.normalize("NFD", (fuel_type or "").lower())
    plain = "".join(ch for ch in folded if not unicodedata.combining(ch))
    if "gas" in plain:
        return "gasoline"
    if "alc" in plain or "etanol" in plain:
        return "ethanol"
    return "other"


def _cell(row: List[str], index: int) -> str:
    return row[index] if index < len(row) else ""


def parse_fuel_csv(data: bytes, tz: tzinfo, layout: FuelCsvLayout = FUEL_CSV_LAYOUT) -> List[FuelRecord]:
    """
    Parse a raw report into fuel records.

    The first line is the header. Rows without plate, CPF and driver name,
    or with an unparseable date, are dropped.
    """
    text = decode_csv(data)
    lines = [line for line in _LINE_BREAK.split(text) if line]
    if not lines:
        raise ValidationError("CSV is empty")

    delimiter = detect_delimiter(lines[0])
    records = []
    dropped = 0

    for line in lines[1:]:
        row = parse_csv_line(line, delimiter)
        card_plate = _cell(row, layout.card_plate)
        driver_cpf = _cell(row, layout.driver_cpf)
        driver_name = _cell(row, layout.driver_name)

        if not card_plate and not driver_cpf and not driver_name:
            continue

        date_time = parse_datetime_br(_cell(row, layout.date_time), tz)
        if not date_time:
            dropped += 1
            continue

        records.append(FuelRecord(
            card_plate=card_plate.strip(),
            driver_cpf=driver_cpf.strip(),
            driver_name=driver_name.strip(),
            fuel_type=_cell(row, layout.fuel_type).strip(),
            value=parse_currency(_cell(row, layout.value)),
            date_time=date_time,
        ))

    if dropped:
        logger.info("Dropped %d fuel rows with unparseable dates", dropped)
    return records
