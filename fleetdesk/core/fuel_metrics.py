"""
Spend totals and table filtering over the stored fuel records.

Reports close on the previous day: the daily card shows yesterday and the
weekly card the seven days ending yesterday. The month is the current
calendar month.
"""
import calendar
from datetime import date, datetime, time, timedelta
from typing import Iterable, List, Optional, Tuple

from fleetdesk.core.fuel_csv import classify_fuel_type
from fleetdesk.core.temporal import to_instant
from fleetdesk.errors import ValidationError
from fleetdesk.schemas.filters import FuelTransactionFilters, FuelTypeFilter
from fleetdesk.schemas.fuel import FuelRecord, FuelSummary


def day_bounds(day: date, tz) -> Tuple[datetime, datetime]:
    """First and last instant of a calendar day in ``tz``."""
    return datetime.combine(day, time.min, tzinfo=tz), datetime.combine(day, time.max, tzinfo=tz)


def month_bounds(today: date) -> Tuple[date, date]:
    last_day = calendar.monthrange(today.year, today.month)[1]
    return today.replace(day=1), today.replace(day=last_day)


def summarize_fuel(
    records: Iterable[FuelRecord],
    now: datetime,
    day: Optional[date] = None,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> FuelSummary:
    """
    Compute daily, weekly and monthly totals.

    ``day`` replaces yesterday as the daily report date only. ``start``/``end``
    replace the trailing seven-day window ending yesterday; both are needed.
    """
    tz = now.tzinfo
    if (start is None) != (end is None):
        raise ValidationError("Both start and end are required for a custom range")
    if start is not None and start > end:
        raise ValidationError("Range start must not be after its end", fields={"start": "after end"})

    yesterday = now.date() - timedelta(days=1)
    report_day = day or yesterday
    day_start, day_end = day_bounds(report_day, tz)

    if start is not None:
        week_first, week_last = start, end
    else:
        week_first, week_last = yesterday - timedelta(days=6), yesterday
    week_start = day_bounds(week_first, tz)[0]
    week_end = day_bounds(week_last, tz)[1]

    month_first, month_last = month_bounds(now.date())
    month_start = day_bounds(month_first, tz)[0]
    month_end = day_bounds(month_last, tz)[1]

    daily_total = 0.0
    weekly_total = 0.0
    monthly_total = 0.0
    monthly_count = 0

    for record in records:
        instant = to_instant(record.date_time, tz)
        if instant is None:
            continue
        if day_start <= instant <= day_end:
            daily_total += record.value
        if week_start <= instant <= week_end:
            weekly_total += record.value
        if month_start <= instant <= month_end:
            monthly_total += record.value
            monthly_count += 1

    return FuelSummary(
        report_date=report_day,
        daily_total=daily_total,
        weekly_start=week_first,
        weekly_end=week_last,
        weekly_total=weekly_total,
        monthly_total=monthly_total,
        monthly_count=monthly_count,
    )


def _minutes(value: Optional[str]) -> Optional[int]:
    if not value:
        return None
    pieces = value.split(":")
    try:
        return int(pieces[0]) * 60 + int(pieces[1])
    except (IndexError, ValueError):
        return None


def filter_fuel_records(records: Iterable[FuelRecord], criteria: FuelTransactionFilters, tz) -> List[FuelRecord]:
    """Records matching the transactions-table criteria, in stored order."""
    term = criteria.search.strip().lower()
    start = day_bounds(criteria.from_date, tz)[0] if criteria.from_date else None
    end = day_bounds(criteria.to_date, tz)[1] if criteria.to_date else None
    start_minutes = _minutes(criteria.from_time)
    end_minutes = _minutes(criteria.to_time)

    result = []
    for record in records:
        instant = to_instant(record.date_time, tz)
        if instant is None:
            continue
        local = instant.astimezone(tz)

        if term:
            haystack = " ".join([record.card_plate, record.driver_cpf, record.driver_name]).lower()
            if term not in haystack:
                continue

        if criteria.fuel_type != FuelTypeFilter.ALL and classify_fuel_type(record.fuel_type) != criteria.fuel_type.value:
            continue

        if start and local < start:
            continue
        if end and local > end:
            continue

        if start_minutes is not None or end_minutes is not None:
            minutes = local.hour * 60 + local.minute
            if start_minutes is not None and minutes < start_minutes:
                continue
            if end_minutes is not None and minutes > end_minutes:
                continue

        result.append(record)
    return result
