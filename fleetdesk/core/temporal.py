"""
Expiry classification for contract and driver-license dates.

All functions take ``now`` explicitly; nothing here reads the clock.
"""
import enum
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Optional, Union

DateLike = Union[date, datetime, str, None]

DEFAULT_WINDOW_DAYS = 30


class ExpiryStatus(str, enum.Enum):
    EXPIRED = "expired"
    EXPIRING = "expiring"
    VALID = "valid"


def _aware(now: datetime, tz: Optional[tzinfo] = None) -> datetime:
    if now.tzinfo is None:
        return now.replace(tzinfo=tz or timezone.utc)
    return now


def to_instant(value: DateLike, tz: tzinfo) -> Optional[datetime]:
    """
    Convert a date-like value to an aware datetime.

    Dates (and ``YYYY-MM-DD`` strings) become midnight in ``tz``; naive
    datetimes are read as local to ``tz``. Returns None for empty or
    unparseable input.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=tz)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=tz)

    text = str(value).strip()
    if not text:
        return None
    try:
        if len(text) == 10:
            return datetime.combine(date.fromisoformat(text), time.min, tzinfo=tz)
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return None
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=tz)


def classify_expiry(
    value: DateLike,
    now: datetime,
    window_days: int = DEFAULT_WINDOW_DAYS,
    tz: Optional[tzinfo] = None,
) -> Optional[ExpiryStatus]:
    """
    Classify an expiry date relative to ``now``.

    expired: before now. expiring: from now up to now + window, both
    inclusive. valid: after the window. None when there is no usable date.
    """
    now = _aware(now, tz)
    instant = to_instant(value, tz or now.tzinfo)
    if instant is None:
        return None
    if instant < now:
        return ExpiryStatus.EXPIRED
    if instant <= now + timedelta(days=window_days):
        return ExpiryStatus.EXPIRING
    return ExpiryStatus.VALID


def is_contract_expiring(
    value: DateLike,
    now: datetime,
    window_days: int = DEFAULT_WINDOW_DAYS,
    tz: Optional[tzinfo] = None,
) -> bool:
    """True when the contract ends within the window or has already ended."""
    now = _aware(now, tz)
    instant = to_instant(value, tz or now.tzinfo)
    if instant is None:
        return False
    return instant <= now + timedelta(days=window_days)
