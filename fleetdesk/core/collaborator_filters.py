"""
Collaborator search, license-status filtering and ordering.
"""
import unicodedata
from datetime import datetime
from typing import Iterable, List, Optional
from zoneinfo import ZoneInfo

from fleetdesk.core.temporal import DEFAULT_WINDOW_DAYS, classify_expiry, to_instant
from fleetdesk.schemas.filters import CollaboratorFilters, CollaboratorOrder, LicenseStatusFilter


def matches_search(collaborator, search: str) -> bool:
    if not search:
        return True
    needle = search.lower()
    return (
        needle in (collaborator.name or "").lower()
        or needle in (collaborator.cpf or "").lower()
        or search in (collaborator.phone or "")
    )


def matches_license_status(
    collaborator,
    status: LicenseStatusFilter,
    now: datetime,
    window_days: int = DEFAULT_WINDOW_DAYS,
    tz: Optional[ZoneInfo] = None,
) -> bool:
    if status == LicenseStatusFilter.ALL:
        return True
    classification = classify_expiry(collaborator.license_expiry, now, window_days, tz)
    return classification is not None and classification.value == status.value


def filter_collaborators(
    collaborators: Iterable,
    criteria: CollaboratorFilters,
    now: datetime,
    window_days: int = DEFAULT_WINDOW_DAYS,
    tz: Optional[ZoneInfo] = None,
) -> List:
    return [
        c for c in collaborators
        if matches_search(c, criteria.search)
        and matches_license_status(c, criteria.license_status, now, window_days, tz)
    ]


def collation_key(name: Optional[str]):
    """Accent- and case-insensitive key approximating pt-BR collation."""
    folded = (name or "").casefold()
    decomposed = unicodedata.normalize("NFD", folded)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return (base, folded)


def sort_collaborators(
    collaborators: Iterable,
    order: CollaboratorOrder,
    tz: Optional[ZoneInfo] = None,
) -> List:
    """
    Return a new, stably sorted list.

    Collaborators without a usable license date go last in both
    expiry orders.
    """
    items = list(collaborators)
    if order == CollaboratorOrder.NAME:
        return sorted(items, key=lambda c: collation_key(c.name))

    zone = tz or ZoneInfo("UTC")
    descending = order == CollaboratorOrder.LICENSE_EXPIRY_DESC

    def expiry_key(collaborator):
        instant = to_instant(collaborator.license_expiry, zone)
        if instant is None:
            return (1, 0.0)
        stamp = instant.timestamp()
        return (0, -stamp if descending else stamp)

    return sorted(items, key=expiry_key)


def apply_collaborator_view(
    collaborators: Iterable,
    criteria: CollaboratorFilters,
    now: datetime,
    window_days: int = DEFAULT_WINDOW_DAYS,
    tz: Optional[ZoneInfo] = None,
) -> List:
    """Filter, then order, without touching the input collection."""
    filtered = filter_collaborators(collaborators, criteria, now, window_days, tz)
    return sort_collaborators(filtered, criteria.order, tz)
