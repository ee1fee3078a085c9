"""
Vehicle list filtering and fleet/aggregated partitioning.

Works on any object exposing the vehicle attributes, so ORM rows and
response schemas can both be filtered.
"""
from datetime import datetime
from typing import Iterable, List, NamedTuple, Optional
from zoneinfo import ZoneInfo

from fleetdesk.core.temporal import DEFAULT_WINDOW_DAYS, is_contract_expiring
from fleetdesk.schemas.filters import (
    AssignmentFilter,
    FleetStatusFilter,
    FuelCardFilter,
    OwnershipFilter,
    SituationFilter,
    VehicleFilters,
)

SEARCH_FIELDS = ("plate", "chassis", "model")


class VehiclePartition(NamedTuple):
    fleet: list
    aggregated: list


def _raw(value):
    return getattr(value, "value", value)


def matches_search(vehicle, search: str) -> bool:
    if not search:
        return True
    needle = search.lower()
    return any(needle in (getattr(vehicle, field, None) or "").lower() for field in SEARCH_FIELDS)


def matches_assignment(vehicle, assignment: AssignmentFilter) -> bool:
    assigned = vehicle.collaborator_id is not None
    if assignment == AssignmentFilter.ASSIGNED:
        return assigned
    if assignment == AssignmentFilter.AVAILABLE:
        return not assigned
    return True


def matches_fleet_status(vehicle, status: FleetStatusFilter) -> bool:
    assigned = vehicle.collaborator_id is not None
    if status == FleetStatusFilter.FLEET:
        return bool(vehicle.is_fleet)
    if status == FleetStatusFilter.AVAILABLE:
        return not vehicle.is_fleet and not assigned
    if status == FleetStatusFilter.OCCUPIED:
        return not vehicle.is_fleet and assigned
    return True


def matches_situation(
    vehicle,
    situation: SituationFilter,
    now: datetime,
    window_days: int = DEFAULT_WINDOW_DAYS,
    tz: Optional[ZoneInfo] = None,
) -> bool:
    if situation == SituationFilter.CONTRACT_EXPIRING:
        return is_contract_expiring(vehicle.contract_expiry, now, window_days, tz)
    if situation == SituationFilter.IN_WORKSHOP:
        return bool(vehicle.in_workshop)
    if situation == SituationFilter.PENDING_INSPECTION:
        return bool(vehicle.pending_inspection)
    if situation == SituationFilter.TOLL_TAG:
        return bool(vehicle.toll_tag)
    return True


def matches_vehicle(
    vehicle,
    criteria: VehicleFilters,
    now: datetime,
    window_days: int = DEFAULT_WINDOW_DAYS,
    tz: Optional[ZoneInfo] = None,
) -> bool:
    if not matches_search(vehicle, criteria.search):
        return False
    if criteria.ownership_type != OwnershipFilter.ALL and _raw(vehicle.ownership_type) != criteria.ownership_type.value:
        return False
    if criteria.fuel_card_type != FuelCardFilter.ALL and _raw(vehicle.fuel_card_type) != criteria.fuel_card_type.value:
        return False
    return (
        matches_assignment(vehicle, criteria.assignment)
        and matches_fleet_status(vehicle, criteria.fleet_status)
        and matches_situation(vehicle, criteria.situation, now, window_days, tz)
    )


def filter_vehicles(
    vehicles: Iterable,
    criteria: VehicleFilters,
    now: datetime,
    window_days: int = DEFAULT_WINDOW_DAYS,
    tz: Optional[ZoneInfo] = None,
) -> List:
    """Return the vehicles matching every criterion, in input order."""
    return [v for v in vehicles if matches_vehicle(v, criteria, now, window_days, tz)]


def partition_vehicles(vehicles: Iterable) -> VehiclePartition:
    """Split vehicles into fleet (``is_fleet``) and aggregated (everything else)."""
    fleet, aggregated = [], []
    for vehicle in vehicles:
        (fleet if vehicle.is_fleet else aggregated).append(vehicle)
    return VehiclePartition(fleet=fleet, aggregated=aggregated)
