"""
Dashboard card counts.
"""
from datetime import datetime
from typing import Iterable, Optional
from zoneinfo import ZoneInfo

from fleetdesk.core.fuel_metrics import summarize_fuel
from fleetdesk.core.temporal import DEFAULT_WINDOW_DAYS, is_contract_expiring
from fleetdesk.models.vehicle import OwnershipType
from fleetdesk.schemas.stats import FleetStats


def compute_fleet_stats(
    vehicles: Iterable,
    collaborators: Iterable,
    fuel_records: Iterable,
    now: datetime,
    window_days: int = DEFAULT_WINDOW_DAYS,
    tz: Optional[ZoneInfo] = None,
) -> FleetStats:
    vehicles = list(vehicles)
    return FleetStats(
        total_vehicles=len(vehicles),
        owned=sum(1 for v in vehicles if v.ownership_type == OwnershipType.OWNED),
        rented=sum(1 for v in vehicles if v.ownership_type == OwnershipType.RENTED),
        in_workshop=sum(1 for v in vehicles if v.in_workshop),
        pending_inspection=sum(1 for v in vehicles if v.pending_inspection),
        contracts_expiring=sum(
            1 for v in vehicles if is_contract_expiring(v.contract_expiry, now, window_days, tz)
        ),
        total_collaborators=len(list(collaborators)),
        monthly_fuel_total=summarize_fuel(fuel_records, now).monthly_total,
    )
