"""
Query criteria for the list views.

Every enum carries an ``all`` member that disables its predicate.
"""
from pydantic import BaseModel
from datetime import date
from typing import Optional
import enum


class OwnershipFilter(str, enum.Enum):
    ALL = "all"
    OWNED = "owned"
    RENTED = "rented"


class FuelCardFilter(str, enum.Enum):
    ALL = "all"
    CARD_A = "card_a"
    CARD_B = "card_b"
    BOTH = "both"


class AssignmentFilter(str, enum.Enum):
    ALL = "all"
    ASSIGNED = "assigned"
    AVAILABLE = "available"


class FleetStatusFilter(str, enum.Enum):
    ALL = "all"
    FLEET = "fleet"
    AVAILABLE = "available"
    OCCUPIED = "occupied"


class SituationFilter(str, enum.Enum):
    ALL = "all"
    CONTRACT_EXPIRING = "contract_expiring"
    IN_WORKSHOP = "in_workshop"
    PENDING_INSPECTION = "pending_inspection"
    TOLL_TAG = "toll_tag"


class VehicleFilters(BaseModel):
    """Vehicle list criteria, combined with AND."""
    search: str = ""
    ownership_type: OwnershipFilter = OwnershipFilter.ALL
    fuel_card_type: FuelCardFilter = FuelCardFilter.ALL
    assignment: AssignmentFilter = AssignmentFilter.ALL
    fleet_status: FleetStatusFilter = FleetStatusFilter.ALL
    situation: SituationFilter = SituationFilter.ALL


class LicenseStatusFilter(str, enum.Enum):
    ALL = "all"
    EXPIRED = "expired"
    EXPIRING = "expiring"
    VALID = "valid"


class CollaboratorOrder(str, enum.Enum):
    NAME = "name"
    LICENSE_EXPIRY_ASC = "license_expiry_asc"
    LICENSE_EXPIRY_DESC = "license_expiry_desc"


class CollaboratorFilters(BaseModel):
    search: str = ""
    license_status: LicenseStatusFilter = LicenseStatusFilter.ALL
    order: CollaboratorOrder = CollaboratorOrder.LICENSE_EXPIRY_ASC


class FuelTypeFilter(str, enum.Enum):
    ALL = "all"
    GASOLINE = "gasoline"
    ETHANOL = "ethanol"


class FuelTransactionFilters(BaseModel):
    """Criteria for the imported transactions table.

    Times are ``HH:MM`` strings; malformed times are ignored.
    """
    search: str = ""
    fuel_type: FuelTypeFilter = FuelTypeFilter.ALL
    from_date: Optional[date] = None
    to_date: Optional[date] = None
    from_time: Optional[str] = None
    to_time: Optional[str] = None
