"""
Pydantic schemas for request/response validation.
"""
from fleetdesk.schemas.files import FileRef
from fleetdesk.schemas.vehicle import (
    AggregatedVehicleCreate, AssignRequest, FleetVehicleCreate, Vehicle, VehicleList, VehicleUpdate,
)
from fleetdesk.schemas.collaborator import (
    Collaborator, CollaboratorCreate, CollaboratorUpdate, DamageEntry, VehicleChecklist,
)
from fleetdesk.schemas.fuel import FuelData, FuelImportResult, FuelRecord, FuelSummary
from fleetdesk.schemas.filters import CollaboratorFilters, FuelTransactionFilters, VehicleFilters
from fleetdesk.schemas.stats import FleetStats
from fleetdesk.schemas.user import User, UserCreate, UserUpdate

__all__ = [
    "FileRef",
    "AggregatedVehicleCreate", "AssignRequest", "FleetVehicleCreate", "Vehicle", "VehicleList", "VehicleUpdate",
    "Collaborator", "CollaboratorCreate", "CollaboratorUpdate", "DamageEntry", "VehicleChecklist",
    "FuelData", "FuelImportResult", "FuelRecord", "FuelSummary",
    "CollaboratorFilters", "FuelTransactionFilters", "VehicleFilters",
    "FleetStats",
    "User", "UserCreate", "UserUpdate",
]
