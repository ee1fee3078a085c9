"""
Vehicle routes.
"""
from datetime import datetime

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from fleetdesk.auth import CurrentUser, get_current_user, require_editor
from fleetdesk.config import get_settings
from fleetdesk.core.vehicle_filters import filter_vehicles, partition_vehicles
from fleetdesk.database import get_db
from fleetdesk.models.vehicle import OwnershipType, Vehicle
from fleetdesk.schemas.filters import VehicleFilters
from fleetdesk.schemas.vehicle import (
    AggregatedVehicleCreate,
    AssignRequest,
    FleetVehicleCreate,
    Vehicle as VehicleSchema,
    VehicleList,
    VehicleUpdate,
)
from fleetdesk.services import assignment
from fleetdesk.services.validation import validate_vehicle_state

router = APIRouter(prefix="/vehicles", tags=["vehicles"])


def _normalize_ownership(vehicle: Vehicle) -> None:
    if vehicle.ownership_type == OwnershipType.OWNED:
        vehicle.rental_company = None


async def _register(db: AsyncSession, db_vehicle: Vehicle) -> Vehicle:
    _normalize_ownership(db_vehicle)
    validate_vehicle_state(db_vehicle)
    db.add(db_vehicle)
    await db.commit()
    await db.refresh(db_vehicle)
    return db_vehicle


@router.get("/", response_model=VehicleList)
async def get_vehicles(
    filters: VehicleFilters = Depends(),
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """
    Get vehicles matching the filters, split into fleet and aggregated lists.
    """
    settings = get_settings()
    vehicles = await assignment.list_vehicles(db)
    filtered = filter_vehicles(
        vehicles, filters, datetime.now(settings.tz), settings.expiry_window_days, settings.tz
    )
    partition = partition_vehicles(filtered)
    return VehicleList(
        fleet=[VehicleSchema.model_validate(v) for v in partition.fleet],
        aggregated=[VehicleSchema.model_validate(v) for v in partition.aggregated],
    )


@router.get("/{vehicle_id}", response_model=VehicleSchema)
async def get_vehicle(
    vehicle_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """
    Get a specific vehicle by ID.
    """
    return await assignment.get_vehicle_or_404(db, vehicle_id)


@router.post("/", response_model=VehicleSchema, status_code=status.HTTP_201_CREATED)
async def create_fleet_vehicle(
    vehicle: FleetVehicleCreate,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(require_editor)
):
    """
    Register a fleet vehicle.
    """
    return await _register(db, Vehicle(**vehicle.model_dump(), is_fleet=True))


@router.post("/aggregated", response_model=VehicleSchema, status_code=status.HTTP_201_CREATED)
async def create_aggregated_vehicle(
    vehicle: AggregatedVehicleCreate,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(require_editor)
):
    """
    Register a third-party aggregated vehicle.
    """
    return await _register(db, Vehicle(**vehicle.model_dump(), chassis="", is_fleet=False))


@router.put("/{vehicle_id}", response_model=VehicleSchema)
async def update_vehicle(
    vehicle_id: int,
    vehicle_update: VehicleUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(require_editor)
):
    """
    Update a vehicle.

    The fleet flag and the assignment are not editable here; use the
    assign/unassign routes for the latter.
    """
    db_vehicle = await assignment.get_vehicle_or_404(db, vehicle_id)

    # Update only provided fields
    update_data = vehicle_update.model_dump(exclude_unset=True, exclude_none=True)
    for field, value in update_data.items():
        setattr(db_vehicle, field, value)

    _normalize_ownership(db_vehicle)
    validate_vehicle_state(db_vehicle)

    await db.commit()
    await db.refresh(db_vehicle)

    return db_vehicle


@router.delete("/{vehicle_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_vehicle(
    vehicle_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(require_editor)
):
    """
    Delete a vehicle.
    """
    db_vehicle = await assignment.get_vehicle_or_404(db, vehicle_id)
    await db.delete(db_vehicle)
    await db.commit()

    return None


@router.post("/{vehicle_id}/assign", response_model=VehicleSchema)
async def assign_vehicle(
    vehicle_id: int,
    request: AssignRequest,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(require_editor)
):
    """
    Point the vehicle at a collaborator without releasing their other vehicles.
    """
    return await assignment.assign(db, vehicle_id, request.collaborator_id)


@router.post("/{vehicle_id}/unassign", response_model=VehicleSchema)
async def unassign_vehicle(
    vehicle_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(require_editor)
):
    return await assignment.unassign(db, vehicle_id)
