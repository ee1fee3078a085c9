"""
Vehicle assignment operations.

The collaborator/vehicle relation lives only on ``Vehicle.collaborator_id``.
``reconcile_on_collaborator_edit`` is the only operation that keeps a
collaborator down to a single vehicle; ``assign`` does not look at other
vehicles.
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fleetdesk.core.assignment import vehicles_to_release
from fleetdesk.errors import NotFoundError
from fleetdesk.models.collaborator import Collaborator
from fleetdesk.models.vehicle import Vehicle

logger = logging.getLogger(__name__)


@dataclass
class ReconcileResult:
    released: List[int] = field(default_factory=list)
    assigned: Optional[int] = None


async def list_vehicles(db: AsyncSession) -> List[Vehicle]:
    """All vehicles in storage order."""
    result = await db.execute(select(Vehicle).order_by(Vehicle.id))
    return list(result.scalars().all())


async def get_vehicle_or_404(db: AsyncSession, vehicle_id: int) -> Vehicle:
    vehicle = await db.get(Vehicle, vehicle_id)
    if vehicle is None:
        raise NotFoundError(f"Vehicle {vehicle_id} not found")
    return vehicle


async def get_collaborator_or_404(db: AsyncSession, collaborator_id: int) -> Collaborator:
    collaborator = await db.get(Collaborator, collaborator_id)
    if collaborator is None:
        raise NotFoundError(f"Collaborator {collaborator_id} not found")
    return collaborator


async def assign(db: AsyncSession, vehicle_id: int, collaborator_id: int) -> Vehicle:
    """Point a vehicle at a collaborator, leaving other vehicles untouched."""
    vehicle = await get_vehicle_or_404(db, vehicle_id)
    await get_collaborator_or_404(db, collaborator_id)

    vehicle.collaborator_id = collaborator_id
    await db.commit()
    await db.refresh(vehicle)
    logger.info("Assigned vehicle %s to collaborator %s", vehicle_id, collaborator_id)
    return vehicle


async def unassign(db: AsyncSession, vehicle_id: int) -> Vehicle:
    vehicle = await get_vehicle_or_404(db, vehicle_id)
    if vehicle.collaborator_id is not None:
        logger.info("Released vehicle %s from collaborator %s", vehicle_id, vehicle.collaborator_id)
        vehicle.collaborator_id = None
        await db.commit()
        await db.refresh(vehicle)
    return vehicle


async def reconcile_on_collaborator_edit(
    db: AsyncSession,
    collaborator_id: int,
    new_vehicle_id: Optional[int],
    odometer: Optional[int] = None,
) -> ReconcileResult:
    """
    Make ``new_vehicle_id`` the collaborator's only vehicle.

    Every other vehicle pointing at the collaborator is released. The
    target is looked up before anything changes, and all changes go out
    in one commit, so a missing target leaves the store as it was.
    Pending changes the caller made on ``db`` go out in the same commit.
    """
    target = None
    if new_vehicle_id is not None:
        target = await get_vehicle_or_404(db, new_vehicle_id)

    result = ReconcileResult()
    for vehicle in vehicles_to_release(await list_vehicles(db), collaborator_id, new_vehicle_id):
        vehicle.collaborator_id = None
        result.released.append(vehicle.id)

    if target is not None:
        target.collaborator_id = collaborator_id
        if odometer is not None:
            target.odometer = odometer
        result.assigned = target.id

    await db.commit()

    logger.info(
        "Reconciled collaborator %s: released %s, assigned %s",
        collaborator_id, result.released, result.assigned,
    )
    return result
