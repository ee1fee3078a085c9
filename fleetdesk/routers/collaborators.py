"""
Collaborator routes.
"""
from datetime import datetime
from typing import List

from fastapi import APIRouter, Depends, status
from fastapi.responses import PlainTextResponse
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fleetdesk.auth import CurrentUser, get_current_user, require_editor
from fleetdesk.config import get_settings
from fleetdesk.core.assignment import build_assignment_index, current_vehicle_for
from fleetdesk.core.collaborator_filters import apply_collaborator_view
from fleetdesk.core.term import build_term_fields
from fleetdesk.database import get_db
from fleetdesk.errors import IncompleteDataError, ReferenceConflictError
from fleetdesk.models.collaborator import Collaborator
from fleetdesk.schemas.collaborator import (
    Collaborator as CollaboratorSchema,
    CollaboratorCreate,
    CollaboratorUpdate,
)
from fleetdesk.schemas.filters import CollaboratorFilters
from fleetdesk.services import assignment
from fleetdesk.services.term import PlainTextTermRenderer

router = APIRouter(prefix="/collaborators", tags=["collaborators"])

ASSIGNMENT_FIELDS = {"vehicle_id", "odometer"}


def _to_schema(collaborator: Collaborator, current_vehicle_id=None) -> CollaboratorSchema:
    return CollaboratorSchema.model_validate(collaborator).model_copy(
        update={"current_vehicle_id": current_vehicle_id}
    )


async def _with_current_vehicle(db: AsyncSession, collaborator: Collaborator) -> CollaboratorSchema:
    vehicle = current_vehicle_for(await assignment.list_vehicles(db), collaborator.id)
    return _to_schema(collaborator, vehicle.id if vehicle else None)


@router.get("/", response_model=List[CollaboratorSchema])
async def get_collaborators(
    filters: CollaboratorFilters = Depends(),
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """
    Get collaborators matching the search and license filters, ordered as requested.
    """
    settings = get_settings()
    result = await db.execute(select(Collaborator).order_by(Collaborator.id))
    collaborators = apply_collaborator_view(
        result.scalars().all(), filters, datetime.now(settings.tz), settings.expiry_window_days, settings.tz
    )
    index = build_assignment_index(await assignment.list_vehicles(db))
    return [_to_schema(c, index.get(c.id, [None])[0]) for c in collaborators]


@router.get("/{collaborator_id}", response_model=CollaboratorSchema)
async def get_collaborator(
    collaborator_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    collaborator = await assignment.get_collaborator_or_404(db, collaborator_id)
    return await _with_current_vehicle(db, collaborator)


@router.post("/", response_model=CollaboratorSchema, status_code=status.HTTP_201_CREATED)
async def create_collaborator(
    collaborator: CollaboratorCreate,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(require_editor)
):
    """
    Register a collaborator, optionally handing over a vehicle.

    The new row and the vehicle assignment are committed together.
    """
    db_collaborator = Collaborator(**collaborator.model_dump(exclude=ASSIGNMENT_FIELDS))
    db.add(db_collaborator)
    await db.flush()

    if collaborator.vehicle_id is not None:
        await assignment.reconcile_on_collaborator_edit(
            db, db_collaborator.id, collaborator.vehicle_id, collaborator.odometer
        )
    else:
        await db.commit()

    await db.refresh(db_collaborator)
    return await _with_current_vehicle(db, db_collaborator)


@router.put("/{collaborator_id}", response_model=CollaboratorSchema)
async def update_collaborator(
    collaborator_id: int,
    collaborator_update: CollaboratorUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(require_editor)
):
    """
    Update a collaborator.

    When ``vehicle_id`` is part of the payload the collaborator ends up
    with exactly that vehicle (or none for ``null``); field changes and
    the reassignment succeed or fail together.
    """
    db_collaborator = await assignment.get_collaborator_or_404(db, collaborator_id)

    update_data = collaborator_update.model_dump(
        exclude_unset=True, exclude_none=True, exclude=ASSIGNMENT_FIELDS
    )
    for field, value in update_data.items():
        setattr(db_collaborator, field, value)

    if "vehicle_id" in collaborator_update.model_fields_set:
        await assignment.reconcile_on_collaborator_edit(
            db, collaborator_id, collaborator_update.vehicle_id, collaborator_update.odometer
        )
    else:
        await db.commit()

    await db.refresh(db_collaborator)
    return await _with_current_vehicle(db, db_collaborator)


@router.delete("/{collaborator_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_collaborator(
    collaborator_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(require_editor)
):
    """
    Delete a collaborator. Refused while any vehicle still points at them.
    """
    db_collaborator = await assignment.get_collaborator_or_404(db, collaborator_id)

    vehicle_ids = build_assignment_index(await assignment.list_vehicles(db)).get(collaborator_id, [])
    if vehicle_ids:
        raise ReferenceConflictError(
            f"Collaborator {collaborator_id} is assigned to vehicle(s) {vehicle_ids}; release them first"
        )

    await db.delete(db_collaborator)
    await db.commit()

    return None


@router.get("/{collaborator_id}/term", response_class=PlainTextResponse)
async def get_responsibility_term(
    collaborator_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user)
):
    """
    Render the responsibility term for the collaborator's current vehicle.
    """
    collaborator = await assignment.get_collaborator_or_404(db, collaborator_id)
    vehicle = current_vehicle_for(await assignment.list_vehicles(db), collaborator_id)

    fields = build_term_fields(collaborator, vehicle)
    if fields is None:
        raise IncompleteDataError(
            "The term needs the collaborator's name, CPF and license expiry and an assigned vehicle"
        )

    renderer = PlainTextTermRenderer()
    return PlainTextResponse(renderer.render(fields), media_type=renderer.media_type)
