"""
Dashboard routes.
"""
from datetime import datetime

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fleetdesk.auth import CurrentUser, get_current_user
from fleetdesk.config import Settings, get_settings
from fleetdesk.core.stats import compute_fleet_stats
from fleetdesk.database import get_db
from fleetdesk.models.collaborator import Collaborator
from fleetdesk.routers.fuel import get_fuel_store
from fleetdesk.schemas.stats import FleetStats
from fleetdesk.services import assignment
from fleetdesk.services.fuel_store import FuelRecordStore

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/stats", response_model=FleetStats)
async def get_stats(
    db: AsyncSession = Depends(get_db),
    store: FuelRecordStore = Depends(get_fuel_store),
    settings: Settings = Depends(get_settings),
    current_user: CurrentUser = Depends(get_current_user)
):
    """
    Counts shown on the dashboard cards.
    """
    vehicles = await assignment.list_vehicles(db)
    collaborators = (await db.execute(select(Collaborator))).scalars().all()
    return compute_fleet_stats(
        vehicles,
        collaborators,
        store.load(),
        datetime.now(settings.tz),
        settings.expiry_window_days,
        settings.tz,
    )
