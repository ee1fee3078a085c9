"""
Fuel-card report routes.
"""
from datetime import date, datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, File, UploadFile

from fleetdesk.auth import CurrentUser, get_current_user, require_editor
from fleetdesk.config import Settings, get_settings
from fleetdesk.core.fuel_metrics import filter_fuel_records, summarize_fuel
from fleetdesk.errors import ValidationError
from fleetdesk.schemas.filters import FuelTransactionFilters
from fleetdesk.schemas.fuel import FuelData, FuelImportResult, FuelRecord, FuelSummary
from fleetdesk.services.blobstore import BlobStore, get_blob_store
from fleetdesk.services.fuel_store import FuelRecordStore

router = APIRouter(prefix="/fuel", tags=["fuel"])


def get_fuel_store(
    blob_store: BlobStore = Depends(get_blob_store),
    settings: Settings = Depends(get_settings),
) -> FuelRecordStore:
    return FuelRecordStore(blob_store, settings)


@router.post("/import", response_model=FuelImportResult)
async def import_fuel_csv(
    file: UploadFile = File(...),
    store: FuelRecordStore = Depends(get_fuel_store),
    current_user: CurrentUser = Depends(require_editor)
):
    """
    Import a fuel-card CSV report, merging it into the stored records.
    """
    if not (file.filename or "").lower().endswith(".csv"):
        raise ValidationError("Only CSV files are accepted", fields={"file": "expected a .csv file"})
    data = await file.read()
    return store.import_csv(data)


@router.get("/data", response_model=FuelData)
async def get_fuel_data(
    store: FuelRecordStore = Depends(get_fuel_store),
    current_user: CurrentUser = Depends(get_current_user)
):
    """
    Get every stored fuel record, oldest first.
    """
    return FuelData(records=store.load())


@router.get("/summary", response_model=FuelSummary)
async def get_fuel_summary(
    day: Optional[date] = None,
    start: Optional[date] = None,
    end: Optional[date] = None,
    store: FuelRecordStore = Depends(get_fuel_store),
    settings: Settings = Depends(get_settings),
    current_user: CurrentUser = Depends(get_current_user)
):
    """
    Daily, weekly and monthly spend. ``day`` moves the daily report;
    ``start`` and ``end`` replace the trailing week.
    """
    return summarize_fuel(store.load(), datetime.now(settings.tz), day=day, start=start, end=end)


@router.get("/transactions", response_model=List[FuelRecord])
async def get_fuel_transactions(
    filters: FuelTransactionFilters = Depends(),
    store: FuelRecordStore = Depends(get_fuel_store),
    settings: Settings = Depends(get_settings),
    current_user: CurrentUser = Depends(get_current_user)
):
    return filter_fuel_records(store.load(), filters, settings.tz)
