"""
Pydantic schemas for fuel-card data.
"""
from pydantic import BaseModel, ConfigDict, Field
from datetime import date
from typing import List, Optional

from fleetdesk.schemas.files import FileRef


class FuelRecord(BaseModel):
    """One fuel-card transaction.

    Aliases are the keys of the stored JSON array and must not change.
    """
    card_plate: str = Field("", alias="cardPlate")
    driver_cpf: str = Field("", alias="cpfMotorista")
    driver_name: str = Field("", alias="nomeMotorista")
    fuel_type: str = Field("", alias="tipoCombustivel")
    value: float = Field(0.0, alias="valor")
    date_time: str = Field(..., alias="dateTime")

    model_config = ConfigDict(populate_by_name=True)


class FuelData(BaseModel):
    records: List[FuelRecord]


class FuelImportResult(BaseModel):
    """Outcome of a CSV import."""
    success: bool = True
    imported: int
    total: int
    file: Optional[FileRef] = None


class FuelSummary(BaseModel):
    """Spend totals derived from the stored records."""
    report_date: date
    daily_total: float
    weekly_start: date
    weekly_end: date
    weekly_total: float
    monthly_total: float
    monthly_count: int
