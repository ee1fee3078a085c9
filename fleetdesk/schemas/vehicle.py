"""
Pydantic schemas for Vehicle.
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import date, datetime
from typing import List, Optional

from fleetdesk.models.vehicle import FuelCardType, HiringType, OwnershipType, RentalCompany
from fleetdesk.schemas.files import FileRef
from fleetdesk.validators import validate_chassis, validate_cpf, validate_plate, validate_required_text


class VehicleBase(BaseModel):
    """Fields shared by fleet and aggregated vehicles."""
    plate: str
    model: str
    odometer: int = Field(0, ge=0)
    monthly_cost: float = Field(0.0, ge=0)
    contract_expiry: Optional[date] = None
    ownership_type: OwnershipType = OwnershipType.OWNED
    rental_company: Optional[RentalCompany] = None
    fuel_card_type: FuelCardType = FuelCardType.CARD_A
    in_workshop: bool = False
    pending_inspection: bool = False
    toll_tag: bool = False
    documents: List[FileRef] = []
    images: List[FileRef] = []
    checklists: List[FileRef] = []

    @field_validator("plate")
    @classmethod
    def check_plate(cls, value: str) -> str:
        return validate_plate(value)

    @field_validator("model")
    @classmethod
    def check_model(cls, value: str) -> str:
        return validate_required_text(value)


class FleetVehicleCreate(VehicleBase):
    """Schema for registering a fleet vehicle."""
    chassis: str
    contract_expiry: date

    @field_validator("chassis")
    @classmethod
    def check_chassis(cls, value: str) -> str:
        return validate_chassis(value)


class AggregatedVehicleCreate(VehicleBase):
    """Schema for registering a third-party aggregated vehicle."""
    hiring_type: HiringType
    aggregated_cpf: str
    aggregated_license_expiry: date

    @field_validator("aggregated_cpf")
    @classmethod
    def check_cpf(cls, value: str) -> str:
        return validate_cpf(value)


class VehicleUpdate(BaseModel):
    """Schema for updating a vehicle."""
    plate: Optional[str] = None
    chassis: Optional[str] = None
    model: Optional[str] = None
    odometer: Optional[int] = Field(None, ge=0)
    monthly_cost: Optional[float] = Field(None, ge=0)
    contract_expiry: Optional[date] = None
    ownership_type: Optional[OwnershipType] = None
    rental_company: Optional[RentalCompany] = None
    fuel_card_type: Optional[FuelCardType] = None
    in_workshop: Optional[bool] = None
    pending_inspection: Optional[bool] = None
    toll_tag: Optional[bool] = None
    hiring_type: Optional[HiringType] = None
    aggregated_cpf: Optional[str] = None
    aggregated_license_expiry: Optional[date] = None
    documents: Optional[List[FileRef]] = None
    images: Optional[List[FileRef]] = None
    checklists: Optional[List[FileRef]] = None

    @field_validator("plate")
    @classmethod
    def check_plate(cls, value: Optional[str]) -> Optional[str]:
        return validate_plate(value) if value is not None else None

    @field_validator("chassis")
    @classmethod
    def check_chassis(cls, value: Optional[str]) -> Optional[str]:
        return validate_chassis(value) if value is not None else None

    @field_validator("aggregated_cpf")
    @classmethod
    def check_cpf(cls, value: Optional[str]) -> Optional[str]:
        return validate_cpf(value) if value is not None else None


class Vehicle(BaseModel):
    """Schema for vehicle responses."""
    id: int
    plate: str
    chassis: str = ""
    model: str
    odometer: int = 0
    monthly_cost: float = 0.0
    contract_expiry: Optional[date] = None
    ownership_type: OwnershipType = OwnershipType.OWNED
    rental_company: Optional[RentalCompany] = None
    fuel_card_type: FuelCardType = FuelCardType.CARD_A
    is_fleet: bool = True
    in_workshop: bool = False
    pending_inspection: bool = False
    toll_tag: bool = False
    hiring_type: Optional[HiringType] = None
    aggregated_cpf: Optional[str] = None
    aggregated_license_expiry: Optional[date] = None
    collaborator_id: Optional[int] = None
    documents: List[FileRef] = []
    images: List[FileRef] = []
    checklists: List[FileRef] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class VehicleList(BaseModel):
    """Filtered vehicles split into fleet and aggregated views."""
    fleet: List[Vehicle]
    aggregated: List[Vehicle]


class AssignRequest(BaseModel):
    collaborator_id: int
