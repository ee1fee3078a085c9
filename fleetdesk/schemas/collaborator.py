"""
Pydantic schemas for Collaborator.
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import date, datetime
from typing import List, Optional

from fleetdesk.schemas.files import FileRef
from fleetdesk.validators import validate_cpf, validate_phone, validate_required_text

MAX_DAMAGE_ENTRIES = 3


class DamageEntry(BaseModel):
    """Photo of a damaged spot with its description."""
    photo: FileRef
    description: str

    @field_validator("description")
    @classmethod
    def check_description(cls, value: str) -> str:
        cleaned = (value or "").strip()
        if not cleaned:
            raise ValueError("Describe each reported damage")
        return cleaned


class VehicleChecklist(BaseModel):
    """Condition photos taken when the collaborator receives a vehicle."""
    front: FileRef
    right: FileRef
    left: FileRef
    rear: FileRef
    damages: List[DamageEntry] = Field(default_factory=list, max_length=MAX_DAMAGE_ENTRIES)


class CollaboratorBase(BaseModel):
    """Base collaborator schema with common fields."""
    name: str
    cpf: str
    phone: str
    department: str
    license_expiry: date
    documents: List[FileRef] = []

    @field_validator("name", "department")
    @classmethod
    def check_required(cls, value: str) -> str:
        return validate_required_text(value)

    @field_validator("cpf")
    @classmethod
    def check_cpf(cls, value: str) -> str:
        return validate_cpf(value)

    @field_validator("phone")
    @classmethod
    def check_phone(cls, value: str) -> str:
        return validate_phone(value)


class CollaboratorCreate(CollaboratorBase):
    """Schema for registering a collaborator, optionally handing over a vehicle."""
    checklist: VehicleChecklist
    vehicle_id: Optional[int] = None
    odometer: Optional[int] = Field(None, ge=0)


class CollaboratorUpdate(BaseModel):
    """Schema for editing a collaborator.

    Sending ``vehicle_id`` (including ``null``) reconciles the vehicle
    assignment; leaving it out keeps assignments untouched.
    """
    name: Optional[str] = None
    cpf: Optional[str] = None
    phone: Optional[str] = None
    department: Optional[str] = None
    license_expiry: Optional[date] = None
    documents: Optional[List[FileRef]] = None
    checklist: Optional[VehicleChecklist] = None
    vehicle_id: Optional[int] = None
    odometer: Optional[int] = Field(None, ge=0)

    @field_validator("name", "department")
    @classmethod
    def check_required(cls, value: Optional[str]) -> Optional[str]:
        return validate_required_text(value) if value is not None else None

    @field_validator("cpf")
    @classmethod
    def check_cpf(cls, value: Optional[str]) -> Optional[str]:
        return validate_cpf(value) if value is not None else None

    @field_validator("phone")
    @classmethod
    def check_phone(cls, value: Optional[str]) -> Optional[str]:
        return validate_phone(value) if value is not None else None


class Collaborator(BaseModel):
    """Schema for collaborator responses."""
    id: int
    name: str
    cpf: str
    phone: str
    department: str
    license_expiry: Optional[date] = None
    documents: List[FileRef] = []
    checklist: Optional[VehicleChecklist] = None
    current_vehicle_id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
