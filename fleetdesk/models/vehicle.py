"""
Vehicle model for database.
"""
from sqlalchemy import Boolean, Column, Date, DateTime, Enum as SQLEnum, Float, Integer, JSON, String
from sqlalchemy.sql import func
from fleetdesk.database import Base
import enum


class OwnershipType(str, enum.Enum):
    """How the company holds the vehicle."""
    OWNED = "owned"
    RENTED = "rented"


class RentalCompany(str, enum.Enum):
    LOCALIZA = "localiza"
    LOK_MOTORS = "lok_motors"
    MOVIDA = "movida"
    VEICULO_SLN = "veiculo_sln"


class FuelCardType(str, enum.Enum):
    """Fuel card issuer attached to the vehicle."""
    CARD_A = "card_a"
    CARD_B = "card_b"
    BOTH = "both"


class HiringType(str, enum.Enum):
    """Contract of the driver of an aggregated vehicle."""
    EMPLOYEE = "employee"
    CONTRACTOR = "contractor"


class Vehicle(Base):
    """Vehicle database model.

    ``is_fleet`` selects between fleet semantics (chassis and contract) and
    aggregated semantics (third-party driver CPF, license and hiring type).
    ``collaborator_id`` is a plain reference with no foreign key: the
    one-vehicle-per-collaborator rule lives in the assignment service.
    """

    __tablename__ = "vehicles"

    id = Column(Integer, primary_key=True, index=True)
    plate = Column(String, nullable=False, index=True)
    chassis = Column(String, nullable=False, default="")
    model = Column(String, nullable=False)
    odometer = Column(Integer, nullable=False, default=0)
    monthly_cost = Column(Float, nullable=False, default=0.0)
    contract_expiry = Column(Date, nullable=True)
    ownership_type = Column(SQLEnum(OwnershipType), default=OwnershipType.OWNED, nullable=False)
    rental_company = Column(SQLEnum(RentalCompany), nullable=True)
    fuel_card_type = Column(SQLEnum(FuelCardType), default=FuelCardType.CARD_A, nullable=False)
    is_fleet = Column(Boolean, nullable=False, default=True)
    in_workshop = Column(Boolean, nullable=False, default=False)
    pending_inspection = Column(Boolean, nullable=False, default=False)
    toll_tag = Column(Boolean, nullable=False, default=False)
    hiring_type = Column(SQLEnum(HiringType), nullable=True)
    aggregated_cpf = Column(String, nullable=True)
    aggregated_license_expiry = Column(Date, nullable=True)
    collaborator_id = Column(Integer, nullable=True, index=True)
    documents = Column(JSON, nullable=False, default=list)
    images = Column(JSON, nullable=False, default=list)
    checklists = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
