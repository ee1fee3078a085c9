"""
Collaborator model for database.
"""
from sqlalchemy import Column, Date, DateTime, Integer, JSON, String
from sqlalchemy.sql import func
from fleetdesk.database import Base


class Collaborator(Base):
    """Collaborator (driver) database model.

    The current vehicle is not stored here; it is derived from
    ``Vehicle.collaborator_id``.
    """

    __tablename__ = "collaborators"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, index=True)
    cpf = Column(String, nullable=False, index=True)
    phone = Column(String, nullable=False)
    department = Column(String, nullable=False)
    license_expiry = Column(Date, nullable=True)
    documents = Column(JSON, nullable=False, default=list)
    checklist = Column(JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
