"""
Key/value markers persisted across process restarts.
"""
from sqlalchemy import Column, DateTime, String
from sqlalchemy.sql import func
from fleetdesk.database import Base


class AppState(Base):
    __tablename__ = "app_state"

    key = Column(String, primary_key=True)
    value = Column(String, nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
