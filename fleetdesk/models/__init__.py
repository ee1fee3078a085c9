"""
SQLAlchemy database models.
"""
from fleetdesk.models.app_state import AppState
from fleetdesk.models.collaborator import Collaborator
from fleetdesk.models.vehicle import Vehicle
from fleetdesk.models.user import User

__all__ = ["AppState", "Collaborator", "Vehicle", "User"]
