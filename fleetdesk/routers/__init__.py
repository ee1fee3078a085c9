"""
API routers, one per resource.
"""
from fleetdesk.routers import collaborators, dashboard, files, fuel, users, vehicles

__all__ = ["collaborators", "dashboard", "files", "fuel", "users", "vehicles"]
