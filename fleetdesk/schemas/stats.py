"""
Pydantic schema for the dashboard cards.
"""
from pydantic import BaseModel


class FleetStats(BaseModel):
    total_vehicles: int
    owned: int
    rented: int
    in_workshop: int
    pending_inspection: int
    contracts_expiring: int
    total_collaborators: int
    monthly_fuel_total: float
