"""
Fleetdesk: back office for a company vehicle fleet.
"""
__version__ = "1.0.0"
