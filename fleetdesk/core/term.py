"""
Data for the vehicle responsibility term signed by a collaborator.
"""
from dataclasses import dataclass
from datetime import date
from typing import Optional

from fleetdesk.core.temporal import to_instant

# Connectives kept whole when abbreviating middle names
NAME_PARTICLES = {"da", "de", "do", "das", "dos"}


@dataclass(frozen=True)
class TermFields:
    driver_name: str
    driver_id: str
    date_string: str
    vehicle_model: str
    plate: str

    @property
    def short_name(self) -> str:
        return abbreviate_name(self.driver_name)


def format_date_br(value) -> str:
    if isinstance(value, date):
        return value.strftime("%d/%m/%Y")
    instant = to_instant(value, None) if value else None
    return instant.strftime("%d/%m/%Y") if instant else ""


def abbreviate_name(name: str) -> str:
    """
    Shorten middle names to initials.

    "Uelison da Silva Ferreira Couto" -> "Uelison da S. F. Couto"
    """
    parts = name.split()
    if len(parts) <= 2:
        return name
    middle = [
        part.lower() if part.lower() in NAME_PARTICLES else part[0].upper() + "."
        for part in parts[1:-1]
    ]
    return " ".join([parts[0], *middle, parts[-1]])


def build_term_fields(collaborator, vehicle) -> Optional[TermFields]:
    """The five renderer inputs, or None when any of them is empty."""
    if collaborator is None or vehicle is None:
        return None
    fields = TermFields(
        driver_name=(collaborator.name or "").strip(),
        driver_id=(collaborator.cpf or "").strip(),
        date_string=format_date_br(collaborator.license_expiry),
        vehicle_model=(vehicle.model or "").strip(),
        plate=(vehicle.plate or "").strip(),
    )
    if not all([fields.driver_name, fields.driver_id, fields.date_string, fields.vehicle_model, fields.plate]):
        return None
    return fields
