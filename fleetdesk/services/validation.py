"""
Cross-field rules for a vehicle, checked after create and update.
"""
from fleetdesk.errors import ValidationError
from fleetdesk.models.vehicle import OwnershipType


def vehicle_state_errors(vehicle) -> dict:
    errors = {}
    if vehicle.ownership_type == OwnershipType.RENTED and not vehicle.rental_company:
        errors["rental_company"] = "Select the rental company"

    if vehicle.is_fleet:
        if not vehicle.chassis:
            errors["chassis"] = "Chassis is required for fleet vehicles"
        if not vehicle.contract_expiry:
            errors["contract_expiry"] = "Contract expiry is required for fleet vehicles"
    else:
        if vehicle.chassis:
            errors["chassis"] = "Aggregated vehicles have no chassis"
        if not vehicle.hiring_type:
            errors["hiring_type"] = "Hiring type is required"
        if not vehicle.aggregated_cpf:
            errors["aggregated_cpf"] = "Driver CPF is required"
        if not vehicle.aggregated_license_expiry:
            errors["aggregated_license_expiry"] = "Driver license expiry is required"
    return errors


def validate_vehicle_state(vehicle) -> None:
    """Raise ValidationError listing every broken rule."""
    errors = vehicle_state_errors(vehicle)
    if errors:
        raise ValidationError("Vehicle data is inconsistent", fields=errors)
