"""
Field validators for Brazilian fleet documents.

Each validator returns the normalized value or raises ``ValueError`` with
a message suitable for a form field, so they plug straight into pydantic
``field_validator`` hooks.
"""
import re
from typing import Optional

# Old format ABC-1234 / ABC1234, or Mercosul ABC1D23
PLATE_PATTERN = re.compile(r"^[A-Z]{3}-?\d{4}$|^[A-Z]{3}\d[A-Z]\d{2}$")
CHASSIS_PATTERN = re.compile(r"^[A-Z0-9]{17}$")


def only_digits(value: Optional[str]) -> str:
    return re.sub(r"\D", "", value or "")


def validate_plate(plate: str) -> str:
    """Validate a license plate and return it uppercased."""
    cleaned = (plate or "").strip().upper()
    if not cleaned:
        raise ValueError("Plate is required")
    if not PLATE_PATTERN.match(cleaned):
        raise ValueError("Invalid plate format (e.g. ABC-1234 or ABC1D23)")
    return cleaned


def validate_chassis(chassis: str) -> str:
    cleaned = (chassis or "").strip().upper()
    if not cleaned:
        raise ValueError("Chassis is required")
    if not CHASSIS_PATTERN.match(cleaned):
        raise ValueError("Chassis must have 17 alphanumeric characters")
    return cleaned


def format_cpf(digits: str) -> str:
    return f"{digits[:3]}.{digits[3:6]}.{digits[6:9]}-{digits[9:]}"


def validate_cpf(cpf: str) -> str:
    """Validate a CPF by digit count and return it formatted for display."""
    digits = only_digits(cpf)
    if not digits:
        raise ValueError("CPF is required")
    if len(digits) != 11:
        raise ValueError("CPF must have 11 digits")
    return format_cpf(digits)


def validate_phone(phone: str) -> str:
    digits = only_digits(phone)
    if not digits:
        raise ValueError("Phone is required")
    if len(digits) < 10 or len(digits) > 11:
        raise ValueError("Invalid phone number")
    return phone.strip()


def validate_required_text(value: str) -> str:
    cleaned = (value or "").strip()
    if not cleaned:
        raise ValueError("Field is required")
    return cleaned
