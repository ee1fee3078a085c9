"""
Shared builders for the test suite.
"""
import asyncio
import shutil
from datetime import datetime, timedelta
from types import SimpleNamespace

from fleetdesk.auth import create_access_token
from fleetdesk.config import get_settings
from fleetdesk.database import drop_db, init_db
from fleetdesk.models.user import UserRole
from fleetdesk.models.vehicle import FuelCardType, OwnershipType
from fleetdesk.schemas.fuel import FuelRecord

API = "/api/v1"
CHASSIS = "9BWZZZ377VT004251"


def auth_headers(role=UserRole.MASTER):
    token = create_access_token("tester@fleetdesk.com.br", role)
    return {"Authorization": f"Bearer {token}"}


async def recreate_tables():
    await drop_db()
    await init_db()


def reset_database():
    asyncio.run(recreate_tables())


def reset_storage():
    shutil.rmtree(get_settings().blob_root, ignore_errors=True)


def today():
    return datetime.now(get_settings().tz).date()


def make_vehicle(**overrides):
    """Plain object with the attributes the filter helpers read."""
    fields = dict(
        id=1,
        plate="ABC-1234",
        chassis=CHASSIS,
        model="Fiat Strada",
        contract_expiry=None,
        ownership_type=OwnershipType.OWNED,
        fuel_card_type=FuelCardType.CARD_A,
        is_fleet=True,
        in_workshop=False,
        pending_inspection=False,
        toll_tag=False,
        collaborator_id=None,
    )
    fields.update(overrides)
    return SimpleNamespace(**fields)


def make_collaborator(**overrides):
    fields = dict(id=1, name="Ana Souza", cpf="123.456.789-09", phone="(11) 98765-4321", license_expiry=None)
    fields.update(overrides)
    return SimpleNamespace(**fields)


def file_ref(name):
    return {"id": f"uploads/{name}", "name": name}


def fleet_vehicle_payload(**overrides):
    payload = {
        "plate": "ABC-1234",
        "chassis": CHASSIS,
        "model": "Fiat Strada",
        "odometer": 12000,
        "monthly_cost": 2500.0,
        "contract_expiry": (today() + timedelta(days=200)).isoformat(),
        "ownership_type": "owned",
        "fuel_card_type": "card_a",
    }
    payload.update(overrides)
    return payload


def aggregated_vehicle_payload(**overrides):
    payload = {
        "plate": "XYZ1A23",
        "model": "VW Saveiro",
        "ownership_type": "owned",
        "fuel_card_type": "card_b",
        "hiring_type": "contractor",
        "aggregated_cpf": "98765432100",
        "aggregated_license_expiry": (today() + timedelta(days=400)).isoformat(),
    }
    payload.update(overrides)
    return payload


def collaborator_payload(**overrides):
    payload = {
        "name": "Uelison da Silva Ferreira Couto",
        "cpf": "12345678909",
        "phone": "(11) 98765-4321",
        "department": "Logistics",
        "license_expiry": (today() + timedelta(days=365)).isoformat(),
        "checklist": {
            "front": file_ref("front.jpg"),
            "right": file_ref("right.jpg"),
            "left": file_ref("left.jpg"),
            "rear": file_ref("rear.jpg"),
            "damages": [],
        },
    }
    payload.update(overrides)
    return payload


def fuel_csv(rows, delimiter=";"):
    """
    Build a report in the card issuer's column layout.

    Each row is a dict with plate, cpf, name, date, fuel and value keys.
    """
    header = delimiter.join(f"col{i}" for i in range(30))
    lines = [header]
    for row in rows:
        cells = [""] * 30
        cells[5] = row.get("date", "")
        cells[8] = row.get("plate", "")
        cells[13] = row.get("cpf", "")
        cells[14] = row.get("name", "")
        cells[26] = row.get("fuel", "GASOLINA COMUM")
        cells[29] = row.get("value", "")
        lines.append(delimiter.join(f'"{cell}"' if delimiter in cell else cell for cell in cells))
    return ("\r\n".join(lines) + "\r\n").encode("utf-8")


def fuel_record(plate="XYZ9999", cpf="11111111111", date_time="2024-06-01T11:00:00.000Z", value=50.0, **extra):
    return FuelRecord(card_plate=plate, driver_cpf=cpf, date_time=date_time, value=value, **extra)
