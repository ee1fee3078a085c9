"""
One-time import of the legacy browser cache into the database.

The old front end kept vehicles and collaborators in localStorage under
``fleet-vehicles`` and ``fleet-colaboradores``. A dump of that storage
(a JSON object keyed by those names) is loaded once; an ``AppState``
marker keeps later starts from importing it again.
"""
import json
import logging
from datetime import date
from pathlib import Path
from typing import Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from fleetdesk.config import Settings
from fleetdesk.core.temporal import to_instant
from fleetdesk.models.app_state import AppState
from fleetdesk.models.collaborator import Collaborator
from fleetdesk.models.vehicle import FuelCardType, HiringType, OwnershipType, RentalCompany, Vehicle

logger = logging.getLogger(__name__)

MIGRATION_MARKER = "legacy_cache_migrated"
VEHICLES_KEY = "fleet-vehicles"
COLLABORATORS_KEY = "fleet-colaboradores"

OWNERSHIP_MAP = {"proprio": OwnershipType.OWNED, "alugado": OwnershipType.RENTED}
FUEL_CARD_MAP = {"veloe": FuelCardType.CARD_A, "ticket": FuelCardType.CARD_B, "ambos": FuelCardType.BOTH}
HIRING_MAP = {"clt": HiringType.EMPLOYEE, "pj": HiringType.CONTRACTOR}
RENTAL_COMPANIES = {company.value: company for company in RentalCompany}


def _entries(cache: dict, key: str) -> List[dict]:
    # localStorage values are JSON strings; plain arrays are accepted too
    value = cache.get(key) or []
    if isinstance(value, str):
        value = json.loads(value)
    return [item for item in value if isinstance(item, dict)]


def _date(value, settings: Settings) -> Optional[date]:
    instant = to_instant(value, settings.tz) if value else None
    return instant.astimezone(settings.tz).date() if instant else None


def _number(value, cast):
    try:
        return cast(value or 0)
    except (TypeError, ValueError):
        return cast(0)


def _files(value) -> list:
    return [item for item in (value or []) if isinstance(item, dict) and "id" in item and "name" in item]


def collaborator_from_legacy(item: dict, settings: Settings) -> Collaborator:
    return Collaborator(
        name=(item.get("nome") or "").strip(),
        cpf=(item.get("cpf") or "").strip(),
        phone=(item.get("telefone") or "").strip(),
        department=(item.get("departamento") or "").strip(),
        license_expiry=_date(item.get("dataVencimentoCNH"), settings),
        documents=_files(item.get("documentos")),
    )


def vehicle_from_legacy(item: dict, settings: Settings, collaborator_ids: Dict[str, int]) -> Vehicle:
    rental = item.get("empresaLocacao")
    hiring = item.get("tipoContratacao")
    legacy_collaborator = item.get("colaboradorId")
    return Vehicle(
        plate=(item.get("placa") or "").strip().upper(),
        chassis=(item.get("chassi") or "").strip().upper(),
        model=(item.get("modelo") or "").strip(),
        odometer=_number(item.get("km"), int),
        monthly_cost=_number(item.get("mensalidade"), float),
        contract_expiry=_date(item.get("dataVencimentoContrato"), settings),
        ownership_type=OWNERSHIP_MAP.get(item.get("tipoPropriedade"), OwnershipType.OWNED),
        rental_company=RENTAL_COMPANIES.get(rental),
        fuel_card_type=FUEL_CARD_MAP.get(item.get("cartaoCombustivel"), FuelCardType.CARD_A),
        is_fleet=item.get("frota") is True,
        in_workshop=bool(item.get("naOficina")),
        pending_inspection=bool(item.get("paraRevisao")),
        toll_tag=bool(item.get("semParar")),
        hiring_type=HIRING_MAP.get(hiring),
        aggregated_cpf=item.get("cpfAgregado") or None,
        aggregated_license_expiry=_date(item.get("dataVencimentoCNHAgregado"), settings),
        collaborator_id=collaborator_ids.get(str(legacy_collaborator)) if legacy_collaborator else None,
        documents=_files(item.get("documentos")),
        images=_files(item.get("imagens")),
        checklists=_files(item.get("checklists")),
    )


class MigrationService:
    """Seeds the database from the legacy cache dump, at most once."""

    def __init__(self, session_factory: async_sessionmaker, settings: Settings):
        self.session_factory = session_factory
        self.settings = settings

    def read_cache(self) -> dict:
        path = self.settings.legacy_cache_path
        if not path or not Path(path).is_file():
            return {}
        return json.loads(Path(path).read_text(encoding="utf-8"))

    async def already_migrated(self, session: AsyncSession) -> bool:
        return await session.get(AppState, MIGRATION_MARKER) is not None

    async def run_once(self) -> bool:
        """
        Import the cache unless the marker is set.

        Returns True when this call performed the migration. An unreadable
        dump is logged and leaves the marker unset so the next start retries.
        """
        async with self.session_factory() as session:
            if await self.already_migrated(session):
                return False

            try:
                cache = self.read_cache()
                collaborator_items = _entries(cache, COLLABORATORS_KEY)
                vehicle_items = _entries(cache, VEHICLES_KEY)
            except (OSError, ValueError) as e:
                logger.error("Legacy cache at %s is unreadable: %s", self.settings.legacy_cache_path, e)
                return False

            collaborator_ids: Dict[str, int] = {}
            for item in collaborator_items:
                collaborator = collaborator_from_legacy(item, self.settings)
                session.add(collaborator)
                await session.flush()
                if item.get("id") is not None:
                    collaborator_ids[str(item["id"])] = collaborator.id

            for item in vehicle_items:
                session.add(vehicle_from_legacy(item, self.settings, collaborator_ids))

            session.add(AppState(key=MIGRATION_MARKER, value="1"))
            await session.commit()

        logger.info(
            "Legacy cache migrated: %d collaborators, %d vehicles",
            len(collaborator_items), len(vehicle_items),
        )
        return True
