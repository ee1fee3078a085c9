"""
Persistence of the merged fuel dataset as one JSON file in the blob store.
"""
import json
import logging
from typing import List

from pydantic import ValidationError as SchemaError

from fleetdesk.config import Settings
from fleetdesk.core.fuel_csv import parse_fuel_csv
from fleetdesk.core.fuel_merge import merge_records
from fleetdesk.schemas.fuel import FuelImportResult, FuelRecord
from fleetdesk.services.blobstore import BlobStore

logger = logging.getLogger(__name__)


class FuelRecordStore:
    """
    Read, merge and write the stored fuel records.

    Imports are read-merge-write with no lock: two concurrent imports
    can lose one of the two merges.
    """

    def __init__(self, blob_store: BlobStore, settings: Settings):
        self.blob_store = blob_store
        self.settings = settings
        self.folder = settings.fuel_folder_name
        self.file_name = settings.fuel_data_file

    def load(self) -> List[FuelRecord]:
        ref = self.blob_store.find(self.folder, self.file_name)
        if ref is None:
            return []
        raw = self.blob_store.download(ref.id)
        try:
            payload = json.loads(raw.decode("utf-8"))
            if isinstance(payload, dict):
                payload = payload.get("records", [])
            return [FuelRecord.model_validate(item) for item in payload]
        except (ValueError, TypeError, SchemaError) as e:
            logger.warning("Stored fuel data is unreadable, starting empty: %s", e)
            return []

    def save(self, records: List[FuelRecord]):
        data = json.dumps(
            [record.model_dump(by_alias=True) for record in records],
            ensure_ascii=False,
        ).encode("utf-8")
        return self.blob_store.upload(data, self.folder, self.file_name)

    def import_csv(self, data: bytes) -> FuelImportResult:
        """Parse a report, merge it into the stored set and write the result once."""
        incoming = parse_fuel_csv(data, self.settings.tz)
        merged = merge_records(self.load(), incoming)
        ref = self.save(merged)
        logger.info("Imported %d fuel records, %d stored", len(incoming), len(merged))
        return FuelImportResult(imported=len(incoming), total=len(merged), file=ref)
