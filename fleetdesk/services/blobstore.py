"""
File storage for vehicle and collaborator attachments and the fuel dataset.

Files are addressed by ``folder/name`` ids relative to the store root.
"""
import logging
import os
import re
import tempfile
import time
import unicodedata
from pathlib import Path
from typing import List, Optional, Protocol
from urllib.parse import quote

from fleetdesk.config import get_settings
from fleetdesk.errors import NotFoundError, UpstreamError, ValidationError
from fleetdesk.schemas.files import FileRef

logger = logging.getLogger(__name__)

_UNSAFE_RUN = re.compile(r"[^a-zA-Z0-9._-]+")


def sanitize_name(value) -> str:
    """Strip accents and collapse unsafe characters to ``_``."""
    decomposed = unicodedata.normalize("NFD", str(value))
    plain = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return _UNSAFE_RUN.sub("_", plain).strip("_")


def entity_folder(entity_type: str, entity_id) -> str:
    return f"{sanitize_name(entity_type)}/{sanitize_name(entity_id)}"


def document_file_name(label: str, filename: str, now_ms: Optional[int] = None) -> str:
    """``{label}_{epoch_ms}_{filename}``, both parts sanitized."""
    stamp = now_ms if now_ms is not None else int(time.time() * 1000)
    return f"{sanitize_name(label)}_{stamp}_{sanitize_name(filename)}"


class BlobStore(Protocol):
    def upload(self, data: bytes, folder_path: str, file_name: str) -> FileRef: ...

    def list(self, folder_path: str) -> List[FileRef]: ...

    def download(self, file_id: str) -> bytes: ...

    def find(self, folder_path: str, file_name: str) -> Optional[FileRef]: ...


class LocalBlobStore:
    """BlobStore on the local filesystem. Uploading an existing name overwrites it."""

    def __init__(self, root, view_base_url: str = ""):
        self.root = Path(root).resolve()
        self.view_base_url = view_base_url

    def _ref(self, path: Path) -> FileRef:
        file_id = path.relative_to(self.root).as_posix()
        return FileRef(id=file_id, name=path.name, view_url=f"{self.view_base_url}{quote(file_id)}")

    def _resolve(self, relative: str) -> Path:
        path = (self.root / relative).resolve()
        if path != self.root and self.root not in path.parents:
            raise ValidationError("Path escapes the storage root", fields={"file_id": relative})
        return path

    def upload(self, data: bytes, folder_path: str, file_name: str) -> FileRef:
        folder = self._resolve(folder_path)
        path = self._resolve(f"{folder_path}/{file_name}")
        temp_path = None
        try:
            folder.mkdir(parents=True, exist_ok=True)
            # Write beside the target, then swap it in so a failed write keeps the old file
            handle, temp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
            os.close(handle)
            temp_path = Path(temp_name)
            temp_path.write_bytes(data)
            os.replace(temp_path, path)
        except OSError as e:
            logger.error("Failed to store %s: %s", path, e)
            if temp_path is not None:
                temp_path.unlink(missing_ok=True)
            raise UpstreamError(f"Could not store file {file_name}")
        logger.info("Stored %s (%d bytes)", path.relative_to(self.root), len(data))
        return self._ref(path)

    def list(self, folder_path: str) -> List[FileRef]:
        folder = self._resolve(folder_path)
        if not folder.is_dir():
            return []
        try:
            return [self._ref(p) for p in sorted(folder.iterdir()) if p.is_file()]
        except OSError as e:
            raise UpstreamError(f"Could not list {folder_path}: {e}")

    def download(self, file_id: str) -> bytes:
        path = self._resolve(file_id)
        if not path.is_file():
            raise NotFoundError(f"File {file_id} not found")
        try:
            return path.read_bytes()
        except OSError as e:
            raise UpstreamError(f"Could not read {file_id}: {e}")

    def find(self, folder_path: str, file_name: str) -> Optional[FileRef]:
        path = self._resolve(f"{folder_path}/{file_name}")
        return self._ref(path) if path.is_file() else None


def get_blob_store() -> BlobStore:
    """Dependency returning the configured store."""
    settings = get_settings()
    return LocalBlobStore(settings.blob_root, settings.blob_view_base_url)
