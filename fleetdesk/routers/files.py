"""
Attachment upload and retrieval routes.
"""
import mimetypes
from typing import List

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from fastapi.responses import Response

from fleetdesk.auth import CurrentUser, get_current_user, require_editor
from fleetdesk.errors import ValidationError
from fleetdesk.schemas.files import FileRef
from fleetdesk.services.blobstore import BlobStore, document_file_name, entity_folder, get_blob_store

router = APIRouter(prefix="/files", tags=["files"])


@router.post("/upload", response_model=FileRef, status_code=status.HTTP_201_CREATED)
async def upload_file(
    entity_type: str = Form(...),
    entity_id: str = Form(...),
    label: str = Form("documento"),
    file: UploadFile = File(...),
    blob_store: BlobStore = Depends(get_blob_store),
    current_user: CurrentUser = Depends(require_editor)
):
    """
    Store a document or photo under ``entity_type/entity_id``.
    """
    if not entity_type.strip() or not entity_id.strip():
        raise ValidationError("entity_type and entity_id are required")
    data = await file.read()
    return blob_store.upload(
        data,
        entity_folder(entity_type, entity_id),
        document_file_name(label, file.filename or "arquivo"),
    )


@router.get("/", response_model=List[FileRef])
async def list_files(
    entity_type: str,
    entity_id: str,
    blob_store: BlobStore = Depends(get_blob_store),
    current_user: CurrentUser = Depends(get_current_user)
):
    return blob_store.list(entity_folder(entity_type, entity_id))


@router.get("/download")
async def download_file(
    file_id: str,
    blob_store: BlobStore = Depends(get_blob_store),
    current_user: CurrentUser = Depends(get_current_user)
):
    data = blob_store.download(file_id)
    media_type = mimetypes.guess_type(file_id)[0] or "application/octet-stream"
    return Response(content=data, media_type=media_type)
