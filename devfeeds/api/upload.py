"""File upload endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, UploadFile

from devfeeds.api.dependencies import get_current_user
from devfeeds.config import get_settings
from devfeeds.models.user import User
from devfeeds.schemas.user import UploadResponse
from devfeeds.services.storage import (
    BlobStore,
    build_upload_path,
    get_blob_store,
    validate_upload,
)

router = APIRouter(prefix="/api/v1/upload", tags=["upload"])


@router.post("", response_model=UploadResponse)
async def upload_file(
    file: Annotated[UploadFile, File(description="Image or video, up to 50MB")],
    current_user: Annotated[User, Depends(get_current_user)],
    blob_store: Annotated[BlobStore, Depends(get_blob_store)],
):
    """Upload an image or video and return its public URL.

    Note: This endpoint must remain async because UploadFile.read() is async.
    """
    data = await file.read()
    content_type = validate_upload(file.content_type, len(data), get_settings().max_upload_bytes)

    path = build_upload_path(current_user.id, file.filename, content_type)
    url = await blob_store.put(data, content_type, path)
    return UploadResponse(url=url)
