"""Media upload endpoint for The Vault API.

Accepts a multipart form with ``file`` and ``componentId`` and stores the file
through the configured storage adapter. The returned URL is not attached to
any component; callers persist it with a component update.
"""

from typing import Optional

import structlog
from fastapi import APIRouter, Depends, File, Form, UploadFile

from vault.api.dependencies import get_storage
from vault.api.models import ErrorResponse, UploadResponse
from vault.core.exceptions import MediaError, ValidationError
from vault.storage.base import DEFAULT_COMPONENT_ID, StorageAdapter

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/media", tags=["Media"])


@router.post(
    "/upload",
    response_model=UploadResponse,
    summary="Upload preview media",
    responses={
        400: {"model": ErrorResponse, "description": "No file uploaded"},
        500: {"model": ErrorResponse, "description": "Storage failure"},
    },
)
async def upload_media(
    file: Optional[UploadFile] = File(None, description="Image or video file"),
    component_id: str = Form(DEFAULT_COMPONENT_ID, alias="componentId"),
    storage: StorageAdapter = Depends(get_storage),
) -> UploadResponse:
    if file is None:
        raise ValidationError(["file"], "No file uploaded")

    data = await file.read()
    result = await storage.upload(
        data,
        component_id or DEFAULT_COMPONENT_ID,
        file.filename or "file",
        file.content_type or "application/octet-stream",
    )
    if not result.ok:
        raise MediaError(
            "upload",
            "Failed to upload file to storage",
            {"reason": result.error, "component_id": component_id},
        )

    return UploadResponse(url=result.url, path=result.path, media_type=result.media_type)
