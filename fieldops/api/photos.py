"""Photo and upload API routes"""

import logging
from typing import List, Optional
from uuid import UUID
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from fieldops.api.dependencies import get_actor
from fieldops.database import get_db
from fieldops.exceptions import InvalidInput
from fieldops.schemas.auth import AckResponse
from fieldops.schemas.photo import (
    PhotoCreate,
    PhotoResponse,
    PhotoUpdate,
    UploadUrlRequest,
    UploadUrlResponse,
)
from fieldops.services import S3Service
from fieldops.services.access_control import ActorContext
from fieldops.services.photo_service import PhotoService
from fieldops.services.s3_service import (
    FileTooLargeError,
    InvalidFileTypeError,
    S3ConnectionError,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/photos", tags=["Photos"])
uploads_router = APIRouter(prefix="/api/v1/uploads", tags=["Photos"])


@uploads_router.post("/request-url", response_model=UploadUrlResponse, status_code=status.HTTP_200_OK)
async def request_upload_url(
    request: UploadUrlRequest,
    actor: ActorContext = Depends(get_actor),
) -> UploadUrlResponse:
    """
    Generate pre-signed S3 URL for a photo or PDF upload.

    The client PUTs the file to upload_url, then creates the photo record
    with object_url and storage_key.

    Raises:
        InvalidInput: File too large, empty, or of a disallowed MIME type
        HTTPException 500: S3 unavailable
    """
    try:
        s3_service = S3Service()
    except S3ConnectionError as e:
        logger.error(f"Failed to initialize S3 service: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="S3 service unavailable",
        )

    try:
        s3_service.validate_file(request.size, request.content_type)
    except (FileTooLargeError, InvalidFileTypeError) as e:
        raise InvalidInput(str(e))

    s3_key = s3_service.generate_s3_key(str(actor.user_id), request.content_type)

    try:
        url_data = s3_service.generate_presigned_upload_url(
            s3_key=s3_key,
            mime_type=request.content_type,
        )
    except S3ConnectionError as e:
        logger.error(f"Failed to generate pre-signed URL: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to generate upload URL",
        )

    return UploadUrlResponse(
        file_type=S3Service.file_type_for(request.content_type),
        **url_data,
    )


@router.get("", response_model=List[PhotoResponse])
async def list_photos(
    project_id: Optional[UUID] = Query(None),
    board_id: Optional[UUID] = Query(None),
    contact_id: Optional[UUID] = Query(None),
    actor: ActorContext = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    """Photos newest first, filtered by project, board or contact"""
    return await PhotoService(db).list_photos(
        actor, project_id=project_id, board_id=board_id, contact_id=contact_id
    )


@router.post("", response_model=PhotoResponse, status_code=status.HTTP_201_CREATED)
async def create_photo(
    data: PhotoCreate,
    actor: ActorContext = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    return await PhotoService(db).create(actor, data)


@router.get("/{photo_id}", response_model=PhotoResponse)
async def get_photo(
    photo_id: UUID,
    actor: ActorContext = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    return await PhotoService(db).get_visible(actor, photo_id)


@router.put("/{photo_id}", response_model=PhotoResponse)
async def update_photo(
    photo_id: UUID,
    data: PhotoUpdate,
    actor: ActorContext = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    """
    Update notes, markup or the lock flag

    Only admins may lock or unlock, and a locked photo can only be edited
    by an admin.
    """
    return await PhotoService(db).update(actor, photo_id, data)


@router.delete("/{photo_id}", response_model=AckResponse)
async def delete_photo(
    photo_id: UUID,
    actor: ActorContext = Depends(get_actor),
    db: AsyncSession = Depends(get_db),
):
    await PhotoService(db).delete(actor, photo_id)
    return AckResponse(message="Photo deleted")
