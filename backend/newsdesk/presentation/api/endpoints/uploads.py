"""Image upload endpoint for featured images and author avatars."""

import logging

from fastapi import APIRouter, Depends, HTTPException, UploadFile, status

from newsdesk.application.schemas import UploadResponse
from newsdesk.domain.exceptions import ValidationError
from newsdesk.infrastructure.dependencies import get_image_storage
from newsdesk.infrastructure.storage.local_image_storage import LocalImageStorage

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Uploads"])


@router.post("/upload", response_model=UploadResponse)
async def upload_image(
    image: UploadFile,
    storage: LocalImageStorage = Depends(get_image_storage),
) -> UploadResponse:
    """Store an image and return its public URL."""
    content = await image.read()
    try:
        stored = await storage.store_image(
            content,
            filename=image.filename or "image",
            content_type=image.content_type,
        )
    except ValidationError as e:
        logger.info("Rejected upload %s: %s", image.filename, e)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return UploadResponse(url=stored.url)
