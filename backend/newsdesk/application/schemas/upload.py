"""Pydantic DTOs for image uploads."""

from pydantic import BaseModel


class UploadResponse(BaseModel):
    """Public URL of a stored image."""

    url: str
