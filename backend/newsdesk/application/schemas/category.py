"""Pydantic DTOs (Data Transfer Objects) for the Category feature."""

from datetime import datetime

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class CategoryCreate(BaseModel):
    """Schema for creating a category: the slug is derived from the name."""

    name: str = Field(..., min_length=1, max_length=100, examples=["Technology"])


class CategoryResponse(BaseModel):
    """Schema returned to the client."""

    id: str
    name: str
    slug: str
    created_at: datetime

    model_config = {
        "from_attributes": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
    }
