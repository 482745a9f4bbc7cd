"""
Pydantic schemas for building listings and their images.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List
from datetime import datetime


class ImageResponse(BaseModel):
    """Image metadata; the bytes are served by the images endpoint."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Image ID")
    name: Optional[str] = Field(None, description="Uploaded file name")
    content_type: Optional[str] = Field(None, description="Declared MIME type")
    size: int = Field(..., description="Size in bytes")
    preview_image: bool = Field(..., description="Whether this is the facade/preview photo")


class BuildingResponse(BaseModel):
    """Building listing with image metadata."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Building ID")
    name: str = Field(..., description="Premises name", examples=["Loft"])
    location: str = Field(..., description="Premises location", examples=["Moscow, Tverskaya 1"])
    price: int = Field(..., description="Rental price", examples=[50000])
    approved: bool = Field(..., description="Whether an administrator approved the listing")
    user_id: int = Field(..., description="Owner ID")
    preview_image_id: Optional[int] = Field(None, description="ID of the preview image")
    images: List[ImageResponse] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class BuildingListResponse(BaseModel):
    """Unpaginated listing result."""

    buildings: List[BuildingResponse]
    total: int = Field(..., description="Number of buildings returned")
