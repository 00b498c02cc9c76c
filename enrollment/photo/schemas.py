"""Pydantic schemas for photo data validation."""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel

from enrollment.core.schemas import OperationResult


class PhotoUpload(BaseModel):
    """Schema for one image handed in by the caller."""
    name: Optional[str] = None  # Original filename, for display
    data: bytes


class PhotoInDB(BaseModel):
    """Schema for photo in database."""
    id: int
    user_id: Optional[int] = None
    photo_path: str
    photo_order: int
    original_filename: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class Photo(PhotoInDB):
    """Schema for photo response."""
    pass


class PhotoUploadResponse(OperationResult):
    """Schema for the photo replace response."""
    stored: List[Photo] = []


class PhotoListResponse(OperationResult):
    """Schema for the photo list response."""
    photos: List[Photo] = []
