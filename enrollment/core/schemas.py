"""Core schemas for the application."""

from typing import Optional
from pydantic import BaseModel


class OperationResult(BaseModel):
    """Tagged result every gateway operation returns."""
    success: bool
    message: Optional[str] = None


class CreateResponse(OperationResult):
    """Schema for an operation that inserts one row."""
    id: Optional[int] = None
