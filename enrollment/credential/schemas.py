"""Pydantic schemas for credential data."""

from typing import Optional
from pydantic import BaseModel

from enrollment.core.schemas import OperationResult


class Identity(BaseModel):
    """Logged-in administrator. The password hash is never part of it."""
    id: int
    username: str

    class Config:
        from_attributes = True


class LoginResponse(OperationResult):
    """Schema for login response."""
    identity: Optional[Identity] = None
