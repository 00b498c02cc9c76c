"""Pydantic schemas for payment data validation."""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, field_validator

from enrollment.core.schemas import OperationResult


class PaymentBase(BaseModel):
    """Base payment schema."""
    user_id: int
    amount: float
    payment_date: str


class PaymentCreate(PaymentBase):
    """Schema for payment creation."""

    @field_validator('payment_date')
    @classmethod
    def validate_payment_date(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError('Payment date is required')
        return v


class PaymentInDB(PaymentBase):
    """Schema for payment in database."""
    id: int
    user_id: Optional[int] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class Payment(PaymentInDB):
    """Schema for payment response."""
    pass


class RecordBalance(BaseModel):
    """Schema for the amounts owed and received on one record."""
    total_amount: float
    total_received: float
    remaining: float


class DashboardStats(BaseModel):
    """Schema for aggregate totals across all records."""
    record_count: int
    total_owed: float
    total_received: float
    recent_payments: List[Payment]


class DashboardResponse(OperationResult):
    """Schema for the dashboard totals response."""
    record_count: int = 0
    total_owed: float = 0
    total_received: float = 0
    recent_payments: List[Payment] = []
