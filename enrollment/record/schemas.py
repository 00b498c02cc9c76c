"""Pydantic schemas for record data validation."""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, field_validator

from enrollment.core.schemas import OperationResult
from enrollment.payment.schemas import Payment


class RecordBase(BaseModel):
    """Base record schema."""
    name: str
    mobile: str
    father_name: Optional[str] = None
    father_mobile: Optional[str] = None
    relative_name: Optional[str] = None
    relative_mobile: Optional[str] = None
    spouse_name: Optional[str] = None
    spouse_mobile: Optional[str] = None
    id_number: Optional[str] = None
    b_number: Optional[str] = None
    s_id_number: Optional[str] = None
    v_number: Optional[str] = None
    admission_date: Optional[str] = None
    validity_date: Optional[str] = None
    total_amount: float = 0


class RecordCreate(RecordBase):
    """Schema for record creation."""

    @field_validator('name', 'mobile')
    @classmethod
    def validate_required(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError('Name and Mobile are required fields')
        return v


class RecordUpdate(RecordCreate):
    """
    Schema for record update.

    Update is a full replace: a field left out here is written as its
    default, not kept from the stored record.
    """
    pass


class RecordInDB(RecordBase):
    """Schema for record in database."""
    id: int
    total_amount: Optional[float] = 0
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class Record(RecordInDB):
    """Schema for record response."""
    pass


class RecordListResponse(OperationResult):
    """Schema for the record list response."""
    records: List[Record] = []


class RecordDetailResponse(OperationResult):
    """
    Schema for one record with its ledger.

    ``record`` is None when no record has the requested id.
    """
    record: Optional[Record] = None
    payments: List[Payment] = []
    total_received: float = 0
    remaining: float = 0
