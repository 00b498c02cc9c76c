"""Record operations."""

from typing import Any, Optional

from enrollment.core.schemas import CreateResponse, OperationResult
from enrollment.record import schemas
from gateway.deps import Context
from gateway.routing import Router

router = Router()


@router.operation("listRecords")
async def list_records(ctx: Context, search: Optional[str] = None) -> schemas.RecordListResponse:
    """List records, newest first, optionally filtered by a search term."""
    records = await ctx.records.search(search)
    return schemas.RecordListResponse(success=True, records=records)


@router.operation("createRecord")
async def create_record(ctx: Context, **fields: Any) -> CreateResponse:
    """Create a new record. Name and mobile are required."""
    record = await ctx.records.create(schemas.RecordCreate(**fields))
    return CreateResponse(success=True, id=record.id)


@router.operation("getRecord")
async def get_record(ctx: Context, record_id: int) -> schemas.RecordDetailResponse:
    """Get a record with its payments and balance."""
    record = await ctx.records.get_by_id(record_id)
    if record is None:
        return schemas.RecordDetailResponse(success=True, record=None)

    payments = ctx.payments
    balance = await payments.get_balance(record_id)
    return schemas.RecordDetailResponse(
        success=True,
        record=record,
        payments=await payments.get_for_record(record_id),
        total_received=balance.total_received,
        remaining=balance.remaining,
    )


@router.operation("updateRecord")
async def update_record(ctx: Context, record_id: int, **fields: Any) -> OperationResult:
    """Replace every field of a record."""
    record = await ctx.records.update(record_id, schemas.RecordUpdate(**fields))
    if record is None:
        return OperationResult(success=False, message="Record not found")
    return OperationResult(success=True)
