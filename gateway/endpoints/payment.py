"""Payment ledger operations."""

from enrollment.core.schemas import CreateResponse
from enrollment.payment.schemas import PaymentCreate
from gateway.deps import Context
from gateway.routing import Router

router = Router()


@router.operation("addPayment")
async def add_payment(ctx: Context, record_id: int, amount: float, payment_date: str) -> CreateResponse:
    """Append a payment to a record's ledger."""
    payment = await ctx.payments.add_payment(
        PaymentCreate(user_id=record_id, amount=amount, payment_date=payment_date)
    )
    return CreateResponse(success=True, id=payment.id)
