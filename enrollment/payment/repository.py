"""Repository for payment ledger operations."""

import logging
from typing import List, Optional
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from enrollment.core.database import DatabaseManager
from enrollment.payment.models import Payment
from enrollment.payment import schemas
from enrollment.record.models import Record

logger = logging.getLogger(__name__)

RECENT_PAYMENTS_LIMIT = 5


class PaymentRepository:
    """Repository for the append-only payment ledger."""

    def __init__(self, session: AsyncSession, db: DatabaseManager):
        """Initialize repository with database session and its manager."""
        self.session = session
        self.db = db

    async def add_payment(self, payment: schemas.PaymentCreate) -> schemas.Payment:
        """
        Append a payment to a record's ledger.

        Neither the record id nor the sign of the amount is checked, so a
        payment can point at a record that does not exist.
        """
        db_payment = Payment(
            user_id=payment.user_id,
            amount=payment.amount,
            payment_date=payment.payment_date,
        )
        self.session.add(db_payment)
        await self.db.persist(self.session)
        await self.session.refresh(db_payment)
        logger.info("Added payment %s of %s to record %s", db_payment.id, payment.amount, payment.user_id)
        return schemas.Payment.model_validate(db_payment)

    async def get_for_record(self, record_id: int) -> List[schemas.Payment]:
        """Get payments of a record, most recent payment date first."""
        result = await self.session.execute(
            select(Payment)
            .where(Payment.user_id == record_id)
            .order_by(Payment.payment_date.desc(), Payment.id.desc())
        )
        return [schemas.Payment.model_validate(p) for p in result.scalars().all()]

    async def total_received(self, record_id: int) -> float:
        """Sum of all payment amounts for a record."""
        result = await self.session.execute(
            select(func.coalesce(func.sum(Payment.amount), 0)).where(Payment.user_id == record_id)
        )
        return float(result.scalar() or 0)

    async def get_balance(self, record_id: int) -> Optional[schemas.RecordBalance]:
        """
        Get owed, received and remaining amounts for a record.

        Remaining goes negative when the record is overpaid.
        """
        result = await self.session.execute(
            select(Record.total_amount).where(Record.id == record_id)
        )
        row = result.one_or_none()
        if row is None:
            return None

        total_amount = float(row[0] or 0)
        received = await self.total_received(record_id)
        return schemas.RecordBalance(
            total_amount=total_amount,
            total_received=received,
            remaining=total_amount - received,
        )

    async def get_dashboard_stats(self) -> schemas.DashboardStats:
        """
        Get aggregate totals across all records.

        Returns:
            - Number of records
            - Sum of amounts owed
            - Sum of amounts received
            - The five most recently created payments
        """
        result = await self.session.execute(select(func.count(Record.id)))
        record_count = result.scalar() or 0

        result = await self.session.execute(select(func.coalesce(func.sum(Record.total_amount), 0)))
        total_owed = float(result.scalar() or 0)

        result = await self.session.execute(select(func.coalesce(func.sum(Payment.amount), 0)))
        total_received = float(result.scalar() or 0)

        result = await self.session.execute(
            select(Payment)
            .order_by(Payment.created_at.desc(), Payment.id.desc())
            .limit(RECENT_PAYMENTS_LIMIT)
        )
        recent_payments = [schemas.Payment.model_validate(p) for p in result.scalars().all()]

        return schemas.DashboardStats(
            record_count=record_count,
            total_owed=total_owed,
            total_received=total_received,
            recent_payments=recent_payments,
        )
