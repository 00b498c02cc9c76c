"""Repository for record operations."""

import logging
from typing import List, Optional
from sqlalchemy import select, or_, func
from sqlalchemy.ext.asyncio import AsyncSession

from enrollment.core.database import DatabaseManager
from enrollment.record.models import Record
from enrollment.record.schemas import RecordCreate, RecordUpdate, Record as RecordSchema

logger = logging.getLogger(__name__)

# Columns matched by search, as the record list filters them
SEARCH_COLUMNS = (Record.name, Record.mobile, Record.father_name, Record.id_number)


class RecordRepository:
    """Repository for record operations."""

    def __init__(self, session: AsyncSession, db: DatabaseManager):
        """Initialize repository with database session and its manager."""
        self.session = session
        self.db = db

    async def create(self, record: RecordCreate) -> RecordSchema:
        """Create a new record."""
        db_record = Record(**record.model_dump())
        self.session.add(db_record)
        await self.db.persist(self.session)
        await self.session.refresh(db_record)
        logger.info("Created record with ID: %s", db_record.id)
        return RecordSchema.model_validate(db_record)

    async def get_by_id(self, record_id: int) -> Optional[RecordSchema]:
        """Get record by ID."""
        result = await self.session.execute(
            select(Record).where(Record.id == record_id)
        )
        db_record = result.scalar_one_or_none()
        return RecordSchema.model_validate(db_record) if db_record else None

    async def get_all(self) -> List[RecordSchema]:
        """Get all records, newest first."""
        result = await self.session.execute(
            select(Record).order_by(Record.created_at.desc(), Record.id.desc())
        )
        return [RecordSchema.model_validate(r) for r in result.scalars().all()]

    async def search(self, term: Optional[str]) -> List[RecordSchema]:
        """
        Get records whose name, mobile, father name or ID number
        contains ``term``, case-insensitive. Blank term returns all.
        """
        if not term or not term.strip():
            return await self.get_all()

        pattern = f"%{term.strip().lower()}%"
        query = (
            select(Record)
            .where(or_(*(func.lower(column).like(pattern) for column in SEARCH_COLUMNS)))
            .order_by(Record.created_at.desc(), Record.id.desc())
        )
        result = await self.session.execute(query)
        return [RecordSchema.model_validate(r) for r in result.scalars().all()]

    async def update(self, record_id: int, record: RecordUpdate) -> Optional[RecordSchema]:
        """Replace every mutable field of a record by ID."""
        result = await self.session.execute(
            select(Record).where(Record.id == record_id)
        )
        db_record = result.scalar_one_or_none()
        if not db_record:
            return None

        for field, value in record.model_dump().items():
            setattr(db_record, field, value)

        await self.db.persist(self.session)
        await self.session.refresh(db_record)
        logger.info("Updated record with ID: %s", record_id)
        return RecordSchema.model_validate(db_record)

    async def count(self) -> int:
        """Count all records."""
        result = await self.session.execute(select(func.count(Record.id)))
        return result.scalar() or 0
