"""Administrative operations run outside the application."""

import logging
import shutil
from pathlib import Path
from typing import List

from sqlalchemy import delete, text

from enrollment.core.config import Settings
from enrollment.core.database import DatabaseManager
from enrollment.core.init_db import ensure_default_credential
from enrollment.payment.models import Payment
from enrollment.photo.models import Photo
from enrollment.photo.repository import PhotoRepository
from enrollment.record.models import Record

logger = logging.getLogger(__name__)

CLEARED_TABLES = ("users", "user_photos", "payments")


async def reset_data(db_manager: DatabaseManager, settings: Settings) -> None:
    """
    Clear all records, payments and photos while keeping the logins.

    Autoincrement counters of the cleared tables start over, the photo
    tree is removed and the default admin login is recreated if missing.
    """
    async with db_manager.get_db() as session:
        await session.execute(delete(Photo))
        await session.execute(delete(Payment))
        await session.execute(delete(Record))
        await session.execute(
            text("DELETE FROM sqlite_sequence WHERE name IN ('users', 'user_photos', 'payments')")
        )
        await session.commit()
    logger.info("Cleared tables: %s", ", ".join(CLEARED_TABLES))

    photos_path = settings.photos_path
    if photos_path.exists():
        shutil.rmtree(photos_path)
        logger.info("Removed photos directory %s", photos_path)

    await ensure_default_credential(db_manager, settings)
    await db_manager.flush()


async def prune_orphan_photos(db_manager: DatabaseManager, settings: Settings) -> List[Path]:
    """Delete photo files no longer referenced by any photo row."""
    async with db_manager.get_db() as session:
        repo = PhotoRepository(session, db_manager, settings.photos_path, settings.MAX_PHOTO_SLOTS)
        return await repo.prune_orphans()
