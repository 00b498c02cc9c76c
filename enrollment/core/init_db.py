"""Database initialization: schema, default login and first save."""

import logging

from enrollment.core.config import Settings
from enrollment.core.database import DatabaseManager
from enrollment.core.migrations import run_migrations
from enrollment.credential.repository import CredentialRepository

logger = logging.getLogger(__name__)


async def ensure_default_credential(db_manager: DatabaseManager, settings: Settings) -> bool:
    """Insert the default admin login when no credential exists. Does not flush."""
    async with db_manager.get_db() as session:
        repo = CredentialRepository(session, db_manager)
        if await repo.count() > 0:
            return False

        logger.info("Creating default admin user...")
        await repo.add(settings.DEFAULT_ADMIN_USERNAME, settings.DEFAULT_ADMIN_PASSWORD)
        await session.commit()
        return True


async def init_db(db_manager: DatabaseManager, settings: Settings) -> None:
    """
    Bring the loaded database up to the current schema.

    Safe to call on every start: migrations already applied are skipped and
    the default credential is only added to an empty credential table.
    Writes the database to disk once at the end.
    """
    async with db_manager.engine.begin() as conn:
        applied = await conn.run_sync(run_migrations)
    if applied:
        logger.info("Applied schema migrations: %s", applied)

    await ensure_default_credential(db_manager, settings)
    await db_manager.flush()
    logger.info("Database initialization completed successfully")


async def open_database(settings: Settings) -> DatabaseManager:
    """Load the database file named by the settings and initialize it."""
    db_manager = DatabaseManager(settings.db_path)
    try:
        await db_manager.load()
        await init_db(db_manager, settings)
    except Exception:
        await db_manager.dispose()
        raise
    return db_manager
