"""Script to clear all test data while keeping the admin login."""

import asyncio

from enrollment.core.config import get_settings
from enrollment.core.database import DatabaseManager
from enrollment.core.init_db import init_db
from enrollment.core.log import configure_logging
from enrollment.core.maintenance import reset_data


async def reset_database():
    """Clear records, payments and photos from the database file."""
    settings = get_settings()
    configure_logging(settings)

    if not settings.db_path.exists():
        print("Database file not found. Nothing to reset.")
        return

    print(f"Database found at: {settings.db_path}")
    db_manager = DatabaseManager(settings.db_path)
    try:
        await db_manager.load()
        await init_db(db_manager, settings)

        print("Clearing records, payments, photos and the photos directory...")
        await reset_data(db_manager, settings)
    finally:
        await db_manager.dispose()

    print("Database reset completed successfully!")
    print(f"Admin login preserved (default: {settings.DEFAULT_ADMIN_USERNAME})")


if __name__ == "__main__":
    asyncio.run(reset_database())
