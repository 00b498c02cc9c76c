"""Script to delete photo files left behind by replaced photo batches."""

import asyncio

from enrollment.core.config import get_settings
from enrollment.core.init_db import open_database
from enrollment.core.log import configure_logging
from enrollment.core.maintenance import prune_orphan_photos


async def prune_photos():
    """Remove unreferenced files from the photos directory."""
    settings = get_settings()
    configure_logging(settings)

    db_manager = await open_database(settings)
    try:
        removed = await prune_orphan_photos(db_manager, settings)
    finally:
        await db_manager.dispose()

    for path in removed:
        print(f"Removed {path}")
    print(f"Pruned {len(removed)} orphaned photo files.")


if __name__ == "__main__":
    asyncio.run(prune_photos())
