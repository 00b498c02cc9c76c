"""Ordered schema migrations, tracked in the schema_version table."""

import logging
from typing import Callable, List, NamedTuple

from sqlalchemy import Column, Integer, Text, inspect, select, func, text
from sqlalchemy.engine import Connection

from enrollment.core.database import Base, created_at_column
# Import all models to ensure they're registered
from enrollment.record.models import Record
from enrollment.payment.models import Payment
from enrollment.photo.models import Photo
from enrollment.credential.models import Credential

logger = logging.getLogger(__name__)


class SchemaVersion(Base):
    """One row per applied migration step."""
    __tablename__ = "schema_version"

    version = Column(Integer, primary_key=True, autoincrement=False)
    description = Column(Text)
    applied_at = created_at_column()


class Migration(NamedTuple):
    version: int
    description: str
    apply: Callable[[Connection], bool]


def _create_tables(conn: Connection) -> bool:
    """Create any of the four data tables that is missing."""
    tables = [Record.__table__, Payment.__table__, Photo.__table__, Credential.__table__]
    existing = set(inspect(conn).get_table_names())
    missing = [table for table in tables if table.name not in existing]
    Base.metadata.create_all(conn, tables=missing)
    return bool(missing)


# SQLite cannot add a column with a non-constant default, so created_at
# arrives without one; the model fills it on insert.
PHOTO_COLUMNS = {
    "original_filename": "TEXT",
    "created_at": "DATETIME",
}


def _add_photo_columns(conn: Connection) -> bool:
    """Add the columns older user_photos tables were created without."""
    columns = {column["name"] for column in inspect(conn).get_columns("user_photos")}
    added = False
    for name, ddl in PHOTO_COLUMNS.items():
        if name not in columns:
            conn.execute(text(f"ALTER TABLE user_photos ADD COLUMN {name} {ddl}"))
            logger.info("Added column user_photos.%s", name)
            added = True
    return added


MIGRATIONS = [
    Migration(1, "create records, payments, photos and credentials tables", _create_tables),
    Migration(2, "add original filename and creation time to photos", _add_photo_columns),
]


def current_version(conn: Connection) -> int:
    """Highest applied migration, 0 for a database that has none."""
    return conn.execute(select(func.max(SchemaVersion.version))).scalar() or 0


def run_migrations(conn: Connection) -> List[int]:
    """
    Apply every migration newer than the recorded version.

    Each step looks at the live schema and only changes what is missing,
    so a database created before version tracking upgrades cleanly.
    """
    SchemaVersion.__table__.create(conn, checkfirst=True)
    version = current_version(conn)

    applied = []
    for migration in MIGRATIONS:
        if migration.version <= version:
            continue
        changed = migration.apply(conn)
        conn.execute(
            SchemaVersion.__table__.insert().values(
                version=migration.version,
                description=migration.description,
            )
        )
        logger.info(
            "Schema migration %s (%s) %s",
            migration.version, migration.description, "applied" if changed else "already in place",
        )
        applied.append(migration.version)
    return applied
