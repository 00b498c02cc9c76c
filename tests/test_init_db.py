"""Schema creation, migrations and the default credential."""

import aiosqlite
from sqlalchemy import inspect, select

from enrollment.core.database import DatabaseManager
from enrollment.core.init_db import init_db
from enrollment.core.migrations import MIGRATIONS, SchemaVersion
from enrollment.credential.repository import CredentialRepository
from enrollment.photo.repository import PhotoRepository


def _describe_schema(conn):
    inspector = inspect(conn)
    return {
        table: sorted(column["name"] for column in inspector.get_columns(table))
        for table in inspector.get_table_names()
    }


async def _schema(db_manager):
    async with db_manager.engine.connect() as conn:
        return await conn.run_sync(_describe_schema)


async def test_creates_all_tables(db_manager):
    schema = await _schema(db_manager)

    for table in ("users", "payments", "user_photos", "admin_users", "schema_version"):
        assert table in schema
    assert "original_filename" in schema["user_photos"]
    assert "created_at" in schema["user_photos"]


async def test_init_db_is_idempotent(settings, db_manager):
    before = await _schema(db_manager)

    await init_db(db_manager, settings)

    assert await _schema(db_manager) == before
    async with db_manager.get_db() as session:
        assert await CredentialRepository(session, db_manager).count() == 1
        result = await session.execute(select(SchemaVersion.version).order_by(SchemaVersion.version))
        assert list(result.scalars().all()) == [m.version for m in MIGRATIONS]


async def test_init_db_is_idempotent_across_reload(settings, db_manager):
    await db_manager.dispose()

    reloaded = DatabaseManager(settings.db_path)
    try:
        await reloaded.load()
        await init_db(reloaded, settings)
        async with reloaded.get_db() as session:
            assert await CredentialRepository(session, reloaded).count() == 1
    finally:
        await reloaded.dispose()


async def test_upgrades_legacy_photo_table(settings):
    async with aiosqlite.connect(settings.db_path) as conn:
        await conn.execute(
            "CREATE TABLE user_photos ("
            "id INTEGER PRIMARY KEY AUTOINCREMENT, "
            "user_id INTEGER, "
            "photo_path TEXT NOT NULL, "
            "photo_order INTEGER NOT NULL)"
        )
        await conn.execute(
            "INSERT INTO user_photos (user_id, photo_path, photo_order) VALUES (1, '/old/photo.jpg', 1)"
        )
        await conn.commit()

    manager = DatabaseManager(settings.db_path)
    try:
        await manager.load()
        await init_db(manager, settings)

        schema = await _schema(manager)
        assert "original_filename" in schema["user_photos"]
        assert "created_at" in schema["user_photos"]
        assert "users" in schema

        async with manager.get_db() as session:
            photos = await PhotoRepository(session, manager, settings.photos_path).get_for_record(1)
            assert [p.photo_path for p in photos] == ["/old/photo.jpg"]
            assert photos[0].original_filename is None
            assert await CredentialRepository(session, manager).count() == 1
    finally:
        await manager.dispose()


async def test_default_credential_uses_settings(settings, db_manager):
    async with db_manager.get_db() as session:
        identity = await CredentialRepository(session, db_manager).authenticate(
            settings.DEFAULT_ADMIN_USERNAME, settings.DEFAULT_ADMIN_PASSWORD
        )
    assert identity.username == "admin"
