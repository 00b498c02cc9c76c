"""Resetting the data store and pruning photo files."""

from sqlalchemy import select

from enrollment.core.database import DatabaseManager
from enrollment.core.maintenance import prune_orphan_photos, reset_data
from enrollment.credential.models import Credential
from enrollment.credential.repository import CredentialRepository
from enrollment.payment.repository import PaymentRepository
from enrollment.payment.schemas import PaymentCreate
from enrollment.photo.repository import PhotoRepository
from enrollment.photo.schemas import PhotoUpload
from enrollment.record.repository import RecordRepository
from enrollment.record.schemas import RecordCreate


async def _populate(db_manager, settings):
    async with db_manager.get_db() as session:
        records = RecordRepository(session, db_manager)
        first = await records.create(RecordCreate(name="Ravi", mobile="1", total_amount=100))
        second = await records.create(RecordCreate(name="Meena", mobile="2", total_amount=200))
        await PaymentRepository(session, db_manager).add_payment(
            PaymentCreate(user_id=first.id, amount=50, payment_date="2024-01-01")
        )
        photos = PhotoRepository(session, db_manager, settings.photos_path)
        await photos.replace_all(second.id, [PhotoUpload(name="a.jpg", data=b"a")])
    return first, second


async def test_reset_clears_data_and_keeps_login(settings, db_manager):
    await _populate(db_manager, settings)
    async with db_manager.get_db() as session:
        await CredentialRepository(session, db_manager).set_password("admin", "changed")

    await reset_data(db_manager, settings)

    assert not settings.photos_path.exists()
    async with db_manager.get_db() as session:
        stats = await PaymentRepository(session, db_manager).get_dashboard_stats()
        assert stats.record_count == 0
        assert stats.total_received == 0
        assert stats.recent_payments == []
        assert await PhotoRepository(session, db_manager, settings.photos_path).get_for_record(2) == []

        # Existing logins survive with their current password
        identity = await CredentialRepository(session, db_manager).authenticate("admin", "changed")
        assert identity.id == 1


async def test_reset_restarts_ids(settings, db_manager):
    await _populate(db_manager, settings)

    await reset_data(db_manager, settings)

    async with db_manager.get_db() as session:
        created = await RecordRepository(session, db_manager).create(RecordCreate(name="New", mobile="3"))
        payment = await PaymentRepository(session, db_manager).add_payment(
            PaymentCreate(user_id=created.id, amount=1, payment_date="2024-02-01")
        )
    assert created.id == 1
    assert payment.id == 1


async def test_reset_recreates_missing_login(settings, db_manager):
    async with db_manager.get_db() as session:
        credential = (await session.execute(select(Credential))).scalar_one()
        await session.delete(credential)
        await session.commit()

    await reset_data(db_manager, settings)

    async with db_manager.get_db() as session:
        identity = await CredentialRepository(session, db_manager).authenticate(
            settings.DEFAULT_ADMIN_USERNAME, settings.DEFAULT_ADMIN_PASSWORD
        )
    assert identity.username == settings.DEFAULT_ADMIN_USERNAME


async def test_reset_is_saved(settings, db_manager):
    await _populate(db_manager, settings)
    await reset_data(db_manager, settings)
    await db_manager.dispose()

    reloaded = DatabaseManager(settings.db_path)
    try:
        await reloaded.load()
        async with reloaded.get_db() as session:
            assert await RecordRepository(session, reloaded).count() == 0
            assert await CredentialRepository(session, reloaded).count() == 1
    finally:
        await reloaded.dispose()


async def test_prune_orphan_photos(settings, db_manager):
    async with db_manager.get_db() as session:
        photos = PhotoRepository(session, db_manager, settings.photos_path)
        old = await photos.replace_all(1, [PhotoUpload(name="old.jpg", data=b"old")])
        await photos.replace_all(1, [PhotoUpload(name="new.jpg", data=b"new")])

    removed = await prune_orphan_photos(db_manager, settings)

    assert [str(path) for path in removed] == [old[0].photo_path]
    assert await prune_orphan_photos(db_manager, settings) == []
