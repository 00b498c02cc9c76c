"""Photo slots: replacing batches, ordering and orphaned files."""

from pathlib import Path

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from enrollment.core.exceptions import ValidationError
from enrollment.photo.repository import PhotoRepository
from enrollment.photo.schemas import PhotoUpload


@pytest.fixture
def photos(session, db_manager, settings):
    return PhotoRepository(session, db_manager, settings.photos_path, settings.MAX_PHOTO_SLOTS)


def _upload(name, content=b"\xff\xd8 image"):
    return PhotoUpload(name=name, data=content)


async def test_replace_stores_files_in_order(photos, settings):
    stored = await photos.replace_all(7, [_upload("front.PNG", b"front"), _upload("back.jpg", b"back")])

    assert [p.photo_order for p in stored] == [1, 2]
    assert [p.original_filename for p in stored] == ["front.PNG", "back.jpg"]
    first = Path(stored[0].photo_path)
    assert first.parent == settings.photos_path / "7"
    assert first.name.startswith("photo_1_")
    assert first.suffix == ".png"
    assert first.read_bytes() == b"front"

    listed = await photos.get_for_record(7)
    assert [p.id for p in listed] == [p.id for p in stored]


async def test_unknown_extension_falls_back_to_jpg(photos):
    stored = await photos.replace_all(1, [_upload("scan.tiff"), _upload(None)])

    assert [Path(p.photo_path).suffix for p in stored] == [".jpg", ".jpg"]


async def test_second_batch_replaces_first(photos):
    first_batch = await photos.replace_all(3, [_upload(f"{i}.jpg") for i in range(4)])
    second_batch = await photos.replace_all(3, [_upload("a.jpg"), _upload("b.jpg")])

    listed = await photos.get_for_record(3)
    assert [p.id for p in listed] == [p.id for p in second_batch]
    assert [p.photo_order for p in listed] == [1, 2]

    # Files of the replaced rows are left on disk, unreferenced
    old_files = {Path(p.photo_path) for p in first_batch}
    assert all(path.exists() for path in old_files)
    assert set(await photos.find_orphans()) == old_files


async def test_empty_slots_keep_positions(photos):
    stored = await photos.replace_all(2, [_upload("a.jpg"), None, _upload("c.jpg")])

    assert [p.photo_order for p in stored] == [1, 3]


async def test_empty_batch_clears_photos(photos):
    await photos.replace_all(2, [_upload("a.jpg")])

    assert await photos.replace_all(2, []) == []
    assert await photos.get_for_record(2) == []


async def test_too_many_photos_rejected(photos, settings):
    with pytest.raises(ValidationError):
        await photos.replace_all(5, [_upload(f"{i}.jpg") for i in range(5)])

    assert await photos.get_for_record(5) == []
    assert not (settings.photos_path / "5").exists()


async def test_records_are_kept_apart(photos):
    await photos.replace_all(1, [_upload("one.jpg")])
    await photos.replace_all(2, [_upload("two.jpg")])

    assert [p.original_filename for p in await photos.get_for_record(1)] == ["one.jpg"]
    assert [p.original_filename for p in await photos.get_for_record(2)] == ["two.jpg"]


async def test_prune_orphans(photos):
    first_batch = await photos.replace_all(4, [_upload("a.jpg"), _upload("b.jpg")])
    second_batch = await photos.replace_all(4, [_upload("c.jpg")])

    removed = await photos.prune_orphans()

    assert set(removed) == {Path(p.photo_path) for p in first_batch}
    assert not any(path.exists() for path in removed)
    assert Path(second_batch[0].photo_path).exists()
    assert await photos.find_orphans() == []


async def test_failed_commit_removes_new_files(photos, monkeypatch):
    old = await photos.replace_all(6, [_upload("old.jpg")])
    files_before = set(photos.record_dir(6).iterdir())

    async def failing_commit(self):
        raise OperationalError("COMMIT", {}, Exception("disk I/O error"))

    monkeypatch.setattr(AsyncSession, "commit", failing_commit)
    with pytest.raises(OperationalError):
        await photos.replace_all(6, [_upload("new1.jpg"), _upload("new2.jpg")])
    monkeypatch.undo()

    assert set(photos.record_dir(6).iterdir()) == files_before
    assert [p.id for p in await photos.get_for_record(6)] == [old[0].id]
