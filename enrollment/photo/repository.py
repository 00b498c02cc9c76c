"""Repository for photo attachment operations."""

import logging
import time
import uuid
from pathlib import Path
from typing import Iterable, List, Optional, Sequence
from sqlalchemy import select, delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from enrollment.core.database import DatabaseManager
from enrollment.core.exceptions import PersistenceError, ValidationError
from enrollment.photo.models import Photo
from enrollment.photo import schemas

logger = logging.getLogger(__name__)

DEFAULT_EXTENSION = ".jpg"
ALLOWED_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".bmp", ".webp"}


class PhotoRepository:
    """Repository for the ordered photo slots of each record."""

    def __init__(self, session: AsyncSession, db: DatabaseManager, photos_path: Path, max_slots: int = 4):
        """Initialize repository with database session, its manager and the photo root."""
        self.session = session
        self.db = db
        self.photos_path = Path(photos_path)
        self.max_slots = max_slots

    def record_dir(self, record_id: int) -> Path:
        """Directory holding the image files of one record."""
        return self.photos_path / str(record_id)

    @staticmethod
    def _file_name(order: int, original_name: Optional[str]) -> str:
        extension = Path(original_name or "").suffix.lower()
        if extension not in ALLOWED_EXTENSIONS:
            extension = DEFAULT_EXTENSION
        return f"photo_{order}_{int(time.time() * 1000)}_{uuid.uuid4().hex[:8]}{extension}"

    @staticmethod
    def _remove_files(paths: Iterable[Path]) -> None:
        for path in paths:
            try:
                path.unlink()
            except FileNotFoundError:
                pass
            except OSError as e:
                logger.warning("Could not remove photo file %s: %s", path, e)

    async def replace_all(
        self,
        record_id: int,
        photos: Sequence[Optional[schemas.PhotoUpload]],
    ) -> List[schemas.Photo]:
        """
        Replace every photo of a record with a new batch.

        ``photos`` holds up to ``max_slots`` entries; the position of each
        entry is its 1-based slot and ``None`` leaves that slot empty.

        New files are written first. The old rows are then swapped for the
        new ones in one transaction; if that fails the new files are
        removed again. Files of the replaced rows stay on disk.
        """
        if len(photos) > self.max_slots:
            raise ValidationError(f"At most {self.max_slots} photos can be stored per record")

        written = []
        try:
            record_dir = self.record_dir(record_id)
            record_dir.mkdir(parents=True, exist_ok=True)
            for order, photo in enumerate(photos, start=1):
                if photo is None:
                    continue
                path = record_dir / self._file_name(order, photo.name)
                path.write_bytes(photo.data)
                written.append((order, path, photo.name))
        except OSError as e:
            self._remove_files(path for _, path, _ in written)
            logger.error("Failed to write photos for record %s: %s", record_id, e)
            raise PersistenceError(f"Failed to store photos: {e}") from e

        db_photos = [
            Photo(
                user_id=record_id,
                photo_path=str(path),
                photo_order=order,
                original_filename=name,
            )
            for order, path, name in written
        ]
        try:
            await self.session.execute(delete(Photo).where(Photo.user_id == record_id))
            self.session.add_all(db_photos)
            await self.session.commit()
        except SQLAlchemyError:
            await self.session.rollback()
            self._remove_files(path for _, path, _ in written)
            raise

        await self.db.flush()
        for db_photo in db_photos:
            await self.session.refresh(db_photo)

        logger.info("Stored %s photos for record %s", len(db_photos), record_id)
        return [schemas.Photo.model_validate(p) for p in db_photos]

    async def get_for_record(self, record_id: int) -> List[schemas.Photo]:
        """Get photos of a record by slot order."""
        result = await self.session.execute(
            select(Photo)
            .where(Photo.user_id == record_id)
            .order_by(Photo.photo_order, Photo.id)
        )
        return [schemas.Photo.model_validate(p) for p in result.scalars().all()]

    async def find_orphans(self) -> List[Path]:
        """Files under the photo root that no photo row points at."""
        if not self.photos_path.exists():
            return []

        result = await self.session.execute(select(Photo.photo_path))
        referenced = {Path(path).resolve() for path in result.scalars().all()}
        return sorted(
            path for path in self.photos_path.rglob("*")
            if path.is_file() and path.resolve() not in referenced
        )

    async def prune_orphans(self) -> List[Path]:
        """Delete unreferenced photo files and return their paths."""
        orphans = await self.find_orphans()
        self._remove_files(orphans)
        if orphans:
            logger.info("Removed %s orphaned photo files", len(orphans))
        return orphans
