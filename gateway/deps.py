"""Per-operation dependencies handed to every endpoint."""

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from enrollment.core.config import Settings
from enrollment.core.database import DatabaseManager
from enrollment.credential.repository import CredentialRepository
from enrollment.payment.repository import PaymentRepository
from enrollment.photo.repository import PhotoRepository
from enrollment.record.repository import RecordRepository


@dataclass
class Context:
    """Session of the running operation plus the shared database manager."""
    session: AsyncSession
    db: DatabaseManager
    settings: Settings

    @property
    def credentials(self) -> CredentialRepository:
        return CredentialRepository(self.session, self.db)

    @property
    def records(self) -> RecordRepository:
        return RecordRepository(self.session, self.db)

    @property
    def payments(self) -> PaymentRepository:
        return PaymentRepository(self.session, self.db)

    @property
    def photos(self) -> PhotoRepository:
        return PhotoRepository(
            self.session, self.db, self.settings.photos_path, self.settings.MAX_PHOTO_SLOTS
        )
