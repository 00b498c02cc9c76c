"""Repository for administrative credentials."""

import logging
from typing import Optional
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from enrollment.core.database import DatabaseManager
from enrollment.core.exceptions import AuthError
from enrollment.core.security import get_password_hash, needs_rehash, verify_password, DUMMY_PASSWORD_HASH
from enrollment.credential.models import Credential
from enrollment.credential.schemas import Identity

logger = logging.getLogger(__name__)


class CredentialRepository:
    """Repository for credential operations."""

    def __init__(self, session: AsyncSession, db: DatabaseManager):
        """Initialize repository with database session and its manager."""
        self.session = session
        self.db = db

    async def get_by_username(self, username: str) -> Optional[Credential]:
        """Get credential by username."""
        result = await self.session.execute(
            select(Credential).where(Credential.username == username)
        )
        return result.scalar_one_or_none()

    async def count(self) -> int:
        """Count stored credentials."""
        result = await self.session.execute(select(func.count(Credential.id)))
        return result.scalar() or 0

    async def add(self, username: str, password: str) -> Identity:
        """Stage a new credential in the session without committing."""
        credential = Credential(username=username, password_hash=get_password_hash(password))
        self.session.add(credential)
        await self.session.flush()
        return Identity.model_validate(credential)

    async def create(self, username: str, password: str) -> Identity:
        """Create a credential with a freshly salted hash."""
        identity = await self.add(username, password)
        await self.db.persist(self.session)
        logger.info("Created credential for %s", username)
        return identity

    async def set_password(self, username: str, password: str) -> bool:
        """Replace the password of an existing credential."""
        credential = await self.get_by_username(username)
        if not credential:
            return False

        credential.password_hash = get_password_hash(password)
        await self.db.persist(self.session)
        logger.info("Changed password for %s", username)
        return True

    async def authenticate(self, username: str, password: str) -> Identity:
        """
        Check a login attempt.

        Unknown username and wrong password raise the same AuthError, and
        both run one hash comparison. A bcrypt hash left by an older
        database is replaced by the current format after a good login.
        """
        credential = await self.get_by_username(username)
        if credential is None:
            verify_password(password, DUMMY_PASSWORD_HASH)
            logger.warning("Failed login attempt")
            raise AuthError()

        if not verify_password(password, credential.password_hash):
            logger.warning("Failed login attempt")
            raise AuthError()

        if needs_rehash(credential.password_hash):
            credential.password_hash = get_password_hash(password)
            await self.db.persist(self.session)
            logger.info("Upgraded password hash of credential %s", credential.id)

        logger.info("Login succeeded for credential %s", credential.id)
        return Identity.model_validate(credential)
