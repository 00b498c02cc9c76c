"""Core classes and mixins for the embedded database and its backing file"""

import asyncio
import logging
import os
import sqlite3
from contextlib import asynccontextmanager
from datetime import datetime
from pathlib import Path
from typing import Optional, cast
from typing import Callable, AsyncContextManager

import aiosqlite
from sqlalchemy import Column, DateTime, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

from enrollment.core.exceptions import PersistenceError

logger = logging.getLogger(__name__)
Base = declarative_base()
SessionMaker = Callable[[], AsyncContextManager[AsyncSession]]


def created_at_column() -> Column:
    """Creation timestamp, filled by the engine (UTC) on insert."""
    return Column(
        DateTime,
        default=func.current_timestamp(),
        server_default=func.current_timestamp(),
    )


class DatabaseManager:
    """
    Owner of the single in-memory database and of the file it is saved to.

    The whole database lives in one SQLite connection shared by every
    session. ``load`` fills it from the file once at start; ``flush`` writes
    the complete database back after each mutating call.
    """

    def __init__(self, db_path: Path, engine: Optional[AsyncEngine] = None) -> None:
        """Initialize DatabaseManager with optional engine for testing."""
        self.db_path = Path(db_path)
        self.engine = engine or self._create_engine()
        self._flush_lock = asyncio.Lock()

    def _create_engine(self) -> AsyncEngine:
        """Create async engine for the in-memory SQLite database."""
        return create_async_engine(
            "sqlite+aiosqlite://",
            echo=False,  # Set to True for SQL query logging
            poolclass=StaticPool,  # One connection, so one database
            connect_args={"check_same_thread": False},
        )

    def get_session(self) -> SessionMaker:
        """Returns SessionMaker for database sessions."""
        if not self.engine:
            raise ValueError("Database engine wasn't initialized")

        return cast(
            SessionMaker,
            sessionmaker(
                self.engine,
                class_=AsyncSession,
                expire_on_commit=False,
                autocommit=False,
                autoflush=False,
            ),
        )

    @asynccontextmanager
    async def get_db(self) -> AsyncContextManager[AsyncSession]:
        """Get database session context manager."""
        async_session = self.get_session()
        async with async_session() as session:
            try:
                yield session
            finally:
                await session.close()

    async def load(self) -> None:
        """
        Fill the in-memory database from the backing file.

        A missing file means a fresh, empty database. A file that SQLite
        cannot read is moved aside to ``<name>.corrupt-<timestamp>`` before
        starting empty, so the next flush does not overwrite it.
        """
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            if not self.db_path.exists():
                logger.info("Creating new database at %s", self.db_path)
                return

            logger.info("Loading existing database from %s", self.db_path)
            try:
                async with aiosqlite.connect(self.db_path, check_same_thread=False) as source:
                    async with self.engine.connect() as conn:
                        raw = await conn.get_raw_connection()
                        await source.backup(raw.driver_connection)
            except sqlite3.DatabaseError as e:
                corrupt_path = self.db_path.with_name(
                    f"{self.db_path.name}.corrupt-{datetime.now():%Y%m%d%H%M%S}"
                )
                logger.error("Error loading database, moving it to %s: %s", corrupt_path, e)
                os.replace(self.db_path, corrupt_path)
        except OSError as e:
            logger.error("Failed to read database file %s: %s", self.db_path, e)
            raise PersistenceError(f"Failed to load database: {e}") from e

    async def flush(self) -> None:
        """
        Write the whole database to the backing file.

        The snapshot goes to a temporary sibling first and then replaces the
        file in one rename. If this raises, memory already holds the
        mutation and the file does not, until the next successful flush.
        """
        tmp_path = self.db_path.with_name(self.db_path.name + ".tmp")
        async with self._flush_lock:
            try:
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
                if tmp_path.exists():
                    tmp_path.unlink()
                async with self.engine.connect() as conn:
                    raw = await conn.get_raw_connection()
                    async with aiosqlite.connect(tmp_path, check_same_thread=False) as target:
                        await raw.driver_connection.backup(target)
                os.replace(tmp_path, self.db_path)
            except (OSError, sqlite3.Error, SQLAlchemyError) as e:
                logger.error("Failed to write database to %s: %s", self.db_path, e)
                raise PersistenceError(f"Failed to save database: {e}") from e
        logger.debug("Database saved to %s", self.db_path)

    async def persist(self, session: AsyncSession) -> None:
        """Commit the session's unit of work, then flush it to disk."""
        await session.commit()
        await self.flush()

    async def dispose(self) -> None:
        """Close the connection. The in-memory state is gone afterwards."""
        await self.engine.dispose()
