"""Application configuration and router setup."""

import asyncio
import logging
from typing import Any, Optional

import pydantic

from enrollment.core.config import Settings, get_settings
from enrollment.core.database import DatabaseManager
from enrollment.core.exceptions import AuthError, PersistenceError, ValidationError
from enrollment.core.init_db import open_database
from enrollment.core.log import configure_logging
from enrollment.core.schemas import OperationResult
from gateway.deps import Context
from gateway.endpoints import auth, dashboard, payment, photo, record
from gateway.routing import Router

logger = logging.getLogger(__name__)


def _validation_message(error: pydantic.ValidationError) -> str:
    """Turn pydantic errors into one readable line."""
    parts = []
    for item in error.errors():
        field = ".".join(str(loc) for loc in item.get("loc", ()))
        message = item.get("msg", "").removeprefix("Value error, ")
        parts.append(f"{field}: {message}" if field else message)
    return "; ".join(parts)


def failure_response(operation: str, error: Exception) -> OperationResult:
    """Log an operation failure and convert it to a failure result."""
    if isinstance(error, pydantic.ValidationError):
        message = _validation_message(error)
        logger.info("Validation failed in %s: %s", operation, message)
    elif isinstance(error, (ValidationError, AuthError)):
        message = str(error)
        logger.info("%s rejected: %s", operation, message)
    elif isinstance(error, PersistenceError):
        message = str(error)
        logger.error("Persistence failure in %s: %s", operation, message, exc_info=error)
    else:
        message = str(error) or error.__class__.__name__
        logger.exception("Unexpected error in %s", operation)
    return OperationResult(success=False, message=message)


class Application:
    """
    The core as seen by the presentation layer.

    One database manager is opened at startup and shared by all
    operations. ``dispatch`` runs one operation at a time.
    """

    def __init__(self, settings: Settings, router: Router):
        self.settings = settings
        self.router = router
        self.db_manager: Optional[DatabaseManager] = None
        self._lock = asyncio.Lock()

    async def startup(self) -> None:
        """Configure logging, load the database file and ensure its schema."""
        configure_logging(self.settings)
        logger.info("Application startup")
        self.db_manager = await open_database(self.settings)

    async def shutdown(self) -> None:
        """Release the database."""
        if self.db_manager is not None:
            await self.db_manager.dispose()
            self.db_manager = None
            logger.info("Application shutdown")

    async def __aenter__(self) -> "Application":
        await self.startup()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.shutdown()

    async def dispatch(self, operation: str, /, **kwargs: Any) -> OperationResult:
        """
        Run the operation registered under ``operation``.

        The operation name is positional-only, so record fields such as
        ``name`` pass through ``kwargs`` untouched.

        Never raises: any failure comes back as
        ``OperationResult(success=False, message=...)``.
        """
        handler = self.router.operations.get(operation)
        if handler is None:
            logger.warning("Unknown operation: %s", operation)
            return OperationResult(success=False, message=f"Unknown operation: {operation}")
        if self.db_manager is None:
            return OperationResult(success=False, message="Database not initialized")

        async with self._lock:
            try:
                async with self.db_manager.get_db() as session:
                    ctx = Context(session=session, db=self.db_manager, settings=self.settings)
                    return await handler(ctx, **kwargs)
            except Exception as e:
                return failure_response(operation, e)


def create_app(settings: Optional[Settings] = None) -> Application:
    """Create and configure the application."""
    router = Router()
    router.include_router(auth.router)
    router.include_router(dashboard.router)
    router.include_router(record.router)
    router.include_router(payment.router)
    router.include_router(photo.router)

    return Application(settings or get_settings(), router)
