"""Shared fixtures: every test gets its own database file and photo tree."""

import pytest

from enrollment.core.config import Settings
from enrollment.core.database import DatabaseManager
from enrollment.core.init_db import init_db
from gateway.router import create_app


@pytest.fixture
def settings(tmp_path):
    return Settings(DATA_DIR=tmp_path)


@pytest.fixture
async def db_manager(settings):
    manager = DatabaseManager(settings.db_path)
    await manager.load()
    await init_db(manager, settings)
    yield manager
    await manager.dispose()


@pytest.fixture
async def session(db_manager):
    async with db_manager.get_db() as session:
        yield session


@pytest.fixture
async def app(settings):
    application = create_app(settings)
    async with application:
        yield application


@pytest.fixture
def record_data():
    return {
        "name": "Ravi Kumar",
        "mobile": "9876543210",
        "father_name": "Suresh Kumar",
        "father_mobile": "9876500000",
        "relative_name": "Anil Kumar",
        "relative_mobile": "9876511111",
        "spouse_name": "Priya",
        "spouse_mobile": "9876522222",
        "id_number": "ID-001",
        "b_number": "B-17",
        "s_id_number": "S-42",
        "v_number": "V-9",
        "admission_date": "2024-01-15",
        "validity_date": "2025-01-14",
        "total_amount": 15000.0,
    }
