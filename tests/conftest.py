"""
Pytest configuration file for the edmkts project.
This file sets up the Python path so tests can import modules from the project root,
and provides SQLite fixtures seeded with lookup tables.
"""
import sys
from pathlib import Path

import pytest
from sqlalchemy import text

# Add the project root to Python path
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from config import DatabaseConfig  # noqa: E402
from domain.dialect import ODYSSEY, LEGACY  # noqa: E402
from init_db import create_schema  # noqa: E402
from logging_config import set_level  # noqa: E402
from settings_service import clear_settings_cache  # noqa: E402


class FakeClock:
    """Monotonic clock the tests move by hand."""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def insert_rows(engine, table: str, rows: list[dict]) -> None:
    """Insert dict rows into table; every row must share the same keys."""
    if not rows:
        return
    columns = list(rows[0].keys())
    statement = text(
        f"INSERT INTO {table} ({', '.join(columns)}) "
        f"VALUES ({', '.join(':' + c for c in columns)})"
    )
    with engine.begin() as conn:
        conn.execute(statement, rows)


def seed_gold(engine, odyssey: int = 1) -> None:
    """Three stations selling gold for 100/150/200, plus their systems."""
    insert_rows(engine, "system", [
        {"address": 1001, "name": "Shinrarta Dezhra", "odyssey": odyssey},
        {"address": 1002, "name": "Sol", "odyssey": odyssey},
    ])
    insert_rows(engine, "station", [
        {"id": 1, "name": "Jameson Memorial", "system_address": 1001, "odyssey": odyssey},
        {"id": 2, "name": "Abraham Lincoln", "system_address": 1002, "odyssey": odyssey},
        {"id": 3, "name": "Daedalus", "system_address": 1002, "odyssey": odyssey},
    ])
    insert_rows(engine, "commodity", [
        {"name": "Gold", "station_id": 1, "buy_price": 100.0, "sell_price": 90.0,
         "mean_price": 120.0, "stock": 5000, "odyssey": odyssey},
        {"name": "Gold", "station_id": 2, "buy_price": 150.0, "sell_price": 140.0,
         "mean_price": 120.0, "stock": 5000, "odyssey": odyssey},
        {"name": "Gold", "station_id": 3, "buy_price": 200.0, "sell_price": 180.0,
         "mean_price": 120.0, "stock": 5000, "odyssey": odyssey},
    ])


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Reload settings.toml and drop any forced log level after each test."""
    yield
    clear_settings_cache()
    set_level(None)


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def odyssey_db(tmp_path):
    """File-backed SQLite database with the Odyssey schema."""
    db = DatabaseConfig.from_url(f"sqlite:///{tmp_path / 'odyssey.db'}")
    create_schema(db.engine, ODYSSEY)
    yield db
    DatabaseConfig.dispose_all()


@pytest.fixture
def legacy_db(tmp_path):
    """File-backed SQLite database with the legacy schema (no edition column)."""
    db = DatabaseConfig.from_url(f"sqlite:///{tmp_path / 'legacy.db'}")
    create_schema(db.engine, LEGACY)
    yield db
    DatabaseConfig.dispose_all()
