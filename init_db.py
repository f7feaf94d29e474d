import os
import sqlite3 as sql
from time import perf_counter

from sqlalchemy import text
from sqlalchemy.engine import Engine

from config import DatabaseConfig
from domain.dialect import SourceDialect, ODYSSEY, get_dialect
from logging_config import setup_logging
from settings_service import SettingsService

logger = setup_logging(__name__)

TABLES = ("system", "station", "commodity", "star", "planet")


def _schema_statements(dialect: SourceDialect) -> list[str]:
    """DDL for every lookup table in the given source dialect."""
    edition = ",\n    odyssey INTEGER NOT NULL DEFAULT 1" if dialect.has_edition_column else ""
    # Legacy exports store discovery flags as "true"/"false" text
    flag = "INTEGER" if dialect.has_edition_column else "TEXT"
    return [
        f"""CREATE TABLE IF NOT EXISTS system (
    id INTEGER PRIMARY KEY,
    address INTEGER NOT NULL,
    name TEXT,
    body_count INTEGER,
    non_body_count INTEGER,
    population INTEGER,
    allegiance TEXT,
    economy TEXT,
    second_economy TEXT,
    government TEXT,
    security TEXT,
    controlling_faction TEXT,
    x REAL,
    y REAL,
    z REAL{edition}
)""",
        f"""CREATE TABLE IF NOT EXISTS station (
    id INTEGER PRIMARY KEY,
    name TEXT,
    system_address INTEGER{edition}
)""",
        f"""CREATE TABLE IF NOT EXISTS commodity (
    id INTEGER PRIMARY KEY,
    name TEXT NOT NULL,
    station_id INTEGER,
    buy_price REAL,
    sell_price REAL,
    mean_price REAL,
    stock INTEGER,
    demand INTEGER{edition}
)""",
        f"""CREATE TABLE IF NOT EXISTS star (
    id INTEGER PRIMARY KEY,
    system_address INTEGER NOT NULL,
    name TEXT,
    sub_type TEXT,
    distance_to_arrival REAL,
    solar_masses REAL,
    solar_radius REAL,
    surface_temperature REAL,
    age INTEGER,
    luminosity TEXT,
    is_main_star {flag},
    was_discovered {flag},
    was_mapped {flag}{edition}
)""",
        f"""CREATE TABLE IF NOT EXISTS planet (
    id INTEGER PRIMARY KEY,
    system_address INTEGER NOT NULL,
    name TEXT,
    sub_type TEXT,
    distance_to_arrival REAL,
    earth_masses REAL,
    radius REAL,
    gravity REAL,
    surface_temperature REAL,
    terraform_state TEXT,
    atmosphere_type TEXT,
    is_landable {flag},
    was_discovered {flag},
    was_mapped {flag}{edition}
)""",
        "CREATE INDEX IF NOT EXISTS ix_commodity_name ON commodity (name)",
        "CREATE INDEX IF NOT EXISTS ix_system_address ON system (address)",
        "CREATE INDEX IF NOT EXISTS ix_star_system ON star (system_address)",
        "CREATE INDEX IF NOT EXISTS ix_planet_system ON planet (system_address)",
    ]


def create_schema(engine: Engine, dialect: SourceDialect = ODYSSEY) -> None:
    """Create the lookup tables and indexes if they do not exist."""
    with engine.begin() as conn:
        for statement in _schema_statements(dialect):
            conn.execute(text(statement))
    logger.info(f"schema ready ({dialect.name}) on {engine.url}")


def verify_db_content(path):
    """Check if a database file has every lookup table.

    Returns False if the file doesn't exist, is 0 bytes, or lacks a table.
    Uses read-only mode to avoid accidentally creating a new file.
    """
    if not os.path.exists(path) or os.path.getsize(path) == 0:
        return False
    try:
        conn = sql.connect(f"file:{path}?mode=ro", uri=True)
        try:
            cursor = conn.execute(
                "SELECT name FROM sqlite_master WHERE type='table'"
            )
            found = {row[0] for row in cursor.fetchall()}
        finally:
            conn.close()
        return set(TABLES) <= found
    except sql.Error as e:
        logger.warning(f"DB content verification failed for {path}: {e}")
        return False


def init_db(alias: str | None = None) -> bool:
    """Create the schema for a configured database when it is missing.

    Returns True when the database holds every lookup table afterwards.
    """
    start_time = perf_counter()
    settings = SettingsService()
    dialect = get_dialect(settings.dialect_name)
    db = DatabaseConfig(alias or settings.db_alias)

    if verify_db_content(db.path):
        logger.info(f"{db.alias}: schema already present at {db.path}")
        return True

    create_schema(db.engine, dialect)
    ok = verify_db_content(db.path)
    elapsed = round((perf_counter() - start_time) * 1000, 2)
    logger.info(f"init_db({db.alias}) = {ok} in {elapsed} ms")
    return ok


if __name__ == "__main__":
    init_db()
