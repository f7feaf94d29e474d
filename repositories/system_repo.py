"""
System Repository

Reads star system attributes and the stars and planets orbiting in them.

Design:
- One query per record kind; the three are not run in one transaction
- Child rows come back in source order (by row id)
- The edition filter only applies when the source dialect has the column
"""

from typing import Any, Optional
import logging

from sqlalchemy import text

from config import DatabaseConfig
from domain.dialect import SourceDialect, ODYSSEY
from logging_config import setup_logging
from repositories.base import BaseRepository

logger = setup_logging(__name__, log_file="system_repo.log")

SYSTEM_COLUMNS = (
    "address",
    "name",
    "body_count",
    "non_body_count",
    "population",
    "allegiance",
    "economy",
    "second_economy",
    "government",
    "security",
    "controlling_faction",
    "x",
    "y",
    "z",
)

STAR_COLUMNS = (
    "name",
    "sub_type",
    "distance_to_arrival",
    "solar_masses",
    "solar_radius",
    "surface_temperature",
    "age",
    "luminosity",
    "is_main_star",
    "was_discovered",
    "was_mapped",
)

PLANET_COLUMNS = (
    "name",
    "sub_type",
    "distance_to_arrival",
    "earth_masses",
    "radius",
    "gravity",
    "surface_temperature",
    "terraform_state",
    "atmosphere_type",
    "is_landable",
    "was_discovered",
    "was_mapped",
)


class SystemRepository(BaseRepository):
    """Repository for system, star and planet rows keyed by system address."""

    def __init__(
        self,
        db: DatabaseConfig,
        dialect: SourceDialect = ODYSSEY,
        logger_instance: Optional[logging.Logger] = None,
    ):
        super().__init__(db, logger_instance or logger)
        self.dialect = dialect

    def _select(self, table: str, columns: tuple[str, ...], address_column: str, limit: Optional[int] = None):
        edition = " AND odyssey = :odyssey" if self.dialect.has_edition_column else ""
        tail = f" LIMIT {int(limit)}" if limit is not None else ""
        return text(
            f"SELECT {', '.join(columns)} FROM {table} "
            f"WHERE {address_column} = :address{edition} "
            f"ORDER BY id{tail}"
        )

    def _params(self, address: int, odyssey: bool) -> dict[str, Any]:
        params: dict[str, Any] = {"address": int(address)}
        if self.dialect.has_edition_column:
            params["odyssey"] = int(odyssey)
        return params

    def get_system_row(self, address: int, odyssey: bool = True) -> Optional[dict[str, Any]]:
        """
        Get the attribute row for one system.

        Args:
            address: System address
            odyssey: Edition filter; ignored by dialects without the column

        Returns:
            Column dict, or None if no system matches

        Raises:
            QueryFailure: the query failed
        """
        rows = self.read_records(
            self._select("system", SYSTEM_COLUMNS, "address", limit=1),
            self._params(address, odyssey),
            operation="system_row",
        )
        return rows[0] if rows else None

    def get_star_rows(self, address: int, odyssey: bool = True) -> list[dict[str, Any]]:
        """Get every star row for a system, in source order."""
        return self.read_records(
            self._select("star", STAR_COLUMNS, "system_address"),
            self._params(address, odyssey),
            operation="star_rows",
        )

    def get_planet_rows(self, address: int, odyssey: bool = True) -> list[dict[str, Any]]:
        """Get every planet row for a system, in source order."""
        return self.read_records(
            self._select("planet", PLANET_COLUMNS, "system_address"),
            self._params(address, odyssey),
            operation="planet_rows",
        )
