"""
Aggregation Service

Turns repository rows into Commodity and System domain objects.

Design Principles:
1. Dependency Injection - Repositories passed in, not created
2. No caching here - every call recomputes from the database
3. All or nothing - a failed query aborts the whole record; a partially
   populated System is never returned
"""

from typing import Optional
import logging

from domain.dialect import SourceDialect, ODYSSEY
from domain.exceptions import QueryFailure, RecordNotFound
from domain.models import Commodity, Planet, Star, System
from logging_config import setup_logging
from repositories.commodity_repo import CommodityRepository
from repositories.system_repo import SystemRepository

logger = setup_logging(__name__, log_file="aggregation_service.log")


class AggregationService:
    """Computes commodity statistics and assembles systems with their bodies.

    Args:
        commodity_repo: CommodityRepository (or any object with get_commodity_aggregate)
        system_repo: SystemRepository (or any object with get_system_row,
            get_star_rows and get_planet_rows)
        dialect: Source dialect the rows come from
    """

    def __init__(
        self,
        commodity_repo: CommodityRepository,
        system_repo: SystemRepository,
        dialect: SourceDialect = ODYSSEY,
        logger_instance: Optional[logging.Logger] = None,
    ):
        self._commodity_repo = commodity_repo
        self._system_repo = system_repo
        self.dialect = dialect
        self._logger = logger_instance or logger

    def compute_commodity(self, name: str, odyssey: bool = True) -> Commodity:
        """
        Compute market statistics for one commodity.

        Args:
            name: Commodity name, matched exactly
            odyssey: Edition filter

        Returns:
            Commodity; fields whose aggregate is undefined are None

        Raises:
            RecordNotFound: no commodity rows match the name
            QueryFailure: the database failed or a row could not be decoded
        """
        row = self._commodity_repo.get_commodity_aggregate(name, odyssey)
        if not row.get("row_count"):
            raise RecordNotFound("commodity", name)

        try:
            commodity = Commodity.from_row(name, row, integer_prices=self.dialect.integer_prices)
        except (TypeError, ValueError) as e:
            raise QueryFailure("decode_commodity", e) from e
        self._logger.debug(
            f"computed commodity '{name}': {row['row_count']} rows, "
            f"best_buy={commodity.best_buy}, best_sell={commodity.best_sell}"
        )
        return commodity

    def compute_system(self, address: int, odyssey: bool = True) -> System:
        """
        Assemble one system with its stars and planets.

        Args:
            address: System address
            odyssey: Edition filter

        Returns:
            System with star and planet tuples (empty when it has none)

        Raises:
            RecordNotFound: no system row matches the address
            QueryFailure: any of the three queries failed
        """
        system_row = self._system_repo.get_system_row(address, odyssey)
        if system_row is None:
            raise RecordNotFound("system", address)

        star_rows = self._system_repo.get_star_rows(address, odyssey)
        planet_rows = self._system_repo.get_planet_rows(address, odyssey)

        try:
            stars = [Star.from_row(r) for r in star_rows]
            planets = [Planet.from_row(r) for r in planet_rows]
            system = System.from_row(address, system_row, stars=stars, planets=planets)
        except (TypeError, ValueError) as e:
            raise QueryFailure("decode_system", e) from e
        self._logger.debug(
            f"computed system {address} '{system.name}': "
            f"{system.star_count} stars, {system.planet_count} planets"
        )
        return system
