"""
Lookup Service

Read-through caching in front of AggregationService for the two lookups the
application serves.

Flow per lookup:
  1. cache hit -> return the cached copy, the database is not touched
  2. miss -> compute via AggregationService
  3. not found / query failure -> return None, nothing is cached
  4. result with headline data -> cache it, return it
  5. result without headline data -> return it, nothing is cached

Concurrent misses for the same key each compute independently and the last
put wins; results are pure functions of the database so this only costs
duplicate work. Keys are compared exactly, without trimming or case folding.
"""

from typing import Optional
import logging

from config import DatabaseConfig
from domain.dialect import get_dialect
from domain.exceptions import QueryFailure, RecordNotFound
from domain.models import Commodity, System
from logging_config import setup_logging
from repositories.commodity_repo import CommodityRepository
from repositories.system_repo import SystemRepository
from services.aggregation_service import AggregationService
from settings_service import SettingsService
from state.ttl_cache import TTLCache

logger = setup_logging(__name__, log_file="lookup_service.log")

CommodityKey = tuple[str, bool]
SystemKey = tuple[int, bool]


class LookupService:
    """
    Main lookup service - facade for commodity and system lookups.

    Example usage:
        service = LookupService.create_default()
        gold = service.lookup_commodity("Gold", odyssey=True)
        sol = service.lookup_system(10477373803, odyssey=True)
    """

    def __init__(
        self,
        aggregation: AggregationService,
        commodity_cache: Optional[TTLCache[CommodityKey, Commodity]] = None,
        system_cache: Optional[TTLCache[SystemKey, System]] = None,
        logger_instance: Optional[logging.Logger] = None,
    ):
        self._aggregation = aggregation
        self.commodity_cache = commodity_cache if commodity_cache is not None else TTLCache("commodity")
        self.system_cache = system_cache if system_cache is not None else TTLCache("system")
        self._logger = logger_instance or logger

    @classmethod
    def create_default(cls, db: Optional[DatabaseConfig] = None) -> "LookupService":
        """
        Factory method to create the service from settings.toml.

        This is the recommended way to instantiate the service.
        """
        settings = SettingsService()
        dialect = get_dialect(settings.dialect_name)
        db = db or DatabaseConfig(settings.db_alias)
        aggregation = AggregationService(
            CommodityRepository(db, dialect),
            SystemRepository(db, dialect),
            dialect,
        )
        logger.info(f"lookup service ready: db={db.alias}, dialect={dialect.name}")
        return cls(aggregation)

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    def lookup_commodity(self, name: str, odyssey: bool = True) -> Optional[Commodity]:
        """Get commodity statistics by exact name, or None if not found."""
        key: CommodityKey = (name, bool(odyssey))
        cached = self.commodity_cache.get(key)
        if cached is not None:
            self._logger.debug(f"commodity cache hit: {key}")
            return cached

        self._logger.debug(f"commodity cache miss: {key}")
        try:
            commodity = self._aggregation.compute_commodity(name, bool(odyssey))
        except RecordNotFound as e:
            self._logger.info(str(e))
            return None
        except QueryFailure as e:
            self._logger.warning(f"commodity lookup {key} failed: {e}")
            return None

        if commodity.has_headline_data:
            self.commodity_cache.put(key, commodity)
        else:
            self._logger.info(f"commodity {key} has no price data; not caching")
        return commodity

    def lookup_system(self, address: int, odyssey: bool = True) -> Optional[System]:
        """Get a system with its stars and planets by address, or None if not found."""
        key: SystemKey = (int(address), bool(odyssey))
        cached = self.system_cache.get(key)
        if cached is not None:
            self._logger.debug(f"system cache hit: {key}")
            return cached

        self._logger.debug(f"system cache miss: {key}")
        try:
            system = self._aggregation.compute_system(int(address), bool(odyssey))
        except RecordNotFound as e:
            self._logger.info(str(e))
            return None
        except QueryFailure as e:
            self._logger.warning(f"system lookup {key} failed: {e}")
            return None

        if system.has_headline_data:
            self.system_cache.put(key, system)
        else:
            self._logger.info(f"system {key} has no name; not caching")
        return system

    def get_cache_stats(self) -> dict:
        """Get cache statistics for debugging."""
        return {
            "commodity": self.commodity_cache.stats(),
            "system": self.system_cache.stats(),
        }


# =============================================================================
# Process-wide instance
# =============================================================================

def get_lookup_service() -> LookupService:
    """
    Get or create the shared LookupService instance.

    Example:
        from services.lookup_service import get_lookup_service

        commodity = get_lookup_service().lookup_commodity("Gold")
    """
    from state import get_service
    return get_service('lookup_service', LookupService.create_default)
