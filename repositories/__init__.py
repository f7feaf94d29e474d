"""
Repository Layer Package

This package contains repository classes that encapsulate all database access.
Repositories return plain rows; assembling domain objects is left to the
services layer.

Key Components:
- BaseRepository: Foundation class with a timed read_df() raising QueryFailure
- CommodityRepository: Commodity price averages and best buy/sell offers
- SystemRepository: System attributes, stars and planets
"""

from repositories.base import BaseRepository
from repositories.commodity_repo import CommodityRepository, MASKED_STATION_PATTERN
from repositories.system_repo import SystemRepository

__all__ = [
    "BaseRepository",
    "CommodityRepository",
    "MASKED_STATION_PATTERN",
    "SystemRepository",
]
