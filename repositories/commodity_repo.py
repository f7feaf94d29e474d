"""
Commodity Repository

Aggregates commodity market rows into one statistics row per commodity name:
average prices across every market, plus the best buy and best sell offers
joined to their station and system names.

Design:
- Three read-only SELECTs per lookup (averages, best buy, best sell)
- Stations whose name is only a masked carrier code (e.g. "K7Q-1ZB") are
  never eligible as a best offer
- The edition filter only applies when the source dialect has the column
- Ties on the best price resolve by row order
"""

from typing import Any, Optional
import logging

from sqlalchemy import text

from config import DatabaseConfig
from domain.dialect import SourceDialect, ODYSSEY
from logging_config import setup_logging
from repositories.base import BaseRepository

logger = setup_logging(__name__, log_file="commodity_repo.log")

# SQL LIKE pattern for stations displayed only as a three-character code pair
MASKED_STATION_PATTERN = "___-___"

CommodityRow = dict[str, Any]


class CommodityRepository(BaseRepository):
    """
    Repository for commodity market aggregates.

    Queries the commodity table (joined to station and system) to compute:
    - Average buy, sell and mean price
    - Lowest positive buy price at a stocked, unmasked station
    - Highest sell price at an unmasked station
    """

    def __init__(
        self,
        db: DatabaseConfig,
        dialect: SourceDialect = ODYSSEY,
        logger_instance: Optional[logging.Logger] = None,
    ):
        super().__init__(db, logger_instance or logger)
        self.dialect = dialect

    def _edition_clause(self, alias: str) -> str:
        if not self.dialect.has_edition_column:
            return ""
        return f" AND {alias}.odyssey = :odyssey"

    def _system_join(self) -> str:
        clause = "LEFT JOIN system sy ON sy.address = st.system_address"
        if self.dialect.has_edition_column:
            clause += " AND sy.odyssey = c.odyssey"
        return clause

    def _averages_query(self):
        return text(f"""
            SELECT
                COUNT(*) AS row_count,
                AVG(c.buy_price) AS avg_buy_price,
                AVG(c.sell_price) AS avg_sell_price,
                AVG(c.mean_price) AS avg_mean_price
            FROM commodity c
            WHERE c.name = :name{self._edition_clause("c")}
        """)

    def _best_buy_query(self):
        stock_clause = ""
        if self.dialect.min_buy_stock is not None:
            stock_clause = " AND c.stock > :min_stock"
        return text(f"""
            SELECT
                c.buy_price AS price,
                st.name AS station_name,
                sy.name AS system_name
            FROM commodity c
            JOIN station st ON st.id = c.station_id
            {self._system_join()}
            WHERE c.name = :name
              AND c.buy_price > 0{stock_clause}
              AND st.name NOT LIKE :masked{self._edition_clause("c")}
            ORDER BY c.buy_price ASC
            LIMIT 1
        """)

    def _best_sell_query(self):
        return text(f"""
            SELECT
                c.sell_price AS price,
                st.name AS station_name,
                sy.name AS system_name
            FROM commodity c
            JOIN station st ON st.id = c.station_id
            {self._system_join()}
            WHERE c.name = :name
              AND c.sell_price IS NOT NULL
              AND st.name NOT LIKE :masked{self._edition_clause("c")}
            ORDER BY c.sell_price DESC
            LIMIT 1
        """)

    def _params(self, name: str, odyssey: bool, masked: bool = False, stock: bool = False) -> dict[str, Any]:
        params: dict[str, Any] = {"name": name}
        if masked:
            params["masked"] = MASKED_STATION_PATTERN
        if self.dialect.has_edition_column:
            params["odyssey"] = int(odyssey)
        if stock and self.dialect.min_buy_stock is not None:
            params["min_stock"] = self.dialect.min_buy_stock
        return params

    def get_commodity_aggregate(self, name: str, odyssey: bool = True) -> CommodityRow:
        """
        Get the aggregate statistics row for one commodity name.

        The name is matched exactly (case-sensitive, untrimmed).

        Args:
            name: Commodity name
            odyssey: Edition filter; ignored by dialects without the column

        Returns:
            Dict with row_count, avg_buy_price, avg_sell_price, avg_mean_price,
            best_buy_price/station/system and best_sell_price/station/system.
            Undefined aggregates are None.

        Raises:
            QueryFailure: any of the three queries failed
        """
        averages = self.read_records(
            self._averages_query(),
            self._params(name, odyssey),
            operation="commodity_averages",
        )
        row: CommodityRow = dict(averages[0]) if averages else {"row_count": 0}
        row["row_count"] = int(row.get("row_count") or 0)

        best_queries = (
            ("buy", self._best_buy_query(), self._params(name, odyssey, masked=True, stock=True)),
            ("sell", self._best_sell_query(), self._params(name, odyssey, masked=True)),
        )
        for side, query, params in best_queries:
            best = self.read_records(query, params, operation=f"commodity_best_{side}")
            offer = best[0] if best else {}
            row[f"best_{side}_price"] = offer.get("price")
            row[f"best_{side}_station"] = offer.get("station_name")
            row[f"best_{side}_system"] = offer.get("system_name")

        self._logger.debug(
            f"aggregated {row['row_count']} rows for commodity '{name}' (odyssey={odyssey})"
        )
        return row
