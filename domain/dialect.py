"""
Source Dialects

The market/astronomy tables come from two generations of game data. Rather
than keeping a copy of every query per generation, the repositories and the
aggregation service read their differences from a SourceDialect.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SourceDialect:
    """How a particular data source lays out its tables.

    Attributes:
        name: Dialect key used in settings.toml [source] dialect
        has_edition_column: Tables carry an `odyssey` column; when False the
            edition filter passed to a lookup is ignored
        min_buy_stock: Best-buy offers must have stock strictly above this
            value; None disables the stock floor
        integer_prices: Prices are truncated to whole credits
    """

    name: str
    has_edition_column: bool = True
    min_buy_stock: Optional[int] = 1000
    integer_prices: bool = False


ODYSSEY = SourceDialect(name="odyssey")

LEGACY = SourceDialect(
    name="legacy",
    has_edition_column=False,
    min_buy_stock=None,
    integer_prices=True,
)

DIALECTS: dict[str, SourceDialect] = {d.name: d for d in (ODYSSEY, LEGACY)}


def get_dialect(name: str) -> SourceDialect:
    """Look up a built-in dialect by name."""
    try:
        return DIALECTS[name]
    except KeyError:
        raise ValueError(
            f"Unknown source dialect '{name}'. Available: {sorted(DIALECTS)}"
        ) from None
