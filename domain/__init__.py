"""
Domain Models Package

Typed, immutable structures for the commodity and system lookups.

Key Components:
- Models: Commodity, PriceOffer, System, Star, Planet
- Dialects: SourceDialect and the built-in ODYSSEY/LEGACY layouts
- Exceptions: RecordNotFound, QueryFailure, FieldParseError
"""

from domain.dialect import SourceDialect, ODYSSEY, LEGACY, get_dialect
from domain.exceptions import (
    LookupFailure,
    RecordNotFound,
    QueryFailure,
    FieldParseError,
)
from domain.models import (
    PriceOffer,
    Commodity,
    Star,
    Planet,
    System,
)

__all__ = [
    # Dialects
    "SourceDialect",
    "ODYSSEY",
    "LEGACY",
    "get_dialect",
    # Exceptions
    "LookupFailure",
    "RecordNotFound",
    "QueryFailure",
    "FieldParseError",
    # Models
    "PriceOffer",
    "Commodity",
    "Star",
    "Planet",
    "System",
]
