"""
Services Package

Business logic on top of the repositories.

Each service module follows these principles:
1. Single Responsibility - one concern per service
2. Dependency Injection - dependencies passed in, not created
3. Dataclasses - structured domain models in, domain models out

Available Services:
- AggregationService: builds Commodity and System objects from query rows
- LookupService: cached commodity/system lookups (use get_lookup_service())
"""

from services.aggregation_service import AggregationService
from services.lookup_service import (
    LookupService,
    get_lookup_service,
)

__all__ = [
    "AggregationService",
    "LookupService",
    "get_lookup_service",
]
