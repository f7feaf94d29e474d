"""
State Management Module

Shared in-process state for the lookup services:
- TTLCache for commodity and system lookup results
- Service registry for singleton management (get_service, register_service, clear_services)

Usage:
    from state import TTLCache, CACHE_TTL_SECONDS
    from state import get_service, register_service
"""

from state.ttl_cache import TTLCache, CacheEntry, CACHE_TTL_SECONDS
from state.service_registry import get_service, register_service, clear_services, has_service

__all__ = [
    # Lookup cache
    'TTLCache',
    'CacheEntry',
    'CACHE_TTL_SECONDS',
    # Service registry
    'get_service',
    'register_service',
    'clear_services',
    'has_service',
]
