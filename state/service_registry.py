"""
Service Registry

Process-wide singleton management for services and repositories.
Lets factory functions such as get_lookup_service() hand out one shared
instance (and with it one pair of lookup caches) per process.
"""

import threading
from typing import TypeVar, Callable

T = TypeVar('T')

_services: dict[str, object] = {}
_lock = threading.RLock()


def get_service(service_name: str, factory: Callable[[], T]) -> T:
    """Get or create a service instance in the registry.

    Args:
        service_name: Unique key for the service
        factory: Zero-argument callable that creates the service instance

    Returns:
        The service instance (either cached or newly created)

    Example:
        def get_lookup_service() -> LookupService:
            from state import get_service
            return get_service('lookup_service', LookupService.create_default)
    """
    with _lock:
        if service_name not in _services:
            _services[service_name] = factory()
        return _services[service_name]


def register_service(service_name: str, instance: T) -> T:
    """Explicitly register a pre-configured service instance.

    Args:
        service_name: Unique key for the service
        instance: The service instance to register

    Returns:
        The registered instance
    """
    with _lock:
        _services[service_name] = instance
    return instance


def clear_services(*service_names: str) -> None:
    """Clear specified services so the next access re-creates them.

    Args:
        *service_names: Service keys to clear.
                       If no names provided, clears everything.
    """
    with _lock:
        if not service_names:
            _services.clear()
            return
        for name in service_names:
            _services.pop(name, None)


def has_service(service_name: str) -> bool:
    """Check if a service is registered.

    Args:
        service_name: The service key to check

    Returns:
        True if the service exists in the registry
    """
    with _lock:
        return service_name in _services
