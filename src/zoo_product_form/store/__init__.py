"""Local persistence for services (SQLite: data/zoo.db)."""
from .exceptions import ServiceNotFoundError, ServiceStoreError, ValidationError
from .schema import init_database
from .services import ServiceStore, normalize_service_fields

__all__ = [
    "ServiceStore",
    "ServiceStoreError",
    "ServiceNotFoundError",
    "ValidationError",
    "init_database",
    "normalize_service_fields",
]
