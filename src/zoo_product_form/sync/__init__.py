"""Shopify Metaobject synchronization for services."""
from .bootstrap import DefinitionBootstrap
from .catalog_sync import RemoteCatalogSync
from .exceptions import DefinitionBootstrapError
from .mutations import create_service, delete_service, update_service

__all__ = [
    "DefinitionBootstrap",
    "DefinitionBootstrapError",
    "RemoteCatalogSync",
    "create_service",
    "delete_service",
    "update_service",
]
