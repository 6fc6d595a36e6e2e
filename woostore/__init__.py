"""
Async client library for the WooCommerce REST API.

This package contains:
- connection: authenticated transport with retry and pagination
- store: catalog reads, SKU lookup, price updates, bulk product creation
- registry: credentials for several stores
- exceptions: custom exception hierarchy
- config: client configuration
"""

# Import in dependency order
from woostore.exceptions import (
    StoreError,
    StoreConnectionError,
    StoreAPIError,
    StoreDataError,
    ImageNotFoundError,
    ManufacturerNotFoundError,
    StoreNotFoundError,
    StoreConfigError,
    ValidationError,
)

from woostore.models import (
    Credentials,
    ProductInput,
    DistributedProduct,
    BatchResult,
    SkuLookup,
    Manufacturer,
)

from woostore.config import config as default_config, load_credentials, StoreConfig, RetryConfig, PageConfig, BatchConfig

from woostore.connection import Connection
from woostore.store import Store
from woostore.registry import StoreRegistry
from woostore.observability import setup_logging

__all__ = [
    # Exceptions
    "StoreError",
    "StoreConnectionError",
    "StoreAPIError",
    "StoreDataError",
    "ImageNotFoundError",
    "ManufacturerNotFoundError",
    "StoreNotFoundError",
    "StoreConfigError",
    "ValidationError",
    # Models
    "Credentials",
    "ProductInput",
    "DistributedProduct",
    "BatchResult",
    "SkuLookup",
    "Manufacturer",
    # Config
    "default_config",
    "load_credentials",
    "StoreConfig",
    "RetryConfig",
    "PageConfig",
    "BatchConfig",
    # Clients
    "Connection",
    "Store",
    "StoreRegistry",
    "setup_logging",
]
