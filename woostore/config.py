"""
Configuration for the WooCommerce store client.

Tunables live in frozen dataclasses with defaults that match the store's
documented limits. The client itself never reads the environment; callers
that keep credentials in a ``.env`` file or environment variables use
``load_credentials()``.

Usage:
    from woostore.config import config, load_credentials

    store = Store(load_credentials(), config=config)
"""

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from woostore.exceptions import StoreConfigError
from woostore.models import Credentials


@dataclass(frozen=True)
class RetryConfig:
    """Retry behaviour for single requests."""

    max_attempts: int = 3
    base_delay: float = 1.0  # seconds, multiplied by the attempt number


@dataclass(frozen=True)
class PageConfig:
    """Pagination of list endpoints."""

    per_page: int = 100
    max_pages: int = 50
    total_pages_header: str = "X-WP-TotalPages"


@dataclass(frozen=True)
class BatchConfig:
    """Bulk product creation."""

    batch_size: int = 50
    batch_pause: float = 0.2  # seconds between consecutive batches


@dataclass(frozen=True)
class StoreConfig:
    """Main client configuration."""

    request_timeout: float = 30.0
    manufacturer_slug: str = "pa_proizvoditel"
    retry: RetryConfig = field(default_factory=RetryConfig)
    pages: PageConfig = field(default_factory=PageConfig)
    batches: BatchConfig = field(default_factory=BatchConfig)


# Global default config instance
config = StoreConfig()


ENV_PREFIX = "WOO_"


def load_credentials(prefix: str = ENV_PREFIX) -> Credentials:
    """
    Build store credentials from environment variables (and ``.env``).

    Reads ``<prefix>STORE_URL``, ``<prefix>WC_KEY``, ``<prefix>WC_SECRET`` and
    the optional ``<prefix>WP_USERNAME`` / ``<prefix>WP_APP_PASS``.

    Raises:
        StoreConfigError: If a required variable is missing
    """
    load_dotenv()

    required = {
        "store_url": f"{prefix}STORE_URL",
        "wc_key": f"{prefix}WC_KEY",
        "wc_secret": f"{prefix}WC_SECRET",
    }
    values = {name: os.getenv(var, "").strip() for name, var in required.items()}

    missing = [required[name] for name, value in values.items() if not value]
    if missing:
        raise StoreConfigError(
            "Store configuration is incomplete",
            details=", ".join(f"{var} is required but not set" for var in missing),
        )

    return Credentials(
        **values,
        wp_username=os.getenv(f"{prefix}WP_USERNAME") or None,
        wp_app_pass=os.getenv(f"{prefix}WP_APP_PASS") or None,
    )
