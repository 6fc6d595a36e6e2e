"""
Pytest configuration and shared fixtures.
"""
import pytest
from typing import Any, Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock

from woostore.config import BatchConfig, RetryConfig, StoreConfig
from woostore.models import Credentials, ProductInput
from woostore.store import Store


@pytest.fixture
def credentials() -> Credentials:
    """Credentials with both catalog and media key pairs."""
    return Credentials(
        store_url="https://test-store.com",
        wc_key="ck_test",
        wc_secret="cs_test",
        wp_username="test_user",
        wp_app_pass="test_pass",
    )


@pytest.fixture
def fast_config() -> StoreConfig:
    """Config without sleeps between retries or batches."""
    return StoreConfig(
        retry=RetryConfig(max_attempts=3, base_delay=0),
        batches=BatchConfig(batch_size=50, batch_pause=0),
    )


@pytest.fixture
def store(credentials, fast_config) -> Store:
    """Store whose catalog and media connections are mocked out."""
    store = Store(credentials, config=fast_config)
    store.catalog = MagicMock()
    store.catalog.get = AsyncMock()
    store.catalog.get_all = AsyncMock()
    store.catalog.post = AsyncMock()
    store.media = MagicMock()
    store.media.post = AsyncMock()
    return store


@pytest.fixture
def make_products():
    """Factory for simple products: SKU001, SKU002, ..."""
    def _make(count: int, **kwargs) -> List[ProductInput]:
        return [
            ProductInput(name=f"Product {i}", sku=f"SKU{i:03d}", price=100 * i, **kwargs)
            for i in range(1, count + 1)
        ]
    return _make


@pytest.fixture
def image_files(tmp_path):
    """Factory that writes small image files and returns their paths."""
    def _write(*names: str) -> List[str]:
        paths = []
        for name in names:
            path = tmp_path / name
            path.write_bytes(b"\x89PNG fake " + name.encode())
            paths.append(str(path))
        return paths
    return _write


@pytest.fixture
def make_response():
    """Factory for mock httpx responses."""
    def _make(
        status_code: int = 200,
        json_data: Any = None,
        text: str = "",
        headers: Optional[Dict[str, str]] = None,
    ) -> MagicMock:
        response = MagicMock()
        response.status_code = status_code
        response.text = text
        response.headers = headers or {}
        response.json.return_value = json_data
        return response
    return _make
