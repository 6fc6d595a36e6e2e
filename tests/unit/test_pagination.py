"""
Tests for woostore.pagination module.
"""
import pytest
from unittest.mock import AsyncMock

from woostore.config import PageConfig
from woostore.exceptions import StoreAPIError, StoreConnectionError
from woostore.pagination import Paginator, page_path, parse_total_pages


class TestPagePath:
    """Tests for page_path helper."""

    def test_without_query(self):
        assert page_path("/products", 1, 100) == "/products?page=1&per_page=100"

    def test_with_existing_query(self):
        assert page_path("/products?sku=A,B", 3, 100) == "/products?sku=A,B&page=3&per_page=100"


class TestParseTotalPages:
    """Tests for parse_total_pages helper."""

    @pytest.mark.parametrize("value,expected", [
        ("4", 4),
        (None, 1),
        ("", 1),
        ("garbage", 1),
        ("0", 1),
    ])
    def test_values(self, value, expected):
        assert parse_total_pages(value) == expected


class TestPaginator:
    """Tests for Paginator class."""

    @pytest.mark.asyncio
    async def test_single_page(self):
        """Single page should be returned as is."""
        fetch_page = AsyncMock(return_value=([{"id": 1}, {"id": 2}], 1))

        result = await Paginator(fetch_page).fetch_all("/items")

        assert result == [{"id": 1}, {"id": 2}]
        fetch_page.assert_awaited_once_with("/items?page=1&per_page=100")

    @pytest.mark.asyncio
    async def test_multiple_pages_keep_order(self):
        """Records come back in page order, then within-page order."""
        fetch_page = AsyncMock(side_effect=[
            ([{"id": 1}, {"id": 2}], 3),
            ([{"id": 3}], 3),
            ([{"id": 4}, {"id": 5}], 3),
        ])

        result = await Paginator(fetch_page).fetch_all("/items")

        assert [item["id"] for item in result] == [1, 2, 3, 4, 5]
        assert fetch_page.await_count == 3

    @pytest.mark.asyncio
    async def test_max_pages(self):
        """max_pages should limit pagination."""
        fetch_page = AsyncMock(return_value=([{"id": 1}], 500))

        result = await Paginator(fetch_page, PageConfig(max_pages=50)).fetch_all("/items")

        assert len(result) == 50
        assert fetch_page.await_count == 50

    @pytest.mark.asyncio
    async def test_first_page_failure_propagates(self):
        """Failure on the first page is fatal."""
        fetch_page = AsyncMock(side_effect=StoreConnectionError("Network error"))

        with pytest.raises(StoreConnectionError):
            await Paginator(fetch_page).fetch_all("/items")

    @pytest.mark.asyncio
    async def test_first_page_client_error_propagates(self):
        """4xx on the first page is not swallowed."""
        fetch_page = AsyncMock(side_effect=StoreAPIError.from_status(401, "Unauthorized"))

        with pytest.raises(StoreAPIError) as exc_info:
            await Paginator(fetch_page).fetch_all("/items")

        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_later_page_failure_returns_partial(self):
        """Failure after the first page returns what was gathered."""
        fetch_page = AsyncMock(side_effect=[
            ([{"id": 1}, {"id": 2}], 3),
            StoreConnectionError("Network error"),
        ])

        result = await Paginator(fetch_page).fetch_all("/items")

        assert result == [{"id": 1}, {"id": 2}]
        assert fetch_page.await_count == 2

    @pytest.mark.asyncio
    async def test_later_page_client_error_propagates(self):
        """4xx is never degraded into a partial result."""
        fetch_page = AsyncMock(side_effect=[
            ([{"id": 1}], 3),
            StoreAPIError.from_status(400, "rest_invalid_param"),
        ])

        with pytest.raises(StoreAPIError):
            await Paginator(fetch_page).fetch_all("/items")

    @pytest.mark.asyncio
    async def test_later_page_unexpected_error_propagates(self):
        """Errors outside the store hierarchy are not turned into partial results."""
        fetch_page = AsyncMock(side_effect=[
            ([{"id": 1}], 3),
            TypeError("unexpected page shape"),
        ])

        with pytest.raises(TypeError):
            await Paginator(fetch_page).fetch_all("/items")

        assert fetch_page.await_count == 2

    @pytest.mark.asyncio
    async def test_custom_page_size(self):
        """per_page comes from config."""
        fetch_page = AsyncMock(return_value=([], 1))

        await Paginator(fetch_page, PageConfig(per_page=25)).fetch_all("/items")

        fetch_page.assert_awaited_once_with("/items?page=1&per_page=25")
