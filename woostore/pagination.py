"""
Pagination for WooCommerce list endpoints.

The store reports the number of pages in a response header, so pages are
fetched one after another: each response decides whether another request
is issued.
"""

from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple

from woostore.config import PageConfig
from woostore.exceptions import StoreError
from woostore.observability import get_logger
from woostore.resilience import is_client_error

logger = get_logger(__name__)

# Fetches one page: path -> (records, total pages reported by the store)
PageFetcher = Callable[[str], Awaitable[Tuple[List[Dict[str, Any]], int]]]


def page_path(path: str, page: int, per_page: int) -> str:
    """Append page parameters, continuing an existing query string."""
    separator = "&" if "?" in path else "?"
    return f"{path}{separator}page={page}&per_page={per_page}"


def parse_total_pages(value: Optional[str]) -> int:
    """Read the total-pages header; missing or malformed means one page."""
    try:
        total = int(value)
    except (TypeError, ValueError):
        return 1
    return max(total, 1)


class Paginator:
    """
    Aggregates every page of a list endpoint into one list.

    Stops when the page counter passes the reported total or the configured
    ceiling. A failure on the first page propagates, as does a 4xx on any
    page; any other StoreError on a later page ends pagination and the records
    gathered so far are returned.

    Usage:
        paginator = Paginator(connection.get_page)
        products = await paginator.fetch_all("/wp-json/wc/v3/products")
    """

    def __init__(self, fetch_page: PageFetcher, config: Optional[PageConfig] = None):
        self.fetch_page = fetch_page
        self.config = config or PageConfig()

    async def fetch_all(self, path: str) -> List[Dict[str, Any]]:
        records: List[Dict[str, Any]] = []
        total_pages: Optional[int] = None
        page = 1

        while page <= self.config.max_pages and (total_pages is None or page <= total_pages):
            try:
                batch, total_pages = await self.fetch_page(
                    page_path(path, page, self.config.per_page)
                )
            except StoreError as e:
                if page == 1 or is_client_error(e):
                    raise
                logger.warning(
                    f"Page {page} of {path} failed, returning partial results: {e}",
                    extra={"page": page, "records": len(records)}
                )
                break

            records.extend(batch)
            page += 1

        if total_pages is not None and total_pages > self.config.max_pages:
            logger.warning(
                f"{path} reports {total_pages} pages, stopped at {self.config.max_pages}",
                extra={"records": len(records)}
            )

        return records
