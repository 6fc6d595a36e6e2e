"""
Async HTTP transport for the WooCommerce REST API.

Every call is authenticated with HTTP Basic auth and retried on transient
failures. List endpoints can be aggregated across pages with ``get_all``.

Features:
- Connection pooling with httpx
- Linear backoff retry (3 attempts, 1s x attempt); 4xx responses never retried
- Page aggregation driven by the X-WP-TotalPages header
- Request correlation IDs for tracing
"""
import base64
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

import httpx

from woostore.config import PageConfig, RetryConfig, config as default_config
from woostore.exceptions import StoreAPIError, StoreConnectionError, StoreDataError, StoreError
from woostore.observability import get_logger, get_correlation_id, Timer
from woostore.pagination import Paginator, parse_total_pages
from woostore.resilience import retry_with_backoff

logger = get_logger(__name__)

# JSON text, or a multipart mapping of field name -> (filename, content)
RequestBody = Union[str, Mapping[str, Any]]


class Connection:
    """
    Authenticated connection to one store with one key pair.

    Usage:
        async with Connection(url, key, secret) as conn:
            categories = await conn.get_all("/wp-json/wc/v3/products/categories")

        # Or with manual lifecycle:
        conn = Connection(url, key, secret)
        try:
            product = await conn.get("/wp-json/wc/v3/products/42")
        finally:
            await conn.close()
    """

    def __init__(
        self,
        store_url: str,
        key: str,
        secret: str,
        timeout: Optional[float] = None,
        retry_config: Optional[RetryConfig] = None,
        page_config: Optional[PageConfig] = None,
    ):
        """
        Initialize connection.

        Args:
            store_url: Store base URL without trailing slash
            key: Basic auth user (consumer key or WordPress username)
            secret: Basic auth password (consumer secret or application password)
            timeout: Per-request timeout in seconds
            retry_config: Retry policy applied to every request
            page_config: Page size and ceiling for get_all
        """
        self.store_url = store_url.rstrip("/")
        self.key = key
        self.secret = secret
        self.timeout = timeout if timeout is not None else default_config.request_timeout
        self.retry_config = retry_config or default_config.retry
        self.page_config = page_config or default_config.pages
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def headers(self) -> Dict[str, str]:
        """Request headers with auth."""
        token = base64.b64encode(f"{self.key}:{self.secret}".encode("utf-8")).decode("ascii")
        return {
            "Authorization": f"Basic {token}",
            "Accept": "application/json",
        }

    async def connect(self) -> None:
        """Create HTTP client with connection pooling."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                headers=self.headers,
                timeout=self.timeout,
                limits=httpx.Limits(
                    max_keepalive_connections=10,
                    max_connections=20,
                )
            )

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "Connection":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    # ═══════════════════════════════════════════════════════════════════════════
    # REQUESTS
    # ═══════════════════════════════════════════════════════════════════════════

    async def get(self, path: str) -> Any:
        """GET a single resource and return the parsed JSON body."""
        data, _ = await self._request("GET", path)
        return data

    async def post(self, path: str, body: RequestBody) -> Any:
        """
        POST a JSON string or a multipart upload.

        Args:
            path: Path appended to the store URL
            body: JSON text (sent as application/json) or a files mapping
                  (sent as multipart form data)

        Returns:
            Parsed JSON response
        """
        data, _ = await self._request("POST", path, body)
        return data

    async def get_page(self, path: str) -> Tuple[List[Dict[str, Any]], int]:
        """GET one page of a list endpoint; returns records and total page count."""
        data, headers = await self._request("GET", path)
        if not isinstance(data, list):
            raise StoreDataError(
                f"Expected a list from {path}",
                expected="list",
                got=type(data).__name__
            )
        total_pages = parse_total_pages(headers.get(self.page_config.total_pages_header))
        return data, total_pages

    async def get_all(self, path: str) -> List[Dict[str, Any]]:
        """GET every page of a list endpoint as one list."""
        return await Paginator(self.get_page, self.page_config).fetch_all(path)

    async def _request(
        self,
        method: str,
        path: str,
        body: Optional[RequestBody] = None,
    ) -> Tuple[Any, httpx.Headers]:
        """Make HTTP request with retry; 4xx responses fail immediately."""
        return await retry_with_backoff(
            self._do_request,
            method, path, body,
            config=self.retry_config,
            retryable_exceptions=(StoreError,),
        )

    async def _do_request(
        self,
        method: str,
        path: str,
        body: Optional[RequestBody] = None,
    ) -> Tuple[Any, httpx.Headers]:
        """Execute a single HTTP request (called by retry wrapper)."""
        if not self._client:
            await self.connect()

        url = f"{self.store_url}{path}"

        request_headers = {}
        correlation_id = get_correlation_id()
        if correlation_id:
            request_headers["X-Request-ID"] = correlation_id

        content = None
        files = None
        if isinstance(body, str):
            request_headers["content-type"] = "application/json"
            content = body
        elif body is not None:
            files = body

        try:
            with Timer(f"{method} {path}", logger):
                response = await self._client.request(
                    method,
                    url,
                    content=content,
                    files=files,
                    headers=request_headers or None,
                )
        except httpx.TimeoutException as e:
            logger.error(
                f"Request timeout: {method} {path}",
                extra={"path": path, "timeout": self.timeout}
            )
            raise StoreConnectionError(f"Request timeout after {self.timeout}s", str(e)) from e
        except httpx.RequestError as e:
            logger.error(
                f"Request failed: {method} {path} - {e}",
                extra={"path": path}
            )
            raise StoreConnectionError(f"Request to {path} failed", str(e)) from e

        if not 200 <= response.status_code < 300:
            logger.error(
                f"API error {response.status_code} on {method} {path}",
                extra={"path": path, "status_code": response.status_code}
            )
            raise StoreAPIError.from_status(response.status_code, response.text)

        try:
            data = response.json()
        except ValueError as e:
            raise StoreDataError(f"Response from {path} is not valid JSON", str(e)) from e

        return data, response.headers
