"""
Custom exception hierarchy for WooCommerce store operations.

Exception Hierarchy:
    StoreError (base)
    ├── StoreConnectionError      - Network/timeout issues (recoverable)
    ├── StoreAPIError             - API returned non-2xx response
    ├── StoreDataError            - Invalid response structure
    ├── ImageNotFoundError        - Local upload file is missing
    ├── ManufacturerNotFoundError - Manufacturer attribute absent on the store
    ├── StoreNotFoundError        - Unknown store key in the registry
    └── StoreConfigError          - Missing or invalid configuration

    ValidationError               - Input validation failed
"""
from typing import Any


class StoreError(Exception):
    """Base exception for all store-related errors."""

    def __init__(self, message: str, details: str = None):
        self.message = message
        self.details = details
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class StoreConnectionError(StoreError):
    """
    Network-related errors (timeout, connection refused, etc.).

    These are recoverable with retry.
    """


class StoreAPIError(StoreError):
    """
    Store returned a non-2xx response.

    Renders as ``HTTP <status>: <body text>``.
    """

    def __init__(self, message: str, details: str = None, status_code: int = None):
        super().__init__(message, details)
        self.status_code = status_code

    @classmethod
    def from_status(cls, status_code: int, text: str) -> "StoreAPIError":
        return cls(f"HTTP {status_code}", details=text, status_code=status_code)

    @property
    def is_client_error(self) -> bool:
        """4xx responses are never worth retrying."""
        return self.status_code is not None and 400 <= self.status_code < 500


class StoreDataError(StoreError):
    """
    API response has unexpected structure.

    The store returned data in a format we don't understand.
    """

    def __init__(self, message: str, details: str = None, expected: str = None, got: str = None):
        super().__init__(message, details)
        self.expected = expected
        self.got = got


class ImageNotFoundError(StoreError):
    """Image file to upload does not exist locally."""

    def __init__(self, path: str):
        super().__init__(f"File not found: {path}")
        self.path = path


class ManufacturerNotFoundError(StoreError):
    """The store has no attribute with the manufacturer slug."""

    def __init__(self, slug: str):
        super().__init__("Manufacturer attribute not found", details=slug)
        self.slug = slug


class StoreNotFoundError(StoreError):
    """No credentials registered under the requested key."""

    def __init__(self, key: str):
        super().__init__("Store not found")
        self.key = key


class StoreConfigError(StoreError):
    """Required configuration is missing or invalid."""


class ValidationError(Exception):
    """
    Input validation failed.

    Used for validating credentials and product input before any request.
    """

    def __init__(self, field: str, message: str, value: Any = None):
        self.field = field
        self.message = message
        self.value = value
        super().__init__(f"{field}: {message}")

    def __str__(self) -> str:
        if self.value is not None:
            return f"{self.field}: {self.message} (got: {self.value!r})"
        return f"{self.field}: {self.message}"
