"""
Input validation for credentials and product input.

All validators raise ValidationError on invalid input.
"""

import math
from decimal import Decimal
from numbers import Real
from typing import Optional
from urllib.parse import urlparse

from woostore.exceptions import ValidationError


def validate_store_url(value: str, field: str = "store_url") -> str:
    """
    Validate a store base URL.

    Args:
        value: URL such as ``https://shop.example.com``
        field: Field name for error messages

    Returns:
        The URL without a trailing slash, so paths can be appended directly

    Raises:
        ValidationError: If the URL is empty or not an absolute http(s) URL
    """
    if not value or not isinstance(value, str):
        raise ValidationError(field, "Store URL is required", value)

    parsed = urlparse(value.strip())
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValidationError(field, "Must be an absolute http(s) URL", value)

    return value.strip().rstrip("/")


def validate_required_text(value: Optional[str], field: str) -> str:
    """Ensure a text field is present and not blank."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(field, "Must be a non-empty string", value)
    return value


def validate_price(value, field: str = "price"):
    """
    Validate a product price.

    Booleans are rejected even though they are ints.

    Raises:
        ValidationError: If price is not a non-negative number
    """
    if isinstance(value, bool) or not isinstance(value, (Real, Decimal)):
        raise ValidationError(field, "Must be a number", value)

    if not math.isfinite(value):
        raise ValidationError(field, "Must be finite", value)

    if value < 0:
        raise ValidationError(field, "Must be non-negative", value)

    return value
