"""
Retry with linear backoff for store requests.

Provides:
- retry_with_backoff: run an async callable, retrying failures
- with_retry: wrap an async callable into a retrying one
- is_client_error: give-up predicate for 4xx responses
"""
import asyncio
from functools import wraps
from typing import Any, Callable, Optional, Tuple, Type

from woostore.config import RetryConfig
from woostore.exceptions import StoreAPIError
from woostore.observability import get_logger

logger = get_logger(__name__)


def is_client_error(exc: BaseException) -> bool:
    """True for 4xx responses, which fail the same way on every attempt."""
    return isinstance(exc, StoreAPIError) and exc.is_client_error


async def retry_with_backoff(
    func: Callable[..., Any],
    *args,
    config: Optional[RetryConfig] = None,
    retryable_exceptions: Tuple[Type[BaseException], ...] = (Exception,),
    giveup: Callable[[BaseException], bool] = is_client_error,
    **kwargs
) -> Any:
    """
    Execute an async function, retrying with linearly increasing delay.

    The delay before attempt ``n + 1`` is ``config.base_delay * n``.

    Args:
        func: Async function to execute
        *args: Positional arguments for func
        config: Retry configuration
        retryable_exceptions: Exceptions to retry on
        giveup: Predicate; matching exceptions are raised without retry
        **kwargs: Keyword arguments for func

    Returns:
        Result of func

    Raises:
        The give-up exception immediately, or the last exception once all
        attempts are exhausted
    """
    config = config or RetryConfig()
    attempts = max(1, config.max_attempts)

    for attempt in range(1, attempts + 1):
        try:
            return await func(*args, **kwargs)
        except retryable_exceptions as e:
            if giveup(e):
                raise

            if attempt == attempts:
                logger.error(
                    f"All {attempts} attempts failed",
                    extra={"error": str(e)}
                )
                raise

            delay = config.base_delay * attempt
            logger.warning(
                f"Attempt {attempt} failed: {e}. Retrying in {delay:.2f}s",
                extra={"attempt": attempt, "delay": delay}
            )
            await asyncio.sleep(delay)


def with_retry(
    func: Callable[..., Any],
    config: Optional[RetryConfig] = None,
    retryable_exceptions: Tuple[Type[BaseException], ...] = (Exception,),
    giveup: Callable[[BaseException], bool] = is_client_error,
) -> Callable[..., Any]:
    """
    Return a retrying version of an async executor.

    Usage:
        fetch = with_retry(connection._do_request, RetryConfig(max_attempts=5))
        data, headers = await fetch("GET", "/wp-json/wc/v3/products", None)
    """
    @wraps(func)
    async def wrapper(*args, **kwargs):
        return await retry_with_backoff(
            func, *args,
            config=config,
            retryable_exceptions=retryable_exceptions,
            giveup=giveup,
            **kwargs
        )
    return wrapper
