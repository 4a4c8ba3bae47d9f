"""Utility functions and helpers for the clusterboot package."""
import functools
import logging
import time
from typing import Any, Callable, Optional, TypeVar

from kubernetes.client.rest import ApiException
from urllib3.exceptions import HTTPError as Urllib3HTTPError

from ..config import RetryConfig

T = TypeVar('T')

logger = logging.getLogger("clusterboot.utils")


def api_status(error: BaseException) -> Optional[int]:
    """Return the HTTP status of an API error, or None for transport errors."""
    if isinstance(error, ApiException):
        return error.status or None
    return None


def is_transient(error: BaseException, policy: RetryConfig) -> bool:
    """Tell whether an error is worth retrying under the given policy.

    Connection failures (API server restarting, load balancer not ready) and
    the configured HTTP status codes are transient. Everything else, a 409
    Conflict included, is handed straight back to the caller.
    """
    if isinstance(error, (Urllib3HTTPError, ConnectionError)):
        return True
    if isinstance(error, ApiException):
        # status 0 means the request never got a response
        return not error.status or error.status in policy.retry_on_status
    return False


def retry_call(policy: Optional[RetryConfig], func: Callable[..., T], *args: Any,
               description: str = "", **kwargs: Any) -> T:
    """Call func, retrying transient failures with exponential backoff.

    Args:
        policy: Retry policy; None or max_retries=0 means a single attempt
        func: Callable to invoke
        description: Name of the operation used in log messages

    Returns:
        Whatever func returns

    Raises:
        The last exception raised by func, unchanged
    """
    max_retries = policy.max_retries if policy else 0
    delay = policy.delay if policy else 0.0

    attempt = 0
    while True:
        try:
            return func(*args, **kwargs)
        except Exception as e:
            if attempt >= max_retries or not is_transient(e, policy):
                raise
            wait_time = delay * (policy.backoff ** attempt)
            logger.warning(
                f"Attempt {attempt + 1} to {description or getattr(func, '__name__', 'call')} failed: {e}. "
                f"Retrying in {wait_time:.2f}s..."
            )
            time.sleep(wait_time)
            attempt += 1


def retry(policy: Optional[RetryConfig] = None, description: str = ""):
    """Decorator form of retry_call."""
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            return retry_call(policy, func, *args, description=description, **kwargs)
        return wrapper
    return decorator
