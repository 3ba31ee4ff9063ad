"""Resilience utilities for workflow API reads.

Only idempotent reads (inbox, archive, submitted response, follow-up list,
incident and seasonal report detail) are retried. Transition and follow-up
status calls are never retried: a failed transition is reported to the
user, who may resubmit.
"""

import logging
from typing import Callable, TypeVar

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
    before_sleep_log,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


def create_read_retry(
    max_attempts: int = 3,
    min_wait: float = 0.5,
    max_wait: float = 4,
    multiplier: float = 0.5,
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Create a retry decorator for idempotent workflow reads.

    Retries on httpx transport errors (connection failures, timeouts) only.
    HTTP status errors are answers from the server and are never retried.

    Args:
        max_attempts: Maximum number of attempts
        min_wait: Minimum wait time between retries (seconds)
        max_wait: Maximum wait time between retries (seconds)
        multiplier: Exponential backoff multiplier

    Returns:
        A retry decorator configured with the specified parameters

    Example:
        ```python
        read_retry = create_read_retry(max_attempts=5)

        @read_retry
        async def fetch_inbox():
            ...
        ```
    """
    return retry(
        retry=retry_if_exception_type(httpx.TransportError),
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(multiplier=multiplier, min=min_wait, max=max_wait),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )
