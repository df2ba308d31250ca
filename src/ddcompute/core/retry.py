"""
ddcompute - Retry Mechanism

This module provides the bounded retry loop used for transport-level failures.

Only failures that occur before an HTTP response is received (connection
refused, DNS failure, timeouts) are retried. Any HTTP response, whatever
its status code, ends the loop.
"""

import logging
import time
from dataclasses import dataclass
from typing import Callable, TypeVar

import httpx

from ..shared.constants import (
    DEFAULT_MAX_RETRY_COUNT,
    DEFAULT_RETRY_DELAY,
    INVALID_RETRY_DELAY_FALLBACK,
)
from .exceptions import NetworkError

logger = logging.getLogger("ddcompute")

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    """Fixed-count retry configuration.

    Attributes:
        max_retry_count: Number of retries after the first attempt (0 disables retry)
        retry_delay: Delay in seconds between attempts
    """

    max_retry_count: int = DEFAULT_MAX_RETRY_COUNT
    retry_delay: float = DEFAULT_RETRY_DELAY

    @classmethod
    def create(cls, max_retry_count: int, retry_delay: float) -> "RetryPolicy":
        """Build a policy, coercing invalid values.

        A negative retry count becomes 0; a negative delay becomes the
        5-second fallback.
        """
        if max_retry_count < 0:
            max_retry_count = 0
        if retry_delay < 0:
            retry_delay = INVALID_RETRY_DELAY_FALLBACK
        return cls(max_retry_count=max_retry_count, retry_delay=float(retry_delay))


def send_with_retry(
    send: Callable[[], T],
    method: str,
    url: str,
    retry_policy: RetryPolicy,
    extended_logging: bool = False,
) -> T:
    """Invoke ``send`` and retry transport failures up to the policy's bound.

    Args:
        send: Callable performing a single attempt
        method: HTTP method (for logging and error context)
        url: Request URL (for logging and error context)
        retry_policy: Retry count and delay
        extended_logging: Whether to log each retry attempt

    Returns:
        Result of the first successful attempt

    Raises:
        NetworkError: If every attempt failed at the transport level
    """
    try:
        return send()
    except httpx.TransportError as e:
        last_error: Exception = e
        logger.warning(f"Unexpected error while performing '{method}' request to '{url}': {e}.")

    for attempt in range(1, retry_policy.max_retry_count + 1):
        if retry_policy.retry_delay > 0:
            time.sleep(retry_policy.retry_delay)

        if extended_logging:
            remaining = retry_policy.max_retry_count - attempt
            logger.info(f"Retrying '{method}' request to '{url}' ({remaining} retries remaining)...")

        try:
            result = send()
        except httpx.TransportError as e:
            last_error = e
            if extended_logging:
                logger.info(f"Still failing - '{method}' request to '{url}': {e}.")
            continue

        if extended_logging:
            logger.info(f"'{method}' request to '{url}' succeeded.")
        return result

    raise NetworkError(method, url, last_error) from last_error
