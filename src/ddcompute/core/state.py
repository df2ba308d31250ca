"""
ddcompute - Client State Management

This module holds the mutable configuration block shared by all operations
issued through one client: retry policy, extended-logging flag and the cached
account identity. Every read and write goes through a single lock, which is
never held across network I/O.
"""

import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from .retry import RetryPolicy

if TYPE_CHECKING:
    from ..domains.account import Account


@dataclass
class ClientState:
    """Lock-guarded client configuration and identity cache."""

    retry_policy: RetryPolicy = field(default_factory=RetryPolicy)
    extended_logging: bool = False
    account: Optional["Account"] = None
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def configure_retry(self, max_retry_count: int, retry_delay: float) -> None:
        """Replace the retry policy, coercing invalid values.

        Args:
            max_retry_count: Retries after the first attempt (negative becomes 0)
            retry_delay: Seconds between attempts (negative becomes 5 seconds)
        """
        policy = RetryPolicy.create(max_retry_count, retry_delay)
        with self.lock:
            self.retry_policy = policy

    def set_extended_logging(self, enabled: bool) -> None:
        """Enable or disable request and response logging."""
        with self.lock:
            self.extended_logging = enabled

    def snapshot(self) -> tuple[RetryPolicy, bool]:
        """Return a consistent (retry policy, extended logging) pair."""
        with self.lock:
            return self.retry_policy, self.extended_logging

    def is_extended_logging_enabled(self) -> bool:
        """Check whether extended logging is enabled."""
        with self.lock:
            return self.extended_logging

    def get_account(self) -> Optional["Account"]:
        """Get the cached account.

        Returns:
            The cached account, or None if it has not been fetched since the last reset
        """
        with self.lock:
            return self.account

    def set_account(self, account: Optional["Account"]) -> None:
        """Cache the account (None clears the cache)."""
        with self.lock:
            self.account = account

    def reset(self) -> None:
        """Clear all cached data."""
        with self.lock:
            self.account = None
