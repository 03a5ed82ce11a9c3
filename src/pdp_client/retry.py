"""Retry policy for PDP requests.

Bounded attempts with exponential backoff, applied to TransportError only.
Anything else (serialization, configuration, decoding, error statuses)
propagates on first occurrence.

Backoff before attempt n (1-indexed, n >= 2):

    min(backoff_ms * 2 ** (n - 2), backoff_ms * attempts + 1)

e.g. backoff_ms=250, attempts=4: 250ms, 500ms, 1000ms (cap 1001ms).
"""

from __future__ import annotations

__all__ = ["RetryPolicy"]

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TypeVar

from pdp_client.constants import DEFAULT_RETRY_BACKOFF_MILLISECONDS, DEFAULT_RETRY_MAX_ATTEMPTS
from pdp_client.exceptions import TransportError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    """Exponential backoff over transport failures.

    Holds configuration only; attempt counters live in each call() so one
    policy can serve concurrent evaluations.

    Attributes:
        max_attempts: Attempts per call, first try included. 0 and 1 both mean
            a single attempt; negative values fall back to the default.
        backoff_ms: Base delay in milliseconds; negative values fall back to
            the default.
        sleep: Sleep function taking seconds (injectable for tests).
    """

    max_attempts: int = DEFAULT_RETRY_MAX_ATTEMPTS
    backoff_ms: int = DEFAULT_RETRY_BACKOFF_MILLISECONDS
    sleep: Callable[[float], None] = field(default=time.sleep, repr=False, compare=False)

    @property
    def attempts(self) -> int:
        """Effective number of attempts (always >= 1)."""
        if self.max_attempts < 0:
            return DEFAULT_RETRY_MAX_ATTEMPTS
        return max(self.max_attempts, 1)

    @property
    def effective_backoff_ms(self) -> int:
        """Effective base backoff (always >= 0)."""
        if self.backoff_ms < 0:
            return DEFAULT_RETRY_BACKOFF_MILLISECONDS
        return self.backoff_ms

    @property
    def max_delay_ms(self) -> int:
        """Upper bound of any single backoff delay."""
        return self.effective_backoff_ms * self.attempts + 1

    def delay_ms(self, attempt: int) -> int:
        """Delay in milliseconds before the given attempt (1-indexed).

        The first attempt has no delay.
        """
        if attempt <= 1:
            return 0
        return min(self.effective_backoff_ms * 2 ** (attempt - 2), self.max_delay_ms)

    def call(self, action: Callable[[], T]) -> T:
        """Run action, retrying on TransportError.

        Args:
            action: Zero-argument callable performing one attempt.

        Returns:
            The first successful result.

        Raises:
            TransportError: From the final attempt, if every attempt failed.
            Exception: Any non-transport error, on first occurrence.
        """
        attempts = self.attempts
        attempt = 1
        while True:
            try:
                return action()
            except TransportError as e:
                if attempt >= attempts:
                    raise
                delay = self.delay_ms(attempt + 1)
                logger.warning(f"{e} (attempt {attempt}/{attempts}, retrying in {delay}ms)")
                self.sleep(delay / 1000)
                attempt += 1

    def wrap(self, action: Callable[[], T]) -> Callable[[], T]:
        """Return a callable that runs action under this policy."""

        def with_retries() -> T:
            return self.call(action)

        return with_retries
