# ================================================================================
# Rate Limit Retry Policy
# ================================================================================
#
# Backoff settings used by the HTTP client when the API answers 429.
#
# On 429 the client waits an increasing interval, up to max_attempts requests,
# before failing with RateLimitExceeded. A Retry-After header larger than the
# computed interval wins, capped at max_interval.
#
# Usage:
#   policy = RetryPolicy.from_config(config)
#   wait = policy.interval_for(attempt=0, retry_after="5")
#
# ================================================================================

import random
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class RetryPolicy:
    """
    Configuration for 429 retries.

    Attributes:
        max_attempts: Total number of requests sent before giving up
        initial_interval: Wait after the first 429, in seconds
        multiplier: Growth factor between consecutive waits
        max_interval: Upper bound for a single wait, in seconds
        jitter: Add +/- 25% random jitter to each wait
    """
    max_attempts: int = 5
    initial_interval: float = 2.0
    multiplier: float = 2.0
    max_interval: float = 60.0
    jitter: bool = False

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.initial_interval < 0 or self.max_interval < 0:
            raise ValueError("intervals must be non-negative")
        if self.multiplier < 1:
            raise ValueError("multiplier must be >= 1 so waits never shrink")

    @classmethod
    def from_config(cls, config) -> "RetryPolicy":
        """Build a policy from ``api.retry.*`` configuration keys."""
        return cls(
            max_attempts=int(config.get("api.retry.max_attempts", 5)),
            initial_interval=float(config.get("api.retry.initial_interval", 2.0)),
            multiplier=float(config.get("api.retry.multiplier", 2.0)),
            max_interval=float(config.get("api.retry.max_interval", 60.0)),
        )

    def backoff(self, attempt: int) -> float:
        """
        Exponential wait for a zero-based attempt number.

        Formula: initial * (multiplier ^ attempt), capped at max_interval
        """
        wait_time = min(
            self.initial_interval * (self.multiplier ** attempt),
            self.max_interval,
        )
        if self.jitter:
            wait_time = wait_time * (0.75 + random.random() * 0.5)
        return wait_time

    def interval_for(self, attempt: int, retry_after: Optional[str] = None) -> float:
        """
        Wait time before the next request after a 429.

        Args:
            attempt: Zero-based index of the request that was rate limited
            retry_after: Raw Retry-After header value (seconds), if any
        """
        wait_time = self.backoff(attempt)
        server_hint = parse_retry_after(retry_after)
        if server_hint is not None:
            wait_time = max(wait_time, server_hint)
        return min(wait_time, self.max_interval)


def parse_retry_after(value: Optional[str]) -> Optional[float]:
    """
    Parse a Retry-After header given in seconds.

    HTTP-date values and garbage are ignored (returns None).
    """
    if not value:
        return None
    try:
        seconds = float(value)
    except ValueError:
        return None
    return seconds if seconds >= 0 else None


__all__ = [
    "RetryPolicy",
    "parse_retry_after",
]
