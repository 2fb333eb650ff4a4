"""
Sliding Window Rate Limiter

This module implements per-partition admission control using a segmented
sliding window. The window is divided into N equal segments; each partition
keeps a count per segment. On every call the ring is advanced to the current
segment (aged-out segments are zeroed) and the request is admitted only if
the sum over all segments is below the limit. Rejected requests are never
queued.

Compared with a fixed-window counter, which can admit up to 2x the limit
around a window boundary, the sliding window bounds admissions within any
window to the limit.

Pattern: Strategy pattern for algorithm selection
Pattern: Per-partition locking for atomic read-check-increment
"""

import math
import threading
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Optional

from sum_mcp.observability.logging import get_logger

logger = get_logger(__name__)

# Partition shared by every caller that sends no credential
ANONYMOUS_PARTITION = "anon"


def partition_key_for(credential: Optional[str]) -> str:
    """
    Derive the rate-limit partition key for a caller.

    All callers without a credential share one anonymous partition. This
    under-protects against many distinct anonymous clients but keeps the
    partition table bounded in the basic configuration.

    Args:
        credential: Value of the credential header, if any.

    Returns:
        The credential when present and non-blank, else ``"anon"``.
    """
    if credential is None or not credential.strip():
        return ANONYMOUS_PARTITION
    return credential


# =============================================================================
# Rate Limit Result
# =============================================================================


@dataclass
class RateLimitResult:
    """
    Result of a rate limit check.

    Attributes:
        allowed: Whether the request is admitted
        limit: Maximum admissions per window
        remaining: Admissions left in the current window
        reset_at: Unix timestamp when the oldest counted segment ages out
        retry_after: Seconds to wait before retrying (if rejected)
    """

    allowed: bool
    limit: int
    remaining: int
    reset_at: int
    retry_after: Optional[int] = None


# =============================================================================
# Rate Limiter Interface
# =============================================================================


class RateLimiter(ABC):
    """
    Abstract interface for rate limiting algorithms.

    Implementations:
    - SlidingWindowRateLimiter: in-process, segmented sliding window
    """

    @abstractmethod
    def try_acquire(self, partition_key: str) -> RateLimitResult:
        """
        Admit or reject one request for the given partition.

        Args:
            partition_key: Identity the limit is scoped to.

        Returns:
            RateLimitResult with the admission decision.
        """


# =============================================================================
# Per-partition state
# =============================================================================


class _PartitionWindow:
    """Ring of segment counters for one partition."""

    __slots__ = ("counts", "last_tick", "lock")

    def __init__(self, segments: int, tick: int) -> None:
        self.counts = [0] * segments
        self.last_tick = tick
        self.lock = threading.Lock()

    def advance(self, tick: int) -> None:
        """Zero every segment that aged out between last_tick and tick."""
        segments = len(self.counts)
        elapsed = tick - self.last_tick
        if elapsed <= 0:
            return
        for step in range(1, min(elapsed, segments) + 1):
            self.counts[(self.last_tick + step) % segments] = 0
        self.last_tick = tick

    def oldest_live_tick(self, tick: int) -> Optional[int]:
        """Tick of the oldest segment still holding admissions."""
        segments = len(self.counts)
        for candidate in range(tick - segments + 1, tick + 1):
            if self.counts[candidate % segments] > 0:
                return candidate
        return None


# =============================================================================
# Sliding Window Implementation
# =============================================================================


class SlidingWindowRateLimiter(RateLimiter):
    """
    In-memory sliding window rate limiter.

    Reference configuration: 10 admissions per 10 second window split in
    10 segments.

    Partitions are created lazily on first use and kept for the process
    lifetime. The per-partition lock makes the read-check-increment
    sequence atomic, so concurrent requests can neither lose an update nor
    be admitted past the limit.

    Note: Suitable for single-instance deployments.
    """

    def __init__(
        self,
        permit_limit: int = 10,
        window_seconds: float = 10.0,
        segments_per_window: int = 10,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Initialize the rate limiter.

        Args:
            permit_limit: Maximum admissions within one window.
            window_seconds: Window length in seconds.
            segments_per_window: Number of equal segments in the window.
            clock: Monotonic time source in seconds.
        """
        if permit_limit < 1:
            raise ValueError("permit_limit must be at least 1")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive")
        if segments_per_window < 1:
            raise ValueError("segments_per_window must be at least 1")

        self.permit_limit = permit_limit
        self.window_seconds = window_seconds
        self.segments_per_window = segments_per_window
        self._segment_seconds = window_seconds / segments_per_window
        self._clock = clock
        self._partitions: dict[str, _PartitionWindow] = {}
        self._partitions_lock = threading.Lock()

    def _tick(self, now: float) -> int:
        return math.floor(now / self._segment_seconds)

    def _get_partition(self, partition_key: str, tick: int) -> _PartitionWindow:
        # Brief global lock, only to create the partition once
        with self._partitions_lock:
            window = self._partitions.get(partition_key)
            if window is None:
                window = _PartitionWindow(self.segments_per_window, tick)
                self._partitions[partition_key] = window
            return window

    @property
    def partition_count(self) -> int:
        """Number of partitions observed so far."""
        return len(self._partitions)

    def try_acquire(self, partition_key: str) -> RateLimitResult:
        """
        Admit or reject one request using the sliding window.

        Args:
            partition_key: Partition identity (credential or ``"anon"``).

        Returns:
            RateLimitResult with the admission decision.
        """
        now = self._clock()
        tick = self._tick(now)
        window = self._get_partition(partition_key, tick)

        with window.lock:
            window.advance(tick)
            used = sum(window.counts)
            allowed = used < self.permit_limit
            if allowed:
                window.counts[tick % self.segments_per_window] += 1
                used += 1

            oldest = window.oldest_live_tick(tick)
            if oldest is None:
                seconds_to_reset = 0.0
            else:
                expires_at = (oldest + self.segments_per_window) * self._segment_seconds
                seconds_to_reset = max(expires_at - now, 0.0)

        reset_at = int(time.time() + seconds_to_reset)
        if allowed:
            return RateLimitResult(
                allowed=True,
                limit=self.permit_limit,
                remaining=self.permit_limit - used,
                reset_at=reset_at,
            )

        logger.warning(
            "rate limit exceeded",
            partition=partition_key if partition_key == ANONYMOUS_PARTITION else "<credential>",
            limit=self.permit_limit,
            window_seconds=self.window_seconds,
        )
        return RateLimitResult(
            allowed=False,
            limit=self.permit_limit,
            remaining=0,
            reset_at=reset_at,
            retry_after=max(1, math.ceil(seconds_to_reset)),
        )
