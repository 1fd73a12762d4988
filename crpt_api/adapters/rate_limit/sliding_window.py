"""In-memory sliding-window rate limiter.

Notes:
- Per-process only: separate processes each enforce their own window.
- Thread-safe: admissions are checked and recorded under one condition lock,
  which is released while a caller waits for the oldest admission to expire.
- Blocking: callers over the limit wait instead of being rejected.
"""

from __future__ import annotations

import logging
import threading
import time
from collections import deque
from datetime import timedelta
from typing import Callable

from crpt_api.adapters.rate_limit.base import AbstractRateLimiter
from crpt_api.core.errors import CancelledAppError, ConfigurationAppError

logger = logging.getLogger(__name__)

_MAX_WAIT_SECONDS = min(3600.0, threading.TIMEOUT_MAX)


def _to_seconds(window: timedelta | float) -> float:
    """Normalize a window given as timedelta or seconds.

    Raises:
        ConfigurationAppError: If the window is not a positive duration.
    """
    if isinstance(window, timedelta):
        seconds = window.total_seconds()
    elif isinstance(window, (int, float)) and not isinstance(window, bool):
        seconds = float(window)
    else:
        raise ConfigurationAppError(
            code="invalid_configuration",
            message=f"window must be a timedelta or a number of seconds, got {type(window).__name__}",
        )

    if not seconds > 0:
        raise ConfigurationAppError(
            code="invalid_configuration",
            message="window must be positive",
            details={"context": {"window_seconds": seconds}},
        )
    return seconds


class SlidingWindowRateLimiter(AbstractRateLimiter):
    """Admit at most ``limit`` operations in any trailing ``window``.

    Every admission is timestamped and kept in a deque, oldest first. Before a
    decision the deque is pruned of entries at least one window old; a caller
    is admitted only if the remaining entries leave room. Otherwise it sleeps
    until the oldest entry would expire and then re-checks from scratch, since
    other callers may have taken the slot in the meantime.

    Example:
        >>> limiter = SlidingWindowRateLimiter(timedelta(minutes=1), 10)
        >>> limiter.acquire()  # blocks while 10 calls happened in the last minute
    """

    def __init__(
        self,
        window: timedelta | float,
        limit: int,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the limiter.

        Args:
            window: Length of the rolling window (timedelta or seconds).
            limit: Maximum admissions per window.
            clock: Time source returning seconds; monotonic by default.

        Raises:
            ConfigurationAppError: If window or limit are not positive.
        """
        if isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0:
            raise ConfigurationAppError(
                code="invalid_configuration",
                message="limit must be a positive integer",
                details={"context": {"limit": repr(limit)}},
            )

        self._window = _to_seconds(window)
        self._limit = limit
        self._clock = clock
        self._cond = threading.Condition(threading.Lock())
        self._admissions: deque[float] = deque()
        self._closed = False

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def window_seconds(self) -> float:
        return self._window

    def _prune(self, now: float) -> None:
        # Caller holds the lock. Entries are chronological, so stale ones sit at the front.
        while self._admissions and now - self._admissions[0] >= self._window:
            self._admissions.popleft()

    def _cancelled(self, reason: str, **context: float) -> CancelledAppError:
        logger.warning(
            "rate_limit.cancelled",
            extra={"reason": reason, "limit": self._limit, "window_s": self._window, **context},
        )
        return CancelledAppError(
            code="acquire_cancelled",
            message=f"Wait for a rate limit slot was cancelled: {reason}",
            details={"context": {"operation": "acquire", "reason": reason, **context}},
        )

    def acquire(self, timeout: float | None = None) -> None:
        """Block until an admission slot is free, then record the admission.

        Args:
            timeout: Maximum seconds to wait. ``None`` waits indefinitely.

        Raises:
            CancelledAppError: If the limiter was shut down or the timeout
                expired first. The admission log is left untouched.
        """
        started = self._clock()
        deadline = None if timeout is None else started + max(0.0, timeout)

        with self._cond:
            while True:
                if self._closed:
                    raise self._cancelled("shutdown")

                now = self._clock()
                self._prune(now)

                if len(self._admissions) < self._limit:
                    self._admissions.append(now)
                    in_window = len(self._admissions)
                    break

                wait_for = self._window - (now - self._admissions[0])
                if wait_for <= 0:
                    # Head went stale between prune and check (clock jump); recompute.
                    continue

                if deadline is not None:
                    remaining = deadline - now
                    if remaining <= 0:
                        raise self._cancelled("timeout", timeout_s=timeout)
                    wait_for = min(wait_for, remaining)

                # Condition.wait overflows on huge timeouts; the loop re-checks after a capped wait.
                wait_for = min(wait_for, _MAX_WAIT_SECONDS)

                logger.debug(
                    "rate_limit.waiting",
                    extra={"wait_s": round(wait_for, 6), "limit": self._limit},
                )
                self._cond.wait(wait_for)

        logger.debug(
            "rate_limit.acquired",
            extra={
                "waited_ms": round((now - started) * 1000, 3),
                "in_window": in_window,
                "limit": self._limit,
            },
        )

    def available(self) -> int:
        """Return how many slots are free right now."""
        with self._cond:
            self._prune(self._clock())
            return self._limit - len(self._admissions)

    def shutdown(self) -> None:
        """Cancel every pending and future ``acquire()`` call."""
        with self._cond:
            self._closed = True
            self._cond.notify_all()
