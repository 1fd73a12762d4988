"""Rate limiter interfaces.

The submitter depends on this abstraction (not the concrete implementation)
so the admission strategy can be swapped or faked in tests.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class AbstractRateLimiter(ABC):
    """Interface for blocking admission control."""

    @abstractmethod
    def acquire(self, timeout: float | None = None) -> None:
        """Block until the caller may proceed, then record the admission.

        Args:
            timeout: Maximum seconds to wait for a slot. ``None`` waits
                until a slot frees up or the limiter is shut down.

        Raises:
            CancelledAppError: If the wait was abandoned (deadline reached or
                limiter shut down). No slot is consumed in that case.
        """
        raise NotImplementedError

    @abstractmethod
    def shutdown(self) -> None:
        """Wake all waiters and refuse further admissions."""
        raise NotImplementedError

    @property
    @abstractmethod
    def limit(self) -> int:
        """Maximum admissions per window."""

    @property
    @abstractmethod
    def window_seconds(self) -> float:
        """Window length in seconds."""

    @abstractmethod
    def available(self) -> int:
        """Return the number of slots free at this instant."""
        raise NotImplementedError
