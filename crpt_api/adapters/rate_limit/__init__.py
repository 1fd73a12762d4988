"""Rate limiting adapters.

A small abstraction layer so the submitter can block on an in-process sliding
window limiter today and on a different admission strategy later.
"""

from crpt_api.adapters.rate_limit.base import AbstractRateLimiter
from crpt_api.adapters.rate_limit.sliding_window import SlidingWindowRateLimiter

__all__ = [
    "AbstractRateLimiter",
    "SlidingWindowRateLimiter",
]
