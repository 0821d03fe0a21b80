"""
Fixed-window rate limiting keyed by client address.

Two windows are tracked independently in the same in-memory storage:

- general: applied to every request by the middleware in ``main.py``
- contact: applied to contact form submissions only

Counters live for the lifetime of the process and expire on their own when
a window elapses.
"""

import logging
import time
from dataclasses import dataclass
from typing import Optional

from limits import parse
from limits.storage import MemoryStorage, Storage
from limits.strategies import FixedWindowRateLimiter

logger = logging.getLogger(__name__)

GENERAL_SCOPE = "general"
CONTACT_SCOPE = "contact"


@dataclass
class RateLimitResult:
    allowed: bool
    remaining: int
    reset_at: float

    @property
    def retry_after(self) -> int:
        """Whole seconds until the current window resets."""
        return max(0, int(self.reset_at - time.time()) + 1)


class RequestRateLimiter:
    def __init__(self, general_limit: str, contact_limit: str, storage: Optional[Storage] = None):
        self.storage = storage or MemoryStorage()
        self._strategy = FixedWindowRateLimiter(self.storage)
        self._limits = {
            GENERAL_SCOPE: parse(general_limit),
            CONTACT_SCOPE: parse(contact_limit),
        }
        logger.info(f"Rate limiter configured: general={general_limit}, contact={contact_limit}")

    def hit(self, scope: str, client_key: str) -> RateLimitResult:
        """
        Count one request for ``client_key`` against the ``scope`` window.

        Args:
            scope: Either GENERAL_SCOPE or CONTACT_SCOPE
            client_key: Client address the counter is keyed by

        Returns:
            RateLimitResult: whether the request is allowed and when the window resets
        """
        item = self._limits[scope]
        allowed = self._strategy.hit(item, scope, client_key)
        stats = self._strategy.get_window_stats(item, scope, client_key)

        if not allowed:
            logger.warning(f"⛔ {scope} rate limit exceeded for {client_key}")

        return RateLimitResult(allowed=allowed, remaining=stats.remaining, reset_at=stats.reset_time)

    def reset(self):
        self.storage.reset()
