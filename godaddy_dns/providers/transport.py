"""
Rate-limited transport for registrar API calls.

GoDaddy enforces roughly 60 requests per minute, which is honoured here
by spacing outbound calls at least one second apart.
"""

import logging
import threading
import time
from typing import Callable, Optional

import requests

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = 1.0


class RateLimitedTransport:
    """Serializes requests so no two start closer than ``interval`` seconds.

    A single watermark records the earliest time the next call may start.
    Every caller, on every thread, waits on the same lock and watermark.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        interval: float = DEFAULT_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.session = session or requests.Session()
        self.interval = interval
        self._clock = clock
        self._sleep = sleep
        self._lock = threading.Lock()
        self._next_allowed = clock()

    def request(self, method: str, url: str, **kwargs) -> requests.Response:
        """Wait for the throttle, then send the request through the session."""
        with self._lock:
            now = self._clock()
            if now < self._next_allowed:
                delay = self._next_allowed - now
                logger.debug(f"Rate limit: waiting {delay:.3f}s before {method} {url}")
                self._sleep(delay)
                now = self._clock()

            self._next_allowed = now + self.interval
            return self.session.request(method, url, **kwargs)

    def close(self):
        self.session.close()
