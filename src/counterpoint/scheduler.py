"""
Request scheduling for the data acquisition layer.

The acquisition collaborator must space its requests (the public artist
database allows one request per second). RequestScheduler keeps the time of
the last request on the instance and takes its clock and sleep functions as
arguments, so tests run without wall-clock delays.
"""

import logging
import time
from typing import Callable, Optional

from .constants import REQUEST_INTERVAL

logger = logging.getLogger(__name__)


class RequestScheduler:
    """Timestamp-gated limiter allowing one request per min_interval."""

    def __init__(
        self,
        min_interval: float = REQUEST_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if min_interval < 0:
            raise ValueError("min_interval must not be negative")
        self.min_interval = min_interval
        self.clock = clock
        self.sleep = sleep
        self.last_request: Optional[float] = None

    def delay(self) -> float:
        """Seconds to wait before the next request may start."""
        if self.last_request is None:
            return 0.0
        elapsed = self.clock() - self.last_request
        return max(0.0, self.min_interval - elapsed)

    def wait(self) -> float:
        """
        Block until the next request may start and record it.

        Returns:
            The number of seconds slept
        """
        remaining = self.delay()
        if remaining > 0:
            logger.debug("Rate limited, sleeping %.3fs", remaining)
            self.sleep(remaining)
        self.last_request = self.clock()
        return remaining
