"""
security/rate_limiter.py
-------------------------
Throttles repeated failed logins for the same email.
Counts failures within a sliding time window.
"""

import time
from collections import defaultdict
from typing import Callable

from utils.logger import get_logger

logger = get_logger(__name__)


class LoginRateLimiter:
    """
    Blocks an email after too many failed logins within a window.

    Args:
        max_attempts: Failures allowed per window.
        window_seconds: Window duration in seconds.
        clock: Time source, in seconds.

    Behavior:
        - Tracks failure timestamps per email (case-insensitive).
        - A successful login resets the email's history.
    """

    def __init__(self, max_attempts: int = 5, window_seconds: int = 300,
                 clock: Callable[[], float] = time.monotonic):
        self.max_attempts = max_attempts
        self.window_seconds = window_seconds
        self._clock = clock
        # {email: [timestamp1, timestamp2, ...]}
        self._failures: dict[str, list[float]] = defaultdict(list)

    def _cleanup(self, key: str) -> None:
        """Remove expired timestamps for an email."""
        cutoff = self._clock() - self.window_seconds
        self._failures[key] = [t for t in self._failures[key] if t > cutoff]
        if not self._failures[key]:
            del self._failures[key]

    def is_blocked(self, email: str) -> bool:
        key = email.lower()
        self._cleanup(key)
        if len(self._failures.get(key, [])) >= self.max_attempts:
            logger.warning(f"Login rate limit hit for {key}")
            return True
        return False

    def _prune(self) -> None:
        """Drop every email whose failures have all expired."""
        cutoff = self._clock() - self.window_seconds
        expired = [k for k, stamps in self._failures.items() if not stamps or stamps[-1] <= cutoff]
        for key in expired:
            del self._failures[key]

    def record_failure(self, email: str) -> None:
        self._prune()
        self._failures[email.lower()].append(self._clock())

    def tracked(self) -> int:
        """Number of emails with failures still inside the window."""
        self._prune()
        return len(self._failures)

    def reset(self, email: str) -> None:
        self._failures.pop(email.lower(), None)
