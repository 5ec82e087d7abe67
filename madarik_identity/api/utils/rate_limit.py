"""
Login throttling

Counts login attempts per client address and email inside a sliding
window. State is in-process; each worker keeps its own counts.
"""

import logging
from collections import defaultdict, deque
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Deque, Dict, Optional

logger = logging.getLogger(__name__)


@dataclass
class AttemptLog:
    """Timestamps of recent attempts for one key, oldest first"""

    attempts: Deque[datetime] = field(default_factory=deque)

    def prune(self, now: datetime, window: timedelta):
        while self.attempts and self.attempts[0] <= now - window:
            self.attempts.popleft()


class LoginThrottle:
    """Allows max_attempts logins per key within window"""

    def __init__(self, max_attempts: int = 5, window: timedelta = timedelta(minutes=15)):
        self.max_attempts = max_attempts
        self.window = window
        self.logs: Dict[str, AttemptLog] = defaultdict(AttemptLog)

    @staticmethod
    def key(client_host: Optional[str], email: str) -> str:
        return f"{client_host or 'unknown'}:{email.strip().lower()}"

    def hit(self, key: str, now: datetime) -> bool:
        """Record an attempt; False when the key is over its limit"""
        log = self.logs[key]
        log.prune(now, self.window)

        if len(log.attempts) >= self.max_attempts:
            logger.warning(f"Login throttled for {key}")
            return False

        log.attempts.append(now)
        return True

    def retry_after(self, key: str, now: datetime) -> int:
        """Seconds until the oldest counted attempt leaves the window"""
        log = self.logs.get(key)
        if not log or not log.attempts:
            return 0
        remaining = log.attempts[0] + self.window - now
        return max(int(remaining.total_seconds()), 1)

    def reset(self, key: Optional[str] = None):
        """Forget one key, or every key"""
        if key:
            self.logs.pop(key, None)
        else:
            self.logs.clear()
