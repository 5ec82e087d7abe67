from abc import ABC, abstractmethod
from datetime import datetime

from madarik_identity.domain.base import utcnow


class IClock(ABC):
    """Source of the current time (naive UTC), injectable for tests"""

    @abstractmethod
    def now(self) -> datetime:
        pass


class SystemClock(IClock):
    def now(self) -> datetime:
        return utcnow()
