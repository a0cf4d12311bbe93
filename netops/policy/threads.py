import logging
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)


class ThreadPolicyType(Enum):
    TABLE = "table"
    AVAILABLE = "available"


@dataclass(frozen=True)
class ThreadSizing:
    threads: int
    warning: Optional[str] = None

    @property
    def usable(self) -> bool:
        return self.threads > 0


def _invalid(value) -> bool:
    return value is None or value != value or value < 0


class ThreadPolicy(ABC):
    """Maps a server's RAM and a payload's RAM cost to a thread count."""

    def size(self, capacity: float, used: float, footprint: float) -> ThreadSizing:
        for name, value in (('capacity', capacity), ('used', used), ('footprint', footprint)):
            if _invalid(value):
                warning = f"Unusable {name} value {value!r}"
                logger.warning(warning)
                return ThreadSizing(0, warning)
        return self._size(capacity, used, footprint)

    @abstractmethod
    def _size(self, capacity: float, used: float, footprint: float) -> ThreadSizing:
        pass

    @staticmethod
    def _zero_footprint() -> ThreadSizing:
        warning = "Payload has 0 RAM usage, defaulting thread count to 1"
        logger.warning(warning)
        return ThreadSizing(1, warning)


class TablePolicy(ThreadPolicy):
    """Fixed counts for small servers, otherwise whole payloads fitting in total RAM."""

    def _size(self, capacity: float, used: float, footprint: float) -> ThreadSizing:
        if capacity < 16:
            return ThreadSizing(1)
        if capacity == 16:
            return ThreadSizing(6)
        if capacity == 32:
            return ThreadSizing(12)
        if footprint == 0:
            return self._zero_footprint()
        return ThreadSizing(math.floor(capacity / footprint))


class AvailableRamPolicy(ThreadPolicy):
    """Whole payloads fitting in free RAM, never less than one."""

    def _size(self, capacity: float, used: float, footprint: float) -> ThreadSizing:
        if footprint == 0:
            return self._zero_footprint()
        return ThreadSizing(max(math.floor((capacity - used) / footprint), 1))


def get_thread_policy(name) -> ThreadPolicy:
    try:
        policy_type = ThreadPolicyType(name)
    except ValueError:
        valid = ", ".join(t.value for t in ThreadPolicyType)
        raise ValueError(f"Unknown thread policy {name!r}, expected one of: {valid}")
    if policy_type == ThreadPolicyType.TABLE:
        return TablePolicy()
    return AvailableRamPolicy()
