from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date


class ClockPort(ABC):
    @abstractmethod
    def today(self) -> date:
        """Current calendar day in the business timezone."""
        raise NotImplementedError

    @abstractmethod
    def now_ms(self) -> int:
        """Milliseconds since the epoch, used for client-side booking ids."""
        raise NotImplementedError
