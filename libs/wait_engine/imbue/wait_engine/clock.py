import time
from abc import ABC
from abc import abstractmethod
from threading import Event


class WaitClock(ABC):
    """Source of monotonic time and interruptible sleep for the wait engine."""

    @abstractmethod
    def now(self) -> float:
        """Return the current monotonic time in seconds."""
        ...

    @abstractmethod
    def sleep(self, seconds: float, cancel_event: Event | None) -> bool:
        """Block for up to the given number of seconds.

        Returns True if the sleep ended early because cancel_event was set.
        """
        ...


class MonotonicClock(WaitClock):
    """The real clock: time.monotonic for timing, Event.wait for sleeping.

    Holds no state, so one instance can be shared by every wait in the process.
    """

    def now(self) -> float:
        return time.monotonic()

    def sleep(self, seconds: float, cancel_event: Event | None) -> bool:
        if seconds <= 0:
            return cancel_event is not None and cancel_event.is_set()
        if cancel_event is None:
            Event().wait(timeout=seconds)
            return False
        return cancel_event.wait(timeout=seconds)


SYSTEM_CLOCK = MonotonicClock()
