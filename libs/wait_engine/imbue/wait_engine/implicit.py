from datetime import timedelta

from imbue.wait_engine.clock import SYSTEM_CLOCK
from imbue.wait_engine.clock import WaitClock
from imbue.wait_engine.conditions import FunctionCondition
from imbue.wait_engine.data_types import Locator
from imbue.wait_engine.data_types import WaitSpec
from imbue.wait_engine.engine import wait_until
from imbue.wait_engine.errors import ElementNotFoundError
from imbue.wait_engine.errors import WaitTimeoutError
from imbue.wait_engine.probe import BrowserProbe
from imbue.wait_engine.probe import ElementHandle


class ImplicitWaitProbe(BrowserProbe):
    """A probe whose element lookups keep retrying until they find something.

    This gives the behavior of a driver-wide implicit wait, but the wait is part of this
    probe object rather than a global setting: changing it means creating a new probe with
    with_implicit_wait(), and the wrapped probe is unaffected.
    """

    def __init__(self, inner: BrowserProbe, spec: WaitSpec, clock: WaitClock = SYSTEM_CLOCK) -> None:
        self._inner = inner
        self._spec = spec.ignoring(ElementNotFoundError)
        self._clock = clock

    @property
    def spec(self) -> WaitSpec:
        return self._spec

    @property
    def inner(self) -> BrowserProbe:
        return self._inner

    def with_implicit_wait(self, timeout_seconds: float | timedelta) -> "ImplicitWaitProbe":
        return ImplicitWaitProbe(self._inner, self._spec.with_timeout(timeout_seconds), self._clock)

    def find_element(self, locator: Locator) -> ElementHandle:
        condition = FunctionCondition(
            description=f"element {locator}",
            fn=lambda probe: probe.find_element(locator),
        )
        try:
            return wait_until(self._inner, condition, self._spec, clock=self._clock)
        except WaitTimeoutError as e:
            raise ElementNotFoundError(
                f"No element matching {locator} after waiting {e.elapsed_seconds:.3f}s"
            ) from e

    def find_elements(self, locator: Locator) -> list[ElementHandle]:
        """Return matching elements, waiting for at least one; an empty list if none appear in time."""
        condition = FunctionCondition(
            description=f"elements {locator}",
            fn=lambda probe: probe.find_elements(locator),
        )
        try:
            return wait_until(self._inner, condition, self._spec, clock=self._clock)
        except WaitTimeoutError:
            return []

    @property
    def title(self) -> str:
        return self._inner.title

    @property
    def current_url(self) -> str:
        return self._inner.current_url
