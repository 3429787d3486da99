from collections.abc import Callable
from datetime import timedelta
from threading import Event
from typing import Any
from typing import TypeVar

from imbue.wait_engine.clock import SYSTEM_CLOCK
from imbue.wait_engine.clock import WaitClock
from imbue.wait_engine.conditions import FunctionCondition
from imbue.wait_engine.data_types import DEFAULT_POLL_INTERVAL_SECONDS
from imbue.wait_engine.data_types import Locator
from imbue.wait_engine.data_types import WaitSpec
from imbue.wait_engine.engine import wait_until
from imbue.wait_engine.errors import ElementNotFoundError
from imbue.wait_engine.errors import StaleElementError
from imbue.wait_engine.errors import WaitTimeoutError
from imbue.wait_engine.probe import BrowserProbe
from imbue.wait_engine.probe import ElementHandle

T = TypeVar("T")
P = TypeVar("P")


def poll_for_value(
    probe: P,
    query: Callable[[P], T],
    predicate: Callable[[T], Any] = bool,
    timeout_seconds: float | timedelta = 10.0,
    poll_interval_seconds: float | timedelta = DEFAULT_POLL_INTERVAL_SECONDS,
    timeout_error_type: Callable[[str], Exception] = TimeoutError,
    error_message: str | None = None,
    not_found_exceptions: tuple[type[Exception], ...] = (ElementNotFoundError,),
    cancel_event: Event | None = None,
    clock: WaitClock = SYSTEM_CLOCK,
) -> T:
    """Query the probe at a fixed interval until the predicate accepts the result, then return it.

    This is the hand-written polling loop (query, check, sleep, repeat) expressed in terms of
    wait_until. Lookups that raise one of not_found_exceptions are retried. On timeout the
    caller's own exception type is raised, chained from the WaitTimeoutError that carries
    the diagnostics.
    """
    query_name = getattr(query, "__name__", "query")

    def _check(target: P) -> tuple[T] | None:
        result = query(target)
        # Wrapped in a tuple so that an accepted but falsy result still counts as success.
        return (result,) if predicate(result) else None

    spec = WaitSpec(
        timeout_seconds=timeout_seconds,
        poll_interval_seconds=poll_interval_seconds,
        ignored_exceptions=not_found_exceptions,
    )
    condition = FunctionCondition(description=f"{query_name} to satisfy predicate", fn=_check)
    try:
        (value,) = wait_until(probe, condition, spec, cancel_event=cancel_event, clock=clock)
    except WaitTimeoutError as e:
        raise timeout_error_type(error_message or str(e)) from e
    return value


def wait_for_displayed_element(
    probe: BrowserProbe,
    locator: Locator,
    timeout_seconds: float | timedelta = 10.0,
    poll_interval_seconds: float | timedelta = DEFAULT_POLL_INTERVAL_SECONDS,
    timeout_error_type: Callable[[str], Exception] = TimeoutError,
    cancel_event: Event | None = None,
    clock: WaitClock = SYSTEM_CLOCK,
) -> ElementHandle:
    """Wait for an element to exist and be displayed, raising timeout_error_type if it never is."""

    def find_element(target: BrowserProbe) -> ElementHandle:
        return target.find_element(locator)

    return poll_for_value(
        probe,
        find_element,
        predicate=lambda element: element.is_displayed(),
        timeout_seconds=timeout_seconds,
        poll_interval_seconds=poll_interval_seconds,
        timeout_error_type=timeout_error_type,
        error_message=f"Element {locator} not found within the specified timeout",
        not_found_exceptions=(ElementNotFoundError, StaleElementError),
        cancel_event=cancel_event,
        clock=clock,
    )


def poll_until(
    condition: Callable[[], bool],
    timeout_seconds: float = 5.0,
    poll_interval_seconds: float = 0.1,
    clock: WaitClock = SYSTEM_CLOCK,
) -> bool:
    """Poll a probe-less condition until it becomes true or the timeout expires.

    Returns True if the condition was met, False if the timeout expired.
    """
    spec = WaitSpec(timeout_seconds=timeout_seconds, poll_interval_seconds=poll_interval_seconds)
    try:
        wait_until(
            None,
            FunctionCondition(description=getattr(condition, "__name__", "condition"), fn=lambda _: condition()),
            spec,
            clock=clock,
        )
    except WaitTimeoutError:
        return False
    return True
