from threading import Event
from typing import Any
from typing import Final

from loguru import logger
from pydantic import Field

from imbue.wait_engine.clock import SYSTEM_CLOCK
from imbue.wait_engine.clock import WaitClock
from imbue.wait_engine.conditions import ConditionLike
from imbue.wait_engine.conditions import as_condition
from imbue.wait_engine.conditions import not_
from imbue.wait_engine.data_types import ConditionOutcome
from imbue.wait_engine.data_types import WaitSpec
from imbue.wait_engine.errors import ConditionFailedError
from imbue.wait_engine.errors import WaitCancelledError
from imbue.wait_engine.errors import WaitTimeoutError
from imbue.wait_engine.frozen_model import FrozenModel
from imbue.wait_engine.logging import log_span

DEFAULT_WAIT_SPEC: Final[WaitSpec] = WaitSpec()


def wait_until(
    probe: Any,
    condition: ConditionLike,
    spec: WaitSpec = DEFAULT_WAIT_SPEC,
    message: str | None = None,
    cancel_event: Event | None = None,
    clock: WaitClock = SYSTEM_CLOCK,
) -> Any:
    """Evaluate condition against probe until it is satisfied or the spec's deadline passes.

    The first attempt happens immediately. After every unsuccessful attempt the deadline is
    checked, so at least one attempt is always made, even with a zero timeout. Between
    attempts the calling thread sleeps for the poll interval, clamped so that the final
    sleep ends at the deadline.

    Returns the value produced by the successful attempt.
    Raises WaitTimeoutError if the deadline passes first, ConditionFailedError if the
    condition raises an exception that the spec does not ignore, and WaitCancelledError if
    cancel_event is set while waiting.
    """
    resolved = as_condition(condition)
    description = resolved.description
    start = clock.now()
    deadline = start + spec.timeout_seconds
    attempt_count = 0
    last_outcome: ConditionOutcome | None = None
    is_final_sleep_done = False

    with log_span("Waiting up to {}s for {}", spec.timeout_seconds, description):
        while True:
            if cancel_event is not None and cancel_event.is_set():
                raise WaitCancelledError(description, clock.now() - start, attempt_count)

            attempt_count += 1
            try:
                outcome = resolved.evaluate(probe, spec.ignored_exceptions)
            except Exception as e:
                logger.debug("Condition {} raised {} on attempt {}", description, type(e).__name__, attempt_count)
                raise ConditionFailedError(description, attempt_count) from e

            if outcome.is_success:
                logger.trace("Condition {} satisfied on attempt {}", description, attempt_count)
                return outcome.value

            last_outcome = outcome
            now = clock.now()
            logger.trace(
                "Condition {} not satisfied on attempt {} ({})", description, attempt_count, outcome.kind.lower()
            )
            if is_final_sleep_done or now >= deadline:
                elapsed = now - start
                logger.debug(
                    "Timed out waiting for {} after {:.3f}s and {} attempt(s)", description, elapsed, attempt_count
                )
                raise WaitTimeoutError(
                    condition_description=description,
                    elapsed_seconds=elapsed,
                    attempt_count=attempt_count,
                    last_outcome=last_outcome,
                    message=message,
                )

            remaining = deadline - now
            if remaining <= spec.poll_interval_seconds:
                sleep_seconds = remaining
                is_final_sleep_done = True
            else:
                sleep_seconds = spec.poll_interval_seconds
            if clock.sleep(sleep_seconds, cancel_event):
                raise WaitCancelledError(description, clock.now() - start, attempt_count)


class WaitEngine(FrozenModel):
    """Binds a probe, a spec and a clock so that several waits can share them.

    Every call to until() starts a fresh polling loop with its own deadline; nothing
    carries over between calls.
    """

    probe: Any
    spec: WaitSpec = Field(default=DEFAULT_WAIT_SPEC)
    clock: WaitClock = Field(default=SYSTEM_CLOCK)

    def until(
        self,
        condition: ConditionLike,
        message: str | None = None,
        cancel_event: Event | None = None,
    ) -> Any:
        return wait_until(self.probe, condition, self.spec, message, cancel_event, self.clock)

    def until_not(
        self,
        condition: ConditionLike,
        message: str | None = None,
        cancel_event: Event | None = None,
    ) -> Any:
        """Wait until the condition is no longer satisfied."""
        return self.until(not_(condition), message, cancel_event)
