from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from imbue.wait_engine.data_types import ConditionOutcome


class BaseWaitError(Exception):
    """Base exception for all wait engine errors."""


class WaitConfigurationError(BaseWaitError):
    """Raised when a wait is configured with invalid values.

    This is raised when a spec, combinator or config file is constructed, never
    while polling.
    """


class ConfigNotFoundError(WaitConfigurationError):
    """Raised when a wait config file does not exist."""


class ConfigParseError(WaitConfigurationError):
    """Raised when a wait config file cannot be parsed or contains invalid values."""


class WaitTimeoutError(BaseWaitError, TimeoutError):
    """Raised when the deadline passes before the condition was satisfied.

    Carries enough diagnostics to explain what was being waited for, for how long,
    and what the condition looked like on the final attempt.
    """

    def __init__(
        self,
        condition_description: str,
        elapsed_seconds: float,
        attempt_count: int,
        last_outcome: "ConditionOutcome | None" = None,
        message: str | None = None,
    ) -> None:
        self.condition_description = condition_description
        self.elapsed_seconds = elapsed_seconds
        self.attempt_count = attempt_count
        self.last_outcome = last_outcome
        self.message = message
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        headline = self.message or f"Timed out waiting for {self.condition_description}"
        msg = f"{headline} (waited {self.elapsed_seconds:.3f}s over {self.attempt_count} attempt(s))"
        if self.last_outcome is not None and self.last_outcome.error is not None:
            error = self.last_outcome.error
            msg += f"; last error: {type(error).__name__}: {error}"
        return msg

    def __str__(self) -> str:
        return self._format_message()


class ConditionFailedError(BaseWaitError):
    """Raised when a condition raises an exception that the wait does not ignore.

    The original exception is available as __cause__. Polling stops immediately.
    """

    def __init__(self, condition_description: str, attempt_count: int) -> None:
        self.condition_description = condition_description
        self.attempt_count = attempt_count
        super().__init__(f"Condition {condition_description} failed on attempt {attempt_count}")


class WaitCancelledError(BaseWaitError):
    """Raised when a wait is asked to stop before it finished."""

    def __init__(self, condition_description: str, elapsed_seconds: float, attempt_count: int) -> None:
        self.condition_description = condition_description
        self.elapsed_seconds = elapsed_seconds
        self.attempt_count = attempt_count
        super().__init__(
            f"Wait for {condition_description} was cancelled after {elapsed_seconds:.3f}s "
            f"and {attempt_count} attempt(s)"
        )


class ElementLookupError(BaseWaitError):
    """Base class for transient failures raised at the probe boundary."""


class ElementNotFoundError(ElementLookupError):
    """Raised when a probe cannot find an element for a locator."""


class StaleElementError(ElementLookupError):
    """Raised when an element handle no longer refers to a live element."""
