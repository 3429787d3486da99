from datetime import timedelta
from typing import Any
from typing import Final
from typing import Self

from pydantic import Field
from pydantic import field_validator
from pydantic import model_validator

from imbue.wait_engine.errors import WaitConfigurationError
from imbue.wait_engine.frozen_model import FrozenModel
from imbue.wait_engine.primitives import LocatorStrategy
from imbue.wait_engine.primitives import OutcomeKind

DEFAULT_TIMEOUT_SECONDS: Final[float] = 10.0

# Matches the polling cadence browser automation drivers use by default.
DEFAULT_POLL_INTERVAL_SECONDS: Final[float] = 0.5


class WaitSpec(FrozenModel):
    """Immutable configuration for one logical wait point.

    A spec holds no per-wait state, so a single instance can be reused across any
    number of waits, including concurrent waits on different threads.
    """

    timeout_seconds: float = Field(
        default=DEFAULT_TIMEOUT_SECONDS,
        description="How long to keep polling before giving up. Zero means try exactly once.",
    )
    poll_interval_seconds: float = Field(
        default=DEFAULT_POLL_INTERVAL_SECONDS,
        description="How long to sleep between unsuccessful attempts",
    )
    ignored_exceptions: tuple[type[Exception], ...] = Field(
        default=(),
        description="Exception types treated as 'not yet satisfied' instead of failing the wait",
    )

    @field_validator("timeout_seconds", "poll_interval_seconds", mode="before")
    @classmethod
    def _convert_timedelta(cls, value: Any) -> Any:
        if isinstance(value, timedelta):
            return value.total_seconds()
        return value

    @model_validator(mode="after")
    def _check_durations(self) -> Self:
        # Written as negations so that NaN fails both checks.
        if not self.poll_interval_seconds > 0:
            raise WaitConfigurationError(f"Poll interval must be > 0, got {self.poll_interval_seconds}")
        if not self.timeout_seconds >= 0:
            raise WaitConfigurationError(f"Timeout must be >= 0, got {self.timeout_seconds}")
        return self

    def with_timeout(self, timeout_seconds: float | timedelta) -> "WaitSpec":
        return WaitSpec(
            timeout_seconds=timeout_seconds,
            poll_interval_seconds=self.poll_interval_seconds,
            ignored_exceptions=self.ignored_exceptions,
        )

    def with_poll_interval(self, poll_interval_seconds: float | timedelta) -> "WaitSpec":
        return WaitSpec(
            timeout_seconds=self.timeout_seconds,
            poll_interval_seconds=poll_interval_seconds,
            ignored_exceptions=self.ignored_exceptions,
        )

    def ignoring(self, *exception_types: type[Exception]) -> "WaitSpec":
        """Return a copy that additionally ignores the given exception types."""
        combined = self.ignored_exceptions + tuple(t for t in exception_types if t not in self.ignored_exceptions)
        return WaitSpec(
            timeout_seconds=self.timeout_seconds,
            poll_interval_seconds=self.poll_interval_seconds,
            ignored_exceptions=combined,
        )


class ConditionOutcome(FrozenModel):
    """The result of evaluating a condition once.

    Fatal failures are never represented here: they are raised.
    """

    kind: OutcomeKind
    description: str
    value: Any = None
    error: Exception | None = None

    @property
    def is_success(self) -> bool:
        return self.kind == OutcomeKind.SUCCESS

    @classmethod
    def success(cls, description: str, value: Any) -> "ConditionOutcome":
        return cls(kind=OutcomeKind.SUCCESS, description=description, value=value)

    @classmethod
    def not_yet(cls, description: str, value: Any = None, error: Exception | None = None) -> "ConditionOutcome":
        return cls(kind=OutcomeKind.NOT_YET, description=description, value=value, error=error)

    @classmethod
    def transient(cls, description: str, error: Exception) -> "ConditionOutcome":
        return cls(kind=OutcomeKind.TRANSIENT_FAILURE, description=description, error=error)


class Locator(FrozenModel):
    """Identifies zero or more elements on a page."""

    strategy: LocatorStrategy
    value: str = Field(min_length=1)

    def __str__(self) -> str:
        return f"{self.strategy.lower().replace('_', ' ')}={self.value!r}"

    @classmethod
    def by_id(cls, value: str) -> "Locator":
        return cls(strategy=LocatorStrategy.ID, value=value)

    @classmethod
    def by_css(cls, value: str) -> "Locator":
        return cls(strategy=LocatorStrategy.CSS_SELECTOR, value=value)

    @classmethod
    def by_tag_name(cls, value: str) -> "Locator":
        return cls(strategy=LocatorStrategy.TAG_NAME, value=value)

    @classmethod
    def by_xpath(cls, value: str) -> "Locator":
        return cls(strategy=LocatorStrategy.XPATH, value=value)

    @classmethod
    def by_name(cls, value: str) -> "Locator":
        return cls(strategy=LocatorStrategy.NAME, value=value)

    @classmethod
    def by_class_name(cls, value: str) -> "Locator":
        return cls(strategy=LocatorStrategy.CLASS_NAME, value=value)

    @classmethod
    def by_link_text(cls, value: str) -> "Locator":
        return cls(strategy=LocatorStrategy.LINK_TEXT, value=value)
