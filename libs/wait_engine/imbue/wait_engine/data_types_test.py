import math
from datetime import timedelta

import pytest
from pydantic import ValidationError

from imbue.wait_engine.data_types import ConditionOutcome
from imbue.wait_engine.data_types import DEFAULT_POLL_INTERVAL_SECONDS
from imbue.wait_engine.data_types import Locator
from imbue.wait_engine.data_types import WaitSpec
from imbue.wait_engine.errors import ElementNotFoundError
from imbue.wait_engine.errors import StaleElementError
from imbue.wait_engine.errors import WaitConfigurationError
from imbue.wait_engine.primitives import LocatorStrategy
from imbue.wait_engine.primitives import OutcomeKind


def test_wait_spec_defaults_have_distinct_timeout_and_poll_interval() -> None:
    spec = WaitSpec()

    assert spec.poll_interval_seconds == DEFAULT_POLL_INTERVAL_SECONDS
    assert spec.timeout_seconds != spec.poll_interval_seconds
    assert spec.ignored_exceptions == ()


def test_wait_spec_accepts_timedeltas() -> None:
    spec = WaitSpec(timeout_seconds=timedelta(seconds=30), poll_interval_seconds=timedelta(milliseconds=250))

    assert spec.timeout_seconds == 30.0
    assert spec.poll_interval_seconds == 0.25


@pytest.mark.parametrize("poll_interval", [0, -0.5])
def test_wait_spec_rejects_non_positive_poll_interval(poll_interval: float) -> None:
    with pytest.raises(WaitConfigurationError, match="Poll interval must be > 0"):
        WaitSpec(poll_interval_seconds=poll_interval)


def test_wait_spec_rejects_negative_timeout() -> None:
    with pytest.raises(WaitConfigurationError, match="Timeout must be >= 0"):
        WaitSpec(timeout_seconds=-1)


def test_wait_spec_rejects_nan_durations() -> None:
    with pytest.raises(WaitConfigurationError, match="Timeout must be >= 0"):
        WaitSpec(timeout_seconds=math.nan)
    with pytest.raises(WaitConfigurationError, match="Poll interval must be > 0"):
        WaitSpec(poll_interval_seconds=math.nan)
    with pytest.raises(WaitConfigurationError):
        WaitSpec().with_timeout(math.nan)


def test_wait_spec_allows_zero_timeout() -> None:
    assert WaitSpec(timeout_seconds=0).timeout_seconds == 0.0


def test_wait_spec_is_immutable() -> None:
    spec = WaitSpec()

    with pytest.raises(ValidationError):
        spec.timeout_seconds = 1.0  # type: ignore[misc]


def test_wait_spec_rejects_unknown_fields() -> None:
    with pytest.raises(ValidationError):
        WaitSpec(polling_every=1.0)  # type: ignore[call-arg]


def test_wait_spec_copies_leave_original_untouched() -> None:
    spec = WaitSpec(timeout_seconds=10.0, poll_interval_seconds=0.5)

    longer = spec.with_timeout(30.0)
    faster = spec.with_poll_interval(timedelta(milliseconds=100))

    assert longer.timeout_seconds == 30.0
    assert longer.poll_interval_seconds == 0.5
    assert faster.poll_interval_seconds == 0.1
    assert spec.timeout_seconds == 10.0
    assert spec.poll_interval_seconds == 0.5


def test_wait_spec_copies_are_validated() -> None:
    with pytest.raises(WaitConfigurationError):
        WaitSpec().with_poll_interval(0)


def test_wait_spec_ignoring_adds_exception_types_once() -> None:
    spec = WaitSpec().ignoring(ElementNotFoundError).ignoring(ElementNotFoundError, StaleElementError)

    assert spec.ignored_exceptions == (ElementNotFoundError, StaleElementError)


def test_condition_outcome_constructors() -> None:
    error = ElementNotFoundError("missing")

    assert ConditionOutcome.success("x", 1).is_success
    assert ConditionOutcome.not_yet("x").kind == OutcomeKind.NOT_YET
    transient = ConditionOutcome.transient("x", error)
    assert transient.kind == OutcomeKind.TRANSIENT_FAILURE
    assert transient.error is error
    assert not transient.is_success


def test_locator_constructors_set_strategy() -> None:
    assert Locator.by_id("main").strategy == LocatorStrategy.ID
    assert Locator.by_css(".item").strategy == LocatorStrategy.CSS_SELECTOR
    assert Locator.by_tag_name("p").strategy == LocatorStrategy.TAG_NAME
    assert Locator.by_xpath("//a").strategy == LocatorStrategy.XPATH
    assert Locator.by_name("q").strategy == LocatorStrategy.NAME
    assert Locator.by_class_name("foo").strategy == LocatorStrategy.CLASS_NAME
    assert Locator.by_link_text("More").strategy == LocatorStrategy.LINK_TEXT


def test_locator_str_is_readable() -> None:
    assert str(Locator.by_css(".tabs-content__item")) == "css selector='.tabs-content__item'"


def test_locator_rejects_empty_value() -> None:
    with pytest.raises(ValidationError):
        Locator.by_id("")


def test_locators_are_hashable_and_compare_by_value() -> None:
    assert {Locator.by_id("a"): 1}[Locator.by_id("a")] == 1
