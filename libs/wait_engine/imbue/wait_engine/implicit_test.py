import pytest

from imbue.wait_engine.data_types import Locator
from imbue.wait_engine.data_types import WaitSpec
from imbue.wait_engine.errors import ElementNotFoundError
from imbue.wait_engine.errors import WaitTimeoutError
from imbue.wait_engine.implicit import ImplicitWaitProbe
from imbue.wait_engine.testing import FakeClock
from imbue.wait_engine.testing import FakeElement
from imbue.wait_engine.testing import FakeProbe

_BUTTON = Locator.by_id("myDynamicElement")


def _implicit_probe(fake_probe: FakeProbe, fake_clock: FakeClock, timeout_seconds: float = 10.0) -> ImplicitWaitProbe:
    return ImplicitWaitProbe(fake_probe, WaitSpec(timeout_seconds=timeout_seconds), clock=fake_clock)


def test_find_element_waits_for_element_to_appear(fake_probe: FakeProbe, fake_clock: FakeClock) -> None:
    element = FakeElement(text="ready")
    fake_probe.script_elements(_BUTTON, [], [], [], [element])

    assert _implicit_probe(fake_probe, fake_clock).find_element(_BUTTON) is element
    assert fake_clock.now() == pytest.approx(1.5)


def test_find_element_raises_not_found_after_timeout(fake_probe: FakeProbe, fake_clock: FakeClock) -> None:
    probe = _implicit_probe(fake_probe, fake_clock, timeout_seconds=2.0)

    with pytest.raises(ElementNotFoundError, match="myDynamicElement") as exc_info:
        probe.find_element(_BUTTON)

    assert isinstance(exc_info.value.__cause__, WaitTimeoutError)
    assert fake_clock.now() == pytest.approx(2.0)
    assert fake_probe.lookup_counts[_BUTTON] == 5


def test_find_elements_waits_for_at_least_one(fake_probe: FakeProbe, fake_clock: FakeClock) -> None:
    items = [FakeElement(), FakeElement()]
    fake_probe.script_elements(_BUTTON, [], items)

    assert _implicit_probe(fake_probe, fake_clock).find_elements(_BUTTON) == items


def test_find_elements_returns_empty_list_on_timeout(fake_probe: FakeProbe, fake_clock: FakeClock) -> None:
    assert _implicit_probe(fake_probe, fake_clock, timeout_seconds=1.0).find_elements(_BUTTON) == []
    assert fake_clock.now() == pytest.approx(1.0)


def test_zero_implicit_wait_looks_up_exactly_once(fake_probe: FakeProbe, fake_clock: FakeClock) -> None:
    probe = _implicit_probe(fake_probe, fake_clock).with_implicit_wait(0)

    with pytest.raises(ElementNotFoundError):
        probe.find_element(_BUTTON)

    assert fake_probe.lookup_counts[_BUTTON] == 1
    assert fake_clock.sleeps == []


def test_with_implicit_wait_returns_new_probe(fake_probe: FakeProbe, fake_clock: FakeClock) -> None:
    original = _implicit_probe(fake_probe, fake_clock)

    shorter = original.with_implicit_wait(3.0)

    assert shorter is not original
    assert shorter.spec.timeout_seconds == 3.0
    assert original.spec.timeout_seconds == 10.0
    assert shorter.inner is fake_probe


def test_implicit_probe_always_ignores_missing_elements(fake_probe: FakeProbe, fake_clock: FakeClock) -> None:
    assert ElementNotFoundError in _implicit_probe(fake_probe, fake_clock).spec.ignored_exceptions


def test_page_properties_are_delegated(fake_probe: FakeProbe, fake_clock: FakeClock) -> None:
    probe = _implicit_probe(fake_probe, fake_clock)

    assert probe.title == "Example Domain"
    assert probe.current_url == "https://www.example.com/"
    assert fake_clock.sleeps == []
