"""Deterministic fakes for testing waits without a browser or real time."""

from collections import defaultdict
from collections.abc import Sequence
from threading import Event

from imbue.wait_engine.clock import WaitClock
from imbue.wait_engine.data_types import Locator
from imbue.wait_engine.errors import ElementNotFoundError
from imbue.wait_engine.errors import StaleElementError
from imbue.wait_engine.probe import BrowserProbe
from imbue.wait_engine.probe import ElementHandle


class FakeClock(WaitClock):
    """A clock that only moves when something sleeps on it.

    Every requested sleep is recorded, so tests can assert on the exact cadence.
    """

    def __init__(self, start: float = 0.0) -> None:
        self._now = start
        self.sleeps: list[float] = []

    def now(self) -> float:
        return self._now

    def advance(self, seconds: float) -> None:
        self._now += seconds

    def sleep(self, seconds: float, cancel_event: Event | None) -> bool:
        if cancel_event is not None and cancel_event.is_set():
            return True
        self.sleeps.append(seconds)
        self._now += seconds
        return False


class FakeElement(ElementHandle):
    def __init__(
        self,
        text: str = "",
        is_displayed: bool = True,
        is_enabled: bool = True,
        attributes: dict[str, str] | None = None,
        is_stale: bool = False,
    ) -> None:
        self._text = text
        self.displayed = is_displayed
        self.enabled = is_enabled
        self.attributes = dict(attributes or {})
        self.is_stale = is_stale

    def _check_stale(self) -> None:
        if self.is_stale:
            raise StaleElementError("element is no longer attached to the page")

    def is_displayed(self) -> bool:
        self._check_stale()
        return self.displayed

    def is_enabled(self) -> bool:
        self._check_stale()
        return self.enabled

    @property
    def text(self) -> str:
        self._check_stale()
        return self._text

    def get_attribute(self, name: str) -> str | None:
        self._check_stale()
        return self.attributes.get(name)


class FakeProbe(BrowserProbe):
    """An in-memory page.

    Elements for a locator can be set directly, or scripted as a sequence of snapshots:
    each lookup consumes the next snapshot and the last one repeats forever.
    """

    def __init__(self, title: str = "", current_url: str = "about:blank") -> None:
        self._title = title
        self._current_url = current_url
        self._snapshots: dict[Locator, list[list[FakeElement]]] = {}
        self.lookup_counts: dict[Locator, int] = defaultdict(int)

    def set_title(self, title: str) -> None:
        self._title = title

    def set_current_url(self, url: str) -> None:
        self._current_url = url

    def set_elements(self, locator: Locator, elements: Sequence[FakeElement]) -> None:
        self._snapshots[locator] = [list(elements)]

    def script_elements(self, locator: Locator, *snapshots: Sequence[FakeElement]) -> None:
        self._snapshots[locator] = [list(snapshot) for snapshot in snapshots]

    def _lookup(self, locator: Locator) -> list[FakeElement]:
        self.lookup_counts[locator] += 1
        snapshots = self._snapshots.get(locator)
        if not snapshots:
            return []
        if len(snapshots) > 1:
            return snapshots.pop(0)
        return snapshots[0]

    def find_element(self, locator: Locator) -> ElementHandle:
        elements = self._lookup(locator)
        if not elements:
            raise ElementNotFoundError(f"No element matching {locator}")
        return elements[0]

    def find_elements(self, locator: Locator) -> list[ElementHandle]:
        return list(self._lookup(locator))

    @property
    def title(self) -> str:
        return self._title

    @property
    def current_url(self) -> str:
        return self._current_url
