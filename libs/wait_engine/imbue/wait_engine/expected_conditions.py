"""Ready-made conditions for waiting on a BrowserProbe.

Conditions that look up an element let ElementNotFoundError escape, so they are meant to
be used with a spec that ignores it (see browser_wait_spec). A stale element counts as
'not yet'.
"""

import re
from datetime import timedelta

from imbue.wait_engine.conditions import Condition
from imbue.wait_engine.conditions import FunctionCondition
from imbue.wait_engine.data_types import DEFAULT_POLL_INTERVAL_SECONDS
from imbue.wait_engine.data_types import Locator
from imbue.wait_engine.data_types import WaitSpec
from imbue.wait_engine.errors import ElementNotFoundError
from imbue.wait_engine.errors import StaleElementError
from imbue.wait_engine.probe import BrowserProbe
from imbue.wait_engine.probe import ElementHandle


def browser_wait_spec(
    timeout_seconds: float | timedelta,
    poll_interval_seconds: float | timedelta = DEFAULT_POLL_INTERVAL_SECONDS,
) -> WaitSpec:
    """Build a spec that treats a missing element as 'not yet', like a browser driver's explicit wait."""
    return WaitSpec(
        timeout_seconds=timeout_seconds,
        poll_interval_seconds=poll_interval_seconds,
        ignored_exceptions=(ElementNotFoundError,),
    )


def title_is(title: str) -> Condition:
    def _predicate(probe: BrowserProbe) -> bool:
        return probe.title == title

    return FunctionCondition(description=f"title to be {title!r}", fn=_predicate)


def title_contains(fragment: str) -> Condition:
    def _predicate(probe: BrowserProbe) -> bool:
        return fragment in probe.title

    return FunctionCondition(description=f"title to contain {fragment!r}", fn=_predicate)


def url_contains(fragment: str) -> Condition:
    def _predicate(probe: BrowserProbe) -> bool:
        return fragment in probe.current_url

    return FunctionCondition(description=f"url to contain {fragment!r}", fn=_predicate)


def url_matches(pattern: str) -> Condition:
    compiled = re.compile(pattern)

    def _predicate(probe: BrowserProbe) -> bool:
        return compiled.search(probe.current_url) is not None

    return FunctionCondition(description=f"url to match {pattern!r}", fn=_predicate)


def presence_of_element_located(locator: Locator) -> Condition:
    """Satisfied with the element once it exists, whether or not it is visible."""

    def _predicate(probe: BrowserProbe) -> ElementHandle:
        return probe.find_element(locator)

    return FunctionCondition(description=f"presence of element {locator}", fn=_predicate)


def presence_of_all_elements_located(locator: Locator) -> Condition:
    """Satisfied with the list of matching elements once there is at least one."""

    def _predicate(probe: BrowserProbe) -> list[ElementHandle]:
        return probe.find_elements(locator)

    return FunctionCondition(description=f"presence of elements {locator}", fn=_predicate)


def visibility_of_element_located(locator: Locator) -> Condition:
    def _predicate(probe: BrowserProbe) -> ElementHandle | bool:
        try:
            element = probe.find_element(locator)
            return element if element.is_displayed() else False
        except StaleElementError:
            return False

    return FunctionCondition(description=f"visibility of element {locator}", fn=_predicate)


def element_to_be_clickable(locator: Locator) -> Condition:
    """Satisfied with the element once it is both displayed and enabled."""

    def _predicate(probe: BrowserProbe) -> ElementHandle | bool:
        try:
            element = probe.find_element(locator)
            if element.is_displayed() and element.is_enabled():
                return element
            return False
        except StaleElementError:
            return False

    return FunctionCondition(description=f"element {locator} to be clickable", fn=_predicate)


def text_to_be_present_in_element(locator: Locator, text: str) -> Condition:
    def _predicate(probe: BrowserProbe) -> bool:
        try:
            return text in probe.find_element(locator).text
        except StaleElementError:
            return False

    return FunctionCondition(description=f"text {text!r} to be present in element {locator}", fn=_predicate)


def text_length_greater_than(locator: Locator, length: int) -> Condition:
    def _predicate(probe: BrowserProbe) -> bool:
        try:
            return len(probe.find_element(locator).text) > length
        except StaleElementError:
            return False

    return FunctionCondition(description=f"text of element {locator} to be longer than {length}", fn=_predicate)


def number_of_elements_to_be(locator: Locator, count: int) -> Condition:
    """Satisfied with the list of matching elements once there are exactly `count` of them.

    When count is zero there is no list worth returning, so the value is True.
    """

    def _predicate(probe: BrowserProbe) -> list[ElementHandle] | bool:
        elements = probe.find_elements(locator)
        if len(elements) != count:
            return False
        return elements or True

    return FunctionCondition(description=f"number of elements {locator} to be {count}", fn=_predicate)


def invisibility_of_element_located(locator: Locator) -> Condition:
    """Satisfied once the element is hidden, stale or absent from the page."""

    def _predicate(probe: BrowserProbe) -> bool:
        try:
            return not probe.find_element(locator).is_displayed()
        except (ElementNotFoundError, StaleElementError):
            return True

    return FunctionCondition(description=f"invisibility of element {locator}", fn=_predicate)


def element_attribute_to_include(locator: Locator, attribute: str) -> Condition:
    def _predicate(probe: BrowserProbe) -> bool:
        try:
            return probe.find_element(locator).get_attribute(attribute) is not None
        except StaleElementError:
            return False

    return FunctionCondition(description=f"element {locator} to have attribute {attribute!r}", fn=_predicate)
