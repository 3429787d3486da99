from collections.abc import Iterator
from contextlib import contextmanager
from typing import Final

from loguru import logger
from selenium import webdriver
from selenium.common.exceptions import NoSuchElementException
from selenium.common.exceptions import StaleElementReferenceException
from selenium.webdriver.common.by import By
from selenium.webdriver.remote.webdriver import WebDriver
from selenium.webdriver.remote.webelement import WebElement

from imbue.wait_engine.data_types import Locator
from imbue.wait_engine.errors import ElementNotFoundError
from imbue.wait_engine.errors import StaleElementError
from imbue.wait_engine.logging import log_span
from imbue.wait_engine.primitives import LocatorStrategy
from imbue.wait_engine.probe import BrowserProbe
from imbue.wait_engine.probe import ElementHandle

_BY_FOR_STRATEGY: Final[dict[LocatorStrategy, str]] = {
    LocatorStrategy.ID: By.ID,
    LocatorStrategy.CSS_SELECTOR: By.CSS_SELECTOR,
    LocatorStrategy.TAG_NAME: By.TAG_NAME,
    LocatorStrategy.XPATH: By.XPATH,
    LocatorStrategy.NAME: By.NAME,
    LocatorStrategy.CLASS_NAME: By.CLASS_NAME,
    LocatorStrategy.LINK_TEXT: By.LINK_TEXT,
}


def to_selenium_locator(locator: Locator) -> tuple[str, str]:
    return _BY_FOR_STRATEGY[locator.strategy], locator.value


class SeleniumElement(ElementHandle):
    """ElementHandle backed by a Selenium WebElement."""

    def __init__(self, element: WebElement) -> None:
        self._element = element

    @property
    def web_element(self) -> WebElement:
        return self._element

    def is_displayed(self) -> bool:
        try:
            return self._element.is_displayed()
        except StaleElementReferenceException as e:
            raise StaleElementError(str(e)) from e

    def is_enabled(self) -> bool:
        try:
            return self._element.is_enabled()
        except StaleElementReferenceException as e:
            raise StaleElementError(str(e)) from e

    @property
    def text(self) -> str:
        try:
            return self._element.text
        except StaleElementReferenceException as e:
            raise StaleElementError(str(e)) from e

    def get_attribute(self, name: str) -> str | None:
        try:
            return self._element.get_attribute(name)
        except StaleElementReferenceException as e:
            raise StaleElementError(str(e)) from e


class SeleniumProbe(BrowserProbe):
    """BrowserProbe backed by a Selenium WebDriver.

    Translates Selenium's lookup exceptions into ElementNotFoundError and StaleElementError
    so that wait specs can ignore them without depending on Selenium.
    """

    def __init__(self, driver: WebDriver) -> None:
        self._driver = driver

    @property
    def driver(self) -> WebDriver:
        return self._driver

    def find_element(self, locator: Locator) -> ElementHandle:
        try:
            return SeleniumElement(self._driver.find_element(*to_selenium_locator(locator)))
        except NoSuchElementException as e:
            raise ElementNotFoundError(f"No element matching {locator}") from e

    def find_elements(self, locator: Locator) -> list[ElementHandle]:
        return [SeleniumElement(element) for element in self._driver.find_elements(*to_selenium_locator(locator))]

    @property
    def title(self) -> str:
        return self._driver.title

    @property
    def current_url(self) -> str:
        return self._driver.current_url


@contextmanager
def open_chrome_probe(url: str | None = None, is_headless: bool = True) -> Iterator[SeleniumProbe]:
    """Start Chrome, optionally open a page, and quit the browser when the block exits.

    The browser lives for the whole block so that any number of waits can share it.
    """
    options = webdriver.ChromeOptions()
    if is_headless:
        options.add_argument("--headless=new")
    with log_span("Starting Chrome"):
        driver = webdriver.Chrome(options=options)
    try:
        if url is not None:
            logger.debug("Opening {}", url)
            driver.get(url)
        yield SeleniumProbe(driver)
    finally:
        driver.quit()
