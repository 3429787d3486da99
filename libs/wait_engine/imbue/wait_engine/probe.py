from abc import ABC
from abc import abstractmethod

from imbue.wait_engine.data_types import Locator


class ElementHandle(ABC):
    """Interface for an element found by a probe.

    Accessors may raise StaleElementError if the element has gone away since it was found.
    """

    @abstractmethod
    def is_displayed(self) -> bool: ...

    @abstractmethod
    def is_enabled(self) -> bool: ...

    @property
    @abstractmethod
    def text(self) -> str: ...

    @abstractmethod
    def get_attribute(self, name: str) -> str | None: ...


class BrowserProbe(ABC):
    """Interface for the automation session that browser conditions are evaluated against.

    The wait engine itself never calls these methods; only conditions do. Closing the
    underlying session is the caller's responsibility.
    """

    @abstractmethod
    def find_element(self, locator: Locator) -> ElementHandle:
        """Return the first element matching the locator.

        Raises ElementNotFoundError if there is none.
        """
        ...

    @abstractmethod
    def find_elements(self, locator: Locator) -> list[ElementHandle]:
        """Return every element matching the locator, or an empty list."""
        ...

    @property
    @abstractmethod
    def title(self) -> str: ...

    @property
    @abstractmethod
    def current_url(self) -> str: ...
