from enum import StrEnum
from enum import auto


class _UpperCaseStrEnum(StrEnum):
    @staticmethod
    def _generate_next_value_(
        name: str,
        start: int,
        count: int,
        last_values: list[str],
    ) -> str:
        return name.upper()


class OutcomeKind(_UpperCaseStrEnum):
    """How a single evaluation of a condition turned out."""

    SUCCESS = auto()
    NOT_YET = auto()
    TRANSIENT_FAILURE = auto()


class LocatorStrategy(_UpperCaseStrEnum):
    """How an element locator should be interpreted by a probe."""

    ID = auto()
    CSS_SELECTOR = auto()
    TAG_NAME = auto()
    XPATH = auto()
    NAME = auto()
    CLASS_NAME = auto()
    LINK_TEXT = auto()


class LogLevel(_UpperCaseStrEnum):
    """Log verbosity level."""

    TRACE = auto()
    DEBUG = auto()
    INFO = auto()
    WARNING = auto()
    ERROR = auto()
