import os
import re
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any
from typing import Final

from pydantic import Field

from imbue.wait_engine.data_types import WaitSpec
from imbue.wait_engine.errors import ConfigNotFoundError
from imbue.wait_engine.errors import ConfigParseError
from imbue.wait_engine.errors import ElementLookupError
from imbue.wait_engine.errors import ElementNotFoundError
from imbue.wait_engine.errors import StaleElementError
from imbue.wait_engine.errors import WaitConfigurationError
from imbue.wait_engine.frozen_model import FrozenModel
from imbue.wait_engine.primitives import LogLevel

# Overrides the [logging] level from the config file.
LOG_LEVEL_ENV_VAR: Final[str] = "WAIT_ENGINE_LOG_LEVEL"

_DURATION_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"(?:(\d+)\s*h)?\s*(?:(\d+)\s*m(?!s))?\s*(?:(\d+(?:\.\d+)?)\s*s)?\s*(?:(\d+)\s*ms)?$",
    re.IGNORECASE,
)

# Names that may appear in a wait profile's `ignore` list.
_IGNORABLE_EXCEPTIONS: Final[dict[str, type[Exception]]] = {
    "element_not_found": ElementNotFoundError,
    "stale_element": StaleElementError,
    "element_lookup": ElementLookupError,
}

_TOP_LEVEL_KEYS: Final[frozenset[str]] = frozenset({"logging", "waits"})
_LOGGING_KEYS: Final[frozenset[str]] = frozenset({"level"})
_WAIT_KEYS: Final[frozenset[str]] = frozenset({"timeout", "poll_interval", "ignore"})


def parse_duration_to_seconds(duration: str | int | float) -> float:
    """Parse a duration into seconds.

    Numbers (and numeric strings) are seconds. Strings may also combine hours (h),
    minutes (m), seconds (s) and milliseconds (ms), e.g. '500ms', '1m30s', '2.5s'.
    Zero is allowed, since a zero timeout means 'try once'.
    """
    if isinstance(duration, bool):
        raise ConfigParseError(f"Invalid duration: {duration!r}")
    if isinstance(duration, (int, float)):
        if not duration >= 0:
            raise ConfigParseError(f"Invalid duration: {duration!r}. Duration must be a non-negative number.")
        return float(duration)
    if not isinstance(duration, str):
        raise ConfigParseError(f"Invalid duration: {duration!r}. Expected a number or a string like '2.5s'.")

    stripped = duration.strip()
    if not stripped:
        raise ConfigParseError(f"Invalid duration: '{duration}' (empty string)")

    try:
        plain_seconds = float(stripped)
    except ValueError:
        pass
    else:
        if not plain_seconds >= 0:
            raise ConfigParseError(f"Invalid duration: '{duration}'. Duration must be a non-negative number.")
        return plain_seconds

    match = _DURATION_PATTERN.match(stripped)
    if match is None or match.group(0) == "":
        raise ConfigParseError(
            f"Invalid duration: '{duration}'. Expected format like '10', '2.5s', '500ms', '1m30s', '1h'."
        )

    hours = int(match.group(1)) if match.group(1) else 0
    minutes = int(match.group(2)) if match.group(2) else 0
    seconds = float(match.group(3)) if match.group(3) else 0.0
    milliseconds = int(match.group(4)) if match.group(4) else 0
    return hours * 3600 + minutes * 60 + seconds + milliseconds / 1000


class WaitConfig(FrozenModel):
    """Named wait profiles and logging settings loaded from a TOML file."""

    log_level: LogLevel = LogLevel.INFO
    waits: dict[str, WaitSpec] = Field(default_factory=dict)

    def get_spec(self, name: str) -> WaitSpec:
        try:
            return self.waits[name]
        except KeyError:
            raise WaitConfigurationError(
                f"Unknown wait profile '{name}'. Known profiles: {sorted(self.waits)}"
            ) from None


def load_wait_config(path: Path, environ: Mapping[str, str] | None = None) -> WaitConfig:
    """Load wait profiles from a TOML file.

    Example:
        [logging]
        level = "DEBUG"

        [waits.default]
        timeout = "10s"
        poll_interval = "500ms"
        ignore = ["element_not_found"]
    """
    env = os.environ if environ is None else environ
    raw = _load_toml(path)
    _check_unknown_keys(raw, _TOP_LEVEL_KEYS, "config")

    raw_logging = _require_table(raw.get("logging", {}), "[logging]")
    _check_unknown_keys(raw_logging, _LOGGING_KEYS, "[logging]")
    log_level = _parse_log_level(env.get(LOG_LEVEL_ENV_VAR) or raw_logging.get("level", LogLevel.INFO))

    raw_waits = _require_table(raw.get("waits", {}), "[waits]")
    waits = {
        name: _parse_wait_spec(name, _require_table(raw_wait, f"[waits.{name}]"))
        for name, raw_wait in raw_waits.items()
    }
    return WaitConfig(log_level=log_level, waits=waits)


def _load_toml(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise ConfigNotFoundError(f"Config file not found: {path}")

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Failed to parse {path}: {e}") from e


def _require_table(value: Any, context: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigParseError(f"Expected {context} to be a table, got {type(value).__name__}: {value!r}")
    return value


def _check_unknown_keys(raw: Mapping[str, Any], known_keys: frozenset[str], context: str) -> None:
    unknown = set(raw.keys()) - known_keys
    if unknown:
        raise ConfigParseError(f"Unknown fields in {context}: {sorted(unknown)}. Valid fields: {sorted(known_keys)}")


def _parse_log_level(raw_level: str) -> LogLevel:
    try:
        return LogLevel(str(raw_level).upper())
    except ValueError:
        raise ConfigParseError(
            f"Invalid log level '{raw_level}'. Valid levels: {[level.value for level in LogLevel]}"
        ) from None


def _parse_wait_spec(name: str, raw_wait: Mapping[str, Any]) -> WaitSpec:
    context = f"[waits.{name}]"
    _check_unknown_keys(raw_wait, _WAIT_KEYS, context)

    raw_ignore = raw_wait.get("ignore", [])
    if not isinstance(raw_ignore, list):
        raise ConfigParseError(f"Expected 'ignore' in {context} to be a list of names, got {raw_ignore!r}")

    ignored: list[type[Exception]] = []
    for ignore_name in raw_ignore:
        if not isinstance(ignore_name, str) or ignore_name not in _IGNORABLE_EXCEPTIONS:
            raise ConfigParseError(
                f"Unknown exception name '{ignore_name}' in {context}. "
                f"Valid names: {sorted(_IGNORABLE_EXCEPTIONS)}"
            )
        ignored.append(_IGNORABLE_EXCEPTIONS[ignore_name])

    spec_kwargs: dict[str, Any] = {"ignored_exceptions": tuple(ignored)}
    if "timeout" in raw_wait:
        spec_kwargs["timeout_seconds"] = parse_duration_to_seconds(raw_wait["timeout"])
    if "poll_interval" in raw_wait:
        spec_kwargs["poll_interval_seconds"] = parse_duration_to_seconds(raw_wait["poll_interval"])

    try:
        return WaitSpec(**spec_kwargs)
    except WaitConfigurationError as e:
        raise ConfigParseError(f"Invalid wait profile {context}: {e}") from e
