"""Root conftest that keeps the wait engine's test suite fast."""

import os
import time
from pathlib import Path
from typing import Final
from uuid import uuid4

import pytest

# Most waits run against FakeClock; only a handful of tests sleep for real.
_LOCAL_MAX_DURATION_SECONDS: Final[float] = 30.0
_CI_MAX_DURATION_SECONDS: Final[float] = 60.0

_TEST_OUTPUTS_DIR: Final[Path] = Path(".test_outputs")


def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup("output-to-file", "Options for redirecting output to files")
    group.addoption(
        "--slow-tests-to-file",
        action="store_true",
        default=False,
        help="Write the slowest tests to a file instead of stdout",
    )


@pytest.hookimpl(tryfirst=True)
def pytest_sessionstart(session: pytest.Session) -> None:
    setattr(session, "start_time", time.monotonic())


@pytest.hookimpl(trylast=True)
def pytest_sessionfinish(session: pytest.Session, exitstatus: int) -> None:
    """Fail the run if the whole suite took longer than the configured limit."""
    if not hasattr(session, "start_time"):
        return
    duration = time.monotonic() - session.start_time

    if "PYTEST_MAX_DURATION" in os.environ:
        max_duration = float(os.environ["PYTEST_MAX_DURATION"])
    elif "CI" in os.environ:
        max_duration = _CI_MAX_DURATION_SECONDS
    else:
        max_duration = _LOCAL_MAX_DURATION_SECONDS

    if duration > max_duration:
        pytest.exit(f"Test suite took {duration:.2f}s, exceeding the {max_duration}s limit", returncode=1)


@pytest.hookimpl(trylast=True)
def pytest_terminal_summary(
    terminalreporter: "pytest.TerminalReporter",
    exitstatus: int,
    config: pytest.Config,
) -> None:
    if not config.getoption("--slow-tests-to-file", default=False):
        return

    durations = sorted(
        (
            (report.duration, report.nodeid)
            for reports in terminalreporter.stats.values()
            for report in reports
            if getattr(report, "when", None) == "call"
        ),
        reverse=True,
    )
    if not durations:
        return

    _TEST_OUTPUTS_DIR.mkdir(parents=True, exist_ok=True)
    output_file = _TEST_OUTPUTS_DIR / f"slow_tests_{uuid4().hex}.txt"
    lines = [f"slowest {len(durations)} durations", ""]
    lines.extend(f"{duration:.4f}s {nodeid}" for duration, nodeid in durations)
    output_file.write_text("\n".join(lines))
    terminalreporter.write_line(f"Slow tests report saved to: {output_file}")
