from collections.abc import Generator
from typing import Any

import pytest
from loguru import logger

from imbue.wait_engine.testing import FakeClock
from imbue.wait_engine.testing import FakeProbe


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def fake_probe() -> FakeProbe:
    return FakeProbe(title="Example Domain", current_url="https://www.example.com/")


@pytest.fixture
def captured_logs() -> Generator[list[tuple[str, str]], None, None]:
    """Capture (level, message) pairs for everything logged during the test."""
    captured: list[tuple[str, str]] = []

    def sink(message: Any) -> None:
        record = message.record
        captured.append((record["level"].name, record["message"]))

    handler_id = logger.add(sink, level="TRACE", format="{message}")
    yield captured
    logger.remove(handler_id)
