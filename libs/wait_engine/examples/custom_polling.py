#!/usr/bin/env python3
"""Poll for an element with a hand-picked interval and raise a caller-defined exception on timeout.

Run with:
    uv run python libs/wait_engine/examples/custom_polling.py --element-id dynamicElement
"""

import argparse

from loguru import logger

from imbue.wait_engine.data_types import Locator
from imbue.wait_engine.logging import setup_logging
from imbue.wait_engine.polling import poll_for_value
from imbue.wait_engine.polling import wait_for_displayed_element
from imbue.wait_engine.probe import BrowserProbe
from imbue.wait_engine.selenium_probe import open_chrome_probe


class ElementNeverAppearedError(Exception):
    """Raised when the element we are polling for does not show up in time."""


def read_title(probe: BrowserProbe) -> str:
    return probe.title


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--url", default="https://www.example.com")
    parser.add_argument("--element-id", default="dynamicElement")
    parser.add_argument("--timeout", type=float, default=10.0)
    args = parser.parse_args()

    setup_logging("DEBUG")

    with open_chrome_probe(args.url) as probe:
        title = poll_for_value(probe, read_title, predicate=lambda value: value != "", poll_interval_seconds=0.25)
        logger.info("Page title: {}", title)

        try:
            element = wait_for_displayed_element(
                probe,
                Locator.by_id(args.element_id),
                timeout_seconds=args.timeout,
                timeout_error_type=ElementNeverAppearedError,
            )
        except ElementNeverAppearedError as e:
            logger.warning("{} (cause: {})", e, e.__cause__)
        else:
            logger.info("Element text: {}", element.text)


if __name__ == "__main__":
    main()
