#!/usr/bin/env python3
"""Wait for a collection of elements to reach an expected size, with a fast poll interval.

Run with:
    uv run python libs/wait_engine/examples/collection_wait.py --selector 'p' --count 2
"""

import argparse
from datetime import timedelta

from loguru import logger

from imbue.wait_engine.data_types import Locator
from imbue.wait_engine.engine import WaitEngine
from imbue.wait_engine.errors import WaitTimeoutError
from imbue.wait_engine.expected_conditions import browser_wait_spec
from imbue.wait_engine.expected_conditions import number_of_elements_to_be
from imbue.wait_engine.expected_conditions import presence_of_all_elements_located
from imbue.wait_engine.logging import setup_logging
from imbue.wait_engine.selenium_probe import open_chrome_probe


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--url", default="https://www.example.com")
    parser.add_argument("--selector", default=".tabs-content__item")
    parser.add_argument("--count", type=int, default=10)
    args = parser.parse_args()

    setup_logging("DEBUG")
    locator = Locator.by_css(args.selector)
    spec = browser_wait_spec(5).with_poll_interval(timedelta(milliseconds=100))

    with open_chrome_probe(args.url) as probe:
        waits = WaitEngine(probe=probe, spec=spec)
        elements = waits.until(presence_of_all_elements_located(locator))
        logger.info("Found {} element(s) matching {}", len(elements), locator)
        try:
            elements = waits.until(number_of_elements_to_be(locator, args.count))
        except WaitTimeoutError as e:
            logger.warning("{}", e)
        else:
            for element in elements:
                logger.info("- {}", element.text)


if __name__ == "__main__":
    main()
