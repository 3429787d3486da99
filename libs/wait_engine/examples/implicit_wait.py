#!/usr/bin/env python3
"""Give every element lookup an implicit wait, and shorten it for one part of the page.

Run with:
    uv run python libs/wait_engine/examples/implicit_wait.py
"""

import argparse

from loguru import logger

from imbue.wait_engine.data_types import Locator
from imbue.wait_engine.data_types import WaitSpec
from imbue.wait_engine.errors import ElementNotFoundError
from imbue.wait_engine.implicit import ImplicitWaitProbe
from imbue.wait_engine.logging import setup_logging
from imbue.wait_engine.selenium_probe import open_chrome_probe


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--url", default="https://www.example.com")
    parser.add_argument("--implicit-wait", type=float, default=10.0)
    args = parser.parse_args()

    setup_logging("DEBUG")

    with open_chrome_probe(args.url) as browser:
        probe = ImplicitWaitProbe(browser, WaitSpec(timeout_seconds=args.implicit_wait))
        logger.info("Heading: {}", probe.find_element(Locator.by_tag_name("h1")).text)

        quick_probe = probe.with_implicit_wait(1)
        try:
            quick_probe.find_element(Locator.by_id("myDynamicElement"))
        except ElementNotFoundError as e:
            logger.info("As expected: {}", e)

        links = probe.find_elements(Locator.by_tag_name("a"))
        logger.info("Found {} link(s) with a {}s implicit wait", len(links), probe.spec.timeout_seconds)


if __name__ == "__main__":
    main()
