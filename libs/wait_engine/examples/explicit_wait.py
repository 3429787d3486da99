#!/usr/bin/env python3
"""Wait for page-level and element-level conditions against a real Chrome session.

Run with:
    uv run python libs/wait_engine/examples/explicit_wait.py --url https://www.example.com
"""

import argparse

from loguru import logger

from imbue.wait_engine.data_types import Locator
from imbue.wait_engine.engine import WaitEngine
from imbue.wait_engine.expected_conditions import browser_wait_spec
from imbue.wait_engine.expected_conditions import presence_of_element_located
from imbue.wait_engine.expected_conditions import text_to_be_present_in_element
from imbue.wait_engine.expected_conditions import title_contains
from imbue.wait_engine.expected_conditions import visibility_of_element_located
from imbue.wait_engine.logging import forward_selenium_logging
from imbue.wait_engine.logging import setup_logging
from imbue.wait_engine.selenium_probe import open_chrome_probe


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--url", default="https://www.example.com")
    parser.add_argument("--timeout", type=float, default=10.0)
    parser.add_argument("--log-level", default="DEBUG")
    parser.add_argument("--show-browser", action="store_true")
    args = parser.parse_args()

    setup_logging(args.log_level)
    forward_selenium_logging()

    with open_chrome_probe(args.url, is_headless=not args.show_browser) as probe:
        waits = WaitEngine(probe=probe, spec=browser_wait_spec(args.timeout))

        waits.until(title_contains("Example"))
        heading = waits.until(visibility_of_element_located(Locator.by_tag_name("h1")))
        logger.info("Heading: {}", heading.text)

        waits.until(presence_of_element_located(Locator.by_tag_name("p")))
        waits.until(
            text_to_be_present_in_element(Locator.by_tag_name("p"), "illustrative examples"),
            message="Paragraph text never appeared",
        )
        logger.info("All conditions satisfied on {}", probe.current_url)


if __name__ == "__main__":
    main()
