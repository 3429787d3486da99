#!/usr/bin/env python3
"""Compose conditions with and_/or_/not_ (or &, |, ~) and wait for the combination.

Run with:
    uv run python libs/wait_engine/examples/combined_conditions.py
"""

import argparse

from loguru import logger

from imbue.wait_engine.conditions import and_
from imbue.wait_engine.conditions import as_condition
from imbue.wait_engine.conditions import or_
from imbue.wait_engine.data_types import Locator
from imbue.wait_engine.engine import wait_until
from imbue.wait_engine.expected_conditions import browser_wait_spec
from imbue.wait_engine.expected_conditions import invisibility_of_element_located
from imbue.wait_engine.expected_conditions import presence_of_element_located
from imbue.wait_engine.expected_conditions import title_is
from imbue.wait_engine.expected_conditions import url_contains
from imbue.wait_engine.logging import setup_logging
from imbue.wait_engine.probe import BrowserProbe
from imbue.wait_engine.selenium_probe import open_chrome_probe


def has_more_information_link(probe: BrowserProbe) -> bool:
    return any("More information" in link.text for link in probe.find_elements(Locator.by_tag_name("a")))


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--url", default="https://www.example.com")
    args = parser.parse_args()

    setup_logging("DEBUG")
    spec = browser_wait_spec(10)

    with open_chrome_probe(args.url) as probe:
        page_ready = and_(
            title_is("Example Domain"),
            presence_of_element_located(Locator.by_tag_name("p")),
            url_contains("example.com"),
        )
        _, paragraph, _ = wait_until(probe, page_ready, spec)
        logger.info("Page ready, first paragraph: {!r}", paragraph.text[:40])

        either_heading = or_(
            presence_of_element_located(Locator.by_tag_name("h1")),
            presence_of_element_located(Locator.by_tag_name("h2")),
        )
        wait_until(probe, either_heading, spec)

        no_spinner = invisibility_of_element_located(Locator.by_class_name("loading-spinner"))
        wait_until(probe, no_spinner & as_condition(has_more_information_link), spec)
        wait_until(probe, ~title_is("Loading..."), spec)
        logger.info("All combined conditions satisfied")


if __name__ == "__main__":
    main()
