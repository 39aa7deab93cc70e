"""Chromium acquisition for the crawl."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from playwright.sync_api import Browser, Error as PlaywrightError, Playwright, sync_playwright
from tenacity import RetryCallState, Retrying, retry_if_exception_type, stop_after_attempt, wait_fixed

from propscout.config import Settings
from propscout.scraping.navigator import PlaywrightSession

logger = logging.getLogger(__name__)


def _retry_log(retry_state: RetryCallState) -> None:  # pragma: no cover - logging helper
    attempt = retry_state.attempt_number
    exception = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning("Browser launch attempt %s failed: %s", attempt, exception)


class BrowserHandle:
    """Owns a launched browser and hands out page sessions."""

    def __init__(self, playwright: Playwright, browser: Browser) -> None:
        self._playwright = playwright
        self.browser = browser

    def new_session(self) -> PlaywrightSession:
        return PlaywrightSession(self.browser.new_page())

    def close(self) -> None:
        try:
            self.browser.close()
        finally:
            self._playwright.stop()


def launch_browser(settings: Settings) -> BrowserHandle:
    playwright = sync_playwright().start()
    try:
        retrying = Retrying(
            stop=stop_after_attempt(settings.browser_launch_attempts),
            wait=wait_fixed(1),
            retry=retry_if_exception_type(PlaywrightError),
            after=_retry_log,
            reraise=True,
        )
        browser = retrying(playwright.chromium.launch, headless=settings.headless)
    except Exception:
        playwright.stop()
        raise
    return BrowserHandle(playwright, browser)


@contextmanager
def open_browser(settings: Settings) -> Iterator[BrowserHandle]:
    handle = launch_browser(settings)
    try:
        yield handle
    finally:
        logger.info("Closing browser...")
        handle.close()
