"""Page session abstraction and load-settling navigation."""

from __future__ import annotations

import logging
from typing import Any, Protocol

from playwright.sync_api import Page
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from propscout.config import Settings, WaitUntil

logger = logging.getLogger(__name__)


class PageSession(Protocol):
    """Capabilities the collector needs from a browser tab."""

    def navigate(self, url: str, *, wait_until: WaitUntil, timeout_ms: int) -> None: ...

    def wait_for_load(self, state: WaitUntil, *, timeout_ms: int) -> None: ...

    def wait_for_selector(self, selector: str, *, timeout_ms: int) -> bool: ...

    def evaluate(self, script: str, arg: Any = None) -> Any: ...

    def extract_all(self, selector: str, script: str) -> list[Any]: ...

    def pause(self, ms: int) -> None: ...

    def close(self) -> None: ...


class PlaywrightSession:
    """:class:`PageSession` backed by a Playwright sync ``Page``."""

    def __init__(self, page: Page) -> None:
        self.page = page

    def navigate(self, url: str, *, wait_until: WaitUntil, timeout_ms: int) -> None:
        self.page.goto(url, wait_until=wait_until, timeout=timeout_ms)

    def wait_for_load(self, state: WaitUntil, *, timeout_ms: int) -> None:
        self.page.wait_for_load_state(state, timeout=timeout_ms)

    def wait_for_selector(self, selector: str, *, timeout_ms: int) -> bool:
        try:
            self.page.wait_for_selector(selector, timeout=timeout_ms)
        except PlaywrightTimeoutError:
            return False
        return True

    def evaluate(self, script: str, arg: Any = None) -> Any:
        return self.page.evaluate(script, arg)

    def extract_all(self, selector: str, script: str) -> list[Any]:
        return self.page.eval_on_selector_all(selector, script)

    def pause(self, ms: int) -> None:
        self.page.wait_for_timeout(ms)

    def close(self) -> None:
        self.page.close()


class PageNavigator:
    """Drive one session through target URLs with a uniform settle policy.

    Navigation errors are not retried here; they reach the caller.
    """

    def __init__(self, session: PageSession, settings: Settings) -> None:
        self.session = session
        self.settings = settings

    def load_and_settle(self, target: str, wait_until: WaitUntil | None = None) -> None:
        """Navigate to ``target`` and wait until asynchronous rendering has had time to finish."""

        timeout = self.settings.navigation_timeout_ms
        logger.debug("Navigating to %s", target)
        self.session.navigate(target, wait_until=wait_until or self.settings.game_wait_until, timeout_ms=timeout)
        self.session.wait_for_load("domcontentloaded", timeout_ms=timeout)
        if self.settings.settle_delay_ms:
            self.session.pause(self.settings.settle_delay_ms)

    def probe(self, selector: str, timeout_ms: int) -> bool:
        return self.session.wait_for_selector(selector, timeout_ms=timeout_ms)

    def pause(self, ms: int) -> None:
        if ms:
            self.session.pause(ms)
