"""Page navigator tests."""

from __future__ import annotations

import pytest
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from propscout.config import Settings
from propscout.scraping.navigator import PageNavigator, PlaywrightSession


class RecordingSession:
    def __init__(self, fail: bool = False) -> None:
        self.calls: list[tuple] = []
        self.fail = fail

    def navigate(self, url, *, wait_until, timeout_ms) -> None:
        self.calls.append(("navigate", url, wait_until, timeout_ms))
        if self.fail:
            raise RuntimeError("net::ERR_TIMED_OUT")

    def wait_for_load(self, state, *, timeout_ms) -> None:
        self.calls.append(("load", state, timeout_ms))

    def wait_for_selector(self, selector, *, timeout_ms) -> bool:
        self.calls.append(("selector", selector, timeout_ms))
        return True

    def pause(self, ms: int) -> None:
        self.calls.append(("pause", ms))


def test_load_and_settle_waits_for_load_then_settle_delay() -> None:
    session = RecordingSession()
    settings = Settings(navigation_timeout_ms=5000, settle_delay_ms=1500)
    PageNavigator(session, settings).load_and_settle("https://example.test/a", wait_until="networkidle")
    assert session.calls == [
        ("navigate", "https://example.test/a", "networkidle", 5000),
        ("load", "domcontentloaded", 5000),
        ("pause", 1500),
    ]


def test_load_and_settle_defaults_to_game_wait_until() -> None:
    session = RecordingSession()
    settings = Settings(game_wait_until="load", settle_delay_ms=0)
    PageNavigator(session, settings).load_and_settle("https://example.test/b")
    assert session.calls[0][2] == "load"
    assert not any(call[0] == "pause" for call in session.calls)


def test_navigation_errors_propagate() -> None:
    session = RecordingSession(fail=True)
    with pytest.raises(RuntimeError):
        PageNavigator(session, Settings(settle_delay_ms=0)).load_and_settle("https://example.test/c")
    assert len(session.calls) == 1


class FakePage:
    def __init__(self, found: bool) -> None:
        self.found = found

    def wait_for_selector(self, selector: str, timeout: int) -> None:
        if not self.found:
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded waiting for {selector}")


def test_playwright_session_reports_missing_selector() -> None:
    assert PlaywrightSession(FakePage(found=True)).wait_for_selector("div", timeout_ms=10) is True
    assert PlaywrightSession(FakePage(found=False)).wait_for_selector("div", timeout_ms=10) is False
