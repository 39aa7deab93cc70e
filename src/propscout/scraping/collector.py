"""Crawl a league's game pages and collect player proposition records."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Protocol
from urllib.parse import urljoin

from propscout.config import Settings, get_settings
from propscout.parlays.types import PropBet
from propscout.scraping.markup import (
    EXPAND_ROWS_SCRIPT,
    GAME_HREFS_SCRIPT,
    PINNACLE_MARKUP,
    SiteMarkup,
    raw_row_from_payload,
    row_text_script,
)
from propscout.scraping.navigator import PageNavigator, PageSession
from propscout.scraping.normalizer import normalize_row, to_prop_bets

logger = logging.getLogger(__name__)


class ScrapeError(Exception):
    """Base error for crawl failures."""


class DiscoveryError(ScrapeError):
    """The league index yielded no game links."""


class GameStatus(str, Enum):
    SUCCESS = "success"
    SKIPPED = "skipped"
    RECOVERED = "recovered"


@dataclass
class GameResult:
    index: int
    url: str | None
    status: GameStatus
    props: list[PropBet] = field(default_factory=list)
    error: str | None = None


@dataclass
class CrawlReport:
    league_url: str
    games: list[GameResult] = field(default_factory=list)
    error: str | None = None

    @property
    def props(self) -> list[PropBet]:
        return [prop for game in self.games for prop in game.props]

    def _count(self, status: GameStatus) -> int:
        return sum(1 for game in self.games if game.status is status)

    @property
    def succeeded(self) -> int:
        return self._count(GameStatus.SUCCESS)

    @property
    def skipped(self) -> int:
        return self._count(GameStatus.SKIPPED)

    @property
    def recovered(self) -> int:
        return self._count(GameStatus.RECOVERED)


def utc_timestamp(moment: datetime | None = None) -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a ``Z`` suffix."""

    moment = moment or datetime.now(timezone.utc)
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class PropositionCollector:
    """Sequential crawl over every game linked from the league index.

    The index page is home: every game visit ends by navigating back to it.
    ``crawl`` and ``collect`` never raise.
    """

    def __init__(
        self,
        session: PageSession,
        settings: Settings | None = None,
        markup: SiteMarkup = PINNACLE_MARKUP,
        now_fn: Callable[[], datetime] | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.session = session
        self.navigator = PageNavigator(session, self.settings)
        self.markup = markup
        self._now = now_fn or (lambda: datetime.now(timezone.utc))

    def collect(self) -> list[PropBet]:
        return self.crawl().props

    def crawl(self) -> CrawlReport:
        league_url = self.settings.league_url
        report = CrawlReport(league_url=league_url)
        logger.info("Starting %s props scraping at %s", self.settings.market, league_url)
        try:
            links = self.discover_games()
            for index, href in enumerate(links, start=1):
                report.games.append(self.process_game(index, href, len(links)))
        except Exception as exc:
            logger.exception("Fatal scraping error for %s", self.settings.market)
            return CrawlReport(league_url=league_url, error=str(exc))
        logger.info(
            "Scraping complete: %s props from %s games (%s ok, %s skipped, %s recovered)",
            len(report.props),
            len(report.games),
            report.succeeded,
            report.skipped,
            report.recovered,
        )
        return report

    def discover_games(self) -> list[str | None]:
        """Snapshot the game links present on the index page."""

        self.navigator.load_and_settle(self.settings.league_url, wait_until=self.settings.index_wait_until)
        if not self.navigator.probe(self.markup.game_link, self.settings.discovery_timeout_ms):
            raise DiscoveryError(f"No game links found at {self.settings.league_url}")
        links = list(self.session.extract_all(self.markup.game_link, GAME_HREFS_SCRIPT))
        logger.info("Found %s games", len(links))
        return links

    def game_url(self, href: str) -> str:
        return f"{urljoin(self.settings.site_base_url, href)}#{self.settings.props_fragment}"

    def process_game(self, index: int, href: str | None, total: int) -> GameResult:
        if not href:
            logger.info("No link for game %s, skipping", index)
            return GameResult(index=index, url=None, status=GameStatus.SKIPPED, error="missing link")

        url = self.game_url(href)
        logger.info("Processing game %s of %s: %s", index, total, url)
        props: list[PropBet] | None = None
        try:
            props = self._scrape_game(url)
            self._return_home()
        except Exception as exc:
            logger.exception("Error processing game %s", index)
            self._recover()
            return GameResult(index=index, url=url, status=GameStatus.RECOVERED, props=props or [], error=str(exc))

        if props is None:
            return GameResult(index=index, url=url, status=GameStatus.SKIPPED, error="no proposition rows")
        logger.info("Successfully processed game %s (%s props)", index, len(props))
        return GameResult(index=index, url=url, status=GameStatus.SUCCESS, props=props)

    def _scrape_game(self, url: str) -> list[PropBet] | None:
        self.navigator.load_and_settle(url, wait_until=self.settings.game_wait_until)
        if not self.navigator.probe(self.markup.prop_row, self.settings.probe_timeout_ms):
            logger.info("No prop elements found for this game, skipping")
            return None

        self.session.evaluate(EXPAND_ROWS_SCRIPT, [self.markup.prop_row, self.markup.row_title])
        self.navigator.pause(self.settings.row_expand_delay_ms)
        payloads = self.session.extract_all(self.markup.expanded_prop_row, row_text_script(self.markup))
        return self.extract_props(payloads)

    def extract_props(self, payloads: Iterable[Any]) -> list[PropBet]:
        """Normalize raw row payloads; a malformed row only drops itself."""

        timestamp = utc_timestamp(self._now())
        bets: list[PropBet] = []
        for payload in payloads:
            try:
                prop = normalize_row(raw_row_from_payload(payload))
            except (AttributeError, TypeError, ValueError) as exc:
                logger.debug("Skipping malformed row %r: %s", payload, exc)
                continue
            if prop is None:
                continue
            bets.extend(to_prop_bets(prop, self.settings.market, self.settings.site, timestamp))
        return bets

    def _return_home(self) -> None:
        self.navigator.load_and_settle(self.settings.league_url, wait_until=self.settings.game_wait_until)

    def _recover(self) -> None:
        try:
            self._return_home()
        except Exception as exc:
            logger.warning("Recovery navigation failed: %s", exc)
        try:
            self.navigator.pause(self.settings.recovery_pause_ms)
        except Exception as exc:
            logger.warning("Recovery pause failed: %s", exc)


class SessionSource(Protocol):
    def new_session(self) -> PageSession: ...


def collect_props(browser: SessionSource, settings: Settings | None = None) -> CrawlReport:
    """Run a crawl on a fresh page from ``browser`` and always close it."""

    settings = settings or get_settings()
    try:
        session = browser.new_session()
    except Exception as exc:
        logger.exception("Could not open a page session")
        return CrawlReport(league_url=settings.league_url, error=str(exc))
    try:
        return PropositionCollector(session, settings).crawl()
    finally:
        try:
            session.close()
        except Exception as exc:
            logger.debug("Ignoring page close failure: %s", exc)
