"""Run entry points: crawl -> analyze -> write."""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from contextlib import AbstractContextManager
from datetime import datetime, timezone
from pathlib import Path

from propscout.config import Settings, get_settings
from propscout.parlays.engine import analyze_parlays
from propscout.reporting.writer import build_report, log_summary, write_report
from propscout.scraping.browser import open_browser
from propscout.scraping.collector import SessionSource, collect_props

logger = logging.getLogger(__name__)

BrowserFactory = Callable[[Settings], AbstractContextManager[SessionSource]]


def run_scrape_job(
    settings: Settings | None = None,
    browser_factory: BrowserFactory = open_browser,
    now: datetime | None = None,
) -> Path:
    """Scrape one league, score every two-leg parlay, and write the report."""

    settings = settings or get_settings()
    with browser_factory(settings) as browser:
        report = collect_props(browser, settings)

    props = report.props
    candidates = analyze_parlays(
        props,
        stake=settings.parlay_stake,
        to_win=settings.parlay_to_win,
        use_offered_odds=settings.use_offered_odds_payout,
    )
    moment = now or datetime.now(timezone.utc)
    document = build_report(settings.market, props, candidates, moment, top_n=settings.top_parlays)
    path = write_report(document, settings.output_dir, moment)
    log_summary(settings.market, props, candidates, top_n=settings.top_parlays)
    return path


def main() -> int:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        run_scrape_job(settings)
    except Exception:
        logger.exception("Fatal error in main")
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
