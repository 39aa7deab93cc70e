"""Build, summarize, and write the props report."""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from datetime import datetime
from pathlib import Path
from typing import Any

import pandas as pd

from propscout.parlays.engine import plus_ev
from propscout.parlays.types import ParlayCandidate, PropBet
from propscout.reporting.schemas import (
    MarketReportSchema,
    ParlayAnalysisSchema,
    ParlayCandidateSchema,
    PropBetSchema,
)
from propscout.scraping.collector import utc_timestamp

logger = logging.getLogger(__name__)

SUMMARY_COLUMNS = ["player1", "stat1", "pick1", "player2", "stat2", "pick2", "ev", "probability", "recommendation"]


def report_filename(moment: datetime) -> str:
    return f"props_{utc_timestamp(moment).replace(':', '-')}.json"


def build_report(
    market: str,
    props: Sequence[PropBet],
    candidates: Sequence[ParlayCandidate],
    moment: datetime,
    top_n: int = 10,
) -> dict[str, Any]:
    """Assemble the JSON document; only +EV candidates are reported."""

    winners = plus_ev(candidates)
    section = MarketReportSchema(
        props=[PropBetSchema.from_prop(prop) for prop in props],
        parlay_analysis=ParlayAnalysisSchema(
            count=len(winners),
            top_parlays=[ParlayCandidateSchema.from_candidate(c) for c in winners[:top_n]],
        ),
    )
    return {
        "timestamp": utc_timestamp(moment),
        market.lower(): section.model_dump(mode="json", by_alias=True),
    }


def write_report(document: dict[str, Any], output_dir: Path, moment: datetime) -> Path:
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / report_filename(moment)
    path.write_text(json.dumps(document, indent=2), encoding="utf-8")
    logger.info("Wrote report to %s", path)
    return path


def summary_frame(candidates: Sequence[ParlayCandidate]) -> pd.DataFrame:
    rows = [
        {
            "player1": c.player1,
            "stat1": c.stat1,
            "pick1": c.pick1.value,
            "player2": c.player2,
            "stat2": c.stat2,
            "pick2": c.pick2.value,
            "ev": round(c.analysis.ev, 2),
            "probability": round(c.analysis.probability_to_win, 4),
            "recommendation": c.analysis.recommendation,
        }
        for c in candidates
    ]
    return pd.DataFrame(rows, columns=SUMMARY_COLUMNS)


def log_summary(market: str, props: Sequence[PropBet], candidates: Sequence[ParlayCandidate], top_n: int = 10) -> None:
    winners = plus_ev(candidates)
    logger.info("%s Props: %s", market, len(props))
    logger.info("%s +EV Parlays: %s", market, len(winners))
    if winners:
        logger.info("Top parlays:\n%s", summary_frame(winners[:top_n]).to_string(index=False))
