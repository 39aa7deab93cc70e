"""Report document tests."""

from __future__ import annotations

import json
from datetime import datetime, timezone

from propscout.parlays.engine import analyze_parlays
from propscout.parlays.types import Pick, PropBet
from propscout.reporting import writer

MOMENT = datetime(2026, 10, 19, 20, 38, 5, 123000, tzinfo=timezone.utc)


def _prop(player: str, odds: float, opp_odds: float) -> PropBet:
    return PropBet(
        player=player,
        stat="Hits",
        line=0.5,
        type=Pick.OVER,
        odds=odds,
        opp_odds=opp_odds,
        market="MLB",
        site="Pinnacle",
        timestamp="2026-10-19T20:30:00.000Z",
    )


def test_report_filename_replaces_colons() -> None:
    assert writer.report_filename(MOMENT) == "props_2026-10-19T20-38-05.123Z.json"


def test_build_report_uses_camel_case_and_plus_ev_only() -> None:
    props = [_prop("A", 1.5, 2.8), _prop("B", 1.5, 2.8), _prop("C", 2.1, 1.8)]
    candidates = analyze_parlays(props)
    document = writer.build_report("MLB", props, candidates, MOMENT, top_n=2)

    assert document["timestamp"] == "2026-10-19T20:38:05.123Z"
    section = document["mlb"]
    assert section["props"][0]["oppOdds"] == 2.8
    assert section["props"][0]["type"] == "OVER"
    analysis = section["parlayAnalysis"]
    assert analysis["count"] == sum(1 for c in candidates if c.analysis.ev > 0)
    assert len(analysis["topParlays"]) == 2
    top = analysis["topParlays"][0]
    assert set(top) == {"player1", "stat1", "pick1", "player2", "stat2", "pick2", "analysis"}
    assert set(top["analysis"]) == {
        "ev",
        "probabilityToWin",
        "parlayDecimalOdds",
        "fairParlayOdds",
        "recommendation",
    }
    assert top["analysis"]["ev"] == candidates[0].analysis.ev


def test_write_report_round_trips_json(tmp_path) -> None:
    document = writer.build_report("MLB", [], [], MOMENT)
    path = writer.write_report(document, tmp_path / "out", MOMENT)
    assert path.name == writer.report_filename(MOMENT)
    assert json.loads(path.read_text()) == {
        "timestamp": "2026-10-19T20:38:05.123Z",
        "mlb": {"props": [], "parlayAnalysis": {"count": 0, "topParlays": []}},
    }


def test_summary_frame_columns() -> None:
    candidates = analyze_parlays([_prop("A", 1.5, 2.8), _prop("B", 1.5, 2.8)])
    frame = writer.summary_frame(candidates)
    assert list(frame.columns) == writer.SUMMARY_COLUMNS
    assert len(frame) == 4
    assert frame.iloc[0]["recommendation"] == "STRONG +EV"
