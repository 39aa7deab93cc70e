"""Pydantic schemas for the props report document."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from propscout.parlays.types import ParlayCandidate, Pick, PropBet


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PropBetSchema(_CamelModel):
    player: str
    stat: str
    line: float
    type: Pick
    odds: float
    opp_odds: float
    market: str
    site: str
    timestamp: str

    @classmethod
    def from_prop(cls, prop: PropBet) -> "PropBetSchema":
        return cls(
            player=prop.player,
            stat=prop.stat,
            line=prop.line,
            type=prop.type,
            odds=prop.odds,
            opp_odds=prop.opp_odds,
            market=prop.market,
            site=prop.site,
            timestamp=prop.timestamp,
        )


class ParlayEVSchema(_CamelModel):
    ev: float
    probability_to_win: float
    parlay_decimal_odds: float
    fair_parlay_odds: float
    recommendation: str


class ParlayCandidateSchema(_CamelModel):
    player1: str
    stat1: str
    pick1: Pick
    player2: str
    stat2: str
    pick2: Pick
    analysis: ParlayEVSchema

    @classmethod
    def from_candidate(cls, candidate: ParlayCandidate) -> "ParlayCandidateSchema":
        result = candidate.analysis
        return cls(
            player1=candidate.player1,
            stat1=candidate.stat1,
            pick1=candidate.pick1,
            player2=candidate.player2,
            stat2=candidate.stat2,
            pick2=candidate.pick2,
            analysis=ParlayEVSchema(
                ev=result.ev,
                probability_to_win=result.probability_to_win,
                parlay_decimal_odds=result.parlay_decimal_odds,
                fair_parlay_odds=result.fair_parlay_odds,
                recommendation=result.recommendation,
            ),
        )


class ParlayAnalysisSchema(_CamelModel):
    count: int
    top_parlays: list[ParlayCandidateSchema]


class MarketReportSchema(_CamelModel):
    props: list[PropBetSchema]
    parlay_analysis: ParlayAnalysisSchema
