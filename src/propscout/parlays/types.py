"""Dataclasses for proposition and parlay modeling."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum


class Pick(str, Enum):
    OVER = "OVER"
    UNDER = "UNDER"

    @property
    def opposite(self) -> "Pick":
        return Pick.UNDER if self is Pick.OVER else Pick.OVER


@dataclass(frozen=True)
class PropBet:
    """One side of one proposition offered by one site.

    ``odds`` and ``opp_odds`` are decimal odds for this side and the mirrored
    side of the same proposition. ``0`` in either field marks a leg whose
    price could not be read.
    """

    player: str
    stat: str
    line: float
    type: Pick
    odds: float
    opp_odds: float
    market: str
    site: str
    timestamp: str

    def mirrored(self) -> "PropBet":
        """Return the opposite side of the same proposition."""

        return replace(self, type=self.type.opposite, odds=self.opp_odds, opp_odds=self.odds)

    def same_proposition(self, other: "PropBet") -> bool:
        return (
            self.player == other.player
            and self.stat == other.stat
            and self.line == other.line
            and self.site == other.site
        )


@dataclass(frozen=True)
class ParlayEVResult:
    ev: float
    probability_to_win: float
    parlay_decimal_odds: float
    fair_parlay_odds: float
    recommendation: str


@dataclass(frozen=True)
class ParlayCandidate:
    player1: str
    stat1: str
    pick1: Pick
    player2: str
    stat2: str
    pick2: Pick
    analysis: ParlayEVResult
