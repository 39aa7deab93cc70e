"""Two-leg parlay expected value engine."""

from __future__ import annotations

import itertools
from collections.abc import Iterable

from propscout.parlays.types import ParlayCandidate, ParlayEVResult, Pick, PropBet

DEFAULT_STAKE = 100.0
# Fixed-payout product: a winning two-leg ticket returns a flat 2x the stake
# regardless of the offered decimal odds.
DEFAULT_TO_WIN = 200.0

STRONG_EV_THRESHOLD = 5.0


def is_usable(prop: PropBet) -> bool:
    return prop.odds > 1.0 and prop.opp_odds > 1.0


def usable_props(props: Iterable[PropBet]) -> list[PropBet]:
    """Drop legs carrying the unreadable-price sentinel."""

    return [prop for prop in props if is_usable(prop)]


def devig_probability(odds: float, opp_odds: float) -> float:
    """Normalize two complementary implied probabilities so they sum to 1."""

    implied = 1 / odds
    implied_opp = 1 / opp_odds
    return implied / (implied + implied_opp)


def pick_view(prop: PropBet, pick: Pick) -> PropBet:
    """Return ``prop`` priced for ``pick``."""

    return prop if prop.type is pick else prop.mirrored()


def expected_value(prob: float, stake: float, to_win: float) -> float:
    return prob * to_win - (1 - prob) * stake


def recommend(ev: float) -> str:
    if ev > STRONG_EV_THRESHOLD:
        return "STRONG +EV"
    if ev > 0:
        return "+EV"
    return "PASS"


def calculate_parlay_ev(
    leg1: PropBet,
    leg2: PropBet,
    stake: float = DEFAULT_STAKE,
    to_win: float = DEFAULT_TO_WIN,
    use_offered_odds: bool = False,
) -> ParlayEVResult:
    """Score a two-leg parlay assuming the legs are independent.

    Both legs are taken as already priced for the chosen side. With
    ``use_offered_odds`` the payout comes from the offered parlay odds instead
    of the flat ``to_win``.
    """

    true_prob = devig_probability(leg1.odds, leg1.opp_odds) * devig_probability(
        leg2.odds, leg2.opp_odds
    )
    decimal_odds = leg1.odds * leg2.odds
    fair_odds = 1 / true_prob if true_prob > 0 else 0.0
    payout = stake * (decimal_odds - 1) if use_offered_odds else to_win
    ev = expected_value(true_prob, stake, payout)
    return ParlayEVResult(
        ev=ev,
        probability_to_win=true_prob,
        parlay_decimal_odds=decimal_odds,
        fair_parlay_odds=fair_odds,
        recommendation=recommend(ev),
    )


def analyze_parlays(
    props: Iterable[PropBet],
    stake: float = DEFAULT_STAKE,
    to_win: float = DEFAULT_TO_WIN,
    use_offered_odds: bool = False,
) -> list[ParlayCandidate]:
    """Score every two-leg combination and rank by EV, best first.

    Each positional pair yields four candidates, one per pick combination.
    Equal EVs keep discovery order.
    """

    filtered = usable_props(props)
    candidates: list[ParlayCandidate] = []
    for prop1, prop2 in itertools.combinations(filtered, 2):
        if prop1.same_proposition(prop2):
            continue
        for pick1, pick2 in itertools.product(Pick, repeat=2):
            analysis = calculate_parlay_ev(
                pick_view(prop1, pick1),
                pick_view(prop2, pick2),
                stake=stake,
                to_win=to_win,
                use_offered_odds=use_offered_odds,
            )
            candidates.append(
                ParlayCandidate(
                    player1=prop1.player,
                    stat1=prop1.stat,
                    pick1=pick1,
                    player2=prop2.player,
                    stat2=prop2.stat,
                    pick2=pick2,
                    analysis=analysis,
                )
            )
    candidates.sort(key=lambda c: c.analysis.ev, reverse=True)
    return candidates


def plus_ev(candidates: Iterable[ParlayCandidate]) -> list[ParlayCandidate]:
    return [candidate for candidate in candidates if candidate.analysis.ev > 0]
