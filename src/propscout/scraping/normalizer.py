"""Parse raw proposition row text into structured fields.

Nothing here touches a browser: the markup layer hands over plain strings and
this module decides whether they describe a player prop.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from propscout.parlays.types import Pick, PropBet

_BRACKET_TITLE = re.compile(r"(.*?)\s*\((.*?)\)")
_TOTAL_TITLE = re.compile(r"(.*?)\s+Total\s+(.*)", re.IGNORECASE)
_LEADING_TOTAL = re.compile(r"^Total\s+", re.IGNORECASE)
_OVER_LINE = re.compile(r"Over\s+(\d+\.?\d*)")
_LEADING_NUMBER = re.compile(r"^\s*[-+]?(\d+\.?\d*|\.\d+)")
_PERIOD_MARKET = re.compile(r"Inning|Half|Game", re.IGNORECASE)

TEAM_PLACEHOLDER = "Team"

# Applied in order; a later match overrides an earlier one.
STAT_SYNONYMS: tuple[tuple[str, str], ...] = (
    ("strikeout", "Strikeouts"),
    ("hit", "Hits"),
    ("run", "Runs"),
    ("base", "Bases"),
)


@dataclass(frozen=True)
class RawPropRow:
    """Text read from one expanded proposition row."""

    title: str
    over_label: str | None = None
    over_price: str | None = None
    under_price: str | None = None
    has_over: bool = True
    has_under: bool = True


@dataclass(frozen=True)
class NormalizedProp:
    player: str
    stat: str
    line: float
    over_odds: float
    under_odds: float


def parse_title(title: str) -> tuple[str, str] | None:
    """Split a row title into ``(player, raw_stat)``."""

    match = _BRACKET_TITLE.search(title) or _TOTAL_TITLE.search(title)
    if not match:
        return None
    return match.group(1), match.group(2)


def canonicalize_stat(raw_stat: str) -> str:
    stat = _LEADING_TOTAL.sub("", raw_stat).strip()
    lowered = stat.lower()
    for needle, canonical in STAT_SYNONYMS:
        if needle in lowered:
            stat = canonical
    return stat


def parse_odds(text: str | None) -> float:
    """Return decimal odds rounded to 3 places, or ``0.0`` when unreadable."""

    match = _LEADING_NUMBER.match(text or "")
    if not match:
        return 0.0
    return round(float(match.group(0)), 3)


def parse_line(label: str | None) -> float:
    match = _OVER_LINE.search(label or "")
    return float(match.group(1)) if match else 0.0


def is_excluded(player: str, raw_stat: str) -> bool:
    """Team totals and period markets are not player props."""

    return not player or player == TEAM_PLACEHOLDER or bool(_PERIOD_MARKET.search(raw_stat))


def normalize_row(row: RawPropRow) -> NormalizedProp | None:
    if not (row.has_over and row.has_under):
        return None
    parsed = parse_title((row.title or "").strip())
    if parsed is None:
        return None
    player, raw_stat = parsed
    player = player.strip()
    if is_excluded(player, raw_stat):
        return None
    return NormalizedProp(
        player=player,
        stat=canonicalize_stat(raw_stat),
        line=parse_line(row.over_label),
        over_odds=parse_odds(row.over_price),
        under_odds=parse_odds(row.under_price),
    )


def to_prop_bets(prop: NormalizedProp, market: str, site: str, timestamp: str) -> tuple[PropBet, PropBet]:
    """Expand a proposition into its mirrored OVER and UNDER records."""

    over = PropBet(
        player=prop.player,
        stat=prop.stat,
        line=prop.line,
        type=Pick.OVER,
        odds=prop.over_odds,
        opp_odds=prop.under_odds,
        market=market,
        site=site,
        timestamp=timestamp,
    )
    return over, over.mirrored()
