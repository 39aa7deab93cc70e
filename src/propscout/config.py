"""Environment-driven configuration helpers for PropScout."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

WaitUntil = Literal["load", "domcontentloaded", "networkidle", "commit"]


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or .env files."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    league_url: str = Field(default="https://www.pinnacle.com/en/baseball/mlb/matchups")
    site_base_url: str = Field(default="https://www.pinnacle.com")
    props_fragment: str = Field(default="player-props")
    market: str = Field(default="MLB")
    site: str = Field(default="Pinnacle")

    navigation_timeout_ms: int = Field(default=60_000, gt=0)
    index_wait_until: WaitUntil = Field(default="domcontentloaded")
    game_wait_until: WaitUntil = Field(default="networkidle")
    settle_delay_ms: int = Field(default=30_000, ge=0)
    discovery_timeout_ms: int = Field(default=30_000, gt=0)
    probe_timeout_ms: int = Field(default=30_000, gt=0)
    row_expand_delay_ms: int = Field(default=2_000, ge=0)
    recovery_pause_ms: int = Field(default=2_000, ge=0)

    headless: bool = Field(default=True)
    browser_launch_attempts: int = Field(default=3, ge=1, le=10)

    output_dir: Path = Field(default=Path("."))
    top_parlays: int = Field(default=10, ge=1)
    parlay_stake: float = Field(default=100.0, gt=0)
    parlay_to_win: float = Field(default=200.0, gt=0)
    use_offered_odds_payout: bool = Field(default=False)

    log_level: str = Field(default="INFO")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached application settings."""

    return Settings()  # type: ignore[call-arg]
