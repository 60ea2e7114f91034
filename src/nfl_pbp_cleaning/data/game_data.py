"""
Join per-game metadata (scores, venue, weather, betting lines) onto plays.
"""
from __future__ import annotations

import logging
from typing import Optional

import pandas as pd
from pandas.api.types import is_numeric_dtype

from ..config import config
from .loader import ReferenceDataLoader

logger = logging.getLogger(__name__)

JOIN_KEY = "_game_key"


def _as_key(values: pd.Series) -> pd.Series:
    """Join key as text; numeric ids lose any float formatting (2019090500.0)."""
    if is_numeric_dtype(values):
        return values.astype("Int64").astype(str)
    return values.astype(str)


def _game_columns(games: pd.DataFrame, live: bool) -> pd.DataFrame:
    wanted = list(config.COLUMN_LISTS["game_data"])
    if live:
        wanted.insert(2, "week")
    missing = [c for c in wanted if c not in games.columns and c not in ("old_game_id", "week")]
    if missing:
        logger.warning("Games table lacks %s; those columns will be absent", missing)
    games = games[[c for c in wanted if c in games.columns]]
    return games.rename(columns={"stadium": "game_stadium"})


def _merge(plays: pd.DataFrame, games: pd.DataFrame, play_key: str, game_key: str) -> pd.DataFrame:
    """Left join on text-compared keys; game columns win over play columns of the same name."""
    games = games.drop_duplicates(subset=game_key, keep="first").copy()
    games[JOIN_KEY] = _as_key(games[game_key])
    games = games.drop(columns=game_key)
    overlap = [c for c in games.columns if c in plays.columns and c != JOIN_KEY]
    plays = plays.drop(columns=overlap).copy()
    plays[JOIN_KEY] = _as_key(plays[play_key])
    out = plays.merge(games, on=JOIN_KEY, how="left", sort=False)
    out.index = plays.index
    return out.drop(columns=JOIN_KEY)


def add_game_data(pbp: pd.DataFrame,
                  source: str = "nfl",
                  games: Optional[pd.DataFrame] = None,
                  loader: Optional[ReferenceDataLoader] = None) -> pd.DataFrame:
    """
    Add game-level variables to play-by-play data.

    Args:
        pbp: Play-by-play frame
        source: ``"live"`` when pbp is keyed by the old (numeric) game id;
            any other value joins on ``game_id`` directly
        games: Games table; fetched through ``loader`` when omitted
        loader: Reference-data loader used when no table is passed

    Returns:
        pbp with the game columns added and ``game_date`` set from
        ``gameday``. If the games table is unavailable or the join fails,
        pbp is returned unchanged.
    """
    out = pbp
    try:
        if games is None:
            result = (loader or ReferenceDataLoader()).load_games()
            if not result.available:
                logger.warning(
                    "The data hosting servers are down, so game data can't be added right now (%s)",
                    result.error,
                )
                return pbp
            games = result.data

        if source != "live":
            out = _merge(pbp, _game_columns(games, live=False), "game_id", "game_id")
        else:
            games = _game_columns(games, live=True).rename(columns={"game_id": "actual_id"})
            plays = pbp.drop(columns=["week"], errors="ignore")
            plays = plays.drop(columns=["old_game_id"], errors="ignore")
            out = _merge(plays, games, "game_id", "old_game_id")
            out = out.rename(columns={"game_id": "old_game_id"}).rename(columns={"actual_id": "game_id"})
        out["game_date"] = out["gameday"] if "gameday" in out.columns else pd.NA
        logger.info("Added game variables")
    except Exception as exc:
        logger.error("The following error has occurred while adding game data: %s", exc)
        return pbp
    return out
