"""
Fumble-adjusted quarterback EPA.

When a receiver catches the ball and then loses a fumble, the play's EPA
charges the turnover to the passer. ``qb_epa`` gives the passer credit up
to the point of the fumble instead, which makes EPA behave more like
passing yards on those plays: the game state is rebuilt as if the
receiver had been tackled where he fumbled, and EPA is recomputed from
that state.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence

import numpy as np
import pandas as pd

from ..config import config
from ..data.column_schema import ColumnSchema, column_or_missing

logger = logging.getLogger(__name__)

# Takes a frame of game states, returns one expected-points value per row
ExpectedPointsModel = Callable[[pd.DataFrame], Sequence[float]]

# Fields rebuilt for the next snap; a play missing any of them keeps its epa
REBUILT_STATE_COLUMNS = [
    "half_seconds_remaining", "yardline_100", "down", "ydstogo",
    "posteam_timeouts_remaining", "defteam_timeouts_remaining",
]


def _numeric(df: pd.DataFrame, name: str) -> pd.Series:
    return pd.to_numeric(column_or_missing(df, name), errors="coerce").astype(float)


def _is_one(values: pd.Series) -> pd.Series:
    return pd.to_numeric(values, errors="coerce").eq(1).fillna(False).astype(bool)


def fumble_lost_after_catch(df: pd.DataFrame) -> pd.Series:
    """Completed passes lost on a fumble that carry both an EPA and a down."""
    return (
        _is_one(column_or_missing(df, "complete_pass"))
        & _is_one(column_or_missing(df, "fumble_lost"))
        & column_or_missing(df, "epa").notna()
        & column_or_missing(df, "down").notna()
    ).astype(bool)


def reconstruct_fumble_state(plays: pd.DataFrame) -> pd.DataFrame:
    """
    Rebuild the next snap's game state as if the fumble had not happened.

    Args:
        plays: Fumble plays with down, ydstogo, yardline_100, yards_gained,
            half_seconds_remaining and both timeout counts; absent or
            missing inputs leave the rebuilt fields missing

    Returns:
        Frame indexed like ``plays`` with the ep-model state columns plus
        ``change`` (1 on a turnover on downs), ``down_old`` and ``ep_old``
    """
    s = plays.copy()
    gained = _numeric(s, "yards_gained")
    down_old = _numeric(s, "down")
    ydstogo_old = _numeric(s, "ydstogo")
    posteam_timeouts = _numeric(s, "posteam_timeouts_remaining")
    defteam_timeouts = _numeric(s, "defteam_timeouts_remaining")

    s["half_seconds_remaining"] = (
        _numeric(s, "half_seconds_remaining") - config.FUMBLE_CLOCK_SECONDS
    ).clip(lower=0)
    s["down_old"] = down_old
    s["ep_old"] = _numeric(s, "ep")
    yardline = _numeric(s, "yardline_100") - gained

    down = pd.Series(np.where(gained >= ydstogo_old, 1.0, down_old + 1), index=s.index)
    down = down.where(gained.notna() & ydstogo_old.notna())
    # the spot would have been a turnover on downs
    change = down.eq(5)
    down = down.mask(change, 1.0)

    ydstogo = (ydstogo_old - gained).mask(down.eq(1), config.FIRST_DOWN_DISTANCE)
    yardline = yardline.mask(change, config.FIELD_LENGTH - yardline)
    s["posteam_timeouts_remaining"] = posteam_timeouts.mask(change, defteam_timeouts)
    s["defteam_timeouts_remaining"] = defteam_timeouts.mask(change, posteam_timeouts)
    # can't have 1st & 10 inside the opponent's 10
    s["ydstogo"] = ydstogo.mask(yardline < ydstogo, yardline)
    s["yardline_100"] = yardline
    s["down"] = down
    s["change"] = change.astype(int)

    state_cols = [c for c in ColumnSchema().ep_state if c in s.columns]
    return s[state_cols + ["down_old", "ep_old", "change"]]


def add_qb_epa(pbp: pd.DataFrame, ep_model: Optional[ExpectedPointsModel] = None) -> pd.DataFrame:
    """
    Add ``qb_epa``: EPA with the passer credited up to a receiver's lost fumble.

    Args:
        pbp: Play-by-play frame
        ep_model: Expected-points model; called once with every fully
            rebuilt state

    Returns:
        Copy of pbp with ``qb_epa``; equal to ``epa`` on every other play
        and on fumble plays whose state could not be rebuilt

    Raises:
        TypeError: if fumble plays exist and no ep_model was given
    """
    d = pbp.drop(columns=["qb_epa"], errors="ignore")
    epa = column_or_missing(d, "epa")

    mask = fumble_lost_after_catch(d)
    if not mask.any():
        d["qb_epa"] = epa
        return d
    if ep_model is None:
        raise TypeError("add_qb_epa() needs an ep_model to re-price fumble plays")

    state = reconstruct_fumble_state(d.loc[mask])
    complete = state[REBUILT_STATE_COLUMNS].notna().all(axis=1).to_numpy()
    fixed_epa = np.full(len(state), np.nan)
    if complete.any():
        priced = state.loc[complete]
        new_ep = np.asarray(ep_model(priced.drop(columns=["down_old", "ep_old", "change"])), dtype=float)
        if len(new_ep) != len(priced):
            raise ValueError(
                f"ep_model returned {len(new_ep)} values for {len(priced)} states"
            )
        new_ep = np.where(priced["change"].to_numpy() == 1, -new_ep, new_ep)
        fixed_epa[complete] = new_ep - priced["ep_old"].to_numpy(dtype=float)

    qb_epa = pd.to_numeric(epa, errors="coerce").astype(float).to_numpy(copy=True)
    positions = np.flatnonzero(mask.to_numpy())
    usable = ~np.isnan(fixed_epa)
    qb_epa[positions[usable]] = fixed_epa[usable]
    d["qb_epa"] = qb_epa
    logger.info("Re-priced %d of %d plays with a receiver's lost fumble",
                int(usable.sum()), int(mask.sum()))
    return d
