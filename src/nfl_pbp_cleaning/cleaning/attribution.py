"""
Clean play-by-play data.

Builds columns that capture what happens on every play, penalties
included, from the play description: who passed, ran or was targeted,
how the play should be classified, and a player id that stays the same
for a player across both id eras. Team abbreviations are standardised on
the way through.
"""
from __future__ import annotations

import logging
from typing import Mapping, Optional, Union

import numpy as np
import pandas as pd

from ..config import config
from ..data.column_schema import ColumnSchema, column_or_missing
from ..data.loader import ReferenceDataLoader
from .consensus import stabilize_identity
from .description_parser import extract_players, is_pass_play, normalize_description
from .legacy_ids import id_map_to_dict, resolve_legacy_ids
from .teams import normalize_team_columns

logger = logging.getLogger(__name__)

ROW_ORDER_COL = "_row_order"
ROLES = ("passer", "rusher", "receiver")


def _flag(mask: pd.Series) -> pd.Series:
    return mask.fillna(False).astype(bool).astype(int)


def add_play_flags(df: pd.DataFrame) -> pd.DataFrame:
    """
    Add success, pass, rush, first_down, aborted_play, special and play.

    Expects passer/rusher attribution to be present already.
    """
    df = df.copy()
    desc = df["desc"]
    epa = pd.to_numeric(column_or_missing(df, "epa"), errors="coerce")
    play_type = column_or_missing(df, "play_type")

    df["success"] = np.where(epa.isna(), np.nan, (epa > 0).astype(float))
    df["pass"] = _flag(desc.map(is_pass_play))
    kneel = pd.to_numeric(column_or_missing(df, "qb_kneel", 0), errors="coerce").fillna(0)
    df["rush"] = _flag(df["rusher"].notna() & (kneel == 0) & (df["pass"] == 0))

    first_down = pd.Series(False, index=df.index)
    for col in config.COLUMN_LISTS["first_down"]:
        first_down |= pd.to_numeric(column_or_missing(df, col), errors="coerce").eq(1)
    df["first_down"] = _flag(first_down)

    df["aborted_play"] = _flag(desc.map(lambda d: isinstance(d, str) and "Aborted" in d))
    df["special"] = _flag(play_type.isin(config.SPECIAL_PLAY_TYPES))

    text = desc.map(lambda d: d if isinstance(d, str) else "")
    df["play"] = _flag(
        epa.notna()
        & desc.notna()
        & column_or_missing(df, "posteam").notna()
        & (text != config.REVIEW_DESC)
        & (text.str[:8] != config.TIMEOUT_DESC_PREFIX)
        & play_type.isin(config.NORMAL_PLAY_TYPES)
    )
    return df


def stabilize_player_ids(df: pd.DataFrame) -> pd.DataFrame:
    """Run the two-pass name/id consensus for passer, rusher and receiver."""
    for role in ROLES:
        df = stabilize_identity(
            df,
            name_col=role,
            raw_id_col=f"{role}_player_id",
            number_col=f"{role}_jersey_number",
            id_col=f"{role}_id",
        )
    return df


def add_unified_player(df: pd.DataFrame) -> pd.DataFrame:
    """name / jersey_number / id: the passer's value, else the rusher's."""
    df = df.copy()
    df["name"] = df["passer"].where(df["passer"].notna(), df["rusher"])
    df["jersey_number"] = df["passer_jersey_number"].where(
        df["passer_jersey_number"].notna(), df["rusher_jersey_number"]
    ).astype("Int64")
    df["id"] = df["passer_id"].where(df["passer_id"].notna(), df["rusher_id"])
    return df


def apply_legacy_ids(df: pd.DataFrame, id_map: Optional[Mapping[str, str]],
                     schema: Optional[ColumnSchema] = None) -> pd.DataFrame:
    """Rewrite every id column through the legacy id map (identity when no map)."""
    if not id_map:
        return df
    schema = schema or ColumnSchema()
    df = df.copy()
    for col in schema.id_columns_in(df):
        df[col] = resolve_legacy_ids(df[col], id_map)
    return df


def _legacy_lookup(legacy_id_map, loader: Optional[ReferenceDataLoader]) -> dict:
    if legacy_id_map is not None:
        return id_map_to_dict(legacy_id_map)
    loader = loader or ReferenceDataLoader()
    result = loader.load_legacy_id_map()
    if not result.available:
        logger.warning("Legacy id map unavailable (%s); keeping player ids as they are", result.error)
        return {}
    return id_map_to_dict(result.data)


def _clean(pbp: pd.DataFrame, id_lookup: dict) -> pd.DataFrame:
    schema = ColumnSchema()
    original_index = pbp.index
    df = schema.drop_derived(pbp).reset_index(drop=True)
    df[ROW_ORDER_COL] = np.arange(len(df))

    df["desc"] = df["desc"].map(normalize_description)
    df = df.join(extract_players(df))
    df = add_play_flags(df)
    # team codes first, so the consensus groups use standardised posteam
    df = normalize_team_columns(df, schema.team_columns_in(df))
    df = stabilize_player_ids(df)
    df = add_unified_player(df)
    df = apply_legacy_ids(df, id_lookup, schema)

    df = df.sort_values(ROW_ORDER_COL, kind="mergesort").drop(columns=ROW_ORDER_COL)
    df.index = original_index
    return df


def clean_pbp(pbp: pd.DataFrame,
              legacy_id_map: Union[pd.DataFrame, Mapping[str, str], None] = None,
              loader: Optional[ReferenceDataLoader] = None) -> pd.DataFrame:
    """
    Clean play-by-play data.

    Args:
        pbp: Play-by-play frame, one row per play
        legacy_id_map: Table with ``gsis_id``/``new_id`` (or a plain mapping);
            fetched through ``loader`` when omitted
        loader: Reference-data loader used when no map is passed

    Returns:
        pbp with the derived columns added, rows in their original order.
        If cleaning fails the input frame is returned unchanged.
    """
    logger.info("Cleaning up play-by-play. With a lot of seasons this can take a few minutes.")
    try:
        if "desc" not in pbp.columns:
            raise KeyError("play-by-play data has no 'desc' column")
        id_lookup = _legacy_lookup(legacy_id_map, loader)
        cleaned = _clean(pbp, id_lookup)
    except Exception:
        logger.exception("Cleaning play-by-play failed; returning the input unchanged")
        return pbp
    logger.info("Cleaned %d plays", len(cleaned))
    return cleaned
