"""
Majority-vote helpers used to settle noisy per-play attributions.
"""
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Union

import numpy as np
import pandas as pd


def custom_mode(values: Iterable[Any]) -> Any:
    """
    Most frequent non-missing value; ties go to the value seen first.

    Raises:
        ValueError: if every value is missing
    """
    counts: Dict[Any, int] = {}
    for value in values:
        if pd.isna(value):
            continue
        counts[value] = counts.get(value, 0) + 1
    if not counts:
        raise ValueError("custom_mode() needs at least one non-missing value")
    # max() keeps the first maximal key, and dicts iterate in insertion order
    return max(counts, key=counts.__getitem__)


def _mode_or_missing(values: pd.Series) -> Any:
    try:
        return custom_mode(values)
    except ValueError:
        return np.nan


def group_mode(df: pd.DataFrame, keys: Union[str, List[str]], column: str) -> pd.Series:
    """
    Mode of ``column`` within each ``keys`` group, broadcast back onto df.

    Missing key values form their own group. Groups with no usable value
    resolve to missing. The result is aligned to ``df.index``.
    """
    if isinstance(keys, str):
        keys = [keys]
    grouped = df.groupby(keys, dropna=False, sort=False)[column]
    return grouped.transform(_mode_or_missing)


def stabilize_identity(
    df: pd.DataFrame,
    name_col: str,
    raw_id_col: str,
    number_col: str,
    id_col: str,
    team_col: str = "posteam",
    season_col: str = "season",
) -> pd.DataFrame:
    """
    Two-pass identity stabilisation for one role (passer, rusher or receiver).

    1. Plays sharing (name, team, season) are one player: take the mode of
       the raw id and the jersey number within that group.
    2. Plays sharing the resolved id are one player: take the mode of the
       name, which removes spelling noise recorded for the same id.

    Columns used but absent from df are treated as all-missing.
    """
    df = df.copy()
    placeholders = [c for c in (raw_id_col, team_col, season_col) if c not in df.columns]
    for col in placeholders:
        df[col] = np.nan
    if number_col not in df.columns:
        df[number_col] = pd.Series(pd.NA, index=df.index, dtype="Int64")

    has_name = df[name_col].notna()
    keys = [name_col, team_col, season_col]
    df[id_col] = group_mode(df, keys, raw_id_col).where(has_name)
    numbers = group_mode(df, keys, number_col).where(has_name)
    df[number_col] = pd.to_numeric(numbers, errors="coerce").astype("Int64")

    has_id = df[id_col].notna()
    df[name_col] = group_mode(df, id_col, name_col).where(has_id)
    return df.drop(columns=placeholders)
