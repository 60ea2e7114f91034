"""
Team abbreviation standardisation.

Historical codes are rewritten to the current franchise code, so the
Chargers are always ``LAC`` even in seasons they played in San Diego.
Yard-line strings carry a team code too (``"SD 49"`` becomes ``"LAC 49"``).
"""
from __future__ import annotations

from typing import Iterable, Optional

import pandas as pd
from pandas.api.types import is_object_dtype, is_string_dtype

from ..config import config


def normalize_team_code(value):
    """Standardise a single team-bearing value; non-text values pass through."""
    if not isinstance(value, str):
        return value
    for old, new in config.TEAM_CODE_REPLACEMENTS:
        value = value.replace(old, new)
    return value


def normalize_team_series(values: pd.Series) -> pd.Series:
    """Vectorised ``normalize_team_code`` over one column."""
    if not (is_object_dtype(values) or is_string_dtype(values)):
        return values
    out = values
    for old, new in config.TEAM_CODE_REPLACEMENTS:
        out = out.str.replace(old, new, regex=False)
    # .str keeps NaN but turns non-str objects into NaN as well; restore those
    return out.where(values.map(lambda v: isinstance(v, str)), values)


def normalize_team_columns(df: pd.DataFrame, columns: Optional[Iterable[str]] = None) -> pd.DataFrame:
    """
    Standardise every team-bearing column present in df.

    Args:
        df: Play-by-play frame
        columns: Columns to rewrite; defaults to the team catalogue in config

    Returns:
        Copy of df with the columns rewritten
    """
    if columns is None:
        columns = config.COLUMN_LISTS["team"]
    df = df.copy()
    for col in columns:
        if col in df.columns:
            df[col] = normalize_team_series(df[col])
    return df
