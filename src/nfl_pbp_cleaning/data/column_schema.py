"""
ColumnSchema – canonical column lists for the cleaning steps.
"""
from dataclasses import dataclass, field
from typing import List

import numpy as np
import pandas as pd

from ..config import COLUMN_LISTS


@dataclass
class ColumnSchema:
    """Container class listing play-by-play columns by role."""
    team:      List[str] = field(default_factory=lambda: list(COLUMN_LISTS["team"]))
    derived:   List[str] = field(default_factory=lambda: list(COLUMN_LISTS["derived"]))
    derived_id: List[str] = field(default_factory=lambda: list(COLUMN_LISTS["derived_id"]))
    ep_state:  List[str] = field(default_factory=lambda: list(COLUMN_LISTS["ep_state"]))

    # ───── convenience helpers ────────────────────────────────────
    def team_columns_in(self, df: pd.DataFrame) -> List[str]:
        """Team-bearing columns that exist in df, in catalogue order."""
        return [c for c in self.team if c in df.columns]

    def id_columns_in(self, df: pd.DataFrame) -> List[str]:
        """Derived id columns plus every upstream ``*player_id`` column in df."""
        cols = [c for c in self.derived_id if c in df.columns]
        cols += [c for c in df.columns if c.endswith("player_id") and c not in cols]
        return cols

    def drop_derived(self, df: pd.DataFrame) -> pd.DataFrame:
        """Remove previously derived columns so a rerun starts clean."""
        return df.drop(columns=[c for c in self.derived if c in df.columns])

    def assert_in_dataframe(self, df: pd.DataFrame) -> None:
        """Raise if any derived column is missing from df.columns."""
        missing = [c for c in self.derived if c not in df.columns]
        if missing:
            raise ValueError(f"ColumnSchema mismatch – missing cols: {missing}")


def column_or_missing(df: pd.DataFrame, name: str, fill=np.nan) -> pd.Series:
    """Return df[name], or a Series of ``fill`` aligned to df when the column is absent."""
    if name in df.columns:
        return df[name]
    return pd.Series(fill, index=df.index)
