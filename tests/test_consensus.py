"""
Tests for the majority-vote helpers.
"""
import numpy as np
import pandas as pd
import pytest
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from nfl_pbp_cleaning.cleaning.consensus import custom_mode, group_mode, stabilize_identity


class TestCustomMode:
    """custom_mode(): most frequent non-missing value, ties to first seen."""

    def test_majority_ignores_missing(self):
        assert custom_mode(["A", "A", "B", None]) == "A"

    def test_tie_goes_to_first_seen(self):
        assert custom_mode(["A", "B"]) == "A"
        assert custom_mode(["B", "A"]) == "B"

    def test_later_majority_wins(self):
        assert custom_mode(["B", "A", "A"]) == "A"

    def test_nan_and_pd_na_skipped(self):
        assert custom_mode([np.nan, pd.NA, 7, 7, 3]) == 7

    def test_all_missing_raises(self):
        with pytest.raises(ValueError):
            custom_mode([None, np.nan])
        with pytest.raises(ValueError):
            custom_mode([])


class TestGroupMode:
    """group_mode(): per-group mode broadcast back onto every row."""

    def test_broadcast_aligned_to_index(self):
        df = pd.DataFrame(
            {"key": ["x", "y", "x", "x", "y"], "val": ["a", "b", "c", "a", None]},
            index=[10, 4, 7, 1, 3],
        )
        out = group_mode(df, "key", "val")
        assert out.index.tolist() == [10, 4, 7, 1, 3]
        assert out.tolist() == ["a", "b", "a", "a", "b"]

    def test_missing_keys_form_a_group(self):
        df = pd.DataFrame({"key": [None, None, "x"], "val": ["p", "p", "q"]})
        assert group_mode(df, ["key"], "val").tolist() == ["p", "p", "q"]

    def test_all_missing_group_is_missing(self):
        df = pd.DataFrame({"key": ["x", "x", "y"], "val": [np.nan, np.nan, "v"]})
        out = group_mode(df, "key", "val")
        assert out.isna().tolist() == [True, True, False]


class TestStabilizeIdentity:
    """Two-pass name/id consensus for one role."""

    def make_frame(self):
        return pd.DataFrame({
            "passer": ["T.Brady", "T.Brady", "T.Brady", "Tom Brady", None],
            "passer_player_id": ["00-A", "00-A", "00-B", "00-A", "00-Z"],
            "passer_jersey_number": pd.array([12, 12, 21, 12, 9], dtype="Int64"),
            "posteam": ["NE", "NE", "NE", "NE", "NE"],
            "season": [2019] * 5,
        })

    def test_id_is_group_mode(self):
        out = stabilize_identity(self.make_frame(), "passer", "passer_player_id",
                                 "passer_jersey_number", "passer_id")
        assert out["passer_id"].tolist()[:4] == ["00-A"] * 4
        assert pd.isna(out["passer_id"].iloc[4])

    def test_jersey_number_is_group_mode(self):
        out = stabilize_identity(self.make_frame(), "passer", "passer_player_id",
                                 "passer_jersey_number", "passer_id")
        assert out["passer_jersey_number"].tolist()[:4] == [12, 12, 12, 12]
        assert pd.isna(out["passer_jersey_number"].iloc[4])

    def test_name_is_mode_within_id(self):
        out = stabilize_identity(self.make_frame(), "passer", "passer_player_id",
                                 "passer_jersey_number", "passer_id")
        assert out["passer"].tolist()[:4] == ["T.Brady"] * 4

    def test_name_without_any_raw_id_becomes_missing(self):
        df = self.make_frame().drop(columns="passer_player_id")
        out = stabilize_identity(df, "passer", "passer_player_id",
                                 "passer_jersey_number", "passer_id")
        assert out["passer_id"].isna().all()
        assert out["passer"].isna().all()
        assert "passer_player_id" not in out.columns

    def test_same_name_other_team_is_other_group(self):
        df = self.make_frame()
        df.loc[3, "passer"] = "T.Brady"
        df.loc[3, "posteam"] = "TB"
        df.loc[3, "passer_player_id"] = "00-C"
        out = stabilize_identity(df, "passer", "passer_player_id",
                                 "passer_jersey_number", "passer_id")
        assert out["passer_id"].tolist()[:4] == ["00-A", "00-A", "00-A", "00-C"]
