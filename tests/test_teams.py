"""
Unit tests for team abbreviation standardisation.
"""
import unittest
import numpy as np
import pandas as pd
import sys
import os

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from nfl_pbp_cleaning.cleaning.teams import (
    normalize_team_code,
    normalize_team_columns,
    normalize_team_series,
)


class TestNormalizeTeamCode(unittest.TestCase):
    """Test cases for single-value normalisation."""

    def test_yard_line_string(self):
        self.assertEqual(normalize_team_code("SD 49"), "LAC 49")

    def test_plain_codes(self):
        self.assertEqual(normalize_team_code("OAK"), "LV")
        self.assertEqual(normalize_team_code("JAC"), "JAX")
        self.assertEqual(normalize_team_code("STL"), "LA")
        self.assertEqual(normalize_team_code("ARZ"), "ARI")
        self.assertEqual(normalize_team_code("BLT"), "BAL")
        self.assertEqual(normalize_team_code("CLV"), "CLE")
        self.assertEqual(normalize_team_code("HST"), "HOU")

    def test_current_codes_unchanged(self):
        for code in ["LAC", "LV", "JAX", "LA", "NE", "KC"]:
            self.assertEqual(normalize_team_code(code), code)

    def test_non_text_passes_through(self):
        self.assertIsNone(normalize_team_code(None))
        self.assertTrue(np.isnan(normalize_team_code(np.nan)))
        self.assertEqual(normalize_team_code(50), 50)


class TestNormalizeTeamColumns(unittest.TestCase):
    """Test cases for frame-level normalisation."""

    def setUp(self):
        self.df = pd.DataFrame({
            "posteam": ["SD", "OAK", None],
            "defteam": ["STL", "NE", "JAC"],
            "yrdln": ["SD 49", "OAK 20", "MID 50"],
            "td_team": [np.nan, np.nan, np.nan],
            "desc": ["to SD 40", "x", "y"],
        })

    def test_team_columns_rewritten(self):
        out = normalize_team_columns(self.df)
        self.assertListEqual(out["posteam"].tolist()[:2], ["LAC", "LV"])
        self.assertTrue(pd.isna(out["posteam"].iloc[2]))
        self.assertListEqual(out["defteam"].tolist(), ["LA", "NE", "JAX"])
        self.assertListEqual(out["yrdln"].tolist(), ["LAC 49", "LV 20", "MID 50"])

    def test_other_columns_untouched(self):
        out = normalize_team_columns(self.df)
        self.assertListEqual(out["desc"].tolist(), ["to SD 40", "x", "y"])
        self.assertTrue(out["td_team"].isna().all())

    def test_input_not_mutated(self):
        normalize_team_columns(self.df)
        self.assertEqual(self.df["posteam"].iloc[0], "SD")

    def test_explicit_column_subset(self):
        out = normalize_team_columns(self.df, ["defteam"])
        self.assertEqual(out["posteam"].iloc[0], "SD")
        self.assertEqual(out["defteam"].iloc[0], "LA")

    def test_numeric_series_passes_through(self):
        s = pd.Series([1.0, np.nan])
        pd.testing.assert_series_equal(normalize_team_series(s), s)


if __name__ == '__main__':
    unittest.main()
