"""
Unit tests for legacy player-id resolution.
"""
import unittest
import numpy as np
import pandas as pd
import sys
import os

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from nfl_pbp_cleaning.cleaning.legacy_ids import id_map_to_dict, resolve_legacy_ids


class TestResolveLegacyIds(unittest.TestCase):
    """Test cases for resolve_legacy_ids."""

    def setUp(self):
        self.id_map = pd.DataFrame({
            'gsis_id': ['00-0019596', '00-0022924', '00-0019596', '00-0011111'],
            'new_id': ['32013030-2d30-3031-3935-3936d5f1b7a2', 'NEW-ROETH', 'DUPLICATE', np.nan],
        })

    def test_mapped_id_is_replaced(self):
        out = resolve_legacy_ids(pd.Series(['00-0022924']), self.id_map)
        self.assertEqual(out.iloc[0], 'NEW-ROETH')

    def test_unmapped_and_missing_ids_unchanged(self):
        ids = pd.Series(['00-0099999', None, np.nan, '00-0011111'])
        out = resolve_legacy_ids(ids, self.id_map)
        self.assertEqual(out.iloc[0], '00-0099999')
        self.assertTrue(pd.isna(out.iloc[1]))
        self.assertTrue(pd.isna(out.iloc[2]))
        self.assertEqual(out.iloc[3], '00-0011111')

    def test_order_length_and_index_preserved(self):
        ids = pd.Series(['00-0022924', 'x', '00-0019596'], index=[9, 2, 5])
        out = resolve_legacy_ids(ids, self.id_map)
        self.assertListEqual(out.index.tolist(), [9, 2, 5])
        self.assertListEqual(
            out.tolist(),
            ['NEW-ROETH', 'x', '32013030-2d30-3031-3935-3936d5f1b7a2'],
        )

    def test_duplicate_gsis_keeps_first(self):
        lookup = id_map_to_dict(self.id_map)
        self.assertEqual(lookup['00-0019596'], '32013030-2d30-3031-3935-3936d5f1b7a2')
        self.assertNotIn('00-0011111', lookup)

    def test_plain_mapping_accepted(self):
        out = resolve_legacy_ids(pd.Series(['a', 'b']), {'a': 'A'})
        self.assertListEqual(out.tolist(), ['A', 'b'])

    def test_empty_map_is_identity(self):
        ids = pd.Series(['a', None])
        self.assertIs(resolve_legacy_ids(ids, {}), ids)

    def test_map_without_required_columns(self):
        with self.assertRaises(KeyError):
            resolve_legacy_ids(pd.Series(['a']), pd.DataFrame({'old': ['a']}))


if __name__ == '__main__':
    unittest.main()
