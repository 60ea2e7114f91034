"""
Standardise player ids across the old (1999-2010) and new (2011+) id eras.
"""
from __future__ import annotations

from typing import Dict, Mapping, Union

import pandas as pd

IdMap = Union[pd.DataFrame, Mapping[str, str]]


def id_map_to_dict(id_map: IdMap) -> Dict[str, str]:
    """
    Turn a legacy id table into a plain ``{gsis_id: new_id}`` lookup.

    Rows with a missing ``new_id`` are dropped; when a ``gsis_id`` appears
    more than once the first ``new_id`` wins.
    """
    if isinstance(id_map, pd.DataFrame):
        missing = {"gsis_id", "new_id"}.difference(id_map.columns)
        if missing:
            raise KeyError(f"Legacy id map is missing columns: {sorted(missing)}")
        table = (
            id_map.loc[id_map["gsis_id"].notna() & id_map["new_id"].notna(), ["gsis_id", "new_id"]]
            .drop_duplicates(subset="gsis_id", keep="first")
        )
        return dict(zip(table["gsis_id"], table["new_id"]))
    return {k: v for k, v in id_map.items() if not pd.isna(v)}


def resolve_legacy_ids(ids: pd.Series, id_map: IdMap) -> pd.Series:
    """
    Replace old-era ids with their new-era equivalent.

    Args:
        ids: Column of player ids (may contain missing values)
        id_map: Table with ``gsis_id``/``new_id`` columns, or a plain mapping

    Returns:
        Series with the same index and length as ``ids``; ids without a
        mapping (and missing ids) are returned unchanged
    """
    lookup = id_map if isinstance(id_map, dict) else id_map_to_dict(id_map)
    if not lookup:
        return ids
    replaced = ids.map(lookup)
    return replaced.where(replaced.notna(), ids)
