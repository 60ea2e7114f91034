"""
End-to-end play-by-play enrichment: attribution, qb_epa and game data.
"""
from __future__ import annotations

import logging
from typing import Optional

import pandas as pd

from .cleaning.attribution import clean_pbp
from .cleaning.legacy_ids import id_map_to_dict
from .cleaning.qb_epa import ExpectedPointsModel, add_qb_epa
from .data.game_data import add_game_data
from .data.loader import ReferenceDataLoader

logger = logging.getLogger(__name__)


class PlayByPlayCleaner:
    """Runs every enrichment step with shared, cached reference data."""

    def __init__(self,
                 loader: Optional[ReferenceDataLoader] = None,
                 ep_model: Optional[ExpectedPointsModel] = None):
        """
        Initialize the cleaner.

        Args:
            loader: Source of the legacy id map and games table
            ep_model: Expected-points model used by ``add_qb_epa``
        """
        self.loader = loader or ReferenceDataLoader()
        self.ep_model = ep_model
        self._id_lookup: Optional[dict] = None

    def _legacy_id_lookup(self) -> dict:
        if self._id_lookup is None:
            result = self.loader.load_legacy_id_map()
            if result.available:
                self._id_lookup = id_map_to_dict(result.data)
            else:
                logger.warning("Legacy id map unavailable (%s); keeping player ids as they are",
                               result.error)
                self._id_lookup = {}
        return self._id_lookup

    def clean(self, pbp: pd.DataFrame) -> pd.DataFrame:
        """Attribution, play flags, team codes and stable player ids."""
        return clean_pbp(pbp, legacy_id_map=self._legacy_id_lookup())

    def add_qb_epa(self, pbp: pd.DataFrame) -> pd.DataFrame:
        return add_qb_epa(pbp, self.ep_model)

    def add_game_data(self, pbp: pd.DataFrame, source: str = "nfl") -> pd.DataFrame:
        return add_game_data(pbp, source=source, loader=self.loader)

    def run(self, pbp: pd.DataFrame, source: str = "nfl", include_game_data: bool = True) -> pd.DataFrame:
        """
        Run all steps in order.

        A step that fails is logged and skipped; the frame produced so far
        is passed on.
        """
        out = pbp.pipe(self.clean)
        try:
            out = out.pipe(self.add_qb_epa)
        except Exception:
            logger.exception("Computing qb_epa failed; continuing without it")
        if include_game_data:
            out = out.pipe(self.add_game_data, source=source)
        logger.info("Enriched play-by-play: %d rows, %d columns", *out.shape)
        return out
