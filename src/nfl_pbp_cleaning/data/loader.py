"""
Reference-data loading for play-by-play cleaning.
Fetches the legacy player-id map and the games table, either from a remote
URL or from a local CSV file.
"""
from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import pandas as pd
import requests

from ..config import config

logger = logging.getLogger(__name__)

Source = Union[str, Path]


@dataclass(frozen=True)
class FetchResult:
    """Outcome of a reference-data fetch: a frame, or the reason there is none."""
    data: Optional[pd.DataFrame] = None
    error: Optional[str] = None

    @property
    def available(self) -> bool:
        return self.data is not None

    @classmethod
    def success(cls, data: pd.DataFrame) -> "FetchResult":
        return cls(data=data)

    @classmethod
    def unavailable(cls, reason: str) -> "FetchResult":
        return cls(error=reason)


def _is_url(source: Source) -> bool:
    return isinstance(source, str) and source.startswith(("http://", "https://"))


def fetch_table(source: Source, timeout: Optional[float] = None) -> FetchResult:
    """
    Read one CSV table from a URL or a local path.

    Network errors, the "servers are down" statuses and unreadable payloads
    are reported as ``FetchResult.unavailable`` instead of raised.
    """
    if timeout is None:
        timeout = config.REQUEST_TIMEOUT
    if _is_url(source):
        try:
            response = requests.get(source, timeout=timeout)
        except requests.RequestException as exc:
            return FetchResult.unavailable(f"request to {source} failed: {exc}")
        if response.status_code in config.UNAVAILABLE_STATUS_CODES:
            return FetchResult.unavailable(
                f"the data hosting server answered {response.status_code} for {source}"
            )
        try:
            response.raise_for_status()
            return FetchResult.success(pd.read_csv(io.BytesIO(response.content), low_memory=False))
        except (requests.HTTPError, ValueError, pd.errors.ParserError) as exc:
            return FetchResult.unavailable(f"could not read {source}: {exc}")

    path = Path(source)
    try:
        return FetchResult.success(pd.read_csv(path, low_memory=False))
    except FileNotFoundError:
        return FetchResult.unavailable(f"reference file not found: {path}")
    except (ValueError, pd.errors.ParserError) as exc:
        return FetchResult.unavailable(f"could not read {path}: {exc}")


class ReferenceDataLoader:
    """Loads and caches the reference tables used by the cleaning steps."""

    def __init__(self,
                 legacy_id_map_source: Optional[Source] = None,
                 games_source: Optional[Source] = None,
                 timeout: Optional[float] = None):
        """
        Initialize the loader.

        Args:
            legacy_id_map_source: URL or CSV path of the gsis_id -> new_id map
            games_source: URL or CSV path of the games table
            timeout: Request timeout in seconds for remote sources
        """
        self.legacy_id_map_source = legacy_id_map_source or config.LEGACY_ID_MAP_URL
        self.games_source = games_source or config.GAMES_URL
        self.timeout = timeout
        self._legacy_id_map: Optional[FetchResult] = None
        self._games: Optional[FetchResult] = None

    def load_legacy_id_map(self) -> FetchResult:
        """
        Load the legacy player-id map.

        Returns:
            FetchResult holding a frame with ``gsis_id``/``new_id`` columns
        """
        if self._legacy_id_map is None:
            result = fetch_table(self.legacy_id_map_source, self.timeout)
            if result.available:
                missing = {"gsis_id", "new_id"}.difference(result.data.columns)
                if missing:
                    result = FetchResult.unavailable(
                        f"legacy id map lacks columns {sorted(missing)}"
                    )
                else:
                    logger.info("Loaded %d legacy id mappings", len(result.data))
            self._legacy_id_map = result
        return self._legacy_id_map

    def load_games(self) -> FetchResult:
        """
        Load the per-game metadata table.

        Returns:
            FetchResult holding one row per game keyed by ``game_id``
        """
        if self._games is None:
            result = fetch_table(self.games_source, self.timeout)
            if result.available:
                if "game_id" not in result.data.columns:
                    result = FetchResult.unavailable("games table lacks a game_id column")
                else:
                    logger.info("Loaded metadata for %d games", len(result.data))
            self._games = result
        return self._games

    def clear_cache(self) -> None:
        self._legacy_id_map = None
        self._games = None
