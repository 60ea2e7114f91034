"""
NFL Play-by-Play Cleaning Package
Player attribution, stable player ids, play flags and fumble-adjusted
quarterback EPA for NFL play-by-play data.
"""

__version__ = "1.0.0"
__author__ = "NFL Analytics Team"

# Import main entry points for easy access
from .config import config
from .cleaning.attribution import clean_pbp
from .cleaning.qb_epa import add_qb_epa
from .data.game_data import add_game_data
from .data.loader import FetchResult, ReferenceDataLoader
from .pipeline import PlayByPlayCleaner

__all__ = [
    'config',
    'clean_pbp',
    'add_qb_epa',
    'add_game_data',
    'FetchResult',
    'ReferenceDataLoader',
    'PlayByPlayCleaner',
]
