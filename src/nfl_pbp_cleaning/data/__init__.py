"""
Data module: reference-data loading, game metadata and column catalogue.
"""

from .column_schema import ColumnSchema
from .game_data import add_game_data
from .loader import FetchResult, ReferenceDataLoader, fetch_table

__all__ = ['ColumnSchema', 'add_game_data', 'FetchResult', 'ReferenceDataLoader', 'fetch_table']
