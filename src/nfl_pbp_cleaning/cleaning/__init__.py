"""
Cleaning module: description parsing, player attribution and qb_epa.
"""

from .attribution import clean_pbp
from .consensus import custom_mode, group_mode
from .description_parser import parse_description
from .legacy_ids import resolve_legacy_ids
from .qb_epa import add_qb_epa, reconstruct_fumble_state
from .teams import normalize_team_code, normalize_team_columns

__all__ = [
    'clean_pbp',
    'custom_mode',
    'group_mode',
    'parse_description',
    'resolve_legacy_ids',
    'add_qb_epa',
    'reconstruct_fumble_state',
    'normalize_team_code',
    'normalize_team_columns',
]
