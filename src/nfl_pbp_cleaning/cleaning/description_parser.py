"""
Player extraction from free-text play descriptions.

The descriptions look like ``"(1:15) (Shotgun) 12-T.Brady pass short right
to 80-J.Smith to NE 45 for 12 yards"``. Each role has its own matcher that
returns the first name token anchored by a role-specific phrase, together
with the jersey number written in front of it (``12-``), if any.

Matchers are plain functions ``str -> ParsedName | None`` so that callers
can combine them and override their result for plays the patterns are
known to get wrong (laterals, aborted snaps, trick plays).
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Optional

import numpy as np
import pandas as pd

from ..config import config
from ..data.column_schema import column_or_missing

# First[period or space]Last[maybe ' or - in last][maybe more letters][maybe Jr./Sr./II/III/IV]
NAME_PATTERN = (
    r"[A-Z][A-Za-z]*(?:\.|\s)+[A-Z][A-Za-z]*'*-*[A-Z]*[a-z]*"
    r"(?:\s(?:Jr\.|Sr\.|I{2,3}|IV))?"
)
# 1-2 digits and a dash right before the name
NUMBER_PREFIX = r"(?:(?P<number>\d{1,2})-)?"

# maybe some spaces and letters, then pass / sack / scramble
PASS_FINDER = r"(?=\s*[a-z]*\s*(?: pass|sack|scramble))"
# maybe some spaces and letters, then a rush direction unless they fumbled
RUSH_FINDER = (
    r"(?=\s*[a-z]*\s*(?:FUMBLES |left end|left tackle|left guard|up the middle"
    r"|right guard|right tackle|right end))"
)

_PASSER_RE = re.compile(NUMBER_PREFIX + rf"(?P<name>{NAME_PATTERN}){PASS_FINDER}")
_RUSHER_RE = re.compile(NUMBER_PREFIX + rf"(?P<name>{NAME_PATTERN}){RUSH_FINDER}")
# to or for, maybe a jersey number and a dash
_RECEIVER_RE = re.compile(rf"(?:to|for)\s(?P<number>\d{{0,2}})-?(?P<name>{NAME_PATTERN})")

# a space or dash, a capital letter and a period, then stray spaces before the surname
_INITIAL_SPACING_RE = re.compile(r"((?:\s|-)[A-Z]\.)\s+")

ABNORMAL_PLAY_PATTERN = (
    r"Lateral|lateral|pitches to|Direct snap to|New quarterback for|Aborted"
    r"|backwards pass|Pass back to|Flea-flicker"
)
_ABNORMAL_RE = re.compile(ABNORMAL_PLAY_PATTERN)
PASS_PLAY_PATTERN = r" pass|sacked|scramble"

# Literal spelling fixes shared by the passer and rusher columns
PLAYER_NAME_CORRECTIONS = MappingProxyType({
    "Jos.Allen": "J.Allen",
    "Alex Smith": "A.Smith",
    "Ale.Smith": "A.Smith",
    "Tr.Brown": "T.Brown",
    "Sh.Hill": "S.Hill",
    "Matt.Moore": "M.Moore",
    "Mat.Moore": "M.Moore",
    "Jo.Freeman": "J.Freeman",
    "G.Minshew": "G.Minshew II",
    "R.Griffin": "R.Griffin III",
    "Randel El": "A.Randle El",
    "Randle El": "A.Randle El",
    "Dom.Davis": "D.Davis",
})
RECEIVER_NAME_CORRECTIONS = MappingProxyType({"F.R": "F.Jones"})


@dataclass(frozen=True)
class ParsedName:
    """A name token pulled from a description, with its jersey number if written."""
    name: str
    jersey_number: Optional[int] = None


def normalize_description(desc):
    """Remove stray spaces between an initial and a surname ("M. Lynch" -> "M.Lynch")."""
    if not isinstance(desc, str):
        return desc
    return _INITIAL_SPACING_RE.sub(r"\1", desc)


def _parse_number(digits: Optional[str]) -> Optional[int]:
    if not digits:
        return None
    try:
        return int(digits)
    except ValueError:
        return None


def _first_match(regex: re.Pattern, desc) -> Optional[ParsedName]:
    if not isinstance(desc, str):
        return None
    match = regex.search(desc)
    if match is None:
        return None
    return ParsedName(match.group("name"), _parse_number(match.group("number")))


def find_passer(desc) -> Optional[ParsedName]:
    """Name right before " pass", "sack" or "scramble"."""
    return _first_match(_PASSER_RE, desc)


def find_rusher(desc) -> Optional[ParsedName]:
    """Name right before a run direction or a FUMBLES marker."""
    return _first_match(_RUSHER_RE, desc)


def find_receiver(desc) -> Optional[ParsedName]:
    """Name right after "to " or "for ", optionally behind a jersey number."""
    return _first_match(_RECEIVER_RE, desc)


def is_abnormal_play(desc) -> bool:
    """True for laterals, aborted snaps and trick plays the matchers misread."""
    return isinstance(desc, str) and _ABNORMAL_RE.search(desc) is not None


def is_pass_play(desc) -> bool:
    """Pass attempts, sacks and scrambles all count as dropbacks."""
    return isinstance(desc, str) and re.search(PASS_PLAY_PATTERN, desc) is not None


def parse_description(desc) -> dict:
    """
    Pattern-based attribution for a single description.

    Applies the passer-over-rusher precedence and drops receivers that do
    not come from a pass. Upstream-name fallbacks are not applied here;
    see ``extract_players`` for the frame-level version.
    """
    desc = normalize_description(desc)
    passer = find_passer(desc)
    rusher = None if passer is not None else find_rusher(desc)
    receiver = find_receiver(desc)
    if not (isinstance(desc, str) and " pass" in desc):
        receiver = None
    return {"passer": passer, "rusher": rusher, "receiver": receiver}


def _split(parsed: pd.Series, prefix: str) -> pd.DataFrame:
    return pd.DataFrame({
        prefix: parsed.map(lambda p: p.name if p is not None else np.nan),
        f"{prefix}_jersey_number": pd.array(
            [p.jersey_number if p is not None else pd.NA for p in parsed], dtype="Int64"
        ),
    }, index=parsed.index)


def correct_player_names(names: pd.Series, posteam: pd.Series, season: pd.Series) -> pd.Series:
    """
    Fix known inconsistent spellings in a passer or rusher column.

    "Ryan" is only Matt Ryan on Atlanta; "Van Pelt" is Alex up to the
    cutoff season and Bradlee afterwards.
    """
    fixed = names.replace(dict(PLAYER_NAME_CORRECTIONS))
    season = pd.to_numeric(season, errors="coerce")
    fixed = fixed.mask((names == "Ryan") & (posteam == "ATL"), "M.Ryan")
    van_pelt = names == "Van Pelt"
    fixed = fixed.mask(van_pelt & (season <= config.VAN_PELT_CUTOFF_SEASON), "A.Van Pelt")
    fixed = fixed.mask(van_pelt & (season > config.VAN_PELT_CUTOFF_SEASON), "B.Van Pelt")
    return fixed


def correct_receiver_names(names: pd.Series) -> pd.Series:
    return names.replace(dict(RECEIVER_NAME_CORRECTIONS))


def extract_players(df: pd.DataFrame) -> pd.DataFrame:
    """
    Frame-level attribution from ``desc``.

    Adds passer/rusher/receiver and their jersey numbers, applying in order:
    the upstream rusher name as a last resort, upstream names for abnormal
    plays, passer-over-rusher precedence, the pass-only receiver rule and
    the name corrections. Missing upstream ``*_player_name`` columns are
    treated as all-missing.

    Args:
        df: Frame whose ``desc`` has already been through ``normalize_description``

    Returns:
        Frame indexed like df with the six attribution columns
    """
    desc = df["desc"]
    out = pd.concat([
        _split(desc.map(find_passer), "passer"),
        _split(desc.map(find_rusher), "rusher"),
        _split(desc.map(find_receiver), "receiver"),
    ], axis=1)

    # last resort for aborted snaps and "F.Last to NYG 44." style plays
    upstream_rusher = column_or_missing(df, "rusher_player_name")
    fallback = out["rusher"].isna() & out["passer"].isna() & upstream_rusher.notna()
    out["rusher"] = out["rusher"].mask(fallback, upstream_rusher)

    abnormal = desc.map(is_abnormal_play).astype(bool)
    for role in ("receiver", "rusher", "passer"):
        out[role] = out[role].mask(abnormal, column_or_missing(df, f"{role}_player_name"))

    out["rusher"] = out["rusher"].mask(out["passer"].notna())
    has_pass = desc.map(lambda d: isinstance(d, str) and " pass" in d).astype(bool)
    out["receiver"] = out["receiver"].where(has_pass)

    posteam = column_or_missing(df, "posteam")
    season = column_or_missing(df, "season")
    out["passer"] = correct_player_names(out["passer"], posteam, season)
    out["rusher"] = correct_player_names(out["rusher"], posteam, season)
    out["receiver"] = correct_receiver_names(out["receiver"])
    return out
