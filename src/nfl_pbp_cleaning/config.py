"""
Configuration module for the NFL play-by-play cleaning package.
Contains reference-data locations, lookup tables and column catalogues.
"""
from types import MappingProxyType
from typing import Dict, List, Tuple
import os


class Config:
    """Main configuration class for the play-by-play cleaning package."""

    # Remote reference data
    LEGACY_ID_MAP_URL = os.getenv(
        "NFL_PBP_LEGACY_ID_MAP_URL",
        "https://raw.githubusercontent.com/guga31bb/nflfastR-data/master/roster-data/legacy_id_map.csv",
    )
    GAMES_URL = os.getenv(
        "NFL_PBP_GAMES_URL",
        "https://raw.githubusercontent.com/leesharpe/nfldata/master/data/games.csv",
    )
    REQUEST_TIMEOUT = float(os.getenv("NFL_PBP_REQUEST_TIMEOUT", "30"))
    UNAVAILABLE_STATUS_CODES: Tuple[int, ...] = (404, 500)

    # Historical abbreviation -> current abbreviation, applied in order
    TEAM_CODE_REPLACEMENTS: Tuple[Tuple[str, str], ...] = (
        ("JAC", "JAX"),
        ("STL", "LA"),
        ("SL", "LA"),
        ("ARZ", "ARI"),
        ("BLT", "BAL"),
        ("CLV", "CLE"),
        ("HST", "HOU"),
        ("SD", "LAC"),
        ("OAK", "LV"),
    )

    # Play classification
    SPECIAL_PLAY_TYPES = frozenset({"extra_point", "field_goal", "kickoff", "punt"})
    NORMAL_PLAY_TYPES = frozenset({"no_play", "pass", "run"})
    REVIEW_DESC = "*** play under review ***"
    TIMEOUT_DESC_PREFIX = "Timeout "

    # Fumble-adjusted EPA
    FUMBLE_CLOCK_SECONDS = 6
    FIRST_DOWN_DISTANCE = 10
    FIELD_LENGTH = 100

    # Season after which "Van Pelt" refers to Bradlee rather than Alex
    VAN_PELT_CUTOFF_SEASON = 2003


# Create global config instance
config = Config()

# ───────────────────────── Column catalogue ─────────────────────────
# Single source of truth for column roles used across the cleaning steps
COLUMN_LISTS: Dict[str, List[str]] = {
    "team": [
        "posteam", "defteam", "home_team", "away_team", "timeout_team",
        "td_team", "return_team", "penalty_team", "side_of_field",
        "forced_fumble_player_1_team", "forced_fumble_player_2_team",
        "solo_tackle_1_team", "solo_tackle_2_team",
        "assist_tackle_1_team", "assist_tackle_2_team",
        "assist_tackle_3_team", "assist_tackle_4_team",
        "fumbled_1_team", "fumbled_2_team",
        "fumble_recovery_1_team", "fumble_recovery_2_team",
        "yrdln", "end_yard_line", "drive_start_yard_line", "drive_end_yard_line",
    ],
    "derived": [
        "success", "passer", "rusher", "receiver", "pass", "rush", "special",
        "first_down", "aborted_play", "play", "passer_id", "rusher_id",
        "receiver_id", "name", "id", "passer_jersey_number",
        "rusher_jersey_number", "receiver_jersey_number", "jersey_number",
    ],
    "derived_id": ["passer_id", "rusher_id", "receiver_id", "id"],
    "first_down": ["first_down_rush", "first_down_pass", "first_down_penalty"],
    "ep_state": [
        "season", "home_team", "posteam", "roof", "half_seconds_remaining",
        "yardline_100", "down", "ydstogo",
        "posteam_timeouts_remaining", "defteam_timeouts_remaining",
    ],
    "game_data": [
        "game_id", "old_game_id", "away_score", "home_score", "location",
        "result", "total", "spread_line", "total_line", "div_game", "roof",
        "surface", "temp", "wind", "home_coach", "away_coach", "stadium",
        "stadium_id", "gameday",
    ],
}

# Attach COLUMN_LISTS onto the config instance for ease of use
config.COLUMN_LISTS = MappingProxyType(COLUMN_LISTS)

if __name__ == "__main__":
    print("NFL Play-by-Play Cleaning Configuration")
    print("=" * 40)
    print(f"Legacy id map: {config.LEGACY_ID_MAP_URL}")
    print(f"Games: {config.GAMES_URL}")
    print(f"Team columns: {len(COLUMN_LISTS['team'])}")
