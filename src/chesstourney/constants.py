# Chess Tourney
# Copyright (C) 2025  Chess Tourney developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

# --- Constants ---
SAVE_FILE_EXTENSION = ".json"
DEFAULT_DATA_FILE = f"tournament{SAVE_FILE_EXTENSION}"

# Game outcome scores
WIN_SCORE = 1.0
DRAW_SCORE = 0.5
LOSS_SCORE = 0.0

# Bye score (configurable per tournament)
HALF_POINT_BYE_SCORE = 0.5
BYE_SCORE = HALF_POINT_BYE_SCORE

# Result strings as stored on a match
RESULT_WHITE_WIN = "1-0"
RESULT_BLACK_WIN = "0-1"
RESULT_DRAW = "1/2-1/2"
# Older save files spell the draw this way
RESULT_DRAW_ALT = "0.5-0.5"

# Reserved identifier standing in for the missing opponent of a bye row
BYE_ID = "BYE"
# Bye rows sort after every real board
BYE_TABLE = 999

# Tournament defaults
DEFAULT_TOTAL_ROUNDS = 5
DEFAULT_TOURNAMENT_NAME = "Chess Tournament"
MIN_PLAYERS_TO_PAIR = 2

# Rating bounds accepted at registration
MIN_RATING = 0
MAX_RATING = 3500

# Cache keys
CACHE_ALL_PLAYERS = "players:all"
CACHE_APPROVED_PLAYERS = "players:approved"
CACHE_MATCHES = "matches:all"
CACHE_TOURNAMENT = "tournament:state"
ALL_CACHE_KEYS = (
    CACHE_ALL_PLAYERS,
    CACHE_APPROVED_PLAYERS,
    CACHE_MATCHES,
    CACHE_TOURNAMENT,
)
