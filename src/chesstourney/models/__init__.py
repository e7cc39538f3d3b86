"""Data models for players, matches and tournament state."""

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

from chesstourney.models.enums import (
    ChessPlatform,
    ColourPolicy,
    GameResult,
    PairingSystem,
    RegistrationStatus,
    TournamentStatus,
)
from chesstourney.models.match import (
    BYE,
    ByeSlot,
    Match,
    Opponent,
    RealPlayer,
    opponent_from_id,
)
from chesstourney.models.pairing import Pairing, PairingSet, RoundRobinSchedule
from chesstourney.models.player import Player
from chesstourney.models.tournament import TournamentConfig, TournamentState

__all__ = [
    "BYE",
    "ByeSlot",
    "ChessPlatform",
    "ColourPolicy",
    "GameResult",
    "Match",
    "Opponent",
    "Pairing",
    "PairingSet",
    "PairingSystem",
    "Player",
    "RealPlayer",
    "RegistrationStatus",
    "RoundRobinSchedule",
    "TournamentConfig",
    "TournamentState",
    "TournamentStatus",
    "opponent_from_id",
]
