"""Tournament management: scoring, standings, queries and the controller."""

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

from chesstourney.tournament.controller import TournamentController
from chesstourney.tournament.queries import TournamentQueries
from chesstourney.tournament.scoring import (
    ScoreDelta,
    rebuild_scores,
    score_round,
    total_by_player,
)
from chesstourney.tournament.standings import (
    Standing,
    calculate_buchholz,
    compute_standings,
)

__all__ = [
    "ScoreDelta",
    "Standing",
    "TournamentController",
    "TournamentQueries",
    "calculate_buchholz",
    "compute_standings",
    "rebuild_scores",
    "score_round",
    "total_by_player",
]
