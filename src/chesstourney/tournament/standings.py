"""Standings with Buchholz tie-break."""

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

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from chesstourney.models import Match, Player
from chesstourney.utils import setup_logger

logger = setup_logger(__name__)


@dataclass
class Standing:
    """A ranked row of the standings table."""

    player: Player
    buchholz: float
    rank: int

    @property
    def player_id(self) -> str:
        return self.player.id

    @property
    def score(self) -> float:
        return self.player.score


def completed_games(matches: Iterable[Match]) -> List[Match]:
    """Games between two players that have a result."""
    return [m for m in matches if m.has_result and not m.is_bye]


def calculate_buchholz(
    player_id: str, matches: Iterable[Match], scores: Dict[str, float]
) -> float:
    """Sum of the current scores of everyone ``player_id`` has played.

    Each completed game counts once, so a rematched opponent counts twice.
    Byes and unplayed games add nothing.
    """
    total = 0.0
    for match in completed_games(matches):
        if not match.involves(player_id):
            continue
        opponent = match.opponent_of(player_id)
        total += scores.get(opponent.id, 0.0)
    return total


def compute_standings(
    players: Iterable[Player],
    completed_matches: Iterable[Match],
    all_players: Optional[Iterable[Player]] = None,
) -> List[Standing]:
    """Rank approved players by score, then Buchholz, then rating.

    Players tied on all three keep their input order. Running this again on
    the same data gives the same ranks.

    Args:
        players: Candidates for ranking; only approved ones are ranked
        completed_matches: Match history; unfinished games and byes are ignored
        all_players: Extra players to look opponent scores up in, for
            opponents who are no longer approved

    Returns:
        Standings ordered by rank, starting at 1
    """
    eligible = [p for p in players if p.is_approved]
    games = completed_games(completed_matches)

    scores: Dict[str, float] = {}
    for player in all_players or ():
        scores[player.id] = player.score
    for player in eligible:
        scores[player.id] = player.score

    buchholz = {p.id: calculate_buchholz(p.id, games, scores) for p in eligible}
    ordered = sorted(
        eligible,
        key=lambda p: (p.score, buchholz[p.id], p.rating),
        reverse=True,
    )

    standings = [
        Standing(player=player, buchholz=buchholz[player.id], rank=position)
        for position, player in enumerate(ordered, start=1)
    ]
    logger.debug(f"Computed standings for {len(standings)} players")
    return standings
