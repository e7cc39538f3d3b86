"""Point awards for finished games.

This module turns recorded results into score changes. It never touches the
store; the controller applies the deltas.
"""

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

from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Set

from chesstourney.constants import BYE_SCORE
from chesstourney.models import Match


@dataclass(frozen=True)
class ScoreDelta:
    """Points one player gains from one row."""

    player_id: str
    points: float


def score_round(
    matches: Iterable[Match], bye_score: float = BYE_SCORE
) -> List[ScoreDelta]:
    """Award 1/0, 0/1 or 1/2 each for every decided game.

    Games without a result are skipped rather than treated as draws. Bye rows
    award ``bye_score``. Calling this twice for the same round yields the
    deltas twice; guarding against that is up to the caller.
    """
    deltas: List[ScoreDelta] = []
    for match in matches:
        for player_id, points in match.points(bye_score).items():
            deltas.append(ScoreDelta(player_id, points))
    return deltas


def total_by_player(deltas: Iterable[ScoreDelta]) -> Dict[str, float]:
    """Sum deltas per player, keeping first-seen order."""
    totals: Dict[str, float] = defaultdict(float)
    for delta in deltas:
        totals[delta.player_id] += delta.points
    return dict(totals)


def rebuild_scores(
    player_ids: Iterable[str],
    matches: Iterable[Match],
    scored_rounds: Set[int],
    byes: Mapping[int, str],
    bye_score: float = BYE_SCORE,
) -> Dict[str, float]:
    """Recompute every player's score from scratch.

    Only rows from rounds already scored count, plus Swiss byes, which are
    credited when they are handed out.
    """
    scores = {pid: 0.0 for pid in player_ids}
    counted = [m for m in matches if m.round_number in scored_rounds]
    for player_id, points in total_by_player(score_round(counted, bye_score)).items():
        if player_id in scores:
            scores[player_id] += points
    for player_id in byes.values():
        if player_id in scores:
            scores[player_id] += bye_score
    return scores
