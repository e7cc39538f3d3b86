"""Record of who has already played whom."""

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

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Iterable, Set

from chesstourney.models import Match


@dataclass
class PairingHistory:
    """
    Tracks historical pairings to prevent repeat matches.

    Attributes
    ----------
    previous_matches : set of frozenset of str
        Frozensets of player id pairs that have already met, in either colour.
    white_counts : dict of str to int
        How many games each player has had with white.
    """

    previous_matches: Set[frozenset] = field(default_factory=set)
    white_counts: Dict[str, int] = field(default_factory=Counter)

    @classmethod
    def from_matches(cls, matches: Iterable[Match]) -> "PairingHistory":
        """Build the history from every stored match. Bye rows are ignored."""
        history = cls()
        for match in matches:
            if match.is_bye:
                continue
            history.add_pairing(match.white_id, match.black_id)
        return history

    def add_pairing(self, white_id: str, black_id: str) -> None:
        """Record that two players have been paired."""
        self.previous_matches.add(frozenset({white_id, black_id}))
        self.white_counts[white_id] += 1

    def have_played(self, player1_id: str, player2_id: str) -> bool:
        """Check if two players have previously played each other."""
        return frozenset({player1_id, player2_id}) in self.previous_matches

    def whites(self, player_id: str) -> int:
        return self.white_counts.get(player_id, 0)
