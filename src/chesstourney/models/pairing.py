"""Results of pairing computations."""

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

from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from chesstourney.constants import BYE_TABLE
from chesstourney.models.match import Match


@dataclass(frozen=True)
class Pairing:
    """One board: who plays white, who plays black, and where."""

    white_id: str
    black_id: str
    table: int

    def to_match(self, round_number: int) -> Match:
        return Match.between(round_number, self.white_id, self.black_id, self.table)


@dataclass
class PairingSet:
    """All boards of one round plus the player sitting out, if any.

    An empty set means there were not enough eligible players to pair.
    """

    round_number: int
    pairings: List[Pairing] = field(default_factory=list)
    bye_player_id: Optional[str] = None

    def __len__(self) -> int:
        return len(self.pairings)

    def __iter__(self) -> Iterator[Pairing]:
        return iter(self.pairings)

    @property
    def is_empty(self) -> bool:
        return not self.pairings and self.bye_player_id is None

    @property
    def player_ids(self) -> List[str]:
        ids = [pid for p in self.pairings for pid in (p.white_id, p.black_id)]
        if self.bye_player_id is not None:
            ids.append(self.bye_player_id)
        return ids

    def to_matches(self, include_bye: bool = False) -> List[Match]:
        """Match records for this round.

        Swiss byes are scored directly and get no row; round robin keeps one.
        """
        matches = [p.to_match(self.round_number) for p in self.pairings]
        if include_bye and self.bye_player_id is not None:
            matches.append(Match.bye(self.round_number, self.bye_player_id, BYE_TABLE))
        return matches


@dataclass
class RoundRobinSchedule:
    """A complete fixture list, one PairingSet per round."""

    rounds: List[PairingSet] = field(default_factory=list)
    total_rounds: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.rounds

    def to_matches(self) -> List[Match]:
        return [m for rnd in self.rounds for m in rnd.to_matches(include_bye=True)]
