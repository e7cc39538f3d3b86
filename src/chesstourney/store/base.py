"""Abstract store interface the tournament core talks to."""

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

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import Any, List, Optional

from chesstourney.models import (
    GameResult,
    Match,
    Player,
    RegistrationStatus,
    TournamentState,
)

# Fields the core may change on a player record
PLAYER_UPDATABLE_FIELDS = frozenset({"score", "rank", "status"})
STATE_UPDATABLE_FIELDS = frozenset(
    {
        "current_round",
        "total_rounds",
        "status",
        "pairing_system",
        "scored_rounds",
        "byes",
    }
)


class TournamentStore(ABC):
    """Persistence for players, matches and the tournament state.

    Reads return copies: changing a returned object does not change the
    store. Failures surface as ``StoreException``; a missing record raises
    the matching ``...NotFoundException``.
    """

    # ========== Players ==========

    @abstractmethod
    def list_players(
        self,
        status: Optional[RegistrationStatus] = None,
        by_standing: bool = False,
    ) -> List[Player]:
        """Players, optionally filtered by status.

        With ``by_standing`` the list is ordered by score then rating, both
        descending; otherwise by registration time.
        """

    @abstractmethod
    def get_player(self, player_id: str) -> Player:
        """Fetch one player."""

    @abstractmethod
    def create_player(self, player: Player) -> Player:
        """Insert a new player."""

    @abstractmethod
    def update_player(self, player_id: str, **changes: Any) -> Player:
        """Change ``score``, ``rank`` and/or ``status`` of one player."""

    @abstractmethod
    def update_all_players(self, **changes: Any) -> int:
        """Apply the same change to every player, returning how many."""

    @abstractmethod
    def delete_player(self, player_id: str) -> None:
        """Remove a player. Matches are not touched."""

    # ========== Matches ==========

    @abstractmethod
    def list_matches(
        self,
        round_number: Optional[int] = None,
        has_result: Optional[bool] = None,
    ) -> List[Match]:
        """Matches ordered by round then table, optionally filtered."""

    @abstractmethod
    def get_match(self, match_id: str) -> Match:
        """Fetch one match."""

    @abstractmethod
    def create_matches(self, matches: List[Match]) -> None:
        """Bulk insert."""

    @abstractmethod
    def update_match(self, match_id: str, result: Optional[GameResult]) -> Match:
        """Set or clear a match result."""

    @abstractmethod
    def delete_matches(
        self,
        round_number: Optional[int] = None,
        player_id: Optional[str] = None,
        match_id: Optional[str] = None,
    ) -> int:
        """Delete matches matching every given filter; no filter deletes all."""

    # ========== Tournament state ==========

    @abstractmethod
    def get_tournament_state(self) -> Optional[TournamentState]:
        """The state record, or None if it has never been created."""

    @abstractmethod
    def upsert_tournament_state(self, **patch: Any) -> TournamentState:
        """Create the state with defaults if missing, then apply ``patch``."""

    # ========== Transactions ==========

    @abstractmethod
    def transaction(self) -> AbstractContextManager:
        """Group writes so that they all apply or none do."""
