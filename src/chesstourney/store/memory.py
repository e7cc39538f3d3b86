"""In-memory store with snapshot transactions."""

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

import copy
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

from chesstourney.exceptions import (
    MatchNotFoundException,
    PlayerNotFoundException,
    StoreException,
)
from chesstourney.models import (
    GameResult,
    Match,
    Player,
    RegistrationStatus,
    TournamentState,
)
from chesstourney.store.base import (
    PLAYER_UPDATABLE_FIELDS,
    STATE_UPDATABLE_FIELDS,
    TournamentStore,
)
from chesstourney.utils import setup_logger

logger = setup_logger(__name__)


class InMemoryStore(TournamentStore):
    """Keeps every record in dictionaries.

    ``transaction()`` snapshots all records on entry and puts them back if
    the block raises. Transactions nest; only the outermost one snapshots and
    commits. Writes made outside a transaction commit immediately.
    """

    def __init__(self) -> None:
        self._players: Dict[str, Player] = {}
        self._matches: Dict[str, Match] = {}
        self._state: Optional[TournamentState] = None
        self._depth = 0

    # ========== Transactions ==========

    @contextmanager
    def transaction(self) -> Iterator["InMemoryStore"]:
        if self._depth > 0:
            self._depth += 1
            try:
                yield self
            finally:
                self._depth -= 1
            return

        snapshot = self._snapshot()
        self._depth = 1
        try:
            yield self
            self._commit()
        except BaseException:
            self._restore(snapshot)
            logger.warning("Transaction rolled back")
            raise
        finally:
            self._depth = 0

    def _snapshot(self) -> Dict[str, Any]:
        return copy.deepcopy(
            {"players": self._players, "matches": self._matches, "state": self._state}
        )

    def _restore(self, snapshot: Dict[str, Any]) -> None:
        self._players = snapshot["players"]
        self._matches = snapshot["matches"]
        self._state = snapshot["state"]

    def _commit(self) -> None:
        """Hook run after a successful write; durable stores persist here."""

    # ========== Players ==========

    def list_players(
        self,
        status: Optional[RegistrationStatus] = None,
        by_standing: bool = False,
    ) -> List[Player]:
        players = [
            p for p in self._players.values() if status is None or p.status is status
        ]
        if by_standing:
            players.sort(key=lambda p: (p.score, p.rating), reverse=True)
        else:
            players.sort(key=lambda p: p.registered_at)
        return copy.deepcopy(players)

    def get_player(self, player_id: str) -> Player:
        return copy.deepcopy(self._require_player(player_id))

    def create_player(self, player: Player) -> Player:
        with self.transaction():
            if player.id in self._players:
                raise StoreException(f"Player {player.id} already exists")
            self._players[player.id] = copy.deepcopy(player)
        return copy.deepcopy(player)

    def update_player(self, player_id: str, **changes: Any) -> Player:
        _check_fields(changes, PLAYER_UPDATABLE_FIELDS, "player")
        with self.transaction():
            player = self._require_player(player_id)
            for name, value in changes.items():
                setattr(player, name, value)
        return copy.deepcopy(player)

    def update_all_players(self, **changes: Any) -> int:
        _check_fields(changes, PLAYER_UPDATABLE_FIELDS, "player")
        with self.transaction():
            for player in self._players.values():
                for name, value in changes.items():
                    setattr(player, name, value)
        return len(self._players)

    def delete_player(self, player_id: str) -> None:
        with self.transaction():
            self._require_player(player_id)
            del self._players[player_id]

    def _require_player(self, player_id: str) -> Player:
        try:
            return self._players[player_id]
        except KeyError:
            raise PlayerNotFoundException(f"Player {player_id} not found") from None

    # ========== Matches ==========

    def list_matches(
        self,
        round_number: Optional[int] = None,
        has_result: Optional[bool] = None,
    ) -> List[Match]:
        matches = [
            m
            for m in self._matches.values()
            if (round_number is None or m.round_number == round_number)
            and (has_result is None or m.has_result == has_result)
        ]
        matches.sort(key=lambda m: (m.round_number, m.table or 0))
        return copy.deepcopy(matches)

    def get_match(self, match_id: str) -> Match:
        return copy.deepcopy(self._require_match(match_id))

    def create_matches(self, matches: List[Match]) -> None:
        with self.transaction():
            for match in matches:
                if match.id in self._matches:
                    raise StoreException(f"Match {match.id} already exists")
                self._matches[match.id] = copy.deepcopy(match)

    def update_match(self, match_id: str, result: Optional[GameResult]) -> Match:
        with self.transaction():
            match = self._require_match(match_id)
            match.result = GameResult.parse(result) if result is not None else None
        return copy.deepcopy(match)

    def delete_matches(
        self,
        round_number: Optional[int] = None,
        player_id: Optional[str] = None,
        match_id: Optional[str] = None,
    ) -> int:
        doomed = [
            m.id
            for m in self._matches.values()
            if (round_number is None or m.round_number == round_number)
            and (player_id is None or m.involves(player_id))
            and (match_id is None or m.id == match_id)
        ]
        with self.transaction():
            for key in doomed:
                del self._matches[key]
        return len(doomed)

    def _require_match(self, match_id: str) -> Match:
        try:
            return self._matches[match_id]
        except KeyError:
            raise MatchNotFoundException(f"Match {match_id} not found") from None

    # ========== Tournament state ==========

    def get_tournament_state(self) -> Optional[TournamentState]:
        return copy.deepcopy(self._state)

    def upsert_tournament_state(self, **patch: Any) -> TournamentState:
        _check_fields(patch, STATE_UPDATABLE_FIELDS, "tournament state")
        with self.transaction():
            if self._state is None:
                self._state = TournamentState()
            for name, value in patch.items():
                setattr(self._state, name, copy.deepcopy(value))
        return copy.deepcopy(self._state)

    # ========== Serialization ==========

    def to_dict(self) -> Dict[str, Any]:
        """Serialize every record to dictionary."""
        return {
            "players": [p.to_dict() for p in self._players.values()],
            "matches": [m.to_dict() for m in self._matches.values()],
            "tournament": self._state.to_dict() if self._state else None,
        }

    def load_dict(self, data: Dict[str, Any]) -> None:
        """Replace every record with the ones in ``data``."""
        players = [Player.from_dict(p) for p in data.get("players", [])]
        matches = [Match.from_dict(m) for m in data.get("matches", [])]
        state = data.get("tournament")
        self._players = {p.id: p for p in players}
        self._matches = {m.id: m for m in matches}
        self._state = TournamentState.from_dict(state) if state else None


def _check_fields(changes: Dict[str, Any], allowed: frozenset, record: str) -> None:
    unknown = set(changes) - allowed
    if unknown:
        raise ValueError(f"Cannot update {record} field(s): {', '.join(sorted(unknown))}")
