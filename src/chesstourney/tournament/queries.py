"""Read accessors for display, served through the cache.

Failures here are not fatal: a store error is logged and an empty result is
returned so that a page can still render.
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

from typing import Callable, List, Optional, TypeVar, Union

from chesstourney.cache import InMemoryCache, NullCache
from chesstourney.constants import (
    CACHE_ALL_PLAYERS,
    CACHE_APPROVED_PLAYERS,
    CACHE_MATCHES,
    CACHE_TOURNAMENT,
)
from chesstourney.exceptions import StoreException
from chesstourney.models import Match, Player, RegistrationStatus, TournamentState
from chesstourney.store import TournamentStore
from chesstourney.tournament.standings import Standing, compute_standings
from chesstourney.utils import setup_logger

logger = setup_logger(__name__)

T = TypeVar("T")


class TournamentQueries:
    """Cached, failure-tolerant reads over a TournamentStore."""

    def __init__(
        self,
        store: TournamentStore,
        cache: Union[InMemoryCache, NullCache, None] = None,
    ) -> None:
        self.store = store
        self.cache = cache if cache is not None else NullCache()

    def _read(self, key: str, loader: Callable[[], T], fallback: T) -> T:
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug(f"Serving {key} from cache")
            return cached

        try:
            value = loader()
        except StoreException as exc:
            logger.error(f"Failed to load {key}: {exc}")
            return fallback

        self.cache.set(key, value)
        return value

    def get_players(self) -> List[Player]:
        """Every player, best standing first."""
        return self._read(
            CACHE_ALL_PLAYERS, lambda: self.store.list_players(by_standing=True), []
        )

    def get_approved_players(self) -> List[Player]:
        return self._read(
            CACHE_APPROVED_PLAYERS,
            lambda: self.store.list_players(
                status=RegistrationStatus.APPROVED, by_standing=True
            ),
            [],
        )

    def get_matches(self, round_number: Optional[int] = None) -> List[Match]:
        """Every match, or one round's boards."""
        matches = self._read(CACHE_MATCHES, self.store.list_matches, [])
        if round_number is None:
            return matches
        return [m for m in matches if m.round_number == round_number]

    def get_tournament(self) -> TournamentState:
        """The stored state, or a fresh default if it cannot be read."""
        state = self._read(CACHE_TOURNAMENT, self.store.get_tournament_state, None)
        return state if state is not None else TournamentState()

    def get_standings(self) -> List[Standing]:
        """Live standings computed from the current scores."""
        return compute_standings(
            self.get_approved_players(),
            self.get_matches(),
            all_players=self.get_players(),
        )
