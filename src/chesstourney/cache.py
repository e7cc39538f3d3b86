"""Cache sitting in front of tournament reads.

The core only ever calls ``invalidate()`` after a write. ``InMemoryCache`` is
a simple process-local implementation used by the query layer and the CLI.
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

import copy
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, Optional

from chesstourney.constants import ALL_CACHE_KEYS
from chesstourney.utils import setup_logger

logger = setup_logger(__name__)


class CacheInvalidator(ABC):
    """Anything that can drop cached tournament data."""

    @abstractmethod
    def invalidate(self, keys: Iterable[str] = ALL_CACHE_KEYS) -> None:
        """Forget the given keys (all tournament keys by default)."""


class NullCache(CacheInvalidator):
    """Caches nothing."""

    def get(self, key: str) -> Optional[Any]:
        return None

    def set(self, key: str, value: Any) -> None:
        pass

    def invalidate(self, keys: Iterable[str] = ALL_CACHE_KEYS) -> None:
        pass


class InMemoryCache(CacheInvalidator):
    """Dictionary-backed cache. Values are copied in and out."""

    def __init__(self) -> None:
        self._entries: Dict[str, Any] = {}
        self.invalidations = 0

    def get(self, key: str) -> Optional[Any]:
        if key not in self._entries:
            return None
        return copy.deepcopy(self._entries[key])

    def set(self, key: str, value: Any) -> None:
        self._entries[key] = copy.deepcopy(value)

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def invalidate(self, keys: Iterable[str] = ALL_CACHE_KEYS) -> None:
        for key in keys:
            self._entries.pop(key, None)
        self.invalidations += 1
        logger.debug("Cache invalidated")
