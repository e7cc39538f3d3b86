"""Match records and the opponent variant used on each side of the board."""

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
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union

from dateutil import parser as date_parser

from chesstourney.constants import BYE_ID, BYE_SCORE, BYE_TABLE
from chesstourney.exceptions import InvalidPairingException
from chesstourney.models.enums import GameResult
from chesstourney.utils import generate_id


@dataclass(frozen=True)
class RealPlayer:
    """A seat occupied by a registered player."""

    id: str

    def __str__(self) -> str:
        return self.id


class ByeSlot:
    """The empty seat opposite a player who has a bye. Use the ``BYE`` singleton."""

    _instance: Optional["ByeSlot"] = None

    def __new__(cls) -> "ByeSlot":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __copy__(self) -> "ByeSlot":
        return self

    def __deepcopy__(self, memo: Dict[int, Any]) -> "ByeSlot":
        return self

    def __repr__(self) -> str:
        return BYE_ID

    __str__ = __repr__


BYE = ByeSlot()

Opponent = Union[RealPlayer, ByeSlot]


def opponent_from_id(value: Union[str, Opponent]) -> Opponent:
    """Turn a stored side identifier into an Opponent."""
    if isinstance(value, (RealPlayer, ByeSlot)):
        return value
    if value == BYE_ID:
        return BYE
    return RealPlayer(str(value))


def opponent_to_id(opponent: Opponent) -> str:
    return BYE_ID if opponent is BYE else opponent.id


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Match:
    """
    A board in a round, or a bye row.

    Attributes
    ----------
    round_number : int
        Round the match belongs to (1-indexed).
    white, black : Opponent
        Who sits on each side. At most one side is ``BYE``.
    table : int or None
        Board number for display; bye rows use ``BYE_TABLE``.
    result : GameResult or None
        ``None`` until the game has been played. Bye rows never carry one.
    id : str
        Unique identifier.
    """

    round_number: int
    white: Opponent
    black: Opponent
    table: Optional[int] = None
    result: Optional[GameResult] = None
    id: str = field(default_factory=lambda: generate_id("Match"))
    created_at: datetime = field(default_factory=_utcnow)

    def __post_init__(self) -> None:
        self.white = opponent_from_id(self.white)
        self.black = opponent_from_id(self.black)
        if self.result is not None:
            self.result = GameResult.parse(self.result)

        if self.white is BYE and self.black is BYE:
            raise InvalidPairingException("A match cannot have a bye on both sides")
        if self.white == self.black:
            raise InvalidPairingException(
                f"Player {self.white.id} cannot be paired against themselves"
            )
        if self.is_bye and self.result is not None:
            raise InvalidPairingException("A bye row cannot carry a game result")

    # ========== Constructors ==========

    @classmethod
    def between(
        cls,
        round_number: int,
        white_id: str,
        black_id: str,
        table: Optional[int] = None,
        result: Union[GameResult, str, None] = None,
    ) -> "Match":
        """Create a game between two real players."""
        return cls(
            round_number=round_number,
            white=RealPlayer(white_id),
            black=RealPlayer(black_id),
            table=table,
            result=result,
        )

    @classmethod
    def bye(cls, round_number: int, player_id: str, table: int = BYE_TABLE) -> "Match":
        """Create a bye row for ``player_id``."""
        return cls(
            round_number=round_number,
            white=RealPlayer(player_id),
            black=BYE,
            table=table,
        )

    # ========== Queries ==========

    @property
    def is_bye(self) -> bool:
        return self.white is BYE or self.black is BYE

    @property
    def has_result(self) -> bool:
        return self.result is not None

    @property
    def white_id(self) -> Optional[str]:
        return None if self.white is BYE else self.white.id

    @property
    def black_id(self) -> Optional[str]:
        return None if self.black is BYE else self.black.id

    @property
    def player_ids(self) -> List[str]:
        """Ids of the real players seated at this board."""
        return [pid for pid in (self.white_id, self.black_id) if pid is not None]

    @property
    def bye_player_id(self) -> Optional[str]:
        """The player receiving the bye, or None for a real game."""
        if not self.is_bye:
            return None
        return self.white_id or self.black_id

    def involves(self, player_id: str) -> bool:
        return player_id in self.player_ids

    def opponent_of(self, player_id: str) -> Opponent:
        """Return what sits across the board from ``player_id``."""
        if self.white_id == player_id:
            return self.black
        if self.black_id == player_id:
            return self.white
        raise ValueError(f"Player {player_id} is not part of match {self.id}")

    def points(self, bye_score: float = BYE_SCORE) -> Dict[str, float]:
        """Points each real player earns from this row.

        Unplayed games earn nothing; a bye row always earns ``bye_score``.
        """
        if self.is_bye:
            return {self.bye_player_id: bye_score}
        if self.result is None:
            return {}
        white_points, black_points = self.result.points
        return {self.white_id: white_points, self.black_id: black_points}

    # ========== Serialization ==========

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match to dictionary."""
        return {
            "id": self.id,
            "round": self.round_number,
            "table": self.table,
            "white_player_id": opponent_to_id(self.white),
            "black_player_id": opponent_to_id(self.black),
            "result": self.result.value if self.result else None,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Match":
        """Deserialize match from dictionary."""
        created_at = data.get("created_at")
        return cls(
            id=str(data["id"]),
            round_number=int(data["round"]),
            table=data.get("table"),
            white=opponent_from_id(data["white_player_id"]),
            black=opponent_from_id(data["black_player_id"]),
            result=data.get("result"),
            created_at=date_parser.isoparse(created_at) if created_at else _utcnow(),
        )
