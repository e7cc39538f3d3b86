"""Enumerations shared across the tournament models."""

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

from enum import Enum
from typing import Tuple, Union

from chesstourney.constants import (
    DRAW_SCORE,
    LOSS_SCORE,
    RESULT_BLACK_WIN,
    RESULT_DRAW,
    RESULT_DRAW_ALT,
    RESULT_WHITE_WIN,
    WIN_SCORE,
)
from chesstourney.exceptions import InvalidResultException


class RegistrationStatus(Enum):
    """Registration state of a player. Only approved players are paired."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class TournamentStatus(Enum):
    """Lifecycle of the tournament state machine."""

    IN_PROGRESS = "IN_PROGRESS"
    FINISHED = "FINISHED"


class PairingSystem(Enum):
    """How the tournament's rounds were produced."""

    SWISS = "swiss"
    ROUND_ROBIN = "round_robin"


class ColourPolicy(Enum):
    """How white and black are chosen for a Swiss pairing."""

    RANDOM = "random"
    BALANCE_WHITES = "balance_whites"


class ChessPlatform(Enum):
    """Online platform a player's rating comes from."""

    CHESS_COM = "Chess.com"
    LICHESS = "Lichess"


class GameResult(Enum):
    """Outcome of a played game, valued as the stored result string."""

    WHITE_WIN = RESULT_WHITE_WIN
    BLACK_WIN = RESULT_BLACK_WIN
    DRAW = RESULT_DRAW

    @property
    def points(self) -> Tuple[float, float]:
        """(white points, black points) awarded for this result."""
        if self is GameResult.WHITE_WIN:
            return WIN_SCORE, LOSS_SCORE
        if self is GameResult.BLACK_WIN:
            return LOSS_SCORE, WIN_SCORE
        return DRAW_SCORE, DRAW_SCORE

    @classmethod
    def parse(cls, value: Union["GameResult", str]) -> "GameResult":
        """Convert a stored or typed result string to a GameResult.

        Raises:
            InvalidResultException: If the string is not a known result
        """
        if isinstance(value, cls):
            return value
        text = str(value).strip()
        if text == RESULT_DRAW_ALT:
            return cls.DRAW
        try:
            return cls(text)
        except ValueError as exc:
            raise InvalidResultException(
                f"Unknown result {value!r}; expected one of "
                f"{', '.join(r.value for r in cls)}"
            ) from exc
