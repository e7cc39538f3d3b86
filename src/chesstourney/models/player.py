"""A registered chess player."""

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
from typing import Any, Dict, Optional

from dateutil import parser as date_parser

from chesstourney.models.enums import ChessPlatform, RegistrationStatus


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Player:
    """
    Player record as kept by the player store.

    Attributes
    ----------
    id : str
        Unique identifier for the player.
    full_name : str
        Display name.
    rating : int
        Skill estimate imported from the player's online platform. Used to
        seed pairings and as the last tie-break in the standings.
    status : RegistrationStatus
        Only ``APPROVED`` players are eligible for pairing and ranking.
    score : float
        Cumulative tournament points, a non-negative multiple of 0.5.
    rank : int or None
        Position in the last computed standings; ``None`` until ranked.
    department, phone_number, chess_username, platform
        Contact and display details. They play no part in pairing.
    registered_at : datetime
        Registration time, timezone aware.
    """

    id: str
    full_name: str
    rating: int = 0
    status: RegistrationStatus = RegistrationStatus.PENDING
    score: float = 0.0
    rank: Optional[int] = None

    department: Optional[str] = None
    phone_number: Optional[str] = None
    chess_username: Optional[str] = None
    platform: Optional[ChessPlatform] = None
    registered_at: datetime = field(default_factory=_utcnow)

    @property
    def is_approved(self) -> bool:
        """Is the player eligible for pairing?"""
        return self.status is RegistrationStatus.APPROVED

    def __str__(self) -> str:
        return f"{self.full_name} ({self.rating})"

    def to_dict(self) -> Dict[str, Any]:
        """Serialize player to dictionary."""
        return {
            "id": self.id,
            "full_name": self.full_name,
            "rating": self.rating,
            "status": self.status.value,
            "score": self.score,
            "rank": self.rank,
            "department": self.department,
            "phone_number": self.phone_number,
            "chess_username": self.chess_username,
            "platform": self.platform.value if self.platform else None,
            "registered_at": self.registered_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Player":
        """Deserialize player from dictionary."""
        registered_at = data.get("registered_at")
        platform = data.get("platform")
        return cls(
            id=str(data["id"]),
            full_name=data.get("full_name", ""),
            rating=int(data.get("rating") or 0),
            status=RegistrationStatus(data.get("status", "PENDING")),
            score=float(data.get("score") or 0.0),
            rank=data.get("rank"),
            department=data.get("department"),
            phone_number=data.get("phone_number"),
            chess_username=data.get("chess_username"),
            platform=ChessPlatform(platform) if platform else None,
            registered_at=(
                date_parser.isoparse(registered_at) if registered_at else _utcnow()
            ),
        )
