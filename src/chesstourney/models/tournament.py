"""Tournament state and configuration data classes."""

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

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Set, Union

from chesstourney.constants import (
    BYE_SCORE,
    DEFAULT_TOTAL_ROUNDS,
    DEFAULT_TOURNAMENT_NAME,
)
from chesstourney.exceptions import ConfigurationException
from chesstourney.models.enums import ColourPolicy, PairingSystem, TournamentStatus
from chesstourney.type_hints import ByeLedger


@dataclass
class TournamentState:
    """The single record describing where the tournament stands.

    Attributes
    ----------
    current_round : int
        Round currently being played (1-indexed).
    total_rounds : int
        Rounds scheduled. Round robin overwrites it with its own count.
    status : TournamentStatus
        ``IN_PROGRESS`` or ``FINISHED``.
    pairing_system : PairingSystem
        How the existing rounds were produced.
    scored_rounds : set of int
        Rounds whose results have already been added to player scores.
    byes : dict of int to str
        Swiss half-point byes awarded, by round.
    """

    current_round: int = 1
    total_rounds: int = DEFAULT_TOTAL_ROUNDS
    status: TournamentStatus = TournamentStatus.IN_PROGRESS
    pairing_system: PairingSystem = PairingSystem.SWISS
    scored_rounds: Set[int] = field(default_factory=set)
    byes: ByeLedger = field(default_factory=dict)

    @property
    def is_finished(self) -> bool:
        return self.status is TournamentStatus.FINISHED

    @property
    def is_last_round(self) -> bool:
        return self.current_round >= self.total_rounds

    def to_dict(self) -> Dict[str, Any]:
        """Serialize state to dictionary."""
        return {
            "current_round": self.current_round,
            "total_rounds": self.total_rounds,
            "status": self.status.value,
            "pairing_system": self.pairing_system.value,
            "scored_rounds": sorted(self.scored_rounds),
            # JSON object keys are strings
            "byes": {str(k): v for k, v in self.byes.items()},
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TournamentState":
        """Deserialize state from dictionary."""
        return cls(
            current_round=data.get("current_round", 1),
            total_rounds=data.get("total_rounds", DEFAULT_TOTAL_ROUNDS),
            status=TournamentStatus(data.get("status", "IN_PROGRESS")),
            pairing_system=PairingSystem(data.get("pairing_system", "swiss")),
            scored_rounds=set(int(r) for r in data.get("scored_rounds", [])),
            byes={int(k): v for k, v in data.get("byes", {}).items()},
        )


@dataclass
class TournamentConfig:
    """Tournament configuration settings.

    Attributes
    ----------
    name : str
        Tournament name.
    total_rounds : int
        Number of Swiss rounds used when the state is first created.
    bye_score : float
        Points awarded for a bye.
    colour_policy : ColourPolicy
        ``RANDOM`` draws colours per board; ``BALANCE_WHITES`` gives white to
        the player with fewer past whites and draws only on ties.
    seed : int or None
        Seed for the random source, for reproducible pairings.
    """

    name: str = DEFAULT_TOURNAMENT_NAME
    total_rounds: int = DEFAULT_TOTAL_ROUNDS
    bye_score: float = BYE_SCORE
    colour_policy: ColourPolicy = ColourPolicy.RANDOM
    seed: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "name": self.name,
            "total_rounds": self.total_rounds,
            "bye_score": self.bye_score,
            "colour_policy": self.colour_policy.value,
            "seed": self.seed,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TournamentConfig":
        """Deserialize configuration from dictionary.

        Raises:
            ConfigurationException: If a value has the wrong type or range
        """
        try:
            config = cls(
                name=data.get("name", DEFAULT_TOURNAMENT_NAME),
                total_rounds=int(data.get("total_rounds", DEFAULT_TOTAL_ROUNDS)),
                bye_score=float(data.get("bye_score", BYE_SCORE)),
                colour_policy=ColourPolicy(data.get("colour_policy", "random")),
                seed=data.get("seed"),
            )
        except (TypeError, ValueError) as exc:
            raise ConfigurationException(f"Invalid configuration: {exc}") from exc

        if config.total_rounds < 1:
            raise ConfigurationException("total_rounds must be at least 1")
        return config

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "TournamentConfig":
        """Load configuration from a JSON file."""
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            raise ConfigurationException(
                f"Cannot read configuration from {path}: {exc}"
            ) from exc
        if not isinstance(data, dict):
            raise ConfigurationException(f"Configuration in {path} must be an object")
        return cls.from_dict(data)
