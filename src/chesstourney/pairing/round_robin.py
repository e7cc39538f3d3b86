"""Round-robin scheduling with the circle method."""

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

import random
from typing import List, Sequence

from chesstourney.constants import MIN_PLAYERS_TO_PAIR
from chesstourney.models import (
    BYE,
    Opponent,
    Pairing,
    PairingSet,
    RealPlayer,
    RoundRobinSchedule,
)
from chesstourney.pairing.swiss import draw_colours
from chesstourney.type_hints import MaybePlayerId
from chesstourney.utils import setup_logger

logger = setup_logger(__name__)


def generate_round_robin_schedule(
    player_ids: Sequence[str], rng: random.Random
) -> RoundRobinSchedule:
    """Build every round of an all-play-all event at once.

    An odd field is padded with a ``BYE`` seat. The first seat stays put and
    the others rotate one place per round, the last seat moving to second.
    Seat ``i`` plays seat ``n - 1 - i``; whoever faces the ``BYE`` seat sits
    the round out.

    Args:
        player_ids: Approved player ids, in seeding order
        rng: Random source for colour draws

    Returns:
        RoundRobinSchedule with ``n - 1`` rounds for the padded field size
        ``n``. Empty when fewer than two players are given.
    """
    if len(player_ids) < MIN_PLAYERS_TO_PAIR:
        logger.info(
            f"Round robin needs at least {MIN_PLAYERS_TO_PAIR} players, "
            f"got {len(player_ids)}"
        )
        return RoundRobinSchedule()

    seats: List[Opponent] = [RealPlayer(pid) for pid in player_ids]
    if len(seats) % 2 != 0:
        seats.append(BYE)

    size = len(seats)
    total_rounds = size - 1
    rounds: List[PairingSet] = []

    for round_number in range(1, total_rounds + 1):
        pairings: List[Pairing] = []
        bye_player_id: MaybePlayerId = None

        for i in range(size // 2):
            home, away = seats[i], seats[size - 1 - i]
            if home is BYE or away is BYE:
                bye_player_id = away.id if home is BYE else home.id
                continue
            white_id, black_id = draw_colours(home.id, away.id, rng)
            pairings.append(Pairing(white_id, black_id, table=len(pairings) + 1))

        rounds.append(
            PairingSet(
                round_number=round_number,
                pairings=pairings,
                bye_player_id=bye_player_id,
            )
        )
        seats = [seats[0], seats[-1]] + seats[1:-1]

    logger.info(
        f"Round robin for {len(player_ids)} players: {total_rounds} rounds, "
        f"{sum(len(r) for r in rounds)} games"
    )
    return RoundRobinSchedule(rounds=rounds, total_rounds=total_rounds)
