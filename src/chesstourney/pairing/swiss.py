"""Swiss pairing engine.

Pairs a score-ordered pool from the top down: each player meets the nearest
player below them they have not played yet. Round one is shuffled instead of
seeded. An odd pool gives its last player a bye.
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

import random
from typing import Iterable, List, Optional, Sequence, Set

from chesstourney.constants import MIN_PLAYERS_TO_PAIR
from chesstourney.models import ColourPolicy, Match, Pairing, PairingSet, Player
from chesstourney.pairing.history import PairingHistory
from chesstourney.type_hints import ColourPair
from chesstourney.utils import setup_logger

logger = setup_logger(__name__)


def sort_for_pairing(players: Iterable[Player]) -> List[Player]:
    """Order players best first: score, then rating, both descending."""
    return sorted(players, key=lambda p: (p.score, p.rating), reverse=True)


def generate_swiss_pairings(
    players: Sequence[Player],
    past_matches: Iterable[Match],
    round_number: int,
    is_first_round: bool,
    rng: random.Random,
    colour_policy: ColourPolicy = ColourPolicy.RANDOM,
) -> PairingSet:
    """Produce the boards for one Swiss round.

    Args:
        players: Approved players, already ordered by ``sort_for_pairing``
        past_matches: Every match played so far, in any round
        round_number: Round being paired
        is_first_round: Shuffle the pool instead of using the score order
        rng: Random source for the shuffle and colour draws
        colour_policy: How white is chosen on each board

    Returns:
        PairingSet with boards numbered from 1 and the bye player, if any.
        Empty when fewer than two players are eligible.
    """
    pool = [p for p in players if p.is_approved]
    if len(pool) < MIN_PLAYERS_TO_PAIR:
        logger.info(
            f"Round {round_number}: only {len(pool)} eligible player(s), nothing to pair"
        )
        return PairingSet(round_number=round_number)

    if is_first_round:
        rng.shuffle(pool)

    bye_player_id = None
    if len(pool) % 2 != 0:
        bye_player_id = pool.pop().id
        logger.debug(f"Round {round_number}: bye goes to {bye_player_id}")

    history = PairingHistory.from_matches(past_matches)
    paired: Set[str] = set()
    pairings: List[Pairing] = []

    for index, player in enumerate(pool):
        if player.id in paired:
            continue

        opponent = _find_unplayed_opponent(player, pool, index, paired, history)
        if opponent is None:
            opponent = _next_unpaired(pool, index, paired)
            if opponent is None:
                break
            logger.warning(
                f"Round {round_number}: no new opponent left for {player.id}, "
                f"repeating against {opponent.id}"
            )

        white_id, black_id = _assign_colours(
            player.id, opponent.id, history, rng, colour_policy
        )
        pairings.append(Pairing(white_id, black_id, table=len(pairings) + 1))
        paired.update((player.id, opponent.id))

    logger.info(
        f"Round {round_number}: {len(pairings)} board(s), "
        f"bye: {bye_player_id or 'None'}"
    )
    return PairingSet(
        round_number=round_number, pairings=pairings, bye_player_id=bye_player_id
    )


def _find_unplayed_opponent(
    player: Player,
    pool: List[Player],
    index: int,
    paired: Set[str],
    history: PairingHistory,
) -> Optional[Player]:
    """Nearest unpaired player below ``index`` that ``player`` has never met."""
    for candidate in pool[index + 1 :]:
        if candidate.id in paired:
            continue
        if not history.have_played(player.id, candidate.id):
            return candidate
    return None


def _next_unpaired(
    pool: List[Player], index: int, paired: Set[str]
) -> Optional[Player]:
    for candidate in pool[index + 1 :]:
        if candidate.id not in paired:
            return candidate
    return None


def _assign_colours(
    first_id: str,
    second_id: str,
    history: PairingHistory,
    rng: random.Random,
    colour_policy: ColourPolicy,
) -> ColourPair:
    """Return (white_id, black_id)."""
    if colour_policy is ColourPolicy.BALANCE_WHITES:
        first_whites = history.whites(first_id)
        second_whites = history.whites(second_id)
        if first_whites != second_whites:
            if first_whites < second_whites:
                return first_id, second_id
            return second_id, first_id
    return draw_colours(first_id, second_id, rng)


def draw_colours(first_id: str, second_id: str, rng: random.Random) -> ColourPair:
    """Give white to either player with equal probability."""
    if rng.random() < 0.5:
        return first_id, second_id
    return second_id, first_id
