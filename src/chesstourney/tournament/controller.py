"""Tournament controller - the state machine around pairing and scoring.

Every mutating operation runs inside one store transaction, so it applies
completely or not at all, and fires a cache invalidation afterwards.
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
from typing import Dict, Iterable, List, Optional, Union

from chesstourney.cache import CacheInvalidator, NullCache
from chesstourney.exceptions import (
    InvalidPairingException,
    InvalidPlayerDataException,
    PhoneValidationException,
    TournamentStateException,
)
from chesstourney.models import (
    ChessPlatform,
    GameResult,
    Match,
    PairingSet,
    PairingSystem,
    Player,
    RegistrationStatus,
    RoundRobinSchedule,
    TournamentConfig,
    TournamentState,
    TournamentStatus,
)
from chesstourney.pairing import generate_round_robin_schedule, generate_swiss_pairings
from chesstourney.store import TournamentStore
from chesstourney.tournament.scoring import (
    rebuild_scores,
    score_round,
    total_by_player,
)
from chesstourney.tournament.standings import Standing, compute_standings
from chesstourney.utils import generate_id, make_rng, setup_logger
from chesstourney.utils.validation import (
    validate_name,
    validate_phone,
    validate_rating_strict,
    validate_round_number,
)
logger = setup_logger(__name__)


class TournamentController:
    """Drives the tournament from registration to final standings.

    This class is responsible for:
    - Advancing rounds: scoring the finished round, then pairing the next
    - Finishing and resetting the tournament
    - Generating Swiss rounds and complete round-robin schedules
    - Recording results and keeping scores in step with them
    - Player registration and admin overrides

    It is the only writer of the tournament state. Pairing and scoring
    themselves are pure functions; this class reads their inputs from the
    store and writes their outputs back.
    """

    def __init__(
        self,
        store: TournamentStore,
        config: Optional[TournamentConfig] = None,
        cache: Optional[CacheInvalidator] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        """Initialize the controller.

        Args:
            store: Backing store for players, matches and state
            config: Tournament settings; defaults apply when omitted
            cache: Invalidated after every write
            rng: Random source for shuffles and colours; seeded from
                ``config.seed`` when omitted
        """
        self.store = store
        self.config = config or TournamentConfig()
        self.cache = cache if cache is not None else NullCache()
        self.rng = rng if rng is not None else make_rng(self.config.seed)

    # ========== State ==========

    def get_state(self) -> TournamentState:
        """Return the tournament state, creating it on first use."""
        state = self.store.get_tournament_state()
        if state is None:
            state = self.store.upsert_tournament_state(
                total_rounds=self.config.total_rounds
            )
            logger.info(
                f"Created tournament state with {state.total_rounds} rounds"
            )
            self._invalidate()
        return state

    def _invalidate(self) -> None:
        self.cache.invalidate()

    # ========== Round Progression ==========

    def advance_round(self) -> TournamentState:
        """Close the current round and open the next one.

        Scores the current round, refreshes the standings and then either
        finishes the tournament (after the last round) or pairs the next
        round. Does nothing on a finished tournament.

        Raises:
            InvalidRoundException: If the stored round number is malformed
            StoreException: If the store fails; nothing is changed then
        """
        with self.store.transaction():
            state = self.get_state()
            if state.is_finished:
                logger.warning("Tournament is already finished; not advancing")
                return state

            current_round = validate_round_number(state.current_round)
            state = self._score_round(state, current_round)
            self._save_standings()

            next_round = current_round + 1
            if next_round > state.total_rounds:
                state = self.store.upsert_tournament_state(
                    status=TournamentStatus.FINISHED
                )
                logger.info(
                    f"Round {current_round} was the last of {state.total_rounds}; "
                    "tournament finished"
                )
            else:
                if state.pairing_system is PairingSystem.SWISS:
                    self._pair_swiss_round(next_round)
                state = self.store.upsert_tournament_state(current_round=next_round)
                logger.info(f"Advanced to round {next_round}")

        self._invalidate()
        return state

    def finish_tournament(self) -> TournamentState:
        """Score the current round and end the tournament now."""
        with self.store.transaction():
            state = self.get_state()
            if state.is_finished:
                logger.warning("Tournament is already finished")
                return state

            current_round = validate_round_number(state.current_round)
            self._score_round(state, current_round)
            self._save_standings()
            state = self.store.upsert_tournament_state(
                status=TournamentStatus.FINISHED
            )
            logger.info(f"Tournament finished after round {current_round}")

        self._invalidate()
        return state

    def reset_tournament(self) -> TournamentState:
        """Delete every match, zero all scores and ranks, go back to round 1."""
        with self.store.transaction():
            self.get_state()
            removed = self.store.delete_matches()
            self.store.update_all_players(score=0.0, rank=None)
            state = self.store.upsert_tournament_state(
                current_round=1,
                status=TournamentStatus.IN_PROGRESS,
                pairing_system=PairingSystem.SWISS,
                scored_rounds=set(),
                byes={},
            )
            logger.info(f"Tournament reset; {removed} match(es) deleted")

        self._invalidate()
        return state

    # ========== Pairing ==========

    def generate_swiss_pairings_for_round(self, round_number: int) -> PairingSet:
        """Pair ``round_number`` and make it the current round.

        Any boards already stored for that round are replaced, and a bye
        already handed out for it is taken back first. If the round was
        already scored, the points of the replaced boards are taken back too
        and the round is scored again when it is closed.

        Returns:
            The new pairings; empty when fewer than two players are approved
        """
        round_number = validate_round_number(round_number)
        with self.store.transaction():
            self.get_state()
            pairing_set = self._pair_swiss_round(round_number)
            self.store.upsert_tournament_state(
                current_round=round_number, pairing_system=PairingSystem.SWISS
            )

        self._invalidate()
        return pairing_set

    def generate_round_robin_schedule(self) -> RoundRobinSchedule:
        """Create every round of an all-play-all event at once.

        Replaces any unplayed matches and sets the round count to the
        schedule's length.

        Raises:
            TournamentStateException: If results have already been recorded
        """
        with self.store.transaction():
            state = self.get_state()
            if state.scored_rounds or self.store.list_matches(has_result=True):
                raise TournamentStateException(
                    "Results already recorded; reset the tournament before "
                    "creating a round-robin schedule"
                )

            players = self.store.list_players(
                status=RegistrationStatus.APPROVED, by_standing=True
            )
            schedule = generate_round_robin_schedule([p.id for p in players], self.rng)
            if schedule.is_empty:
                return schedule

            self._revoke_byes(state.byes.keys(), state)
            self.store.delete_matches()
            self.store.create_matches(schedule.to_matches())
            self.store.upsert_tournament_state(
                current_round=1,
                total_rounds=schedule.total_rounds,
                status=TournamentStatus.IN_PROGRESS,
                pairing_system=PairingSystem.ROUND_ROBIN,
                byes={},
            )
            logger.info(
                f"Round robin scheduled: {schedule.total_rounds} rounds for "
                f"{len(players)} players"
            )

        self._invalidate()
        return schedule

    def _pair_swiss_round(self, round_number: int) -> PairingSet:
        state = self.get_state()
        if round_number in state.byes:
            state = self._revoke_byes([round_number], state)

        if round_number in state.scored_rounds:
            for match in self.store.list_matches(round_number=round_number):
                self._adjust_scores(match.points(self.config.bye_score), {})
            state = self.store.upsert_tournament_state(
                scored_rounds=state.scored_rounds - {round_number}
            )
            logger.info(f"Round {round_number}: points from replaced boards taken back")

        stale = self.store.delete_matches(round_number=round_number)
        if stale:
            logger.info(f"Removed {stale} stale match(es) from round {round_number}")

        players = self.store.list_players(
            status=RegistrationStatus.APPROVED, by_standing=True
        )
        pairing_set = generate_swiss_pairings(
            players,
            self.store.list_matches(),
            round_number,
            is_first_round=round_number == 1,
            rng=self.rng,
            colour_policy=self.config.colour_policy,
        )
        if pairing_set.is_empty:
            return pairing_set

        self.store.create_matches(pairing_set.to_matches())

        if pairing_set.bye_player_id is not None:
            bye_player = self.store.get_player(pairing_set.bye_player_id)
            self.store.update_player(
                bye_player.id, score=bye_player.score + self.config.bye_score
            )
            byes = dict(state.byes)
            byes[round_number] = bye_player.id
            self.store.upsert_tournament_state(byes=byes)
            logger.info(f"Round {round_number}: bye awarded to {bye_player.full_name}")

        return pairing_set

    def _revoke_byes(
        self, rounds: Iterable[int], state: TournamentState
    ) -> TournamentState:
        """Take back Swiss bye points for ``rounds``."""
        byes = dict(state.byes)
        for round_number in list(rounds):
            player_id = byes.pop(round_number, None)
            if player_id is None:
                continue
            player = self.store.get_player(player_id)
            self.store.update_player(
                player_id, score=max(0.0, player.score - self.config.bye_score)
            )
            logger.info(f"Round {round_number}: bye for {player_id} revoked")
        return self.store.upsert_tournament_state(byes=byes)

    # ========== Scoring & Standings ==========

    def _score_round(self, state: TournamentState, round_number: int) -> TournamentState:
        if round_number in state.scored_rounds:
            logger.warning(f"Round {round_number} already scored; skipping")
            return state

        deltas = score_round(
            self.store.list_matches(round_number=round_number), self.config.bye_score
        )
        for player_id, points in total_by_player(deltas).items():
            player = self.store.get_player(player_id)
            self.store.update_player(player_id, score=player.score + points)

        scored = set(state.scored_rounds)
        scored.add(round_number)
        logger.info(f"Scored round {round_number}: {len(deltas)} award(s)")
        return self.store.upsert_tournament_state(scored_rounds=scored)

    def _save_standings(self) -> List[Standing]:
        all_players = self.store.list_players(by_standing=True)
        standings = compute_standings(
            all_players,
            self.store.list_matches(has_result=True),
            all_players=all_players,
        )
        ranks: Dict[str, int] = {s.player_id: s.rank for s in standings}
        for player in all_players:
            rank = ranks.get(player.id)
            if player.rank != rank:
                self.store.update_player(player.id, rank=rank)
        return standings

    def recalculate_standings(self) -> List[Standing]:
        """Re-rank approved players from current scores; scores are untouched."""
        with self.store.transaction():
            standings = self._save_standings()
        self._invalidate()
        return standings

    def recompute_scores(self) -> Dict[str, float]:
        """Rebuild every score from the scored rounds and recorded byes.

        A repair path for scores edited by hand or otherwise out of step.
        """
        with self.store.transaction():
            state = self.get_state()
            players = self.store.list_players()
            scores = rebuild_scores(
                [p.id for p in players],
                self.store.list_matches(),
                state.scored_rounds,
                state.byes,
                self.config.bye_score,
            )
            for player in players:
                if player.score != scores[player.id]:
                    self.store.update_player(player.id, score=scores[player.id])
            self._save_standings()
            logger.info(f"Recomputed scores for {len(players)} players")

        self._invalidate()
        return scores

    # ========== Matches ==========

    def create_match(self, white_id: str, black_id: str, round_number: int) -> Match:
        """Add a board by hand.

        Raises:
            InvalidPairingException: On self-pairing or if either player
                already has a board that round
            PlayerNotFoundException: If either player does not exist
        """
        round_number = validate_round_number(round_number)
        with self.store.transaction():
            self.store.get_player(white_id)
            self.store.get_player(black_id)
            existing = self.store.list_matches(round_number=round_number)
            for match in existing:
                for player_id in (white_id, black_id):
                    if match.involves(player_id):
                        raise InvalidPairingException(
                            f"Player {player_id} is already paired in round {round_number}"
                        )
            tables = [m.table for m in existing if m.table and not m.is_bye]
            match = Match.between(
                round_number, white_id, black_id, table=max(tables, default=0) + 1
            )
            self.store.create_matches([match])
            logger.info(f"Round {round_number}: added {white_id} vs {black_id}")

        self._invalidate()
        return match

    def record_result(
        self, match_id: str, result: Union[GameResult, str, None]
    ) -> Match:
        """Set, change or clear a match result.

        If the match's round has already been scored, player scores are
        corrected by the difference so they stay in step.

        Raises:
            InvalidResultException: For an unknown result string
            MatchNotFoundException: If the match does not exist
            InvalidPairingException: For a bye row
        """
        new_result = GameResult.parse(result) if result is not None else None
        with self.store.transaction():
            state = self.get_state()
            match = self.store.get_match(match_id)
            if match.is_bye:
                raise InvalidPairingException("A bye row cannot carry a game result")

            before = match.points()
            updated = self.store.update_match(match_id, new_result)
            if match.round_number in state.scored_rounds:
                self._adjust_scores(before, updated.points())
            logger.info(
                f"Round {match.round_number}: {match.white_id} vs {match.black_id} "
                f"-> {new_result.value if new_result else 'unplayed'}"
            )

        self._invalidate()
        return updated

    def delete_match(self, match_id: str) -> None:
        """Remove one match, taking back its points if already scored."""
        with self.store.transaction():
            state = self.get_state()
            match = self.store.get_match(match_id)
            self.store.delete_matches(match_id=match_id)
            if match.round_number in state.scored_rounds:
                self._adjust_scores(match.points(self.config.bye_score), {})
            logger.info(f"Deleted match {match_id}")
        self._invalidate()

    def _adjust_scores(
        self, before: Dict[str, float], after: Dict[str, float]
    ) -> None:
        for player_id in set(before) | set(after):
            change = after.get(player_id, 0.0) - before.get(player_id, 0.0)
            if change:
                player = self.store.get_player(player_id)
                self.store.update_player(
                    player_id, score=max(0.0, player.score + change)
                )

    # ========== Players ==========

    def register_player(
        self,
        full_name: str,
        rating: Union[int, str, None] = None,
        phone_number: Optional[str] = None,
        department: Optional[str] = None,
        chess_username: Optional[str] = None,
        platform: Optional[ChessPlatform] = None,
    ) -> Player:
        """Register a new player as PENDING.

        Raises:
            InvalidPlayerDataException: If the name is missing
            RatingValidationException: If the rating is not a valid number
            PhoneValidationException: If the phone number is malformed
        """
        name_check = validate_name(full_name)
        if not name_check:
            raise InvalidPlayerDataException(name_check.error_message)
        phone_check = validate_phone(phone_number)
        if not phone_check:
            raise PhoneValidationException(phone_check.error_message)

        player = Player(
            id=generate_id("Player"),
            full_name=name_check.sanitized_value,
            rating=validate_rating_strict(rating),
            phone_number=phone_check.sanitized_value,
            department=department,
            chess_username=chess_username,
            platform=platform,
        )
        with self.store.transaction():
            self.store.create_player(player)
        logger.info(f"Registered player: {player.full_name} ({player.id})")
        self._invalidate()
        return player

    def set_player_status(self, player_id: str, status: RegistrationStatus) -> Player:
        """Approve or reject a registration."""
        with self.store.transaction():
            player = self.store.update_player(player_id, status=status)
        logger.info(f"Set {player.full_name} status to {status.value}")
        self._invalidate()
        return player

    def update_player_stats(
        self, player_id: str, rank: Optional[int], score: float
    ) -> Player:
        """Admin override of a player's rank and score."""
        if score < 0:
            raise InvalidPlayerDataException(f"Score cannot be negative: {score}")
        with self.store.transaction():
            player = self.store.update_player(player_id, rank=rank, score=float(score))
        logger.info(f"Set {player.full_name} to score {score}, rank {rank}")
        self._invalidate()
        return player

    def delete_player(self, player_id: str) -> None:
        """Delete a player together with every match they appear in."""
        with self.store.transaction():
            player = self.store.get_player(player_id)
            removed = self.store.delete_matches(player_id=player_id)
            self.store.delete_player(player_id)
            state = self.get_state()
            if player_id in state.byes.values():
                self.store.upsert_tournament_state(
                    byes={r: p for r, p in state.byes.items() if p != player_id}
                )
        logger.info(f"Deleted player {player.full_name} and {removed} match(es)")
        self._invalidate()
