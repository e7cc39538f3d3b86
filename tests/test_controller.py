import random

import pytest

from chesstourney.cache import InMemoryCache
from chesstourney.exceptions import (
    InvalidPairingException,
    InvalidPlayerDataException,
    InvalidResultException,
    InvalidRoundException,
    PhoneValidationException,
    PlayerNotFoundException,
    RatingValidationException,
    StoreException,
    TournamentStateException,
)
from chesstourney.models import (
    PairingSystem,
    RegistrationStatus,
    TournamentConfig,
    TournamentStatus,
)
from chesstourney.store import InMemoryStore
from chesstourney.tournament import TournamentController, TournamentQueries


class FailingStore(InMemoryStore):
    """Store whose match writes can be switched to fail."""

    fail_match_writes = False

    def create_matches(self, matches):
        if self.fail_match_writes:
            raise StoreException("disk full")
        super().create_matches(matches)


def _setup(count, total_rounds=5, store=None, seed=1):
    store = store if store is not None else InMemoryStore()
    controller = TournamentController(
        store,
        config=TournamentConfig(total_rounds=total_rounds),
        cache=InMemoryCache(),
        rng=random.Random(seed),
    )
    ids = []
    for i in range(count):
        player = controller.register_player(f"Player {i}", rating=1500 + i * 10)
        controller.set_player_status(player.id, RegistrationStatus.APPROVED)
        ids.append(player.id)
    return controller, ids


def _scores(controller):
    return {p.id: p.score for p in controller.store.list_players()}


def _play_round(controller, round_number, result="1-0"):
    for match in controller.store.list_matches(round_number=round_number):
        if not match.is_bye:
            controller.record_result(match.id, result)


def _pairs(matches):
    return {frozenset(m.player_ids) for m in matches if not m.is_bye}


# ========== Swiss rounds ==========


def test_odd_field_first_round_has_boards_and_a_half_point_bye():
    controller, ids = _setup(5)

    pairing_set = controller.generate_swiss_pairings_for_round(1)

    assert len(controller.store.list_matches(round_number=1)) == 2
    scores = _scores(controller)
    assert scores[pairing_set.bye_player_id] == 0.5
    assert sorted(scores.values()) == [0.0, 0.0, 0.0, 0.0, 0.5]
    assert controller.get_state().byes == {1: pairing_set.bye_player_id}


def test_regenerating_a_round_takes_back_its_bye():
    controller, _ = _setup(5)

    controller.generate_swiss_pairings_for_round(1)
    controller.generate_swiss_pairings_for_round(1)

    assert sum(_scores(controller).values()) == 0.5
    assert len(controller.get_state().byes) == 1
    assert len(controller.store.list_matches(round_number=1)) == 2


def test_pending_players_are_not_paired():
    controller, _ = _setup(0)
    controller.register_player("Ama Mensah")
    controller.register_player("Kofi Boateng")

    pairing_set = controller.generate_swiss_pairings_for_round(1)

    assert pairing_set.is_empty
    assert controller.store.list_matches() == []


def test_advance_scores_ranks_and_pairs_the_next_round():
    controller, _ = _setup(4)
    controller.generate_swiss_pairings_for_round(1)
    _play_round(controller, 1)
    winners = {m.white_id for m in controller.store.list_matches(round_number=1)}

    state = controller.advance_round()

    assert state.current_round == 2
    assert state.scored_rounds == {1}
    scores = _scores(controller)
    assert {pid for pid, score in scores.items() if score == 1.0} == winners
    assert sorted(p.rank for p in controller.store.list_players()) == [1, 2, 3, 4]

    round_one = _pairs(controller.store.list_matches(round_number=1))
    round_two = _pairs(controller.store.list_matches(round_number=2))
    assert len(round_two) == 2
    assert not round_one & round_two
    assert frozenset(winners) in round_two


def test_advance_on_last_round_finishes_without_pairing():
    controller, _ = _setup(4, total_rounds=3)
    controller.generate_swiss_pairings_for_round(1)
    controller.store.upsert_tournament_state(current_round=3)

    state = controller.advance_round()

    assert state.status is TournamentStatus.FINISHED
    assert state.current_round == 3
    assert controller.store.list_matches(round_number=4) == []


def test_advance_on_finished_tournament_changes_nothing():
    controller, _ = _setup(4, total_rounds=1)
    controller.generate_swiss_pairings_for_round(1)
    _play_round(controller, 1)
    controller.advance_round()
    before = _scores(controller)

    state = controller.advance_round()

    assert state.is_finished
    assert _scores(controller) == before


def test_a_scored_round_is_not_scored_again():
    controller, _ = _setup(4)
    controller.generate_swiss_pairings_for_round(1)
    _play_round(controller, 1)
    controller.advance_round()
    after_first = _scores(controller)

    controller.store.upsert_tournament_state(current_round=1)
    controller.advance_round()

    assert _scores(controller) == after_first


def test_bye_is_credited_once_when_the_round_is_scored():
    controller, _ = _setup(3)
    controller.generate_swiss_pairings_for_round(1)
    _play_round(controller, 1)

    controller.advance_round()

    # one decided game plus the byes of rounds one and two
    assert sum(_scores(controller).values()) == 2.0


def test_finish_scores_the_current_round():
    controller, _ = _setup(4)
    controller.generate_swiss_pairings_for_round(1)
    _play_round(controller, 1, result="1/2-1/2")

    state = controller.finish_tournament()

    assert state.status is TournamentStatus.FINISHED
    assert state.scored_rounds == {1}
    assert set(_scores(controller).values()) == {0.5}


def test_reset_clears_matches_scores_and_ranks():
    controller, _ = _setup(5)
    controller.generate_swiss_pairings_for_round(1)
    _play_round(controller, 1)
    controller.advance_round()

    state = controller.reset_tournament()

    assert state.current_round == 1
    assert state.status is TournamentStatus.IN_PROGRESS
    assert state.scored_rounds == set()
    assert state.byes == {}
    assert controller.store.list_matches() == []
    assert all(p.score == 0 and p.rank is None for p in controller.store.list_players())


def test_round_number_must_be_a_positive_integer():
    controller, _ = _setup(4)

    for bad in ("2", 0, -1, True, 1.5):
        with pytest.raises(InvalidRoundException):
            controller.generate_swiss_pairings_for_round(bad)


def test_malformed_stored_round_is_rejected_before_scoring():
    controller, _ = _setup(4)
    controller.store.upsert_tournament_state(current_round="two")

    with pytest.raises(InvalidRoundException):
        controller.advance_round()

    state = controller.store.get_tournament_state()
    assert state.current_round == "two"
    assert state.scored_rounds == set()


def test_store_failure_rolls_back_the_whole_advance():
    store = FailingStore()
    controller, _ = _setup(4, store=store)
    controller.generate_swiss_pairings_for_round(1)
    _play_round(controller, 1)
    store.fail_match_writes = True

    with pytest.raises(StoreException):
        controller.advance_round()

    state = store.get_tournament_state()
    assert state.current_round == 1
    assert state.scored_rounds == set()
    assert set(_scores(controller).values()) == {0.0}
    assert all(p.rank is None for p in store.list_players())
    assert len(store.list_matches(round_number=1, has_result=True)) == 2


def test_every_write_invalidates_the_cache():
    controller, _ = _setup(4)
    before = controller.cache.invalidations

    controller.generate_swiss_pairings_for_round(1)
    controller.advance_round()

    assert controller.cache.invalidations >= before + 2


# ========== Round robin ==========


def test_round_robin_schedules_every_round_up_front():
    controller, ids = _setup(4)

    schedule = controller.generate_round_robin_schedule()

    state = controller.get_state()
    assert schedule.total_rounds == 3
    assert state.total_rounds == 3
    assert state.pairing_system is PairingSystem.ROUND_ROBIN
    matches = controller.store.list_matches()
    assert len(matches) == 6
    assert len(_pairs(matches)) == 6


def test_round_robin_advance_uses_the_existing_schedule():
    controller, _ = _setup(4)
    controller.generate_round_robin_schedule()
    _play_round(controller, 1)

    state = controller.advance_round()

    assert state.current_round == 2
    assert len(controller.store.list_matches()) == 6
    assert sum(_scores(controller).values()) == 2.0


def test_round_robin_bye_rows_score_when_the_round_is_scored():
    controller, _ = _setup(3)
    controller.generate_round_robin_schedule()
    bye_row = next(m for m in controller.store.list_matches(round_number=1) if m.is_bye)
    _play_round(controller, 1)

    controller.advance_round()

    scores = _scores(controller)
    assert scores[bye_row.bye_player_id] == 0.5
    assert sorted(scores.values()) == [0.0, 0.5, 1.0]


def test_round_robin_is_refused_once_results_exist():
    controller, _ = _setup(4)
    controller.generate_swiss_pairings_for_round(1)
    _play_round(controller, 1)

    with pytest.raises(TournamentStateException):
        controller.generate_round_robin_schedule()

    assert len(controller.store.list_matches()) == 2
    assert controller.get_state().pairing_system is PairingSystem.SWISS


def test_round_robin_replaces_unplayed_swiss_round_and_its_bye():
    controller, _ = _setup(3)
    controller.generate_swiss_pairings_for_round(1)

    controller.generate_round_robin_schedule()

    assert set(_scores(controller).values()) == {0.0}
    assert controller.get_state().byes == {}
    assert len(controller.store.list_matches()) == 6


# ========== Matches & results ==========


def test_changing_a_scored_result_corrects_scores():
    controller, _ = _setup(2)
    controller.generate_swiss_pairings_for_round(1)
    match = controller.store.list_matches(round_number=1)[0]
    controller.record_result(match.id, "1-0")
    controller.advance_round()

    controller.record_result(match.id, "0-1")
    scores = _scores(controller)
    assert scores[match.white_id] == 0.0
    assert scores[match.black_id] == 1.0

    controller.record_result(match.id, None)
    assert set(_scores(controller).values()) == {0.0}


def test_result_before_scoring_leaves_scores_alone():
    controller, _ = _setup(2)
    controller.generate_swiss_pairings_for_round(1)
    match = controller.store.list_matches()[0]

    updated = controller.record_result(match.id, "0.5-0.5")

    assert updated.result.value == "1/2-1/2"
    assert set(_scores(controller).values()) == {0.0}


def test_unknown_result_is_rejected():
    controller, _ = _setup(2)
    controller.generate_swiss_pairings_for_round(1)
    match = controller.store.list_matches()[0]

    with pytest.raises(InvalidResultException):
        controller.record_result(match.id, "2-0")


def test_bye_rows_cannot_take_a_result():
    controller, _ = _setup(3)
    controller.generate_round_robin_schedule()
    bye_row = next(m for m in controller.store.list_matches() if m.is_bye)

    with pytest.raises(InvalidPairingException):
        controller.record_result(bye_row.id, "1-0")


def test_manual_match_rejects_double_booking():
    controller, ids = _setup(4)
    controller.generate_swiss_pairings_for_round(1)

    with pytest.raises(InvalidPairingException):
        controller.create_match(ids[0], ids[1], 1)

    first = controller.create_match(ids[0], ids[1], 2)
    second = controller.create_match(ids[2], ids[3], 2)
    assert (first.table, second.table) == (1, 2)

    with pytest.raises(InvalidPairingException):
        controller.create_match(ids[0], ids[2], 2)


def test_manual_match_rejects_self_pairing_and_unknown_players():
    controller, ids = _setup(2)

    with pytest.raises(InvalidPairingException):
        controller.create_match(ids[0], ids[0], 1)
    with pytest.raises(PlayerNotFoundException):
        controller.create_match(ids[0], "nobody", 1)


def test_deleting_a_scored_match_takes_back_its_points():
    controller, _ = _setup(2)
    controller.generate_swiss_pairings_for_round(1)
    match = controller.store.list_matches(round_number=1)[0]
    controller.record_result(match.id, "1-0")
    controller.advance_round()

    controller.delete_match(match.id)

    assert _scores(controller)[match.white_id] == 0.0


def test_recompute_repairs_hand_edited_scores():
    controller, ids = _setup(4)
    controller.generate_swiss_pairings_for_round(1)
    _play_round(controller, 1)
    controller.advance_round()
    expected = _scores(controller)

    controller.update_player_stats(ids[0], rank=None, score=10)
    scores = controller.recompute_scores()

    assert scores == expected
    assert _scores(controller) == expected


def test_recalculate_standings_keeps_scores():
    controller, ids = _setup(3)
    controller.update_player_stats(ids[1], rank=None, score=2)

    standings = controller.recalculate_standings()

    assert standings[0].player_id == ids[1]
    assert controller.store.get_player(ids[1]).rank == 1
    assert controller.store.get_player(ids[1]).score == 2.0


# ========== Players ==========


def test_registration_normalizes_and_starts_pending():
    controller, _ = _setup(0)

    player = controller.register_player(
        "  Ama   Mensah ", rating="1725", phone_number="(024) 123-4567"
    )

    assert player.full_name == "Ama Mensah"
    assert player.rating == 1725
    assert player.phone_number == "0241234567"
    assert player.status is RegistrationStatus.PENDING


def test_registration_rejects_bad_input():
    controller, _ = _setup(0)

    with pytest.raises(InvalidPlayerDataException):
        controller.register_player("   ")
    with pytest.raises(RatingValidationException):
        controller.register_player("Ama", rating="strong")
    with pytest.raises(PhoneValidationException):
        controller.register_player("Ama", phone_number="12ab")
    assert controller.store.list_players() == []


def test_negative_score_override_is_rejected():
    controller, ids = _setup(1)

    with pytest.raises(InvalidPlayerDataException):
        controller.update_player_stats(ids[0], rank=1, score=-1)


def test_deleting_a_player_removes_their_matches_and_bye():
    controller, ids = _setup(5)
    pairing_set = controller.generate_swiss_pairings_for_round(1)
    bye_player = pairing_set.bye_player_id

    controller.delete_player(bye_player)
    board_player = controller.store.list_matches()[0].white_id
    controller.delete_player(board_player)

    assert controller.get_state().byes == {}
    assert len(controller.store.list_matches()) == 1
    with pytest.raises(PlayerNotFoundException):
        controller.store.get_player(board_player)


def test_repairing_a_scored_round_takes_back_its_points():
    controller, _ = _setup(4)
    controller.generate_swiss_pairings_for_round(1)
    _play_round(controller, 1)
    controller.advance_round()

    controller.generate_swiss_pairings_for_round(1)

    assert 1 not in controller.get_state().scored_rounds
    assert set(_scores(controller).values()) == {0.0}
    assert controller.recompute_scores() == _scores(controller)

    _play_round(controller, 1, result="0-1")
    controller.advance_round()
    assert sum(_scores(controller).values()) == 2.0


def test_saved_ranks_count_rejected_opponents_in_buchholz():
    controller, (a, b, c, d) = _setup(4)
    controller.record_result(controller.create_match(a, c, 1).id, "1-0")
    controller.record_result(controller.create_match(b, d, 1).id, "1-0")
    controller.update_player_stats(c, rank=None, score=3)
    controller.set_player_status(c, RegistrationStatus.REJECTED)

    standings = controller.recalculate_standings()

    assert (standings[0].player_id, standings[0].buchholz) == (a, 3.0)
    assert controller.store.get_player(a).rank == 1
    assert controller.store.get_player(c).rank is None
    live = TournamentQueries(controller.store).get_standings()
    assert [s.player_id for s in live] == [s.player_id for s in standings]
