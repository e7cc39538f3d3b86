import random
from collections import Counter
from itertools import combinations

import pytest

from chesstourney.constants import BYE_TABLE
from chesstourney.pairing import generate_round_robin_schedule


def _met(schedule):
    return Counter(
        frozenset({p.white_id, p.black_id}) for rnd in schedule.rounds for p in rnd
    )


def test_four_players_meet_once_over_three_rounds():
    ids = ["a", "b", "c", "d"]

    schedule = generate_round_robin_schedule(ids, random.Random(1))

    assert schedule.total_rounds == 3
    assert len(schedule.rounds) == 3
    for rnd in schedule.rounds:
        assert len(rnd) == 2
        assert rnd.bye_player_id is None
    assert _met(schedule) == Counter(frozenset(p) for p in combinations(ids, 2))


def test_odd_field_is_padded_with_a_bye():
    ids = ["a", "b", "c", "d", "e"]

    schedule = generate_round_robin_schedule(ids, random.Random(2))

    assert schedule.total_rounds == 5
    byes = [rnd.bye_player_id for rnd in schedule.rounds]
    assert sorted(byes) == ids
    for rnd in schedule.rounds:
        assert len(rnd) == 2
        assert len(set(rnd.player_ids)) == 5


@pytest.mark.parametrize("size", [2, 3, 6, 7, 10])
def test_every_pair_meets_exactly_once(size):
    ids = [f"p{i}" for i in range(size)]

    schedule = generate_round_robin_schedule(ids, random.Random(size))

    padded = size + size % 2
    assert schedule.total_rounds == padded - 1
    met = _met(schedule)
    assert set(met) == {frozenset(p) for p in combinations(ids, 2)}
    assert set(met.values()) == {1}


def test_first_seat_plays_every_round():
    ids = ["anchor", "b", "c", "d", "e", "f"]

    schedule = generate_round_robin_schedule(ids, random.Random(3))

    assert all("anchor" in rnd.player_ids for rnd in schedule.rounds)


def test_fewer_than_two_players_gives_empty_schedule():
    schedule = generate_round_robin_schedule(["solo"], random.Random(0))

    assert schedule.is_empty
    assert schedule.total_rounds == 0


def test_bye_rows_sit_after_the_real_boards():
    schedule = generate_round_robin_schedule(["a", "b", "c"], random.Random(5))

    for rnd in schedule.rounds:
        matches = rnd.to_matches(include_bye=True)
        assert [m.table for m in matches] == [1, BYE_TABLE]
        assert matches[-1].is_bye
        assert matches[-1].bye_player_id == rnd.bye_player_id
