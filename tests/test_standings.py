from chesstourney.models import Match, Player, RegistrationStatus
from chesstourney.tournament import calculate_buchholz, compute_standings


def _player(pid, score, rating=1500, status=RegistrationStatus.APPROVED):
    return Player(id=pid, full_name=pid, rating=rating, score=score, status=status)


def test_higher_score_ranks_first():
    players = [_player("a", 1.0), _player("b", 2.0), _player("c", 0.0)]

    standings = compute_standings(players, [])

    assert [s.player_id for s in standings] == ["b", "a", "c"]
    assert [s.rank for s in standings] == [1, 2, 3]


def test_buchholz_breaks_equal_scores():
    players = [
        _player("a", 2.0),
        _player("b", 2.0),
        _player("strong", 3.0),
        _player("weak", 1.0),
    ]
    matches = [
        Match.between(1, "a", "weak", result="1-0"),
        Match.between(1, "b", "strong", result="1/2-1/2"),
    ]

    standings = compute_standings(players, matches)
    by_id = {s.player_id: s for s in standings}

    assert by_id["b"].buchholz == 3.0
    assert by_id["a"].buchholz == 1.0
    assert by_id["b"].rank < by_id["a"].rank


def test_rating_breaks_equal_score_and_buchholz():
    players = [_player("a", 3.0, rating=1400), _player("b", 3.0, rating=1600)]

    standings = compute_standings(players, [])

    assert [s.player_id for s in standings] == ["b", "a"]


def test_full_ties_keep_input_order():
    players = [_player("x", 1.0), _player("y", 1.0), _player("z", 1.0)]

    standings = compute_standings(players, [])

    assert [s.player_id for s in standings] == ["x", "y", "z"]


def test_standings_are_idempotent():
    players = [_player("a", 2.0), _player("b", 1.0), _player("c", 1.0, rating=1700)]
    matches = [
        Match.between(1, "a", "b", result="1-0"),
        Match.between(2, "c", "a", result="0-1"),
    ]

    first = [(s.player_id, s.rank, s.buchholz) for s in compute_standings(players, matches)]
    second = [(s.player_id, s.rank, s.buchholz) for s in compute_standings(players, matches)]

    assert first == second


def test_only_approved_players_are_ranked():
    players = [
        _player("a", 1.0),
        _player("pending", 5.0, status=RegistrationStatus.PENDING),
        _player("rejected", 5.0, status=RegistrationStatus.REJECTED),
    ]

    standings = compute_standings(players, [])

    assert [s.player_id for s in standings] == ["a"]


def test_unplayed_games_and_byes_add_no_buchholz():
    matches = [Match.between(1, "a", "b"), Match.bye(2, "a")]

    assert calculate_buchholz("a", matches, {"a": 0.5, "b": 4.0}) == 0.0


def test_rematched_opponent_counts_each_time():
    matches = [
        Match.between(1, "a", "b", result="1-0"),
        Match.between(2, "b", "a", result="1-0"),
    ]

    assert calculate_buchholz("a", matches, {"a": 1.0, "b": 1.0}) == 2.0


def test_opponent_scores_come_from_all_players():
    players = [_player("a", 1.0)]
    former = _player("left", 2.5, status=RegistrationStatus.REJECTED)
    matches = [Match.between(1, "a", "left", result="1-0")]

    standings = compute_standings(players, matches, all_players=[former])

    assert standings[0].buchholz == 2.5
