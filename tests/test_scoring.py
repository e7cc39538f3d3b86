from chesstourney.models import Match
from chesstourney.tournament import rebuild_scores, score_round, total_by_player


def test_decided_games_award_win_loss_and_draw_points():
    matches = [
        Match.between(1, "a", "b", result="1-0"),
        Match.between(1, "c", "d", result="0-1"),
        Match.between(1, "e", "f", result="1/2-1/2"),
    ]

    totals = total_by_player(score_round(matches))

    assert totals == {"a": 1.0, "b": 0.0, "c": 0.0, "d": 1.0, "e": 0.5, "f": 0.5}


def test_unplayed_games_award_nothing():
    matches = [Match.between(1, "a", "b"), Match.between(1, "c", "d", result="1-0")]

    totals = total_by_player(score_round(matches))

    assert "a" not in totals
    assert "b" not in totals
    assert totals["c"] == 1.0


def test_bye_rows_award_the_bye_score():
    matches = [Match.bye(1, "a"), Match.bye(2, "b")]

    assert total_by_player(score_round(matches)) == {"a": 0.5, "b": 0.5}
    assert total_by_player(score_round(matches, bye_score=1.0)) == {"a": 1.0, "b": 1.0}


def test_scoring_a_round_twice_counts_it_twice():
    matches = [Match.between(1, "a", "b", result="1-0")]

    deltas = score_round(matches) + score_round(matches)

    assert total_by_player(deltas)["a"] == 2.0


def test_rebuild_counts_only_scored_rounds_and_byes():
    matches = [
        Match.between(1, "a", "b", result="1-0"),
        Match.between(2, "b", "a", result="1/2-1/2"),
        Match.between(3, "a", "b", result="0-1"),
    ]

    scores = rebuild_scores(["a", "b", "c"], matches, {1, 2}, {1: "c", 2: "c"})

    assert scores == {"a": 1.5, "b": 0.5, "c": 1.0}


def test_rebuild_ignores_players_not_listed():
    matches = [Match.between(1, "a", "gone", result="0-1")]

    scores = rebuild_scores(["a"], matches, {1}, {1: "gone"})

    assert scores == {"a": 0.0}
