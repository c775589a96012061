import pytest

from dartscore.services.games.state import GameSettings, PlayerState, ThrowRecord
from dartscore.services.games.statistics import (
    find_set_winner,
    infer_set_boundaries,
    reconstruct_statistics,
    split_into_sets,
    three_dart_average,
)


SETTINGS = GameSettings(total_points=301, best_of_sets=3, double_out=False)
PLAYERS = [PlayerState(user_id=1, order=0), PlayerState(user_id=2, order=1)]


def t(user_id, points, multiplier, score_after, valid=True, set_number=None):
    return ThrowRecord(
        game_id=1,
        user_id=user_id,
        points=points,
        multiplier=multiplier,
        valid=valid,
        score_after=score_after,
        set_number=set_number,
    )


def two_set_history():
    """Player 1 takes the first set, player 2 the second (with a bust)."""
    first_set = [
        t(1, 20, 3, 241),
        t(1, 20, 3, 181),
        t(1, 20, 3, 121),
        t(2, 20, 1, 281),
        t(2, 20, 1, 261),
        t(2, 20, 1, 241),
        t(1, 20, 3, 61),
        t(1, 25, 2, 11),
        t(1, 11, 1, 0),
    ]
    second_set = [
        t(2, 20, 3, 241),
        t(2, 20, 3, 181),
        t(2, 20, 3, 121),
        t(1, 20, 1, 281),
        t(1, 0, 1, 281),
        t(1, 5, 1, 276),
        t(2, 20, 3, 61),
        t(2, 20, 3, 121, valid=False),
        t(1, 20, 3, 216),
        t(1, 20, 3, 156),
        t(1, 20, 3, 96),
        t(2, 20, 3, 61),
        t(2, 19, 3, 4),
        t(2, 2, 2, 0),
    ]
    return first_set, second_set


def by_user(stats):
    return {p.user_id: p for p in stats.players}


def test_three_dart_average():
    assert three_dart_average(0, 0) == 0.0
    assert three_dart_average(60, 3) == 60.0
    assert three_dart_average(301, 6) == pytest.approx(150.5)


def test_two_checkouts_by_different_players_make_two_sets():
    first_set, second_set = two_set_history()

    stats = reconstruct_statistics(first_set + second_set, SETTINGS, PLAYERS, game_id=1)

    assert stats.total_sets_played == 2
    players = by_user(stats)
    assert [s.won_set for s in players[1].set_stats] == [True, False]
    assert [s.won_set for s in players[2].set_stats] == [False, True]
    assert [s.set_number for s in players[1].set_stats] == [1, 2]


def test_per_set_totals_and_busts():
    first_set, second_set = two_set_history()

    players = by_user(reconstruct_statistics(first_set + second_set, SETTINGS, PLAYERS))

    p1_set1, p1_set2 = players[1].set_stats
    assert (p1_set1.total_throws, p1_set1.total_points) == (6, 301)
    assert p1_set1.average_3_dart == pytest.approx(150.5)
    assert (p1_set2.total_throws, p1_set2.total_points) == (6, 205)
    assert p1_set2.average_3_dart == pytest.approx(102.5)

    p2_set1, p2_set2 = players[2].set_stats
    assert (p2_set1.total_throws, p2_set1.total_points) == (3, 60)
    assert p2_set1.average_3_dart == pytest.approx(60.0)
    # the bust is a dart thrown but adds no points
    assert (p2_set2.total_throws, p2_set2.total_points) == (8, 361)


def test_overall_is_sum_of_sets_with_recomputed_average():
    first_set, second_set = two_set_history()

    stats = reconstruct_statistics(first_set + second_set, SETTINGS, PLAYERS)

    for player in stats.players:
        overall = player.overall_stats
        assert overall.total_throws == sum(s.total_throws for s in player.set_stats)
        assert overall.total_points == sum(s.total_points for s in player.set_stats)
        assert overall.average_3_dart == pytest.approx(
            three_dart_average(overall.total_points, overall.total_throws)
        )

    players = by_user(stats)
    assert players[1].overall_stats.total_throws == 12
    assert players[1].overall_stats.total_points == 506
    assert players[1].overall_stats.average_3_dart == pytest.approx(126.5)
    assert players[2].overall_stats.total_throws == 11
    assert players[2].overall_stats.average_3_dart == pytest.approx(421 / 11 * 3)


def test_empty_history():
    stats = reconstruct_statistics([], SETTINGS, PLAYERS, game_id=9)

    assert stats.game_id == 9
    assert stats.total_sets_played == 0
    for player in stats.players:
        assert player.set_stats == []
        assert player.overall_stats.total_throws == 0
        assert player.overall_stats.average_3_dart == 0.0


def test_open_set_is_flushed_without_winner():
    history = [t(1, 20, 3, 241), t(1, 20, 1, 221)]

    stats = reconstruct_statistics(history, SETTINGS, PLAYERS)

    assert stats.total_sets_played == 1
    assert not any(s.won_set for p in stats.players for s in p.set_stats)


def test_player_without_darts_in_a_set_gets_zero_entry():
    history = [t(1, 20, 1, 281), t(1, 20, 1, 261)]

    players = by_user(reconstruct_statistics(history, SETTINGS, PLAYERS))

    entry = players[2].set_stats[0]
    assert (entry.total_throws, entry.total_points, entry.average_3_dart) == (0, 0, 0.0)


def test_players_reported_in_turn_order_with_names():
    players = [PlayerState(user_id=7, order=1), PlayerState(user_id=3, order=0)]

    stats = reconstruct_statistics([], SETTINGS, players, user_names={3: 'Alice'})

    assert [p.user_id for p in stats.players] == [3, 7]
    assert [p.user_name for p in stats.players] == ['Alice', 'Unknown']


def test_score_back_at_start_opens_a_new_set():
    history = [
        t(1, 20, 3, 241),
        t(2, 20, 3, 241),
        t(1, 20, 1, 221),
        # set ended off the record; player 2 is back on 301
        t(2, 0, 1, 301),
        t(1, 20, 1, 281),
    ]

    sets = infer_set_boundaries(history, 301, PLAYERS)

    assert [len(s) for s in sets] == [3, 2]
    assert sets[1][0] is history[3]
    assert find_set_winner(sets[0]) is None


def test_starting_score_from_start_is_not_a_boundary():
    history = [t(1, 0, 1, 301), t(2, 0, 1, 301), t(1, 20, 1, 281)]

    assert [len(s) for s in infer_set_boundaries(history, 301, PLAYERS)] == [3]


def test_explicit_set_numbers_take_precedence():
    # A first-turn bust back to 301 looks like a new set to the inference.
    history = [
        t(1, 20, 3, 241, set_number=1),
        t(1, 20, 3, 181, set_number=1),
        t(1, 20, 3, 301, valid=False, set_number=1),
        t(2, 20, 1, 281, set_number=1),
    ]

    assert len(infer_set_boundaries(history, 301, PLAYERS)) == 2
    assert len(split_into_sets(history, 301, PLAYERS)) == 1


def test_partial_set_numbers_fall_back_to_inference():
    first_set, second_set = two_set_history()
    history = first_set + second_set
    history[0] = t(1, 20, 3, 241, set_number=1)

    assert len(split_into_sets(history, 301, PLAYERS)) == 2


def test_to_dict_shape():
    first_set, _ = two_set_history()

    data = reconstruct_statistics(first_set, SETTINGS, PLAYERS, game_id=4).to_dict()

    assert data['game_id'] == 4
    assert data['total_sets_played'] == 1
    assert set(data['players'][0]) == {'user_id', 'user_name', 'overall_stats', 'set_stats'}
    assert set(data['players'][0]['set_stats'][0]) == {
        'set_number', 'total_throws', 'total_points', 'average_3_dart', 'won_set',
    }
