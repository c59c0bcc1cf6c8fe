from __future__ import annotations

import random

import pytest

from marjapussi.seat import Seat
from marjapussi.series import Series, SeriesSettings

NAMES = ["S1", "S2", "S3", "S4"]


def _finish_active_game(series: Series, rng: random.Random) -> None:
    game = series.active_game()
    while not game.ended():
        assert series.active_game_apply(rng.choice(game.legal_actions))


class TestSeriesSettings:
    def test_defaults(self):
        s = SeriesSettings()
        assert s.games == 4
        assert s.schwarzfactor_fifths == 10
        assert s.shuffle_players is True
        assert s.bonus_at == 500
        assert s.bonus_value == 300
        assert s.diff_plus_minus is True
        assert s.diff_divisor == 5


class TestSeries:
    def test_first_game_is_ready(self):
        series = Series.new("Evening", NAMES, 2, seed=1)
        assert len(series.games) == 1
        view = series.active_game_info(Seat(0))
        assert view is not None
        assert view.own_cards is None
        assert view.players_from_perspective == NAMES

    def test_discarded_action_returns_false(self):
        series = Series.new("Evening", NAMES, 2, seed=1)
        game = series.active_game()
        bad = game.legal_actions[0]
        assert series.active_game_apply(bad)
        assert not series.active_game_apply(bad)

    def test_games_follow_each_other(self):
        rng = random.Random(0)
        series = Series.new("Evening", NAMES, 2, seed=1)
        _finish_active_game(series, rng)

        view = series.active_game_info(Seat(2))
        assert view is not None
        assert len(series.games) == 2
        assert not series.complete()

        _finish_active_game(series, rng)
        assert series.complete()
        assert series.active_game_info(Seat(2)) is None
        assert series.finished is not None
        assert len(series.games) == 2

    def test_needs_a_game(self):
        with pytest.raises(ValueError):
            Series.new("Evening", NAMES, 0)
