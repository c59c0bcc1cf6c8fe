from __future__ import annotations

import pytest

from marjapussi.cards import Suit
from marjapussi.events import (
    AnnounceTrump,
    CallbackKind,
    CardPlayed,
    GameAction,
    HiddenEvent,
    NewBid,
    Pass,
    PublicEvent,
    Start,
)
from marjapussi.game import Game
from marjapussi.info import GameInfoDatabase, GameInfoPlayer
from marjapussi.seat import Seat
from marjapussi.state import START_TRICK

NAMES = ["S1", "S2", "S3", "S4"]
ACES_AND_RED_PAIR = ["e-A", "s-A", "r-A", "g-A", "r-K", "r-O", "g-6", "g-7", "g-8"]


def _play_first_card(game: Game) -> Game:
    action = next(a for a in game.legal_actions if isinstance(a.action_type, CardPlayed))
    return game.apply_action(action)


def _finish_with_cards(game: Game) -> Game:
    while not game.ended():
        game = _play_first_card(game)
    return game


def _bid_and_pass(game: Game) -> tuple[Game, tuple]:
    """Seat 0 wins the bidding at 120; the passed cards travel back unchanged."""
    game = game.apply_action(GameAction(NewBid(120), Seat(0)))
    for _ in range(3):
        game = game.apply_action(game.legal_actions[0])
    received = game.legal_actions[0].action_type.cards
    game = game.apply_action(game.legal_actions[0])
    game = game.apply_action(GameAction(Pass(received), Seat(0)))
    return game, received


class TestPlayerView:
    def test_before_start(self):
        game = Game.new("g", NAMES, seed=0)
        view = GameInfoPlayer.from_game(game, Seat(1))
        assert view.own_cards is None
        assert view.players_from_perspective == ["S2", "S3", "S4", "S1"]
        assert view.players_pressed_start == []
        assert view.legal_actions == [GameAction(Start(), Seat(1))]
        assert view.last_event is None
        assert view.players_cards_number_perspective == [9, 9, 9, 9]

    def test_after_start(self, make_started_game):
        game = make_started_game()
        view = GameInfoPlayer.from_game(game, Seat(0))
        assert view.own_cards == game.state.player_at(Seat(0)).cards
        assert view.players_pressed_start == NAMES
        assert view.player_at_turn == "S1"
        assert len(view.legal_actions) == 62
        assert GameInfoPlayer.from_game(game, Seat(1)).legal_actions == []

    def test_bids_are_public(self, make_started_game):
        game = make_started_game().apply_action(GameAction(NewBid(120), Seat(0)))
        view = GameInfoPlayer.from_game(game, Seat(2))
        assert isinstance(view.last_event, PublicEvent)
        assert view.last_event.event.last_action == GameAction(NewBid(120), Seat(0))

    def test_passed_cards_are_hidden(self, make_started_game):
        game = make_started_game().apply_action(GameAction(NewBid(120), Seat(0)))
        for _ in range(3):
            game = game.apply_action(game.legal_actions[0])
        game = game.apply_action(game.legal_actions[0])
        for seat in range(4):
            view = GameInfoPlayer.from_game(game, Seat(seat))
            assert isinstance(view.last_event, HiddenEvent)
        view = GameInfoPlayer.from_game(game, Seat(0))
        assert view.players_cards_number_perspective == [13, 9, 5, 9]


class TestDatabase:
    def test_unfinished_game_is_fatal(self, make_started_game):
        with pytest.raises(RuntimeError):
            GameInfoDatabase.from_game(make_started_game())

    def test_nobody_played(self, make_started_game):
        game = make_started_game()
        for _ in range(4):
            game = game.apply_action(game.legal_actions[0])
        record = GameInfoDatabase.from_game(_finish_with_cards(game))
        assert record.no_one_played
        assert record.won is None
        assert record.playing_party is None
        assert record.passed_cards is None
        assert record.after_passing is None
        assert record.game_value == 115
        assert sum(record.players_points) == 120
        assert len(record.tricks) == 9

    def test_played_game_with_red_announcement(self, make_hands, make_started_game):
        game = make_started_game(hands=make_hands({0: ACES_AND_RED_PAIR}))
        game, received = _bid_and_pass(game)

        game = _play_first_card(game)  # lead an ace from the raising phase
        for _ in range(3):
            game = _play_first_card(game)
        assert game.state.phase == START_TRICK
        assert game.state.player_at_turn == Seat(0)

        game = game.apply_action(GameAction(AnnounceTrump(Suit.RED), Seat(0)))
        assert game.last_event().callback.kind == CallbackKind.NEW_TRUMP
        game = _finish_with_cards(game)

        record = GameInfoDatabase.from_game(game)
        trick_points = [0, 0, 0, 0]
        for trick in record.tricks:
            trick_points[trick.winner.index] += trick.points

        assert not record.no_one_played
        assert record.game_value == 120
        assert record.playing_player == Seat(0)
        assert record.playing_party == Seat(0)
        assert record.players_points[0] == trick_points[0] + 100
        assert record.players_points[1:] == trick_points[1:]
        assert sum(record.players_points) == 220
        assert record.won == (record.players_points[0] + record.players_points[2] >= 120)
        assert record.passed_cards == (received, received)
        assert [sorted(h) for h in record.after_passing] == [
            sorted(h) for h in game.info.player_start_cards
        ]
        tricks_party_zero = sum(1 for t in record.tricks if t.winner.index % 2 == 0)
        assert record.schwarz_game == (tricks_party_zero in (0, 9))
