"""Trump questions, announcements and answers at the start of a trick."""

from __future__ import annotations

import pytest

from marjapussi.cards import Suit
from marjapussi.events import (
    AnnounceTrump,
    Answer,
    CallbackKind,
    CardPlayed,
    GameAction,
    GameCallback,
    NoHalf,
    NoPair,
    Question,
    YesHalf,
    YesPair,
    YourHalf,
    Yours,
)
from marjapussi.legal import legal_answer
from marjapussi.player import TrumpPossibility
from marjapussi.seat import Seat
from marjapussi.state import ANSWERING_PAIR, START_TRICK, TRICK, answering_half

HANDS = {
    0: ["r-K", "r-O", "s-O", "g-6", "g-7", "g-8", "g-9", "g-U", "e-6"],
    1: ["g-K", "g-O"],
    2: ["s-K", "e-O"],
}


@pytest.fixture
def leading(make_hands, make_started_game):
    """Seat 0 leads a trick and may look for trump."""

    def build(fixed=HANDS, trump_called=()):
        game = make_started_game(hands=make_hands(fixed))
        game.state.phase = START_TRICK
        game.state.player_at_turn = Seat(0)
        game.state.trump_called = list(trump_called)
        game.legal_actions = game.compute_legal_actions()
        return game

    return build


def _ask(game, question):
    return game.apply_action(GameAction(Question(question), Seat(0)))


class TestQuestionOffer:
    def test_order_of_trump_actions(self, leading):
        actions = leading().legal_actions
        assert actions[:6] == [
            GameAction(AnnounceTrump(Suit.RED), Seat(0)),
            GameAction(Question(Yours()), Seat(0)),
            GameAction(Question(YourHalf(Suit.RED)), Seat(0)),
            GameAction(Question(YourHalf(Suit.BELLS)), Seat(0)),
            GameAction(Question(YourHalf(Suit.ACORNS)), Seat(0)),
            GameAction(Question(YourHalf(Suit.GREEN)), Seat(0)),
        ]
        assert all(isinstance(a.action_type, CardPlayed) for a in actions[6:])
        assert len(actions) == 11

    def test_yours_possibility(self, leading):
        game = leading()
        game.state.player_at(Seat(0)).trump = TrumpPossibility.YOURS
        actions = game.compute_legal_actions()
        assert actions[0] == GameAction(Question(Yours()), Seat(0))
        assert not any(isinstance(a.action_type, AnnounceTrump) for a in actions)

    def test_ours_possibility(self, leading):
        game = leading()
        game.state.player_at(Seat(0)).trump = TrumpPossibility.OURS
        actions = game.compute_legal_actions()
        assert actions[0] == GameAction(Question(YourHalf(Suit.RED)), Seat(0))
        assert GameAction(Question(Yours()), Seat(0)) not in actions

    def test_announced_suit_not_offered_again(self, leading):
        game = leading(trump_called=[Suit.RED])
        assert GameAction(AnnounceTrump(Suit.RED), Seat(0)) not in game.legal_actions


class TestAnnounce:
    def test_announce_sets_trump(self, leading):
        game = leading().apply_action(GameAction(AnnounceTrump(Suit.RED), Seat(0)))
        assert game.state.trump == Suit.RED
        assert game.state.trump_called == [Suit.RED]
        assert game.state.phase == TRICK
        assert game.state.player_at_turn == Seat(0)
        assert game.last_event().callback == GameCallback(CallbackKind.NEW_TRUMP, Suit.RED)


class TestAnswers:
    def test_no_pair(self, leading):
        game = _ask(leading(), Yours())
        assert game.state.phase == ANSWERING_PAIR
        assert game.state.player_at_turn == Seat(2)
        assert game.legal_actions == [GameAction(Answer(NoPair()), Seat(2))]

        game = game.apply_action(game.legal_actions[0])
        assert game.last_event().callback is None
        assert game.state.phase == TRICK
        assert game.state.player_at_turn == Seat(0)
        assert game.state.trump is None

    def test_yes_pair(self, leading):
        game = _ask(leading({0: HANDS[0], 2: ["g-K", "g-O"]}), Yours())
        assert game.legal_actions == [GameAction(Answer(YesPair(Suit.GREEN)), Seat(2))]
        game = game.apply_action(game.legal_actions[0])
        assert game.state.trump == Suit.GREEN
        assert game.last_event().callback == GameCallback(CallbackKind.NEW_TRUMP, Suit.GREEN)
        assert game.state.player_at_turn == Seat(0)

    def test_yes_half_completes_pair(self, leading):
        game = _ask(leading(), YourHalf(Suit.BELLS))
        assert game.state.phase == answering_half(Suit.BELLS)
        assert game.legal_actions == [GameAction(Answer(YesHalf(Suit.BELLS)), Seat(2))]

        game = game.apply_action(game.legal_actions[0])
        assert game.last_event().callback == GameCallback(CallbackKind.NEW_TRUMP, Suit.BELLS)
        assert game.state.trump == Suit.BELLS
        assert game.state.trump_called == [Suit.BELLS]
        assert game.state.phase == TRICK
        assert game.state.player_at_turn == Seat(0)

    def test_yes_half_without_own_half(self, leading):
        game = _ask(leading(), YourHalf(Suit.ACORNS))
        game = game.apply_action(game.legal_actions[0])
        assert game.last_event().callback == GameCallback(CallbackKind.ONLY_HALF, Suit.ACORNS)
        assert game.state.trump is None
        assert game.state.player_at_turn == Seat(0)

    def test_no_half(self, leading):
        game = _ask(leading(), YourHalf(Suit.GREEN))
        assert game.legal_actions == [GameAction(Answer(NoHalf(Suit.GREEN)), Seat(2))]
        game = game.apply_action(game.legal_actions[0])
        assert game.last_event().callback == GameCallback(CallbackKind.NO_HALF, Suit.GREEN)
        assert game.state.player_at_turn == Seat(0)

    def test_still_trump(self, leading):
        game = _ask(leading(trump_called=[Suit.BELLS]), YourHalf(Suit.BELLS))
        game = game.apply_action(game.legal_actions[0])
        assert game.last_event().callback == GameCallback(CallbackKind.STILL_TRUMP, Suit.BELLS)
        assert game.state.trump == Suit.BELLS
        assert game.state.trump_called == [Suit.BELLS]

    def test_answers_require_a_question(self, leading):
        game = leading()
        with pytest.raises(RuntimeError):
            legal_answer(game.state, game.all_events)
