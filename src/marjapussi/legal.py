"""Legal actions for every phase of the game.

The lists are exhaustive and their order is fixed, so a collaborator
can index into them reproducibly:

  - Bidding: stop first, then every bid ascending.
  - Passing: one entry per 4-card combination of the hand.
  - Raising: bids descending, then card plays.
  - StartTrick: trump questions / announcements, then card plays.
  - UndoRequest, when offered, is always last.
"""

from __future__ import annotations

from itertools import combinations
from typing import Optional, Sequence

from marjapussi.cards import Suit, half_suits, pair_suits
from marjapussi.constants import BASE_VALUE, BID_STEP, HAND_SIZE, MAX_VALUE, PASS_SIZE
from marjapussi.events import (
    AnnounceTrump,
    Answer,
    CardPlayed,
    GameAction,
    GameEvent,
    NewBid,
    NoHalf,
    NoPair,
    Pass,
    Question,
    Start,
    StopBidding,
    UndoAccept,
    UndoDecline,
    UndoRequest,
    YesHalf,
    YesPair,
    YourHalf,
    Yours,
)
from marjapussi.player import TrumpPossibility
from marjapussi.rules import allowed_cards
from marjapussi.state import GameState, PhaseKind

#: Suit order in which the half questions are offered.
HALF_QUESTION_ORDER: tuple[Suit, ...] = (Suit.RED, Suit.BELLS, Suit.ACORNS, Suit.GREEN)

#: Phases in which no undo is ever offered.
NO_UNDO_PHASES: frozenset[PhaseKind] = frozenset({
    PhaseKind.WAITING_FOR_START,
    PhaseKind.PENDING_UNDO,
    PhaseKind.ENDED,
    PhaseKind.PASSING_BACK,
    PhaseKind.RAISING,
})


def legal_actions(
    state: GameState,
    last_state: Optional[GameState],
    events: Sequence[GameEvent],
) -> list[GameAction]:
    """All legal actions in *state*.

    Parameters
    ----------
    state : current state
    last_state : retained undo snapshot, if any
    events : the event log so far (answers depend on the last question)
    """
    kind = state.phase.kind

    if kind == PhaseKind.WAITING_FOR_START:
        actions = legal_start(state)
    elif kind == PhaseKind.BIDDING:
        actions = legal_bidding(state)
    elif kind in (PhaseKind.PASSING_FORTH, PhaseKind.PASSING_BACK):
        actions = legal_passing(state)
    elif kind == PhaseKind.RAISING:
        bids = legal_bidding(state)
        bids.reverse()
        bids.pop()  # the stop action, now last
        actions = bids + legal_cards(state)
    elif kind == PhaseKind.START_TRICK:
        actions = legal_question(state) + legal_cards(state)
    elif kind == PhaseKind.TRICK:
        actions = legal_cards(state)
    elif kind in (PhaseKind.ANSWERING_PAIR, PhaseKind.ANSWERING_HALF):
        actions = legal_answer(state, events)
    elif kind == PhaseKind.ENDED:
        actions = []
    elif kind == PhaseKind.PENDING_UNDO:
        actions = legal_undo_votes(state, last_state)
    else:
        raise RuntimeError(f"unknown phase {state.phase!r}")

    if undo_allowed(state) and last_state is not None:
        actions.append(GameAction(UndoRequest(), last_state.player_at_turn))
    return actions


def undo_allowed(state: GameState) -> bool:
    """Whether the current phase admits an undo request at all."""
    if state.phase.kind in NO_UNDO_PHASES:
        return False
    if state.phase.kind == PhaseKind.BIDDING and state.value == BASE_VALUE:
        return False
    return True


# ---------------------------------------------------------------------------
#  Per-phase enumerations
# ---------------------------------------------------------------------------


def legal_start(state: GameState) -> list[GameAction]:
    return [
        GameAction(Start(), p.seat)
        for p in state.players
        if p.seat not in state.players_started
    ]


def legal_bidding(state: GameState) -> list[GameAction]:
    seat = state.player_at_turn
    actions = [GameAction(StopBidding(), seat)]
    for value in range(state.value + BID_STEP, MAX_VALUE + 1, BID_STEP):
        actions.append(GameAction(NewBid(value), seat))
    return actions


def legal_passing(state: GameState) -> list[GameAction]:
    seat = state.player_at_turn
    hand = state.player_at_turn_obj().cards
    return [
        GameAction(Pass(tuple(sorted(comb, reverse=True))), seat)
        for comb in combinations(hand, PASS_SIZE)
    ]


def legal_cards(state: GameState) -> list[GameAction]:
    seat = state.player_at_turn
    hand = state.player_at_turn_obj().cards
    first_trick = len(hand) == HAND_SIZE
    return [
        GameAction(CardPlayed(card), seat)
        for card in allowed_cards(state.table_trick(), hand, state.trump, first_trick)
    ]


def legal_question(state: GameState) -> list[GameAction]:
    player = state.player_at_turn_obj()
    seat = player.seat

    own = [
        GameAction(AnnounceTrump(suit), seat)
        for suit in pair_suits(player.cards)
        if suit not in state.trump_called
    ]
    yours = [GameAction(Question(Yours()), seat)]
    ours = [GameAction(Question(YourHalf(suit)), seat) for suit in HALF_QUESTION_ORDER]

    if player.trump == TrumpPossibility.OWN:
        return own + yours + ours
    if player.trump == TrumpPossibility.YOURS:
        return yours + ours
    return ours


def legal_answer(state: GameState, events: Sequence[GameEvent]) -> list[GameAction]:
    """Answers to the question asked in the last event.

    Asking for answers when the last action was not a question means the
    engine reached an answering phase illegally; that is fatal.
    """
    if not events or not isinstance(events[-1].last_action.action_type, Question):
        raise RuntimeError("trying to find answers without a question asked")
    question = events[-1].last_action.action_type.question
    seat = state.player_at_turn
    hand = state.player_at_turn_obj().cards

    if isinstance(question, Yours):
        actions = [
            GameAction(Answer(YesPair(suit)), seat)
            for suit in pair_suits(hand)
            if suit not in state.trump_called
        ]
        if not actions:
            actions.append(GameAction(Answer(NoPair()), seat))
        return actions

    if question.suit in half_suits(hand):
        return [GameAction(Answer(YesHalf(question.suit)), seat)]
    return [GameAction(Answer(NoHalf(question.suit)), seat)]


def legal_undo_votes(
    state: GameState,
    last_state: Optional[GameState],
) -> list[GameAction]:
    """Accept / decline for the two seats that decide on a pending undo."""
    if last_state is None:
        raise RuntimeError("pending undo without a retained state")
    voter = last_state.player_at_turn.next()
    actions: list[GameAction] = []
    for seat in (voter, voter.partner()):
        if seat in state.players_accept_undo:
            continue
        actions.append(GameAction(UndoAccept(), seat))
        actions.append(GameAction(UndoDecline(), seat))
    return actions
