"""State transitions: applying one legal action to a game state.

``apply_action`` assumes the action was already checked against the
legal actions of the state.  It never mutates its inputs; it returns
fresh values for everything that changed.

Undo snapshots
--------------
Bids, stops and card plays retain the state *before* the action as the
undo snapshot.  An undo request and a not-yet-decisive accept carry the
existing snapshot forward.  Every other action drops it, so undo is
only ever one level deep.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from marjapussi.cards import Card, half_suits
from marjapussi.constants import BASE_VALUE, NUM_PLAYERS, UNDO_VOTES_NEEDED
from marjapussi.errors import CannotUndo
from marjapussi.events import (
    AnnounceTrump,
    Answer,
    CallbackKind,
    CardPlayed,
    GameAction,
    GameCallback,
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
    Yours,
)
from marjapussi.points import points_trick
from marjapussi.rules import trick_winner_offset
from marjapussi.state import (
    ANSWERING_PAIR,
    BIDDING,
    ENDED,
    PASSING_BACK,
    PASSING_FORTH,
    RAISING,
    START_TRICK,
    TRICK,
    FinishedTrick,
    GameMetaInfo,
    GameState,
    PhaseKind,
    answering_half,
    pending_undo,
)


@dataclass(frozen=True, slots=True)
class Transition:
    """Everything one action produced."""

    info: GameMetaInfo
    state: GameState
    callback: Optional[GameCallback]
    last_state: Optional[GameState]


def apply_action(
    info: GameMetaInfo,
    state: GameState,
    last_state: Optional[GameState],
    action: GameAction,
) -> Transition:
    """Apply a legal *action* and return the resulting values.

    Raises
    ------
    CannotUndo
        for an undo request without a retained snapshot.
    """
    act = action.action_type
    nxt = state.clone()
    callback: Optional[GameCallback] = None
    snapshot: Optional[GameState] = None

    if isinstance(act, Start):
        if action.player not in nxt.players_started:
            nxt.players_started.append(action.player)
        if len(nxt.players_started) == NUM_PLAYERS:
            nxt.started = True
            nxt.phase = BIDDING
            info = info.started_now()

    elif isinstance(act, NewBid):
        snapshot = state.clone()
        _new_bid(nxt, action, act.value)

    elif isinstance(act, StopBidding):
        snapshot = state.clone()
        _stop_bidding(nxt, action)

    elif isinstance(act, Pass):
        _pass_cards(nxt, action, act.cards)

    elif isinstance(act, CardPlayed):
        snapshot = state.clone()
        _play_card(nxt, act.card)
        nxt.player_at(action.player).play_card(act.card)
        if not nxt.player_at_turn_obj().cards:
            nxt.phase = ENDED
            info = info.ended_now()

    elif isinstance(act, AnnounceTrump):
        callback = GameCallback(CallbackKind.NEW_TRUMP, act.suit)
        nxt.trump_called.append(act.suit)
        nxt.trump = act.suit
        nxt.phase = TRICK

    elif isinstance(act, Question):
        if isinstance(act.question, Yours):
            nxt.phase = ANSWERING_PAIR
        else:
            nxt.phase = answering_half(act.question.suit)
        nxt.player_at_turn = nxt.player_at_turn.partner()

    elif isinstance(act, Answer):
        callback = _answer(nxt, act)

    elif isinstance(act, UndoAccept):
        snapshot = last_state
        if action.player not in nxt.players_accept_undo:
            nxt.players_accept_undo.append(action.player)
        if len(nxt.players_accept_undo) >= UNDO_VOTES_NEEDED and last_state is not None:
            nxt = last_state.clone()
            nxt.players_accept_undo = []
            snapshot = None

    elif isinstance(act, UndoDecline):
        if nxt.phase.kind == PhaseKind.PENDING_UNDO:
            nxt.phase = nxt.phase.previous
            nxt.players_accept_undo = []

    elif isinstance(act, UndoRequest):
        if last_state is None:
            raise CannotUndo()
        snapshot = last_state
        nxt.phase = pending_undo(nxt.phase)

    else:
        raise RuntimeError(f"unknown action type {act!r}")

    return Transition(info=info, state=nxt, callback=callback, last_state=snapshot)


# ---------------------------------------------------------------------------
#  Bidding
# ---------------------------------------------------------------------------


def _new_bid(nxt: GameState, action: GameAction, value: int) -> None:
    nxt.bidding_history.append((action.action_type, action.player))
    nxt.value = value
    if nxt.phase == RAISING:
        # raising the value after passing ends the raise immediately
        nxt.phase = TRICK
        return

    following = nxt.player_at_turn.next()
    while not nxt.player_at(following).bidding:
        following = following.next()

    if following == nxt.player_at_turn:
        # nobody left to bid against
        nxt.phase = PASSING_FORTH
        nxt.player_at_turn = nxt.player_at_turn.partner()
    else:
        nxt.player_at_turn = following


def _stop_bidding(nxt: GameState, action: GameAction) -> None:
    nxt.bidding_history.append((action.action_type, action.player))
    nxt.player_at_turn_obj().bidding = False
    nxt.bidding_players -= 1

    following = nxt.player_at_turn.next()
    if nxt.bidding_players >= 1:
        while not nxt.player_at(following).bidding:
            following = following.next()
    nxt.player_at_turn = following

    if nxt.bidding_players == 1 and nxt.value > BASE_VALUE:
        nxt.phase = PASSING_FORTH
        winner = next(p for p in nxt.players if p.bidding)
        nxt.player_at_turn = winner.seat.partner()
    elif nxt.bidding_players == 0:
        # nobody took the game
        nxt.phase = TRICK


# ---------------------------------------------------------------------------
#  Passing
# ---------------------------------------------------------------------------


def _pass_cards(nxt: GameState, action: GameAction, cards: tuple[Card, ...]) -> None:
    giver = nxt.player_at(action.player)
    receiver = nxt.player_at(action.player.partner())
    giver.cards = [c for c in giver.cards if c not in cards]
    receiver.cards.extend(cards)

    if nxt.phase == PASSING_BACK:
        nxt.phase = RAISING
    else:
        nxt.phase = PASSING_BACK
        nxt.player_at_turn = action.player.partner()


# ---------------------------------------------------------------------------
#  Trick play
# ---------------------------------------------------------------------------


def _play_card(nxt: GameState, card: Card) -> None:
    """Put *card* on the table and resolve the trick once it holds 4 cards.

    The table is cleared lazily: a closed trick stays visible until the
    next lead.
    """
    if len(nxt.current_trick) >= NUM_PLAYERS:
        nxt.current_trick = [card]
    else:
        nxt.current_trick.append(card)
    nxt.phase = TRICK
    nxt.player_at_turn = nxt.player_at_turn.next()

    if len(nxt.current_trick) < NUM_PLAYERS:
        return

    # the seat after the closing card is the leader; walk to the winner
    for _ in range(trick_winner_offset(nxt.current_trick, nxt.trump)):
        nxt.player_at_turn = nxt.player_at_turn.next()
    nxt.phase = START_TRICK
    cards = tuple(nxt.current_trick)
    nxt.all_tricks.append(FinishedTrick(
        cards=cards,
        winner=nxt.player_at_turn,
        points=points_trick(cards),
    ))


# ---------------------------------------------------------------------------
#  Answers
# ---------------------------------------------------------------------------


def _answer(nxt: GameState, act: Answer) -> Optional[GameCallback]:
    """Resolve an answer; the asker (the answerer's partner) moves next."""
    answer = act.answer
    asker = nxt.player_at_turn.partner()
    callback: Optional[GameCallback] = None

    if isinstance(answer, YesPair):
        callback = GameCallback(CallbackKind.NEW_TRUMP, answer.suit)
        nxt.trump_called.append(answer.suit)
        nxt.trump = answer.suit
    elif isinstance(answer, NoHalf):
        callback = GameCallback(CallbackKind.NO_HALF, answer.suit)
    elif isinstance(answer, YesHalf):
        # the pair is complete only if the asker holds the other half
        if answer.suit in half_suits(nxt.player_at(asker).cards):
            if answer.suit in nxt.trump_called:
                callback = GameCallback(CallbackKind.STILL_TRUMP, answer.suit)
            else:
                callback = GameCallback(CallbackKind.NEW_TRUMP, answer.suit)
                nxt.trump_called.append(answer.suit)
            nxt.trump = answer.suit
        else:
            callback = GameCallback(CallbackKind.ONLY_HALF, answer.suit)
    elif not isinstance(answer, NoPair):
        raise RuntimeError(f"unknown answer {answer!r}")

    nxt.phase = TRICK
    nxt.player_at_turn = asker
    return callback
