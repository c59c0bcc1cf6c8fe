"""Actions a player can take, and the event log entries they produce.

Every action variant is a frozen (hashable) dataclass so that a proposed
action can be checked against the cached list of legal actions with
plain equality.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from marjapussi.cards import Card, Suit
from marjapussi.seat import Seat


# ---------------------------------------------------------------------------
#  Action types
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Start:
    pass


@dataclass(frozen=True, slots=True)
class NewBid:
    value: int


@dataclass(frozen=True, slots=True)
class StopBidding:
    pass


@dataclass(frozen=True, slots=True)
class Pass:
    """Four cards handed to the partner, sorted descending."""

    cards: tuple[Card, ...]


@dataclass(frozen=True, slots=True)
class CardPlayed:
    card: Card


@dataclass(frozen=True, slots=True)
class AnnounceTrump:
    suit: Suit


# Questions ---------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Yours:
    """Asking the partner: do you hold a full pair?"""


@dataclass(frozen=True, slots=True)
class YourHalf:
    """Asking the partner: do you hold a half of *suit*?"""

    suit: Suit


QuestionType = Union[Yours, YourHalf]


@dataclass(frozen=True, slots=True)
class Question:
    question: QuestionType


# Answers -----------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class YesPair:
    suit: Suit


@dataclass(frozen=True, slots=True)
class NoPair:
    pass


@dataclass(frozen=True, slots=True)
class YesHalf:
    suit: Suit


@dataclass(frozen=True, slots=True)
class NoHalf:
    suit: Suit


AnswerType = Union[YesPair, NoPair, YesHalf, NoHalf]


@dataclass(frozen=True, slots=True)
class Answer:
    answer: AnswerType


# Undo --------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class UndoRequest:
    pass


@dataclass(frozen=True, slots=True)
class UndoAccept:
    pass


@dataclass(frozen=True, slots=True)
class UndoDecline:
    pass


ActionType = Union[
    Start,
    NewBid,
    StopBidding,
    Pass,
    CardPlayed,
    AnnounceTrump,
    Question,
    Answer,
    UndoRequest,
    UndoAccept,
    UndoDecline,
]


@dataclass(frozen=True, slots=True)
class GameAction:
    """What a player submits: an action type and the acting seat."""

    action_type: ActionType
    player: Seat


# ---------------------------------------------------------------------------
#  Callbacks and events
# ---------------------------------------------------------------------------


class CallbackKind(str, Enum):
    NEW_TRUMP = "new_trump"
    STILL_TRUMP = "still_trump"   # asked again for a half that is already trump
    NO_HALF = "no_half"
    ONLY_HALF = "only_half"       # partner has a half, asker does not


@dataclass(frozen=True, slots=True)
class GameCallback:
    """Information following an action that the action alone does not show."""

    kind: CallbackKind
    suit: Suit


@dataclass(frozen=True, slots=True)
class GameEvent:
    last_action: GameAction
    callback: Optional[GameCallback]
    next_player_at_turn: Seat
    time: str


@dataclass(frozen=True, slots=True)
class PublicEvent:
    event: GameEvent


@dataclass(frozen=True, slots=True)
class HiddenEvent:
    """Stands in for an event whose content must not be broadcast."""


GameEventPlayer = Union[PublicEvent, HiddenEvent]
