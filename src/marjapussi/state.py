"""Game phases and the full state of one game."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Optional

from marjapussi.cards import Card, Suit
from marjapussi.constants import BASE_VALUE, NUM_PLAYERS
from marjapussi.events import ActionType
from marjapussi.player import Player
from marjapussi.seat import Seat


# ---------------------------------------------------------------------------
#  Phases
# ---------------------------------------------------------------------------


class PhaseKind(str, Enum):
    WAITING_FOR_START = "waiting_for_start"
    BIDDING = "bidding"
    PASSING_FORTH = "passing_forth"
    PASSING_BACK = "passing_back"
    RAISING = "raising"
    TRICK = "trick"
    START_TRICK = "start_trick"
    ANSWERING_PAIR = "answering_pair"
    ANSWERING_HALF = "answering_half"
    ENDED = "ended"
    PENDING_UNDO = "pending_undo"


@dataclass(frozen=True, slots=True)
class GamePhase:
    """A phase of the state machine.

    ``suit`` is only set for ANSWERING_HALF, ``previous`` only for
    PENDING_UNDO (the phase the undo request interrupted).
    """

    kind: PhaseKind
    suit: Optional[Suit] = None
    previous: Optional[GamePhase] = None

    def __repr__(self) -> str:
        if self.kind == PhaseKind.ANSWERING_HALF:
            return f"AnsweringHalf({self.suit.name})"
        if self.kind == PhaseKind.PENDING_UNDO:
            return f"PendingUndo({self.previous!r})"
        return self.kind.name


WAITING_FOR_START = GamePhase(PhaseKind.WAITING_FOR_START)
BIDDING = GamePhase(PhaseKind.BIDDING)
PASSING_FORTH = GamePhase(PhaseKind.PASSING_FORTH)
PASSING_BACK = GamePhase(PhaseKind.PASSING_BACK)
RAISING = GamePhase(PhaseKind.RAISING)
TRICK = GamePhase(PhaseKind.TRICK)
START_TRICK = GamePhase(PhaseKind.START_TRICK)
ANSWERING_PAIR = GamePhase(PhaseKind.ANSWERING_PAIR)
ENDED = GamePhase(PhaseKind.ENDED)


def answering_half(suit: Suit) -> GamePhase:
    return GamePhase(PhaseKind.ANSWERING_HALF, suit=suit)


def pending_undo(previous: GamePhase) -> GamePhase:
    return GamePhase(PhaseKind.PENDING_UNDO, previous=previous)


# ---------------------------------------------------------------------------
#  Meta information
# ---------------------------------------------------------------------------


def current_time_string() -> str:
    """Local time as 'YYYY-MM-DD HH:MM:SS'."""
    return datetime.now().strftime("%Y-%m-%d %H:%M:%S")


@dataclass(frozen=True, slots=True)
class GameMetaInfo:
    """Identity and timestamps of a game, plus the hands as dealt."""

    name: str
    player_names: tuple[str, ...]
    create_time: str
    player_start_cards: tuple[tuple[Card, ...], ...]
    start_time: Optional[str] = None
    end_time: Optional[str] = None

    def started_now(self) -> GameMetaInfo:
        return replace(self, start_time=current_time_string())

    def ended_now(self) -> GameMetaInfo:
        return replace(self, end_time=current_time_string())


# ---------------------------------------------------------------------------
#  Tricks
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class FinishedTrick:
    cards: tuple[Card, ...]   # 4 cards in play order
    winner: Seat
    points: int


# ---------------------------------------------------------------------------
#  Game state
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class GameState:
    """Everything the rules need to know about a game in progress.

    The transition engine never mutates a state it was handed; it works
    on a :meth:`clone`, so a retained undo snapshot can never be changed
    through the current state.
    """

    players: list[Player]
    phase: GamePhase = WAITING_FOR_START
    started: bool = False
    players_started: list[Seat] = field(default_factory=list)
    players_accept_undo: list[Seat] = field(default_factory=list)
    bidding_players: int = NUM_PLAYERS
    bidding_history: list[tuple[ActionType, Seat]] = field(default_factory=list)
    trump: Optional[Suit] = None
    trump_called: list[Suit] = field(default_factory=list)
    player_at_turn: Seat = Seat(0)
    value: int = BASE_VALUE
    all_tricks: list[FinishedTrick] = field(default_factory=list)
    current_trick: list[Card] = field(default_factory=list)

    def clone(self) -> GameState:
        """Independent copy: every mutable container is duplicated."""
        return GameState(
            players=[p.clone() for p in self.players],
            phase=self.phase,
            started=self.started,
            players_started=list(self.players_started),
            players_accept_undo=list(self.players_accept_undo),
            bidding_players=self.bidding_players,
            bidding_history=list(self.bidding_history),
            trump=self.trump,
            trump_called=list(self.trump_called),
            player_at_turn=self.player_at_turn,
            value=self.value,
            all_tricks=list(self.all_tricks),
            current_trick=list(self.current_trick),
        )

    # ---- Seat lookups ----

    def player_at(self, seat: Seat) -> Player:
        return self.players[seat.index]

    def player_at_turn_obj(self) -> Player:
        return self.players[self.player_at_turn.index]

    def partner_of_turn(self) -> Player:
        return self.players[self.player_at_turn.partner().index]

    # ---- Table view from one seat ----

    def players_perspective(self, seat: Seat) -> list[str]:
        """Names ordered: self, next, partner, previous."""
        order = [seat, seat.next(), seat.partner(), seat.prev()]
        return [self.player_at(s).name for s in order]

    def players_perspective_cards(self, seat: Seat) -> list[int]:
        """Hand sizes ordered: self, next, partner, previous."""
        order = [seat, seat.next(), seat.partner(), seat.prev()]
        return [len(self.player_at(s).cards) for s in order]

    def players_started_names(self) -> list[str]:
        return [p.name for p in self.players if p.seat in self.players_started]

    def table_trick(self) -> list[Card]:
        """Cards of the trick in progress; a closed trick of 4 counts as empty."""
        if len(self.current_trick) >= NUM_PLAYERS:
            return []
        return list(self.current_trick)
