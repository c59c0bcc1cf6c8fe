"""Read-only views of a game.

``GameInfoPlayer``   what one seat may see while the game runs.
``GameInfoDatabase`` the archival record of a finished game, including
                     the score reconstruction.

Neither view contains rules logic; both are derived from a Game.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from marjapussi.cards import Card
from marjapussi.constants import BASE_VALUE, NUM_PLAYERS, TRICKS_PER_GAME
from marjapussi.events import (
    ActionType,
    CallbackKind,
    GameAction,
    GameEvent,
    GameEventPlayer,
    HiddenEvent,
    NewBid,
    Pass,
    PublicEvent,
)
from marjapussi.game import Game
from marjapussi.points import points_pair
from marjapussi.seat import Seat
from marjapussi.state import FinishedTrick, GameMetaInfo, GamePhase, PhaseKind


# ---------------------------------------------------------------------------
#  Seat view
# ---------------------------------------------------------------------------


def player_event(event: GameEvent) -> GameEventPlayer:
    """Public form of an event: passed cards are never revealed."""
    if isinstance(event.last_action.action_type, Pass):
        return HiddenEvent()
    return PublicEvent(event)


@dataclass(frozen=True, slots=True)
class GameInfoPlayer:
    """Everything the player at *seat* is allowed to know."""

    seat: Seat
    meta_info: GameMetaInfo
    players_pressed_start: list[str]
    players_from_perspective: list[str]       # self, next, partner, prev
    player_at_turn: str
    own_cards: Optional[list[Card]]            # None before the game started
    players_cards_number_perspective: list[int]
    game_phase: GamePhase
    bidding_history: list[tuple[ActionType, Seat]]
    current_trick: list[Card]
    last_trick: Optional[FinishedTrick]
    last_event: Optional[GameEventPlayer]
    legal_actions: list[GameAction]

    @classmethod
    def from_game(cls, game: Game, seat: Seat) -> GameInfoPlayer:
        state = game.state
        last = game.last_event()
        return cls(
            seat=seat,
            meta_info=game.info,
            players_pressed_start=state.players_started_names(),
            players_from_perspective=state.players_perspective(seat),
            player_at_turn=state.player_at_turn_obj().name,
            own_cards=list(state.player_at(seat).cards) if state.started else None,
            players_cards_number_perspective=state.players_perspective_cards(seat),
            game_phase=state.phase,
            bidding_history=list(state.bidding_history),
            current_trick=list(state.current_trick),
            last_trick=state.all_tricks[-1] if state.all_tricks else None,
            last_event=player_event(last) if last is not None else None,
            legal_actions=[a for a in game.legal_actions if a.player == seat],
        )


# ---------------------------------------------------------------------------
#  Archival record
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class GameInfoDatabase:
    """Score reconstruction of a finished game, for archiving.

    ``won`` and everything about passing are None when nobody played
    (the value never left the baseline).
    """

    info: GameMetaInfo
    game_value: int
    won: Optional[bool]
    no_one_played: bool
    schwarz_game: bool
    playing_party: Optional[Seat]
    playing_player: Optional[Seat]
    players_points: list[int]
    after_passing: Optional[list[list[Card]]]
    passed_cards: Optional[tuple[tuple[Card, ...], tuple[Card, ...]]]
    bidding_history: list[tuple[ActionType, Seat]]
    tricks: list[FinishedTrick]
    all_events: list[GameEvent]

    @classmethod
    def from_game(cls, game: Game) -> GameInfoDatabase:
        """Build the record; calling this on an unfinished game is a bug."""
        state = game.state
        if state.phase.kind != PhaseKind.ENDED:
            raise RuntimeError("cannot convert an unfinished game")

        no_one_played = state.value == BASE_VALUE

        players_points = [0] * NUM_PLAYERS
        tricks_per_seat = [0] * NUM_PLAYERS
        for trick in state.all_tricks:
            players_points[trick.winner.index] += trick.points
            tricks_per_seat[trick.winner.index] += 1
        tricks_party_zero = tricks_per_seat[0] + tricks_per_seat[2]
        schwarz_game = tricks_party_zero in (0, TRICKS_PER_GAME)

        playing_player: Optional[Seat] = None
        playing_party: Optional[Seat] = None
        won: Optional[bool] = None
        after_passing: Optional[list[list[Card]]] = None
        passed_cards = None

        if not no_one_played:
            passed_forth: Optional[tuple[Card, ...]] = None
            passed_back: Optional[tuple[Card, ...]] = None
            for event in game.all_events:
                act = event.last_action.action_type
                if isinstance(act, NewBid) and act.value == state.value:
                    playing_player = event.last_action.player
                    playing_party = playing_player.party()
                if event.callback is not None and event.callback.kind == CallbackKind.NEW_TRUMP:
                    players_points[event.last_action.player.index] += points_pair(event.callback.suit)
                if isinstance(act, Pass):
                    if passed_forth is None:
                        passed_forth = act.cards
                    else:
                        passed_back = act.cards

            if playing_player is None or passed_forth is None or passed_back is None:
                raise RuntimeError("finished game without a complete bid and passing record")
            passed_cards = (passed_forth, passed_back)
            after_passing = _hands_after_passing(
                game.info.player_start_cards, playing_player, passed_forth, passed_back,
            )

            party_points = (
                players_points[playing_player.index]
                + players_points[playing_player.partner().index]
            )
            won = party_points >= state.value

        return cls(
            info=game.info,
            game_value=state.value,
            won=won,
            no_one_played=no_one_played,
            schwarz_game=schwarz_game,
            playing_party=playing_party,
            playing_player=playing_player,
            players_points=players_points,
            after_passing=after_passing,
            passed_cards=passed_cards,
            bidding_history=list(state.bidding_history),
            tricks=list(state.all_tricks),
            all_events=list(game.all_events),
        )


def _hands_after_passing(
    start_cards: tuple[tuple[Card, ...], ...],
    playing_player: Seat,
    passed_forth: tuple[Card, ...],
    passed_back: tuple[Card, ...],
) -> list[list[Card]]:
    """Hands once both passes are done (forth: partner → player, back: player → partner)."""
    hands = [list(h) for h in start_cards]
    partner = playing_player.partner().index
    player = playing_player.index
    hands[partner] = [c for c in hands[partner] if c not in passed_forth] + list(passed_back)
    hands[player] = [c for c in hands[player] + list(passed_forth) if c not in passed_back]
    return hands
