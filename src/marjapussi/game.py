"""The game facade: the only entry point collaborators need.

A :class:`Game` bundles the meta information, the current state, the
cached legal actions, the one-level undo snapshot and the event log.
``apply_action`` is pure: it returns a new Game and leaves the old one
untouched, so a collaborator can keep or discard either.

Typical use::

    game = Game.new("Round 1", ["Ann", "Ben", "Cid", "Dan"])
    while not game.ended():
        action = choose(game.legal_actions)
        game = game.apply_action(action)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Sequence

from marjapussi.cards import Card
from marjapussi.errors import GameError, IllegalAction
from marjapussi.events import GameAction, GameEvent
from marjapussi.legal import legal_actions as _legal_actions
from marjapussi.player import create_players
from marjapussi.seat import Seat
from marjapussi.state import (
    GameMetaInfo,
    GameState,
    PhaseKind,
    current_time_string,
)
from marjapussi.transition import apply_action as _apply_action

log = logging.getLogger(__name__)


@dataclass(slots=True)
class Game:
    info: GameMetaInfo
    state: GameState
    legal_actions: list[GameAction] = field(default_factory=list)
    last_state: Optional[GameState] = None
    all_events: list[GameEvent] = field(default_factory=list)

    # ------------------------------------------------------------------
    #  Construction
    # ------------------------------------------------------------------

    @classmethod
    def new(
        cls,
        name: str,
        player_names: Sequence[str],
        hands: Optional[Sequence[Sequence[Card]]] = None,
        seed: Optional[int] = None,
    ) -> Game:
        """Create a game waiting for all four players to press start.

        Parameters
        ----------
        name : display name of the game
        player_names : names for seats 0..3
        hands : four pre-dealt hands of 9 cards; dealt from a shuffled
            deck when omitted
        seed : seed for the shuffle (ignored when *hands* is given)
        """
        players = create_players(player_names, hands=hands, seed=seed)
        info = GameMetaInfo(
            name=name,
            player_names=tuple(player_names),
            create_time=current_time_string(),
            player_start_cards=tuple(tuple(p.cards) for p in players),
        )
        game = cls(info=info, state=GameState(players=players))
        game.legal_actions = game.compute_legal_actions()
        return game

    # ------------------------------------------------------------------
    #  Queries
    # ------------------------------------------------------------------

    def compute_legal_actions(self) -> list[GameAction]:
        return _legal_actions(self.state, self.last_state, self.all_events)

    def current_player(self) -> Seat:
        return self.state.player_at_turn

    def ended(self) -> bool:
        return self.state.phase.kind == PhaseKind.ENDED

    def last_event(self) -> Optional[GameEvent]:
        return self.all_events[-1] if self.all_events else None

    # ------------------------------------------------------------------
    #  Commands
    # ------------------------------------------------------------------

    def apply_action(self, action: GameAction) -> Game:
        """Return the game after *action*; this game is not modified.

        Raises
        ------
        IllegalAction
            if *action* is not in :attr:`legal_actions`.
        CannotUndo
            if an undo is requested without a state to return to.
        """
        if action not in self.legal_actions:
            log.debug("Rejected %r in phase %r", action, self.state.phase)
            raise IllegalAction(action)

        result = _apply_action(self.info, self.state, self.last_state, action)

        event = GameEvent(
            last_action=action,
            callback=result.callback,
            next_player_at_turn=result.state.player_at_turn,
            time=current_time_string(),
        )
        nxt = Game(
            info=result.info,
            state=result.state,
            last_state=result.last_state,
            all_events=[*self.all_events, event],
        )
        nxt.legal_actions = nxt.compute_legal_actions()

        if nxt.state.phase != self.state.phase:
            log.debug("Game %r: %r -> %r", self.info.name, self.state.phase, nxt.state.phase)
        if nxt.ended():
            log.info(
                "Game %r ended after %d events, value %d",
                self.info.name, len(nxt.all_events), nxt.state.value,
            )
        return nxt

    def apply_action_mutate_or_discard(self, action: GameAction) -> bool:
        """Apply *action* in place; on a game error keep the game unchanged.

        Returns True if the action was applied.
        """
        try:
            nxt = self.apply_action(action)
        except GameError as exc:
            log.info("Discarded action for game %r: %s", self.info.name, exc)
            return False
        self.info = nxt.info
        self.state = nxt.state
        self.legal_actions = nxt.legal_actions
        self.last_state = nxt.last_state
        self.all_events = nxt.all_events
        return True
