"""JSON-compatible dicts for actions, events and the info projections.

Cards are written as their short labels (``"r-A"``), suits by lower-case
name (``"red"``), seats by index.  ``action_from_json`` is the inverse of
``action_json`` so a transport layer can accept actions from clients.
"""

from __future__ import annotations

import json
from typing import Any, Optional

from marjapussi.cards import Card, Suit, parse_card
from marjapussi.events import (
    ActionType,
    AnnounceTrump,
    Answer,
    CardPlayed,
    GameAction,
    GameCallback,
    GameEvent,
    GameEventPlayer,
    HiddenEvent,
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
from marjapussi.info import GameInfoDatabase, GameInfoPlayer
from marjapussi.seat import Seat
from marjapussi.state import FinishedTrick, GameMetaInfo, GamePhase

_SUIT_MAP: dict[str, Suit] = {s.name.lower(): s for s in Suit}

_SIMPLE_ACTIONS: dict[str, type] = {
    "start": Start,
    "stopBidding": StopBidding,
    "undoRequest": UndoRequest,
    "undoAccept": UndoAccept,
    "undoDecline": UndoDecline,
}
_SIMPLE_NAMES: dict[type, str] = {v: k for k, v in _SIMPLE_ACTIONS.items()}


# ---------------------------------------------------------------------------
#  Primitives
# ---------------------------------------------------------------------------


def card_json(c: Card) -> str:
    return c.short()


def cards_json(cards) -> list[str]:
    return [c.short() for c in cards]


def suit_json(s: Optional[Suit]) -> Optional[str]:
    return s.name.lower() if s is not None else None


def _suit_from_json(name: Any) -> Suit:
    try:
        return _SUIT_MAP[name]
    except (KeyError, TypeError):
        raise ValueError(f"invalid suit: {name!r}") from None


def phase_json(phase: GamePhase) -> dict[str, Any]:
    out: dict[str, Any] = {"kind": phase.kind.value}
    if phase.suit is not None:
        out["suit"] = suit_json(phase.suit)
    if phase.previous is not None:
        out["previous"] = phase_json(phase.previous)
    return out


def trick_json(tr: FinishedTrick) -> dict[str, Any]:
    return {
        "cards": cards_json(tr.cards),
        "winner": tr.winner.index,
        "points": tr.points,
    }


def meta_json(info: GameMetaInfo) -> dict[str, Any]:
    return {
        "name": info.name,
        "playerNames": list(info.player_names),
        "createTime": info.create_time,
        "startTime": info.start_time,
        "endTime": info.end_time,
        "playerStartCards": [cards_json(h) for h in info.player_start_cards],
    }


# ---------------------------------------------------------------------------
#  Actions
# ---------------------------------------------------------------------------


def action_type_json(act: ActionType) -> dict[str, Any]:
    if type(act) in _SIMPLE_NAMES:
        return {"type": _SIMPLE_NAMES[type(act)]}
    if isinstance(act, NewBid):
        return {"type": "newBid", "value": act.value}
    if isinstance(act, Pass):
        return {"type": "pass", "cards": cards_json(act.cards)}
    if isinstance(act, CardPlayed):
        return {"type": "cardPlayed", "card": card_json(act.card)}
    if isinstance(act, AnnounceTrump):
        return {"type": "announceTrump", "suit": suit_json(act.suit)}
    if isinstance(act, Question):
        q = act.question
        if isinstance(q, Yours):
            return {"type": "question", "question": "yours"}
        return {"type": "question", "question": "yourHalf", "suit": suit_json(q.suit)}
    if isinstance(act, Answer):
        a = act.answer
        if isinstance(a, NoPair):
            return {"type": "answer", "answer": "noPair"}
        name = {YesPair: "yesPair", YesHalf: "yesHalf", NoHalf: "noHalf"}[type(a)]
        return {"type": "answer", "answer": name, "suit": suit_json(a.suit)}
    raise RuntimeError(f"unknown action type {act!r}")


def action_json(action: GameAction) -> dict[str, Any]:
    out = action_type_json(action.action_type)
    out["player"] = action.player.index
    return out


def action_from_json(obj: dict[str, Any]) -> GameAction:
    """Parse a client action; raises ``ValueError`` on malformed input.

    The result is not checked for legality; that is up to the game.
    """
    if not isinstance(obj, dict):
        raise ValueError(f"action must be an object, got {obj!r}")
    try:
        seat = Seat(int(obj["player"]))
        kind = obj["type"]
        if kind in _SIMPLE_ACTIONS:
            act: ActionType = _SIMPLE_ACTIONS[kind]()
        elif kind == "newBid":
            act = NewBid(int(obj["value"]))
        elif kind == "pass":
            cards = sorted((parse_card(c) for c in obj["cards"]), reverse=True)
            act = Pass(tuple(cards))
        elif kind == "cardPlayed":
            act = CardPlayed(parse_card(obj["card"]))
        elif kind == "announceTrump":
            act = AnnounceTrump(_suit_from_json(obj["suit"]))
        elif kind == "question":
            if obj["question"] == "yours":
                act = Question(Yours())
            elif obj["question"] == "yourHalf":
                act = Question(YourHalf(_suit_from_json(obj["suit"])))
            else:
                raise ValueError(f"unknown question {obj['question']!r}")
        elif kind == "answer":
            answer = obj["answer"]
            if answer == "noPair":
                act = Answer(NoPair())
            elif answer == "yesPair":
                act = Answer(YesPair(_suit_from_json(obj["suit"])))
            elif answer == "yesHalf":
                act = Answer(YesHalf(_suit_from_json(obj["suit"])))
            elif answer == "noHalf":
                act = Answer(NoHalf(_suit_from_json(obj["suit"])))
            else:
                raise ValueError(f"unknown answer {answer!r}")
        else:
            raise ValueError(f"unknown action type {kind!r}")
    except (KeyError, TypeError) as e:
        raise ValueError(f"invalid action: {obj!r} ({e})") from None
    return GameAction(act, seat)


# ---------------------------------------------------------------------------
#  Events
# ---------------------------------------------------------------------------


def callback_json(cb: Optional[GameCallback]) -> Optional[dict[str, Any]]:
    if cb is None:
        return None
    return {"kind": cb.kind.value, "suit": suit_json(cb.suit)}


def event_json(ev: GameEvent) -> dict[str, Any]:
    return {
        "action": action_json(ev.last_action),
        "callback": callback_json(ev.callback),
        "nextPlayerAtTurn": ev.next_player_at_turn.index,
        "time": ev.time,
    }


def player_event_json(ev: Optional[GameEventPlayer]) -> Optional[dict[str, Any]]:
    if ev is None:
        return None
    if isinstance(ev, HiddenEvent):
        return {"hidden": True}
    return {"hidden": False, "event": event_json(ev.event)}


def _bidding_history_json(history) -> list[dict[str, Any]]:
    return [
        {**action_type_json(act), "player": seat.index}
        for act, seat in history
    ]


# ---------------------------------------------------------------------------
#  Projections
# ---------------------------------------------------------------------------


def player_info_json(view: GameInfoPlayer) -> dict[str, Any]:
    return {
        "seat": view.seat.index,
        "info": meta_json(view.meta_info),
        "playersPressedStart": view.players_pressed_start,
        "playersFromPerspective": view.players_from_perspective,
        "playerAtTurn": view.player_at_turn,
        "ownCards": cards_json(view.own_cards) if view.own_cards is not None else None,
        "cardsNumberPerspective": view.players_cards_number_perspective,
        "phase": phase_json(view.game_phase),
        "biddingHistory": _bidding_history_json(view.bidding_history),
        "currentTrick": cards_json(view.current_trick),
        "lastTrick": trick_json(view.last_trick) if view.last_trick is not None else None,
        "lastEvent": player_event_json(view.last_event),
        "legalActions": [action_json(a) for a in view.legal_actions],
    }


def database_json(record: GameInfoDatabase) -> dict[str, Any]:
    passed = None
    if record.passed_cards is not None:
        forth, back = record.passed_cards
        passed = {"forth": cards_json(forth), "back": cards_json(back)}
    return {
        "info": meta_json(record.info),
        "gameValue": record.game_value,
        "won": record.won,
        "noOnePlayed": record.no_one_played,
        "schwarzGame": record.schwarz_game,
        "playingParty": record.playing_party.index if record.playing_party is not None else None,
        "playingPlayer": record.playing_player.index if record.playing_player is not None else None,
        "playersPoints": record.players_points,
        "afterPassing": (
            [cards_json(h) for h in record.after_passing]
            if record.after_passing is not None else None
        ),
        "passedCards": passed,
        "biddingHistory": _bidding_history_json(record.bidding_history),
        "tricks": [trick_json(t) for t in record.tricks],
        "events": [event_json(e) for e in record.all_events],
    }


def dump_archive(records: list[GameInfoDatabase], indent: Optional[int] = 2) -> str:
    """Serialise finished games to a JSON document."""
    return json.dumps([database_json(r) for r in records], indent=indent)
