from __future__ import annotations

import sys
from pathlib import Path

import pytest


# Allow `import marjapussi` when running tests without installing the package.
SRC = Path(__file__).resolve().parents[1] / "src"
sys.path.insert(0, str(SRC))

from marjapussi.cards import Card, make_deck, parse_cards  # noqa: E402
from marjapussi.events import GameAction, Start  # noqa: E402
from marjapussi.game import Game  # noqa: E402
from marjapussi.seat import Seat  # noqa: E402

NAMES = ["S1", "S2", "S3", "S4"]


def deal_with(fixed: dict[int, list[str]]) -> list[list[Card]]:
    """Four hands: the given seats get their listed cards (plus filler),
    the rest is dealt from the remaining deck in deck order."""
    taken = {c for codes in fixed.values() for c in parse_cards(codes)}
    rest = [c for c in make_deck() if c not in taken]
    hands = []
    for i in range(4):
        hand = parse_cards(fixed.get(i, []))
        need = 9 - len(hand)
        hand += rest[:need]
        rest = rest[need:]
        hands.append(hand)
    return hands


def started_game(hands=None, seed: int = 0) -> Game:
    game = Game.new("Testgame", NAMES, hands=hands, seed=seed)
    for i in range(4):
        game = game.apply_action(GameAction(Start(), Seat(i)))
    return game


@pytest.fixture
def make_hands():
    return deal_with


@pytest.fixture
def make_started_game():
    return started_game
