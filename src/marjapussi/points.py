"""Point counting: cards, announced pairs and tricks."""

from __future__ import annotations

from typing import Iterable, Sequence

from marjapussi.cards import Card, Suit
from marjapussi.constants import NUM_PLAYERS
from marjapussi.seat import Seat

#: Bonus for announcing a suit as trump (King + Ober of that suit).
PAIR_POINTS: dict[Suit, int] = {
    Suit.RED: 100,
    Suit.BELLS: 80,
    Suit.ACORNS: 60,
    Suit.GREEN: 40,
}


def points_card(card: Card) -> int:
    return card.points()


def points_pair(suit: Suit) -> int:
    return PAIR_POINTS[suit]


def points_trick(trick: Iterable[Card]) -> int:
    return sum(c.points() for c in trick)


def points_players(tricks: Sequence[tuple[Sequence[Card], Seat]]) -> list[int]:
    """Card points per seat from ``(cards, winner)`` pairs."""
    points = [0] * NUM_PLAYERS
    for cards, winner in tricks:
        points[winner.index] += points_trick(cards)
    return points
