"""Card definitions for Marjapussi (4-player trick-taking game).

36-card German-suited deck, ranked within each suit:
  A > 10 > K > O > U > 9 > 8 > 7 > 6

Scoring: Ace = 11, Ten = 10, King = 4, Ober = 3, Unter = 2, others = 0.
Total card points = 120.

Cards have a short text form ``"<suit>-<value>"`` using the letters
``g e s r`` (Green, Acorns, Bells, Red) and ``6 7 8 9 U O K Z A``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, List, Sequence


# ---------------------------------------------------------------------------
#  Suits
# ---------------------------------------------------------------------------


class Suit(IntEnum):
    GREEN = 0
    ACORNS = 1
    BELLS = 2
    RED = 3

    def short(self) -> str:
        return _SUIT_SHORT[self]


ALL_SUITS: tuple[Suit, ...] = tuple(Suit)


# ---------------------------------------------------------------------------
#  Values: IntEnum values encode trick strength inside a suit
# ---------------------------------------------------------------------------


class Value(IntEnum):
    SIX = 0
    SEVEN = 1
    EIGHT = 2
    NINE = 3
    UNTER = 4
    OBER = 5
    KING = 6
    TEN = 7     # stronger than K/O/U
    ACE = 8

    def short(self) -> str:
        return _VALUE_SHORT[self]


ALL_VALUES: tuple[Value, ...] = tuple(Value)


_SUIT_SHORT: dict[Suit, str] = {
    Suit.GREEN: "g", Suit.ACORNS: "e",
    Suit.BELLS: "s", Suit.RED: "r",
}

_VALUE_SHORT: dict[Value, str] = {
    Value.SIX: "6", Value.SEVEN: "7", Value.EIGHT: "8",
    Value.NINE: "9", Value.UNTER: "U", Value.OBER: "O",
    Value.KING: "K", Value.TEN: "Z", Value.ACE: "A",
}

_SUIT_BY_SHORT: dict[str, Suit] = {v: k for k, v in _SUIT_SHORT.items()}
_VALUE_BY_SHORT: dict[str, Value] = {v: k for k, v in _VALUE_SHORT.items()}

_CARD_POINTS: dict[Value, int] = {
    Value.ACE: 11,
    Value.TEN: 10,
    Value.KING: 4,
    Value.OBER: 3,
    Value.UNTER: 2,
}


# ---------------------------------------------------------------------------
#  Card
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True, order=True)
class Card:
    """A single card.

    Ordering compares suit first, then value.  Only the value order
    inside one suit means anything for play; the trick rules always
    compare suit-aware.
    """

    suit: Suit
    value: Value

    def points(self) -> int:
        """Card point value (A = 11, 10 = 10, K = 4, O = 3, U = 2)."""
        return _CARD_POINTS.get(self.value, 0)

    def short(self) -> str:
        """Short label, e.g. ``'r-A'``, ``'g-O'``."""
        return f"{_SUIT_SHORT[self.suit]}-{_VALUE_SHORT[self.value]}"

    def __str__(self) -> str:
        return self.short()

    def __repr__(self) -> str:
        return f"Card({self.short()})"


# ---------------------------------------------------------------------------
#  Deck
# ---------------------------------------------------------------------------


def make_deck() -> List[Card]:
    """Create the full 36-card deck in ``(suit, value)`` order."""
    return [Card(s, v) for s in ALL_SUITS for v in ALL_VALUES]


# ---------------------------------------------------------------------------
#  Parsing
# ---------------------------------------------------------------------------


def parse_card(text: str) -> Card:
    """Parse a short label like ``'e-A'`` into a :class:`Card`.

    Raises ``ValueError`` for anything that is not exactly
    ``<suit letter>-<value letter>``.
    """
    if len(text) != 3 or text[1] != "-":
        raise ValueError(f"wrong card format: {text!r}")
    suit = _SUIT_BY_SHORT.get(text[0])
    value = _VALUE_BY_SHORT.get(text[2])
    if suit is None or value is None:
        raise ValueError(f"wrong card format: {text!r}")
    return Card(suit, value)


def parse_cards(texts: Iterable[str]) -> List[Card]:
    return [parse_card(t) for t in texts]


def format_cards(cards: Sequence[Card]) -> str:
    return ", ".join(c.short() for c in cards)


# ---------------------------------------------------------------------------
#  Pairs and halves (King + Ober)
# ---------------------------------------------------------------------------


def half_suits(hand: Iterable[Card]) -> List[Suit]:
    """Suits of which the hand holds at least one of King / Ober."""
    held = set(hand)
    return [
        s for s in ALL_SUITS
        if Card(s, Value.KING) in held or Card(s, Value.OBER) in held
    ]


def pair_suits(hand: Iterable[Card]) -> List[Suit]:
    """Suits of which the hand holds both King and Ober."""
    held = set(hand)
    return [
        s for s in ALL_SUITS
        if Card(s, Value.KING) in held and Card(s, Value.OBER) in held
    ]
