"""Players: per-seat hand and flags, and dealing."""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from marjapussi.cards import Card, make_deck
from marjapussi.constants import HAND_SIZE, NUM_CARDS, NUM_PLAYERS
from marjapussi.seat import Seat


class TrumpPossibility(str, Enum):
    """How a player leading a trick may look for trump.

    ``OWN``   may announce an own pair, ask the partner, or ask for halves.
    ``YOURS`` may ask the partner for a pair, or ask for halves.
    ``OURS``  may only ask for halves.
    """

    OWN = "own"
    YOURS = "yours"
    OURS = "ours"


@dataclass(slots=True)
class Player:
    name: str
    seat: Seat
    cards: list[Card]
    last_played: Optional[Card] = None
    bidding: bool = True
    trump: TrumpPossibility = TrumpPossibility.OWN

    def play_card(self, card: Card) -> None:
        self.cards.remove(card)
        self.last_played = card

    def undo_play_card(self) -> None:
        """Take the last played card back into the hand (at most once)."""
        if self.last_played is not None:
            self.cards.append(self.last_played)
            self.last_played = None

    def clone(self) -> Player:
        return Player(
            name=self.name,
            seat=self.seat,
            cards=list(self.cards),
            last_played=self.last_played,
            bidding=self.bidding,
            trump=self.trump,
        )

    def __repr__(self) -> str:
        return f"Player({self.name!r}, {self.seat}, cards={len(self.cards)})"


# ---------------------------------------------------------------------------
#  Dealing
# ---------------------------------------------------------------------------


def deal_hands(rng: random.Random) -> list[list[Card]]:
    """Shuffle a full deck and deal 9 cards to each seat."""
    deck = make_deck()
    rng.shuffle(deck)
    return [deck[i * HAND_SIZE:(i + 1) * HAND_SIZE] for i in range(NUM_PLAYERS)]


def validate_hands(hands: Sequence[Sequence[Card]]) -> None:
    """Raise ``ValueError`` unless *hands* are 4 × 9 cards covering the deck."""
    if len(hands) != NUM_PLAYERS:
        raise ValueError(f"need {NUM_PLAYERS} hands, got {len(hands)}")
    for i, hand in enumerate(hands):
        if len(hand) != HAND_SIZE:
            raise ValueError(f"hand {i} has {len(hand)} cards, expected {HAND_SIZE}")
    all_cards = {c for hand in hands for c in hand}
    if len(all_cards) != NUM_CARDS or all_cards != set(make_deck()):
        raise ValueError("hands must contain every card of the deck exactly once")


def create_players(
    names: Sequence[str],
    hands: Optional[Sequence[Sequence[Card]]] = None,
    seed: Optional[int] = None,
) -> list[Player]:
    """Seat the four players with the supplied or freshly dealt hands."""
    if len(names) != NUM_PLAYERS:
        raise ValueError(f"need {NUM_PLAYERS} player names, got {len(names)}")
    if hands is None:
        hands = deal_hands(random.Random(seed))
    else:
        validate_hands(hands)
    return [
        Player(name=name, seat=Seat(i), cards=list(hand))
        for i, (name, hand) in enumerate(zip(names, hands))
    ]
