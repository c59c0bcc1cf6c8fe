"""Trick-taking rules for 4-player Marjapussi.

  - Whoever can take the trick must do so: if any card in hand would
    become the new highest card of the trick, one of those has to be
    played (a higher card of the led suit, or a trump).
  - Otherwise the led suit must be followed if possible.
  - Otherwise any card may be played.

The very first trick of the game has two extra rules:

  - The opening lead must be an Ace if the leader holds one, else a
    Green card if the leader holds one.
  - A player holding exactly one Ace of the led suit must play it.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from marjapussi.cards import Card, Suit, Value, make_deck


# ---------------------------------------------------------------------------
#  Comparing cards
# ---------------------------------------------------------------------------


def is_higher_card(higher: Card, lower: Card, trump: Optional[Suit]) -> bool:
    """Does *higher* beat *lower*?

    A trump beats every non-trump; otherwise only a card of the same
    suit with a strictly greater value wins.
    """
    if trump is not None and higher.suit == trump and lower.suit != trump:
        return True
    return higher.suit == lower.suit and higher.value > lower.value


def higher_cards(
    card: Card,
    trump: Optional[Suit],
    pool: Optional[Sequence[Card]] = None,
) -> List[Card]:
    """Cards from *pool* (default: the whole deck) that beat *card*."""
    if pool is None:
        pool = make_deck()
    return [c for c in pool if is_higher_card(c, card, trump)]


def highest_card(trick: Sequence[Card], trump: Optional[Suit]) -> Optional[Card]:
    """Winning card of a (possibly incomplete) trick, ``None`` if empty.

    If a trump suit is set and the trick contains trump, the highest
    trump wins.  Otherwise the highest card of the led suit wins.
    """
    if not trick:
        return None
    led_suit = trick[0].suit
    if trump is not None and any(c.suit == trump for c in trick):
        counting = [c for c in trick if c.suit == trump]
    else:
        counting = [c for c in trick if c.suit == led_suit]
    return max(counting, key=lambda c: c.value)


def trick_winner_offset(trick: Sequence[Card], trump: Optional[Suit]) -> int:
    """Position (in play order) of the winning card of a non-empty trick."""
    best = highest_card(trick, trump)
    if best is None:
        raise RuntimeError("cannot resolve an empty trick")
    return list(trick).index(best)


# ---------------------------------------------------------------------------
#  Legal cards
# ---------------------------------------------------------------------------


def allowed_first_lead(hand: Sequence[Card]) -> List[Card]:
    """Legal cards for the opening lead of the game."""
    aces = [c for c in hand if c.value == Value.ACE]
    if aces:
        return aces
    greens = [c for c in hand if c.suit == Suit.GREEN]
    if greens:
        return greens
    return list(hand)


def allowed_cards(
    trick: Sequence[Card],
    hand: Sequence[Card],
    trump: Optional[Suit],
    first_trick: bool,
) -> List[Card]:
    """Return the cards of *hand* that may be played onto *trick*.

    Parameters
    ----------
    trick : cards already on the table this trick, in play order (0-3)
    hand : cards of the player to move; the result keeps this order
    trump : current trump suit, or None
    first_trick : whether this is the first trick of the game
    """
    current_high = highest_card(trick, trump)
    if current_high is None:
        if first_trick:
            return allowed_first_lead(hand)
        return list(hand)

    led_suit = trick[0].suit

    if first_trick:
        led_aces = [c for c in hand if c.suit == led_suit and c.value == Value.ACE]
        if len(led_aces) == 1:
            return led_aces

    taking = [
        c for c in hand
        if highest_card([*trick, c], trump) == c
    ]
    if taking:
        return taking

    same_suit = [c for c in hand if c.suit == led_suit]
    if same_suit:
        return same_suit

    return list(hand)
