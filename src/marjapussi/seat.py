"""Seats around the four-player table.

Play passes 0 → 1 → 2 → 3 → 0.  Partners sit opposite each other, so
the two parties are seats {0, 2} and {1, 3}.
"""

from __future__ import annotations

from dataclasses import dataclass

from marjapussi.constants import NUM_PLAYERS


@dataclass(frozen=True, slots=True, order=True)
class Seat:
    index: int

    def __post_init__(self) -> None:
        if not 0 <= self.index < NUM_PLAYERS:
            raise ValueError(f"seat must be in 0..{NUM_PLAYERS - 1}, got {self.index}")

    def next(self) -> Seat:
        return Seat((self.index + 1) % NUM_PLAYERS)

    def prev(self) -> Seat:
        return Seat((self.index + 3) % NUM_PLAYERS)

    def partner(self) -> Seat:
        return Seat((self.index + 2) % NUM_PLAYERS)

    def party(self) -> Seat:
        """Representative seat of this seat's party (0 or 1)."""
        return Seat(self.index % 2)

    def __repr__(self) -> str:
        return f"Seat({self.index})"


ALL_SEATS: tuple[Seat, ...] = tuple(Seat(i) for i in range(NUM_PLAYERS))
