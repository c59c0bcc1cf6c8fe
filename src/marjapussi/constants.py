"""Central rule constants.

Every fixed number of the game lives here so that the legality engine,
the transition engine and the projections stay in sync.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
#  Table and deck
# ---------------------------------------------------------------------------

NUM_PLAYERS: int = 4
HAND_SIZE: int = 9
NUM_CARDS: int = 36
TRICKS_PER_GAME: int = 9

#: Cards handed over to the partner in each passing step.
PASS_SIZE: int = 4

# ---------------------------------------------------------------------------
#  Bidding ladder
# ---------------------------------------------------------------------------

#: Game value before anybody bid.  A game still at this value after the
#: bidding counts as "nobody played".
BASE_VALUE: int = 115

#: Distance between two rungs of the ladder.
BID_STEP: int = 5

#: Highest value anybody may bid.
MAX_VALUE: int = 420

# ---------------------------------------------------------------------------
#  Undo
# ---------------------------------------------------------------------------

#: Distinct seats that have to accept before a state is rolled back.
UNDO_VOTES_NEEDED: int = 2
