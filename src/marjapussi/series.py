"""A series of games played by the same four players."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Optional, Sequence

from marjapussi.events import GameAction
from marjapussi.game import Game
from marjapussi.info import GameInfoPlayer
from marjapussi.seat import Seat
from marjapussi.state import current_time_string

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SeriesSettings:
    """Scoring configuration of a series.

    Only stored for now; the series does not compute a match score.
    """

    games: int = 4
    schwarzfactor_fifths: int = 10
    shuffle_players: bool = True
    bonus_at: int = 500
    bonus_value: int = 300
    diff_plus_minus: bool = True
    diff_divisor: int = 5


@dataclass(slots=True)
class Series:
    name: str
    player_names: tuple[str, ...]
    num_of_games: int
    settings: SeriesSettings = field(default_factory=SeriesSettings)
    created: str = field(default_factory=current_time_string)
    finished: Optional[str] = None
    games: list[Game] = field(default_factory=list)
    _rng: random.Random = field(default_factory=random.Random, repr=False)

    @classmethod
    def new(
        cls,
        name: str,
        player_names: Sequence[str],
        num_of_games: int,
        settings: Optional[SeriesSettings] = None,
        seed: Optional[int] = None,
    ) -> Series:
        """Create a series with its first game already set up."""
        if num_of_games < 1:
            raise ValueError(f"a series needs at least one game, got {num_of_games}")
        series = cls(
            name=name,
            player_names=tuple(player_names),
            num_of_games=num_of_games,
            settings=settings if settings is not None else SeriesSettings(),
            _rng=random.Random(seed),
        )
        series._start_game()
        return series

    def _start_game(self) -> None:
        number = len(self.games) + 1
        self.games.append(Game.new(
            f"{self.name} #{number}",
            self.player_names,
            seed=self._rng.randrange(2**32),
        ))
        log.debug("Series %r: started game %d of %d", self.name, number, self.num_of_games)

    def active_game(self) -> Game:
        return self.games[-1]

    def complete(self) -> bool:
        return len(self.games) >= self.num_of_games and self.games[-1].ended()

    def active_game_info(self, seat: Seat) -> Optional[GameInfoPlayer]:
        """View of the running game for *seat*.

        Moves on to a fresh game once the active one has ended; returns
        None when the last game of the series is over.
        """
        if self.games[-1].ended():
            if len(self.games) >= self.num_of_games:
                if self.finished is None:
                    self.finished = current_time_string()
                    log.info("Series %r finished after %d games", self.name, len(self.games))
                return None
            self._start_game()
        return GameInfoPlayer.from_game(self.games[-1], seat)

    def active_game_apply(self, action: GameAction) -> bool:
        """Apply *action* to the active game; False if it was discarded."""
        return self.games[-1].apply_action_mutate_or_discard(action)
