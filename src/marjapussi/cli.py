from __future__ import annotations

import argparse
import logging
import random
from pathlib import Path

from marjapussi.events import GameAction, Start, UndoRequest
from marjapussi.game import Game
from marjapussi.info import GameInfoDatabase
from marjapussi.seat import ALL_SEATS
from marjapussi.serialize import dump_archive

NAMES = ("North", "East", "South", "West")


def play_random_game(seed: int) -> Game:
    """Play one game to the end with uniformly random legal actions.

    Undo requests are never chosen.
    """
    rng = random.Random(seed)
    game = Game.new(f"game-{seed}", NAMES, seed=seed)
    for seat in ALL_SEATS:
        game = game.apply_action(GameAction(Start(), seat))
    while not game.ended():
        actions = [a for a in game.legal_actions if not isinstance(a.action_type, UndoRequest)]
        game = game.apply_action(rng.choice(actions))
    return game


def summary_line(number: int, record: GameInfoDatabase) -> str:
    if record.no_one_played:
        result = "nobody played"
    else:
        result = (
            f"seat {record.playing_player.index} played {record.game_value}, "
            f"{'won' if record.won else 'lost'}"
        )
    schwarz = " (schwarz)" if record.schwarz_game else ""
    points = "/".join(str(p) for p in record.players_points)
    return f"game {number}: {result}{schwarz}, points {points}"


def main() -> int:
    parser = argparse.ArgumentParser(description="Marjapussi: simulate random games")
    parser.add_argument("--games", type=int, default=10)
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument(
        "--out",
        type=str,
        default="",
        help="Optional path for a JSON archive of the finished games.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every phase change.")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    records = []
    won = played = 0
    for i in range(args.games):
        record = GameInfoDatabase.from_game(play_random_game(args.seed + i))
        records.append(record)
        print(summary_line(i + 1, record))
        if not record.no_one_played:
            played += 1
            won += bool(record.won)

    if args.out:
        out = Path(args.out)
        out.write_text(dump_archive(records), encoding="utf-8")
        print(f"Saved {len(records)} games to {out}")
    print(f"games={args.games} played={played} won={won}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
