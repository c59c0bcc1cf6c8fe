"""Recoverable game errors.

Both are raised *before* anything changes; the caller keeps the game it
had and may re-read the legal actions.  Broken engine invariants are not
represented here; they raise ``RuntimeError``.
"""

from __future__ import annotations


class GameError(Exception):
    pass


class IllegalAction(GameError):
    """The submitted action is not among the currently legal actions."""

    def __init__(self, action: object) -> None:
        super().__init__(f"illegal action: {action!r}")
        self.action = action


class CannotUndo(GameError):
    """Undo was requested but there is no state to return to."""

    def __init__(self) -> None:
        super().__init__("no previous state to undo to")
