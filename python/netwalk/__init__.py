"""Netwalk: rotate pipe tiles until every terminal is wired to the server."""

from netwalk.engine.gameplay import (
    GamePlay,
    RotationEvent,
    evaluate,
    hint,
    is_solved,
    new_game,
    rotate,
)

__all__ = [
    "GamePlay",
    "RotationEvent",
    "evaluate",
    "hint",
    "is_solved",
    "new_game",
    "rotate",
]
