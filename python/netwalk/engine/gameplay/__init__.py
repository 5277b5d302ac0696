from netwalk.engine.gameplay.actions import (
    RotationEvent,
    evaluate,
    hint,
    is_solved,
    new_game,
    rotate,
)
from netwalk.engine.gameplay.game import GamePlay

__all__ = [
    "GamePlay",
    "RotationEvent",
    "evaluate",
    "hint",
    "is_solved",
    "new_game",
    "rotate",
]
