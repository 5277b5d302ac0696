from netwalk.models.grid import SUPPORTED_SIZES, Coord, Grid
from netwalk.models.highscore import HighScoreEntry, HighScoreManager
from netwalk.models.puzzle import Puzzle
from netwalk.models.tile import Direction, Tile, TileKind

__all__ = [
    "SUPPORTED_SIZES",
    "Coord",
    "Direction",
    "Grid",
    "HighScoreEntry",
    "HighScoreManager",
    "Puzzle",
    "Tile",
    "TileKind",
]
