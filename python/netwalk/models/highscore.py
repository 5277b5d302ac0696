"""High score persistence and management."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass
class HighScoreEntry:
    score: int
    moves: int
    hints: int
    time: float
    date: str


def board_key(size: int, wrap: bool) -> str:
    """Key a score list by grid size and topology, e.g. ``"7x7-wrap"``."""
    key = f"{size}x{size}"
    return f"{key}-wrap" if wrap else key


def parse_key(key: str) -> tuple[int, bool]:
    dims, _, mode = key.partition("-")
    return int(dims.split("x", 1)[0]), mode == "wrap"


class HighScoreManager:
    """Loads, saves, and queries high scores from a JSON file."""

    def __init__(self, filepath: Path) -> None:
        self.filepath = filepath
        self._scores: dict[str, list[HighScoreEntry]] = {}
        self._load()

    # -- persistence ----------------------------------------------------------

    def _load(self) -> None:
        if self.filepath.exists():
            data = json.loads(self.filepath.read_text())
            for key, entries in data.items():
                self._scores[key] = [HighScoreEntry(**e) for e in entries]
            logger.debug("Loaded high scores for %d boards from %s", len(data), self.filepath)

    def save(self) -> None:
        self.filepath.parent.mkdir(parents=True, exist_ok=True)
        data: dict[str, list[dict]] = {
            key: [asdict(e) for e in entries] for key, entries in self._scores.items()
        }
        self.filepath.write_text(json.dumps(data, indent=2) + "\n")

    # -- queries --------------------------------------------------------------

    def add_score(self, size: int, wrap: bool, entry: HighScoreEntry) -> int:
        """Record *entry* and return its 1-based rank on that board."""
        key = board_key(size, wrap)
        entries = self._scores.setdefault(key, [])
        entries.append(entry)
        entries.sort(key=lambda e: (-e.score, e.time))
        self.save()
        return entries.index(entry) + 1

    def get_scores(self, size: int, wrap: bool) -> list[HighScoreEntry]:
        return self._scores.get(board_key(size, wrap), [])

    def get_all_boards(self) -> list[tuple[int, bool]]:
        """All (size, wrap) pairs with at least one score, smallest grid first."""
        return sorted(parse_key(k) for k in self._scores)
