from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from crazyones.engine.game import GameState
from crazyones.engine.types import Participant

from .content import ContentError, load_json, validate_json

logger = logging.getLogger(__name__)


@dataclass
class GameStats:
    player_wins: int = 0
    ai_wins: int = 0

    @staticmethod
    def from_dict(d: Mapping[str, object]) -> "GameStats":
        pw = d.get("player_wins", 0)
        aw = d.get("ai_wins", 0)
        return GameStats(
            player_wins=pw if isinstance(pw, int) else 0,
            ai_wins=aw if isinstance(aw, int) else 0,
        )

    def to_dict(self) -> dict[str, object]:
        return {"player_wins": self.player_wins, "ai_wins": self.ai_wins}


class StatsService:
    """Cumulative win counters kept in a small JSON file.

    A missing or unreadable file is not fatal: counting simply restarts from
    zero and the file is rewritten on the next recorded game.
    """

    def __init__(self, path: Path, schema: object) -> None:
        self._path = path
        self._schema = schema
        self.stats = self._load()

    def _load(self) -> GameStats:
        if not self._path.exists():
            return GameStats()
        try:
            raw = load_json(self._path)
            validate_json(raw, self._schema, context=str(self._path))
        except ContentError as e:
            logger.warning("Ignoring stats file %s: %s", self._path, e)
            return GameStats()
        assert isinstance(raw, dict)
        return GameStats.from_dict(raw)

    def save(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(self.stats.to_dict(), indent=2), encoding="utf-8")

    def record(self, winner: Participant) -> None:
        if winner == "player":
            self.stats.player_wins += 1
        else:
            self.stats.ai_wins += 1
        logger.info("Recorded %s win (player %d - ai %d)", winner, self.stats.player_wins, self.stats.ai_wins)
        try:
            self.save()
        except OSError as e:
            logger.warning("Could not save stats to %s: %s", self._path, e)

    def on_game_over(self, state: GameState) -> None:
        """Session observer hook."""
        if state.winner is not None:
            self.record(state.winner)
