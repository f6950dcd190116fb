from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import pygame  # type: ignore[import-not-found]

from crazyones.paths import Paths
from crazyones.services.content import ContentService, Settings
from crazyones.services.session import GameSession
from crazyones.services.stats import StatsService

from .asset_manager import AssetManager
from .scene_base import Scene

logger = logging.getLogger(__name__)


@dataclass
class GameContext:
    screen: pygame.Surface
    clock: pygame.time.Clock
    paths: Paths
    assets: AssetManager
    content: ContentService
    settings: Settings
    seed: Optional[int] = None

    # Loaded at boot
    stats: Optional[StatsService] = None
    session: Optional[GameSession] = None

    def new_session(self) -> GameSession:
        """Replace the current session with a fresh one wired to the stats observer."""
        session = GameSession(ai_delay=self.settings.ai_think_delay)
        if self.stats is not None:
            session.add_game_over_observer(self.stats.on_game_over)
        self.session = session
        return session


class App:
    def __init__(self, ctx: GameContext, initial_scene: Scene) -> None:
        self.ctx = ctx
        self.scene: Scene = initial_scene
        self.running = True

    def run(self) -> int:
        while self.running:
            dt = self.ctx.clock.tick(60) / 1000.0
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.running = False
                    break
                self.scene.handle_event(event)

            tr = self.scene.update(dt)
            if tr is not None:
                logger.debug("Scene change -> %s", type(tr.next_scene).__name__)
                self.scene = tr.next_scene

            self.scene.render(self.ctx.screen)
            pygame.display.flip()

        return 0
