from __future__ import annotations

import logging
import traceback

import pygame  # type: ignore[import-not-found]

from crazyones.services.content import ContentError
from crazyones.services.stats import StatsService

from ..app import GameContext
from ..scene_base import SceneTransition
from ..ui import Button, draw_text
from .main_menu import MainMenuScene

logger = logging.getLogger(__name__)


class BootScene:
    def __init__(self, ctx: GameContext) -> None:
        self.ctx = ctx
        self._did_boot = False
        self._error: str | None = None
        self._quit_button: Button | None = None

    def handle_event(self, event: pygame.event.Event) -> None:
        if self._quit_button is not None:
            self._quit_button.handle_event(event)

    def update(self, dt: float) -> SceneTransition | None:
        if self._did_boot:
            return None
        self._did_boot = True
        try:
            self.ctx.content.validate_all()
            self.ctx.paths.userdata_dir.mkdir(parents=True, exist_ok=True)
            self.ctx.stats = StatsService(
                path=self.ctx.paths.userdata_dir / self.ctx.settings.stats_file,
                schema=self.ctx.content.load_schema("stats"),
            )
            self.ctx.new_session()
            logger.info("Boot complete")
            return SceneTransition(MainMenuScene(self.ctx))
        except (ContentError, OSError) as e:
            logger.exception("Boot failed")
            tb = traceback.format_exc(limit=8)
            self._error = f"{e}\n\n{tb}"
            self._quit_button = Button(
                rect=pygame.Rect(20, self.ctx.screen.get_height() - 68, 140, 44),
                text="Quit",
                on_click=lambda: pygame.event.post(pygame.event.Event(pygame.QUIT)),
            )
            return None

    def render(self, screen: pygame.Surface) -> None:
        screen.fill((10, 10, 10))
        fonts = self.ctx.assets.fonts
        draw_text(screen, fonts.big, "Crazy Ones", (20, 20))

        if self._error is None:
            draw_text(screen, fonts.ui, "Loading settings and win counters...", (20, 80))
        else:
            draw_text(screen, fonts.ui, "BOOT ERROR", (20, 80), color=(240, 80, 80))
            y = 120
            for line in self._error.splitlines()[:22]:
                draw_text(screen, fonts.small, line[:120], (20, y), color=(230, 230, 230))
                y += 18
            if self._quit_button is not None:
                self._quit_button.draw(screen, fonts.ui)
