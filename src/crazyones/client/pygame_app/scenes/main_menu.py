from __future__ import annotations

import pygame  # type: ignore[import-not-found]

from crazyones.engine.types import EngineInvariantError

from ..app import GameContext
from ..scene_base import SceneTransition
from ..ui import Button, draw_text


class MainMenuScene:
    def __init__(self, ctx: GameContext) -> None:
        self.ctx = ctx
        self._next: SceneTransition | None = None
        x, y, w, h, gap = 60, 220, 320, 56, 14
        self._buttons = [
            Button(rect=pygame.Rect(x, y, w, h), text="Play vs AI", on_click=self._on_play),
            Button(
                rect=pygame.Rect(x, y + h + gap, w, h),
                text="Quit",
                on_click=lambda: pygame.event.post(pygame.event.Event(pygame.QUIT)),
            ),
        ]

    def _on_play(self) -> None:
        from .crash import CrashScene
        from .table import TableScene

        session = self.ctx.session or self.ctx.new_session()
        try:
            session.start_game(seed=self.ctx.seed)
        except EngineInvariantError as e:
            self._next = SceneTransition(CrashScene(self.ctx, str(e)))
            return
        self._next = SceneTransition(TableScene(self.ctx))

    def handle_event(self, event: pygame.event.Event) -> None:
        for b in self._buttons:
            if b.handle_event(event):
                return

    def update(self, dt: float) -> SceneTransition | None:
        return self._next

    def render(self, screen: pygame.Surface) -> None:
        screen.fill((12, 40, 24))
        fonts = self.ctx.assets.fonts
        draw_text(screen, fonts.big, "Crazy Ones", (60, 60))
        draw_text(screen, fonts.ui, "Match the suit or rank of the top card. Aces are wild.", (60, 120))
        draw_text(screen, fonts.ui, "First to empty their hand wins.", (60, 148))
        stats = self.ctx.stats
        if stats is not None:
            draw_text(
                screen,
                fonts.ui,
                f"You {stats.stats.player_wins}  -  {stats.stats.ai_wins} AI",
                (60, 180),
                color=(240, 220, 120),
            )
        for b in self._buttons:
            b.draw(screen, fonts.ui)
