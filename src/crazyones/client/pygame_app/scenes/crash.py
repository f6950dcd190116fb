from __future__ import annotations

import pygame  # type: ignore[import-not-found]

from crazyones.engine.types import EngineInvariantError

from ..app import GameContext
from ..scene_base import SceneTransition
from ..ui import Button, draw_text


class CrashScene:
    """Shown when the engine reports a broken invariant. Offers a full restart."""

    def __init__(self, ctx: GameContext, error: str) -> None:
        self.ctx = ctx
        self.error = error
        self._next: SceneTransition | None = None
        self._buttons = [
            Button(rect=pygame.Rect(60, 300, 260, 56), text="Start over", on_click=self._on_restart),
            Button(
                rect=pygame.Rect(60, 370, 260, 56),
                text="Quit",
                on_click=lambda: pygame.event.post(pygame.event.Event(pygame.QUIT)),
            ),
        ]

    def _on_restart(self) -> None:
        from .table import TableScene

        session = self.ctx.new_session()
        try:
            session.start_game(seed=self.ctx.seed)
        except EngineInvariantError as e:
            self.error = str(e)
            return
        self._next = SceneTransition(TableScene(self.ctx))

    def handle_event(self, event: pygame.event.Event) -> None:
        for b in self._buttons:
            if b.handle_event(event):
                return

    def update(self, dt: float) -> SceneTransition | None:
        return self._next

    def render(self, screen: pygame.Surface) -> None:
        screen.fill((20, 8, 8))
        fonts = self.ctx.assets.fonts
        draw_text(screen, fonts.big, "Something went wrong", (60, 80), color=(240, 80, 80))
        draw_text(screen, fonts.ui, "The game hit an internal error. You can start a fresh game.", (60, 150))
        draw_text(screen, fonts.small, self.error[:120], (60, 190), color=(200, 200, 200))
        for b in self._buttons:
            b.draw(screen, fonts.ui)
