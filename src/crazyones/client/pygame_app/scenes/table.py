from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

import pygame  # type: ignore[import-not-found]

from crazyones.engine.actions import DeclareSuit, Intent, PlayerPlay
from crazyones.engine.types import SUITS, Card, EngineInvariantError, Suit
from crazyones.services.session import GameSession

from ..app import GameContext
from ..scene_base import Scene, SceneTransition
from ..ui import CARD_SIZE, SUIT_COLORS, SUIT_LABELS, Button, draw_card, draw_text

logger = logging.getLogger(__name__)

CARD_W, CARD_H = CARD_SIZE
HAND_X = 40
AI_HAND_Y = 62


@dataclass(frozen=True)
class TableLayout:
    """Vertical rows of the table for a given window size.

    The player's hand is pinned to the bottom edge and the piles sit halfway
    between the two hands, so every allowed window height keeps the hand on screen.
    """

    width: int
    height: int
    ai_hand_y: int
    center_y: int
    message_y: int
    player_hand_y: int

    @staticmethod
    def for_size(width: int, height: int) -> "TableLayout":
        player_hand_y = height - CARD_H - 20
        message_y = player_hand_y - 30
        center_y = (AI_HAND_Y + CARD_H + message_y) // 2 - CARD_H // 2
        return TableLayout(
            width=width,
            height=height,
            ai_hand_y=AI_HAND_Y,
            center_y=center_y,
            message_y=message_y,
            player_hand_y=player_hand_y,
        )


class TableScene:
    def __init__(self, ctx: GameContext) -> None:
        self.ctx = ctx
        self._next: SceneTransition | None = None
        w, h = ctx.screen.get_size()
        self._width = w
        self._height = h
        self.layout = TableLayout.for_size(w, h)
        cy = self.layout.center_y

        self._draw_rect = pygame.Rect(w // 2 - CARD_W - 20, cy, CARD_W, CARD_H)
        self._discard_rect = pygame.Rect(w // 2 + 20, cy, CARD_W, CARD_H)

        self.btn_menu = Button(rect=pygame.Rect(w - 160, 16, 140, 40), text="Menu", on_click=self._on_menu)
        self.btn_restart = Button(rect=pygame.Rect(w - 310, 16, 140, 40), text="Restart", on_click=self._on_restart)
        self.btn_pass = Button(rect=pygame.Rect(w // 2 + 140, cy + 30, 120, 44), text="Draw", on_click=self._on_pass)

        self._suit_buttons = [
            Button(
                rect=pygame.Rect(w // 2 - 250 + i * 130, cy + 40, 110, 50),
                text=suit.capitalize(),
                on_click=self._declare(suit),
            )
            for i, suit in enumerate(SUITS)
        ]
        self.btn_again = Button(rect=pygame.Rect(w // 2 - 150, h // 2, 300, 56), text="Play again", on_click=self._on_restart)
        self.btn_over_menu = Button(rect=pygame.Rect(w // 2 - 150, h // 2 + 70, 300, 56), text="Back to menu", on_click=self._on_menu)

    @property
    def session(self) -> GameSession:
        assert self.ctx.session is not None
        return self.ctx.session

    def _go(self, scene: Scene) -> None:
        self._next = SceneTransition(scene)

    def _safely(self, action: Callable[[], object]) -> None:
        try:
            action()
        except EngineInvariantError as e:
            from .crash import CrashScene

            logger.exception("Engine invariant broken")
            self._go(CrashScene(self.ctx, str(e)))

    def _submit(self, intent: Intent) -> None:
        self._safely(lambda: self.session.dispatch(intent))

    def _declare(self, suit: Suit) -> Callable[[], None]:
        return lambda: self._submit(DeclareSuit(suit=suit))

    def _on_menu(self) -> None:
        from .main_menu import MainMenuScene

        self.session.return_to_menu()
        self._go(MainMenuScene(self.ctx))

    def _on_restart(self) -> None:
        self._safely(lambda: self.session.start_game(seed=self.ctx.seed))

    def _on_pass(self) -> None:
        intent = self.session.pass_intent()
        if intent is not None:
            self._submit(intent)

    def _hand_rects(self, count: int, y: int) -> list[pygame.Rect]:
        if count == 0:
            return []
        avail = self._width - 2 * HAND_X - CARD_W
        spacing = min(CARD_W + 8, avail // max(1, count - 1)) if count > 1 else 0
        return [pygame.Rect(HAND_X + i * spacing, y, CARD_W, CARD_H) for i in range(count)]

    def _card_at(self, pos: tuple[int, int]) -> Card | None:
        hand = self.session.state.player_hand
        rects = self._hand_rects(len(hand), self.layout.player_hand_y)
        # Later cards overlap earlier ones, so hit-test from the top of the stack.
        for card, rect in reversed(list(zip(hand, rects))):
            if rect.collidepoint(pos):
                return card
        return None

    def handle_event(self, event: pygame.event.Event) -> None:
        state = self.session.state
        if state.status == "over":
            self.btn_again.handle_event(event)
            self.btn_over_menu.handle_event(event)
            return

        if self.btn_menu.handle_event(event) or self.btn_restart.handle_event(event):
            return

        if state.awaiting_suit_choice and state.turn == "player":
            for b in self._suit_buttons:
                if b.handle_event(event):
                    return
            return

        if self.btn_pass.handle_event(event):
            return

        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self._draw_rect.collidepoint(event.pos):
                self._on_pass()
                return
            card = self._card_at(event.pos)
            if card is not None and card in self.session.playable_cards():
                self._submit(PlayerPlay(card=card))

    def update(self, dt: float) -> SceneTransition | None:
        if self._next is None:
            self._safely(lambda: self.session.update(dt))
        return self._next

    def render(self, screen: pygame.Surface) -> None:
        screen.fill((12, 70, 40))
        fonts = self.ctx.assets.fonts
        state = self.session.state

        self.btn_menu.draw(screen, fonts.ui)
        self.btn_restart.draw(screen, fonts.ui)

        label = "AI (thinking...)" if state.is_ai_thinking else "AI"
        draw_text(screen, fonts.ui, f"{label}: {len(state.ai_hand)} cards", (HAND_X, 24))
        for rect in self._hand_rects(len(state.ai_hand), self.layout.ai_hand_y):
            draw_card(screen, fonts.card, None, rect, face_up=False)

        draw_card(screen, fonts.card, None, self._draw_rect, face_up=False)
        draw_text(
            screen,
            fonts.small,
            f"Draw pile: {len(state.draw_pile)}",
            (self._draw_rect.x - 10, self._draw_rect.bottom + 6),
        )
        draw_card(screen, fonts.card, state.top_card, self._discard_rect)
        if state.declared_suit is not None:
            badge = pygame.Rect(self._discard_rect.right + 12, self._discard_rect.y, 36, 36)
            pygame.draw.ellipse(screen, (250, 250, 245), badge)
            draw_text(
                screen,
                fonts.card,
                SUIT_LABELS[state.declared_suit],
                (badge.x + 10, badge.y + 8),
                color=SUIT_COLORS[state.declared_suit],
            )

        pass_intent = self.session.pass_intent()
        self.btn_pass.enabled = pass_intent is not None
        self.btn_pass.text = "Skip" if pass_intent is not None and not state.draw_pile else "Draw"
        self.btn_pass.draw(screen, fonts.ui)

        playable = set(c.id for c in self.session.playable_cards())
        your_turn = state.turn == "player" and state.status == "playing"
        for card, rect in zip(state.player_hand, self._hand_rects(len(state.player_hand), self.layout.player_hand_y)):
            draw_card(
                screen,
                fonts.card,
                card,
                rect,
                highlight=card.id in playable,
                dimmed=your_turn and card.id not in playable,
            )

        draw_text(screen, fonts.ui, state.message, (HAND_X, self.layout.message_y), color=(240, 220, 120))

        if state.awaiting_suit_choice and state.turn == "player" and state.status == "playing":
            draw_text(screen, fonts.ui, "Choose the suit to play next:", (self._width // 2 - 250, self.layout.center_y + 10))
            for b in self._suit_buttons:
                b.draw(screen, fonts.ui)

        if state.status == "over":
            self._draw_game_over(screen)

    def _draw_game_over(self, screen: pygame.Surface) -> None:
        overlay = pygame.Surface(screen.get_size(), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 170))
        screen.blit(overlay, (0, 0))
        fonts = self.ctx.assets.fonts

        winner = self.session.state.winner
        title = "YOU WIN!" if winner == "player" else "AI WINS"
        draw_text(screen, fonts.big, title, (self._width // 2 - 90, self._height // 2 - 100), color=(240, 240, 240))
        stats = self.ctx.stats
        if stats is not None:
            draw_text(
                screen,
                fonts.ui,
                f"Record: you {stats.stats.player_wins} - {stats.stats.ai_wins} AI",
                (self._width // 2 - 110, self._height // 2 - 45),
            )
        self.btn_again.draw(screen, fonts.ui)
        self.btn_over_menu.draw(screen, fonts.ui)
