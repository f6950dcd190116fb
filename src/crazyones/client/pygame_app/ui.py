from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import pygame  # type: ignore[import-not-found]

from crazyones.engine.types import Card, Suit

Color = tuple[int, int, int]

CARD_SIZE = (72, 104)

# Letters rather than glyphs: the default SysFont has no suit symbols.
SUIT_LABELS: dict[Suit, str] = {"hearts": "H", "diamonds": "D", "clubs": "C", "spades": "S"}
SUIT_COLORS: dict[Suit, Color] = {
    "hearts": (200, 30, 40),
    "diamonds": (200, 30, 40),
    "clubs": (20, 20, 20),
    "spades": (20, 20, 20),
}


def draw_text(
    screen: pygame.Surface,
    font: pygame.font.Font,
    text: str,
    pos: tuple[int, int],
    color: Color = (240, 240, 240),
) -> None:
    img = font.render(text, True, color)
    screen.blit(img, pos)


def draw_card(
    screen: pygame.Surface,
    font: pygame.font.Font,
    card: Card | None,
    rect: pygame.Rect,
    *,
    face_up: bool = True,
    highlight: bool = False,
    dimmed: bool = False,
) -> None:
    """Draw a card face, or its back when `face_up` is False or `card` is None."""
    if not face_up or card is None:
        pygame.draw.rect(screen, (40, 60, 140), rect, border_radius=8)
        inner = rect.inflate(-12, -12)
        pygame.draw.rect(screen, (70, 90, 180), inner, width=2, border_radius=6)
        pygame.draw.rect(screen, (0, 0, 0), rect, width=2, border_radius=8)
        return

    bg = (170, 170, 170) if dimmed else (250, 250, 245)
    pygame.draw.rect(screen, bg, rect, border_radius=8)
    border = (240, 200, 60) if highlight else (0, 0, 0)
    pygame.draw.rect(screen, border, rect, width=3 if highlight else 2, border_radius=8)

    color = SUIT_COLORS[card.suit]
    draw_text(screen, font, card.rank, (rect.x + 8, rect.y + 6), color=color)
    label = font.render(SUIT_LABELS[card.suit], True, color)
    screen.blit(label, label.get_rect(center=rect.center).topleft)


@dataclass
class Button:
    rect: pygame.Rect
    text: str
    on_click: Callable[[], None]
    enabled: bool = True

    def handle_event(self, event: pygame.event.Event) -> bool:
        if not self.enabled:
            return False
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                self.on_click()
                return True
        return False

    def draw(self, screen: pygame.Surface, font: pygame.font.Font) -> None:
        bg = (60, 60, 60) if self.enabled else (30, 30, 30)
        pygame.draw.rect(screen, bg, self.rect, border_radius=8)
        pygame.draw.rect(screen, (0, 0, 0), self.rect, width=2, border_radius=8)
        color = (240, 240, 240) if self.enabled else (120, 120, 120)
        img = font.render(self.text, True, color)
        r = img.get_rect(center=self.rect.center)
        screen.blit(img, r.topleft)
