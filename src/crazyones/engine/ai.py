from __future__ import annotations

import logging
import random
from typing import Sequence

from .actions import AiPlay, DeclareSuit, Draw, Intent, Skip
from .game import GameState, is_valid_move, step
from .types import SUITS, Card, Suit

logger = logging.getLogger(__name__)


def choose_move(
    hand: Sequence[Card],
    top_card: Card | None,
    declared_suit: Suit | None,
    rng: random.Random | None = None,
) -> Card | None:
    """Pick the computer's card, or None when it has to draw or pass.

    Plain matches are preferred over wild cards: a random matching non-Ace
    first, then the first Ace held.
    """
    rng = rng or random.Random()
    normal = [c for c in hand if not c.is_wild and is_valid_move(c, top_card, declared_suit)]
    if normal:
        return rng.choice(normal)
    for c in hand:
        if c.is_wild:
            return c
    return None


def choose_suit(rng: random.Random | None = None) -> Suit:
    return (rng or random.Random()).choice(SUITS)


def plan_ai_turn(state: GameState, rng: random.Random | None = None) -> list[Intent]:
    """Intents making up the computer's whole move from `state`.

    An Ace is followed straight away by its suit declaration, through the
    same DeclareSuit transition the human's suit picker uses.
    """
    rng = rng or random.Random()
    move = choose_move(state.ai_hand, state.top_card, state.declared_suit, rng)
    if move is not None:
        plan: list[Intent] = [AiPlay(card=move)]
        if move.is_wild and len(state.ai_hand) > 1:
            plan.append(DeclareSuit(suit=choose_suit(rng)))
        return plan
    if state.draw_pile:
        return [Draw(who="ai")]
    return [Skip(who="ai")]


def ai_take_turn(state: GameState, rng: random.Random | None = None) -> GameState:
    """Advance the game through the computer's turn and return the new snapshot."""
    if state.status != "playing" or state.turn != "ai":
        return state
    for intent in plan_ai_turn(state, rng):
        logger.debug("AI intent: %s", intent)
        state = step(state, intent)
    return state
