from __future__ import annotations

from dataclasses import fields

from .actions import Intent
from .game import GameState
from .types import Card


def card_to_dict(c: Card | None) -> dict[str, object] | None:
    if c is None:
        return None
    return {"id": c.id, "suit": c.suit, "rank": c.rank, "value": c.value}


def _cards(cards: tuple[Card, ...]) -> list[dict[str, object] | None]:
    return [card_to_dict(c) for c in cards]


def intent_to_dict(intent: Intent) -> dict[str, object]:
    out: dict[str, object] = {"type": type(intent).__name__}
    for f in fields(intent):
        v = getattr(intent, f.name)
        out[f.name] = card_to_dict(v) if isinstance(v, Card) else v
    return out


def snapshot(state: GameState) -> dict[str, object]:
    """Return a JSON-serializable canonical snapshot of the game state."""
    return {
        "status": state.status,
        "turn": state.turn,
        "declared_suit": state.declared_suit,
        "awaiting_suit_choice": state.awaiting_suit_choice,
        "is_ai_thinking": state.is_ai_thinking,
        "message": state.message,
        "draw_pile": _cards(state.draw_pile),
        "player_hand": _cards(state.player_hand),
        "ai_hand": _cards(state.ai_hand),
        "discard_pile": _cards(state.discard_pile),
    }
