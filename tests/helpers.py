from __future__ import annotations

import random
from typing import Iterable

from crazyones.engine.deck import create_deck
from crazyones.engine.game import GameState
from crazyones.engine.types import Card, Participant, Suit

# Card ids depend only on (suit, rank), so any shuffle gives the same lookup.
_BY_KEY: dict[tuple[str, str], Card] = {(c.rank, c.suit): c for c in create_deck(random.Random(0))}


def card(rank: str, suit: str) -> Card:
    return _BY_KEY[(rank, suit)]


def make_state(
    player: Iterable[Card],
    ai: Iterable[Card],
    discard: Iterable[Card],
    *,
    draw: Iterable[Card] | None = None,
    turn: Participant = "player",
    declared_suit: Suit | None = None,
) -> GameState:
    """Build a playing snapshot holding all 52 cards.

    Cards not placed explicitly go to the draw pile, or under the discard pile
    when `draw` is given.
    """
    player_t, ai_t, discard_t = tuple(player), tuple(ai), tuple(discard)
    draw_t = tuple(draw) if draw is not None else None
    placed = {c.id for c in player_t + ai_t + discard_t + (draw_t or ())}
    rest = tuple(sorted((c for c in _BY_KEY.values() if c.id not in placed), key=lambda c: c.id))
    if draw_t is None:
        draw_t = rest
    else:
        discard_t = rest + discard_t
    return GameState(
        status="playing",
        draw_pile=draw_t,
        player_hand=player_t,
        ai_hand=ai_t,
        discard_pile=discard_t,
        turn=turn,
        declared_suit=declared_suit,
    )


def all_card_ids(state: GameState) -> list[str]:
    return [c.id for z in (state.draw_pile, state.player_hand, state.ai_hand, state.discard_pile) for c in z]
