from __future__ import annotations

import random
from typing import Sequence, TypeVar

from .types import RANKS, SUITS, Card, Rank

T = TypeVar("T")

DECK_SIZE = len(SUITS) * len(RANKS)


def card_value(rank: Rank) -> int:
    if rank == "A":
        return 1
    if rank in ("J", "Q", "K"):
        return 10
    return int(rank)


def shuffle(items: Sequence[T], rng: random.Random | None = None) -> list[T]:
    """Return a uniformly shuffled copy of `items`; the input is left untouched.

    `random.Random.shuffle` is an in-place Fisher-Yates pass, so every
    permutation is equally likely.
    """
    out = list(items)
    (rng or random.Random()).shuffle(out)
    return out


def create_deck(rng: random.Random | None = None) -> tuple[Card, ...]:
    cards: list[Card] = []
    index = 0
    for suit in SUITS:
        for rank in RANKS:
            cards.append(Card(id=f"{rank}-{suit}-{index}", suit=suit, rank=rank, value=card_value(rank)))
            index += 1
    return tuple(shuffle(cards, rng))
