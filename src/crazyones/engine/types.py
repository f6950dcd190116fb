from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

Suit = Literal["hearts", "diamonds", "clubs", "spades"]
Rank = Literal["A", "2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K"]
Participant = Literal["player", "ai"]
GameStatus = Literal["menu", "playing", "over"]

SUITS: tuple[Suit, ...] = ("hearts", "diamonds", "clubs", "spades")
RANKS: tuple[Rank, ...] = ("A", "2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K")

WILD_RANK: Rank = "A"


class EngineInvariantError(RuntimeError):
    """Raised when the engine detects a state it should never be able to reach."""


@dataclass(frozen=True)
class Card:
    id: str
    suit: Suit
    rank: Rank
    value: int

    @property
    def is_wild(self) -> bool:
        return self.rank == WILD_RANK

    def __str__(self) -> str:
        return f"{self.rank} of {self.suit}"


def other(who: Participant) -> Participant:
    return "ai" if who == "player" else "player"
