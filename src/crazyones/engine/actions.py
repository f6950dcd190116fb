from __future__ import annotations

from dataclasses import dataclass

from .types import Card, Participant, Suit


@dataclass(frozen=True)
class StartGame:
    seed: int | None = None


@dataclass(frozen=True)
class PlayerPlay:
    card: Card


@dataclass(frozen=True)
class AiPlay:
    card: Card


@dataclass(frozen=True)
class Draw:
    who: Participant


@dataclass(frozen=True)
class DeclareSuit:
    suit: Suit


@dataclass(frozen=True)
class ReturnToMenu:
    pass


@dataclass(frozen=True)
class SetAiThinking:
    value: bool


@dataclass(frozen=True)
class Skip:
    who: Participant


Intent = StartGame | PlayerPlay | AiPlay | Draw | DeclareSuit | ReturnToMenu | SetAiThinking | Skip
