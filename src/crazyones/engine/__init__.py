"""Headless rules engine for Crazy Ones.

IMPORTANT: This package must never import pygame.
"""

from .actions import AiPlay, DeclareSuit, Draw, Intent, PlayerPlay, ReturnToMenu, SetAiThinking, Skip, StartGame
from .ai import ai_take_turn, choose_move, choose_suit, plan_ai_turn
from .deck import create_deck, shuffle
from .game import INITIAL_STATE, GameState, has_legal_play, is_valid_move, legal_moves, new_game_state, step
from .serialize import snapshot
from .types import SUITS, RANKS, Card, EngineInvariantError, Participant, Suit

__all__ = [
    "AiPlay",
    "Card",
    "DeclareSuit",
    "Draw",
    "EngineInvariantError",
    "GameState",
    "INITIAL_STATE",
    "Intent",
    "Participant",
    "PlayerPlay",
    "RANKS",
    "ReturnToMenu",
    "SUITS",
    "SetAiThinking",
    "Skip",
    "StartGame",
    "Suit",
    "ai_take_turn",
    "choose_move",
    "choose_suit",
    "create_deck",
    "has_legal_play",
    "is_valid_move",
    "legal_moves",
    "new_game_state",
    "plan_ai_turn",
    "shuffle",
    "snapshot",
    "step",
]
