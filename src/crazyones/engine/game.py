from __future__ import annotations

import logging
import random
from dataclasses import dataclass, replace
from typing import Iterable, Sequence

from .actions import (
    AiPlay,
    DeclareSuit,
    Draw,
    Intent,
    PlayerPlay,
    ReturnToMenu,
    SetAiThinking,
    Skip,
    StartGame,
)
from .deck import DECK_SIZE, create_deck
from .types import SUITS, Card, EngineInvariantError, GameStatus, Participant, Suit, other

logger = logging.getLogger(__name__)

HAND_SIZE = 8

_TURN_MESSAGES: dict[Participant, str] = {"player": "Your turn!", "ai": "AI is thinking..."}
_WIN_MESSAGES: dict[Participant, str] = {"player": "You win!", "ai": "AI wins."}


@dataclass(frozen=True)
class GameState:
    status: GameStatus = "menu"
    draw_pile: tuple[Card, ...] = ()
    player_hand: tuple[Card, ...] = ()
    ai_hand: tuple[Card, ...] = ()
    discard_pile: tuple[Card, ...] = ()
    turn: Participant = "player"
    declared_suit: Suit | None = None
    message: str = ""
    is_ai_thinking: bool = False
    awaiting_suit_choice: bool = False

    @property
    def top_card(self) -> Card | None:
        return self.discard_pile[-1] if self.discard_pile else None

    @property
    def winner(self) -> Participant | None:
        if self.status != "over":
            return None
        if not self.player_hand:
            return "player"
        if not self.ai_hand:
            return "ai"
        return None

    def hand_of(self, who: Participant) -> tuple[Card, ...]:
        return self.player_hand if who == "player" else self.ai_hand


INITIAL_STATE = GameState()


def is_valid_move(card: Card, top_card: Card | None, declared_suit: Suit | None) -> bool:
    if card.is_wild:
        return True
    if top_card is None:
        return True
    target_suit = declared_suit or top_card.suit
    return card.suit == target_suit or card.rank == top_card.rank


def legal_moves(hand: Iterable[Card], top_card: Card | None, declared_suit: Suit | None) -> list[Card]:
    return [c for c in hand if is_valid_move(c, top_card, declared_suit)]


def has_legal_play(hand: Iterable[Card], top_card: Card | None, declared_suit: Suit | None) -> bool:
    return any(is_valid_move(c, top_card, declared_suit) for c in hand)


def check_invariants(state: GameState) -> None:
    """Raise EngineInvariantError if `state` breaks card conservation or phase rules."""
    zones: Sequence[tuple[Card, ...]] = (state.draw_pile, state.player_hand, state.ai_hand, state.discard_pile)
    total = sum(len(z) for z in zones)
    if total != DECK_SIZE:
        raise EngineInvariantError(f"Expected {DECK_SIZE} cards in play, found {total}.")
    ids = {c.id for z in zones for c in z}
    if len(ids) != DECK_SIZE:
        raise EngineInvariantError("Duplicate card identities across zones.")

    hand_empty = not state.player_hand or not state.ai_hand
    if hand_empty != (state.status == "over"):
        raise EngineInvariantError(f"Status {state.status!r} does not match hand sizes.")
    if state.awaiting_suit_choice:
        top = state.top_card
        if top is None or not top.is_wild or state.declared_suit is not None:
            raise EngineInvariantError("Suit choice pending without a freshly played Ace.")


def new_game_state(rng: random.Random | None = None) -> GameState:
    deck = list(create_deck(rng))
    if len(deck) < 2 * HAND_SIZE + 1:
        raise EngineInvariantError("Deck exhausted during the initial deal.")

    player_hand = deck[:HAND_SIZE]
    ai_hand = deck[HAND_SIZE : 2 * HAND_SIZE]
    pile = deck[2 * HAND_SIZE :]

    # Wild seed cards go back under the pile until a plain card turns up.
    seed_card = pile.pop()
    returned = 0
    while seed_card.is_wild:
        pile.insert(0, seed_card)
        returned += 1
        if returned > len(pile):
            raise EngineInvariantError("No non-wild card available to seed the discard pile.")
        seed_card = pile.pop()

    state = GameState(
        status="playing",
        draw_pile=tuple(pile),
        player_hand=tuple(player_hand),
        ai_hand=tuple(ai_hand),
        discard_pile=(seed_card,),
        turn="player",
        message=_TURN_MESSAGES["player"],
    )
    logger.info("New game dealt; seed card %s", seed_card)
    return state


def _reject(state: GameState, intent: Intent, reason: str) -> GameState:
    logger.debug("Rejected %s: %s", type(intent).__name__, reason)
    return state


def _with_hand(state: GameState, who: Participant, hand: tuple[Card, ...]) -> GameState:
    if who == "player":
        return replace(state, player_hand=hand)
    return replace(state, ai_hand=hand)


def _turn_error(state: GameState, who: Participant) -> str | None:
    if state.status != "playing":
        return "Game is not in progress."
    if state.turn != who:
        return "Not your turn."
    if state.awaiting_suit_choice:
        return "A suit must be declared first."
    return None


def _play(state: GameState, intent: PlayerPlay | AiPlay, who: Participant) -> GameState:
    err = _turn_error(state, who)
    if err:
        return _reject(state, intent, err)

    hand = state.hand_of(who)
    idx = next((i for i, c in enumerate(hand) if c.id == intent.card.id), None)
    if idx is None:
        return _reject(state, intent, "Card is not in hand.")
    card = hand[idx]
    if not is_valid_move(card, state.top_card, state.declared_suit):
        return _reject(state, intent, "Card does not match the table.")

    new_hand = hand[:idx] + hand[idx + 1 :]
    nxt = replace(
        _with_hand(state, who, new_hand),
        discard_pile=state.discard_pile + (card,),
        declared_suit=None,
    )

    if not new_hand:
        logger.info("Game over: %s emptied their hand with %s", who, card)
        return replace(
            nxt,
            status="over",
            awaiting_suit_choice=False,
            is_ai_thinking=False,
            message=_WIN_MESSAGES[who],
        )
    if card.is_wild:
        msg = "Choose a suit." if who == "player" else "AI is choosing a suit..."
        return replace(nxt, awaiting_suit_choice=True, message=msg)
    return replace(nxt, turn=other(who), awaiting_suit_choice=False, message=_TURN_MESSAGES[other(who)])


def _declare_suit(state: GameState, intent: DeclareSuit) -> GameState:
    if state.status != "playing":
        return _reject(state, intent, "Game is not in progress.")
    if not state.awaiting_suit_choice:
        return _reject(state, intent, "No suit choice pending.")
    if intent.suit not in SUITS:
        return _reject(state, intent, f"Unknown suit {intent.suit!r}.")
    nxt_turn = other(state.turn)
    return replace(
        state,
        declared_suit=intent.suit,
        awaiting_suit_choice=False,
        turn=nxt_turn,
        message=f"Suit declared: {intent.suit}. {_TURN_MESSAGES[nxt_turn]}",
    )


def _draw(state: GameState, intent: Draw) -> GameState:
    err = _turn_error(state, intent.who)
    if err:
        return _reject(state, intent, err)
    if has_legal_play(state.hand_of(intent.who), state.top_card, state.declared_suit):
        return _reject(state, intent, "A legal play is available.")
    if not state.draw_pile:
        return _reject(state, intent, "Draw pile is empty; skip instead.")

    drawn = state.draw_pile[-1]
    nxt = _with_hand(state, intent.who, state.hand_of(intent.who) + (drawn,))
    nxt_turn = other(intent.who)
    prefix = "You drew a card." if intent.who == "player" else "AI drew a card."
    return replace(
        nxt,
        draw_pile=state.draw_pile[:-1],
        turn=nxt_turn,
        message=f"{prefix} {_TURN_MESSAGES[nxt_turn]}",
    )


def _skip(state: GameState, intent: Skip) -> GameState:
    err = _turn_error(state, intent.who)
    if err:
        return _reject(state, intent, err)
    if state.draw_pile:
        return _reject(state, intent, "Draw pile is not empty.")
    if has_legal_play(state.hand_of(intent.who), state.top_card, state.declared_suit):
        return _reject(state, intent, "A legal play is available.")
    return replace(state, turn=other(intent.who), message="Draw pile is empty, turn skipped!")


def step(state: GameState, intent: Intent, rng: random.Random | None = None) -> GameState:
    """Apply a single intent and return the next snapshot.

    Illegal intents are no-ops: the very same `state` object comes back.
    `rng` is only consulted by StartGame; without it the intent's seed is used.
    """
    if state.status == "over" and not isinstance(intent, (StartGame, ReturnToMenu)):
        return _reject(state, intent, "Game already ended.")

    if isinstance(intent, StartGame):
        nxt = new_game_state(rng or random.Random(intent.seed))
    elif isinstance(intent, PlayerPlay):
        nxt = _play(state, intent, "player")
    elif isinstance(intent, AiPlay):
        nxt = _play(state, intent, "ai")
    elif isinstance(intent, DeclareSuit):
        nxt = _declare_suit(state, intent)
    elif isinstance(intent, Draw):
        nxt = _draw(state, intent)
    elif isinstance(intent, Skip):
        nxt = _skip(state, intent)
    elif isinstance(intent, SetAiThinking):
        nxt = replace(state, is_ai_thinking=intent.value)
    elif isinstance(intent, ReturnToMenu):
        return INITIAL_STATE
    else:
        raise EngineInvariantError(f"Unknown intent: {intent!r}")

    if nxt is not state and nxt.status != "menu":
        check_invariants(nxt)
    return nxt
