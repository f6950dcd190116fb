from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Callable

from crazyones.engine.actions import Draw, Intent, ReturnToMenu, SetAiThinking, Skip, StartGame
from crazyones.engine.ai import plan_ai_turn
from crazyones.engine.game import INITIAL_STATE, GameState, has_legal_play, legal_moves, step
from crazyones.engine.serialize import intent_to_dict, snapshot
from crazyones.engine.types import Card, GameStatus, Participant

logger = logging.getLogger(__name__)

GameOverObserver = Callable[[GameState], None]


@dataclass
class PendingAiTurn:
    game_no: int
    status: GameStatus
    turn: Participant
    remaining: float


class GameSession:
    """Holds the current snapshot and drives the computer's turn.

    The client calls `dispatch` for user intents and `update(dt)` once per
    frame. Once it is the computer's turn the session flags the snapshot as
    thinking, waits `ai_delay` seconds, then feeds the computer's intents
    through the same `step` the human's go through.
    """

    def __init__(
        self,
        ai_delay: float = 1.5,
        rng: random.Random | None = None,
        state: GameState = INITIAL_STATE,
    ) -> None:
        self.state = state
        self.ai_delay = ai_delay
        self.rng = rng or random.Random()
        self._pending: PendingAiTurn | None = None
        self._game_no = 0
        self._observers: list[GameOverObserver] = []

    def add_game_over_observer(self, fn: GameOverObserver) -> None:
        self._observers.append(fn)

    @property
    def ai_pending(self) -> bool:
        return self._pending is not None

    def dispatch(self, intent: Intent) -> GameState:
        prev = self.state
        if isinstance(intent, StartGame):
            self._game_no += 1
            rng = random.Random(intent.seed) if intent.seed is not None else self.rng
            nxt = step(prev, intent, rng=rng)
        else:
            nxt = step(prev, intent)

        self.state = nxt
        if nxt is not prev and logger.isEnabledFor(logging.DEBUG):
            logger.debug("Applied %s: %s", intent_to_dict(intent), nxt.message)
        if nxt.status == "over" and prev.status != "over":
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("Final state: %s", snapshot(nxt))
            for fn in self._observers:
                fn(nxt)
        return nxt

    def start_game(self, seed: int | None = None) -> GameState:
        return self.dispatch(StartGame(seed=seed))

    def return_to_menu(self) -> GameState:
        return self.dispatch(ReturnToMenu())

    def playable_cards(self) -> list[Card]:
        """Cards in the human's hand that may be clicked right now."""
        s = self.state
        if s.status != "playing" or s.turn != "player" or s.awaiting_suit_choice or s.is_ai_thinking:
            return []
        return legal_moves(s.player_hand, s.top_card, s.declared_suit)

    def pass_intent(self) -> Intent | None:
        """The human's Draw or Skip intent when they are stuck, else None."""
        s = self.state
        if s.status != "playing" or s.turn != "player" or s.awaiting_suit_choice or s.is_ai_thinking:
            return None
        if has_legal_play(s.player_hand, s.top_card, s.declared_suit):
            return None
        return Draw(who="player") if s.draw_pile else Skip(who="player")

    def update(self, dt: float) -> None:
        if self._pending is None:
            s = self.state
            if s.status == "playing" and s.turn == "ai" and not s.is_ai_thinking:
                self.dispatch(SetAiThinking(value=True))
                self._pending = PendingAiTurn(
                    game_no=self._game_no,
                    status=s.status,
                    turn=s.turn,
                    remaining=self.ai_delay,
                )
            return

        self._pending.remaining -= dt
        if self._pending.remaining > 0:
            return
        pending, self._pending = self._pending, None
        self._run_ai_turn(pending)

    def _run_ai_turn(self, pending: PendingAiTurn) -> None:
        s = self.state
        if pending.game_no != self._game_no or s.status != pending.status or s.turn != pending.turn:
            logger.debug("Dropping stale AI evaluation scheduled for %s/%s", pending.status, pending.turn)
            return
        for intent in plan_ai_turn(s, self.rng):
            self.dispatch(intent)
        if self.state.status == "playing":
            self.dispatch(SetAiThinking(value=False))
