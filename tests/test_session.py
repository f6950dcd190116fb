from __future__ import annotations

import random

from crazyones.engine.actions import DeclareSuit, Draw, PlayerPlay, Skip
from crazyones.engine.game import GameState
from crazyones.services.session import GameSession

from helpers import card, make_state


def _end_player_turn(session: GameSession) -> None:
    playable = session.playable_cards()
    if playable:
        plain = [c for c in playable if c.rank != "A"]
        session.dispatch(PlayerPlay(card=(plain or playable)[0]))
        if session.state.awaiting_suit_choice:
            session.dispatch(DeclareSuit(suit="hearts"))
        return
    intent = session.pass_intent()
    assert intent is not None
    session.dispatch(intent)


def _ai_turn_session(delay: float = 1.5) -> GameSession:
    state = make_state(
        player=[card("3", "spades"), card("K", "clubs")],
        ai=[card("4", "clubs"), card("J", "diamonds")],
        discard=[card("9", "spades")],
    )
    session = GameSession(ai_delay=delay, rng=random.Random(0), state=state)
    session.dispatch(PlayerPlay(card=card("3", "spades")))
    assert session.state.turn == "ai"
    return session


def test_ai_waits_for_delay_then_moves() -> None:
    session = _ai_turn_session()
    session.update(0.0)
    assert session.state.is_ai_thinking
    assert session.ai_pending

    session.update(1.0)
    assert session.state.turn == "ai"
    assert len(session.state.ai_hand) == 2

    session.update(0.6)
    assert session.state.turn == "player"
    assert not session.state.is_ai_thinking
    assert not session.ai_pending
    # AI had no match for 3 of spades, so it drew.
    assert len(session.state.ai_hand) == 3


def test_no_second_evaluation_while_thinking() -> None:
    session = _ai_turn_session()
    session.update(0.0)
    thinking = session.state
    session.update(0.0)
    session.update(0.1)
    assert session.state is thinking


def test_stale_evaluation_after_menu_is_dropped() -> None:
    session = _ai_turn_session()
    session.update(0.0)
    menu = session.return_to_menu()
    session.update(5.0)
    assert session.state is menu
    assert not session.ai_pending


def test_stale_evaluation_after_restart_is_dropped() -> None:
    session = _ai_turn_session()
    session.update(0.0)
    fresh = session.start_game(seed=1)
    session.update(5.0)
    assert session.state is fresh
    assert len(session.state.ai_hand) == 8


def test_game_over_observer_fires_once() -> None:
    seen: list[GameState] = []
    state = make_state(
        player=[card("3", "spades")],
        ai=[card("4", "clubs")],
        discard=[card("9", "spades")],
    )
    session = GameSession(state=state)
    session.add_game_over_observer(seen.append)
    session.dispatch(PlayerPlay(card=card("3", "spades")))
    session.dispatch(Draw(who="ai"))
    session.update(10.0)
    assert len(seen) == 1
    assert seen[0].winner == "player"


def test_playable_cards_and_pass_intent() -> None:
    state = make_state(
        player=[card("3", "spades"), card("K", "hearts")],
        ai=[card("4", "clubs")],
        discard=[card("9", "spades")],
    )
    session = GameSession(state=state)
    assert session.playable_cards() == [card("3", "spades")]
    assert session.pass_intent() is None

    stuck = GameSession(state=make_state(player=[card("K", "hearts")], ai=[card("4", "clubs")], discard=[card("9", "spades")]))
    assert stuck.playable_cards() == []
    assert stuck.pass_intent() == Draw(who="player")

    empty = GameSession(
        state=make_state(player=[card("K", "hearts")], ai=[card("4", "clubs")], discard=[card("9", "spades")], draw=[])
    )
    assert empty.pass_intent() == Skip(who="player")


def test_nothing_playable_on_ai_turn() -> None:
    session = _ai_turn_session()
    assert session.playable_cards() == []
    assert session.pass_intent() is None


def test_full_game_through_session() -> None:
    session = GameSession(ai_delay=0.5, rng=random.Random(12))
    session.start_game(seed=12)
    for _ in range(2000):
        state = session.state
        if state.status != "playing":
            break
        if state.turn == "player" and not state.is_ai_thinking:
            _end_player_turn(session)
        else:
            session.update(0.25)
    assert session.state.status in ("playing", "over")
    total = sum(
        len(z)
        for z in (
            session.state.draw_pile,
            session.state.player_hand,
            session.state.ai_hand,
            session.state.discard_pile,
        )
    )
    assert total == 52
