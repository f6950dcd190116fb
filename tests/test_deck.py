from __future__ import annotations

import random

from crazyones.engine.deck import DECK_SIZE, card_value, create_deck, shuffle
from crazyones.engine.types import RANKS, SUITS


def test_deck_has_every_suit_rank_pair_once() -> None:
    deck = create_deck(random.Random(7))
    assert len(deck) == DECK_SIZE == 52
    pairs = {(c.suit, c.rank) for c in deck}
    assert pairs == {(s, r) for s in SUITS for r in RANKS}
    assert len({c.id for c in deck}) == 52


def test_card_values() -> None:
    assert card_value("A") == 1
    assert card_value("7") == 7
    assert card_value("10") == 10
    assert all(card_value(r) == 10 for r in ("J", "Q", "K"))
    deck = create_deck(random.Random(1))
    assert all(c.value == card_value(c.rank) for c in deck)


def test_deck_order_is_random_but_seedable() -> None:
    a = create_deck(random.Random(42))
    b = create_deck(random.Random(42))
    c = create_deck(random.Random(43))
    assert a == b
    assert [x.id for x in a] != [x.id for x in c]


def test_shuffle_is_a_permutation_and_leaves_input_alone() -> None:
    items = list(range(20))
    original = list(items)
    out = shuffle(items, random.Random(3))
    assert items == original
    assert out is not items
    assert sorted(out) == original
    assert out != original  # 1 in 20! chance of a false failure


def test_shuffle_accepts_tuples() -> None:
    out = shuffle(("a", "b", "c"), random.Random(0))
    assert isinstance(out, list)
    assert sorted(out) == ["a", "b", "c"]


def test_shuffle_hits_every_position() -> None:
    rng = random.Random(11)
    firsts = {shuffle([0, 1, 2, 3], rng)[0] for _ in range(200)}
    assert firsts == {0, 1, 2, 3}
