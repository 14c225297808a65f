"""Property-based tests for game transitions and session commands."""

import random

from hypothesis import given, settings, strategies as st
from crazyeights.cards import Suit, build_deck, shuffle_deck
from crazyeights.session import GameSession, SessionConfig
from crazyeights.state import GameState, Phase, check_card_conservation


commands = st.lists(
    st.one_of(
        st.tuples(st.just("play"), st.integers(min_value=0, max_value=30)),
        st.tuples(st.just("draw")),
        st.tuples(st.just("suit"), st.sampled_from(list(Suit))),
        st.tuples(st.just("opponent")),
        st.tuples(st.just("undo")),
        st.tuples(st.just("restart")),
    ),
    max_size=60,
)


def apply(session: GameSession, command: tuple) -> None:
    kind = command[0]
    if kind == "play":
        hand = session.state.human_hand
        if hand:
            session.play_card(hand[command[1] % len(hand)].id)
        else:
            session.play_card("A-hearts")
    elif kind == "draw":
        session.draw_card()
    elif kind == "suit":
        session.choose_suit(command[1])
    elif kind == "opponent":
        session.advance_opponent()
    elif kind == "undo":
        session.undo()
    elif kind == "restart":
        session.restart()


def assert_consistent(state: GameState) -> None:
    assert check_card_conservation(state) == []
    head = state.discard_head
    if head is None:
        return
    if head.is_wild:
        assert state.active_rank is None
    else:
        assert state.active_suit == head.suit
        assert state.active_rank == head.rank


@given(seed=st.integers(min_value=0, max_value=10000))
def test_shuffle_is_permutation(seed: int) -> None:
    """Property: Shuffling keeps exactly the same 52 cards."""
    deck = build_deck()
    shuffled = shuffle_deck(deck, random.Random(seed))
    assert len(shuffled) == 52
    assert set(shuffled) == set(deck)


@settings(max_examples=200)
@given(seed=st.integers(min_value=0, max_value=10000), script=commands)
def test_cards_conserved_property(seed: int, script: list) -> None:
    """Property: Every reachable state accounts for all 52 cards exactly once."""
    session = GameSession(SessionConfig(seed=seed))
    session.start_game()
    assert_consistent(session.state)

    for command in script:
        apply(session, command)
        assert_consistent(session.state)


@settings(max_examples=200)
@given(seed=st.integers(min_value=0, max_value=10000), script=commands)
def test_turn_order_property(seed: int, script: list) -> None:
    """Property: Human commands only change the state on the human's turn."""
    session = GameSession(SessionConfig(seed=seed))
    session.start_game()

    for command in script:
        before = session.state
        apply(session, command)
        if command[0] in ("play", "draw") and before.phase != Phase.HUMAN_TURN:
            assert session.state is before
        if command[0] == "suit" and before.phase != Phase.AWAITING_SUIT_CHOICE:
            assert session.state is before
        if command[0] == "opponent" and before.phase != Phase.OPPONENT_TURN:
            assert session.state is before


@settings(max_examples=200)
@given(seed=st.integers(min_value=0, max_value=10000), script=commands)
def test_undo_restores_previous_property(seed: int, script: list) -> None:
    """Property: Undo right after a recorded action restores the state before it."""
    session = GameSession(SessionConfig(seed=seed))
    session.start_game()

    for command in script:
        if command[0] in ("undo", "restart"):
            continue
        before = session.state
        depth = session.undo_depth
        apply(session, command)
        if session.undo_depth > depth:
            assert session.undo() is before
            apply(session, command)
