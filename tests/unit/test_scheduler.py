"""Tests for delayed opponent moves."""

import asyncio
from unittest.mock import Mock

import pytest
from crazyeights.cards import Card, Rank, Suit, build_deck
from crazyeights.scheduler import OpponentScheduler
from crazyeights.session import GameSession, SessionConfig
from crazyeights.state import GameState, Phase

DELAY = 0.01


def make_card(rank: str, suit: str) -> Card:
    """Helper to create cards."""
    return Card(rank=Rank(rank), suit=Suit(suit))


def opponent_can_answer() -> GameState:
    """Human can play 7♥ on 9♥; the opponent answers with 3♥."""
    human = (make_card("7", "hearts"), make_card("2", "clubs"))
    opponent = (make_card("3", "hearts"), make_card("K", "spades"))
    head = make_card("9", "hearts")
    used = set(human) | set(opponent) | {head}
    return GameState(
        draw_pile=tuple(c for c in build_deck() if c not in used),
        human_hand=human,
        opponent_hand=opponent,
        discard_pile=(head,),
        active_suit=head.suit,
        active_rank=head.rank,
        phase=Phase.HUMAN_TURN,
    )


def make_session() -> GameSession:
    return GameSession(SessionConfig(seed=1), scheduler=OpponentScheduler(delay=DELAY))


class TestOpponentScheduler:
    @pytest.mark.asyncio
    async def test_fires_with_version(self):
        scheduler = OpponentScheduler(delay=DELAY)
        callback = Mock()
        scheduler.schedule(3, callback)
        assert scheduler.pending
        assert scheduler.pending_version == 3

        await asyncio.sleep(DELAY * 5)
        callback.assert_called_once_with(3)
        assert not scheduler.pending

    @pytest.mark.asyncio
    async def test_cancel(self):
        scheduler = OpponentScheduler(delay=DELAY)
        callback = Mock()
        scheduler.schedule(1, callback)
        scheduler.cancel()

        await asyncio.sleep(DELAY * 5)
        callback.assert_not_called()
        assert scheduler.pending_version is None

    @pytest.mark.asyncio
    async def test_reschedule_replaces_pending(self):
        scheduler = OpponentScheduler(delay=DELAY)
        first, second = Mock(), Mock()
        scheduler.schedule(1, first)
        scheduler.schedule(2, second)

        await asyncio.sleep(DELAY * 5)
        first.assert_not_called()
        second.assert_called_once_with(2)

    def test_cancel_without_pending(self):
        scheduler = OpponentScheduler()
        scheduler.cancel()
        assert not scheduler.pending

    def test_schedule_needs_running_loop(self):
        scheduler = OpponentScheduler(delay=DELAY)
        with pytest.raises(RuntimeError):
            scheduler.schedule(1, Mock())


class TestSessionScheduling:
    @pytest.mark.asyncio
    async def test_opponent_moves_after_delay(self):
        session = make_session()
        session.state = opponent_can_answer()

        session.play_card("7-hearts")
        assert session.state.phase == Phase.OPPONENT_TURN
        assert session.scheduler.pending

        await asyncio.sleep(DELAY * 5)
        assert session.state.phase == Phase.HUMAN_TURN
        assert session.state.discard_head == make_card("3", "hearts")
        assert session.undo_depth == 2

    @pytest.mark.asyncio
    async def test_restart_cancels_pending_move(self):
        session = make_session()
        session.state = opponent_can_answer()
        session.play_card("7-hearts")

        fresh = session.restart()
        assert not session.scheduler.pending

        await asyncio.sleep(DELAY * 5)
        assert session.state is fresh
        assert session.state.phase == Phase.HUMAN_TURN
        assert len(session.state.opponent_hand) == 8
        assert not session.can_undo

    @pytest.mark.asyncio
    async def test_undo_cancels_pending_move(self):
        session = make_session()
        before = opponent_can_answer()
        session.state = before
        session.play_card("7-hearts")

        assert session.undo() is before
        assert not session.scheduler.pending

        await asyncio.sleep(DELAY * 5)
        assert session.state is before

    @pytest.mark.asyncio
    async def test_undo_into_opponent_turn_rearms(self):
        session = make_session()
        session.state = opponent_can_answer()
        session.play_card("7-hearts")
        await asyncio.sleep(DELAY * 5)
        assert session.state.phase == Phase.HUMAN_TURN

        restored = session.undo()
        assert restored.phase == Phase.OPPONENT_TURN
        assert session.scheduler.pending

        await asyncio.sleep(DELAY * 5)
        assert session.state.phase == Phase.HUMAN_TURN

    def test_stale_version_dropped(self):
        session = GameSession(SessionConfig(seed=1))
        session.state = opponent_can_answer().copy_with(phase=Phase.OPPONENT_TURN)
        state = session.state

        session._on_opponent_timer(session.version - 1)
        assert session.state is state

        session._on_opponent_timer(session.version)
        assert session.state.discard_head == make_card("3", "hearts")
