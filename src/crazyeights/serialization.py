"""Read-only snapshots of game state for the presentation layer."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from pydantic import BaseModel, ConfigDict

from crazyeights.cards import Card
from crazyeights.rules import is_legal_play
from crazyeights.state import GameState, Phase

if TYPE_CHECKING:
    from crazyeights.session import GameSession


class CardView(BaseModel):
    """A single face-up card."""

    model_config = ConfigDict(frozen=True)

    id: str
    rank: str
    suit: str
    wild: bool
    playable: bool = False


class GameSnapshot(BaseModel):
    """Everything a renderer needs for one frame.

    The opponent's cards are hidden unless ``reveal_opponent`` was asked
    for; only their count is always present.
    """

    model_config = ConfigDict(frozen=True)

    version: int
    phase: str
    message: str
    active_suit: str
    active_rank: Optional[str]
    discard_head: Optional[CardView]
    discard_size: int
    draw_pile_size: int
    human_hand: list[CardView]
    opponent_hand_size: int
    opponent_hand: Optional[list[CardView]] = None
    pending_wild: Optional[CardView] = None
    winner: Optional[str] = None
    undo_depth: int = 0


def card_view(card: Card, playable: bool = False) -> CardView:
    return CardView(
        id=card.id,
        rank=card.rank.value,
        suit=card.suit.value,
        wild=card.is_wild,
        playable=playable,
    )


def snapshot_from_state(
    state: GameState,
    version: int = 0,
    undo_depth: int = 0,
    reveal_opponent: bool = False,
) -> GameSnapshot:
    """Build a snapshot of ``state``.

    Cards in the human hand are flagged playable only while it is the
    human's turn and the card passes the legality check.
    """
    human_turn = state.phase == Phase.HUMAN_TURN
    hand = [
        card_view(
            card,
            playable=human_turn and is_legal_play(card, state.active_suit, state.active_rank),
        )
        for card in state.human_hand
    ]
    head = state.discard_head

    return GameSnapshot(
        version=version,
        phase=state.phase.value,
        message=state.message,
        active_suit=state.active_suit.value,
        active_rank=state.active_rank.value if state.active_rank is not None else None,
        discard_head=card_view(head) if head is not None else None,
        discard_size=len(state.discard_pile),
        draw_pile_size=len(state.draw_pile),
        human_hand=hand,
        opponent_hand_size=len(state.opponent_hand),
        opponent_hand=[card_view(c) for c in state.opponent_hand] if reveal_opponent else None,
        pending_wild=card_view(state.pending_wild) if state.pending_wild is not None else None,
        winner=state.winner.value if state.winner is not None else None,
        undo_depth=undo_depth,
    )


def session_snapshot(session: GameSession, reveal_opponent: bool = False) -> GameSnapshot:
    """Snapshot of a ``GameSession``'s current state."""
    return snapshot_from_state(
        session.state,
        version=session.version,
        undo_depth=session.undo_depth,
        reveal_opponent=reveal_opponent,
    )
