"""Immutable game state representation."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from crazyeights.cards import Card, Rank, Suit, build_deck


class Phase(Enum):
    """Turn phase: whose action the game is waiting for."""

    AWAITING_START = "awaiting_start"
    DEALING = "dealing"
    HUMAN_TURN = "human_turn"
    OPPONENT_TURN = "opponent_turn"
    AWAITING_SUIT_CHOICE = "awaiting_suit_choice"
    FINISHED = "finished"


class Participant(Enum):
    """The two seats at the table."""

    HUMAN = "human"
    OPPONENT = "opponent"


WELCOME_MESSAGE = "Welcome to Crazy Eights!"


@dataclass(frozen=True)
class GameState:
    """Immutable game state.

    All card collections are tuples, so a state object doubles as its own
    undo snapshot. ``draw_pile`` is drawn from its end; ``discard_pile`` is
    most-recent-first. ``pending_wild`` holds the wild card a human has
    played while the suit choice is outstanding: it is in no hand or pile.
    """

    draw_pile: tuple[Card, ...]
    human_hand: tuple[Card, ...]
    opponent_hand: tuple[Card, ...]
    discard_pile: tuple[Card, ...]
    active_suit: Suit
    active_rank: Optional[Rank]
    phase: Phase
    winner: Optional[Participant] = None
    message: str = ""
    pending_wild: Optional[Card] = None

    @classmethod
    def initial(cls) -> "GameState":
        """State before the first deal."""
        return cls(
            draw_pile=(),
            human_hand=(),
            opponent_hand=(),
            discard_pile=(),
            active_suit=Suit.HEARTS,
            active_rank=None,
            phase=Phase.AWAITING_START,
            message=WELCOME_MESSAGE,
        )

    def copy_with(self, **changes) -> "GameState":  # type: ignore
        """Create a new state with specified changes."""
        current = {
            "draw_pile": self.draw_pile,
            "human_hand": self.human_hand,
            "opponent_hand": self.opponent_hand,
            "discard_pile": self.discard_pile,
            "active_suit": self.active_suit,
            "active_rank": self.active_rank,
            "phase": self.phase,
            "winner": self.winner,
            "message": self.message,
            "pending_wild": self.pending_wild,
        }
        current.update(changes)
        return GameState(**current)

    @property
    def discard_head(self) -> Optional[Card]:
        return self.discard_pile[0] if self.discard_pile else None

    def hand_of(self, participant: Participant) -> tuple[Card, ...]:
        if participant == Participant.HUMAN:
            return self.human_hand
        return self.opponent_hand

    def with_hand(self, participant: Participant, hand: tuple[Card, ...]) -> "GameState":
        """Copy of this state with ``participant``'s hand replaced."""
        if participant == Participant.HUMAN:
            return self.copy_with(human_hand=hand)
        return self.copy_with(opponent_hand=hand)

    def all_cards(self) -> list[Card]:
        """Every card the state accounts for, including one in flight."""
        cards = [
            *self.draw_pile,
            *self.human_hand,
            *self.opponent_hand,
            *self.discard_pile,
        ]
        if self.pending_wild is not None:
            cards.append(self.pending_wild)
        return cards


def check_card_conservation(state: GameState) -> list[str]:
    """Validate that all cards are accounted for and no duplicates exist.

    A state that has not been dealt yet holds no cards and is valid.

    Returns:
        List of problems found (empty when the state is consistent)
    """
    cards = state.all_cards()
    if state.phase in (Phase.AWAITING_START, Phase.DEALING) and not cards:
        return []

    problems: list[str] = []
    duplicates = [str(card) for card, count in Counter(cards).items() if count > 1]
    if duplicates:
        problems.append(f"Duplicate cards: {', '.join(sorted(duplicates))}")

    missing = set(build_deck()) - set(cards)
    if missing:
        problems.append(f"Missing cards: {', '.join(sorted(str(c) for c in missing))}")

    if state.phase == Phase.AWAITING_SUIT_CHOICE and state.pending_wild is None:
        problems.append("Awaiting suit choice without a pending wild card")
    if state.pending_wild is not None and state.phase != Phase.AWAITING_SUIT_CHOICE:
        problems.append("Pending wild card outside of suit choice")
    if state.phase == Phase.FINISHED:
        if state.winner is None:
            problems.append("Finished without a winner")
        elif state.hand_of(state.winner):
            problems.append("Winner still holds cards")

    return problems
