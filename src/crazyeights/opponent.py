"""Automated opponent move selection."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections import Counter
from dataclasses import dataclass
from typing import Optional, Sequence

from crazyeights.cards import Card, Rank, Suit
from crazyeights.rules import legal_cards


# Suit tie-break for wild plays: first entry wins among equal counts
SUIT_PREFERENCE: tuple[Suit, ...] = (Suit.SPADES, Suit.CLUBS, Suit.DIAMONDS, Suit.HEARTS)


@dataclass(frozen=True)
class OpponentMove:
    """A policy decision: play ``card`` (naming ``suit`` if wild) or draw."""

    card: Optional[Card] = None
    suit: Optional[Suit] = None

    @classmethod
    def play(cls, card: Card, suit: Optional[Suit] = None) -> "OpponentMove":
        return cls(card=card, suit=suit)

    @classmethod
    def draw(cls) -> "OpponentMove":
        return cls()

    @property
    def is_draw(self) -> bool:
        return self.card is None


class OpponentPolicy(ABC):
    """Base class for opponent policies."""

    @abstractmethod
    def choose_move(
        self,
        hand: Sequence[Card],
        active_suit: Suit,
        active_rank: Optional[Rank],
    ) -> OpponentMove:
        """Choose a legal move for ``hand``, or signal that a draw is needed."""
        pass


class GreedyOpponent(OpponentPolicy):
    """Myopic policy: shed a non-wild card when possible, save wilds.

    Strategy:
    - Play the first legal non-wild card in hand order
    - Otherwise play the first legal wild card
    - Name the suit the rest of the hand holds most of
    - Draw when nothing is legal
    """

    def choose_move(
        self,
        hand: Sequence[Card],
        active_suit: Suit,
        active_rank: Optional[Rank],
    ) -> OpponentMove:
        playable = legal_cards(hand, active_suit, active_rank)
        if not playable:
            return OpponentMove.draw()

        card = next((c for c in playable if not c.is_wild), playable[0])
        if card.is_wild:
            return OpponentMove.play(card, self.choose_suit(hand, card))
        return OpponentMove.play(card)

    def choose_suit(self, hand: Sequence[Card], played: Card) -> Suit:
        """Suit with the most remaining cards once ``played`` leaves the hand."""
        counts = Counter(card.suit for card in hand if card != played)
        # max() keeps the first maximum, so SUIT_PREFERENCE breaks ties
        return max(SUIT_PREFERENCE, key=lambda suit: counts[suit])
