"""Card types and deck construction."""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence


class Suit(Enum):
    """Playing card suits, in fixed enumeration order."""

    HEARTS = "hearts"
    DIAMONDS = "diamonds"
    CLUBS = "clubs"
    SPADES = "spades"


class Rank(Enum):
    """Playing card ranks, in fixed enumeration order."""

    ACE = "A"
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"


# Playable on anything; playing it names the next active suit
WILD_RANK = Rank.EIGHT

SUIT_SYMBOLS = {
    Suit.HEARTS: "\u2665",
    Suit.DIAMONDS: "\u2666",
    Suit.CLUBS: "\u2663",
    Suit.SPADES: "\u2660",
}

DECK_SIZE = len(Suit) * len(Rank)


@dataclass(frozen=True)
class Card:
    """Immutable playing card."""

    rank: Rank
    suit: Suit

    @property
    def id(self) -> str:
        """Identifier unique within a deck, e.g. ``"7-hearts"``."""
        return f"{self.rank.value}-{self.suit.value}"

    @property
    def is_wild(self) -> bool:
        return self.rank == WILD_RANK

    def __str__(self) -> str:
        return f"{self.rank.value}{SUIT_SYMBOLS[self.suit]}"


def build_deck() -> tuple[Card, ...]:
    """Build the 52-card deck in canonical (suit-major) order. No randomness."""
    return tuple(Card(rank=rank, suit=suit) for suit in Suit for rank in Rank)


def shuffle_deck(
    cards: Sequence[Card], rng: Optional[random.Random] = None
) -> tuple[Card, ...]:
    """Return a shuffled copy of ``cards``.

    Uses Fisher-Yates through ``Random.shuffle``; the input is not mutated.

    Args:
        cards: Cards to permute
        rng: Random source. Defaults to the process-wide ``random`` module.

    Returns:
        New tuple holding the same cards in random order
    """
    shuffled = list(cards)
    if rng is None:
        random.shuffle(shuffled)
    else:
        rng.shuffle(shuffled)
    return tuple(shuffled)


_CARDS_BY_ID = {card.id: card for card in build_deck()}


def card_from_id(card_id: str) -> Optional[Card]:
    """Look up a card by identifier. Returns None for unknown identifiers."""
    return _CARDS_BY_ID.get(card_id)
