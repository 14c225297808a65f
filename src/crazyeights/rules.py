"""Legal-play evaluation."""

from __future__ import annotations

from typing import Iterable, Optional

from crazyeights.cards import Card, Rank, Suit


def is_legal_play(card: Card, active_suit: Suit, active_rank: Optional[Rank]) -> bool:
    """Check whether ``card`` may be played on the current discard.

    Wild cards are always legal. Otherwise the card must match the active
    suit or the active rank; an active rank of None (after a wild play)
    leaves only the suit test.
    """
    if card.is_wild:
        return True
    return card.suit == active_suit or card.rank == active_rank


def legal_cards(
    hand: Iterable[Card], active_suit: Suit, active_rank: Optional[Rank]
) -> list[Card]:
    """Cards from ``hand`` that are legal to play, in hand order."""
    return [card for card in hand if is_legal_play(card, active_suit, active_rank)]
