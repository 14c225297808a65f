"""Tests for legal-play evaluation."""

from crazyeights.cards import Card, Rank, Suit, build_deck
from crazyeights.rules import is_legal_play, legal_cards


def make_card(rank: str, suit: str) -> Card:
    """Helper to create cards."""
    return Card(rank=Rank(rank), suit=Suit(suit))


def test_exhaustive_grid() -> None:
    """Every card against every active suit and every active rank (or none)."""
    active_ranks = list(Rank) + [None]
    checked = 0
    for card in build_deck():
        for suit in Suit:
            for rank in active_ranks:
                expected = card.rank == Rank.EIGHT or card.suit == suit or card.rank == rank
                assert is_legal_play(card, suit, rank) is expected
                checked += 1
    assert checked == 52 * 4 * 14


def test_wild_always_legal() -> None:
    for suit in Suit:
        assert is_legal_play(make_card("8", "clubs"), suit, Rank.KING)
        assert is_legal_play(make_card("8", "clubs"), suit, None)


def test_matches_suit() -> None:
    assert is_legal_play(make_card("7", "hearts"), Suit.HEARTS, Rank.NINE)


def test_matches_rank() -> None:
    assert is_legal_play(make_card("9", "spades"), Suit.HEARTS, Rank.NINE)


def test_no_match() -> None:
    assert not is_legal_play(make_card("7", "spades"), Suit.HEARTS, Rank.NINE)


def test_null_rank_only_checks_suit() -> None:
    assert is_legal_play(make_card("K", "spades"), Suit.SPADES, None)
    assert not is_legal_play(make_card("K", "hearts"), Suit.SPADES, None)


def test_legal_cards_keeps_hand_order() -> None:
    hand = [
        make_card("3", "clubs"),
        make_card("9", "spades"),
        make_card("8", "diamonds"),
        make_card("2", "hearts"),
    ]
    assert legal_cards(hand, Suit.HEARTS, Rank.NINE) == [hand[1], hand[2], hand[3]]


def test_legal_cards_empty() -> None:
    assert legal_cards([], Suit.HEARTS, Rank.NINE) == []
