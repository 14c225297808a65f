"""State transitions for Crazy Eights.

Every transition is a pure function from a ``GameState`` to a
``Transition``. Rejected commands come back with ``accepted=False`` and the
original state (only the advisory message may change); no transition raises
on bad timing or an illegal card.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from crazyeights.cards import Card, Suit, build_deck, shuffle_deck
from crazyeights.opponent import OpponentPolicy
from crazyeights.rules import is_legal_play
from crazyeights.state import GameState, Participant, Phase

logger = logging.getLogger(__name__)

HAND_SIZE = 8

MSG_YOUR_TURN = "Your turn! Play a card or draw."
MSG_ILLEGAL_CARD = "That card can't be played!"
MSG_CHOOSE_SUIT = "Choose a suit for your 8."
MSG_OPPONENT_THINKING = "Opponent is thinking..."
MSG_HUMAN_EMPTY_DRAW = "The draw pile is empty. Turn skipped."
MSG_OPPONENT_DREW = "Opponent drew a card."
MSG_OPPONENT_FORFEIT = "Opponent can't play and the draw pile is empty. Turn skipped."
WIN_MESSAGES = {
    Participant.HUMAN: "You win!",
    Participant.OPPONENT: "Opponent wins!",
}


class TurnOutcome(Enum):
    """What an accepted transition means for the turn."""

    CONTINUES = "continues"  # same participant acts again
    PASSES = "passes"        # the other participant is up
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class Transition:
    """Result of applying a command to a state."""

    state: GameState
    accepted: bool
    outcome: Optional[TurnOutcome] = None

    @classmethod
    def rejected(cls, state: GameState) -> "Transition":
        return cls(state=state, accepted=False)


def _other(participant: Participant) -> Participant:
    if participant == Participant.HUMAN:
        return Participant.OPPONENT
    return Participant.HUMAN


def _turn_phase(participant: Participant) -> Phase:
    if participant == Participant.HUMAN:
        return Phase.HUMAN_TURN
    return Phase.OPPONENT_TURN


def _without(hand: tuple[Card, ...], card: Card) -> tuple[Card, ...]:
    return tuple(c for c in hand if c != card)


def deal(rng: Optional[random.Random] = None) -> GameState:
    """Shuffle a fresh deck and deal a new game.

    Deals 8 cards to the human, then 8 to the opponent, from the front of
    the shuffled deck. The first non-wild card among the rest opens the
    discard pile; everything else becomes the draw pile in order.
    """
    deck = shuffle_deck(build_deck(), rng)
    human_hand = deck[:HAND_SIZE]
    opponent_hand = deck[HAND_SIZE:2 * HAND_SIZE]
    rest = deck[2 * HAND_SIZE:]

    # At most 4 wilds exist, so 36 remaining cards always hold a non-wild
    opening_idx = next(i for i, card in enumerate(rest) if not card.is_wild)
    opening = rest[opening_idx]
    draw_pile = rest[:opening_idx] + rest[opening_idx + 1:]

    logger.debug(f"Dealt new game, opening card {opening}")
    return GameState(
        draw_pile=draw_pile,
        human_hand=human_hand,
        opponent_hand=opponent_hand,
        discard_pile=(opening,),
        active_suit=opening.suit,
        active_rank=opening.rank,
        phase=Phase.HUMAN_TURN,
        message=MSG_YOUR_TURN,
    )


def _commit_play(
    state: GameState,
    participant: Participant,
    card: Card,
    hand: tuple[Card, ...],
    suit: Suit,
    message: str,
) -> Transition:
    """Put ``card`` on the discard pile and settle whose turn is next.

    ``hand`` is the participant's hand without ``card``. Win detection
    happens here because this is the only place a hand shrinks.
    """
    state = state.with_hand(participant, hand).copy_with(
        discard_pile=(card,) + state.discard_pile,
        active_suit=suit,
        active_rank=None if card.is_wild else card.rank,
        pending_wild=None,
    )

    if not hand:
        logger.debug(f"{participant.value} emptied their hand")
        return Transition(
            state=state.copy_with(
                phase=Phase.FINISHED,
                winner=participant,
                message=WIN_MESSAGES[participant],
            ),
            accepted=True,
            outcome=TurnOutcome.GAME_OVER,
        )

    return Transition(
        state=state.copy_with(phase=_turn_phase(_other(participant)), message=message),
        accepted=True,
        outcome=TurnOutcome.PASSES,
    )


def play_card(state: GameState, card: Card) -> Transition:
    """Human plays ``card`` from their hand.

    A wild card is taken out of the hand and held as ``pending_wild`` until
    ``choose_suit`` commits it.
    """
    if state.phase != Phase.HUMAN_TURN or card not in state.human_hand:
        logger.debug(f"Rejected play of {card} in phase {state.phase.value}")
        return Transition.rejected(state)

    if not is_legal_play(card, state.active_suit, state.active_rank):
        return Transition.rejected(state.copy_with(message=MSG_ILLEGAL_CARD))

    hand = _without(state.human_hand, card)
    if card.is_wild:
        return Transition(
            state=state.copy_with(
                human_hand=hand,
                pending_wild=card,
                phase=Phase.AWAITING_SUIT_CHOICE,
                message=MSG_CHOOSE_SUIT,
            ),
            accepted=True,
            outcome=TurnOutcome.CONTINUES,
        )

    return _commit_play(
        state, Participant.HUMAN, card, hand, card.suit, MSG_OPPONENT_THINKING
    )


def choose_suit(state: GameState, suit: Suit) -> Transition:
    """Commit the pending wild card with ``suit`` as the new active suit."""
    if state.phase != Phase.AWAITING_SUIT_CHOICE or state.pending_wild is None:
        return Transition.rejected(state)

    card = state.pending_wild
    return _commit_play(
        state,
        Participant.HUMAN,
        card,
        state.human_hand,
        suit,
        f"You played {card} and named {suit.value.upper()}",
    )


def _draw_from(state: GameState) -> tuple[Card, tuple[Card, ...]]:
    """Top card of the draw pile and the pile without it."""
    return state.draw_pile[-1], state.draw_pile[:-1]


def draw_card(state: GameState) -> Transition:
    """Human draws one card.

    The turn continues only when the drawn card is immediately playable.
    An empty draw pile forfeits the turn.
    """
    if state.phase != Phase.HUMAN_TURN:
        return Transition.rejected(state)

    if not state.draw_pile:
        return Transition(
            state=state.copy_with(phase=Phase.OPPONENT_TURN, message=MSG_HUMAN_EMPTY_DRAW),
            accepted=True,
            outcome=TurnOutcome.PASSES,
        )

    card, draw_pile = _draw_from(state)
    playable = is_legal_play(card, state.active_suit, state.active_rank)
    return Transition(
        state=state.copy_with(
            draw_pile=draw_pile,
            human_hand=state.human_hand + (card,),
            phase=Phase.HUMAN_TURN if playable else Phase.OPPONENT_TURN,
            message=f"You drew {card}",
        ),
        accepted=True,
        outcome=TurnOutcome.CONTINUES if playable else TurnOutcome.PASSES,
    )


def opponent_step(state: GameState, policy: OpponentPolicy) -> Transition:
    """Apply one opponent decision: a play, a draw, or a forfeit."""
    if state.phase != Phase.OPPONENT_TURN:
        return Transition.rejected(state)

    hand = state.opponent_hand
    move = policy.choose_move(hand, state.active_suit, state.active_rank)

    if not move.is_draw:
        card = move.card
        if card not in hand or not is_legal_play(card, state.active_suit, state.active_rank):
            logger.warning(f"Opponent policy chose an illegal card: {card}")
            return Transition.rejected(state)

        if card.is_wild:
            suit = move.suit if move.suit is not None else card.suit
            message = f"Opponent played {card} and named {suit.value.upper()}"
        else:
            suit = card.suit
            message = f"Opponent played {card}"
        logger.debug(message)
        return _commit_play(
            state, Participant.OPPONENT, card, _without(hand, card), suit, message
        )

    if not state.draw_pile:
        return Transition(
            state=state.copy_with(phase=Phase.HUMAN_TURN, message=MSG_OPPONENT_FORFEIT),
            accepted=True,
            outcome=TurnOutcome.PASSES,
        )

    card, draw_pile = _draw_from(state)
    playable = is_legal_play(card, state.active_suit, state.active_rank)
    return Transition(
        state=state.copy_with(
            draw_pile=draw_pile,
            opponent_hand=hand + (card,),
            phase=Phase.OPPONENT_TURN if playable else Phase.HUMAN_TURN,
            message=MSG_OPPONENT_DREW,
        ),
        accepted=True,
        outcome=TurnOutcome.CONTINUES if playable else TurnOutcome.PASSES,
    )
