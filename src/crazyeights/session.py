"""Game session: the command surface the presentation layer talks to."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Callable, Optional, Union

from crazyeights import engine
from crazyeights.cards import Suit, card_from_id
from crazyeights.engine import Transition, TurnOutcome
from crazyeights.history import HistoryManager
from crazyeights.opponent import GreedyOpponent, OpponentPolicy
from crazyeights.scheduler import DEFAULT_OPPONENT_DELAY, OpponentScheduler
from crazyeights.state import GameState, Phase

logger = logging.getLogger(__name__)

MSG_DEALING = "Dealing..."

StateListener = Callable[[GameState], None]


@dataclass
class SessionConfig:
    """Configuration for a game session."""

    opponent_delay: float = DEFAULT_OPPONENT_DELAY
    seed: Optional[int] = None
    debug: bool = False

    def __post_init__(self):
        """Generate seed if not provided."""
        if self.seed is None:
            self.seed = random.randint(0, 2**32 - 1)


class GameSession:
    """Owns the authoritative game state and applies commands to it.

    Every command returns the resulting state. Commands that are invalid for
    the current phase (or name an unknown card or suit) are no-ops and
    return the current state unchanged.

    ``last_outcome`` is the outcome of the most recent accepted transition
    (None after a rejected opponent step, an undo or a deal): it tells a
    synchronous driver whether the same participant acts again.

    ``version`` increases on every state change. When a scheduler is given,
    the opponent's move is scheduled against the version at the time it
    became the opponent's turn and is dropped if the version moved on.
    Without a scheduler, the caller drives the opponent with
    ``advance_opponent()``.
    """

    def __init__(
        self,
        config: Optional[SessionConfig] = None,
        policy: Optional[OpponentPolicy] = None,
        scheduler: Optional[OpponentScheduler] = None,
    ):
        self.config = config or SessionConfig()
        self.seed = self.config.seed
        self.rng = random.Random(self.seed)
        self.policy = policy or GreedyOpponent()
        self.scheduler = scheduler
        self.history = HistoryManager()

        self.state = GameState.initial()
        self.version = 0
        self.last_outcome: Optional[TurnOutcome] = None
        self._listeners: list[StateListener] = []

    def subscribe(self, listener: StateListener) -> None:
        """Call ``listener`` with every new state."""
        self._listeners.append(listener)

    def snapshot(self) -> GameState:
        return self.state

    @property
    def can_undo(self) -> bool:
        return len(self.history) > 0

    @property
    def undo_depth(self) -> int:
        return len(self.history)

    # Commands

    def start_game(self) -> GameState:
        """Deal the first game. Only valid before anything has been dealt."""
        if self.state.phase != Phase.AWAITING_START:
            return self.state
        logger.info(f"Starting game (seed {self.seed})")
        self._deal()
        return self.state

    def restart(self) -> GameState:
        """Throw the current game away and deal a new one."""
        logger.info("Restarting game")
        if self.scheduler is not None:
            self.scheduler.cancel()
        self.history.clear()
        self._deal()
        return self.state

    def play_card(self, card_id: str) -> GameState:
        card = card_from_id(card_id)
        if card is None:
            logger.debug(f"Unknown card id: {card_id!r}")
            return self.state
        return self._apply_human(engine.play_card(self.state, card))

    def draw_card(self) -> GameState:
        return self._apply_human(engine.draw_card(self.state))

    def choose_suit(self, suit: Union[Suit, str]) -> GameState:
        """Name the suit for a pending wild card.

        Accepts a ``Suit`` or its value (``"spades"``). Completes the move
        begun by ``play_card``, so no separate history entry is recorded.
        """
        if not isinstance(suit, Suit):
            try:
                suit = Suit(str(suit).lower())
            except ValueError:
                logger.debug(f"Unknown suit: {suit!r}")
                return self.state

        transition = engine.choose_suit(self.state, suit)
        if transition.accepted:
            self._set_outcome(transition)
            self._set_state(transition.state)
        return self.state

    def advance_opponent(self) -> GameState:
        """Apply one opponent step if it is the opponent's turn."""
        transition = engine.opponent_step(self.state, self.policy)
        self._set_outcome(transition)
        if transition.accepted:
            self.history.record(self.state)
            self._set_state(transition.state)
        return self.state

    def undo(self) -> Optional[GameState]:
        """Restore the state before the last recorded action.

        Returns:
            The restored state, or None if there is nothing to undo
        """
        previous = self.history.undo()
        if previous is None:
            return None
        logger.info(f"Undo to {previous.phase.value} ({len(self.history)} left)")
        self.last_outcome = None
        self._set_state(previous)
        return previous

    # Internals

    def _deal(self) -> None:
        self.last_outcome = None
        self._set_state(GameState.initial().copy_with(phase=Phase.DEALING, message=MSG_DEALING))
        self._set_state(engine.deal(self.rng))

    def _apply_human(self, transition: Transition) -> GameState:
        if transition.accepted:
            self._set_outcome(transition)
            self.history.record(self.state)
            self._set_state(transition.state)
        elif transition.state is not self.state:
            # Rejected with an advisory message
            self._set_state(transition.state)
        return self.state

    def _set_outcome(self, transition: Transition) -> None:
        self.last_outcome = transition.outcome
        if transition.outcome == TurnOutcome.GAME_OVER:
            logger.info(f"Game over, {transition.state.winner.value} wins")

    def _set_state(self, state: GameState) -> None:
        self.state = state
        self.version += 1
        for listener in self._listeners:
            listener(state)
        self._arm_opponent()

    def _arm_opponent(self) -> None:
        if self.scheduler is None:
            return
        if self.state.phase == Phase.OPPONENT_TURN:
            self.scheduler.schedule(self.version, self._on_opponent_timer)
        else:
            self.scheduler.cancel()

    def _on_opponent_timer(self, version: int) -> None:
        if version != self.version:
            logger.debug(f"Dropping stale opponent move (version {version}, now {self.version})")
            return
        self.advance_opponent()
