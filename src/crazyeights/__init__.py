"""Crazy Eights rules engine: one human against one automated opponent."""

from crazyeights.cards import Card, Rank, Suit, WILD_RANK, build_deck, shuffle_deck, card_from_id
from crazyeights.rules import is_legal_play, legal_cards
from crazyeights.state import GameState, Phase, Participant, check_card_conservation
from crazyeights.engine import Transition, TurnOutcome
from crazyeights.opponent import OpponentMove, OpponentPolicy, GreedyOpponent
from crazyeights.history import HistoryManager
from crazyeights.scheduler import OpponentScheduler
from crazyeights.session import GameSession, SessionConfig
from crazyeights.serialization import CardView, GameSnapshot, session_snapshot, snapshot_from_state

__all__ = [
    "Card",
    "Rank",
    "Suit",
    "WILD_RANK",
    "build_deck",
    "shuffle_deck",
    "card_from_id",
    "is_legal_play",
    "legal_cards",
    "GameState",
    "Phase",
    "Participant",
    "check_card_conservation",
    "Transition",
    "TurnOutcome",
    "OpponentMove",
    "OpponentPolicy",
    "GreedyOpponent",
    "HistoryManager",
    "OpponentScheduler",
    "GameSession",
    "SessionConfig",
    "CardView",
    "GameSnapshot",
    "snapshot_from_state",
    "session_snapshot",
]
