"""Human input handling."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from crazyeights.cards import Suit
from crazyeights.state import GameState, Phase


class Command(Enum):
    PLAY = "play"
    DRAW = "draw"
    SUIT = "suit"
    UNDO = "undo"
    RESTART = "restart"


SUIT_BY_KEY = {
    "h": Suit.HEARTS,
    "d": Suit.DIAMONDS,
    "c": Suit.CLUBS,
    "s": Suit.SPADES,
}

KEYWORDS = {
    "d": Command.DRAW,
    "draw": Command.DRAW,
    "u": Command.UNDO,
    "undo": Command.UNDO,
    "r": Command.RESTART,
    "restart": Command.RESTART,
}


@dataclass
class InputResult:
    """Result of human input."""

    command: Optional[Command] = None
    card_id: Optional[str] = None
    suit: Optional[Suit] = None
    quit: bool = False
    error: Optional[str] = None


def parse_command(raw: str, state: GameState) -> InputResult:
    """Turn one line of input into a command.

    While a suit is being chosen, ``h``/``d``/``c``/``s`` (or the full
    suit name) name the suit; otherwise ``d`` means draw. A number plays
    that card from the hand, counting from 1.
    """
    text = raw.strip().lower()

    if text in ("q", "quit", "exit"):
        return InputResult(quit=True)
    if not text:
        return InputResult(error="Enter a command.")

    if state.phase == Phase.AWAITING_SUIT_CHOICE:
        suit = SUIT_BY_KEY.get(text)
        if suit is None:
            try:
                suit = Suit(text)
            except ValueError:
                suit = None
        if suit is not None:
            return InputResult(command=Command.SUIT, suit=suit)

    if text in KEYWORDS:
        return InputResult(command=KEYWORDS[text])

    try:
        choice = int(text)
    except ValueError:
        return InputResult(error=f"Invalid input '{raw.strip()}'. Enter a number, d, u, r or q.")

    if choice < 1 or choice > len(state.human_hand):
        return InputResult(error=f"Invalid choice {choice}. Enter 1-{len(state.human_hand)}.")

    return InputResult(command=Command.PLAY, card_id=state.human_hand[choice - 1].id)


class HumanPlayer:
    """Reads commands from the terminal."""

    def get_command(self, state: GameState, prompt: str = "> ") -> InputResult:
        try:
            raw = input(prompt)
        except (EOFError, KeyboardInterrupt):
            return InputResult(quit=True)
        return parse_command(raw, state)
