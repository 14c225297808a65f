"""Terminal display for game state."""

from __future__ import annotations

from crazyeights.cards import SUIT_SYMBOLS
from crazyeights.input import SUIT_BY_KEY
from crazyeights.rules import is_legal_play
from crazyeights.state import GameState, Phase


class StateRenderer:
    """Renders the human's view of the table."""

    def render(self, state: GameState, undo_depth: int = 0, debug: bool = False) -> str:
        lines: list[str] = []

        lines.append(f"=== {state.phase.value.replace('_', ' ').title()} ===")

        head = state.discard_head
        if head is not None:
            active = f"{SUIT_SYMBOLS[state.active_suit]} {state.active_suit.value}"
            lines.append(f"Discard pile: {head}  (active suit: {active})")
        lines.append(
            f"Draw pile: {len(state.draw_pile)} cards | "
            f"Opponent: {len(state.opponent_hand)} cards | Undo: {undo_depth}"
        )

        if state.human_hand:
            human_turn = state.phase == Phase.HUMAN_TURN
            options = []
            for i, card in enumerate(state.human_hand):
                marker = "*" if human_turn and is_legal_play(
                    card, state.active_suit, state.active_rank
                ) else " "
                options.append(f"[{i + 1}]{marker}{card}")
            lines.append("Your hand: " + "  ".join(options))
        else:
            lines.append("Your hand: (empty)")

        if state.pending_wild is not None:
            choices = "  ".join(
                f"[{key}] {SUIT_SYMBOLS[suit]}" for key, suit in SUIT_BY_KEY.items()
            )
            lines.append(f"Name a suit: {choices}")

        if debug:
            lines.append("")
            lines.append("--- Debug Info ---")
            opp_cards = ", ".join(str(c) for c in state.opponent_hand)
            lines.append(f"Opponent hand: [{opp_cards}]")

        lines.append("")
        lines.append(state.message)
        return "\n".join(lines)
