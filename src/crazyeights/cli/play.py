"""CLI command for playing against the automated opponent."""

from __future__ import annotations

import logging
import time

import click

from crazyeights.display import StateRenderer
from crazyeights.engine import TurnOutcome
from crazyeights.input import Command, HumanPlayer, InputResult
from crazyeights.scheduler import DEFAULT_OPPONENT_DELAY
from crazyeights.session import GameSession, SessionConfig
from crazyeights.state import Phase

logger = logging.getLogger(__name__)


def apply_input(session: GameSession, result: InputResult) -> None:
    """Dispatch a parsed command to the session."""
    if result.command == Command.PLAY and result.card_id is not None:
        session.play_card(result.card_id)
    elif result.command == Command.DRAW:
        session.draw_card()
    elif result.command == Command.SUIT and result.suit is not None:
        session.choose_suit(result.suit)
    elif result.command == Command.UNDO:
        if session.undo() is None:
            click.echo("Nothing to undo.")
    elif result.command == Command.RESTART:
        session.restart()


def run_opponent(session: GameSession, delay: float) -> None:
    """Let the opponent act until the turn comes back or the game ends.

    The opponent keeps going only while its steps report that the turn
    continues (it drew a playable card).
    """
    if session.state.phase != Phase.OPPONENT_TURN:
        return
    while True:
        click.echo("Opponent is thinking...")
        time.sleep(delay)
        session.advance_opponent()
        if session.last_outcome is None:
            logger.warning("Opponent step was rejected")
            break
        click.echo(session.state.message)
        if session.last_outcome != TurnOutcome.CONTINUES:
            break


@click.command()
@click.option("--seed", type=int, default=None, help="Random seed for reproducibility")
@click.option(
    "--delay",
    type=float,
    default=DEFAULT_OPPONENT_DELAY,
    show_default=True,
    help="Seconds the opponent 'thinks' before each move",
)
@click.option("--debug", is_flag=True, help="Show the opponent's hand")
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
def main(seed: int | None, delay: float, debug: bool, verbose: bool):
    """Play Crazy Eights against the computer.

    Eights are wild. Match the suit or rank of the discard, or draw.
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG)
    else:
        logging.basicConfig(level=logging.INFO)

    config = SessionConfig(opponent_delay=delay, seed=seed, debug=debug)
    session = GameSession(config)
    renderer = StateRenderer()
    human = HumanPlayer()

    click.echo(f"Seed: {config.seed} (use --seed {config.seed} to replay)")
    click.echo("Commands: <n> play card n, d draw, u undo, r restart, q quit")
    session.start_game()

    try:
        while True:
            click.echo("")
            click.echo(renderer.render(session.state, session.undo_depth, config.debug))

            if session.state.phase == Phase.FINISHED:
                if not click.confirm("Play again?", default=True):
                    break
                session.restart()
                continue

            result = human.get_command(session.state)
            if result.quit:
                break
            if result.error:
                click.echo(result.error)
                continue

            apply_input(session, result)
            run_opponent(session, config.opponent_delay)
    except KeyboardInterrupt:
        click.echo("\n\nGame interrupted.")

    click.echo("\nThanks for playing!")


if __name__ == "__main__":
    main()
