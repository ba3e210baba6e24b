import argparse
import logging
from collections.abc import Iterable

from py_ttt_session.engine.game_engine import GameEngine
from py_ttt_session.event_bus.event_bus import EventBus
from py_ttt_session.game.player import Player
from py_ttt_session.ui.ui import Ui

DEFAULT_PLAYER1 = "John"
DEFAULT_PLAYER2 = "Jane"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def main() -> None:  # noqa: D103
    ui_choices = ("tk", "pygame")
    args = _parse_args(ui_choices)

    logging.basicConfig(level=args.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    event_bus = EventBus()
    ui = _create_ui(args.ui, event_bus)
    game_engine = GameEngine(event_bus, Player(args.player1, "X"), Player(args.player2, "O"))
    game_engine.publish_initial_state()

    try:
        ui.start()
    finally:
        game_engine.close()
        event_bus.close()


def _create_ui(name: str, event_bus: EventBus) -> Ui:
    # Imported lazily so that a missing toolkit only matters when it is picked.
    match name:
        case "tk":
            from py_ttt_session.ui.tk import TkUi  # noqa: PLC0415

            return TkUi(event_bus)
        case "pygame":
            from py_ttt_session.ui.pygame import PygameUi  # noqa: PLC0415

            return PygameUi(event_bus)
        case _:
            msg = f"Unknown UI: {name}"
            raise ValueError(msg)


def _parse_args(ui_choices: Iterable[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="py_ttt_session", description="Two-player tic-tac-toe.")

    parser.add_argument("--ui", choices=tuple(ui_choices), default="tk")
    parser.add_argument("--player1", default=DEFAULT_PLAYER1, help="name of the player using X")
    parser.add_argument("--player2", default=DEFAULT_PLAYER2, help="name of the player using O")
    parser.add_argument("--log-level", choices=LOG_LEVELS, default="INFO")

    args = parser.parse_args()
    if not args.player1.strip() or not args.player2.strip():
        parser.error("player names must not be empty")
    return args


if __name__ == "__main__":
    main()
