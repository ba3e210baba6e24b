import logging
from collections.abc import Callable

from py_ttt_session.event_bus.event_bus import (
    ActionRejected,
    BoardUpdated,
    CellSelected,
    EventBus,
    RestartRequested,
    StartRequested,
)
from py_ttt_session.game.board import Board
from py_ttt_session.game.player import Player
from py_ttt_session.game.session import GameSession
from py_ttt_session.util.errors import GameError, LogicError

logger = logging.getLogger(__name__)


class GameEngine:
    """Application controller for one match.

    Routes input events to the session and its board, reports rejected actions
    and publishes a board snapshot after every handled input.
    """

    def __init__(self, event_bus: EventBus, player1: Player, player2: Player) -> None:
        self._event_bus = event_bus
        self._session = GameSession(player1, player2, event_bus)
        self._event_bus.subscribe(StartRequested, self._on_start_requested)
        self._event_bus.subscribe(CellSelected, self._on_cell_selected)
        self._event_bus.subscribe(RestartRequested, self._on_restart_requested)

    @property
    def session(self) -> GameSession:  # noqa: D102
        return self._session

    @property
    def board(self) -> Board:  # noqa: D102
        return self._session.board

    def publish_initial_state(self) -> None:  # noqa: D102
        self._publish_board_updated()

    def start(self) -> bool:  # noqa: D102
        return self._run(self._session.start)

    def select_cell(self, index: int) -> bool:  # noqa: D102
        mark = self._session.current_player().mark
        return self._run(lambda: self.board.apply_move(index, mark))

    def restart(self, *, force: bool = False) -> bool:  # noqa: D102
        return self._run(lambda: self._session.restart(force=force))

    def close(self) -> None:  # noqa: D102
        self._event_bus.unsubscribe(StartRequested, self._on_start_requested)
        self._event_bus.unsubscribe(CellSelected, self._on_cell_selected)
        self._event_bus.unsubscribe(RestartRequested, self._on_restart_requested)

    def _on_start_requested(self, _event: StartRequested) -> None:
        self.start()

    def _on_cell_selected(self, event: CellSelected) -> None:
        self.select_cell(event.index)

    def _on_restart_requested(self, event: RestartRequested) -> None:
        self.restart(force=event.force)

    def _run(self, action: Callable[[], None]) -> bool:
        """Run one core action, report a rejection, then publish the board.

        Returns False when the action was rejected.
        """
        accepted = True
        try:
            action()
        except LogicError:
            raise
        except GameError as e:
            logger.warning("Action rejected (%s): %s", e.reason, e)
            self._event_bus.publish(ActionRejected(str(e.reason), str(e)))
            accepted = False
        self._publish_board_updated()
        return accepted

    def _publish_board_updated(self) -> None:
        board = self.board
        cells = board.cells
        self._event_bus.publish(
            BoardUpdated(
                cells=cells,
                cell_enabled=tuple(board.active and cell is None for cell in cells),
                active=board.active,
                turn_indicator=board.turn_indicator,
                current_player=self._session.current_player().name,
                winning_line=board.winning_line,
                player_marks=(self._session.player1.mark, self._session.player2.mark),
            ),
        )
