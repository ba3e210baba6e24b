import logging
from typing import Protocol

from py_ttt_session.game.board_utils import (
    CELL_COUNT,
    Line,
    Mark,
    PlayerId,
    count_open_cells,
    get_winning_line,
    is_draw,
    is_valid_cell_index,
)
from py_ttt_session.game.player import Player
from py_ttt_session.util.errors import (
    CellOccupiedError,
    GameNotInProgressError,
    InvalidCellIndexError,
    LogicError,
    WrongTurnError,
)

logger = logging.getLogger(__name__)


class TurnSource(Protocol):
    def current_player(self) -> Player: ...

    def switch_turn(self) -> None: ...

    def in_progress(self) -> bool: ...


class OutcomeSink(Protocol):
    def on_win(self, player: Player) -> None: ...

    def on_tie(self) -> None: ...


class Board:
    """The 3x3 grid of a match.

    Cells are indexed 0-8, row by row. A cell is filled once per match and only
    ``restart()`` empties it again. The board asks its turn source whose mark to
    place and reports terminal outcomes to its outcome sink.
    """

    def __init__(self, turn_source: TurnSource, outcome_sink: OutcomeSink) -> None:
        self._turn_source = turn_source
        self._outcome_sink = outcome_sink
        self._cells: list[Mark | None] = [None] * CELL_COUNT
        self._open_cell_count = CELL_COUNT
        self._active = False
        self._turn_indicator: PlayerId = "player1"
        self._winning_line: Line | None = None

    @property
    def cells(self) -> tuple[Mark | None, ...]:  # noqa: D102
        return tuple(self._cells)

    @property
    def open_cell_count(self) -> int:  # noqa: D102
        return self._open_cell_count

    @property
    def occupied_count(self) -> int:  # noqa: D102
        return CELL_COUNT - self._open_cell_count

    @property
    def active(self) -> bool:  # noqa: D102
        return self._active

    @property
    def turn_indicator(self) -> PlayerId:  # noqa: D102
        return self._turn_indicator

    @property
    def winning_line(self) -> Line | None:  # noqa: D102
        return self._winning_line

    def cell(self, index: int) -> Mark | None:  # noqa: D102
        self._check_index(index)
        return self._cells[index]

    def is_cell_open(self, index: int) -> bool:  # noqa: D102
        return self.cell(index) is None

    def open_cells(self) -> list[int]:  # noqa: D102
        return [i for i, cell in enumerate(self._cells) if cell is None]

    # -----------------------------
    # Moves
    # -----------------------------

    def apply_move(self, cell_index: int, mark: Mark | None = None) -> None:
        """Place a mark and resolve the move.

        Without ``mark`` the current player's mark is used. All checks run before
        the cell is touched, so a rejected move leaves the board unchanged.
        After placing the mark the winner check runs first, then the tie check,
        and only a non-terminal move switches the turn.
        """
        self._check_index(cell_index)

        if not self._active or not self._turn_source.in_progress():
            raise GameNotInProgressError("Game not in progress")

        if self._cells[cell_index] is not None:
            raise CellOccupiedError(f"Cell {cell_index} occupied")

        player = self._turn_source.current_player()
        if mark is not None and mark != player.mark:
            msg = f"Not your turn: {player.name} plays {player.mark}"
            raise WrongTurnError(msg)

        self._cells[cell_index] = player.mark
        self._open_cell_count -= 1
        if self._open_cell_count != count_open_cells(self._cells):
            msg = f"Open cell count {self._open_cell_count} does not match the board"
            raise LogicError(msg)
        logger.info("%s played cell %d", player, cell_index)

        if self.check_winner():
            self._outcome_sink.on_win(player)
            return

        if self.check_tie():
            self._outcome_sink.on_tie()
            return

        self._turn_source.switch_turn()

    def check_winner(self) -> bool:  # noqa: D102
        self._winning_line = get_winning_line(self._cells)
        return self._winning_line is not None

    def check_tie(self) -> bool:  # noqa: D102
        return self._open_cell_count == 0 and is_draw(self._cells)

    # -----------------------------
    # Presentation state
    # -----------------------------

    def toggle_active(self) -> None:  # noqa: D102
        self._active = not self._active
        logger.debug("Board %s", "active" if self._active else "inactive")

    def set_color_for_player(self, player_id: PlayerId) -> None:  # noqa: D102
        self._turn_indicator = player_id

    def restart(self) -> None:  # noqa: D102
        logger.info("Restarting board...")
        self._cells = [None] * CELL_COUNT
        self._open_cell_count = CELL_COUNT
        self._winning_line = None
        self.set_color_for_player("player1")

    def _check_index(self, index: int) -> None:
        if not is_valid_cell_index(index):
            msg = f"Cell index out of range: {index!r}"
            raise InvalidCellIndexError(msg)
