from abc import ABC, abstractmethod
from typing import Final

from py_ttt_session.event_bus.event_bus import (
    ActionRejected,
    BoardUpdated,
    CellSelected,
    EventBus,
    MatchReset,
    MatchStarted,
    RestartRequested,
    StartRequested,
    TieDeclared,
    WinnerDeclared,
)
from py_ttt_session.game.board_utils import CELL_COUNT, Line, Mark, PlayerId

PLAYER_COLORS: Final[dict[PlayerId, tuple[int, int, int]]] = {
    "player1": (191, 63, 63),
    "player2": (63, 63, 191),
}


def color_to_hex(color: tuple[int, int, int]) -> str:  # noqa: D103
    return "#{:02x}{:02x}{:02x}".format(*color)


class Ui(ABC):
    """Presentation shell.

    Keeps the state the menus and the grid are drawn from and turns user input
    into input events. Concrete UIs only draw that state and feed clicks in.
    """

    def __init__(self, event_bus: EventBus) -> None:
        self._event_bus = event_bus
        self._event_bus.subscribe(BoardUpdated, self._on_board_updated)
        self._event_bus.subscribe(MatchStarted, self._on_match_started)
        self._event_bus.subscribe(WinnerDeclared, self._on_winner_declared)
        self._event_bus.subscribe(TieDeclared, self._on_tie_declared)
        self._event_bus.subscribe(MatchReset, self._on_match_reset)
        self._event_bus.subscribe(ActionRejected, self._on_action_rejected)
        self._started = False

        self.start_menu_visible = True
        self.winner_menu_visible = False
        self.winner_text = ""
        self.winner_subtitle = ""
        self.cells: tuple[Mark | None, ...] = (None,) * CELL_COUNT
        self.cell_enabled: tuple[bool, ...] = (False,) * CELL_COUNT
        self.turn_indicator: PlayerId = "player1"
        self.current_player = ""
        self.winning_line: Line | None = None
        self.player_marks: tuple[Mark, Mark] = ("X", "O")
        self.last_rejection: ActionRejected | None = None

    @abstractmethod
    def start(self) -> None:  # noqa: D102
        pass

    @abstractmethod
    def stop(self) -> None:  # noqa: D102
        pass

    @property
    def started(self) -> bool:  # noqa: D102
        return self._started

    @property
    def turn_color(self) -> tuple[int, int, int]:  # noqa: D102
        return PLAYER_COLORS[self.turn_indicator]

    def mark_color(self, mark: Mark) -> tuple[int, int, int]:  # noqa: D102
        return PLAYER_COLORS["player1" if mark == self.player_marks[0] else "player2"]

    # -----------------------------
    # User input
    # -----------------------------

    def _request_start(self) -> None:
        if not self.start_menu_visible:
            return
        self._event_bus.publish(StartRequested())

    def _select_cell(self, index: int) -> None:
        # Played cells and an inactive board do not take clicks.
        if not self.cell_enabled[index]:
            return
        self.last_rejection = None
        self._event_bus.publish(CellSelected(index))

    def _request_restart(self) -> None:
        if not self.winner_menu_visible:
            return
        self._event_bus.publish(RestartRequested())

    def _request_abort(self) -> None:
        if self.start_menu_visible or self.winner_menu_visible:
            return
        self._event_bus.publish(RestartRequested(force=True))

    # -----------------------------
    # Notifications
    # -----------------------------

    def _on_board_updated(self, event: BoardUpdated) -> None:
        self.cells = event.cells
        self.cell_enabled = event.cell_enabled
        self.turn_indicator = event.turn_indicator
        self.current_player = event.current_player
        self.winning_line = event.winning_line
        self.player_marks = event.player_marks
        self._render()

    def _on_match_started(self, _event: MatchStarted) -> None:
        self.start_menu_visible = False
        self.last_rejection = None
        self._render()

    def _on_winner_declared(self, event: WinnerDeclared) -> None:
        self.winner_text = event.name
        self.winner_subtitle = "is the winner!"
        self.winner_menu_visible = True
        self._render()

    def _on_tie_declared(self, event: TieDeclared) -> None:
        self.winner_text = event.message
        self.winner_subtitle = ""
        self.winner_menu_visible = True
        self._render()

    def _on_match_reset(self, _event: MatchReset) -> None:
        self.winner_menu_visible = False
        self.winner_text = ""
        self.start_menu_visible = True
        self._render()

    def _on_action_rejected(self, event: ActionRejected) -> None:
        self.last_rejection = event
        self._render()

    @abstractmethod
    def _render(self) -> None:
        pass
