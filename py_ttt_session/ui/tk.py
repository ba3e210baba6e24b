import tkinter as tk
from functools import partial
from typing import Final

from py_ttt_session.event_bus.event_bus import EventBus
from py_ttt_session.game.board_utils import BOARD_SIZE, CELL_COUNT
from py_ttt_session.ui.ui import Ui, color_to_hex


class TkUi(Ui):
    TITLE: Final = "Tic-Tac-Toe (Tk)"
    WIN_COLOR: Final = "#3fbf3f"
    DEFAULT_BG: Final = "#d9d9d9"

    def __init__(self, event_bus: EventBus) -> None:
        super().__init__(event_bus)
        self._buttons: list[tk.Button] = []

    def start(self) -> None:  # noqa: D102
        self._root = tk.Tk()
        self._root.title(self.TITLE)
        self._root.protocol("WM_DELETE_WINDOW", self.stop)
        self._root.bind("<Escape>", lambda _e: self._request_abort())

        self._build_start_menu()
        self._build_board()
        self._build_winner_menu()

        self._started = True
        self._render()
        self._root.mainloop()
        self._root.destroy()

    def stop(self) -> None:  # noqa: D102
        if not self._started:
            return
        self._started = False
        self._root.after(0, self._root.quit)

    # -----------------------------
    # UI construction
    # -----------------------------

    def _build_start_menu(self) -> None:
        self._start_menu = tk.Frame(self._root, padx=20, pady=10)
        tk.Label(self._start_menu, text="Tic-Tac-Toe", font=("Helvetica", 24)).pack()
        tk.Button(self._start_menu, text="Start", font=("Helvetica", 16), command=self._request_start).pack(pady=5)
        self._start_menu.grid(row=0, column=0)

    def _build_board(self) -> None:
        self._board_frame = tk.Frame(self._root, padx=10, pady=10)
        for i in range(CELL_COUNT):
            btn = tk.Button(
                self._board_frame,
                text="",
                width=5,
                height=2,
                font=("Helvetica", 32),
                command=partial(self._select_cell, i),
            )
            row, col = divmod(i, BOARD_SIZE)
            btn.grid(row=row, column=col, padx=2, pady=2)
            self._buttons.append(btn)
        self._status = tk.Label(self._board_frame, text="", font=("Helvetica", 14))
        self._status.grid(row=BOARD_SIZE, column=0, columnspan=BOARD_SIZE, pady=5)
        self._board_frame.grid(row=1, column=0)

    def _build_winner_menu(self) -> None:
        self._winner_menu = tk.Frame(self._root, padx=20, pady=10)
        self._winner_name = tk.Label(self._winner_menu, text="", font=("Helvetica", 24))
        self._winner_name.pack()
        self._text1 = tk.Label(self._winner_menu, text="", font=("Helvetica", 14))
        self._text1.pack()
        tk.Button(
            self._winner_menu,
            text="Play again",
            font=("Helvetica", 16),
            command=self._request_restart,
        ).pack(pady=5)
        self._winner_menu.grid(row=2, column=0)

    # -----------------------------
    # Rendering
    # -----------------------------

    def _render(self) -> None:
        if not self._started:
            return

        if self.start_menu_visible:
            self._start_menu.grid()
        else:
            self._start_menu.grid_remove()

        if self.winner_menu_visible:
            self._winner_name.config(text=self.winner_text)
            self._text1.config(text=self.winner_subtitle)
            self._winner_menu.grid()
        else:
            self._winner_menu.grid_remove()

        turn_color = color_to_hex(self.turn_color)
        win_line = self.winning_line or ()
        for i, (btn, mark) in enumerate(zip(self._buttons, self.cells, strict=True)):
            btn.config(
                text=mark or "",
                state=tk.NORMAL if self.cell_enabled[i] else tk.DISABLED,
                bg=self.WIN_COLOR if i in win_line else self.DEFAULT_BG,
                disabledforeground=color_to_hex(self.mark_color(mark)) if mark else "black",
                activebackground=turn_color,
            )

        self._status.config(text=self._status_text(), fg=turn_color)
        self._root.title(f"{self.TITLE} - {self.current_player}" if any(self.cell_enabled) else self.TITLE)

    def _status_text(self) -> str:
        if self.start_menu_visible or self.winner_menu_visible:
            return ""
        if self.last_rejection is not None:
            return self.last_rejection.message
        return f"{self.current_player}'s turn"
