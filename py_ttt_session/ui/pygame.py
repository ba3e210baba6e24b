from typing import Final

import pygame

from py_ttt_session.event_bus.event_bus import EventBus
from py_ttt_session.game.board_utils import BOARD_SIZE
from py_ttt_session.ui.ui import Ui


class PygameUi(Ui):
    TITLE: Final = "Tic-Tac-Toe (Pygame)"
    WINDOW_SIZE: Final = 480
    STATUS_HEIGHT: Final = 40
    CELL_SIZE: Final = WINDOW_SIZE // BOARD_SIZE
    LINE_WIDTH: Final = 4

    BG_COLOR: Final = (0, 0, 0)
    LINE_COLOR: Final = (127, 127, 127)
    WIN_COLOR: Final = (63, 191, 63)
    OVERLAY_COLOR: Final = (0, 0, 0, 200)
    TEXT_COLOR: Final = (255, 255, 255)

    def __init__(self, event_bus: EventBus) -> None:
        super().__init__(event_bus)
        self._running = False

    def start(self) -> None:  # noqa: D102
        pygame.init()
        self._screen = pygame.display.set_mode((self.WINDOW_SIZE, self.WINDOW_SIZE + self.STATUS_HEIGHT))
        pygame.display.set_caption(self.TITLE)

        self._font = pygame.font.SysFont(None, 96)
        self._small_font = pygame.font.SysFont(None, 48)
        self._click_font = pygame.font.SysFont(None, 24)

        self._running = True
        self._started = True
        self._main_loop()

    def stop(self) -> None:  # noqa: D102
        self._running = False

    # -----------------------------
    # Main loop
    # -----------------------------

    def _main_loop(self) -> None:
        clock = pygame.time.Clock()

        while self._running:
            clock.tick(60)
            self._handle_events()
            self._draw()

        self._started = False
        pygame.quit()

    # -----------------------------
    # Rendering
    # -----------------------------

    def _render(self) -> None:
        # The main loop redraws every frame from the shell state.
        if self._started:
            pygame.display.set_caption(f"{self.TITLE} - {self.current_player}" if any(self.cell_enabled) else self.TITLE)

    def _draw(self) -> None:
        self._screen.fill(self.BG_COLOR)
        self._draw_winning_line()
        self._draw_grid()
        self._draw_marks()
        self._draw_status()
        if self.start_menu_visible:
            self._draw_menu("Tic-Tac-Toe", "Click anywhere to start")
        elif self.winner_menu_visible:
            title = f"{self.winner_text} {self.winner_subtitle}".strip()
            self._draw_menu(title, "Click anywhere to play again")
        pygame.display.flip()

    def _draw_grid(self) -> None:
        for i in range(1, BOARD_SIZE):
            pygame.draw.line(
                self._screen,
                self.LINE_COLOR,
                (0, i * self.CELL_SIZE),
                (self.WINDOW_SIZE, i * self.CELL_SIZE),
                self.LINE_WIDTH,
            )
            pygame.draw.line(
                self._screen,
                self.LINE_COLOR,
                (i * self.CELL_SIZE, 0),
                (i * self.CELL_SIZE, self.WINDOW_SIZE),
                self.LINE_WIDTH,
            )

    def _draw_winning_line(self) -> None:
        for index in self.winning_line or ():
            row, col = divmod(index, BOARD_SIZE)
            rect = pygame.Rect(col * self.CELL_SIZE, row * self.CELL_SIZE, self.CELL_SIZE, self.CELL_SIZE)
            pygame.draw.rect(self._screen, self.WIN_COLOR, rect)

    def _draw_marks(self) -> None:
        for index, value in enumerate(self.cells):
            if value is None:
                continue
            row, col = divmod(index, BOARD_SIZE)
            text = self._font.render(value, True, self.mark_color(value))  # noqa: FBT003
            rect = text.get_rect(
                center=(col * self.CELL_SIZE + self.CELL_SIZE // 2, row * self.CELL_SIZE + self.CELL_SIZE // 2),
            )
            self._screen.blit(text, rect)

    def _draw_status(self) -> None:
        if self.last_rejection is not None:
            message = self.last_rejection.message
        elif any(self.cell_enabled):
            message = f"{self.current_player}'s turn"
        else:
            return
        text = self._click_font.render(message, True, self.turn_color)  # noqa: FBT003
        rect = text.get_rect(center=(self.WINDOW_SIZE // 2, self.WINDOW_SIZE + self.STATUS_HEIGHT // 2))
        self._screen.blit(text, rect)

    def _draw_menu(self, title: str, hint: str) -> None:
        overlay = pygame.Surface(self._screen.get_size(), pygame.SRCALPHA)
        overlay.fill(self.OVERLAY_COLOR)
        self._screen.blit(overlay, (0, 0))

        main_text = self._small_font.render(title, True, self.TEXT_COLOR)  # noqa: FBT003
        click_text = self._click_font.render(hint, True, self.TEXT_COLOR)  # noqa: FBT003
        main_rect = main_text.get_rect(center=(self.WINDOW_SIZE // 2, self.WINDOW_SIZE // 2 - 20))
        click_rect = click_text.get_rect(center=(self.WINDOW_SIZE // 2, self.WINDOW_SIZE // 2 + 20))
        self._screen.blit(main_text, main_rect)
        self._screen.blit(click_text, click_rect)

    # -----------------------------
    # Event handling
    # -----------------------------

    def _handle_events(self) -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.stop()
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                self._request_abort()
            elif event.type == pygame.MOUSEBUTTONDOWN:
                self._on_click(event.pos)

    def _on_click(self, pos: tuple[int, int]) -> None:
        if self.start_menu_visible:
            self._request_start()
            return

        if self.winner_menu_visible:
            self._request_restart()
            return

        x, y = pos
        col = x // self.CELL_SIZE
        row = y // self.CELL_SIZE

        if row >= BOARD_SIZE or col >= BOARD_SIZE:
            return

        self._select_cell(row * BOARD_SIZE + col)
