from collections.abc import Sequence
from typing import Final, Literal, TypeAlias

BOARD_SIZE: Final = 3
CELL_COUNT: Final = BOARD_SIZE * BOARD_SIZE

Mark: TypeAlias = Literal["X", "O"]
PlayerId: TypeAlias = Literal["player1", "player2"]
Line: TypeAlias = tuple[int, int, int]

# Rows, then columns, then diagonals.
WINNING_LINES: Final[tuple[Line, ...]] = (
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    (0, 4, 8),
    (2, 4, 6),
)


def is_valid_cell_index(index: object) -> bool:  # noqa: D103
    # bool is an int subclass, True must not address cell 1.
    return isinstance(index, int) and not isinstance(index, bool) and 0 <= index < CELL_COUNT


def get_winning_line(cells: Sequence[Mark | None]) -> Line | None:
    """Return the first completed line in row, column, diagonal order."""
    for line in WINNING_LINES:
        a, b, c = line
        if cells[a] is not None and cells[a] == cells[b] == cells[c]:
            return line
    return None


def count_open_cells(cells: Sequence[Mark | None]) -> int:  # noqa: D103
    return sum(1 for cell in cells if cell is None)


def is_board_full(cells: Sequence[Mark | None]) -> bool:  # noqa: D103
    return count_open_cells(cells) == 0


def is_draw(cells: Sequence[Mark | None]) -> bool:  # noqa: D103
    return is_board_full(cells) and get_winning_line(cells) is None
