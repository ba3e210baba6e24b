from dataclasses import dataclass

from py_ttt_session.game.board_utils import Mark


@dataclass(frozen=True, slots=True)
class Player:
    name: str
    mark: Mark

    def __str__(self) -> str:
        return f"{self.name} ({self.mark})"
