import logging
from enum import Enum, auto

from py_ttt_session.event_bus.event_bus import EventBus, MatchReset, MatchStarted, TieDeclared, WinnerDeclared
from py_ttt_session.game.board import Board
from py_ttt_session.game.board_utils import PlayerId
from py_ttt_session.game.player import Player
from py_ttt_session.util.errors import (
    AlreadyStartedError,
    GameNotInProgressError,
    LogicError,
    RestartWhileInProgressError,
)

logger = logging.getLogger(__name__)

TIE_MESSAGE = "Match is a tie!"


class Phase(Enum):
    NOT_STARTED = auto()
    IN_PROGRESS = auto()
    WON = auto()
    TIED = auto()

    @property
    def is_terminal(self) -> bool:  # noqa: D102
        return self in (Phase.WON, Phase.TIED)


class GameSession:
    """Players, turn order and the phase of the current match.

    The session owns its board and is both the board's turn source and its
    outcome sink. Match level changes are published on the event bus.
    """

    def __init__(self, player1: Player, player2: Player, event_bus: EventBus) -> None:
        if player1.mark == player2.mark:
            msg = f"Players must use different marks, both use {player1.mark}"
            raise ValueError(msg)

        self._player1 = player1
        self._player2 = player2
        self._current_player = player1
        self._phase = Phase.NOT_STARTED
        self._winner: Player | None = None
        self._event_bus = event_bus
        self._board = Board(turn_source=self, outcome_sink=self)

        logger.info("Player1: %s", player1)
        logger.info("Player2: %s", player2)

    @property
    def player1(self) -> Player:  # noqa: D102
        return self._player1

    @property
    def player2(self) -> Player:  # noqa: D102
        return self._player2

    @property
    def board(self) -> Board:  # noqa: D102
        return self._board

    @property
    def phase(self) -> Phase:  # noqa: D102
        return self._phase

    @property
    def winner(self) -> Player | None:  # noqa: D102
        return self._winner

    def current_player(self) -> Player:  # noqa: D102
        return self._current_player

    def current_player_id(self) -> PlayerId:  # noqa: D102
        return self.player_id(self._current_player)

    def player_id(self, player: Player) -> PlayerId:  # noqa: D102
        if player is self._player1:
            return "player1"
        if player is self._player2:
            return "player2"
        msg = f"{player} does not belong to this session"
        raise LogicError(msg)

    def in_progress(self) -> bool:  # noqa: D102
        return self._phase is Phase.IN_PROGRESS

    # -----------------------------
    # Match lifecycle
    # -----------------------------

    def start(self) -> None:  # noqa: D102
        if self._phase is not Phase.NOT_STARTED:
            msg = f"Cannot start a match in phase {self._phase.name}"
            raise AlreadyStartedError(msg)

        logger.info("Starting game")
        self._phase = Phase.IN_PROGRESS
        self._board.toggle_active()
        self._event_bus.publish(MatchStarted(self._player1.name, self._player2.name))

    def switch_turn(self) -> None:  # noqa: D102
        self._require_in_progress("switch turn")

        self._current_player = self._player2 if self._current_player is self._player1 else self._player1
        logger.info("Switching player: %s", self._current_player)
        self._board.set_color_for_player(self.current_player_id())

    def declare_winner(self, player: Player) -> None:  # noqa: D102
        self._require_in_progress("declare a winner")

        logger.info("%s is the winner!", player.name)
        self._phase = Phase.WON
        self._winner = player
        self._board.toggle_active()
        self._event_bus.publish(
            WinnerDeclared(player.name, player.mark, self.player_id(player), self._board.winning_line),
        )

    def declare_tie(self) -> None:  # noqa: D102
        self._require_in_progress("declare a tie")

        logger.info("Tie match")
        self._phase = Phase.TIED
        self._board.toggle_active()
        self._event_bus.publish(TieDeclared(TIE_MESSAGE))

    def restart(self, *, force: bool = False) -> None:
        """Return the match to its initial state.

        Only a finished match is restarted unless ``force`` is set, which aborts
        a match in progress. Restarting a match that never started does nothing.
        """
        if self._phase is Phase.NOT_STARTED:
            logger.debug("Restart ignored, match not started")
            return

        if self._phase is Phase.IN_PROGRESS:
            if not force:
                raise RestartWhileInProgressError("Match still in progress")
            logger.warning("Aborting match in progress")
            self._board.toggle_active()

        logger.info("Restarting game...")
        self._board.restart()
        self._phase = Phase.NOT_STARTED
        self._winner = None
        self._current_player = self._player1
        self._event_bus.publish(MatchReset())

    # -----------------------------
    # Board callbacks
    # -----------------------------

    def on_win(self, player: Player) -> None:  # noqa: D102
        self.declare_winner(player)

    def on_tie(self) -> None:  # noqa: D102
        self.declare_tie()

    def _require_in_progress(self, action: str) -> None:
        if self._phase is not Phase.IN_PROGRESS:
            msg = f"Cannot {action}: game not in progress"
            raise GameNotInProgressError(msg)
