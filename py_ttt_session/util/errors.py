from enum import StrEnum
from typing import ClassVar


class RejectionReason(StrEnum):
    INVALID_CELL_INDEX = "invalid_cell_index"
    CELL_OCCUPIED = "cell_occupied"
    WRONG_TURN = "wrong_turn"
    INVALID_MOVE = "invalid_move"
    GAME_NOT_IN_PROGRESS = "game_not_in_progress"
    ALREADY_STARTED = "already_started"
    RESTART_WHILE_IN_PROGRESS = "restart_while_in_progress"
    INVALID_PHASE = "invalid_phase"
    INTERNAL = "internal"


class GameError(Exception):
    reason: ClassVar[RejectionReason] = RejectionReason.INTERNAL


class LogicError(GameError):
    """Internal inconsistency. Never reported as a rejected action."""


# -----------------------------
# Move errors
# -----------------------------


class InvalidMoveError(GameError):
    reason = RejectionReason.INVALID_MOVE


class InvalidCellIndexError(InvalidMoveError):
    reason = RejectionReason.INVALID_CELL_INDEX


class CellOccupiedError(InvalidMoveError):
    reason = RejectionReason.CELL_OCCUPIED


class WrongTurnError(InvalidMoveError):
    reason = RejectionReason.WRONG_TURN


# -----------------------------
# Phase errors
# -----------------------------


class PhaseError(GameError):
    reason = RejectionReason.INVALID_PHASE


class GameNotInProgressError(PhaseError):
    reason = RejectionReason.GAME_NOT_IN_PROGRESS


class AlreadyStartedError(PhaseError):
    reason = RejectionReason.ALREADY_STARTED


class RestartWhileInProgressError(PhaseError):
    reason = RejectionReason.RESTART_WHILE_IN_PROGRESS
