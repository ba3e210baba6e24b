import logging
import threading
from collections.abc import Callable
from dataclasses import asdict, dataclass, is_dataclass
from typing import TypeVar, cast

from py_ttt_session.game.board_utils import Line, Mark, PlayerId

logger = logging.getLogger(__name__)


class Event:
    def to_dict(self) -> dict[str, object]:  # noqa: D102
        if not is_dataclass(self):
            raise TypeError("Expected a dataclass instance")

        data = asdict(self)
        data["type"] = self.__class__.__name__
        return data


# -----------------------------
# Input events (presentation -> core)
# -----------------------------


@dataclass(frozen=True)
class StartRequested(Event):
    pass


@dataclass(frozen=True)
class CellSelected(Event):
    index: int


@dataclass(frozen=True)
class RestartRequested(Event):
    force: bool = False


# -----------------------------
# Notifications (core -> presentation)
# -----------------------------


@dataclass(frozen=True)
class MatchStarted(Event):
    player1: str
    player2: str


@dataclass(frozen=True)
class BoardUpdated(Event):
    cells: tuple[Mark | None, ...]
    cell_enabled: tuple[bool, ...]
    active: bool
    turn_indicator: PlayerId
    current_player: str
    winning_line: Line | None
    player_marks: tuple[Mark, Mark] = ("X", "O")


@dataclass(frozen=True)
class WinnerDeclared(Event):
    name: str
    mark: Mark
    player_id: PlayerId
    line: Line | None


@dataclass(frozen=True)
class TieDeclared(Event):
    message: str


@dataclass(frozen=True)
class MatchReset(Event):
    pass


@dataclass(frozen=True)
class ActionRejected(Event):
    reason: str
    message: str


E = TypeVar("E", bound=Event)


class EventBus:
    """Synchronous publish/subscribe keyed by event type.

    ``publish`` delivers to every handler before returning, so one input is fully
    processed before the next one is accepted.
    """

    def __init__(self) -> None:
        self._handlers: dict[type[Event], list[Callable[[Event], None]]] = {}
        self._handlers_lock = threading.RLock()

    def subscribe(self, event_type: type[E], handler: Callable[[E], None]) -> None:  # noqa: D102
        with self._handlers_lock:
            self._handlers.setdefault(event_type, []).append(cast("Callable[[Event], None]", handler))

    def unsubscribe(self, event_type: type[E], handler: Callable[[E], None]) -> None:  # noqa: D102
        with self._handlers_lock:
            handlers = self._handlers.get(event_type)
            if not handlers:
                return
            try:
                handlers.remove(cast("Callable[[Event], None]", handler))
            except ValueError:
                return
            if not handlers:
                self._handlers.pop(event_type, None)

    def publish(self, event: Event) -> None:  # noqa: D102
        with self._handlers_lock:
            handlers = self._handlers.get(type(event), []).copy()
        logger.debug("Publishing %s to %d handler(s)", event.to_dict(), len(handlers))
        for handler in handlers:
            handler(event)

    def close(self) -> None:  # noqa: D102
        with self._handlers_lock:
            self._handlers.clear()
