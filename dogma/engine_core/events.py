"""
Events - Committed changes and the dispatcher that delivers them.

Every successful state change is announced as one event after it is
committed. Observers come in two kinds:
- External observers (replay log, event logger) only read
- Internal observers (achievement manager, win checker) may change state;
  the events they cause are queued behind the current one

Delivery is first-in first-out. A notification raised while a drain is in
progress only enqueues, so observers never see events out of order and
never run reentrantly.
"""

from __future__ import annotations
from collections import deque
from dataclasses import dataclass
from enum import Enum
import logging
from typing import TYPE_CHECKING, Any, Union

from .state import Achievement, Card, Color, SplayDirection

if TYPE_CHECKING:
    from .action import Action
    from .transfer import Place


class OpKind(Enum):
    """The rules verb behind a card movement."""
    DRAW = "draw"
    MELD = "meld"
    TUCK = "tuck"
    SCORE = "score"
    RETURN = "return"
    TRANSFER = "transfer"


# ============================================================================
# Event items
# ============================================================================

@dataclass(frozen=True)
class Submitted:
    """An action accepted by the state machine."""
    player_id: int
    action: "Action"


@dataclass(frozen=True)
class Transferred:
    op: OpKind
    actor: int | None
    source: "Place"
    dest: "Place"
    card: Card


@dataclass(frozen=True)
class Splayed:
    player_id: int
    color: Color
    direction: SplayDirection


@dataclass(frozen=True)
class Achieved:
    player_id: int
    achievement: Achievement


@dataclass(frozen=True)
class ChangeTurn:
    previous: int
    current: int


@dataclass(frozen=True)
class NextAction:
    player_id: int


@dataclass(frozen=True)
class GameEnded:
    winners: tuple[int, ...]
    current_player: int


Event = Union[Submitted, Transferred, Splayed, Achieved, ChangeTurn, NextAction, GameEnded]

OPERATION_EVENTS = (Transferred, Splayed, Achieved)


def is_operation(event: Event) -> bool:
    """True for events that record a change to cards, splays or achievements."""
    return isinstance(event, OPERATION_EVENTS)


# ============================================================================
# Observers
# ============================================================================

class Observer:
    """Receives every committed event."""

    def update(self, event: Event, game: Any) -> None:
        raise NotImplementedError


class Dispatcher:
    """
    FIFO event queue with a reentrancy guard.

    External observers receive each event before internal ones. If an
    observer raises, the rest of the queue is dropped and the exception
    reaches whoever called ``notify`` first.
    """

    def __init__(self):
        self._queue: deque[Event] = deque()
        self._dispatching = False
        self._external: list[Observer] = []
        self._internal: list[Observer] = []

    @property
    def dispatching(self) -> bool:
        return self._dispatching

    def add_external(self, observer: Observer) -> None:
        self._external.append(observer)

    def remove_external(self, observer: Observer) -> None:
        if observer in self._external:
            self._external.remove(observer)

    def add_internal(self, observer: Observer) -> None:
        self._internal.append(observer)

    @property
    def external(self) -> list[Observer]:
        return list(self._external)

    @property
    def internal(self) -> list[Observer]:
        return list(self._internal)

    def notify(self, event: Event, game: Any) -> None:
        self._queue.append(event)
        if self._dispatching:
            return

        self._dispatching = True
        try:
            while self._queue:
                current = self._queue.popleft()
                for observer in list(self._external):
                    observer.update(current, game)
                for observer in list(self._internal):
                    observer.update(current, game)
        except BaseException:
            self._queue.clear()
            raise
        finally:
            self._dispatching = False


class EventLogger(Observer):
    """Writes every event to the ``dogma.events`` logger."""

    def __init__(self, name: str = "dogma.events"):
        self.log = logging.getLogger(name)

    def update(self, event: Event, game: Any) -> None:
        self.log.debug("%s", event)
