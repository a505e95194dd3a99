"""
Replay - Append-only record of every committed event.

The log is an external observer: it reads events and never touches the
game. Each game gets its own record with the initial supply order and a
sequence number per entry that starts at 0 and only grows.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any

from .events import Event, Observer


@dataclass(frozen=True)
class ReplayEntry:
    seq: int
    item: Event


@dataclass
class GameRecord:
    game_id: str
    initial_supply: list[str]
    entries: list[ReplayEntry] = field(default_factory=list)
    finished: bool = False

    def items(self) -> list[Event]:
        return [entry.item for entry in self.entries]


class ReplayLog(Observer):
    """Keeps the record of the running game and of every finished one."""

    def __init__(self):
        self.current: GameRecord | None = None
        self._history: list[GameRecord] = []

    def start(self, game_id: str, initial_supply: list[str]) -> GameRecord:
        if self.current is not None:
            self.finish()
        self.current = GameRecord(game_id=game_id, initial_supply=list(initial_supply))
        return self.current

    def log(self, item: Event) -> ReplayEntry:
        if self.current is None:
            raise RuntimeError("ReplayLog.log called before start")
        entry = ReplayEntry(seq=len(self.current.entries), item=item)
        self.current.entries.append(entry)
        return entry

    def update(self, event: Event, game: Any) -> None:
        self.log(event)

    def finish(self) -> GameRecord | None:
        record = self.current
        if record is not None:
            record.finished = True
            self._history.append(record)
            self.current = None
        return record

    def history(self) -> list[GameRecord]:
        return list(self._history)

    def get(self, game_id: str) -> GameRecord | None:
        if self.current is not None and self.current.game_id == game_id:
            return self.current
        for record in self._history:
            if record.game_id == game_id:
                return record
        return None
