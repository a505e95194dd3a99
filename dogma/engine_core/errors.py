"""Exception types raised by the engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass
class ErrorDetails:
    """Structured metadata associated with an exception."""

    code: str
    message: str


class GameRuleViolation(Exception):
    """Base class for rule related exceptions."""

    error_code = "ERR_RULE_VIOLATION"

    def __init__(self, message: str, *, details: ErrorDetails | None = None) -> None:
        super().__init__(message)
        self.details = details or ErrorDetails(code=self.error_code, message=message)

    @property
    def code(self) -> str:
        return self.details.code


class InvalidAction(GameRuleViolation):
    """An action does not fit the current decision; nothing was changed."""

    error_code = "ERR_INVALID_ACTION"


class CardNotFound(GameRuleViolation):
    """A selector matched no card in the requested place."""

    error_code = "ERR_CARD_NOT_FOUND"


class WinKind(Enum):
    SOMEONE = "someone"
    BY_SCORE = "by_score"


@dataclass(frozen=True)
class WinningSituation:
    kind: WinKind
    player_id: int | None = None

    @classmethod
    def someone(cls, player_id: int) -> WinningSituation:
        return cls(WinKind.SOMEONE, player_id)

    @classmethod
    def by_score(cls) -> WinningSituation:
        return cls(WinKind.BY_SCORE)


class Win(GameRuleViolation):
    """
    The game has ended.

    Raised as an exception so it unwinds every enclosing operation and
    effect. ``current_player`` is filled by the innermost frame that knows
    which player caused the end and is never overwritten afterwards.
    """

    error_code = "ERR_WIN"

    def __init__(self, situation: WinningSituation, current_player: int | None = None) -> None:
        if situation.kind is WinKind.SOMEONE:
            message = f"player {situation.player_id} wins"
        else:
            message = "supply exhausted, winner by score"
        super().__init__(message)
        self.situation = situation
        self.current_player = current_player

    def attribute(self, player_id: int) -> Win:
        if self.current_player is None:
            self.current_player = player_id
        return self


__all__ = [
    "ErrorDetails",
    "GameRuleViolation",
    "InvalidAction",
    "CardNotFound",
    "WinKind",
    "WinningSituation",
    "Win",
]
