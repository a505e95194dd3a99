"""
Action System - Actions, payloads, and results.

Actions are either:
1. Main actions taken on a player's turn (draw, meld, achieve, execute)
2. Answers to a suspended effect (card, opponent, yn)

Every accepted action is announced to observers and lands in the replay log.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ActionType(Enum):
    """Types of actions in the system."""
    # Main actions
    DRAW = "draw"
    MELD = "meld"
    ACHIEVE = "achieve"
    EXECUTE = "execute"

    # Answers to a pending decision
    CARD = "card"
    OPPONENT = "opponent"
    YN = "yn"

    @property
    def is_main(self) -> bool:
        return self in MAIN_ACTIONS


MAIN_ACTIONS = frozenset({ActionType.DRAW, ActionType.MELD, ActionType.ACHIEVE, ActionType.EXECUTE})


@dataclass(frozen=True)
class ActionPayload:
    """
    Parameters of an action. Each action type uses one field.
    """
    card_name: str | None = None
    age: int | None = None
    card_names: tuple[str, ...] = ()
    opponent_id: int | None = None
    yn: bool | None = None


@dataclass(frozen=True)
class Action:
    """A complete action for ``Game.step``."""
    action_type: ActionType
    payload: ActionPayload = field(default_factory=ActionPayload)

    @classmethod
    def draw(cls) -> Action:
        return cls(ActionType.DRAW)

    @classmethod
    def meld(cls, card_name: str) -> Action:
        return cls(ActionType.MELD, ActionPayload(card_name=card_name))

    @classmethod
    def achieve(cls, age: int) -> Action:
        return cls(ActionType.ACHIEVE, ActionPayload(age=age))

    @classmethod
    def execute(cls, card_name: str) -> Action:
        return cls(ActionType.EXECUTE, ActionPayload(card_name=card_name))

    @classmethod
    def card(cls, card_names: list[str] | tuple[str, ...]) -> Action:
        """Factory for a card choice; an empty list chooses no card."""
        return cls(ActionType.CARD, ActionPayload(card_names=tuple(card_names)))

    @classmethod
    def opponent(cls, player_id: int) -> Action:
        return cls(ActionType.OPPONENT, ActionPayload(opponent_id=player_id))

    @classmethod
    def yn(cls, answer: bool) -> Action:
        return cls(ActionType.YN, ActionPayload(yn=answer))

    def to_wire(self) -> Any:
        """The JSON-compatible form accepted by ``dogma.api.schemas.parse_action``."""
        p = self.payload
        if self.action_type is ActionType.DRAW:
            return "draw"
        if self.action_type in (ActionType.MELD, ActionType.EXECUTE):
            return {self.action_type.value: p.card_name}
        if self.action_type is ActionType.ACHIEVE:
            return {"achieve": p.age}
        if self.action_type is ActionType.CARD:
            return {"card": list(p.card_names)}
        if self.action_type is ActionType.OPPONENT:
            return {"opponent": p.opponent_id}
        return {"yn": p.yn}

    def __str__(self):
        return str(self.to_wire())


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Contains:
    - Whether action succeeded
    - The observation after the action (if succeeded)
    - Error text and code (if failed)
    """
    success: bool
    observation: Any | None = None  # Observation | EndObservation
    error: str | None = None
    error_code: str | None = None

    @classmethod
    def failure(cls, error: str, error_code: str | None = None) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def success_with(cls, observation: Any) -> ActionResult:
        return cls(success=True, observation=observation)
