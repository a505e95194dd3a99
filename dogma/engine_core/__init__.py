"""
Engine Core - Deterministic state, effect execution and the turn machine.

The engine is the runtime that:
1. Holds the table (GameState) and moves cards (transfer)
2. Announces every committed change to observers (events)
3. Claims special achievements and detects wins (achievements)
4. Runs card dogmas that suspend for decisions (effect_resolver)
5. Drives Main/Executing steps with auto-resolution (game)
"""

from .errors import GameRuleViolation, InvalidAction, CardNotFound, Win, WinningSituation
from .state import (
    Card,
    Color,
    Icon,
    SplayDirection,
    NormalAchievement,
    SpecialAchievement,
    PlayerState,
    Supply,
)
from .transfer import Place, ByAge, ByCard, FromStack, AtIndex, Position, transfer
from .events import Dispatcher, Observer, EventLogger
from .game_state import GameState
from .effect_resolver import (
    DogmaContext,
    ExecutionState,
    ChooseCards,
    ChooseOpponent,
    ChooseYn,
    shared,
    demand,
    execute,
)
from .action import Action, ActionType, ActionPayload, ActionResult
from .action_generator import ActionGenerator, legal_actions
from .observation import Observation, EndObservation
from .replay import ReplayLog
from .turn import Turn
from .game import Game, Phase, apply_action

__all__ = [
    "GameRuleViolation",
    "InvalidAction",
    "CardNotFound",
    "Win",
    "WinningSituation",
    "Card",
    "Color",
    "Icon",
    "SplayDirection",
    "NormalAchievement",
    "SpecialAchievement",
    "PlayerState",
    "Supply",
    "Place",
    "ByAge",
    "ByCard",
    "FromStack",
    "AtIndex",
    "Position",
    "transfer",
    "Dispatcher",
    "Observer",
    "EventLogger",
    "GameState",
    "DogmaContext",
    "ExecutionState",
    "ChooseCards",
    "ChooseOpponent",
    "ChooseYn",
    "shared",
    "demand",
    "execute",
    "Action",
    "ActionType",
    "ActionPayload",
    "ActionResult",
    "ActionGenerator",
    "legal_actions",
    "Observation",
    "EndObservation",
    "ReplayLog",
    "Turn",
    "Game",
    "Phase",
    "apply_action",
]
