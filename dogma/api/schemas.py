"""
Pydantic Schemas for API - Request/response models for hosts of the engine.

Inbound actions use the compact wire form:
    "draw" | {"meld": name} | {"achieve": age} | {"execute": name}
    | {"card": [names]} | {"opponent": id} | {"yn": bool}

Outbound models mirror the engine's observation dataclasses and are built
from them with ``model_validate`` (``from_attributes``).

Error Codes:
- INVALID_ACTION: Malformed action, or an action that does not fit the decision
- CARD_NOT_FOUND: A card effect referenced a card that is not where expected
- GAME_NOT_FOUND: Game id does not exist or was ended
- GAME_OVER: The game already ended
- INTERNAL_ERROR: Unexpected engine failure
"""

from enum import Enum
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, Field, StrictBool, TypeAdapter, ValidationError

from ..engine_core.action import Action
from ..engine_core.errors import InvalidAction
from ..engine_core.state import SplayDirection


# =============================================================================
# Enums
# =============================================================================

class GameStatus(str, Enum):
    """Game status values."""
    MAIN = "main"
    WAITING_DECISION = "waiting_decision"
    GAME_OVER = "game_over"


class ErrorCode(str, Enum):
    """Structured error codes."""
    INVALID_ACTION = "INVALID_ACTION"
    CARD_NOT_FOUND = "CARD_NOT_FOUND"
    GAME_NOT_FOUND = "GAME_NOT_FOUND"
    GAME_OVER = "GAME_OVER"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Inbound actions
# =============================================================================

class _WireAction(BaseModel):
    model_config = {"extra": "forbid"}


class MeldRequest(_WireAction):
    meld: str


class AchieveRequest(_WireAction):
    achieve: int = Field(ge=1, le=9)


class ExecuteRequest(_WireAction):
    execute: str


class CardChoiceRequest(_WireAction):
    card: list[str]


class OpponentChoiceRequest(_WireAction):
    opponent: int = Field(ge=0)


class YnChoiceRequest(_WireAction):
    yn: StrictBool


ActionRequest = Union[
    Literal["draw"],
    MeldRequest,
    AchieveRequest,
    ExecuteRequest,
    CardChoiceRequest,
    OpponentChoiceRequest,
    YnChoiceRequest,
]

_action_adapter = TypeAdapter(ActionRequest)


def _to_action(parsed: Any) -> Action:
    if parsed == "draw":
        return Action.draw()
    if isinstance(parsed, MeldRequest):
        return Action.meld(parsed.meld)
    if isinstance(parsed, AchieveRequest):
        return Action.achieve(parsed.achieve)
    if isinstance(parsed, ExecuteRequest):
        return Action.execute(parsed.execute)
    if isinstance(parsed, CardChoiceRequest):
        return Action.card(parsed.card)
    if isinstance(parsed, OpponentChoiceRequest):
        return Action.opponent(parsed.opponent)
    return Action.yn(parsed.yn)


def parse_action(raw: Any) -> Action:
    """Parse a decoded JSON value into an ``Action``; raises ``InvalidAction``."""
    try:
        parsed = _action_adapter.validate_python(raw)
    except ValidationError as error:
        raise InvalidAction(f"Malformed action {raw!r}: {error.error_count()} error(s)") from error
    return _to_action(parsed)


def parse_action_json(text: str) -> Action:
    """Parse a JSON document into an ``Action``; raises ``InvalidAction``."""
    try:
        parsed = _action_adapter.validate_json(text)
    except ValidationError as error:
        raise InvalidAction(f"Malformed action {text!r}: {error.error_count()} error(s)") from error
    return _to_action(parsed)


# =============================================================================
# Observations
# =============================================================================

class StackInfo(BaseModel):
    """One color pile, top card first."""
    color: str
    cards: list[str]
    splay: SplayDirection = SplayDirection.NONE

    model_config = {"from_attributes": True}


class PlayerInfo(BaseModel):
    """Full view of the observing player's zones."""
    player_id: int
    hand: list[str] = Field(default_factory=list)
    score: list[str] = Field(default_factory=list)
    board: list[StackInfo] = Field(default_factory=list)
    achievements: list[str] = Field(default_factory=list)

    model_config = {"from_attributes": True}


class OpponentInfo(BaseModel):
    """Another player's zones; hand and score pile reduced to ages."""
    player_id: int
    hand: list[int] = Field(default_factory=list)
    score: list[int] = Field(default_factory=list)
    board: list[StackInfo] = Field(default_factory=list)
    achievements: list[str] = Field(default_factory=list)

    model_config = {"from_attributes": True}


class TurnInfo(BaseModel):
    current_player: int
    is_second_action: bool
    action_index: int

    model_config = {"from_attributes": True}


class DecisionInfo(BaseModel):
    """A decision the engine is waiting on."""
    actor: int
    kind: Literal["card", "opponent", "yn"]
    card: Optional[str] = Field(default=None, description="Card whose effect is asking")
    cards: list[str] = Field(default_factory=list)
    opponents: list[int] = Field(default_factory=list)
    min_num: int = 0
    max_num: int = 0

    model_config = {"from_attributes": True}


class ObservationResponse(BaseModel):
    phase: str
    main_player: PlayerInfo
    other_players: list[OpponentInfo]
    supply: list[int] = Field(description="Cards left in each age pile, ages 1-10")
    turn: TurnInfo
    decision: Optional[DecisionInfo] = None

    model_config = {"from_attributes": True}


class EndObservationResponse(BaseModel):
    current_player: int
    players: list[PlayerInfo]
    winners: list[int]

    model_config = {"from_attributes": True}


# =============================================================================
# Requests / Responses
# =============================================================================

class CreateGameRequest(BaseModel):
    """Request to start a game."""
    num_players: int = Field(default=2, ge=2, le=4)
    random_seed: Optional[int] = None
    share_bonus: Optional[bool] = Field(
        default=None, description="Override DOGMA_SHARE_BONUS for this game"
    )


class GameResponse(BaseModel):
    game_id: str
    status: GameStatus
    observation: Optional[ObservationResponse] = None
    result: Optional[EndObservationResponse] = None


class StepResponse(BaseModel):
    success: bool
    game_id: str
    status: Optional[GameStatus] = None
    observation: Optional[ObservationResponse] = None
    result: Optional[EndObservationResponse] = None
    error: Optional[str] = None
    error_code: Optional[ErrorCode] = None


class ReplayEntryInfo(BaseModel):
    seq: int
    kind: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ReplayResponse(BaseModel):
    game_id: str
    initial_supply: list[str]
    entries: list[ReplayEntryInfo]
    finished: bool


class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str
    error_code: ErrorCode
    details: Optional[dict[str, Any]] = None
