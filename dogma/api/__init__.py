"""
API Module - Host-facing interface to the engine.

A host (CLI, web server, notebook) talks to games through ``GameService``:
1. Creates games
2. Sends wire actions
3. Receives observations or the final result
4. Reads the replay log

All state is in-process. No persistence.
"""

from .schemas import (
    # Requests
    CreateGameRequest,
    # Responses
    GameResponse,
    StepResponse,
    ReplayResponse,
    ErrorResponse,
    # Shared
    ObservationResponse,
    EndObservationResponse,
    PlayerInfo,
    OpponentInfo,
    DecisionInfo,
    # Enums
    GameStatus,
    ErrorCode,
    # Parsing
    parse_action,
    parse_action_json,
)
from .service import GameService

__all__ = [
    "CreateGameRequest",
    "GameResponse",
    "StepResponse",
    "ReplayResponse",
    "ErrorResponse",
    "ObservationResponse",
    "EndObservationResponse",
    "PlayerInfo",
    "OpponentInfo",
    "DecisionInfo",
    "GameStatus",
    "ErrorCode",
    "parse_action",
    "parse_action_json",
    "GameService",
]
