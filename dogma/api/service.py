"""
API Service - In-process layer between a host and the engine.

The service:
1. Creates and tracks games by id
2. Parses wire actions and steps the right game
3. Turns engine observations into response models
4. Reports rule violations as error codes instead of exceptions

This layer is transport-agnostic; it never opens a socket.
"""

from __future__ import annotations
from dataclasses import dataclass, field, fields, is_dataclass, replace
from enum import Enum
import logging
from typing import Any

from ..config import EngineSettings
from ..engine_core.action_generator import legal_actions
from ..engine_core.errors import CardNotFound, GameRuleViolation
from ..engine_core.game import Game, Phase
from ..engine_core.action import Action
from ..engine_core.observation import EndObservation
from ..engine_core.state import Card
from ..engine_core.transfer import Place
from ..games.innovation.setup import setup_innovation_game
from .schemas import (
    CreateGameRequest,
    EndObservationResponse,
    ErrorCode,
    ErrorResponse,
    GameResponse,
    GameStatus,
    ObservationResponse,
    ReplayEntryInfo,
    ReplayResponse,
    StepResponse,
    parse_action,
)

logger = logging.getLogger(__name__)


def _plain(value: Any) -> Any:
    """Reduce event fields to JSON-friendly values."""
    if isinstance(value, Card):
        return value.name
    if isinstance(value, Action):
        return value.to_wire()
    if isinstance(value, Place):
        return str(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    if is_dataclass(value):
        return str(value)
    return value


def describe_event(event: Any) -> dict[str, Any]:
    return {f.name: _plain(getattr(event, f.name)) for f in fields(event)}


@dataclass
class GameService:
    """
    Multi-game facade over ``Game.step``.

    Usage:
        service = GameService()
        created = service.create_game(CreateGameRequest(num_players=2, random_seed=7))
        response = service.step(created.game_id, "draw")
    """
    settings: EngineSettings = field(default_factory=EngineSettings.from_env)
    _games: dict[str, Game] = field(default_factory=dict)

    def create_game(self, request: CreateGameRequest) -> GameResponse:
        settings = self.settings
        if request.share_bonus is not None:
            settings = replace(settings, share_bonus=request.share_bonus)
        game = setup_innovation_game(
            num_players=request.num_players,
            random_seed=request.random_seed,
            settings=settings,
        )
        self._games[game.game_id] = game
        return self._game_response(game)

    def get_game(self, game_id: str) -> GameResponse | ErrorResponse:
        game = self._games.get(game_id)
        if game is None:
            return self._not_found(game_id)
        return self._game_response(game)

    def observe(
        self, game_id: str, player_id: int | None = None
    ) -> ObservationResponse | EndObservationResponse | ErrorResponse:
        """What ``player_id`` sees (the acting player by default)."""
        game = self._games.get(game_id)
        if game is None:
            return self._not_found(game_id)
        if player_id is not None and not 0 <= player_id < game.state.num_players:
            return ErrorResponse(error=f"No player {player_id}", error_code=ErrorCode.INVALID_ACTION)
        observation = game.observe(player_id)
        if isinstance(observation, EndObservation):
            return EndObservationResponse.model_validate(observation)
        return ObservationResponse.model_validate(observation)

    def list_games(self) -> list[str]:
        return list(self._games)

    def end_game(self, game_id: str) -> bool:
        return self._games.pop(game_id, None) is not None

    def legal_actions(self, game_id: str) -> list[Any] | ErrorResponse:
        game = self._games.get(game_id)
        if game is None:
            return self._not_found(game_id)
        return [action.to_wire() for action in legal_actions(game)]

    def step(self, game_id: str, raw_action: Any) -> StepResponse:
        """Apply one wire action to a game."""
        game = self._games.get(game_id)
        if game is None:
            return StepResponse(
                success=False, game_id=game_id,
                error=f"Game {game_id} not found", error_code=ErrorCode.GAME_NOT_FOUND,
            )
        if game.is_over:
            return StepResponse(
                success=False, game_id=game_id, status=GameStatus.GAME_OVER,
                error="The game is over", error_code=ErrorCode.GAME_OVER,
            )

        try:
            action = parse_action(raw_action)
            game.step(action)
        except CardNotFound as error:
            logger.warning("game %s: %s", game_id, error)
            return self._step_failure(game, str(error), ErrorCode.CARD_NOT_FOUND)
        except GameRuleViolation as error:
            return self._step_failure(game, str(error), ErrorCode.INVALID_ACTION)
        except Exception as error:
            logger.exception("game %s: step failed", game_id)
            return self._step_failure(game, f"Internal error: {error}", ErrorCode.INTERNAL_ERROR)

        response = self._game_response(game)
        return StepResponse(
            success=True,
            game_id=game_id,
            status=response.status,
            observation=response.observation,
            result=response.result,
        )

    def replay(self, game_id: str) -> ReplayResponse | ErrorResponse:
        game = self._games.get(game_id)
        if game is None or game.replay is None:
            return self._not_found(game_id)
        record = game.replay.get(game_id)
        if record is None:
            return self._not_found(game_id)
        return ReplayResponse(
            game_id=game_id,
            initial_supply=record.initial_supply,
            entries=[
                ReplayEntryInfo(seq=e.seq, kind=type(e.item).__name__, detail=describe_event(e.item))
                for e in record.entries
            ],
            finished=record.finished,
        )

    # =========================================================================
    # Helpers
    # =========================================================================

    def _game_response(self, game: Game) -> GameResponse:
        observation = game.observe()
        if isinstance(observation, EndObservation):
            return GameResponse(
                game_id=game.game_id,
                status=GameStatus.GAME_OVER,
                result=EndObservationResponse.model_validate(observation),
            )
        status = GameStatus.WAITING_DECISION if game.phase is Phase.EXECUTING else GameStatus.MAIN
        return GameResponse(
            game_id=game.game_id,
            status=status,
            observation=ObservationResponse.model_validate(observation),
        )

    def _step_failure(self, game: Game, message: str, code: ErrorCode) -> StepResponse:
        response = self._game_response(game)
        return StepResponse(
            success=False,
            game_id=game.game_id,
            status=response.status,
            observation=response.observation,
            result=response.result,
            error=message,
            error_code=code,
        )

    def _not_found(self, game_id: str) -> ErrorResponse:
        return ErrorResponse(
            error=f"Game {game_id} not found",
            error_code=ErrorCode.GAME_NOT_FOUND,
        )
