"""
Observation - What a player is allowed to see.

The observing player sees their own zones in full. For other players,
hands and score piles are reduced to card ages; boards and achievements
are public. Supply piles are shown as counts per age.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .effect_resolver import ChooseCards, ChooseOpponent, ExecutionState
from .state import Achievement, Board, PlayerState, SplayDirection

if TYPE_CHECKING:
    from .game_state import GameState
    from .turn import Turn


@dataclass
class StackView:
    color: str
    cards: list[str]  # top card first
    splay: SplayDirection = SplayDirection.NONE


@dataclass
class PlayerView:
    player_id: int
    hand: list[str]
    score: list[str]
    board: list[StackView]
    achievements: list[str]


@dataclass
class OpponentView:
    player_id: int
    hand: list[int]
    score: list[int]
    board: list[StackView]
    achievements: list[str]


@dataclass
class TurnView:
    current_player: int
    is_second_action: bool
    action_index: int


@dataclass
class DecisionPrompt:
    """
    A pending decision.

    ``kind`` is "card", "opponent" or "yn". ``card`` names the card whose
    effect is asking.
    """
    actor: int
    kind: str
    card: str | None = None
    cards: list[str] = field(default_factory=list)
    opponents: list[int] = field(default_factory=list)
    min_num: int = 0
    max_num: int = 0


@dataclass
class Observation:
    phase: str
    main_player: PlayerView
    other_players: list[OpponentView]
    supply: list[int]
    turn: TurnView
    decision: DecisionPrompt | None = None


@dataclass
class EndObservation:
    """Final zones of every player, from the current player on, and the winners."""
    current_player: int
    players: list[PlayerView]
    winners: list[int]


# ============================================================================
# Builders
# ============================================================================

def _board_view(board: Board) -> list[StackView]:
    return [
        StackView(color=stack.color.value, cards=[c.name for c in stack], splay=stack.splay)
        for stack in board
        if not stack.is_empty
    ]


def _achievement_names(achievements: list[Achievement]) -> list[str]:
    return [str(a) for a in achievements]


def player_view(player: PlayerState) -> PlayerView:
    return PlayerView(
        player_id=player.id,
        hand=[c.name for c in player.hand],
        score=[c.name for c in player.score_pile],
        board=_board_view(player.board),
        achievements=_achievement_names(player.achievements),
    )


def opponent_view(player: PlayerState) -> OpponentView:
    return OpponentView(
        player_id=player.id,
        hand=player.hand.ages(),
        score=player.score_pile.ages(),
        board=_board_view(player.board),
        achievements=_achievement_names(player.achievements),
    )


def decision_prompt(checkpoint: ExecutionState) -> DecisionPrompt:
    choose = checkpoint.choose
    card = checkpoint.card.name if checkpoint.card is not None else None
    if isinstance(choose, ChooseCards):
        return DecisionPrompt(
            actor=checkpoint.actor, kind="card", card=card,
            cards=[c.name for c in choose.candidates],
            min_num=choose.min_num, max_num=choose.max_num,
        )
    if isinstance(choose, ChooseOpponent):
        return DecisionPrompt(
            actor=checkpoint.actor, kind="opponent", card=card,
            opponents=list(choose.candidates), min_num=1, max_num=1,
        )
    return DecisionPrompt(actor=checkpoint.actor, kind="yn", card=card, min_num=1, max_num=1)


def observe(game: GameState, turn: Turn, player_id: int, phase: str,
            pending: ExecutionState | None = None) -> Observation:
    return Observation(
        phase=phase,
        main_player=player_view(game.players[player_id]),
        other_players=[opponent_view(p) for p in game.opponents_of(player_id)],
        supply=game.supply.counts(),
        turn=TurnView(turn.current_player, turn.is_second_action, turn.action_index),
        decision=decision_prompt(pending) if pending is not None else None,
    )


def end_observation(game: GameState, current_player: int, winners: list[int]) -> EndObservation:
    return EndObservation(
        current_player=current_player,
        players=[player_view(p) for p in game.players_from(current_player)],
        winners=list(winners),
    )
