"""
Action Generator - Generates all legal actions for the current decision.

The action generator is used by:
1. Auto-resolution (a decision with zero or one legal answer is not asked)
2. Clients that want to show available actions
3. Random playouts in tests

Design: Generates Action objects, not just action types.
This ensures all generated actions are fully specified.
"""

from __future__ import annotations
from dataclasses import dataclass
from itertools import combinations
from typing import TYPE_CHECKING, Iterator

from .action import Action
from .effect_resolver import Answer, ChooseCards, ChooseOpponent, ChooseYn, ExecutionState
from .state import ACHIEVEMENT_AGES

if TYPE_CHECKING:
    from .game import Game
    from .game_state import GameState


def answers(checkpoint: ExecutionState, game: GameState) -> Iterator[Answer]:
    """Every legal answer to ``checkpoint``, as sent into the suspended flow."""
    choose = checkpoint.choose
    if isinstance(choose, ChooseCards):
        candidates = choose.candidates
        upper = min(choose.max_num, len(candidates))
        for size in range(choose.min_num, upper + 1):
            for picked in combinations(candidates, size):
                yield list(picked)
    elif isinstance(choose, ChooseOpponent):
        for pid in choose.candidates:
            yield game.players[pid]
    elif isinstance(choose, ChooseYn):
        yield True
        yield False


def answer_to_action(answer: Answer) -> Action:
    if isinstance(answer, bool):
        return Action.yn(answer)
    if isinstance(answer, list):
        return Action.card([card.name for card in answer])
    return Action.opponent(answer.id)


@dataclass
class ActionGenerator:
    """Generates legal actions for the current state of a game."""
    game: Game

    def generate(self) -> list[Action]:
        game = self.game
        if game.is_over:
            return []
        if game.pending is not None:
            return [answer_to_action(a) for a in answers(game.pending, game.state)]
        return self._main_actions()

    def _main_actions(self) -> list[Action]:
        state = self.game.state
        player = state.players[self.game.turn.current_player]

        actions = [Action.draw()]
        actions.extend(Action.meld(card.name) for card in player.hand)
        actions.extend(
            Action.achieve(age) for age in ACHIEVEMENT_AGES
            if state.can_achieve_age(player, age)
        )
        actions.extend(Action.execute(card.name) for card in player.board.top_cards())
        return actions


def legal_actions(game: Game) -> list[Action]:
    """Convenience function to get legal actions."""
    return ActionGenerator(game).generate()
