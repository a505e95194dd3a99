"""
Game - The Main/Executing state machine.

In MAIN the current player takes one of four actions. Executing a card
starts a suspendable flow and moves the game to EXECUTING, where each step
answers the pending decision. Decisions with no legal answer, or exactly
one, are answered automatically and never reach the caller.

A ``Win`` raised anywhere ends the game; every later step is rejected.
"""

from __future__ import annotations
from enum import Enum
from itertools import islice
import logging
from typing import Iterable
import uuid

from .achievements import AchievementManager, WinByAchievementChecker
from .action import Action, ActionResult, ActionType
from .action_generator import answers
from .effect_resolver import (
    Answer,
    ChooseCards,
    ChooseOpponent,
    ChooseYn,
    ExecutionState,
    Flow,
    execute,
)
from .errors import GameRuleViolation, InvalidAction, Win, WinKind
from .events import ChangeTurn, GameEnded, NextAction, Observer, Submitted
from .game_state import GameState
from .observation import EndObservation, Observation, end_observation, observe
from .replay import ReplayLog
from .state import ACHIEVEMENT_AGES, Card, PlayerState, SpecialAchievement
from .turn import Turn

logger = logging.getLogger(__name__)


class Phase(Enum):
    MAIN = "main"
    EXECUTING = "executing"
    OVER = "over"


class Game:
    """
    One game of Innovation.

    ``step`` is the only way to change the game from outside. It returns the
    observation of whoever must act next, or the end-of-game observation.
    """

    def __init__(
        self,
        state: GameState,
        turn: Turn,
        game_id: str | None = None,
        replay: ReplayLog | None = None,
        observers: Iterable[Observer] = (),
    ):
        self.game_id = game_id or str(uuid.uuid4())
        self.state = state
        self.turn = turn
        self.phase = Phase.MAIN
        self.pending: ExecutionState | None = None
        self._flow: Flow | None = None

        self.winners: list[int] = []
        self.final_player: int | None = None

        specials = [a for a in state.achievements if isinstance(a, SpecialAchievement)]
        self.achievement_manager = AchievementManager(specials, acting_player=turn.current_player)
        state.dispatcher.add_internal(self.achievement_manager)
        state.dispatcher.add_internal(WinByAchievementChecker(state.num_players))

        self.replay = replay
        if replay is not None:
            replay.start(self.game_id, [card.name for card in state.supply.cards()])
            state.dispatcher.add_external(replay)
        for observer in observers:
            state.dispatcher.add_external(observer)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def is_over(self) -> bool:
        return self.phase is Phase.OVER

    @property
    def acting_player_id(self) -> int:
        """The player who must act: the pending actor, else the turn player."""
        if self.pending is not None:
            return self.pending.actor
        return self.turn.current_player

    def add_observer(self, observer: Observer) -> None:
        self.state.dispatcher.add_external(observer)

    def remove_observer(self, observer: Observer) -> None:
        self.state.dispatcher.remove_external(observer)

    def observe(self, player_id: int | None = None) -> Observation | EndObservation:
        if self.is_over:
            return end_observation(self.state, self.final_player, self.winners)
        if player_id is None:
            player_id = self.acting_player_id
        return observe(self.state, self.turn, player_id, self.phase.value, self.pending)

    # ------------------------------------------------------------------
    # Stepping
    # ------------------------------------------------------------------

    def step(self, action: Action) -> Observation | EndObservation:
        """Apply one action. Raises ``InvalidAction`` without changing anything."""
        if self.is_over:
            raise InvalidAction("The game is over")

        try:
            if self.phase is Phase.MAIN:
                self._main_action(action)
            else:
                self._answer(action)
        except Win as win:
            self._finish(win)
        return self.observe()

    def _submit(self, action: Action) -> None:
        self.state.notify(Submitted(self.acting_player_id, action))

    def _main_action(self, action: Action) -> None:
        if not action.action_type.is_main:
            raise InvalidAction(f"{action} is not a main action")

        player = self.state.players[self.turn.current_player]
        kind = action.action_type
        payload = action.payload

        if kind is ActionType.DRAW:
            self._submit(action)
            logger.info("player %d draws", player.id)
            self.state.draw(player, player.age())
        elif kind is ActionType.MELD:
            card = self._card_named(payload.card_name)
            if card not in player.hand:
                raise InvalidAction(f"{card.name} is not in player {player.id}'s hand")
            self._submit(action)
            logger.info("player %d melds %s", player.id, card.name)
            self.state.meld(player, card)
        elif kind is ActionType.ACHIEVE:
            age = payload.age
            if age not in ACHIEVEMENT_AGES or not self.state.can_achieve_age(player, age):
                raise InvalidAction(f"Player {player.id} cannot achieve age {age}")
            self._submit(action)
            self.state.try_achieve(player, self.state.normal_achievement(age))
        else:
            card = self._card_named(payload.card_name)
            if card not in player.board.top_cards():
                raise InvalidAction(f"{card.name} is not a top card of player {player.id}")
            self._submit(action)
            logger.info("player %d executes %s", player.id, card.name)
            self._flow = execute(self.state, player, card)
            self.phase = Phase.EXECUTING
            self._advance(None, start=True)
            return

        self._next_action()

    def _card_named(self, name: str | None) -> Card:
        card = self.state.catalog.get(name) if name is not None else None
        if card is None:
            raise InvalidAction(f"Unknown card {name!r}")
        return card

    def _answer(self, action: Action) -> None:
        answer = self._validate_answer(action)
        self._submit(action)
        self._advance(answer)

    def _validate_answer(self, action: Action) -> Answer:
        choose = self.pending.choose
        kind = action.action_type
        payload = action.payload

        if isinstance(choose, ChooseCards):
            if kind is not ActionType.CARD:
                raise InvalidAction(f"Expected a card choice, got {action}")
            names = payload.card_names
            if len(set(names)) != len(names):
                raise InvalidAction("A card may be chosen only once")
            by_name = {card.name: card for card in choose.candidates}
            unknown = [name for name in names if name not in by_name]
            if unknown:
                raise InvalidAction(f"Not among the choices: {unknown}")
            if not choose.min_num <= len(names) <= choose.max_num:
                raise InvalidAction(
                    f"Choose between {choose.min_num} and {choose.max_num} cards, got {len(names)}"
                )
            return [by_name[name] for name in names]

        if isinstance(choose, ChooseOpponent):
            if kind is not ActionType.OPPONENT:
                raise InvalidAction(f"Expected an opponent choice, got {action}")
            if payload.opponent_id not in choose.candidates:
                raise InvalidAction(f"Player {payload.opponent_id} is not a valid opponent")
            return self.state.players[payload.opponent_id]

        if isinstance(choose, ChooseYn):
            if kind is not ActionType.YN or payload.yn is None:
                raise InvalidAction(f"Expected yes or no, got {action}")
            return payload.yn

        raise InvalidAction(f"Unknown decision {choose!r}")

    def _advance(self, answer: Answer, start: bool = False) -> None:
        """Resume the flow until it needs a real decision or finishes."""
        try:
            checkpoint = next(self._flow) if start else self._flow.send(answer)
            while True:
                self.pending = checkpoint
                options = list(islice(answers(checkpoint, self.state), 2))
                if len(options) > 1:
                    logger.debug("waiting on player %d: %s", checkpoint.actor, checkpoint.choose)
                    return
                auto = options[0] if options else None
                logger.debug("auto-answering player %d with %r", checkpoint.actor, auto)
                checkpoint = self._flow.send(auto)
        except StopIteration:
            pass
        except Win:
            raise
        except Exception:
            self._abandon()
            raise

        self._abandon()
        self._next_action()

    def _abandon(self) -> None:
        self._flow = None
        self.pending = None
        self.phase = Phase.MAIN

    def _next_action(self) -> None:
        previous, current = self.turn.next()
        if self.turn.turn_changed:
            self.state.notify(ChangeTurn(previous, current))
        else:
            self.state.notify(NextAction(current))

    def _finish(self, win: Win) -> None:
        current = win.current_player
        if current is None:
            current = self.acting_player_id
        if win.situation.kind is WinKind.SOMEONE:
            winners = [win.situation.player_id]
        else:
            winners = winners_by_score(self.state.players)

        self._flow = None
        self.pending = None
        self.phase = Phase.OVER
        self.winners = winners
        self.final_player = current
        logger.info("game %s over, winners %s", self.game_id, winners)
        self.state.notify(GameEnded(tuple(winners), current))
        if self.replay is not None:
            self.replay.finish()


def winners_by_score(players: list[PlayerState]) -> list[int]:
    """Highest score wins; ties go to the most achievements."""
    best = max((p.score(), len(p.achievements)) for p in players)
    return [p.id for p in players if (p.score(), len(p.achievements)) == best]


def apply_action(game: Game, action: Action) -> ActionResult:
    """Step ``game`` and report rule violations as a failed result."""
    try:
        return ActionResult.success_with(game.step(action))
    except GameRuleViolation as error:
        return ActionResult.failure(str(error), error.code)
