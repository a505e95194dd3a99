"""
Effect Resolver - Suspendable execution of card dogmas.

This module handles the logic of resolving card effects, including:
- Clauses that pause for a player's decision and resume with the answer
- Share clauses (every player with enough icons runs them)
- Demand clauses (forced on every player with fewer icons)
- Nested executions ("execute its non-demand effects for yourself")
- Share bonuses (opt-in)

A clause is a plain function or a generator function. A generator clause
suspends by yielding an ``ExecutionState`` checkpoint; the driver sends the
answer back in. The generator frame keeps every local, so a resumed clause
continues exactly where it stopped.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum
import inspect
import logging
from typing import TYPE_CHECKING, Any, Callable, Generator, Iterable, Union

from .state import Card, Color, PlayerState, SplayDirection

if TYPE_CHECKING:
    from .game_state import GameState

logger = logging.getLogger(__name__)


# ============================================================================
# Checkpoints
# ============================================================================

@dataclass(frozen=True)
class ChooseCards:
    """Pick between ``min_num`` and ``max_num`` distinct cards from ``candidates``."""
    min_num: int
    max_num: int
    candidates: tuple[Card, ...]


@dataclass(frozen=True)
class ChooseOpponent:
    candidates: tuple[int, ...]


@dataclass(frozen=True)
class ChooseYn:
    pass


Choose = Union[ChooseCards, ChooseOpponent, ChooseYn]


@dataclass(frozen=True)
class ExecutionState:
    """
    A suspended decision.

    ``actor`` is the player who must answer. ``card`` is the card whose
    effect asked; it is attached by the driver that started the execution,
    and the first card attached is kept.
    """
    actor: int
    choose: Choose
    card: Card | None = None

    def or_card(self, card: Card) -> ExecutionState:
        if self.card is not None:
            return self
        return replace(self, card=card)


# Answers sent back into a flow: list[Card], PlayerState, bool, or None when
# the decision had no legal answer.
Answer = Any
Flow = Generator[ExecutionState, Answer, Any]


def run_clause(fn: Callable, *args) -> Flow:
    """Run a clause that may or may not suspend."""
    result = fn(*args)
    if inspect.isgenerator(result):
        result = yield from result
    return result


def with_card(flow: Flow, card: Card) -> Flow:
    """Forward ``flow``, attaching ``card`` to every checkpoint it yields."""
    try:
        checkpoint = next(flow)
        while True:
            answer = yield checkpoint.or_card(card)
            checkpoint = flow.send(answer)
    except StopIteration as stop:
        return stop.value


# ============================================================================
# Dogma clauses
# ============================================================================

class DogmaKind(Enum):
    SHARE = "share"
    DEMAND = "demand"


@dataclass(frozen=True)
class Dogma:
    kind: DogmaKind
    clause: Callable

    @property
    def is_demand(self) -> bool:
        return self.kind is DogmaKind.DEMAND


def shared(fn: Callable) -> Dogma:
    """A clause run by every sharing player: ``fn(player, game, ctx)``."""
    return Dogma(DogmaKind.SHARE, fn)


def demand(fn: Callable) -> Dogma:
    """A clause forced on each demanded opponent: ``fn(me, opponent, game, ctx)``."""
    return Dogma(DogmaKind.DEMAND, fn)


@dataclass
class DogmaContext:
    """
    Helpers available to clauses during one card execution.

    ``memo`` is scratch state shared by the clauses of this execution only.
    """
    game: "GameState"
    card: Card
    initiator: PlayerState
    memo: dict[str, Any] = field(default_factory=dict)

    def ask(self, player: PlayerState, choose: Choose) -> Flow:
        answer = yield ExecutionState(player.id, choose)
        return answer

    def choose_cards(self, player: PlayerState, cards: Iterable[Card],
                     min_num: int, max_num: int | None = None) -> Flow:
        candidates = tuple(cards)
        if max_num is None:
            max_num = len(candidates)
        answer = yield from self.ask(player, ChooseCards(min_num, max_num, candidates))
        return answer

    def choose_one_card(self, player: PlayerState, cards: Iterable[Card]) -> Flow:
        chosen = yield from self.choose_cards(player, cards, 1, 1)
        return chosen[0] if chosen else None

    def may_choose_one_card(self, player: PlayerState, cards: Iterable[Card]) -> Flow:
        chosen = yield from self.choose_cards(player, cards, 0, 1)
        return chosen[0] if chosen else None

    def choose_cards_at_most(self, player: PlayerState, cards: Iterable[Card], max_num: int) -> Flow:
        chosen = yield from self.choose_cards(player, cards, 1, max_num)
        return chosen

    def choose_any_cards_up_to(self, player: PlayerState, cards: Iterable[Card],
                               max_num: int | None = None) -> Flow:
        chosen = yield from self.choose_cards(player, cards, 0, max_num)
        return chosen or []

    def choose_cards_exact(self, player: PlayerState, cards: Iterable[Card], num: int) -> Flow:
        chosen = yield from self.choose_cards(player, cards, num, num)
        return chosen

    def choose_yn(self, player: PlayerState) -> Flow:
        answer = yield from self.ask(player, ChooseYn())
        return bool(answer)

    def choose_opponent(self, player: PlayerState,
                        candidates: Iterable[PlayerState] | None = None) -> Flow:
        if candidates is None:
            candidates = self.game.opponents_of(player.id)
        ids = tuple(p.id for p in candidates)
        answer = yield from self.ask(player, ChooseOpponent(ids))
        return answer

    def may(self, player: PlayerState, fn: Callable[[], Any]) -> Flow:
        """Ask yes/no, then run ``fn`` (which may itself suspend) on yes."""
        if not (yield from self.choose_yn(player)):
            return None
        result = yield from run_clause(fn)
        return result

    def may_splay(self, player: PlayerState, color: Color, direction: SplayDirection) -> Flow:
        if not player.board.can_splay(color, direction):
            return False

        def splay():
            self.game.splay(player, color, direction)
            return True

        done = yield from self.may(player, splay)
        return bool(done)

    def may_splays(self, player: PlayerState, colors: Iterable[Color],
                   direction: SplayDirection) -> Flow:
        """Offer one splay among ``colors``; the player picks the color by its top card."""
        splayable = [c for c in colors if player.board.can_splay(c, direction)]
        if not splayable:
            return False

        def pick_and_splay():
            tops = [player.board.top_card(c) for c in splayable]
            card = yield from self.choose_one_card(player, tops)
            if card is None:
                return False
            self.game.splay(player, card.color, direction)
            return True

        done = yield from self.may(player, pick_and_splay)
        return bool(done)

    def execute_alone(self, player: PlayerState, card: Card) -> Flow:
        """Run ``card``'s non-demand clauses for ``player`` only."""
        result = yield from execute(self.game, player, card, alone=True)
        return result


# ============================================================================
# Execution
# ============================================================================

@dataclass(frozen=True)
class Eligibility:
    """Who shares and who is demanded, fixed when execution starts."""
    sharers: tuple[PlayerState, ...]
    demanded: tuple[PlayerState, ...]


def eligibility(game: GameState, player: PlayerState, card: Card) -> Eligibility:
    icon = card.main_icon
    base = player.count_icon(icon)
    sharers, demanded = [], []
    for other in game.opponents_of(player.id):
        if other.count_icon(icon) >= base:
            sharers.append(other)
        else:
            demanded.append(other)
    return Eligibility(tuple(sharers), tuple(demanded))


def execute(game: GameState, player: PlayerState, card: Card, alone: bool = False) -> Flow:
    """
    Execute every clause of ``card`` on behalf of ``player``.

    Share clauses run for the initiator, then for each sharing opponent in
    turn order. Demand clauses run once for each demanded opponent. With
    ``alone`` only the initiator runs share clauses and demands are skipped.
    """
    if alone:
        snapshot = Eligibility((), ())
    else:
        snapshot = eligibility(game, player, card)
    logger.debug(
        "player %d executes %s (sharers=%s, demanded=%s)",
        player.id, card.name,
        [p.id for p in snapshot.sharers], [p.id for p in snapshot.demanded],
    )

    ctx = DogmaContext(game, card, player)
    opponent_acted = False
    for dogma in card.dogmas:
        if dogma.is_demand:
            for opponent in snapshot.demanded:
                yield from with_card(run_clause(dogma.clause, player, opponent, game, ctx), card)
            continue
        yield from with_card(run_clause(dogma.clause, player, game, ctx), card)
        for sharer in snapshot.sharers:
            before = game.operation_count
            yield from with_card(run_clause(dogma.clause, sharer, game, ctx), card)
            opponent_acted = opponent_acted or game.operation_count != before

    if opponent_acted and game.share_bonus:
        logger.debug("player %d takes the share bonus for %s", player.id, card.name)
        game.draw(player, player.age())
    return None
