"""
GameState - Players, supply, achievement pool and the event dispatcher.

Rule operations (draw, meld, tuck, score, return, splay, achieve) live here
so card effects read like the card text: ``game.draw_and_meld(player, 3)``.
Each operation goes through the transfer layer and is announced exactly
once after it is committed.
"""

from __future__ import annotations
from functools import wraps
import logging
from typing import Iterable, Iterator

from .errors import InvalidAction, Win
from .events import Achieved, Dispatcher, Event, OpKind, Splayed, is_operation
from .state import (
    Achievement,
    Card,
    Color,
    NormalAchievement,
    PlayerState,
    SplayDirection,
    Supply,
)
from .transfer import ByAge, ByCard, Place, Position, Selector, transfer

logger = logging.getLogger(__name__)


def attributed(method):
    """Tag a ``Win`` escaping a player operation with that player."""
    @wraps(method)
    def wrapper(self, player, *args, **kwargs):
        try:
            return method(self, player, *args, **kwargs)
        except Win as win:
            raise win.attribute(player.id)
    return wrapper


class GameState:
    """
    Everything on the table.

    ``players`` is indexed by player id. ``achievements`` is the unclaimed
    pool, normal and special.
    """

    def __init__(
        self,
        players: list[PlayerState],
        supply: Supply,
        achievements: Iterable[Achievement] = (),
        catalog: dict[str, Card] | None = None,
        share_bonus: bool = False,
    ):
        self.players = players
        self.supply = supply
        self.achievements: list[Achievement] = list(achievements)
        self.catalog = catalog or {}
        self.share_bonus = share_bonus
        self.dispatcher = Dispatcher()
        self.operation_count = 0

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def num_players(self) -> int:
        return len(self.players)

    def player(self, player_id: int) -> PlayerState:
        if not 0 <= player_id < len(self.players):
            raise InvalidAction(f"No player {player_id}")
        return self.players[player_id]

    def ids_from(self, start: int) -> Iterator[int]:
        """Player ids in turn order beginning with ``start``."""
        n = len(self.players)
        for offset in range(n):
            yield (start + offset) % n

    def players_from(self, start: int) -> list[PlayerState]:
        return [self.players[pid] for pid in self.ids_from(start)]

    def opponents_of(self, player_id: int) -> list[PlayerState]:
        """Other players in turn order after ``player_id``."""
        return self.players_from(player_id)[1:]

    def normal_achievement(self, age: int) -> NormalAchievement | None:
        for achievement in self.achievements:
            if isinstance(achievement, NormalAchievement) and achievement.age == age:
                return achievement
        return None

    def is_available(self, achievement: Achievement) -> bool:
        return achievement in self.achievements

    def owner_of(self, achievement: Achievement) -> PlayerState | None:
        for player in self.players:
            if achievement in player.achievements:
                return player
        return None

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def notify(self, event: Event) -> None:
        if is_operation(event):
            self.operation_count += 1
        self.dispatcher.notify(event, self)

    # ------------------------------------------------------------------
    # Card operations
    # ------------------------------------------------------------------

    def _move(self, player: PlayerState, source: Place, dest: Place, selector: Selector,
              position: Position | int = Position.TOP, op: OpKind = OpKind.TRANSFER) -> Card:
        return transfer(self, source, dest, selector, position, op=op, actor=player.id)

    @attributed
    def draw(self, player: PlayerState, age: int) -> Card:
        return self._move(player, Place.supply(), Place.hand(player.id), ByAge(age), op=OpKind.DRAW)

    @attributed
    def draw_and_meld(self, player: PlayerState, age: int) -> Card:
        return self._move(player, Place.supply(), Place.board(player.id), ByAge(age), op=OpKind.MELD)

    @attributed
    def draw_and_score(self, player: PlayerState, age: int) -> Card:
        return self._move(player, Place.supply(), Place.score(player.id), ByAge(age), op=OpKind.SCORE)

    @attributed
    def draw_and_tuck(self, player: PlayerState, age: int) -> Card:
        return self._move(player, Place.supply(), Place.board(player.id), ByAge(age),
                          Position.BOTTOM, op=OpKind.TUCK)

    @attributed
    def meld(self, player: PlayerState, card: Card) -> Card:
        return self._move(player, Place.hand(player.id), Place.board(player.id), ByCard(card),
                          op=OpKind.MELD)

    @attributed
    def tuck(self, player: PlayerState, card: Card) -> Card:
        return self._move(player, Place.hand(player.id), Place.board(player.id), ByCard(card),
                          Position.BOTTOM, op=OpKind.TUCK)

    @attributed
    def score(self, player: PlayerState, card: Card) -> Card:
        return self._move(player, Place.hand(player.id), Place.score(player.id), ByCard(card),
                          op=OpKind.SCORE)

    @attributed
    def score_from(self, player: PlayerState, card: Card, source: Place) -> Card:
        return self._move(player, source, Place.score(player.id), ByCard(card), op=OpKind.SCORE)

    @attributed
    def return_card(self, player: PlayerState, card: Card) -> Card:
        return self._move(player, Place.hand(player.id), Place.supply(), ByCard(card),
                          op=OpKind.RETURN)

    @attributed
    def return_from(self, player: PlayerState, card: Card, source: Place) -> Card:
        return self._move(player, source, Place.supply(), ByCard(card), op=OpKind.RETURN)

    @attributed
    def transfer_card(self, player: PlayerState, source: Place, dest: Place, card: Card,
                      position: Position | int = Position.TOP) -> Card:
        """Move ``card`` on behalf of ``player``, e.g. under a demand."""
        return self._move(player, source, dest, ByCard(card), position)

    @attributed
    def splay(self, player: PlayerState, color: Color, direction: SplayDirection) -> None:
        if not player.board.can_splay(color, direction):
            raise InvalidAction(f"Cannot splay {color.value} {direction.value}")
        player.board.stack(color).set_splay(direction)
        logger.debug("player %d splays %s %s", player.id, color.value, direction.value)
        self.notify(Splayed(player.id, color, direction))

    # ------------------------------------------------------------------
    # Achievements
    # ------------------------------------------------------------------

    @attributed
    def try_achieve(self, player: PlayerState, achievement: Achievement) -> None:
        """Move ``achievement`` from the pool to ``player``."""
        if achievement not in self.achievements:
            raise InvalidAction(f"Achievement {achievement} is not available")
        self.achievements.remove(achievement)
        player.achievements.append(achievement)
        logger.info("player %d claims %s", player.id, achievement)
        self.notify(Achieved(player.id, achievement))

    def achieve_if_available(self, player: PlayerState, achievement: Achievement) -> bool:
        if achievement not in self.achievements:
            return False
        self.try_achieve(player, achievement)
        return True

    def can_achieve_age(self, player: PlayerState, age: int) -> bool:
        """Normal achievement rule: score of 5x age and a top card of that age."""
        return (
            self.normal_achievement(age) is not None
            and player.score() >= 5 * age
            and player.age() >= age
        )
