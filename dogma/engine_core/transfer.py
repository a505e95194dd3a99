"""
Transfer - Moving cards between places.

A place is the supply or one of a player's zones. A selector says which
card to take from a place; a position says where an added card goes on a
board. ``transfer`` removes, adds and then announces one ``Transferred``
event, so observers only ever see committed state.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
import logging
from typing import TYPE_CHECKING, Union

from .errors import CardNotFound
from .events import OpKind, Transferred
from .state import Card, CardSet, Color, PlayerPlace, Stack

if TYPE_CHECKING:
    from .game_state import GameState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Place:
    """The supply (no player) or a player's hand, score pile or board."""
    player_id: int | None = None
    zone: PlayerPlace | None = None

    @classmethod
    def supply(cls) -> Place:
        return cls()

    @classmethod
    def player(cls, player_id: int, zone: PlayerPlace) -> Place:
        return cls(player_id, zone)

    @classmethod
    def hand(cls, player_id: int) -> Place:
        return cls(player_id, PlayerPlace.HAND)

    @classmethod
    def score(cls, player_id: int) -> Place:
        return cls(player_id, PlayerPlace.SCORE)

    @classmethod
    def board(cls, player_id: int) -> Place:
        return cls(player_id, PlayerPlace.BOARD)

    @property
    def is_supply(self) -> bool:
        return self.player_id is None

    @property
    def is_board(self) -> bool:
        return self.zone is PlayerPlace.BOARD

    def __str__(self):
        if self.is_supply:
            return "supply"
        return f"player {self.player_id} {self.zone.value}"


# ============================================================================
# Selectors and positions
# ============================================================================

@dataclass(frozen=True)
class ByAge:
    """Supply: the next card of this age or the first higher non-empty age."""
    age: int


@dataclass(frozen=True)
class ByCard:
    """Any player zone: this exact card."""
    card: Card


@dataclass(frozen=True)
class FromStack:
    """Board: the top (or bottom) card of a color stack."""
    color: Color
    top: bool = True


@dataclass(frozen=True)
class AtIndex:
    """Board: the card at ``index`` of a color stack, 0 being the top."""
    color: Color
    index: int


Selector = Union[ByAge, ByCard, FromStack, AtIndex]


class Position(Enum):
    TOP = "top"
    BOTTOM = "bottom"


# ============================================================================
# Primitives
# ============================================================================

def remove(game: GameState, place: Place, selector: Selector) -> Card:
    """Remove and return the selected card, or raise ``CardNotFound``.

    Drawing from an exhausted supply raises ``Win``.
    """
    if place.is_supply:
        if isinstance(selector, ByAge):
            return game.supply.draw(selector.age)
        if isinstance(selector, ByCard) and game.supply.remove(selector.card):
            return selector.card
        raise CardNotFound(f"{selector} not available in the supply")

    zone = game.player(place.player_id).zone(place.zone)
    if isinstance(zone, CardSet):
        if isinstance(selector, ByCard) and zone.remove(selector.card):
            return selector.card
        raise CardNotFound(f"{selector} not found in {place}")

    if isinstance(selector, ByCard):
        stack = zone.stack(selector.card.color)
        if stack.remove(selector.card):
            return selector.card
    elif isinstance(selector, FromStack):
        card = zone.stack(selector.color).pop_at(0 if selector.top else -1)
        if card is not None:
            return card
    elif isinstance(selector, AtIndex):
        card = zone.stack(selector.color).pop_at(selector.index)
        if card is not None:
            return card
    raise CardNotFound(f"{selector} not found in {place}")


def can_remove(game: GameState, place: Place, selector: Selector) -> bool:
    """Whether ``remove`` would succeed, without changing anything."""
    if place.is_supply:
        if isinstance(selector, ByAge):
            return game.supply.has_card_from(selector.age)
        return isinstance(selector, ByCard) and selector.card in game.supply

    zone = game.player(place.player_id).zone(place.zone)
    if isinstance(zone, CardSet):
        return isinstance(selector, ByCard) and selector.card in zone
    if isinstance(selector, ByCard):
        return selector.card in zone.stack(selector.card.color)
    if isinstance(selector, FromStack):
        return not zone.stack(selector.color).is_empty
    if isinstance(selector, AtIndex):
        stack = zone.stack(selector.color)
        return -len(stack) <= selector.index < len(stack)
    return False


def add(game: GameState, place: Place, card: Card,
        position: Position | int = Position.TOP) -> None:
    """Put ``card`` into ``place``. Only boards honor ``position``."""
    if place.is_supply:
        game.supply.put_back(card)
        return

    zone = game.player(place.player_id).zone(place.zone)
    if isinstance(zone, CardSet):
        zone.add(card)
        return

    stack: Stack = zone.stack(card.color)
    if position is Position.TOP:
        stack.add_top(card)
    elif position is Position.BOTTOM:
        stack.add_bottom(card)
    else:
        stack.insert(position, card)


def transfer(game: GameState, source: Place, dest: Place, selector: Selector,
             position: Position | int = Position.TOP, *,
             op: OpKind = OpKind.TRANSFER, actor: int | None = None) -> Card:
    """Move one card and announce it. Returns the moved card."""
    card = remove(game, source, selector)
    add(game, dest, card, position)
    logger.debug("%s: %s from %s to %s", op.value, card.name, source, dest)
    game.notify(Transferred(op=op, actor=actor, source=source, dest=dest, card=card))
    return card
