"""
Game State - Cards, zones and per-player containers.

Design principles:
- A card object exists once; every zone holds references to it
- Zones are plain mutable containers; moving cards between them is the
  job of the transfer layer, which also emits events
- Boards know how splaying exposes icons on covered cards
"""

from __future__ import annotations
from collections import Counter, deque
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Iterable, Iterator, Union

from .errors import Win, WinningSituation

if TYPE_CHECKING:
    from .effect_resolver import Dogma


# Ages 1-10
AGES = list(range(1, 11))
MAX_AGE = 10

# Normal achievements exist for ages 1-9
ACHIEVEMENT_AGES = list(range(1, 10))

# Win condition: achievements needed
ACHIEVEMENTS_TO_WIN = {
    2: 6,  # 2 players: 6 achievements
    3: 5,  # 3 players: 5 achievements
    4: 4,  # 4 players: 4 achievements
}


class Color(Enum):
    BLUE = "blue"
    RED = "red"
    GREEN = "green"
    YELLOW = "yellow"
    PURPLE = "purple"


class Icon(Enum):
    CASTLE = "castle"
    CROWN = "crown"
    LEAF = "leaf"
    LIGHTBULB = "lightbulb"
    FACTORY = "factory"
    CLOCK = "clock"
    EMPTY = "empty"


RESOURCE_ICONS = [icon for icon in Icon if icon is not Icon.EMPTY]

# Icon positions on a card: top-left, bottom-left, bottom-center, bottom-right
ICON_POSITIONS = ("top_left", "bottom_left", "bottom_center", "bottom_right")


class SplayDirection(Enum):
    """Splay directions for card stacks."""
    NONE = "none"
    LEFT = "left"
    RIGHT = "right"
    UP = "up"

    @property
    def visible_positions(self) -> tuple[bool, bool, bool, bool]:
        """Which icon positions of a covered card stay visible."""
        return _SPLAY_MASKS[self]


_SPLAY_MASKS = {
    SplayDirection.NONE: (False, False, False, False),
    SplayDirection.LEFT: (False, False, False, True),
    SplayDirection.RIGHT: (True, True, False, False),
    SplayDirection.UP: (False, True, True, True),
}


class PlayerPlace(Enum):
    """Zones owned by a player."""
    HAND = "hand"
    SCORE = "score"
    BOARD = "board"


# ============================================================================
# Cards and achievements
# ============================================================================

@dataclass(frozen=True, eq=False)
class Card:
    """
    An Innovation card.

    Cards are identified by name. ``dogmas`` holds the ordered clauses that
    run when the card is executed.
    """
    name: str
    age: int
    color: Color
    icons: tuple[Icon, Icon, Icon, Icon]
    dogmas: tuple["Dogma", ...] = ()
    dogma_icon: Icon | None = None
    doc: str = ""

    @property
    def main_icon(self) -> Icon:
        """The icon compared when deciding who shares or is demanded."""
        if self.dogma_icon is not None:
            return self.dogma_icon
        counts = Counter(icon for icon in self.icons if icon is not Icon.EMPTY)
        common = counts.most_common(1)
        return common[0][0] if common else Icon.EMPTY

    def contains(self, icon: Icon) -> bool:
        return icon in self.icons

    def __hash__(self):
        return hash(self.name)

    def __eq__(self, other):
        if not isinstance(other, Card):
            return False
        return self.name == other.name

    def __repr__(self):
        return f"Card({self.name!r}, age={self.age}, {self.color.value})"


@dataclass(frozen=True)
class NormalAchievement:
    """An age achievement; ``card`` is the supply card set aside for it."""
    age: int
    card: Card | None = field(default=None, compare=False)

    def __str__(self):
        return f"age {self.age}"


class SpecialAchievement(Enum):
    MONUMENT = "monument"
    EMPIRE = "empire"
    WORLD = "world"
    WONDER = "wonder"
    UNIVERSE = "universe"

    def __str__(self):
        return self.value


Achievement = Union[NormalAchievement, SpecialAchievement]


# ============================================================================
# Zones
# ============================================================================

class CardSet:
    """An ordered collection of cards (hand, score pile)."""

    def __init__(self, cards: Iterable[Card] = ()):
        self.cards: list[Card] = list(cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __len__(self) -> int:
        return len(self.cards)

    def __contains__(self, card: object) -> bool:
        return card in self.cards

    @property
    def is_empty(self) -> bool:
        return not self.cards

    def add(self, card: Card) -> None:
        self.cards.append(card)

    def remove(self, card: Card) -> bool:
        if card in self.cards:
            self.cards.remove(card)
            return True
        return False

    def ages(self) -> list[int]:
        return [card.age for card in self.cards]

    def total_age(self) -> int:
        return sum(card.age for card in self.cards)


class Stack:
    """
    One color pile on a board.

    ``cards[0]`` is the top card. Splay is lost once fewer than two cards
    remain.
    """

    def __init__(self, color: Color, cards: Iterable[Card] = ()):
        self.color = color
        self.cards: list[Card] = list(cards)
        self.splay = SplayDirection.NONE

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __contains__(self, card: object) -> bool:
        return card in self.cards

    @property
    def is_empty(self) -> bool:
        return not self.cards

    @property
    def top_card(self) -> Card | None:
        return self.cards[0] if self.cards else None

    @property
    def bottom_card(self) -> Card | None:
        return self.cards[-1] if self.cards else None

    def add_top(self, card: Card) -> None:
        self.cards.insert(0, card)

    def add_bottom(self, card: Card) -> None:
        self.cards.append(card)

    def insert(self, index: int, card: Card) -> None:
        self.cards.insert(index, card)

    def pop_at(self, index: int) -> Card | None:
        if not -len(self.cards) <= index < len(self.cards):
            return None
        card = self.cards.pop(index)
        self._drop_splay_if_short()
        return card

    def remove(self, card: Card) -> bool:
        if card not in self.cards:
            return False
        self.cards.remove(card)
        self._drop_splay_if_short()
        return True

    def set_splay(self, direction: SplayDirection) -> None:
        self.splay = direction

    def icon_count(self) -> Counter:
        counts: Counter = Counter()
        if not self.cards:
            return counts
        counts.update(self.cards[0].icons)
        mask = self.splay.visible_positions
        for card in self.cards[1:]:
            counts.update(icon for icon, shown in zip(card.icons, mask) if shown)
        counts.pop(Icon.EMPTY, None)
        return counts

    def _drop_splay_if_short(self) -> None:
        if len(self.cards) < 2:
            self.splay = SplayDirection.NONE


class Board:
    """Five color stacks."""

    def __init__(self):
        self.stacks: dict[Color, Stack] = {color: Stack(color) for color in Color}

    def __iter__(self) -> Iterator[Stack]:
        return iter(self.stacks.values())

    def __contains__(self, card: object) -> bool:
        return any(card in stack for stack in self.stacks.values())

    def stack(self, color: Color) -> Stack:
        return self.stacks[color]

    def top_card(self, color: Color) -> Card | None:
        return self.stacks[color].top_card

    def top_cards(self) -> list[Card]:
        return [stack.top_card for stack in self.stacks.values() if stack.top_card is not None]

    def has_color(self, color: Color) -> bool:
        return not self.stacks[color].is_empty

    def cards(self) -> list[Card]:
        return [card for stack in self.stacks.values() for card in stack]

    def icon_count(self) -> Counter:
        total: Counter = Counter()
        for stack in self.stacks.values():
            total.update(stack.icon_count())
        return total

    def can_splay(self, color: Color, direction: SplayDirection) -> bool:
        stack = self.stacks[color]
        return len(stack) >= 2 and stack.splay is not direction

    def is_splayed(self, color: Color, direction: SplayDirection) -> bool:
        stack = self.stacks[color]
        return not stack.is_empty and stack.splay is direction


class Supply:
    """The ten age piles. Cards are drawn from the front and returned to the back."""

    def __init__(self, piles: dict[int, Iterable[Card]] | None = None):
        self.piles: dict[int, deque[Card]] = {age: deque() for age in AGES}
        for age, cards in (piles or {}).items():
            self.piles[age].extend(cards)

    @classmethod
    def from_cards(cls, cards: Iterable[Card]) -> Supply:
        supply = cls()
        for card in cards:
            supply.piles[card.age].append(card)
        return supply

    def __contains__(self, card: object) -> bool:
        return any(card in pile for pile in self.piles.values())

    def count(self, age: int) -> int:
        return len(self.piles[age])

    def counts(self) -> list[int]:
        return [len(self.piles[age]) for age in AGES]

    def cards(self) -> list[Card]:
        return [card for age in AGES for card in self.piles[age]]

    def has_card_from(self, age: int) -> bool:
        return any(self.piles[a] for a in range(max(age, 1), MAX_AGE + 1))

    def draw(self, age: int) -> Card:
        """Take the front card of the lowest non-empty pile at or above ``age``."""
        for current in range(max(age, 1), MAX_AGE + 1):
            pile = self.piles[current]
            if pile:
                return pile.popleft()
        raise Win(WinningSituation.by_score())

    def remove(self, card: Card) -> bool:
        pile = self.piles[card.age]
        if card in pile:
            pile.remove(card)
            return True
        return False

    def put_back(self, card: Card) -> None:
        self.piles[card.age].append(card)


# ============================================================================
# Players
# ============================================================================

@dataclass
class PlayerState:
    """State for a single player."""
    player_id: int
    hand: CardSet = field(default_factory=CardSet)
    score_pile: CardSet = field(default_factory=CardSet)
    board: Board = field(default_factory=Board)
    achievements: list[Achievement] = field(default_factory=list)

    @property
    def id(self) -> int:
        return self.player_id

    def zone(self, place: PlayerPlace) -> CardSet | Board:
        if place is PlayerPlace.HAND:
            return self.hand
        if place is PlayerPlace.SCORE:
            return self.score_pile
        return self.board

    def age(self) -> int:
        """Highest top card age, 0 with an empty board."""
        return max((card.age for card in self.board.top_cards()), default=0)

    def score(self) -> int:
        return self.score_pile.total_age()

    def icon_count(self) -> Counter:
        return self.board.icon_count()

    def count_icon(self, icon: Icon) -> int:
        return self.board.icon_count()[icon]

    def cards(self) -> list[Card]:
        return list(self.hand) + list(self.score_pile) + self.board.cards()
