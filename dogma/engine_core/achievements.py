"""
Achievements - Automatic special achievement claims and the achievement win.

Each special achievement has a watcher. On every event a watcher names the
players whose state it affected; the manager then re-checks the full
condition for those players in turn order from the acting player, and the
first one who qualifies claims it. Claimed achievements leave the pool and
are never checked again.
"""

from __future__ import annotations
from dataclasses import dataclass
import logging
from typing import TYPE_CHECKING, Iterable

from .errors import Win, WinningSituation
from .events import (
    Achieved,
    ChangeTurn,
    Event,
    Observer,
    OpKind,
    Splayed,
    Transferred,
)
from .state import (
    ACHIEVEMENTS_TO_WIN,
    RESOURCE_ICONS,
    Color,
    Icon,
    PlayerState,
    SpecialAchievement,
    SplayDirection,
)

if TYPE_CHECKING:
    from .game_state import GameState

logger = logging.getLogger(__name__)


def board_players(event: Event) -> set[int]:
    """Players whose board changed in a transfer."""
    if not isinstance(event, Transferred):
        return set()
    touched = set()
    for place in (event.source, event.dest):
        if place.is_board:
            touched.add(place.player_id)
    return touched


# ============================================================================
# Watchers
# ============================================================================

class Watcher:
    """Narrows events to interested players, then checks the full condition."""

    def interested(self, event: Event) -> set[int]:
        raise NotImplementedError

    def qualifies(self, game: GameState, player: PlayerState) -> bool:
        raise NotImplementedError


@dataclass
class MonumentWatcher(Watcher):
    """Six scores or six tucks by the acting player within one turn."""
    acting_player: int = 0
    scored: int = 0
    tucked: int = 0
    threshold: int = 6

    def interested(self, event: Event) -> set[int]:
        if isinstance(event, ChangeTurn):
            self.acting_player = event.current
            self.scored = 0
            self.tucked = 0
            return set()
        if not isinstance(event, Transferred) or event.actor != self.acting_player:
            return set()
        if event.op is OpKind.SCORE:
            self.scored += 1
        elif event.op is OpKind.TUCK:
            self.tucked += 1
        else:
            return set()
        return {self.acting_player}

    def qualifies(self, game: GameState, player: PlayerState) -> bool:
        return (
            player.id == self.acting_player
            and max(self.scored, self.tucked) >= self.threshold
        )


class EmpireWatcher(Watcher):
    """At least three of every icon on the board."""

    def interested(self, event: Event) -> set[int]:
        return board_players(event)

    def qualifies(self, game: GameState, player: PlayerState) -> bool:
        counts = player.icon_count()
        return all(counts[icon] >= 3 for icon in RESOURCE_ICONS)


class WorldWatcher(Watcher):
    """At least twelve clocks on the board."""

    def interested(self, event: Event) -> set[int]:
        return board_players(event)

    def qualifies(self, game: GameState, player: PlayerState) -> bool:
        return player.count_icon(Icon.CLOCK) >= 12


class WonderWatcher(Watcher):
    """All five colors splayed right or up."""

    def interested(self, event: Event) -> set[int]:
        if isinstance(event, Splayed) and event.direction in (SplayDirection.RIGHT, SplayDirection.UP):
            return {event.player_id}
        return set()

    def qualifies(self, game: GameState, player: PlayerState) -> bool:
        board = player.board
        return all(
            board.is_splayed(color, SplayDirection.RIGHT) or board.is_splayed(color, SplayDirection.UP)
            for color in Color
        )


class UniverseWatcher(Watcher):
    """Five top cards, each of age eight or higher."""

    def interested(self, event: Event) -> set[int]:
        return board_players(event)

    def qualifies(self, game: GameState, player: PlayerState) -> bool:
        tops = player.board.top_cards()
        return len(tops) == len(Color) and all(card.age >= 8 for card in tops)


def default_watchers() -> dict[SpecialAchievement, Watcher]:
    return {
        SpecialAchievement.MONUMENT: MonumentWatcher(),
        SpecialAchievement.EMPIRE: EmpireWatcher(),
        SpecialAchievement.WORLD: WorldWatcher(),
        SpecialAchievement.WONDER: WonderWatcher(),
        SpecialAchievement.UNIVERSE: UniverseWatcher(),
    }


# ============================================================================
# Observers
# ============================================================================

class AchievementManager(Observer):
    """
    Internal observer that claims special achievements.

    Watchers whose achievement has left the pool (claimed by the manager or
    by a card effect) are dropped.
    """

    def __init__(self, achievements: Iterable[SpecialAchievement] | None = None,
                 acting_player: int = 0):
        watchers = default_watchers()
        if achievements is not None:
            watchers = {a: watchers[a] for a in achievements}
        self.watchers = watchers
        self.acting_player = acting_player
        monument = self.watchers.get(SpecialAchievement.MONUMENT)
        if isinstance(monument, MonumentWatcher):
            monument.acting_player = acting_player

    def update(self, event: Event, game: GameState) -> None:
        if isinstance(event, ChangeTurn):
            self.acting_player = event.current

        for achievement, watcher in list(self.watchers.items()):
            if not game.is_available(achievement):
                del self.watchers[achievement]
                continue
            interested = watcher.interested(event)
            if not interested:
                continue
            for pid in game.ids_from(self.acting_player):
                if pid not in interested:
                    continue
                player = game.players[pid]
                if watcher.qualifies(game, player):
                    del self.watchers[achievement]
                    game.try_achieve(player, achievement)
                    break


class WinByAchievementChecker(Observer):
    """Internal observer that ends the game when a player has enough achievements."""

    def __init__(self, num_players: int):
        if num_players not in ACHIEVEMENTS_TO_WIN:
            raise ValueError(f"Innovation supports 2-4 players, got {num_players}")
        self.required = ACHIEVEMENTS_TO_WIN[num_players]

    def update(self, event: Event, game: GameState) -> None:
        if not isinstance(event, Achieved):
            return
        player = game.players[event.player_id]
        if len(player.achievements) >= self.required:
            logger.info("player %d reaches %d achievements", player.id, len(player.achievements))
            raise Win(WinningSituation.someone(player.id))
