"""
Innovation Game Setup - Creates a ready-to-play game.

This module handles:
- Describing a table position (``GameConfig`` / ``PlayerSetup``) for tests
  and scripted scenarios
- Shuffling the age piles with a seed for determinism
- Setting aside the age achievements
- Initial deal and first meld

The setup follows Innovation base game rules for 2-4 players.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging
import random

from ...config import EngineSettings
from ...engine_core.events import EventLogger, Observer
from ...engine_core.game import Game
from ...engine_core.game_state import GameState
from ...engine_core.replay import ReplayLog
from ...engine_core.state import (
    ACHIEVEMENT_AGES,
    ACHIEVEMENTS_TO_WIN,
    Achievement,
    Card,
    Color,
    NormalAchievement,
    PlayerState,
    SpecialAchievement,
    SplayDirection,
    Supply,
)
from ...engine_core.turn import Turn
from .cards import INNOVATION_CARDS

logger = logging.getLogger(__name__)


@dataclass
class PlayerSetup:
    """
    Starting zones of one player.

    Board cards are melded in list order, so the last card of each color
    ends up on top.
    """
    hand: list[Card] = field(default_factory=list)
    score: list[Card] = field(default_factory=list)
    board: list[Card] = field(default_factory=list)
    achievements: list[Achievement] = field(default_factory=list)
    splays: dict[Color, SplayDirection] = field(default_factory=dict)

    def cards(self) -> list[Card]:
        return self.hand + self.score + self.board


@dataclass
class GameConfig:
    """
    Everything needed to build a ``Game``.

    ``supply`` maps age to pile (front is drawn first); when omitted every
    catalog card not held by a player goes to the supply. ``achievements``
    is the unclaimed pool; when omitted it holds the five special
    achievements.
    """
    cards: list[Card]
    players: list[PlayerSetup] = field(default_factory=lambda: [PlayerSetup(), PlayerSetup()])
    supply: dict[int, list[Card]] | None = None
    achievements: list[Achievement] | None = None
    first_player: int = 0
    first_action_is_second: bool = True
    settings: EngineSettings = field(default_factory=EngineSettings)
    observers: list[Observer] = field(default_factory=list)
    game_id: str | None = None

    def player(self, index: int, setup: PlayerSetup) -> GameConfig:
        while len(self.players) <= index:
            self.players.append(PlayerSetup())
        self.players[index] = setup
        return self

    def build(self) -> Game:
        num_players = len(self.players)
        if num_players not in ACHIEVEMENTS_TO_WIN:
            raise ValueError("Innovation supports 2-4 players")
        self._check_unique()

        players = [_create_player(i, setup) for i, setup in enumerate(self.players)]
        if self.supply is None:
            held = {card for setup in self.players for card in setup.cards()}
            supply = Supply.from_cards(card for card in self.cards if card not in held)
        else:
            supply = Supply(self.supply)

        if self.achievements is None:
            achievements: list[Achievement] = list(SpecialAchievement)
        else:
            achievements = list(self.achievements)

        state = GameState(
            players=players,
            supply=supply,
            achievements=achievements,
            catalog={card.name: card for card in self.cards},
            share_bonus=self.settings.share_bonus,
        )
        turn = Turn(
            num_players=num_players,
            current_player=self.first_player,
            is_second_action=self.first_action_is_second,
        )
        observers = list(self.observers)
        if self.settings.log_events:
            observers.append(EventLogger())
        replay = ReplayLog() if self.settings.record_replay else None
        return Game(state, turn, game_id=self.game_id, replay=replay, observers=observers)

    def _check_unique(self) -> None:
        seen: set[Card] = set()
        placed = [card for setup in self.players for card in setup.cards()]
        if self.supply is not None:
            placed += [card for pile in self.supply.values() for card in pile]
        for card in placed:
            if card in seen:
                raise ValueError(f"{card.name} is placed more than once")
            seen.add(card)


def _create_player(player_id: int, setup: PlayerSetup) -> PlayerState:
    player = PlayerState(player_id)
    for card in setup.hand:
        player.hand.add(card)
    for card in setup.score:
        player.score_pile.add(card)
    for card in setup.board:
        player.board.stack(card.color).add_top(card)
    for color, direction in setup.splays.items():
        player.board.stack(color).set_splay(direction)
    player.achievements.extend(setup.achievements)
    return player


# ============================================================================
# Random setup
# ============================================================================

def setup_innovation_game(
    num_players: int = 2,
    random_seed: int | None = None,
    settings: EngineSettings | None = None,
    cards: list[Card] | None = None,
) -> Game:
    """
    Set up a new Innovation game.

    Args:
        num_players: Number of players (2-4)
        random_seed: Seed for deterministic shuffling
        settings: Engine settings (read from the environment if omitted)
        cards: Card set (the bundled cards if omitted)

    Returns:
        A game waiting for the first player's action
    """
    if num_players < 2 or num_players > 4:
        raise ValueError("Innovation supports 2-4 players")

    rng = random.Random(random_seed)
    card_set = list(cards or INNOVATION_CARDS)

    piles = _create_supply_piles(card_set, rng)
    achievements = _set_aside_achievements(piles)
    setups = _deal_and_meld(piles, num_players)
    first_player = _first_player(setups)

    config = GameConfig(
        cards=card_set,
        players=setups,
        supply=piles,
        achievements=achievements,
        first_player=first_player,
        settings=settings or EngineSettings.from_env(),
    )
    game = config.build()
    logger.info(
        "new %d-player game %s (seed=%s), player %d starts",
        num_players, game.game_id, random_seed, first_player,
    )
    return game


def _create_supply_piles(cards: list[Card], rng: random.Random) -> dict[int, list[Card]]:
    piles: dict[int, list[Card]] = {age: [] for age in range(1, 11)}
    for card in sorted(cards, key=lambda c: c.name):
        piles[card.age].append(card)
    for pile in piles.values():
        rng.shuffle(pile)
    return piles


def _set_aside_achievements(piles: dict[int, list[Card]]) -> list[Achievement]:
    """One card of each age 1-9 becomes that age's achievement, then the specials."""
    achievements: list[Achievement] = []
    for age in ACHIEVEMENT_AGES:
        if piles[age]:
            achievements.append(NormalAchievement(age, piles[age].pop(0)))
    achievements.extend(SpecialAchievement)
    return achievements


def _deal_and_meld(piles: dict[int, list[Card]], num_players: int) -> list[PlayerSetup]:
    """Deal two 1s to each player; each melds the alphabetically first of them."""
    setups = []
    for _ in range(num_players):
        dealt = [piles[1].pop(0) for _ in range(2) if piles[1]]
        dealt.sort(key=lambda c: c.name)
        setups.append(PlayerSetup(hand=dealt[1:], board=dealt[:1]))
    return setups


def _first_player(setups: list[PlayerSetup]) -> int:
    """The player whose melded card comes first alphabetically starts."""
    melded = [(setup.board[0].name, i) for i, setup in enumerate(setups) if setup.board]
    return min(melded)[1] if melded else 0
