"""
Pytest fixtures for Dogma tests.
"""

import pytest

from ..config import EngineSettings
from ..engine_core.events import Observer
from ..engine_core.game_state import GameState
from ..engine_core.state import Card, Color, Icon, PlayerState, Supply
from ..games.innovation.cards import INNOVATION_CARDS
from ..games.innovation.setup import GameConfig, PlayerSetup


E = Icon.EMPTY


def make_card(name, age=1, color=Color.BLUE, icons=(E, E, E, E), dogmas=()):
    """A card outside the bundled set."""
    return Card(name, age, color, tuple(icons), tuple(dogmas))


class Recorder(Observer):
    """External observer that keeps every event it sees."""

    def __init__(self):
        self.events = []

    def update(self, event, game):
        self.events.append(event)

    def of_type(self, kind):
        return [e for e in self.events if isinstance(e, kind)]


@pytest.fixture
def settings() -> EngineSettings:
    """Settings independent of the environment."""
    return EngineSettings(log_level="DEBUG", record_replay=True, share_bonus=False, log_events=False)


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def make_game(settings, recorder):
    """
    Build a game from player setups.

    Every test game uses the bundled cards plus ``extra_cards`` as its
    catalog, and records events into the ``recorder`` fixture.
    """
    def build(players=None, supply=None, achievements=None, first_player=0,
              first_action_is_second=True, extra_cards=(), settings_override=None):
        config = GameConfig(
            cards=list(INNOVATION_CARDS) + list(extra_cards),
            players=players or [PlayerSetup(), PlayerSetup()],
            supply=supply if supply is not None else {},
            achievements=achievements,
            first_player=first_player,
            first_action_is_second=first_action_is_second,
            settings=settings_override or settings,
            observers=[recorder],
        )
        return config.build()

    return build


@pytest.fixture
def table(recorder) -> GameState:
    """A bare two-player table with a small supply and an event recorder."""
    from ..games.innovation import cards

    supply = Supply({1: [cards.POTTERY, cards.TOOLS, cards.ARCHERY], 2: [cards.MONOTHEISM]})
    state = GameState(
        players=[PlayerState(0), PlayerState(1)],
        supply=supply,
        catalog={card.name: card for card in INNOVATION_CARDS},
    )
    state.dispatcher.add_external(recorder)
    return state
