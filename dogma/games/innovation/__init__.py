"""
Innovation - The bundled card set and game setup.

Innovation is a card game about civilizations progressing through the ages.
Key mechanics:
- Cards have ages (1-10), colors (5), and icons
- Players meld cards to board, building stacks by color
- Splaying reveals icons on cards below
- Dogma effects are shared with or demanded of opponents based on icon counts
- First to N achievements wins

This module contains:
- Dogma clause procedures
- Card definitions
- Game setup
"""

from .cards import INNOVATION_CARDS, default_catalog, get_card_by_name
from .setup import GameConfig, PlayerSetup, setup_innovation_game

__all__ = [
    "INNOVATION_CARDS",
    "default_catalog",
    "get_card_by_name",
    "GameConfig",
    "PlayerSetup",
    "setup_innovation_game",
]
