"""
Innovation Cards - The bundled card set.

Card structure:
- Age (1-10)
- Color (red, yellow, green, blue, purple)
- Icons (4 positions: top_left, bottom_left, bottom_center, bottom_right)
- Dogmas (ordered clauses, see dogmas.py)

Cards are immutable and carry no per-game state, so one set of objects can
be shared by any number of games.
"""

from __future__ import annotations

from ...engine_core.state import Card, Color, Icon
from . import dogmas

E = Icon.EMPTY
CASTLE = Icon.CASTLE
CROWN = Icon.CROWN
LEAF = Icon.LEAF
BULB = Icon.LIGHTBULB
FACTORY = Icon.FACTORY
CLOCK = Icon.CLOCK


# ============================================================================
# Age 1
# ============================================================================

POTTERY = Card(
    "Pottery", 1, Color.BLUE, (E, LEAF, LEAF, LEAF), dogmas.pottery(),
    doc="You may return up to three cards from your hand. If you returned any cards, "
        "draw and score a card of value equal to the number of cards you returned.\n"
        "Draw a 1.",
)

TOOLS = Card(
    "Tools", 1, Color.BLUE, (E, BULB, BULB, CASTLE), dogmas.tools(),
    doc="You may return three cards from your hand. If you do, draw and meld a 3.\n"
        "You may return a 3 from your hand. If you do, draw three 1.",
)

ARCHERY = Card(
    "Archery", 1, Color.RED, (CASTLE, BULB, E, CASTLE), dogmas.archery(),
    doc="I demand you draw a 1, then transfer the highest card in your hand to my hand!",
)

METALWORKING = Card(
    "Metalworking", 1, Color.RED, (CASTLE, CASTLE, E, CASTLE), dogmas.metalworking(),
    doc="Draw and reveal a 1. If it has a [Castle], score it and repeat this dogma effect. "
        "Otherwise, keep it.",
)

OARS = Card(
    "Oars", 1, Color.RED, (CASTLE, CROWN, E, CASTLE), dogmas.oars(),
    doc="I demand you transfer a card with a [Crown] from your hand to my score pile! "
        "If you do, draw a 1.\n"
        "If no cards were transferred due to this demand, draw a 1.",
)

CLOTHING = Card(
    "Clothing", 1, Color.GREEN, (E, CROWN, LEAF, LEAF), dogmas.clothing(),
    doc="Meld a card from your hand of different color from any card on your board.\n"
        "Draw and score a 1 for each color present on your board not present "
        "on any other player's board.",
)

AGRICULTURE = Card(
    "Agriculture", 1, Color.YELLOW, (E, LEAF, LEAF, LEAF), dogmas.agriculture(),
    doc="You may return a card from your hand. "
        "If you do, draw and score a card of value one higher than the card you returned.",
)

DOMESTICATION = Card(
    "Domestication", 1, Color.YELLOW, (CASTLE, CROWN, E, CASTLE), dogmas.domestication(),
    doc="Meld the lowest card in your hand. Draw a 1.",
)

MASONRY = Card(
    "Masonry", 1, Color.YELLOW, (CASTLE, E, CASTLE, CASTLE), dogmas.masonry(),
    doc="You may meld any number of cards from your hand, each with a [Castle]. "
        "If you melded four or more cards, claim the Monument achievement.",
)

CITY_STATES = Card(
    "City States", 1, Color.PURPLE, (E, CROWN, CROWN, CASTLE), dogmas.city_states(),
    doc="I demand you transfer a top card with a [Castle] from your board to my board "
        "if you have at least four [Castle] icons on your board! If you do, draw a 1!",
)

CODE_OF_LAWS = Card(
    "Code of Laws", 1, Color.PURPLE, (E, CROWN, CROWN, LEAF), dogmas.code_of_laws(),
    doc="You may tuck a card from your hand of the same color as any card on your board. "
        "If you do, you may splay that color of your cards left.",
)

MYSTICISM = Card(
    "Mysticism", 1, Color.PURPLE, (E, CASTLE, CASTLE, CASTLE), dogmas.mysticism(),
    doc="Draw a 1. If it is the same color as any card on your board, "
        "meld it and draw a 1.",
)


# ============================================================================
# Ages 2-9
# ============================================================================

MONOTHEISM = Card(
    "Monotheism", 2, Color.PURPLE, (E, CASTLE, CASTLE, CASTLE), dogmas.monotheism(),
    doc="I demand you transfer a top card on your board of a different color from "
        "any card on my board to my score pile! If you do, draw and tuck a 1!\n"
        "Draw and tuck a 1.",
)

PHILOSOPHY = Card(
    "Philosophy", 2, Color.PURPLE, (E, BULB, BULB, BULB), dogmas.philosophy(),
    doc="You may splay left any one color of your cards.\n"
        "You may score a card from your hand.",
)

OPTICS = Card(
    "Optics", 3, Color.RED, (CROWN, CROWN, CROWN, E), dogmas.optics(),
    doc="Draw and meld a 3. If it has a [Crown], draw and score a 4. Otherwise, "
        "transfer a card from your score pile to the score pile of an opponent "
        "with fewer points than you.",
)

ANATOMY = Card(
    "Anatomy", 4, Color.YELLOW, (LEAF, LEAF, LEAF, E), dogmas.anatomy(),
    doc="I demand you return a card from your score pile! If you do, "
        "return a top card of equal value from your board!",
)

ENTERPRISE = Card(
    "Enterprise", 4, Color.PURPLE, (E, CROWN, CROWN, CROWN), dogmas.enterprise(),
    doc="I demand you transfer a top non-purple card with a [Crown] from your board "
        "to my board! If you do, draw and meld a 4!\n"
        "You may splay your green cards right.",
)

REFORMATION = Card(
    "Reformation", 4, Color.PURPLE, (LEAF, LEAF, E, LEAF), dogmas.reformation(),
    doc="You may tuck a card from your hand for every two [Leaf] icons on your board.\n"
        "You may splay your yellow or purple cards right.",
)

COMPUTERS = Card(
    "Computers", 9, Color.BLUE, (CLOCK, E, CLOCK, FACTORY), dogmas.computers(),
    doc="You may splay your red cards or your green cards up.\n"
        "Draw and meld a 10, then execute its non-demand dogma effects for yourself only.",
)


# ============================================================================
# Card Registry
# ============================================================================

INNOVATION_CARDS = [
    POTTERY,
    TOOLS,
    ARCHERY,
    METALWORKING,
    OARS,
    CLOTHING,
    AGRICULTURE,
    DOMESTICATION,
    MASONRY,
    CITY_STATES,
    CODE_OF_LAWS,
    MYSTICISM,
    MONOTHEISM,
    PHILOSOPHY,
    OPTICS,
    ANATOMY,
    ENTERPRISE,
    REFORMATION,
    COMPUTERS,
]


def get_card_by_name(name: str) -> Card | None:
    """Look up a bundled card by name."""
    for card in INNOVATION_CARDS:
        if card.name == name:
            return card
    return None


def default_catalog() -> dict[str, Card]:
    return {card.name: card for card in INNOVATION_CARDS}
