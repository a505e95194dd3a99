"""
Tests for cards, zones and icon visibility.
"""

import pytest

from ..engine_core.errors import Win, WinKind
from ..engine_core.state import (
    Board,
    Color,
    Icon,
    PlayerState,
    SplayDirection,
    Stack,
    Supply,
)
from ..games.innovation import cards
from .conftest import make_card


CASTLE, LEAF, CROWN, CLOCK = Icon.CASTLE, Icon.LEAF, Icon.CROWN, Icon.CLOCK


@pytest.fixture
def two_card_stack() -> Stack:
    top = make_card("Top", color=Color.RED, icons=(CASTLE, LEAF, CROWN, CLOCK))
    under = make_card("Under", color=Color.RED, icons=(CASTLE, LEAF, CROWN, CLOCK))
    stack = Stack(Color.RED)
    stack.add_top(under)
    stack.add_top(top)
    return stack


class TestCard:
    """Tests for card identity and dogma icon."""

    def test_cards_compare_by_name(self):
        a = make_card("Same", age=1)
        b = make_card("Same", age=2)
        assert a == b
        assert hash(a) == hash(b)
        assert a != make_card("Other")

    def test_main_icon_is_most_frequent(self):
        assert cards.ARCHERY.main_icon is Icon.CASTLE
        assert cards.CITY_STATES.main_icon is Icon.CROWN
        assert cards.COMPUTERS.main_icon is Icon.CLOCK

    def test_blank_card_has_empty_main_icon(self):
        assert make_card("Blank").main_icon is Icon.EMPTY


class TestStackVisibility:
    """Splay direction decides which icons of covered cards count."""

    def test_unsplayed_counts_top_only(self, two_card_stack):
        counts = two_card_stack.icon_count()
        assert counts == {CASTLE: 1, LEAF: 1, CROWN: 1, CLOCK: 1}

    def test_left_shows_bottom_right(self, two_card_stack):
        two_card_stack.set_splay(SplayDirection.LEFT)
        counts = two_card_stack.icon_count()
        assert counts[CLOCK] == 2
        assert counts[CASTLE] == 1

    def test_right_shows_left_column(self, two_card_stack):
        two_card_stack.set_splay(SplayDirection.RIGHT)
        counts = two_card_stack.icon_count()
        assert counts[CASTLE] == 2
        assert counts[LEAF] == 2
        assert counts[CROWN] == 1
        assert counts[CLOCK] == 1

    def test_up_shows_bottom_row(self, two_card_stack):
        two_card_stack.set_splay(SplayDirection.UP)
        counts = two_card_stack.icon_count()
        assert counts[CASTLE] == 1
        assert counts[LEAF] == 2
        assert counts[CROWN] == 2
        assert counts[CLOCK] == 2

    def test_empty_icons_not_counted(self):
        stack = Stack(Color.BLUE, [cards.POTTERY])
        assert Icon.EMPTY not in stack.icon_count()

    def test_splay_lost_below_two_cards(self, two_card_stack):
        two_card_stack.set_splay(SplayDirection.LEFT)
        two_card_stack.pop_at(0)
        assert two_card_stack.splay is SplayDirection.NONE


class TestBoard:
    """Tests for board queries."""

    def test_top_cards_and_colors(self):
        board = Board()
        board.stack(Color.RED).add_top(cards.ARCHERY)
        board.stack(Color.RED).add_top(cards.OARS)
        board.stack(Color.BLUE).add_top(cards.POTTERY)
        assert set(board.top_cards()) == {cards.OARS, cards.POTTERY}
        assert board.has_color(Color.RED)
        assert not board.has_color(Color.GREEN)

    def test_can_splay_needs_two_cards_and_new_direction(self):
        board = Board()
        board.stack(Color.RED).add_top(cards.ARCHERY)
        assert not board.can_splay(Color.RED, SplayDirection.LEFT)

        board.stack(Color.RED).add_top(cards.OARS)
        assert board.can_splay(Color.RED, SplayDirection.LEFT)

        board.stack(Color.RED).set_splay(SplayDirection.LEFT)
        assert not board.can_splay(Color.RED, SplayDirection.LEFT)
        assert board.can_splay(Color.RED, SplayDirection.UP)


class TestSupply:
    """Tests for the age piles."""

    def test_draw_takes_front_card(self):
        supply = Supply({1: [cards.POTTERY, cards.TOOLS]})
        assert supply.draw(1) is cards.POTTERY
        assert supply.counts()[0] == 1

    def test_draw_skips_empty_ages(self):
        supply = Supply({3: [cards.OPTICS]})
        assert supply.draw(1) is cards.OPTICS

    def test_age_zero_draws_a_one(self):
        supply = Supply({1: [cards.POTTERY]})
        assert supply.draw(0) is cards.POTTERY

    def test_exhausted_supply_wins_by_score(self):
        supply = Supply({1: [cards.POTTERY]})
        with pytest.raises(Win) as excinfo:
            supply.draw(2)
        assert excinfo.value.situation.kind is WinKind.BY_SCORE
        assert excinfo.value.current_player is None

    def test_above_ten_wins_by_score(self):
        supply = Supply({10: [make_card("Ten", age=10)]})
        with pytest.raises(Win):
            supply.draw(11)

    def test_returned_card_goes_to_bottom(self):
        supply = Supply({1: [cards.POTTERY]})
        supply.put_back(cards.TOOLS)
        assert list(supply.piles[1]) == [cards.POTTERY, cards.TOOLS]


class TestPlayerState:
    """Tests for derived player values."""

    def test_age_and_score(self):
        player = PlayerState(0)
        assert player.age() == 0
        player.board.stack(Color.PURPLE).add_top(cards.MONOTHEISM)
        player.board.stack(Color.RED).add_top(cards.ARCHERY)
        player.score_pile.add(cards.OPTICS)
        player.score_pile.add(cards.POTTERY)
        assert player.age() == 2
        assert player.score() == 4
