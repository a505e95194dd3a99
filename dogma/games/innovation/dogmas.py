"""
Innovation Dogmas - Clause procedures for the bundled cards.

Each function returns the ordered clauses of one card. Clauses that ask a
player something are generator functions and obtain answers with
``yield from ctx.<helper>(...)``; the others are plain functions.
"""

from __future__ import annotations

from ...engine_core.effect_resolver import Dogma, demand, shared
from ...engine_core.state import Color, Icon, SpecialAchievement, SplayDirection
from ...engine_core.transfer import Place


def _with_icon(cards, icon: Icon):
    return [card for card in cards if card.contains(icon)]


# ============================================================================
# Age 1
# ============================================================================

def pottery() -> tuple[Dogma, ...]:
    def return_and_score(player, game, ctx):
        cards = yield from ctx.choose_any_cards_up_to(player, player.hand, 3)
        if cards:
            for card in cards:
                game.return_card(player, card)
            game.draw_and_score(player, len(cards))

    def draw_one(player, game, ctx):
        game.draw(player, 1)

    return shared(return_and_score), shared(draw_one)


def tools() -> tuple[Dogma, ...]:
    def return_three(player, game, ctx):
        if len(player.hand) < 3:
            return
        if not (yield from ctx.choose_yn(player)):
            return
        cards = yield from ctx.choose_cards_exact(player, player.hand, 3)
        if cards:
            for card in cards:
                game.return_card(player, card)
            game.draw_and_meld(player, 3)

    def return_a_three(player, game, ctx):
        threes = [card for card in player.hand if card.age == 3]
        if not threes:
            return
        card = yield from ctx.may_choose_one_card(player, threes)
        if card is not None:
            game.return_card(player, card)
            for _ in range(3):
                game.draw(player, 1)

    return shared(return_three), shared(return_a_three)


def archery() -> tuple[Dogma, ...]:
    def draw_and_give_highest(me, opponent, game, ctx):
        game.draw(opponent, 1)
        highest = max(card.age for card in opponent.hand)
        card = yield from ctx.choose_one_card(
            opponent, [c for c in opponent.hand if c.age == highest]
        )
        game.transfer_card(opponent, Place.hand(opponent.id), Place.hand(me.id), card)

    return (demand(draw_and_give_highest),)


def metalworking() -> tuple[Dogma, ...]:
    def score_castles(player, game, ctx):
        while True:
            card = game.draw(player, 1)
            if not card.contains(Icon.CASTLE):
                return
            game.score(player, card)

    return (shared(score_castles),)


def oars() -> tuple[Dogma, ...]:
    def give_crown(me, opponent, game, ctx):
        card = yield from ctx.choose_one_card(opponent, _with_icon(opponent.hand, Icon.CROWN))
        if card is not None:
            game.transfer_card(opponent, Place.hand(opponent.id), Place.score(me.id), card)
            game.draw(opponent, 1)
            ctx.memo["transferred"] = True

    def draw_if_nothing_given(player, game, ctx):
        if not ctx.memo.get("transferred"):
            game.draw(player, 1)

    return demand(give_crown), shared(draw_if_nothing_given)


def clothing() -> tuple[Dogma, ...]:
    def meld_new_color(player, game, ctx):
        card = yield from ctx.choose_one_card(
            player, [c for c in player.hand if not player.board.has_color(c.color)]
        )
        if card is not None:
            game.meld(player, card)

    def score_unique_colors(player, game, ctx):
        unique = [
            color for color in Color
            if player.board.has_color(color)
            and not any(op.board.has_color(color) for op in game.opponents_of(player.id))
        ]
        for _ in unique:
            game.draw_and_score(player, 1)

    return shared(meld_new_color), shared(score_unique_colors)


def agriculture() -> tuple[Dogma, ...]:
    def return_and_score_higher(player, game, ctx):
        card = yield from ctx.may_choose_one_card(player, player.hand)
        if card is not None:
            game.return_card(player, card)
            game.draw_and_score(player, card.age + 1)

    return (shared(return_and_score_higher),)


def domestication() -> tuple[Dogma, ...]:
    def meld_lowest(player, game, ctx):
        if not player.hand.is_empty:
            lowest = min(player.hand.ages())
            card = yield from ctx.choose_one_card(
                player, [c for c in player.hand if c.age == lowest]
            )
            game.meld(player, card)
        game.draw(player, 1)

    return (shared(meld_lowest),)


def masonry() -> tuple[Dogma, ...]:
    def meld_castles(player, game, ctx):
        cards = yield from ctx.choose_any_cards_up_to(player, _with_icon(player.hand, Icon.CASTLE))
        for card in cards:
            game.meld(player, card)
        if len(cards) >= 4:
            game.achieve_if_available(player, SpecialAchievement.MONUMENT)

    return (shared(meld_castles),)


def city_states() -> tuple[Dogma, ...]:
    def take_castle_card(me, opponent, game, ctx):
        if opponent.count_icon(Icon.CASTLE) < 4:
            return
        card = yield from ctx.choose_one_card(
            opponent, _with_icon(opponent.board.top_cards(), Icon.CASTLE)
        )
        if card is not None:
            game.transfer_card(opponent, Place.board(opponent.id), Place.board(me.id), card)
            game.draw(opponent, 1)

    return (demand(take_castle_card),)


def code_of_laws() -> tuple[Dogma, ...]:
    def tuck_and_splay(player, game, ctx):
        card = yield from ctx.may_choose_one_card(
            player, [c for c in player.hand if player.board.has_color(c.color)]
        )
        if card is None:
            return
        game.tuck(player, card)
        yield from ctx.may_splay(player, card.color, SplayDirection.LEFT)

    return (shared(tuck_and_splay),)


def mysticism() -> tuple[Dogma, ...]:
    def draw_and_match(player, game, ctx):
        card = game.draw(player, 1)
        if player.board.has_color(card.color):
            game.meld(player, card)
            game.draw(player, 1)

    return (shared(draw_and_match),)


# ============================================================================
# Ages 2-9
# ============================================================================

def monotheism() -> tuple[Dogma, ...]:
    def take_new_color(me, opponent, game, ctx):
        card = yield from ctx.choose_one_card(
            opponent,
            [c for c in opponent.board.top_cards() if not me.board.has_color(c.color)],
        )
        if card is not None:
            game.transfer_card(opponent, Place.board(opponent.id), Place.score(me.id), card)
            game.draw_and_tuck(opponent, 1)

    def tuck_one(player, game, ctx):
        game.draw_and_tuck(player, 1)

    return demand(take_new_color), shared(tuck_one)


def philosophy() -> tuple[Dogma, ...]:
    def splay_any_left(player, game, ctx):
        yield from ctx.may_splays(player, list(Color), SplayDirection.LEFT)

    def score_from_hand(player, game, ctx):
        card = yield from ctx.may_choose_one_card(player, player.hand)
        if card is not None:
            game.score(player, card)

    return shared(splay_any_left), shared(score_from_hand)


def optics() -> tuple[Dogma, ...]:
    def meld_three(player, game, ctx):
        card = game.draw_and_meld(player, 3)
        if card.contains(Icon.CROWN):
            game.draw_and_score(player, 4)
            return
        poorer = [op for op in game.opponents_of(player.id) if op.score() < player.score()]
        if not poorer:
            return
        card = yield from ctx.choose_one_card(player, player.score_pile)
        if card is None:
            return
        opponent = yield from ctx.choose_opponent(player, poorer)
        game.transfer_card(player, Place.score(player.id), Place.score(opponent.id), card)

    return (shared(meld_three),)


def anatomy() -> tuple[Dogma, ...]:
    def return_score_and_top(me, opponent, game, ctx):
        scored = yield from ctx.choose_one_card(opponent, opponent.score_pile)
        if scored is None:
            return
        game.return_from(opponent, scored, Place.score(opponent.id))
        top = yield from ctx.choose_one_card(
            opponent, [c for c in opponent.board.top_cards() if c.age == scored.age]
        )
        if top is not None:
            game.return_from(opponent, top, Place.board(opponent.id))

    return (demand(return_score_and_top),)


def enterprise() -> tuple[Dogma, ...]:
    def take_crown_card(me, opponent, game, ctx):
        card = yield from ctx.choose_one_card(
            opponent,
            [
                c for c in opponent.board.top_cards()
                if c.color is not Color.PURPLE and c.contains(Icon.CROWN)
            ],
        )
        if card is not None:
            game.transfer_card(opponent, Place.board(opponent.id), Place.board(me.id), card)
            game.draw_and_meld(opponent, 4)

    def splay_green(player, game, ctx):
        yield from ctx.may_splay(player, Color.GREEN, SplayDirection.RIGHT)

    return demand(take_crown_card), shared(splay_green)


def reformation() -> tuple[Dogma, ...]:
    def tuck_per_two_leaves(player, game, ctx):
        allowed = min(player.count_icon(Icon.LEAF) // 2, len(player.hand))
        if allowed < 1:
            return
        cards = yield from ctx.choose_any_cards_up_to(player, player.hand, allowed)
        for card in cards:
            game.tuck(player, card)

    def splay_yellow_or_purple(player, game, ctx):
        yield from ctx.may_splays(player, [Color.YELLOW, Color.PURPLE], SplayDirection.RIGHT)

    return shared(tuck_per_two_leaves), shared(splay_yellow_or_purple)


def computers() -> tuple[Dogma, ...]:
    def splay_red_or_green(player, game, ctx):
        yield from ctx.may_splays(player, [Color.RED, Color.GREEN], SplayDirection.UP)

    def meld_ten_and_execute(player, game, ctx):
        card = game.draw_and_meld(player, 10)
        yield from ctx.execute_alone(player, card)

    return shared(splay_red_or_green), shared(meld_ten_and_execute)
