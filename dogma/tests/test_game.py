"""
Tests for the game state machine.

Tests:
- Turn order and the events that mark it
- Main action validation
- Observations
- Game end by score and attribution of the final player
- Replay log
"""

import pytest

from ..engine_core.action import Action
from ..engine_core.errors import InvalidAction
from ..engine_core.events import (
    Achieved,
    ChangeTurn,
    GameEnded,
    NextAction,
    OpKind,
    Submitted,
    Transferred,
)
from ..engine_core.game import Phase, winners_by_score
from ..engine_core.observation import EndObservation, Observation
from ..engine_core.state import NormalAchievement, PlayerState
from ..engine_core.transfer import Place
from ..engine_core.turn import Turn
from ..games.innovation import cards
from ..games.innovation.setup import GameConfig, PlayerSetup
from .conftest import Recorder


class TestTurn:
    """Tests for the two-action turn counter."""

    def test_sequence(self):
        turn = Turn(5, current_player=1)
        assert turn.next() == (1, 2)
        assert turn.turn_changed
        assert turn.next() == (2, 2)
        assert not turn.turn_changed
        assert turn.next() == (2, 3)
        assert turn.turn_changed
        assert turn.action_index == 3

    def test_events_mark_turn_boundaries(self, make_game, recorder):
        game = make_game(
            supply={1: [cards.POTTERY, cards.TOOLS, cards.ARCHERY]},
            first_action_is_second=False,
        )
        game.step(Action.draw())
        game.step(Action.draw())
        game.step(Action.draw())

        marks = [e for e in recorder.events if isinstance(e, (NextAction, ChangeTurn))]
        assert marks == [NextAction(0), ChangeTurn(0, 1), NextAction(1)]

    def test_first_turn_has_one_action(self, make_game):
        game = make_game(supply={1: [cards.POTTERY]})
        game.step(Action.draw())
        assert game.turn.current_player == 1


class TestMainActions:
    """Tests for draw, meld, achieve and execute."""

    def test_draw_uses_player_age(self, make_game):
        game = make_game(
            players=[PlayerSetup(board=[cards.MONOTHEISM]), PlayerSetup()],
            supply={1: [cards.POTTERY], 2: [cards.PHILOSOPHY]},
        )
        game.step(Action.draw())
        assert list(game.state.players[0].hand) == [cards.PHILOSOPHY]

    def test_meld(self, make_game):
        game = make_game(players=[PlayerSetup(hand=[cards.OARS]), PlayerSetup()])
        game.step(Action.meld("Oars"))
        assert game.state.players[0].board.top_cards() == [cards.OARS]

    def test_achieve(self, make_game, recorder):
        game = make_game(
            players=[PlayerSetup(board=[cards.POTTERY], score=[cards.OPTICS, cards.MONOTHEISM]),
                     PlayerSetup()],
            achievements=[NormalAchievement(1), NormalAchievement(2)],
        )
        game.step(Action.achieve(1))
        assert game.state.players[0].achievements == [NormalAchievement(1)]
        assert recorder.of_type(Achieved) == [Achieved(0, NormalAchievement(1))]

    @pytest.mark.parametrize("action", [
        Action.meld("Optics"),
        Action.meld("No Such Card"),
        Action.execute("Archery"),
        Action.execute("Oars"),
        Action.achieve(2),
        Action.achieve(10),
        Action.yn(True),
        Action.card([]),
    ])
    def test_invalid(self, make_game, recorder, action):
        game = make_game(
            players=[PlayerSetup(board=[cards.OARS, cards.METALWORKING], score=[cards.OPTICS]),
                     PlayerSetup()],
            achievements=[NormalAchievement(1), NormalAchievement(2)],
        )
        with pytest.raises(InvalidAction):
            game.step(action)
        assert recorder.events == []
        assert game.turn.action_index == 0

    def test_step_after_game_over(self, make_game):
        game = make_game()
        game.step(Action.draw())
        assert game.is_over
        with pytest.raises(InvalidAction):
            game.step(Action.draw())


class TestObservation:
    """What each player sees."""

    def test_main_phase_view(self, make_game):
        game = make_game(players=[
            PlayerSetup(hand=[cards.OARS], score=[cards.OPTICS], board=[cards.POTTERY]),
            PlayerSetup(hand=[cards.MONOTHEISM], score=[cards.TOOLS], board=[cards.ARCHERY]),
        ], supply={1: [cards.CLOTHING], 2: [cards.PHILOSOPHY]})

        obs = game.observe()
        assert isinstance(obs, Observation)
        assert obs.phase == "main"
        assert obs.main_player.hand == ["Oars"]
        assert obs.main_player.score == ["Optics"]
        assert obs.main_player.board[0].cards == ["Pottery"]
        opponent = obs.other_players[0]
        assert opponent.player_id == 1
        assert opponent.hand == [2]
        assert opponent.score == [1]
        assert opponent.board[0].cards == ["Archery"]
        assert obs.supply[:2] == [1, 1]
        assert obs.decision is None

    def test_demanded_player_is_asked(self, make_game):
        game = make_game(
            players=[PlayerSetup(board=[cards.ARCHERY]), PlayerSetup(hand=[cards.TOOLS])],
            supply={1: [cards.POTTERY]},
        )
        obs = game.step(Action.execute("Archery"))
        assert obs.main_player.player_id == 1
        assert obs.decision.actor == 1
        assert obs.decision.card == "Archery"
        assert sorted(obs.decision.cards) == ["Pottery", "Tools"]
        assert game.acting_player_id == 1

        game.step(Action.card(["Tools"]))
        assert cards.TOOLS in game.state.players[0].hand
        assert cards.POTTERY in game.state.players[1].hand
        assert game.phase is Phase.MAIN


class TestScenarios:
    """Whole actions checked event by event."""

    def test_archery_against_empty_hand(self, make_game, recorder):
        game = make_game(
            players=[PlayerSetup(board=[cards.ARCHERY]), PlayerSetup()],
            supply={1: [cards.POTTERY]},
        )
        game.step(Action.execute("Archery"))

        assert recorder.events == [
            Submitted(0, Action.execute("Archery")),
            Transferred(OpKind.DRAW, 1, Place.supply(), Place.hand(1), cards.POTTERY),
            Transferred(OpKind.TRANSFER, 1, Place.hand(1), Place.hand(0), cards.POTTERY),
            ChangeTurn(0, 1),
        ]
        assert list(game.state.players[0].hand) == [cards.POTTERY]

    def test_score_tie_broken_by_achievements(self, make_game):
        game = make_game(players=[
            PlayerSetup(score=[cards.OPTICS]),
            PlayerSetup(score=[cards.POTTERY, cards.MONOTHEISM], achievements=[NormalAchievement(1)]),
        ])
        obs = game.step(Action.draw())

        assert isinstance(obs, EndObservation)
        assert obs.winners == [1]
        assert obs.current_player == 0

    def test_full_tie_shares_the_win(self):
        players = [PlayerState(0), PlayerState(1), PlayerState(2)]
        players[0].score_pile.add(cards.OPTICS)
        players[2].score_pile.add(cards.TOOLS)
        players[2].score_pile.add(cards.MONOTHEISM)
        assert winners_by_score(players) == [0, 2]

    def test_win_during_demand_names_demanded_player(self, make_game, recorder):
        game = make_game(players=[PlayerSetup(board=[cards.ARCHERY]), PlayerSetup()])
        obs = game.step(Action.execute("Archery"))

        assert isinstance(obs, EndObservation)
        assert obs.current_player == 1
        assert [p.player_id for p in obs.players] == [1, 0]
        assert obs.winners == [0, 1]
        assert recorder.of_type(GameEnded) == [GameEnded((0, 1), 1)]


class TestObservers:
    """Observers attached to a running game."""

    def test_add_and_remove(self, make_game, recorder):
        game = make_game(supply={1: [cards.POTTERY, cards.TOOLS, cards.ARCHERY]})
        late = Recorder()
        game.add_observer(late)

        game.step(Action.draw())
        assert late.events == recorder.events
        assert late.of_type(Transferred) == [
            Transferred(OpKind.DRAW, 0, Place.supply(), Place.hand(0), cards.POTTERY),
        ]

        seen = len(late.events)
        game.remove_observer(late)
        game.step(Action.draw())
        assert len(late.events) == seen
        assert len(recorder.events) > seen


class TestReplay:
    """The replay log follows every event."""

    def test_sequence_and_finish(self, make_game, recorder):
        game = make_game(supply={1: [cards.POTTERY, cards.TOOLS]})
        record = game.replay.current
        assert record.initial_supply == ["Pottery", "Tools"]

        game.step(Action.draw())
        game.step(Action.draw())
        game.step(Action.draw())

        assert game.is_over
        assert record.finished
        assert [entry.seq for entry in record.entries] == list(range(len(record.entries)))
        assert record.items() == recorder.events
        assert game.replay.get(game.game_id) is record

    def test_disabled(self, settings):
        from dataclasses import replace

        config = GameConfig(cards=list(cards.INNOVATION_CARDS), supply={},
                            settings=replace(settings, record_replay=False))
        assert config.build().replay is None

    def test_bad_player_count(self, settings):
        config = GameConfig(cards=[], players=[PlayerSetup()], settings=settings)
        with pytest.raises(ValueError):
            config.build()
