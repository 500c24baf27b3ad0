"""
Tests for game setup.

Tests:
- Opening a table and seating players
- Starting a game
- Setup errors
- Players leaving
"""

import random

import pytest

from ..engine_core.errors import SetupError
from ..engine_core.setup import (
    create_waiting_state,
    seat_player,
    start_game,
    setup_game,
    remove_player,
)
from ..engine_core.state import Direction, GameConfig, GameStatus, Player, TOTAL_CARDS
from .conftest import number, make_state, RED


def player(pid: str) -> Player:
    return Player(player_id=pid, name=pid.upper())


class TestWaitingTable:
    """Tests for seating players before the game starts."""

    def test_host_seated(self):
        """A new table holds only the host."""
        state = create_waiting_state(player("host"), game_id="ROOM01")

        assert state.game_id == "ROOM01"
        assert state.status is GameStatus.WAITING
        assert [p.player_id for p in state.players] == ["host"]
        assert state.deck == ()

    def test_generated_game_id(self):
        state = create_waiting_state(player("host"))
        assert len(state.game_id) == 6

    def test_invalid_config_rejected(self):
        """A config that cannot be dealt is a setup error."""
        with pytest.raises(SetupError):
            create_waiting_state(player("host"), GameConfig(max_players=16, cards_per_player=7))

    def test_seat_player(self, rng):
        state = create_waiting_state(player("host"))
        state = seat_player(state, player("guest"), rng)

        assert state.num_players == 2
        assert state.status is GameStatus.WAITING

    def test_duplicate_player_rejected(self, rng):
        state = create_waiting_state(player("host"))
        with pytest.raises(SetupError):
            seat_player(state, player("host"), rng)

    def test_auto_start_when_full(self, rng):
        """The game starts as soon as the last seat fills."""
        state = create_waiting_state(player("host"), GameConfig(max_players=2))
        state = seat_player(state, player("guest"), rng)

        assert state.status is GameStatus.PLAYING
        assert state.total_cards == TOTAL_CARDS

    def test_full_table_rejected(self, rng):
        config = GameConfig(max_players=2, auto_start_when_full=False)
        state = create_waiting_state(player("host"), config)
        state = seat_player(state, player("guest"), rng)

        with pytest.raises(SetupError):
            seat_player(state, player("late"), rng)


class TestStartGame:
    """Tests for dealing and starting."""

    def test_setup_game(self, rng):
        """Hands are dealt, the first seat starts clockwise on a non-wild."""
        roster = [player("a"), player("b"), player("c")]
        state = setup_game(roster, rng=rng, game_id="G1")

        assert state.status is GameStatus.PLAYING
        assert state.current_player == "a"
        assert state.direction is Direction.CLOCKWISE
        assert state.turn_number == 0
        assert all(p.hand_size == 7 for p in state.players)
        assert len(state.discard_pile) == 1
        assert not state.top_card.is_wild
        assert len(state.deck) == TOTAL_CARDS - 21 - 1

    def test_custom_hand_size(self, rng):
        state = setup_game([player("a"), player("b")], GameConfig(cards_per_player=3), rng)
        assert [p.hand_size for p in state.players] == [3, 3]

    def test_setup_reproducible(self):
        """The same seed deals the same game."""
        roster = [player("a"), player("b")]
        first = setup_game(roster, rng=random.Random(9), game_id="G")
        second = setup_game(roster, rng=random.Random(9), game_id="G")
        assert first == second

    def test_empty_roster(self, rng):
        with pytest.raises(SetupError) as exc:
            setup_game([], rng=rng)
        assert "empty" in str(exc.value).lower()

    def test_too_few_players(self, rng):
        """Starting alone is refused with the default minimum of two."""
        with pytest.raises(SetupError):
            setup_game([player("a")], rng=rng)

    def test_too_many_players(self, rng):
        roster = [player(f"p{i}") for i in range(5)]
        with pytest.raises(SetupError):
            setup_game(roster, GameConfig(max_players=4), rng)

    def test_duplicate_ids(self, rng):
        with pytest.raises(SetupError) as exc:
            setup_game([player("a"), player("a")], rng=rng)
        assert any("unique" in e for e in exc.value.errors)

    def test_cannot_start_twice(self, rng):
        state = setup_game([player("a"), player("b")], rng=rng)
        with pytest.raises(SetupError):
            start_game(state, rng)

    def test_single_player_allowed_by_config(self, rng):
        """A config may allow solo tables."""
        state = setup_game([player("a")], GameConfig(min_players=1), rng)
        assert state.status is GameStatus.PLAYING
        assert state.current_player == "a"


class TestRemovePlayer:
    """Tests for players leaving."""

    def test_leaver_cards_go_under_deck(self, rng):
        state = setup_game([player("a"), player("b"), player("c")], rng=rng)
        leaver_hand = state.get_player("b").hand

        new_state = remove_player(state, "b")

        assert new_state.num_players == 2
        assert new_state.deck[:len(leaver_hand)] == leaver_hand
        assert new_state.total_cards == TOTAL_CARDS

    def test_current_player_leaving_passes_turn(self, rng):
        """The turn moves to whoever takes the leaver's seat."""
        state = setup_game([player("a"), player("b"), player("c")], rng=rng)
        new_state = remove_player(state, "a")
        assert new_state.current_player == "b"

    def test_last_seat_leaving_wraps(self, rng):
        state = setup_game([player("a"), player("b"), player("c")], rng=rng)
        state = state._copy_with(current_player="c")
        new_state = remove_player(state, "c")
        assert new_state.current_player == "a"

    def test_counterclockwise_leave_passes_turn_backwards(self):
        """Counterclockwise, the turn goes to the seat before the leaver."""
        state = make_state(
            {pid: [number(f"{pid}1", RED, 1)] for pid in "abcd"},
            top_card=number("top", RED, 5),
            current="c",
            direction=Direction.COUNTERCLOCKWISE,
        )
        new_state = remove_player(state, "c")
        assert new_state.current_player == "b"

    def test_counterclockwise_first_seat_leave_wraps(self):
        state = make_state(
            {pid: [number(f"{pid}1", RED, 1)] for pid in "abc"},
            top_card=number("top", RED, 5),
            direction=Direction.COUNTERCLOCKWISE,
        )
        new_state = remove_player(state, "a")
        assert new_state.current_player == "c"

    def test_forfeit_win(self, rng):
        """The last player left in a running game wins."""
        state = setup_game([player("a"), player("b")], rng=rng)
        new_state = remove_player(state, "a")

        assert new_state.status is GameStatus.FINISHED
        assert new_state.winner == "b"

    def test_waiting_table_does_not_finish(self):
        state = create_waiting_state(player("host"))
        state = state._copy_with(players=state.players + (player("guest"),))
        new_state = remove_player(state, "guest")
        assert new_state.status is GameStatus.WAITING

    def test_last_player_leaving_empties_table(self):
        state = create_waiting_state(player("host"))
        assert remove_player(state, "host") is None

    def test_unknown_player_ignored(self):
        state = create_waiting_state(player("host"))
        assert remove_player(state, "ghost") is state

    def test_leaver_held_cards_counted(self):
        """Hand cards are never lost when a player leaves."""
        state = create_waiting_state(player("host"))
        guest = player("guest").with_hand((number("g1", RED, 1),))
        state = state._copy_with(players=state.players + (guest,))
        new_state = remove_player(state, "guest")
        assert new_state.deck == (number("g1", RED, 1),)
