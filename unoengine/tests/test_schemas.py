"""
Tests for the plain-data schemas.

Tests:
- Snapshot conversion
- Request validation
- Turn responses
"""

import random

import pytest
from pydantic import ValidationError

from ..api.schemas import (
    ActionRequest,
    CardInfo,
    ErrorCode,
    GameStateSnapshot,
    RosterEntry,
    StartGameRequest,
    TurnResponse,
)
from ..engine_core.action import Action, ActionType
from ..engine_core.errors import InvalidCardError
from ..engine_core.state import CardType, Difficulty, Direction, GameStatus
from ..session import GameLoop
from .conftest import RED


class TestSnapshot:
    """Tests for GameStateSnapshot."""

    def test_snapshot_restores_state(self, four_player_state):
        """A snapshot converts back to an equal engine state."""
        state = four_player_state._copy_with(direction=Direction.COUNTERCLOCKWISE, turn_number=12)
        snapshot = GameStateSnapshot.from_state(state)
        assert snapshot.to_state() == state

    def test_snapshot_survives_json(self, rng, ai_roster):
        """A dealt game goes through JSON and comes back unchanged."""
        state = GameLoop(rng=rng).start(ai_roster)
        payload = GameStateSnapshot.from_state(state).model_dump_json()
        restored = GameStateSnapshot.model_validate_json(payload).to_state()
        assert restored == state

    def test_snapshot_fields(self, four_player_state):
        snapshot = GameStateSnapshot.from_state(four_player_state)
        data = snapshot.model_dump(mode="json")

        assert data["status"] == "playing"
        assert data["direction"] == "clockwise"
        assert data["top_card"]["card_id"] == "top"
        assert data["api_version"] == "v1"
        current = [p for p in data["players"] if p["is_current_turn"]]
        assert [p["player_id"] for p in current] == ["a"]
        assert data["players"][1]["hand_size"] == 2

    def test_invalid_card_rejected(self):
        """A number card without a value does not convert."""
        info = CardInfo(card_id="x", card_type=CardType.NUMBER, color=RED)
        with pytest.raises(InvalidCardError):
            info.to_card()


class TestRequests:
    """Tests for request models."""

    def test_play_requires_card(self):
        with pytest.raises(ValidationError):
            ActionRequest(kind="play")

    def test_play_request_resolves_card(self, four_player_state):
        request = ActionRequest(kind="play", card_id="a5", color="green")
        action = request.to_action("a", four_player_state)

        assert action.action_type is ActionType.PLAY
        assert action.payload.card_id == "a5"
        assert action.payload.color.value == "green"

    def test_unknown_card_is_passed_through(self, four_player_state):
        """The reducer, not the schema, rejects a card the player does not hold."""
        action = ActionRequest(kind="play", card_id="zzz").to_action("a", four_player_state)
        assert action.action_type is ActionType.PLAY
        assert action.payload.card is None
        assert action.describe() == "a plays an unknown card"

    def test_draw_and_uno_requests(self, four_player_state):
        assert ActionRequest(kind="draw").to_action("a", four_player_state) == Action.draw("a")
        assert ActionRequest(kind="call_uno").to_action("c", four_player_state) == Action.call_uno("c")

    def test_roster_entry_defaults_ai_difficulty(self):
        player = RosterEntry(player_id="ai", name="Bot", is_ai=True).to_player()
        assert player.difficulty is Difficulty.MEDIUM
        assert player.hand == ()

    def test_start_request_needs_players(self):
        with pytest.raises(ValidationError):
            StartGameRequest(players=[])


class TestTurnResponse:
    """Tests for TurnResponse."""

    def test_applied_turn(self, four_player_state):
        result = GameLoop().step(four_player_state, "a", Action.draw("a"))
        response = TurnResponse.from_result(result)

        assert response.applied
        assert response.error is None
        assert response.changes == ["A drew a card"]
        assert response.state.current_player == "b"

    def test_rejected_turn(self, four_player_state):
        result = GameLoop().step(four_player_state, "b", Action.draw("b"))
        response = TurnResponse.from_result(result)

        assert not response.applied
        assert response.error.error_code is ErrorCode.NOT_YOUR_TURN
        assert response.state.status is GameStatus.PLAYING
