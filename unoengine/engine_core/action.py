"""
Action System - Actions, payloads, and results.

Actions represent player intents:
1. Play a card from hand
2. Draw a card (ends the turn)
3. Declare UNO (does not use the turn)

All state changes flow through actions.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .state import Card, CardColor


class ActionType(Enum):
    """Types of actions in the system."""
    PLAY = "play"
    DRAW = "draw"
    CALL_UNO = "call_uno"


class ErrorCode:
    """Machine-readable reasons an action was rejected."""
    GAME_NOT_PLAYING = "GAME_NOT_PLAYING"
    UNKNOWN_PLAYER = "UNKNOWN_PLAYER"
    NOT_YOUR_TURN = "NOT_YOUR_TURN"
    CARD_NOT_IN_HAND = "CARD_NOT_IN_HAND"
    INVALID_PLAY = "INVALID_PLAY"
    COLOR_REQUIRED = "COLOR_REQUIRED"
    UNO_NOT_ALLOWED = "UNO_NOT_ALLOWED"
    NO_HANDLER = "NO_HANDLER"


@dataclass(frozen=True)
class ActionPayload:
    """
    Payload for an action - contains the action parameters.

    For a play, `card` identifies the card by id; its other fields are
    not trusted. `color` is the chosen color for a wild.
    """
    player_id: str
    card: Card | None = None
    color: CardColor | None = None

    @property
    def card_id(self) -> str | None:
        return self.card.card_id if self.card else None


@dataclass(frozen=True)
class Action:
    """A complete action to be applied to the game state."""
    action_type: ActionType
    payload: ActionPayload

    @property
    def player_id(self) -> str:
        return self.payload.player_id

    @classmethod
    def play(cls, player_id: str, card: Card, color: CardColor | None = None) -> Action:
        """Factory for play action. A wild's color comes from `color` or the card."""
        return cls(
            action_type=ActionType.PLAY,
            payload=ActionPayload(player_id=player_id, card=card, color=color or card.color),
        )

    @classmethod
    def draw(cls, player_id: str) -> Action:
        """Factory for draw action."""
        return cls(
            action_type=ActionType.DRAW,
            payload=ActionPayload(player_id=player_id),
        )

    @classmethod
    def call_uno(cls, player_id: str) -> Action:
        """Factory for an UNO declaration."""
        return cls(
            action_type=ActionType.CALL_UNO,
            payload=ActionPayload(player_id=player_id),
        )

    def describe(self) -> str:
        if self.action_type is ActionType.PLAY and self.payload.card is not None:
            card = self.payload.card
            if card.is_wild and self.payload.color is not None:
                card = card.with_color(self.payload.color)
            return f"{self.player_id} plays {card}"
        if self.action_type is ActionType.PLAY:
            return f"{self.player_id} plays an unknown card"
        if self.action_type is ActionType.DRAW:
            return f"{self.player_id} draws"
        return f"{self.player_id} calls UNO"


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Contains:
    - Whether action succeeded
    - New state (if succeeded)
    - Errors (if failed)
    - Human-readable changes (for logs and UI)
    """
    success: bool
    new_state: Any | None = None  # GameState
    error: str | None = None
    error_code: str | None = None
    state_changes: list[str] = field(default_factory=list)

    @classmethod
    def failure(cls, error: str, error_code: str | None = None) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def success_with_state(
        cls,
        state: Any,
        changes: list[str] | None = None,
    ) -> ActionResult:
        """Create a success result with new state."""
        return cls(
            success=True,
            new_state=state,
            state_changes=changes or [],
        )
