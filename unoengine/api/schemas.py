"""
Pydantic Schemas - Plain-data shape of snapshots and intents.

These models define the contract with whatever transport or store the host
application uses. The engine itself never depends on them: snapshots are
converted at the edge with GameStateSnapshot.from_state() / to_state().

Error Codes:
- GAME_NOT_PLAYING: game not started or already finished
- UNKNOWN_PLAYER: acting player is not seated
- NOT_YOUR_TURN: acting player does not hold the turn
- CARD_NOT_IN_HAND / INVALID_PLAY / COLOR_REQUIRED: rejected plays
- UNO_NOT_ALLOWED: UNO declared with more than one card
- SESSION_NOT_FOUND: room does not exist
- SETUP_ERROR: roster or config cannot start a game
"""

from __future__ import annotations
from enum import Enum
from typing import Optional, Any, TYPE_CHECKING
from pydantic import BaseModel, Field, model_validator

from ..engine_core.action import Action, ActionPayload, ActionType
from ..engine_core.state import (
    Card,
    CardColor,
    CardType,
    Difficulty,
    Direction,
    GameConfig,
    GameState,
    GameStatus,
    Player,
)

if TYPE_CHECKING:
    from ..session.game_loop import TurnResult


API_VERSION = "v1"


# =============================================================================
# Enums
# =============================================================================

class ErrorCode(str, Enum):
    """Structured error codes."""
    GAME_NOT_PLAYING = "GAME_NOT_PLAYING"
    UNKNOWN_PLAYER = "UNKNOWN_PLAYER"
    NOT_YOUR_TURN = "NOT_YOUR_TURN"
    CARD_NOT_IN_HAND = "CARD_NOT_IN_HAND"
    INVALID_PLAY = "INVALID_PLAY"
    COLOR_REQUIRED = "COLOR_REQUIRED"
    UNO_NOT_ALLOWED = "UNO_NOT_ALLOWED"
    NO_HANDLER = "NO_HANDLER"
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    SETUP_ERROR = "SETUP_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class CardInfo(BaseModel):
    """A card as plain data."""
    card_id: str
    card_type: CardType
    color: Optional[CardColor] = None
    value: Optional[int] = Field(None, ge=0, le=9)

    @classmethod
    def from_card(cls, card: Card) -> CardInfo:
        return cls(
            card_id=card.card_id,
            card_type=card.card_type,
            color=card.color,
            value=card.value,
        )

    def to_card(self) -> Card:
        """Raises InvalidCardError if the fields contradict the card type."""
        return Card(
            card_id=self.card_id,
            card_type=self.card_type,
            color=self.color,
            value=self.value,
        )


class PlayerInfo(BaseModel):
    """A seated player, hand included (the engine does not hide hands)."""
    player_id: str
    name: str
    hand: list[CardInfo] = Field(default_factory=list)
    hand_size: int = 0
    is_ai: bool = False
    difficulty: Optional[Difficulty] = None
    called_uno: bool = False
    is_current_turn: bool = False

    @classmethod
    def from_player(cls, player: Player, current_player: str | None = None) -> PlayerInfo:
        return cls(
            player_id=player.player_id,
            name=player.name,
            hand=[CardInfo.from_card(c) for c in player.hand],
            hand_size=player.hand_size,
            is_ai=player.is_ai,
            difficulty=player.difficulty,
            called_uno=player.called_uno,
            is_current_turn=player.player_id == current_player,
        )

    def to_player(self) -> Player:
        return Player(
            player_id=self.player_id,
            name=self.name,
            hand=tuple(c.to_card() for c in self.hand),
            is_ai=self.is_ai,
            difficulty=self.difficulty,
            called_uno=self.called_uno,
        )


class GameConfigInfo(BaseModel):
    """Table rules."""
    max_players: int = Field(4, ge=1)
    cards_per_player: int = Field(7, ge=1)
    min_players: int = Field(2, ge=1)
    auto_start_when_full: bool = True

    @classmethod
    def from_config(cls, config: GameConfig) -> GameConfigInfo:
        return cls(
            max_players=config.max_players,
            cards_per_player=config.cards_per_player,
            min_players=config.min_players,
            auto_start_when_full=config.auto_start_when_full,
        )

    def to_config(self) -> GameConfig:
        return GameConfig(
            max_players=self.max_players,
            cards_per_player=self.cards_per_player,
            min_players=self.min_players,
            auto_start_when_full=self.auto_start_when_full,
        )


# =============================================================================
# Snapshot
# =============================================================================

class GameStateSnapshot(BaseModel):
    """
    Complete game state for broadcast and storage.

    Deck and discard pile keep engine order: the last deck card is the next
    draw, the last discard card is the top card.
    """
    game_id: str
    players: list[PlayerInfo] = Field(default_factory=list)
    current_player: Optional[str] = None
    direction: Direction = Direction.CLOCKWISE
    deck: list[CardInfo] = Field(default_factory=list)
    discard_pile: list[CardInfo] = Field(default_factory=list)
    top_card: Optional[CardInfo] = None
    status: GameStatus = GameStatus.WAITING
    config: GameConfigInfo = Field(default_factory=GameConfigInfo)
    winner: Optional[str] = None
    turn_number: int = 0
    api_version: str = API_VERSION

    @classmethod
    def from_state(cls, state: GameState) -> GameStateSnapshot:
        return cls(
            game_id=state.game_id,
            players=[PlayerInfo.from_player(p, state.current_player) for p in state.players],
            current_player=state.current_player,
            direction=state.direction,
            deck=[CardInfo.from_card(c) for c in state.deck],
            discard_pile=[CardInfo.from_card(c) for c in state.discard_pile],
            top_card=CardInfo.from_card(state.top_card) if state.top_card else None,
            status=state.status,
            config=GameConfigInfo.from_config(state.config),
            winner=state.winner,
            turn_number=state.turn_number,
        )

    def to_state(self) -> GameState:
        return GameState(
            game_id=self.game_id,
            players=tuple(p.to_player() for p in self.players),
            current_player=self.current_player,
            direction=self.direction,
            deck=tuple(c.to_card() for c in self.deck),
            discard_pile=tuple(c.to_card() for c in self.discard_pile),
            status=self.status,
            config=self.config.to_config(),
            winner=self.winner,
            turn_number=self.turn_number,
        )


# =============================================================================
# Request Models
# =============================================================================

class RosterEntry(BaseModel):
    """One seat in a start-game request."""
    player_id: str
    name: str
    is_ai: bool = False
    difficulty: Optional[Difficulty] = None

    def to_player(self) -> Player:
        difficulty = self.difficulty
        if self.is_ai and difficulty is None:
            difficulty = Difficulty.MEDIUM
        return Player(
            player_id=self.player_id,
            name=self.name,
            is_ai=self.is_ai,
            difficulty=difficulty,
        )


class StartGameRequest(BaseModel):
    """Request to start a game with a full roster."""
    players: list[RosterEntry] = Field(..., min_length=1)
    config: GameConfigInfo = Field(default_factory=GameConfigInfo)


class ActionRequest(BaseModel):
    """A player's intent for one turn."""
    kind: ActionType
    card_id: Optional[str] = Field(None, description="Card to play, from the acting hand")
    color: Optional[CardColor] = Field(None, description="Chosen color for a wild")

    @model_validator(mode="after")
    def _check_card(self) -> ActionRequest:
        if self.kind is ActionType.PLAY and not self.card_id:
            raise ValueError("card_id is required to play a card")
        return self

    def to_action(self, player_id: str, state: GameState) -> Action:
        """
        Resolve the intent against the acting hand.

        An unknown card id is passed through as a card-less play; the
        reducer rejects it like any other illegal move.
        """
        if self.kind is ActionType.DRAW:
            return Action.draw(player_id)
        if self.kind is ActionType.CALL_UNO:
            return Action.call_uno(player_id)

        player = state.get_player(player_id)
        card = player.find_card(self.card_id) if player else None
        if card is None:
            return Action(
                action_type=ActionType.PLAY,
                payload=ActionPayload(player_id=player_id, color=self.color),
            )
        return Action.play(player_id, card, self.color)


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field(API_VERSION, description="API version")


class TurnResponse(BaseModel):
    """Outcome of an intent: the snapshot to broadcast plus what happened."""
    applied: bool
    state: GameStateSnapshot
    changes: list[str] = Field(default_factory=list)
    error: Optional[ErrorResponse] = None
    winner: Optional[str] = None
    api_version: str = API_VERSION

    @classmethod
    def from_result(cls, result: TurnResult) -> TurnResponse:
        error = None
        if not result.applied:
            error = ErrorResponse(
                error=result.error or "Action rejected",
                error_code=ErrorCode(result.error_code or ErrorCode.VALIDATION_ERROR),
            )
        return cls(
            applied=result.applied,
            state=GameStateSnapshot.from_state(result.state),
            changes=result.changes,
            error=error,
            winner=result.winner,
        )
