"""
Engine Core - Deterministic game state management and effect resolution.

The engine is the runtime that:
1. Builds and deals the deck
2. Manages immutable GameState snapshots
3. Validates plays against the discard pile
4. Applies actions via the reducer
5. Resolves card effects and detects the winner
"""

from .state import (
    Card,
    CardColor,
    CardType,
    Difficulty,
    Direction,
    GameConfig,
    GameState,
    GameStatus,
    Player,
    COLOR_PRIORITY,
    TOTAL_CARDS,
)
from .errors import EngineError, SetupError, InvalidCardError
from .action import Action, ActionType, ActionPayload, ActionResult, ErrorCode
from .deck import (
    DealResult,
    create_cards,
    build_deck,
    shuffle,
    deal,
    reshuffle_discard,
    deck_composition,
    is_complete_deck,
)
from .rules import is_valid_play, valid_cards, apply_effect, check_win_condition, draw_cards, next_seat
from .reducer import Reducer, apply_action
from .setup import create_waiting_state, seat_player, start_game, setup_game, remove_player

__all__ = [
    "Card",
    "CardColor",
    "CardType",
    "Difficulty",
    "Direction",
    "GameConfig",
    "GameState",
    "GameStatus",
    "Player",
    "COLOR_PRIORITY",
    "TOTAL_CARDS",
    "EngineError",
    "SetupError",
    "InvalidCardError",
    "Action",
    "ActionType",
    "ActionPayload",
    "ActionResult",
    "ErrorCode",
    "DealResult",
    "create_cards",
    "build_deck",
    "shuffle",
    "deal",
    "reshuffle_discard",
    "deck_composition",
    "is_complete_deck",
    "is_valid_play",
    "valid_cards",
    "apply_effect",
    "check_win_condition",
    "draw_cards",
    "next_seat",
    "Reducer",
    "apply_action",
    "create_waiting_state",
    "seat_player",
    "start_game",
    "setup_game",
    "remove_player",
]
