"""
API Module - Plain-data contract for the host application.

Transport (sockets, HTTP) and storage live outside this package; they
exchange these models with the engine:
1. StartGameRequest / RosterEntry to start a game
2. ActionRequest for each turn
3. GameStateSnapshot / TurnResponse to broadcast and persist
"""

from .schemas import (
    # Requests
    StartGameRequest,
    RosterEntry,
    ActionRequest,
    # Responses
    GameStateSnapshot,
    TurnResponse,
    ErrorResponse,
    # Shared
    CardInfo,
    PlayerInfo,
    GameConfigInfo,
    ErrorCode,
)

__all__ = [
    # Requests
    "StartGameRequest",
    "RosterEntry",
    "ActionRequest",
    # Responses
    "GameStateSnapshot",
    "TurnResponse",
    "ErrorResponse",
    # Shared
    "CardInfo",
    "PlayerInfo",
    "GameConfigInfo",
    "ErrorCode",
]
