"""
Session Module - Runs games on behalf of external callers.

A session represents one room:
- Created when a host opens a table
- Holds the current canonical snapshot
- Plays AI seats whenever they hold the turn
- Removed when the room empties or goes stale

Sessions are in-memory only; persistence and replication belong to the
host application.
"""

from .game_loop import (
    GameLoop,
    TurnResult,
    start_session,
    apply_action,
    run_ai_turns,
    decide_ai_action,
)
from .manager import SessionManager, Session, SessionState

__all__ = [
    "GameLoop",
    "TurnResult",
    "start_session",
    "apply_action",
    "run_ai_turns",
    "decide_ai_action",
    "SessionManager",
    "Session",
    "SessionState",
]
