"""
Session Manager - Owns the rooms and their canonical game state.

LIFECYCLE:
1. Host creates a room → waiting state with the host seated
2. Players (human or AI) join → the game starts when the table fills,
   or when the host starts it with the current roster
3. During the game every intent goes through submit_action(); the room's
   lock guarantees one action in flight per room
4. Players may leave; an empty room is deleted

CONCURRENCY:
- Rooms are independent; different rooms may be driven from different threads
- Within a room, actions are serialized by the session lock
- Snapshots handed out are immutable and safe to read anywhere
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any
import logging
import random
import threading
import time
import uuid

from ..config import EngineSettings
from ..engine_core.action import Action
from ..engine_core.state import GameState, GameStatus, GameConfig, Player, Difficulty
from ..engine_core.setup import create_waiting_state, seat_player, start_game, remove_player
from .game_loop import GameLoop, TurnResult

logger = logging.getLogger(__name__)


AI_NAMES = (
    "Captain Chaos",
    "Professor Panic",
    "Doctor Disaster",
    "Major Mayhem",
    "Lieutenant Lunacy",
    "Sergeant Silly",
    "General Goofy",
    "Admiral Absurd",
)


class SessionState(Enum):
    """State of a room."""
    WAITING = "waiting"  # Seating players
    PLAYING = "playing"  # Game in progress
    FINISHED = "finished"  # Someone went out
    ABANDONED = "abandoned"  # Room closed before finishing


@dataclass
class Session:
    """
    One room: its current snapshot plus the loop that advances it.

    Only the SessionManager replaces game_state, and only under the lock.
    """
    session_id: str
    game_state: GameState
    loop: GameLoop
    created_at: float
    updated_at: float = 0.0
    state: SessionState = SessionState.WAITING

    # Human-readable log of applied actions
    history: list[str] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def is_active(self) -> bool:
        """Check if the room is still in use."""
        return self.state in {SessionState.WAITING, SessionState.PLAYING}

    def _commit(self, new_state: GameState, changes: list[str] | None = None):
        self.game_state = new_state
        self.updated_at = time.time()
        self.history.extend(changes or [])
        if new_state.status is GameStatus.PLAYING:
            self.state = SessionState.PLAYING
        elif new_state.status is GameStatus.FINISHED:
            self.state = SessionState.FINISHED


class SessionManager:
    """
    Keyed store of rooms: room_id -> Session.

    Responsibilities:
    - Create rooms and seat players
    - Route intents to the right room, one at a time per room
    - Drop rooms that empty or go stale

    No persistence - rooms are in-memory only.
    """

    def __init__(
        self,
        settings: EngineSettings | None = None,
        rng: random.Random | None = None,
    ):
        self.settings = settings or EngineSettings()
        self._rng = rng or random.Random(self.settings.seed)
        self._sessions: dict[str, Session] = {}
        self._lock = threading.Lock()

    def create_room(
        self,
        host_name: str,
        config: GameConfig | None = None,
    ) -> tuple[Session, str]:
        """
        Open a room with the host seated.

        Returns:
            (session, host player id)
        """
        host = Player(player_id=str(uuid.uuid4()), name=host_name)
        state = create_waiting_state(host, config)
        now = time.time()
        session = Session(
            session_id=state.game_id,
            game_state=state,
            loop=GameLoop(self.settings, random.Random(self._rng.random())),
            created_at=now,
            updated_at=now,
        )
        with self._lock:
            self._sessions[session.session_id] = session

        logger.info("Room %s created by %s", session.session_id, host_name)
        return session, host.player_id

    def join_room(self, room_id: str, player_name: str) -> str | None:
        """
        Seat a human player. Returns the new player id, or None if the room
        does not exist.

        Raises:
            SetupError: room full or already playing
        """
        player = Player(player_id=str(uuid.uuid4()), name=player_name)
        return self._seat(room_id, player)

    def add_ai_player(
        self,
        room_id: str,
        difficulty: Difficulty | str = Difficulty.MEDIUM,
        name: str | None = None,
    ) -> str | None:
        """Seat an AI player. Returns its id, or None if the room does not exist."""
        session = self.get_session(room_id)
        if not session:
            return None
        seat_number = session.game_state.num_players
        player = Player(
            player_id=f"ai_{uuid.uuid4().hex[:8]}",
            name=name or AI_NAMES[seat_number % len(AI_NAMES)],
            is_ai=True,
            difficulty=Difficulty(difficulty),
        )
        return self._seat(room_id, player)

    def start_game(self, room_id: str) -> GameState | None:
        """
        Start the room's game with whoever is seated.

        Raises:
            SetupError: roster too small, or the game already started
        """
        session = self.get_session(room_id)
        if not session:
            return None
        with session._lock:
            state = start_game(session.game_state, session.loop.rng)
            session._commit(state, [f"Game started with {state.num_players} players"])
            self._run_ai(session)
            return session.game_state

    def submit_action(self, room_id: str, player_id: str, action: Action) -> TurnResult | None:
        """
        Apply an intent submitted by player_id to the room.

        Illegal intents leave the room untouched; the result says why.
        Returns None if the room does not exist.
        """
        session = self.get_session(room_id)
        if not session:
            return None
        with session._lock:
            result = session.loop.step(session.game_state, player_id, action)
            if result.applied:
                session._commit(result.state, result.changes)
            return result

    def call_uno(self, room_id: str, player_id: str) -> TurnResult | None:
        """Declare UNO on behalf of a player."""
        return self.submit_action(room_id, player_id, Action.call_uno(player_id))

    def leave_room(self, room_id: str, player_id: str) -> GameState | None:
        """
        Remove a player. Deletes the room when the last player leaves.

        Returns the room's new state, or None if the room is gone.
        """
        session = self.get_session(room_id)
        if not session:
            return None
        with session._lock:
            state = remove_player(session.game_state, player_id)
            if state is None:
                self.end_session(room_id, reason="empty")
                return None
            session._commit(state, [f"{player_id} left"])
            self._run_ai(session)
            return session.game_state

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        with self._lock:
            return self._sessions.get(session_id)

    def get_state(self, room_id: str) -> GameState | None:
        """Current snapshot of a room."""
        session = self.get_session(room_id)
        return session.game_state if session else None

    def end_session(self, session_id: str, reason: str = "completed"):
        """
        End a session and remove it from memory.

        Called when the game is over, the room empties, or it goes stale.
        """
        with self._lock:
            session = self._sessions.pop(session_id, None)
        if session:
            if session.game_state.status is GameStatus.FINISHED:
                session.state = SessionState.FINISHED
            else:
                session.state = SessionState.ABANDONED
            logger.info("Room %s closed (%s)", session_id, reason)

    def list_active_sessions(self) -> list[str]:
        """List IDs of active sessions."""
        with self._lock:
            sessions = list(self._sessions.items())
        return [sid for sid, session in sessions if session.is_active()]

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600) -> list[str]:
        """
        Remove finished rooms and rooms untouched for max_age_seconds.

        Returns the removed room ids.
        """
        current_time = time.time()
        with self._lock:
            sessions = list(self._sessions.items())

        to_remove = [
            session_id for session_id, session in sessions
            if not session.is_active() or current_time - session.updated_at > max_age_seconds
        ]
        for session_id in to_remove:
            self.end_session(session_id, reason="stale")
        return to_remove

    def _seat(self, room_id: str, player: Player) -> str | None:
        session = self.get_session(room_id)
        if not session:
            return None
        with session._lock:
            state = seat_player(session.game_state, player, session.loop.rng)
            session._commit(state, [f"{player.name} joined"])
            self._run_ai(session)
        return player.player_id

    def _run_ai(self, session: Session):
        """Let AI seats move if one of them holds the turn."""
        if session.game_state.status is not GameStatus.PLAYING:
            return
        result = session.loop.run_ai_turns(session.game_state)
        if result.ai_actions:
            session._commit(result.state, result.changes)
