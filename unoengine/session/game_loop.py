"""
Game Loop - The facade external callers drive a game through.

The loop:
1. Start a game for a roster
2. Apply one player's action through the reducer
3. While an AI seat holds the turn, ask its bot and apply that too
4. Return the new snapshot (or the unchanged one if the action was illegal)

Illegal actions are ignored, not raised: a desynchronized client must not
be able to crash a session. AI pacing is presentation only; with the default
zero delay everything runs synchronously.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING
import logging
import random
import time

from ..config import EngineSettings
from ..engine_core.action import Action, ActionType, ErrorCode
from ..engine_core.reducer import Reducer
from ..engine_core.setup import setup_game
from ..bots.policy import UnoBot, DEFAULT_DIFFICULTY

if TYPE_CHECKING:
    from ..engine_core.state import GameState, GameConfig, Player

logger = logging.getLogger(__name__)


@dataclass
class TurnResult:
    """
    Result of processing one external action.

    `state` is always the snapshot to broadcast: the new one if the action
    applied, the input one otherwise.
    """
    state: GameState
    applied: bool = True
    error: str | None = None
    error_code: str | None = None

    # Human-readable log of everything that happened, AI moves included
    changes: list[str] = field(default_factory=list)
    ai_actions: list[Action] = field(default_factory=list)

    @property
    def winner(self) -> str | None:
        return self.state.winner


class GameLoop:
    """
    Drives games: validates and applies actions, then plays AI seats.

    Usage:
        loop = GameLoop()
        state = loop.start(roster)
        state = loop.apply(state, "p1", Action.draw("p1"))
    """

    def __init__(
        self,
        settings: EngineSettings | None = None,
        rng: random.Random | None = None,
    ):
        self.settings = settings or EngineSettings()
        self.rng = rng or random.Random(self.settings.seed)
        self.reducer = Reducer(rng=self.rng)
        self._bots: dict[str, UnoBot] = {}

    def start(
        self,
        roster: list[Player],
        config: GameConfig | None = None,
        game_id: str | None = None,
    ) -> GameState:
        """Build, deal and return a game in progress. AI seats have not moved yet."""
        return setup_game(roster, config, self.rng, game_id)

    def step(self, state: GameState, player_id: str, action: Action) -> TurnResult:
        """Apply an action attributed to player_id, then any AI turns it hands over to."""
        if action.player_id != player_id:
            logger.warning("Action for %s submitted by %s ignored", action.player_id, player_id)
            return TurnResult(
                state=state,
                applied=False,
                error=f"Action belongs to {action.player_id}",
                error_code=ErrorCode.NOT_YOUR_TURN,
            )

        result = self.reducer.apply(state, action)
        if not result.success:
            return TurnResult(
                state=state,
                applied=False,
                error=result.error,
                error_code=result.error_code,
            )

        turn = TurnResult(state=result.new_state, changes=list(result.state_changes))
        return self._run_ai_turns(turn)

    def apply(self, state: GameState, player_id: str, action: Action) -> GameState:
        """Like step() but only returns the resulting snapshot."""
        return self.step(state, player_id, action).state

    def run_ai_turns(self, state: GameState) -> TurnResult:
        """Let AI seats play until a human holds the turn or the game ends."""
        return self._run_ai_turns(TurnResult(state=state))

    def decide(self, state: GameState, player_id: str) -> Action:
        """The action the bot for player_id would take now."""
        return self.bot_for(state, player_id).select_action(state).action

    def bot_for(self, state: GameState, player_id: str) -> UnoBot:
        """Get (or create) the bot playing player_id at its configured tier."""
        player = state.get_player(player_id)
        difficulty = (player.difficulty if player else None) or DEFAULT_DIFFICULTY
        bot = self._bots.get(player_id)
        if bot is None or bot.difficulty is not difficulty:
            bot = UnoBot(player_id=player_id, difficulty=difficulty, rng=self.rng)
            self._bots[player_id] = bot
        return bot

    def _run_ai_turns(self, turn: TurnResult) -> TurnResult:
        state = turn.state
        moves = 0

        while state.is_playing:
            current = state.current
            if current is None or not current.is_ai:
                break
            if moves >= self.settings.max_ai_turns:
                logger.warning(
                    "Stopped after %d consecutive AI moves in game %s", moves, state.game_id
                )
                break

            if self.settings.ai_delay_seconds > 0:
                time.sleep(self.settings.ai_delay_seconds)

            decision = self.bot_for(state, current.player_id).select_action(state)
            result = self.reducer.apply(state, decision.action)
            if not result.success:
                # Bots only pick valid plays; getting here is a bug in the bot
                logger.error("AI move rejected in game %s: %s", state.game_id, result.error)
                break

            logger.debug("%s: %s", current.player_id, decision.explanation)
            state = result.new_state
            turn.ai_actions.append(decision.action)
            turn.changes.extend(result.state_changes)
            moves += 1

            if decision.action.action_type is ActionType.PLAY:
                state = self._declare_uno(state, current.player_id, turn)

        turn.state = state
        return turn

    def _declare_uno(self, state: GameState, player_id: str, turn: TurnResult) -> GameState:
        """AI seats always remember to call UNO."""
        player = state.get_player(player_id)
        if player is None or player.hand_size != 1 or player.called_uno or not state.is_playing:
            return state
        action = Action.call_uno(player_id)
        result = self.reducer.apply(state, action)
        if not result.success:
            return state
        turn.ai_actions.append(action)
        turn.changes.extend(result.state_changes)
        return result.new_state


# ============================================================================
# Module-level facade
# ============================================================================

def start_session(
    roster: list[Player],
    config: GameConfig | None = None,
    rng: random.Random | None = None,
) -> GameState:
    """
    Build a game for the roster and return it in progress.

    If AI seats open the game they have already moved; the returned state
    waits on a human or is finished.
    """
    loop = GameLoop(rng=rng)
    return loop.run_ai_turns(loop.start(roster, config)).state


def apply_action(
    state: GameState,
    player_id: str,
    action: Action,
    rng: random.Random | None = None,
) -> GameState:
    """
    Apply an action, then any AI turns that follow.

    Wrong-turn or otherwise illegal actions return the input state unchanged.
    """
    return GameLoop(rng=rng).apply(state, player_id, action)


def run_ai_turns(state: GameState, rng: random.Random | None = None) -> GameState:
    """Let AI seats play until a human holds the turn or the game ends."""
    return GameLoop(rng=rng).run_ai_turns(state).state


def decide_ai_action(
    state: GameState,
    player_id: str,
    rng: random.Random | None = None,
) -> Action:
    """The AI's chosen action for player_id at that player's difficulty."""
    return GameLoop(rng=rng).decide(state, player_id)
