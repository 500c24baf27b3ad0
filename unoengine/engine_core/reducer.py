"""
Reducer - Applies actions to game state.

The reducer is the single point of state change.
All state changes must go through apply_action().

Design principles:
- Pure function: (state, action) -> new_state
- Validates before applying
- Returns ActionResult with success/failure
- Delegates card effects to the rule engine
"""

from __future__ import annotations
from dataclasses import dataclass, replace
import logging
import random

from .state import GameState, GameStatus
from .action import Action, ActionType, ActionResult, ErrorCode
from .rules import is_valid_play, apply_effect, check_win_condition, draw_cards, next_seat

logger = logging.getLogger(__name__)


# Actions that require holding the turn
TURN_ACTIONS = {ActionType.PLAY, ActionType.DRAW}


@dataclass
class Reducer:
    """
    Reducer applies actions to game state.

    Stateless - all game state is in GameState. The rng only drives
    reshuffles when a draw empties the deck.
    """
    rng: random.Random | None = None

    def apply(self, state: GameState, action: Action) -> ActionResult:
        """
        Apply an action to the game state.

        Returns ActionResult with new state or error. On failure the input
        state is untouched.
        """
        validation_error = self._validate_action(state, action)
        if validation_error:
            message, code = validation_error
            logger.warning("Rejected %s: %s", action.describe(), message)
            return ActionResult.failure(message, error_code=code)

        handler = self._get_handler(action.action_type)
        if not handler:
            return ActionResult.failure(
                f"No handler for action type: {action.action_type}",
                error_code=ErrorCode.NO_HANDLER,
            )

        result = handler(state, action)
        if not result.success:
            logger.warning("Rejected %s: %s", action.describe(), result.error)
        return result

    def _validate_action(self, state: GameState, action: Action) -> tuple[str, str] | None:
        """
        Validate that an action is legal in the current state.

        Returns (message, error_code) if invalid, None if valid.
        """
        if state.status is GameStatus.WAITING:
            return "Game not started", ErrorCode.GAME_NOT_PLAYING
        if state.status is GameStatus.FINISHED:
            return "Game is over - no actions allowed", ErrorCode.GAME_NOT_PLAYING

        if state.get_player(action.player_id) is None:
            return f"Player {action.player_id} not found", ErrorCode.UNKNOWN_PLAYER

        if action.action_type in TURN_ACTIONS and action.player_id != state.current_player:
            return f"Not {action.player_id}'s turn", ErrorCode.NOT_YOUR_TURN

        return None

    def _get_handler(self, action_type: ActionType):
        """Get the handler function for an action type."""
        handlers = {
            ActionType.PLAY: self._handle_play,
            ActionType.DRAW: self._handle_draw,
            ActionType.CALL_UNO: self._handle_call_uno,
        }
        return handlers.get(action_type)

    def _handle_play(self, state: GameState, action: Action) -> ActionResult:
        """Handle play action."""
        player = state.get_player(action.player_id)
        card_id = action.payload.card_id
        card = player.find_card(card_id) if card_id else None
        if card is None:
            return ActionResult.failure(
                f"Card {card_id} not in hand", error_code=ErrorCode.CARD_NOT_IN_HAND
            )

        if not is_valid_play(card, state.top_card):
            return ActionResult.failure(
                f"Cannot play {card} on {state.top_card}", error_code=ErrorCode.INVALID_PLAY
            )

        if card.is_wild:
            if action.payload.color is None:
                return ActionResult.failure(
                    f"Choose a color for {card}", error_code=ErrorCode.COLOR_REQUIRED
                )
            card = card.with_color(action.payload.color)

        new_state = state.with_player(player.remove_card(card.card_id))
        new_state = new_state._copy_with(discard_pile=new_state.discard_pile + (card,))
        new_state = apply_effect(new_state, card, self.rng)
        new_state = new_state._copy_with(turn_number=state.turn_number + 1)

        changes = [f"{player.name} played {card}"]
        winner = check_win_condition(new_state)
        if winner:
            new_state = new_state._copy_with(status=GameStatus.FINISHED, winner=winner)
            changes.append(f"{new_state.get_player(winner).name} wins")
            logger.info("Game %s finished, winner %s", state.game_id, winner)

        return ActionResult.success_with_state(new_state, changes=changes)

    def _handle_draw(self, state: GameState, action: Action) -> ActionResult:
        """Handle draw action. Drawing always ends the turn."""
        player = state.get_player(action.player_id)

        new_state = draw_cards(state, player.player_id, 1, self.rng)
        target = next_seat(new_state, new_state.seat_of(player.player_id))
        new_state = new_state._copy_with(
            current_player=new_state.players[target].player_id,
            turn_number=state.turn_number + 1,
        )

        return ActionResult.success_with_state(
            new_state,
            changes=[f"{player.name} drew a card"],
        )

    def _handle_call_uno(self, state: GameState, action: Action) -> ActionResult:
        """Handle an UNO declaration. Only allowed with exactly one card left."""
        player = state.get_player(action.player_id)
        if player.hand_size != 1:
            return ActionResult.failure(
                f"{player.name} holds {player.hand_size} cards",
                error_code=ErrorCode.UNO_NOT_ALLOWED,
            )
        if player.called_uno:
            return ActionResult.success_with_state(state)

        new_player = replace(player, called_uno=True)
        return ActionResult.success_with_state(
            state.with_player(new_player),
            changes=[f"{player.name} called UNO"],
        )


def apply_action(
    state: GameState,
    action: Action,
    rng: random.Random | None = None,
) -> ActionResult:
    """
    Convenience function to apply an action.

    Creates a Reducer and applies the action.
    """
    reducer = Reducer(rng=rng)
    return reducer.apply(state, action)
