"""
Game Setup - Creates and seats the initial game state.

This module handles:
- Opening a table with its host seated
- Seating further players (auto-starting when the table fills)
- Building, shuffling and dealing the deck
- Seeding the discard pile
- Players leaving mid-game

Structural problems (empty or oversized rosters, unusable configs) raise
SetupError; they are caller defects, not routine play.
"""

from __future__ import annotations
from dataclasses import replace
import logging
import random
import uuid

from .state import GameState, GameStatus, GameConfig, Player, Direction
from .deck import build_deck, deal
from .errors import SetupError

logger = logging.getLogger(__name__)


def new_game_id() -> str:
    """Short room-style identifier."""
    return uuid.uuid4().hex[:6].upper()


def create_waiting_state(
    host: Player,
    config: GameConfig | None = None,
    game_id: str | None = None,
) -> GameState:
    """
    Open a table with the host seated.

    The host holds the turn marker until the game starts.
    """
    config = config or GameConfig()
    errors = config.validate()
    if errors:
        raise SetupError(errors)

    return GameState(
        game_id=game_id or new_game_id(),
        players=(_fresh_seat(host),),
        current_player=host.player_id,
        status=GameStatus.WAITING,
        config=config,
    )


def seat_player(
    state: GameState,
    player: Player,
    rng: random.Random | None = None,
) -> GameState:
    """
    Seat a player at a waiting table.

    Starts the game once the table is full if the config asks for it.

    Raises:
        SetupError: game already started, table full, or duplicate id
    """
    if state.status is not GameStatus.WAITING:
        raise SetupError(f"Game {state.game_id} is not accepting players")
    if state.num_players >= state.config.max_players:
        raise SetupError(f"Game {state.game_id} is full")
    if state.get_player(player.player_id) is not None:
        raise SetupError(f"Player {player.player_id} is already seated")

    state = state._copy_with(players=state.players + (_fresh_seat(player),))
    logger.info("%s joined game %s (%d/%d)",
                player.name, state.game_id, state.num_players, state.config.max_players)

    if state.config.auto_start_when_full and state.num_players == state.config.max_players:
        return start_game(state, rng)
    return state


def start_game(state: GameState, rng: random.Random | None = None) -> GameState:
    """
    Deal a fresh deck to the seated roster and begin play.

    The first seat takes the first turn, clockwise. The start card's own
    effect is not applied.

    Raises:
        SetupError: wrong status, roster outside the configured bounds,
            or a config that cannot be dealt
    """
    errors: list[str] = []
    if state.status is not GameStatus.WAITING:
        errors.append(f"Game {state.game_id} has already started")
    errors.extend(state.config.validate())
    if state.num_players < state.config.min_players:
        errors.append(
            f"Need at least {state.config.min_players} players, have {state.num_players}"
        )
    if state.num_players > state.config.max_players:
        errors.append(
            f"At most {state.config.max_players} players allowed, have {state.num_players}"
        )
    if len({p.player_id for p in state.players}) != state.num_players:
        errors.append("Player ids must be unique")
    if errors:
        raise SetupError(errors)

    result = deal(build_deck(rng), state.num_players, state.config.cards_per_player)
    players = tuple(
        replace(player, hand=hand, called_uno=False)
        for player, hand in zip(state.players, result.hands)
    )

    logger.info("Game %s started with %d players, start card %s",
                state.game_id, len(players), result.start_card)
    return state._copy_with(
        players=players,
        current_player=players[0].player_id,
        direction=Direction.CLOCKWISE,
        deck=result.remaining_deck,
        discard_pile=(result.start_card,),
        status=GameStatus.PLAYING,
        winner=None,
        turn_number=0,
    )


def setup_game(
    roster: list[Player],
    config: GameConfig | None = None,
    rng: random.Random | None = None,
    game_id: str | None = None,
) -> GameState:
    """
    Seat a complete roster and start immediately.

    Raises:
        SetupError: empty roster or any start_game failure
    """
    if not roster:
        raise SetupError("Roster is empty")

    config = config or GameConfig()
    state = create_waiting_state(roster[0], config, game_id)
    state = state._copy_with(
        players=state.players + tuple(_fresh_seat(p) for p in roster[1:])
    )
    return start_game(state, rng)


def remove_player(state: GameState, player_id: str) -> GameState | None:
    """
    Remove a player from the table.

    Their cards go to the bottom of the deck. If they held the turn, it
    passes to the next player in the current direction. A game left with one player
    ends with that player as winner. Returns None when the table empties.
    """
    seat = state.seat_of(player_id)
    if seat < 0:
        return state

    leaver = state.players[seat]
    players = state.players[:seat] + state.players[seat + 1:]
    if not players:
        logger.info("Game %s closed: last player left", state.game_id)
        return None

    new_state = state._copy_with(
        players=players,
        deck=tuple(leaver.hand) + state.deck,
    )

    if state.current_player == player_id:
        # Clockwise the next player slides into the vacated index
        if state.direction is Direction.COUNTERCLOCKWISE:
            successor = players[(seat - 1) % len(players)]
        else:
            successor = players[seat % len(players)]
        new_state = new_state._copy_with(current_player=successor.player_id)

    if new_state.status is GameStatus.PLAYING and len(players) < 2:
        new_state = new_state._copy_with(
            status=GameStatus.FINISHED,
            winner=players[0].player_id,
        )
        logger.info("Game %s finished by forfeit", state.game_id)

    return new_state


def _fresh_seat(player: Player) -> Player:
    """A player arriving at the table holds no cards."""
    return replace(player, hand=(), called_uno=False)
