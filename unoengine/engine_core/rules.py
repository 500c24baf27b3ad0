"""
Rule Engine - Play legality, card effects and turn rotation.

All seat math works on indices into the seating order and wraps modulo the
player count. Functions here take a snapshot and return a new one; they do
not check whose turn it is (the reducer does).
"""

from __future__ import annotations
import logging
import random

from .state import GameState, Card, CardType, Direction
from .deck import reshuffle_discard

logger = logging.getLogger(__name__)


DRAW_PENALTY: dict[CardType, int] = {
    CardType.DRAW_TWO: 2,
    CardType.WILD_DRAW_FOUR: 4,
}


def is_valid_play(card: Card, top_card: Card | None) -> bool:
    """
    Check whether card may be played on top_card.

    Wilds always match. Otherwise the colors match, or both cards share a
    non-number type, or both are numbers with the same value.
    """
    if card.is_wild:
        return True
    # Only the all-wild deal fallback leaves a colorless top card
    if top_card is None or top_card.color is None:
        return True
    if card.color == top_card.color:
        return True
    if card.card_type is not top_card.card_type:
        return False
    if card.card_type is CardType.NUMBER:
        return card.value == top_card.value
    return True


def valid_cards(hand, top_card: Card | None) -> list[Card]:
    """Cards from hand (in hand order) that may be played now."""
    return [card for card in hand if is_valid_play(card, top_card)]


def next_seat(
    state: GameState,
    from_seat: int | None = None,
    steps: int = 1,
    direction: Direction | None = None,
) -> int:
    """Seat index `steps` places away in the given (default: current) direction."""
    if from_seat is None:
        from_seat = state.seat_of(state.current_player)
    direction = direction or state.direction
    return (from_seat + steps * direction.step) % state.num_players


def draw_cards(
    state: GameState,
    player_id: str,
    count: int,
    rng: random.Random | None = None,
) -> GameState:
    """
    Move `count` cards from the draw end into a player's hand.

    An empty deck is refilled from the discard pile (minus its top) before
    each card. If even that leaves nothing to draw, the draw comes up short.
    """
    player = state.get_player(player_id)
    if player is None:
        return state

    deck = state.deck
    discard = state.discard_pile
    drawn: list[Card] = []
    for _ in range(count):
        if not deck:
            deck, discard = reshuffle_discard(deck, discard, rng)
        if not deck:
            logger.warning(
                "Deck and discard exhausted: %s drew %d of %d cards",
                player_id, len(drawn), count,
            )
            break
        drawn.append(deck[-1])
        deck = deck[:-1]

    return state._copy_with(deck=deck, discard_pile=discard).with_player(
        player.add_cards(drawn)
    )


def apply_effect(
    state: GameState,
    played_card: Card,
    rng: random.Random | None = None,
) -> GameState:
    """
    Resolve a played card and hand the turn on.

    `state` is the snapshot right after the card left the hand and landed on
    the discard pile. A wild must already carry its chosen color.
    """
    seat = state.seat_of(state.current_player)
    players = state.players
    card_type = played_card.card_type

    if card_type is CardType.SKIP:
        target = next_seat(state, seat, steps=2)
        return state._copy_with(current_player=players[target].player_id)

    if card_type is CardType.REVERSE:
        direction = state.direction.reversed()
        # With two players reverse acts like skip: the reverser goes again
        if state.num_players == 2:
            target = seat
        else:
            target = next_seat(state, seat, direction=direction)
        return state._copy_with(
            current_player=players[target].player_id,
            direction=direction,
        )

    if card_type in DRAW_PENALTY:
        victim_seat = next_seat(state, seat)
        victim_id = players[victim_seat].player_id
        state = draw_cards(state, victim_id, DRAW_PENALTY[card_type], rng)
        target = next_seat(state, victim_seat)
        logger.debug("%s draws %d and is skipped", victim_id, DRAW_PENALTY[card_type])
        return state._copy_with(current_player=state.players[target].player_id)

    target = next_seat(state, seat)
    return state._copy_with(current_player=players[target].player_id)


def check_win_condition(state: GameState) -> str | None:
    """Id of the first seated player with an empty hand, if any."""
    for player in state.players:
        if player.hand_size == 0:
            return player.player_id
    return None
