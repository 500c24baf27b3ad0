"""
Bot Strategies - Move scoring per difficulty tier.

Each tier is a pair of plain functions looked up by Difficulty:
- should_draw(hand, top_card): draw instead of playing?
- evaluate_move(card, state, rng): score a playable card (higher is better)

Scores are only compared within one decision, so the scale is arbitrary.
All randomness goes through the rng argument so seeded runs repeat.
"""

from __future__ import annotations
from collections import Counter
from dataclasses import dataclass
from typing import Callable, TYPE_CHECKING
import random

from ..engine_core.state import Card, CardType, Difficulty
from ..engine_core.rules import valid_cards, next_seat

if TYPE_CHECKING:
    from ..engine_core.state import GameState


@dataclass(frozen=True)
class Strategy:
    """The two decision functions for one difficulty tier."""
    evaluate_move: Callable[[Card, "GameState", random.Random], float]
    should_draw: Callable[[tuple[Card, ...], Card], bool]


# ============================================================================
# Scoring constants
# ============================================================================

MEDIUM_ACTION_BONUS = 2.0
MEDIUM_COLOR_BONUS = 1.0
MEDIUM_ACTION_TYPES = {
    CardType.SKIP,
    CardType.REVERSE,
    CardType.DRAW_TWO,
    CardType.WILD_DRAW_FOUR,
}

HARD_TYPE_VALUES: dict[CardType, float] = {
    CardType.WILD_DRAW_FOUR: 3.0,
    CardType.DRAW_TWO: 2.5,
    CardType.WILD: 2.0,
    CardType.SKIP: 1.75,
    CardType.REVERSE: 1.5,
    CardType.NUMBER: 1.0,
}

# Applied when the next seat is close to going out
HARD_DEFENSIVE_BONUS: dict[CardType, float] = {
    CardType.WILD_DRAW_FOUR: 6.0,
    CardType.DRAW_TWO: 5.0,
    CardType.SKIP: 4.0,
}
HARD_THREAT_HAND_SIZE = 2
HARD_COLOR_BONUS = 1.0
HARD_COLOR_DEPTH_BONUS = 0.5  # per other card of the same color in hand
HARD_HOLD_WILDS_HAND_SIZE = 5


# ============================================================================
# Draw rules
# ============================================================================

def draw_if_stuck(hand: tuple[Card, ...], top_card: Card) -> bool:
    """Draw only when nothing in hand can be played."""
    return not valid_cards(hand, top_card)


def draw_to_hold_wilds(hand: tuple[Card, ...], top_card: Card) -> bool:
    """
    Draw when stuck, or when only wilds are playable and the hand is
    still large enough to keep them for later.
    """
    playable = valid_cards(hand, top_card)
    if not playable:
        return True
    only_wilds = all(card.is_wild for card in playable)
    return only_wilds and len(hand) >= HARD_HOLD_WILDS_HAND_SIZE


# ============================================================================
# Move scoring
# ============================================================================

def score_random(card: Card, state: GameState, rng: random.Random) -> float:
    """No preference at all."""
    return rng.random()


def score_medium(card: Card, state: GameState, rng: random.Random) -> float:
    """Random base, nudged towards action cards and the current color."""
    score = rng.random()
    if card.card_type in MEDIUM_ACTION_TYPES:
        score += MEDIUM_ACTION_BONUS
    top_card = state.top_card
    if top_card is not None and card.color is not None and card.color == top_card.color:
        score += MEDIUM_COLOR_BONUS
    return score


def score_hard(card: Card, state: GameState, rng: random.Random) -> float:
    """
    Deterministic scoring:
    - base value by card type
    - punish the next seat when it is about to go out
    - keep the current color
    - shed the color the hand holds most of
    """
    score = HARD_TYPE_VALUES[card.card_type]

    next_player = state.players[next_seat(state)]
    if next_player.hand_size <= HARD_THREAT_HAND_SIZE:
        score += HARD_DEFENSIVE_BONUS.get(card.card_type, 0.0)

    top_card = state.top_card
    if top_card is not None and card.color is not None and card.color == top_card.color:
        score += HARD_COLOR_BONUS

    me = state.current
    if me is not None and card.color is not None and not card.is_wild:
        same_color = Counter(c.color for c in me.hand if c.card_id != card.card_id)
        score += HARD_COLOR_DEPTH_BONUS * same_color[card.color]

    return score


STRATEGIES: dict[Difficulty, Strategy] = {
    Difficulty.EASY: Strategy(evaluate_move=score_random, should_draw=draw_if_stuck),
    Difficulty.MEDIUM: Strategy(evaluate_move=score_medium, should_draw=draw_if_stuck),
    Difficulty.HARD: Strategy(evaluate_move=score_hard, should_draw=draw_to_hold_wilds),
}


def get_strategy(difficulty: Difficulty | str) -> Strategy:
    """Look up a strategy by tier (enum or its string value)."""
    return STRATEGIES[Difficulty(difficulty)]
