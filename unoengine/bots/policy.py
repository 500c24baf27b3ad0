"""
Bot Policy - Turns a strategy into a concrete action.

A decision is:
- draw, if the strategy says so
- otherwise play the highest-scoring valid card (first in hand order on ties)
- with a color picked for wilds

The bot reads the same GameState the reducer enforces rules on and returns
an Action that still goes through the reducer; it never edits state.
"""

from __future__ import annotations
from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any
import random

from ..engine_core.action import Action
from ..engine_core.state import Card, CardColor, Difficulty, COLOR_PRIORITY
from ..engine_core.rules import valid_cards
from .strategy import get_strategy

if TYPE_CHECKING:
    from ..engine_core.state import GameState


DEFAULT_DIFFICULTY = Difficulty.MEDIUM


@dataclass
class BotDecision:
    """
    A decision made by a bot.

    Contains:
    - The action to take
    - Explanation (for UI/debugging)
    - Evaluation details (for debugging)
    """
    action: Action
    explanation: str = ""
    evaluated_actions: int = 0
    best_score: float = 0.0
    evaluation_details: dict[str, Any] = field(default_factory=dict)


def choose_wild_color(hand) -> CardColor:
    """
    Pick the color held most often.

    Ties go to the earlier color in COLOR_PRIORITY; a hand with no colored
    cards picks the first priority color.
    """
    counts = Counter(card.color for card in hand if card.color is not None and not card.is_wild)
    best = COLOR_PRIORITY[0]
    for color in COLOR_PRIORITY:
        if counts[color] > counts[best]:
            best = color
    return best


def decide(
    state: GameState,
    player_id: str,
    difficulty: Difficulty | str | None = None,
    rng: random.Random | None = None,
) -> BotDecision:
    """
    Choose an action for player_id.

    Precondition: player_id holds the turn and has cards. This is not
    checked; a bad call simply yields an action the reducer rejects.

    Args:
        state: Current game state
        player_id: Acting seat
        difficulty: Tier to play at (default: the player's own, else medium)
        rng: Source of randomness for the easy/medium tiers
    """
    rng = rng or random.Random()
    player = state.get_player(player_id)
    if player is None:
        raise ValueError(f"Player {player_id} not found")

    if difficulty is None:
        difficulty = player.difficulty or DEFAULT_DIFFICULTY
    difficulty = Difficulty(difficulty)
    strategy = get_strategy(difficulty)
    top_card = state.top_card

    if strategy.should_draw(player.hand, top_card):
        return BotDecision(
            action=Action.draw(player_id),
            explanation=f"Drawing ({difficulty.value})",
        )

    candidates = valid_cards(player.hand, top_card)
    if not candidates:
        raise ValueError(f"{player_id} has no playable card but chose not to draw")

    best_card: Card | None = None
    best_score = float("-inf")
    scores: dict[str, float] = {}
    for card in candidates:
        score = strategy.evaluate_move(card, state, rng)
        scores[card.card_id] = score
        if score > best_score:
            best_card, best_score = card, score

    color = choose_wild_color(player.hand) if best_card.is_wild else None
    played = best_card.with_color(color) if color else best_card
    return BotDecision(
        action=Action.play(player_id, best_card, color),
        explanation=f"Playing {played} "
                    f"(score: {best_score:.2f}, {difficulty.value})",
        evaluated_actions=len(candidates),
        best_score=best_score,
        evaluation_details={"scores": scores},
    )


@dataclass
class UnoBot:
    """
    An AI seat bound to a difficulty tier and its own rng.

    Usage:
        bot = UnoBot(player_id="ai_1", difficulty=Difficulty.HARD)
        decision = bot.select_action(state)
    """
    player_id: str
    difficulty: Difficulty = DEFAULT_DIFFICULTY
    rng: random.Random = None  # type: ignore

    def __post_init__(self):
        self.difficulty = Difficulty(self.difficulty)
        if self.rng is None:
            self.rng = random.Random()

    def select_action(self, state: GameState) -> BotDecision:
        return decide(state, self.player_id, self.difficulty, self.rng)

    def choose_color(self, state: GameState) -> CardColor:
        player = state.get_player(self.player_id)
        return choose_wild_color(player.hand if player else ())

    def get_name(self) -> str:
        return f"UnoBot({self.player_id}, {self.difficulty.value})"
