"""
Pytest fixtures for unoengine tests.
"""

import random

import pytest

from ..engine_core.state import (
    Card,
    CardColor,
    CardType,
    Difficulty,
    GameState,
    GameStatus,
    Player,
)


RED = CardColor.RED
BLUE = CardColor.BLUE
GREEN = CardColor.GREEN
YELLOW = CardColor.YELLOW


def number(card_id: str, color: CardColor, value: int) -> Card:
    return Card(card_id, CardType.NUMBER, color, value)


def action_card(card_id: str, card_type: CardType, color: CardColor) -> Card:
    return Card(card_id, card_type, color)


def wild(card_id: str, draw_four: bool = False) -> Card:
    return Card(card_id, CardType.WILD_DRAW_FOUR if draw_four else CardType.WILD)


def make_state(hands: dict, top_card: Card, deck=(), current: str | None = None, **kwargs) -> GameState:
    """A game in progress with the given hands, seated in dict order."""
    players = tuple(
        Player(player_id=pid, name=pid.upper(), hand=tuple(hand))
        for pid, hand in hands.items()
    )
    return GameState(
        game_id="test_game",
        players=players,
        current_player=current or players[0].player_id,
        deck=tuple(deck),
        discard_pile=(top_card,),
        status=GameStatus.PLAYING,
        **kwargs,
    )


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source."""
    return random.Random(42)


@pytest.fixture
def draw_pile() -> tuple[Card, ...]:
    """Ten known cards; d9 is drawn first."""
    return tuple(number(f"d{i}", YELLOW, i) for i in range(10))


@pytest.fixture
def four_player_state(draw_pile) -> GameState:
    """
    Four players a, b, c, d with a to move on a red 5.

    a holds one of every interesting card; the others hold two numbers each.
    """
    return make_state(
        {
            "a": [
                number("a1", RED, 7),
                action_card("a2", CardType.SKIP, RED),
                action_card("a3", CardType.REVERSE, RED),
                action_card("a4", CardType.DRAW_TWO, RED),
                wild("a5"),
                wild("a6", draw_four=True),
                number("a7", BLUE, 3),
            ],
            "b": [number("b1", GREEN, 1), number("b2", GREEN, 2)],
            "c": [number("c1", BLUE, 1), number("c2", BLUE, 2)],
            "d": [number("d1", GREEN, 8), number("d2", BLUE, 8)],
        },
        top_card=number("top", RED, 5),
        deck=draw_pile,
    )


@pytest.fixture
def two_player_state(draw_pile) -> GameState:
    """Two players a and b with a to move on a red 5."""
    return make_state(
        {
            "a": [
                action_card("a1", CardType.REVERSE, RED),
                action_card("a2", CardType.SKIP, RED),
                number("a3", GREEN, 4),
            ],
            "b": [number("b1", GREEN, 1), number("b2", GREEN, 2)],
        },
        top_card=number("top", RED, 5),
        deck=draw_pile,
    )


@pytest.fixture
def ai_roster() -> list[Player]:
    """Three AI seats, one per difficulty."""
    return [
        Player(player_id="ai_1", name="Easy", is_ai=True, difficulty=Difficulty.EASY),
        Player(player_id="ai_2", name="Medium", is_ai=True, difficulty=Difficulty.MEDIUM),
        Player(player_id="ai_3", name="Hard", is_ai=True, difficulty=Difficulty.HARD),
    ]


@pytest.fixture
def mixed_roster() -> list[Player]:
    """A human in the first seat followed by two AI seats."""
    return [
        Player(player_id="human", name="Human"),
        Player(player_id="ai_1", name="Bot 1", is_ai=True, difficulty=Difficulty.MEDIUM),
        Player(player_id="ai_2", name="Bot 2", is_ai=True, difficulty=Difficulty.HARD),
    ]
