"""
Deck Manager - Builds, shuffles and deals the 108-card deck.

The deck is a tuple whose LAST element is the draw end. Every function
returns fresh tuples; input decks are never modified.
"""

from __future__ import annotations
from collections import Counter
from dataclasses import dataclass
import logging
import random

from .state import Card, CardColor, CardType, COLOR_PRIORITY, TOTAL_CARDS
from .errors import SetupError

logger = logging.getLogger(__name__)


# One 0 and two of each 1-9 per color
NUMBER_VALUES = (0, 1, 1, 2, 2, 3, 3, 4, 4, 5, 5, 6, 6, 7, 7, 8, 8, 9, 9)
ACTION_TYPES = (CardType.SKIP, CardType.REVERSE, CardType.DRAW_TWO)
WILD_TYPES = (CardType.WILD, CardType.WILD_DRAW_FOUR)
ACTION_COPIES = 2
WILD_COPIES = 4


@dataclass(frozen=True)
class DealResult:
    """Outcome of dealing a fresh deck."""
    hands: tuple[tuple[Card, ...], ...]
    remaining_deck: tuple[Card, ...]
    start_card: Card


def create_cards() -> list[Card]:
    """Create the canonical 108 cards in a fixed, unshuffled order."""
    cards: list[Card] = []
    next_id = 1

    for color in COLOR_PRIORITY:
        for value in NUMBER_VALUES:
            cards.append(Card(str(next_id), CardType.NUMBER, color, value))
            next_id += 1

    for color in COLOR_PRIORITY:
        for card_type in ACTION_TYPES:
            for _ in range(ACTION_COPIES):
                cards.append(Card(str(next_id), card_type, color))
                next_id += 1

    for card_type in WILD_TYPES:
        for _ in range(WILD_COPIES):
            cards.append(Card(str(next_id), card_type))
            next_id += 1

    return cards


def build_deck(rng: random.Random | None = None) -> tuple[Card, ...]:
    """Build and shuffle a full deck."""
    return shuffle(create_cards(), rng)


def shuffle(cards, rng: random.Random | None = None) -> tuple[Card, ...]:
    """
    Uniform Fisher-Yates shuffle.

    Returns a new tuple; pass a seeded random.Random for reproducible decks.
    """
    rng = rng or random.Random()
    shuffled = list(cards)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return tuple(shuffled)


def deal(
    deck: tuple[Card, ...],
    num_players: int,
    cards_per_player: int = 7,
) -> DealResult:
    """
    Deal hands round-robin from the draw end and pick a start card.

    The start card is the first non-wild card scanning from the bottom of
    what remains; it is lifted out without disturbing the rest of the deck.
    If only wilds remain the bottom card is used as-is.

    Raises:
        SetupError: roster empty, non-positive hand size, or too few cards
    """
    errors: list[str] = []
    if num_players < 1:
        errors.append("cannot deal to an empty roster")
    if cards_per_player < 1:
        errors.append("cards_per_player must be >= 1")
    if num_players * cards_per_player >= len(deck):
        errors.append(
            f"deck of {len(deck)} cards cannot deal {cards_per_player} "
            f"to {num_players} players and seed a discard pile"
        )
    if errors:
        raise SetupError(errors)

    remaining = list(deck)
    hands: list[list[Card]] = [[] for _ in range(num_players)]
    for _ in range(cards_per_player):
        for seat in range(num_players):
            hands[seat].append(remaining.pop())

    start_idx = next(
        (idx for idx, card in enumerate(remaining) if not card.is_wild),
        None,
    )
    if start_idx is None:
        logger.warning("Only wild cards left after dealing; using bottom card as start")
        start_idx = 0
    start_card = remaining.pop(start_idx)

    return DealResult(
        hands=tuple(tuple(h) for h in hands),
        remaining_deck=tuple(remaining),
        start_card=start_card,
    )


def reshuffle_discard(
    deck: tuple[Card, ...],
    discard_pile: tuple[Card, ...],
    rng: random.Random | None = None,
) -> tuple[tuple[Card, ...], tuple[Card, ...]]:
    """
    Turn the discard pile (minus its top card) into a fresh deck.

    Recycled wilds lose their chosen color. Returns (new_deck, new_discard);
    the new deck keeps any cards still in the old one underneath.
    """
    if len(discard_pile) <= 1:
        return deck, discard_pile

    recycled = shuffle((c.colorless() for c in discard_pile[:-1]), rng)
    logger.debug("Reshuffled %d discarded cards into the deck", len(recycled))
    return tuple(deck) + recycled, (discard_pile[-1],)


def deck_composition(cards) -> Counter:
    """Count cards by (color, type) for audits. Wilds count under color None."""
    return Counter(
        (card.color.value if card.color and not card.is_wild else None, card.card_type.value)
        for card in cards
    )


def is_complete_deck(cards) -> bool:
    """True if the cards form exactly one canonical deck."""
    cards = list(cards)
    if len(cards) != TOTAL_CARDS:
        return False
    if len({c.card_id for c in cards}) != TOTAL_CARDS:
        return False
    return deck_composition(cards) == deck_composition(create_cards())
