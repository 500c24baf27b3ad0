"""
Game State - Immutable snapshots of a game at a point in time.

Design principles:
- Immutable: every transition returns a new snapshot, nothing is edited in place
- Serializable: plain records and tuples, see api.schemas for the wire shape
- Seat-ordered: turn rotation is derived from the seating order and a direction
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum

from .errors import InvalidCardError


TOTAL_CARDS = 108


class CardColor(Enum):
    """Card colors. Wild cards carry no color until played."""
    RED = "red"
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"


# Tie-break order when picking a wild color
COLOR_PRIORITY: tuple[CardColor, ...] = (
    CardColor.RED,
    CardColor.BLUE,
    CardColor.GREEN,
    CardColor.YELLOW,
)


class CardType(Enum):
    """Card faces."""
    NUMBER = "number"
    SKIP = "skip"
    REVERSE = "reverse"
    DRAW_TWO = "draw_two"
    WILD = "wild"
    WILD_DRAW_FOUR = "wild_draw_four"

    @property
    def is_wild(self) -> bool:
        return self in (CardType.WILD, CardType.WILD_DRAW_FOUR)

    @property
    def is_action(self) -> bool:
        return self in (CardType.SKIP, CardType.REVERSE, CardType.DRAW_TWO)


class Direction(Enum):
    """Rotation direction over the seating order."""
    CLOCKWISE = "clockwise"
    COUNTERCLOCKWISE = "counterclockwise"

    @property
    def step(self) -> int:
        """Seat index delta for one advance."""
        return 1 if self is Direction.CLOCKWISE else -1

    def reversed(self) -> Direction:
        if self is Direction.CLOCKWISE:
            return Direction.COUNTERCLOCKWISE
        return Direction.CLOCKWISE


class GameStatus(Enum):
    """High-level game lifecycle."""
    WAITING = "waiting"
    PLAYING = "playing"
    FINISHED = "finished"


class Difficulty(Enum):
    """AI difficulty tiers."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


@dataclass(frozen=True)
class Card:
    """
    A single physical card.

    Coloring a wild on play produces a new Card with the same card_id;
    the deck's copy is never modified.
    """
    card_id: str
    card_type: CardType
    color: CardColor | None = None
    value: int | None = None

    def __post_init__(self):
        if self.card_type is CardType.NUMBER:
            if self.value is None or not 0 <= self.value <= 9:
                raise InvalidCardError(
                    f"Number card {self.card_id} needs a value in 0-9, got {self.value!r}"
                )
        elif self.value is not None:
            raise InvalidCardError(
                f"{self.card_type.value} card {self.card_id} cannot carry a value"
            )
        if not self.card_type.is_wild and self.color is None:
            raise InvalidCardError(
                f"{self.card_type.value} card {self.card_id} must have a color"
            )

    @property
    def is_wild(self) -> bool:
        return self.card_type.is_wild

    def with_color(self, color: CardColor) -> Card:
        """Return a copy with the color assigned (wild play)."""
        return replace(self, color=color)

    def colorless(self) -> Card:
        """Return the card as it sits in a deck (wilds lose their chosen color)."""
        if self.is_wild and self.color is not None:
            return replace(self, color=None)
        return self

    def __str__(self) -> str:
        color = self.color.value if self.color else "wild"
        if self.card_type is CardType.NUMBER:
            return f"{color} {self.value}"
        if self.is_wild:
            label = self.card_type.value.replace("_", " ")
            return f"{label} ({color})" if self.color else label
        return f"{color} {self.card_type.value.replace('_', ' ')}"


@dataclass(frozen=True)
class Player:
    """
    A seated player.

    The hand is only ever replaced through the reducer.
    """
    player_id: str
    name: str
    hand: tuple[Card, ...] = ()
    is_ai: bool = False
    difficulty: Difficulty | None = None
    called_uno: bool = False

    @property
    def hand_size(self) -> int:
        return len(self.hand)

    def find_card(self, card_id: str) -> Card | None:
        for card in self.hand:
            if card.card_id == card_id:
                return card
        return None

    def with_hand(self, hand: tuple[Card, ...]) -> Player:
        # The declaration only stands while the player is down to one card
        called_uno = self.called_uno and len(hand) == 1
        return replace(self, hand=tuple(hand), called_uno=called_uno)

    def add_cards(self, cards: tuple[Card, ...] | list[Card]) -> Player:
        return self.with_hand(self.hand + tuple(cards))

    def remove_card(self, card_id: str) -> Player:
        return self.with_hand(tuple(c for c in self.hand if c.card_id != card_id))


@dataclass(frozen=True)
class GameConfig:
    """Table rules chosen when a room is created."""
    max_players: int = 4
    cards_per_player: int = 7
    min_players: int = 2
    auto_start_when_full: bool = True

    def validate(self) -> list[str]:
        """Return a list of problems (empty when the config is usable)."""
        errors: list[str] = []
        if self.min_players < 1:
            errors.append("min_players must be >= 1")
        if self.max_players < self.min_players:
            errors.append("max_players must be >= min_players")
        if self.cards_per_player < 1:
            errors.append("cards_per_player must be >= 1")
        # One card must remain for the discard pile
        if self.max_players * self.cards_per_player >= TOTAL_CARDS:
            errors.append(
                f"{self.max_players} players x {self.cards_per_player} cards "
                f"does not fit a {TOTAL_CARDS}-card deck"
            )
        return errors


@dataclass(frozen=True)
class GameState:
    """
    Complete game state at a point in time.

    The deck's draw end is the LAST element; the discard pile's top card is
    the LAST element. All changes go through the reducer and produce a new
    snapshot.
    """
    game_id: str
    players: tuple[Player, ...] = ()
    current_player: str | None = None
    direction: Direction = Direction.CLOCKWISE
    deck: tuple[Card, ...] = ()
    discard_pile: tuple[Card, ...] = ()
    status: GameStatus = GameStatus.WAITING
    config: GameConfig = field(default_factory=GameConfig)
    winner: str | None = None
    turn_number: int = 0

    @property
    def top_card(self) -> Card | None:
        return self.discard_pile[-1] if self.discard_pile else None

    @property
    def num_players(self) -> int:
        return len(self.players)

    @property
    def is_playing(self) -> bool:
        return self.status is GameStatus.PLAYING

    @property
    def current(self) -> Player | None:
        """The player whose turn it is."""
        if self.current_player is None:
            return None
        return self.get_player(self.current_player)

    @property
    def total_cards(self) -> int:
        """Cards across deck, discard pile and hands."""
        return (
            len(self.deck)
            + len(self.discard_pile)
            + sum(p.hand_size for p in self.players)
        )

    def get_player(self, player_id: str) -> Player | None:
        for p in self.players:
            if p.player_id == player_id:
                return p
        return None

    def seat_of(self, player_id: str) -> int:
        """Seat index of a player, -1 if not seated."""
        for idx, p in enumerate(self.players):
            if p.player_id == player_id:
                return idx
        return -1

    def with_player(self, player: Player) -> GameState:
        """Return new state with an updated player."""
        new_players = tuple(
            player if p.player_id == player.player_id else p
            for p in self.players
        )
        return self._copy_with(players=new_players)

    def _copy_with(self, **kwargs) -> GameState:
        """Create a copy with some fields replaced."""
        return replace(self, **kwargs)
