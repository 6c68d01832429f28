"""Playing cards: suits, colours, values and the standard 52-card deck."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum, IntEnum


class Colour(Enum):
    """The colour of a suit."""

    RED = "Red"
    BLACK = "Black"

    def __str__(self) -> str:
        return self.value


class Suit(Enum):
    """One of the four suits, in deck order."""

    HEARTS = "Hearts"
    DIAMONDS = "Diamonds"
    CLUBS = "Clubs"
    SPADES = "Spades"

    def colour(self) -> Colour:
        """Return the colour of this suit."""
        if self in (Suit.HEARTS, Suit.DIAMONDS):
            return Colour.RED
        return Colour.BLACK

    def __str__(self) -> str:
        return self.value


class Value(IntEnum):
    """Card values, ordered from Two (lowest) to Ace (highest)."""

    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14

    def __str__(self) -> str:
        return self.name.title()

    def __format__(self, format_spec: str) -> str:
        return format(str(self), format_spec)


@dataclass(frozen=True)
class Card:
    """A single playing card."""

    suit: Suit
    value: Value

    @staticmethod
    def rest_of_deck(cards: Iterable[Card]) -> list[Card]:
        """Return the cards of the full deck not in ``cards``, in deck order."""
        excluded = set(cards)
        return [card for card in DECK if card not in excluded]

    def __str__(self) -> str:
        return f"{self.value!s} of {self.suit!s}"


DECK: tuple[Card, ...] = tuple(Card(suit, value) for suit in Suit for value in Value)