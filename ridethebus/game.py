"""The rules of Ride the Bus as a state machine over player and dealer moves."""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum
from typing import Union

from ridethebus.card import Card, Colour, Suit, Value


class InvalidMoveError(ValueError):
    """Raised when a move cannot be applied to a state."""


class HiLo(Enum):
    """Guess whether the second card is higher or lower than the first."""

    HIGHER = "Higher"
    LOWER = "Lower"

    def is_true(self, card0: Card, card1: Card) -> bool:
        """Whether ``card0`` is strictly higher/lower than ``card1``."""
        if self is HiLo.HIGHER:
            return card0.value > card1.value
        return card0.value < card1.value

    def __str__(self) -> str:
        return self.value


class InOut(Enum):
    """Guess whether the third card falls strictly inside or outside the first two."""

    INSIDE = "Inside"
    OUTSIDE = "Outside"

    def is_true(self, card0: Card, card1: Card, card2: Card) -> bool:
        """Whether ``card1`` lies inside/outside the range of ``card0`` and ``card2``."""
        small = min(card0.value, card2.value)
        large = max(card0.value, card2.value)
        if self is InOut.INSIDE:
            return small < card1.value < large
        return card1.value < small or large < card1.value

    def __str__(self) -> str:
        return self.value


class Finish(Enum):
    """The move of taking the current multiplier and stopping."""

    FINISH = "Finish"

    def __str__(self) -> str:
        return self.value


Move = Union[Colour, HiLo, InOut, Suit, Card, Finish]


def _card_moves(*dealt: Card) -> list[Move]:
    return list(Card.rest_of_deck(dealt))


class State:
    """A position in the game; concrete stages are subclasses."""

    __slots__ = ()

    def apply_move(self, move: Move) -> State:
        """Return the state after ``move``; raise InvalidMoveError if not allowed."""
        raise InvalidMoveError(f"{move} cannot be played in {self!r}")

    def valid_moves(self) -> list[Move]:
        """Return every move that may be played from this state."""
        return []

    def is_terminal(self) -> bool:
        return False

    def is_dealer_turn(self) -> bool:
        """Whether the next move is a card dealt by the dealer."""
        return False

    def playout(self, rng: random.Random | None = None) -> int:
        """Play uniformly random moves to the end and return the multiplier."""
        chooser = rng if rng is not None else random
        state: State = self
        while not isinstance(state, Finished):
            state = state.apply_move(chooser.choice(state.valid_moves()))
        return state.multiplier


@dataclass(frozen=True)
class Start(State):
    def apply_move(self, move: Move) -> State:
        if isinstance(move, Colour):
            return Stage1PlayerPicked(move)
        return super().apply_move(move)

    def valid_moves(self) -> list[Move]:
        return [Colour.RED, Colour.BLACK]


@dataclass(frozen=True)
class Stage1PlayerPicked(State):
    colour: Colour

    def apply_move(self, move: Move) -> State:
        if isinstance(move, Card):
            if move.suit.colour() is not self.colour:
                return Finished(0)
            return Stage1DealerPicked(self.colour, move)
        return super().apply_move(move)

    def valid_moves(self) -> list[Move]:
        return _card_moves()

    def is_dealer_turn(self) -> bool:
        return True


@dataclass(frozen=True)
class Stage1DealerPicked(State):
    colour: Colour
    first: Card

    def apply_move(self, move: Move) -> State:
        if isinstance(move, HiLo):
            return Stage2PlayerPicked(self.first, move)
        if move is Finish.FINISH:
            return Finished(2)
        return super().apply_move(move)

    def valid_moves(self) -> list[Move]:
        return [HiLo.HIGHER, HiLo.LOWER, Finish.FINISH]


@dataclass(frozen=True)
class Stage2PlayerPicked(State):
    first: Card
    hi_lo: HiLo

    def apply_move(self, move: Move) -> State:
        if isinstance(move, Card):
            if not self.hi_lo.is_true(move, self.first):
                return Finished(0)
            return Stage2DealerPicked(self.first, self.hi_lo, move)
        return super().apply_move(move)

    def valid_moves(self) -> list[Move]:
        return _card_moves(self.first)

    def is_dealer_turn(self) -> bool:
        return True


@dataclass(frozen=True)
class Stage2DealerPicked(State):
    first: Card
    hi_lo: HiLo
    second: Card

    def apply_move(self, move: Move) -> State:
        if isinstance(move, InOut):
            return Stage3PlayerPicked(self.first, self.second, move)
        if move is Finish.FINISH:
            return Finished(3)
        return super().apply_move(move)

    def valid_moves(self) -> list[Move]:
        return [InOut.INSIDE, InOut.OUTSIDE, Finish.FINISH]


@dataclass(frozen=True)
class Stage3PlayerPicked(State):
    first: Card
    second: Card
    in_out: InOut

    def apply_move(self, move: Move) -> State:
        if isinstance(move, Card):
            if not self.in_out.is_true(self.first, move, self.second):
                return Finished(0)
            return Stage3DealerPicked(self.first, self.second, self.in_out, move)
        return super().apply_move(move)

    def valid_moves(self) -> list[Move]:
        return _card_moves(self.first, self.second)

    def is_dealer_turn(self) -> bool:
        return True


@dataclass(frozen=True)
class Stage3DealerPicked(State):
    first: Card
    second: Card
    in_out: InOut
    third: Card

    def apply_move(self, move: Move) -> State:
        if isinstance(move, Suit):
            return Stage4PlayerPicked(self.first, self.second, self.third, move)
        if move is Finish.FINISH:
            return Finished(4)
        return super().apply_move(move)

    def valid_moves(self) -> list[Move]:
        return [*Suit, Finish.FINISH]


@dataclass(frozen=True)
class Stage4PlayerPicked(State):
    first: Card
    second: Card
    third: Card
    suit: Suit

    def apply_move(self, move: Move) -> State:
        if isinstance(move, Card):
            return Finished(20 if move.suit is self.suit else 0)
        return super().apply_move(move)

    def valid_moves(self) -> list[Move]:
        return _card_moves(self.first, self.second, self.third)

    def is_dealer_turn(self) -> bool:
        return True


@dataclass(frozen=True)
class Finished(State):
    multiplier: int

    def is_terminal(self) -> bool:
        return True


_KEYWORD_MOVES: dict[str, Move] = {
    str(move).lower(): move
    for move in (*Colour, *HiLo, *InOut, *Suit, Finish.FINISH)
}
_SUIT_WORDS = {str(suit).lower(): suit for suit in Suit}
_VALUE_WORDS = {str(value).lower(): value for value in Value}


def parse_move(text: str) -> Move:
    """Parse a move such as ``"red"``, ``"finish"`` or ``"ace of spades"``.

    Matching ignores case. Raises ValueError if the text is not a move.
    """
    lowered = text.lower()
    keyword = _KEYWORD_MOVES.get(lowered)
    if keyword is not None:
        return keyword
    words = lowered.split()
    if len(words) != 3 or words[1] != "of":
        raise ValueError(f"cannot parse move: {text!r}")
    suit = _SUIT_WORDS.get(words[2])
    value = _VALUE_WORDS.get(words[0])
    if suit is None or value is None:
        raise ValueError(f"cannot parse move: {text!r}")
    return Card(suit, value)