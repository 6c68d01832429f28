import random

import pytest

from ridethebus.card import DECK, Card, Colour, Suit, Value
from ridethebus.game import (
    Finish,
    Finished,
    HiLo,
    InOut,
    InvalidMoveError,
    Stage1DealerPicked,
    Stage1PlayerPicked,
    Stage2DealerPicked,
    Stage2PlayerPicked,
    Stage3DealerPicked,
    Stage3PlayerPicked,
    Stage4PlayerPicked,
    Start,
    parse_move,
)

FIVE_H = Card(Suit.HEARTS, Value.FIVE)
KING_D = Card(Suit.DIAMONDS, Value.KING)
NINE_C = Card(Suit.CLUBS, Value.NINE)
FIVE_S = Card(Suit.SPADES, Value.FIVE)

ALL_STATES = [
    Start(),
    Stage1PlayerPicked(Colour.RED),
    Stage1DealerPicked(Colour.RED, FIVE_H),
    Stage2PlayerPicked(FIVE_H, HiLo.HIGHER),
    Stage2DealerPicked(FIVE_H, HiLo.HIGHER, KING_D),
    Stage3PlayerPicked(FIVE_H, KING_D, InOut.INSIDE),
    Stage3DealerPicked(FIVE_H, KING_D, InOut.INSIDE, NINE_C),
    Stage4PlayerPicked(FIVE_H, KING_D, NINE_C, Suit.CLUBS),
    Finished(3),
]


def test_start_offers_colours():
    assert Start().valid_moves() == [Colour.RED, Colour.BLACK]
    assert Start().apply_move(Colour.BLACK) == Stage1PlayerPicked(Colour.BLACK)


def test_wrong_move_type_is_rejected():
    with pytest.raises(InvalidMoveError):
        Start().apply_move(FIVE_H)
    with pytest.raises(InvalidMoveError):
        Stage1PlayerPicked(Colour.RED).apply_move(Finish.FINISH)
    with pytest.raises(InvalidMoveError):
        Stage1DealerPicked(Colour.RED, FIVE_H).apply_move(InOut.INSIDE)


def test_stage1_colour_guess():
    state = Stage1PlayerPicked(Colour.RED)
    assert state.apply_move(FIVE_H) == Stage1DealerPicked(Colour.RED, FIVE_H)
    assert state.apply_move(FIVE_S) == Finished(0)


@pytest.mark.parametrize(
    "state, multiplier",
    [
        (Stage1DealerPicked(Colour.RED, FIVE_H), 2),
        (Stage2DealerPicked(FIVE_H, HiLo.HIGHER, KING_D), 3),
        (Stage3DealerPicked(FIVE_H, KING_D, InOut.INSIDE, NINE_C), 4),
    ],
)
def test_finish_takes_multiplier(state, multiplier):
    assert Finish.FINISH in state.valid_moves()
    assert state.apply_move(Finish.FINISH) == Finished(multiplier)


def test_higher_lower_guess():
    higher = Stage2PlayerPicked(FIVE_H, HiLo.HIGHER)
    assert higher.apply_move(KING_D) == Stage2DealerPicked(FIVE_H, HiLo.HIGHER, KING_D)
    lower = Stage2PlayerPicked(KING_D, HiLo.LOWER)
    assert lower.apply_move(FIVE_H) == Stage2DealerPicked(KING_D, HiLo.LOWER, FIVE_H)
    assert lower.apply_move(Card(Suit.HEARTS, Value.ACE)) == Finished(0)


@pytest.mark.parametrize("guess", list(HiLo))
def test_equal_value_loses_higher_lower(guess):
    assert Stage2PlayerPicked(FIVE_H, guess).apply_move(FIVE_S) == Finished(0)


def test_inside_outside_guess():
    inside = Stage3PlayerPicked(FIVE_H, KING_D, InOut.INSIDE)
    assert inside.apply_move(NINE_C) == Stage3DealerPicked(
        FIVE_H, KING_D, InOut.INSIDE, NINE_C
    )
    outside = Stage3PlayerPicked(KING_D, FIVE_H, InOut.OUTSIDE)
    ace = Card(Suit.SPADES, Value.ACE)
    assert outside.apply_move(ace) == Stage3DealerPicked(KING_D, FIVE_H, InOut.OUTSIDE, ace)
    assert outside.apply_move(NINE_C) == Finished(0)


@pytest.mark.parametrize("guess", list(InOut))
def test_boundary_value_loses_inside_outside(guess):
    state = Stage3PlayerPicked(FIVE_H, KING_D, guess)
    assert state.apply_move(FIVE_S) == Finished(0)
    assert state.apply_move(Card(Suit.SPADES, Value.KING)) == Finished(0)


def test_in_out_is_true_ignores_card_order():
    assert InOut.INSIDE.is_true(KING_D, NINE_C, FIVE_H)
    assert InOut.INSIDE.is_true(FIVE_H, NINE_C, KING_D)
    assert not InOut.OUTSIDE.is_true(FIVE_H, NINE_C, KING_D)


def test_suit_guess():
    state = Stage4PlayerPicked(FIVE_H, KING_D, NINE_C, Suit.SPADES)
    assert state.apply_move(FIVE_S) == Finished(20)
    assert state.apply_move(Card(Suit.HEARTS, Value.ACE)) == Finished(0)


def test_stage3_dealer_offers_suits_and_finish():
    moves = Stage3DealerPicked(FIVE_H, KING_D, InOut.INSIDE, NINE_C).valid_moves()
    assert moves == [*Suit, Finish.FINISH]
    state = Stage3DealerPicked(FIVE_H, KING_D, InOut.INSIDE, NINE_C)
    assert state.apply_move(Suit.HEARTS) == Stage4PlayerPicked(
        FIVE_H, KING_D, NINE_C, Suit.HEARTS
    )


def test_dealt_cards_are_not_offered_again():
    assert set(Stage1PlayerPicked(Colour.RED).valid_moves()) == set(DECK)
    stage2 = set(Stage2PlayerPicked(FIVE_H, HiLo.LOWER).valid_moves())
    assert stage2 | {FIVE_H} == set(DECK) and FIVE_H not in stage2
    stage3 = set(Stage3PlayerPicked(FIVE_H, KING_D, InOut.INSIDE).valid_moves())
    assert stage3 | {FIVE_H, KING_D} == set(DECK) and not {FIVE_H, KING_D} & stage3
    stage4 = set(Stage4PlayerPicked(FIVE_H, KING_D, NINE_C, Suit.CLUBS).valid_moves())
    dealt = {FIVE_H, KING_D, NINE_C}
    assert stage4 | dealt == set(DECK) and not dealt & stage4


def test_finished_is_terminal_and_has_no_moves():
    done = Finished(20)
    assert done.is_terminal()
    assert done.valid_moves() == []
    with pytest.raises(InvalidMoveError):
        done.apply_move(Finish.FINISH)
    assert [state.is_terminal() for state in ALL_STATES] == [False] * 8 + [True]


def test_dealer_turn_follows_player_picks():
    assert [state.is_dealer_turn() for state in ALL_STATES] == [
        False, True, False, True, False, True, False, True, False,
    ]


@pytest.mark.parametrize("state", ALL_STATES[:-1])
def test_every_valid_move_applies(state):
    moves = state.valid_moves()
    assert moves
    for move in moves:
        assert parse_move(str(move)) == move
        next_state = state.apply_move(move)
        assert next_state.is_terminal() or (
            next_state.is_dealer_turn() is not state.is_dealer_turn()
        )


def test_full_winning_game():
    state = Start()
    for text in [
        "red", "five of hearts", "higher", "king of diamonds",
        "inside", "nine of clubs", "spades", "two of spades",
    ]:
        state = state.apply_move(parse_move(text))
    assert state == Finished(20)


@pytest.mark.parametrize("state", ALL_STATES)
def test_parse_round_trips_every_move(state):
    for move in state.valid_moves():
        assert parse_move(str(move)) == move
        assert parse_move(str(move).upper()) == move


def test_parse_examples():
    assert parse_move("Red") is Colour.RED
    assert parse_move("FINISH") is Finish.FINISH
    assert parse_move("Outside") is InOut.OUTSIDE
    assert parse_move("ace  of   SPADES") == Card(Suit.SPADES, Value.ACE)
    assert str(Card(Suit.DIAMONDS, Value.QUEEN)) == "Queen of Diamonds"


@pytest.mark.parametrize(
    "text",
    ["", "ace of", "ace in spades", "one of hearts", "ace of stars", "red card", "of of of"],
)
def test_parse_rejects_garbage(text):
    with pytest.raises(ValueError):
        parse_move(text)


@pytest.mark.parametrize("state", ALL_STATES[:-1])
def test_playout_ends_with_a_game_multiplier(state):
    rng = random.Random(7)
    results = {state.playout(rng) for _ in range(200)}
    assert results <= {0, 2, 3, 4, 20}
    for result in results:
        assert Finished(result).playout(rng) == result


def test_playout_is_reproducible_with_seed():
    first = [Start().playout(random.Random(seed)) for seed in range(30)]
    second = [Start().playout(random.Random(seed)) for seed in range(30)]
    assert first == second


def test_playout_of_finished_returns_its_multiplier():
    assert Finished(4).playout(random.Random(0)) == 4


def test_playout_from_last_stage_only_wins_or_loses():
    state = Stage4PlayerPicked(FIVE_H, KING_D, NINE_C, Suit.HEARTS)
    rng = random.Random(1)
    results = {state.playout(rng) for _ in range(300)}
    assert results == {0, 20}