# ridethebus

An advisor for the card game *Ride the Bus*. While you play, a Monte Carlo
tree search runs in a background thread and shows which player move has
received the largest share of the search so far.

## The game

The player makes up to four guesses about cards dealt from a fresh
52-card deck:

1. **Red or black** – the colour of the first card.
2. **Higher or lower** – whether the second card is strictly higher or
   strictly lower than the first.
3. **Inside or outside** – whether the third card falls strictly between the
   first two or strictly outside them.
4. **Suit** – the suit of the fourth card.

A wrong guess ends the game with a multiplier of 0; a card of equal value
counts as wrong in stages 2 and 3. After each correct guess the player may
instead **finish** and take the multiplier reached so far: 2 after the first
stage, 3 after the second, 4 after the third. Guessing the suit right in the
last stage pays 20.

## Installation

```
pip install .
```

The interface is built on the standard library's `curses` module, so it
needs a Python that provides it (as on Linux and macOS).

## Usage

```
ridethebus
```

`ridethebus --help` prints a short description. The screen lists up to five
player moves with the share of the current position's search visits each has
received, refreshed about ten times a second. When it is the dealer's turn
the screen says so and waits for the card that was dealt.

Type a move into the prompt and press Enter. If the move names a position the
search has already reached from the current one, the game advances, the
input is cleared and the search continues from the new position; otherwise
the input is left as it is. Backspace deletes a character and Esc quits.
When the game is over, the screen shows the final multiplier.

Moves are typed as plain words, case-insensitively:

- player moves: `red`, `black`, `higher`, `lower`, `inside`, `outside`,
  `hearts`, `diamonds`, `clubs`, `spades`, `finish`
- dealer moves (the card that was dealt): `<value> of <suit>`, for example
  `queen of hearts` or `two of spades`

## Using the library

The package has four modules:

- `ridethebus.card` – `Suit`, `Colour`, `Value`, `Card` and the 52-card
  `DECK`; `Card.rest_of_deck(cards)` returns the deck without the given cards.
- `ridethebus.game` – the game as immutable states (`Start`,
  `Stage1PlayerPicked` … `Stage4PlayerPicked`, `Finished`), the move types
  `HiLo`, `InOut` and `Finish`, and `parse_move`. Applying a move that a
  state does not accept raises `InvalidMoveError`; `parse_move` raises
  `ValueError` for text that is not a move.
- `ridethebus.node` – the search tree `Node`, with `iterate` for one round of
  search, `search` to run until a `threading.Event` is set, `best_moves` and
  `find_child`.
- `ridethebus.app` – the terminal interface `App` and the `main` entry point.

```python
import random

from ridethebus.game import Start, parse_move
from ridethebus.node import Node

root = Node.start()
rng = random.Random(0)
for _ in range(10_000):
    root.iterate(rng)

for move, share in sorted(root.best_moves(), key=lambda pair: -pair[1]):
    print(move, f"{share:.3f}")

state = Start().apply_move(parse_move("red"))
print(state.is_dealer_turn())  # True: the dealer deals the first card next
```

`State.playout` plays a position out with uniformly random moves and returns
the multiplier; `State.valid_moves` lists every legal move from a position.

## Running the tests

```
pip install .[test]
pytest
```