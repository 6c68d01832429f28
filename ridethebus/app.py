"""Terminal front end that shows the best moves found by the background search."""

from __future__ import annotations

import argparse
import curses
import heapq
import threading
import time

from ridethebus.game import Finished, Move, parse_move
from ridethebus.node import Node

POLL_INTERVAL = 0.1
SHOWN_MOVES = 5
_ESCAPE = 27
_ENTER_KEYS = frozenset({10, 13, curses.KEY_ENTER})
_BACKSPACE_KEYS = frozenset({8, 127, curses.KEY_BACKSPACE})


class App:
    """Holds the search tree, the background search thread and the input line."""

    def __init__(self, root: Node) -> None:
        self.root = root
        self.state = root.state
        self.best_moves: list[tuple[Move, float]] = []
        self.poll_interval = POLL_INTERVAL
        self.exit = False
        self._input = ""
        self._last_refresh = time.monotonic()
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    def top_moves(self, number: int) -> list[tuple[Move, float]]:
        """The ``number`` most visited moves from the root, best first."""
        return heapq.nlargest(number, self.root.best_moves(), key=lambda pair: pair[1])

    def submit(self, line: str) -> bool:
        """Play the move in ``line`` if it names an explored child of the root."""
        try:
            move = parse_move(line)
        except ValueError:
            return False
        child = self.root.find_child(move)
        if child is None:
            return False
        was_searching = self._thread is not None
        self.stop_search()
        self.root = child
        self.state = child.state
        self.best_moves = [] if self.state.is_dealer_turn() else self.top_moves(SHOWN_MOVES)
        if was_searching:
            self.start_search()
        return True

    def start_search(self) -> None:
        """Start searching from the current root in a background thread."""
        if self._thread is not None:
            return
        self._stop = threading.Event()
        self._thread = threading.Thread(target=self.root.search, args=(self._stop,), daemon=True)
        self._thread.start()

    def stop_search(self) -> None:
        """Stop the background search and wait for it to finish."""
        if self._thread is None:
            return
        self._stop.set()
        self._thread.join()
        self._thread = None

    def status_lines(self) -> tuple[list[str], str]:
        """The lines to show above the input box, and the input box's title."""
        if self.state.is_dealer_turn():
            return ["Dealer's turn"], "Enter dealers's move"
        if isinstance(self.state, Finished):
            return [f"Game finished! Multiplier: {self.state.multiplier}"], ""
        lines = [f"{move} {share:.3f}" for move, share in self.best_moves]
        return lines, "Enter player's move"

    def _refresh(self) -> None:
        now = time.monotonic()
        if now - self._last_refresh > self.poll_interval and not self.state.is_dealer_turn():
            self.best_moves = self.top_moves(SHOWN_MOVES)
            self._last_refresh = now

    def _handle_key(self, key: int) -> None:
        if key == _ESCAPE:
            self.exit = True
        elif key in _ENTER_KEYS:
            if self.submit(self._input):
                self._input = ""
        elif key in _BACKSPACE_KEYS:
            self._input = self._input[:-1]
        elif 32 <= key < 127:
            self._input += chr(key)

    def _draw(self, screen) -> None:
        screen.erase()
        height, width = screen.getmaxyx()
        if height >= 7 and width >= 8:
            lines, prompt = self.status_lines()
            _draw_box(screen, 0, 0, height, width, "Ride the bus", centered=True)
            left, inner_width = 2, width - 4
            input_top = height - 4
            for row, text in enumerate(lines[: max(input_top - 1, 0)]):
                _put(screen, 1 + row, left, text[:inner_width])
            _draw_box(screen, input_top, left, 3, inner_width, prompt)
            visible = max(inner_width - 2, 0)
            if visible:
                _put(screen, input_top + 1, left + 1, self._input[-visible:])
        screen.refresh()

    def run(self, screen) -> None:
        """Drive the interface on a curses ``screen`` until Escape is pressed."""
        try:
            curses.curs_set(0)
        except curses.error:
            pass
        screen.timeout(50)
        self.start_search()
        try:
            while not self.exit:
                self._refresh()
                self._draw(screen)
                key = screen.getch()
                if key != -1:
                    self._handle_key(key)
        finally:
            self.stop_search()


def _put(screen, y: int, x: int, text: str) -> None:
    try:
        screen.addstr(y, x, text)
    except curses.error:
        pass


def _put_char(screen, y: int, x: int, char) -> None:
    try:
        screen.addch(y, x, char)
    except curses.error:
        pass


def _draw_box(screen, top: int, left: int, height: int, width: int, title: str, centered: bool = False) -> None:
    bottom = top + height - 1
    right = left + width - 1
    try:
        screen.hline(top, left + 1, curses.ACS_HLINE, width - 2)
        screen.hline(bottom, left + 1, curses.ACS_HLINE, width - 2)
        screen.vline(top + 1, left, curses.ACS_VLINE, height - 2)
        screen.vline(top + 1, right, curses.ACS_VLINE, height - 2)
    except curses.error:
        pass
    _put_char(screen, top, left, curses.ACS_ULCORNER)
    _put_char(screen, top, right, curses.ACS_URCORNER)
    _put_char(screen, bottom, left, curses.ACS_LLCORNER)
    _put_char(screen, bottom, right, curses.ACS_LRCORNER)
    text = title[: max(width - 2, 0)]
    if text:
        offset = (width - 2 - len(text)) // 2 if centered else 0
        _put(screen, top, left + 1 + offset, text)


def main(argv: list[str] | None = None) -> int:
    """Start the interactive move advisor."""
    parser = argparse.ArgumentParser(
        prog="ridethebus",
        description="Suggest Ride the bus moves using Monte Carlo tree search. "
        "Type moves such as 'red', 'higher' or 'ace of spades'; Escape quits.",
    )
    parser.parse_args(argv)
    app = App(Node.start())
    curses.wrapper(app.run)
    return 0