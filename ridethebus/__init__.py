"""Ride the Bus rules, a Monte Carlo tree search over them, and a curses advisor."""

__version__ = "0.1.0"
__all__ = ["app", "card", "game", "node"]