"""Monte Carlo tree search over Ride the Bus game states."""

from __future__ import annotations

import math
import random
import threading

from ridethebus.game import Move, Start, State

SQRT_2 = math.sqrt(2.0)
MAX_MULTIPLIER = 20


class Node:
    """A node in the search tree: a game state and the statistics gathered for it.

    One thread grows the tree while others may read it. Children are published
    by replacing the whole list, so readers always see a complete list.
    """

    def __init__(self, state: State, move: Move | None = None, parent: Node | None = None) -> None:
        self.state = state
        self.move = move
        self.parent = parent
        self.children: list[Node] = []
        self.reward = 0.0
        self.visits = 0.0

    @staticmethod
    def start() -> Node:
        """Return a fresh root node at the start of a game."""
        return Node(Start())

    def __repr__(self) -> str:
        return f"Node(state={self.state!r}, move={self.move!r}, visits={self.visits})"

    def score(self, root_visits: float) -> float:
        """The UCT score of this node; unvisited nodes score infinitely high."""
        if self.visits == 0:
            return math.inf
        exploitation = self.reward / self.visits
        exploration = SQRT_2 * math.sqrt(math.log(root_visits) / self.visits)
        return exploitation + exploration

    def _best_child(self, root_visits: float) -> Node:
        best: Node | None = None
        best_score = -math.inf
        for child in self.children:
            child_score = child.score(root_visits)
            # On ties the later child wins.
            if best is None or child_score >= best_score:
                best, best_score = child, child_score
        if best is None:
            raise ValueError("node has no children")
        return best

    def select(self) -> Node:
        """Descend by best score from this node to a leaf or terminal node."""
        node = self
        while not node.state.is_terminal() and node.children:
            node = node._best_child(self.visits)
        return node

    def expand(self) -> Node:
        """Add a child for every valid move and return the first one."""
        if self.state.is_terminal():
            raise ValueError("cannot expand a terminal node")
        children = [
            Node(self.state.apply_move(move), move, self) for move in self.state.valid_moves()
        ]
        self.children = self.children + children
        return self.children[0]

    def backpropagate(self, reward: float) -> None:
        """Add one visit and ``reward`` to this node and all its ancestors."""
        node: Node | None = self
        while node is not None:
            node.visits += 1.0
            node.reward += reward
            node = node.parent

    def iterate(self, rng: random.Random | None = None) -> None:
        """Run one select, expand, playout and backpropagate round from this node."""
        leaf = self.select()
        if not leaf.state.is_terminal():
            leaf = leaf.expand()
        reward = leaf.state.playout(rng) / MAX_MULTIPLIER
        leaf.backpropagate(reward)

    def search(self, stop: threading.Event, rng: random.Random | None = None) -> None:
        """Iterate until ``stop`` is set."""
        generator = rng if rng is not None else random.Random()
        while not stop.is_set():
            self.iterate(generator)

    def best_moves(self) -> list[tuple[Move, float]]:
        """Each child's move with its share of this node's visits."""
        children = self.children
        visits = self.visits
        if not visits:
            return []
        return [(child.move, child.visits / visits) for child in children if child.move is not None]

    def find_child(self, move: Move) -> Node | None:
        """Return the child reached by ``move``, or None if there is none yet."""
        return next((child for child in self.children if child.move == move), None)