"""Game state of a snake on a square grid, advanced on a timer."""

from __future__ import annotations

import random
from collections import deque
from enum import Enum

SQUARES = 16
START_SPEED = 0.3
FRUIT_SCORE = 100
SPEEDUP = 0.9

Point = tuple[int, int]


class Direction(Enum):
    """Heading of the snake as a grid offset."""

    UP = (0, -1)
    DOWN = (0, 1)
    RIGHT = (1, 0)
    LEFT = (-1, 0)

    @property
    def opposite(self) -> Direction:
        dx, dy = self.value
        return Direction((-dx, -dy))


class SnakeGame:
    """Snake, fruit, score and timing; one grid step every `speed` seconds."""

    def __init__(self, rng: random.Random | None = None, now: float = 0.0) -> None:
        self._rng = rng if rng is not None else random.Random()
        self._now = now
        self.reset()

    def _random_point(self) -> Point:
        return (self._rng.randrange(0, SQUARES), self._rng.randrange(0, SQUARES))

    def reset(self) -> None:
        """Start a new game at the last time the game has seen."""
        self.head: Point = (0, 0)
        self.body: deque[Point] = deque()
        self.direction = Direction.RIGHT
        self.fruit: Point = self._random_point()
        self.score = 0
        self.speed = START_SPEED
        self.last_update = self._now
        self.navigation_lock = False
        self.game_over = False

    def steer(self, direction: Direction) -> bool:
        """Turn the snake; refused when reversing or already turned this step."""
        if not isinstance(direction, Direction):
            raise ValueError(f"not a direction: {direction!r}")
        if self.game_over or self.navigation_lock:
            return False
        if self.direction is direction.opposite:
            return False
        self.direction = direction
        self.navigation_lock = True
        return True

    def update(self, now: float) -> bool:
        """Advance one step if enough time has passed; True when the snake moved."""
        self._now = now
        if self.game_over or now - self.last_update <= self.speed:
            return False

        self.last_update = now
        self.body.appendleft(self.head)
        dx, dy = self.direction.value
        self.head = (self.head[0] + dx, self.head[1] + dy)
        if self.head == self.fruit:
            self.fruit = self._random_point()
            self.score += FRUIT_SCORE
            self.speed *= SPEEDUP
        else:
            self.body.pop()

        x, y = self.head
        if not (0 <= x < SQUARES and 0 <= y < SQUARES) or self.head in self.body:
            self.game_over = True
        self.navigation_lock = False
        return True