"""Conway's Game of Life on a bounded grid stored row by row."""

from __future__ import annotations

import random
from enum import Enum
from typing import Iterable

_NEIGHBOUR_OFFSETS = tuple(
    (dx, dy) for dy in (-1, 0, 1) for dx in (-1, 0, 1) if (dx, dy) != (0, 0)
)


class CellState(Enum):
    """State of one cell."""

    ALIVE = "alive"
    DEAD = "dead"


def random_cells(width: int, height: int, rng: random.Random) -> list[CellState]:
    """A row-major grid where each cell is alive with probability 1/5."""
    if width < 0 or height < 0:
        raise ValueError("grid dimensions must not be negative")
    return [
        CellState.ALIVE if rng.randrange(0, 5) == 0 else CellState.DEAD
        for _ in range(width * height)
    ]


def _next_state(current: CellState, neighbours: int) -> CellState:
    if current is CellState.ALIVE:
        return CellState.ALIVE if neighbours in (2, 3) else CellState.DEAD
    return CellState.ALIVE if neighbours == 3 else current


def step(cells: Iterable[CellState], width: int, height: int) -> list[CellState]:
    """Compute the next generation; cells beyond the edges count as dead."""
    grid = list(cells)
    if width < 0 or height < 0:
        raise ValueError("grid dimensions must not be negative")
    if len(grid) != width * height:
        raise ValueError(
            f"expected {width * height} cells for a {width}x{height} grid, got {len(grid)}"
        )

    def neighbours(x: int, y: int) -> int:
        return sum(
            1
            for dx, dy in _NEIGHBOUR_OFFSETS
            if 0 <= x + dx < width
            and 0 <= y + dy < height
            and grid[(y + dy) * width + x + dx] is CellState.ALIVE
        )

    return [
        _next_state(grid[y * width + x], neighbours(x, y))
        for y in range(height)
        for x in range(width)
    ]