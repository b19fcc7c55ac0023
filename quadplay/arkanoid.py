"""Brick-breaker game state: a paddle, a ball and a wall of blocks."""

from __future__ import annotations

from quadplay.geometry import Rect, Vec2

BLOCKS_W = 10
BLOCKS_H = 10
SCR_W = 20.0
SCR_H = 20.0
PLATFORM_SPEED = 3.0
WALL_HEIGHT = 7.0


class Arkanoid:
    """The playfield is SCR_W x SCR_H units with y growing downwards."""

    def __init__(self) -> None:
        self.blocks: list[list[bool]] = [[True] * BLOCKS_W for _ in range(BLOCKS_H)]
        self.ball_x = 12.0
        self.ball_y = 7.0
        self.dx = 3.5
        self.dy = -3.5
        self.platform_x = 10.0
        self.stick = True
        self.platform_width = 5.0
        self.platform_height = 0.2

    @property
    def remaining_blocks(self) -> int:
        """Number of blocks still standing."""
        return sum(row.count(True) for row in self.blocks)

    @staticmethod
    def block_rect(i: int, j: int) -> Rect:
        """Hit area of the block in column `i`, row `j`."""
        block_w = SCR_W / BLOCKS_W
        block_h = WALL_HEIGHT / BLOCKS_H
        return Rect(i * block_w + 0.05, j * block_h + 0.05, block_w, block_h)

    def update(self, dt: float, left: bool, right: bool, space: bool) -> None:
        """Advance one frame of `dt` seconds with the given keys held."""
        half = self.platform_width / 2.0
        if right and self.platform_x < SCR_W - half:
            self.platform_x += PLATFORM_SPEED * dt
        if left and self.platform_x > half:
            self.platform_x -= PLATFORM_SPEED * dt

        if not self.stick:
            self.ball_x += self.dx * dt
            self.ball_y += self.dy * dt
        else:
            self.ball_x = self.platform_x
            self.ball_y = SCR_H - 0.5
            self.stick = not space

        if self.ball_x <= 0.0 or self.ball_x > SCR_W:
            self.dx *= -1.0

        over_platform = (
            self.ball_y > SCR_H - self.platform_height - 0.15 / 2.0
            and self.platform_x - half <= self.ball_x <= self.platform_x + half
        )
        if self.ball_y <= 0.0 or over_platform:
            self.dy *= -1.0

        if self.ball_y >= SCR_H:
            self.ball_y = 10.0
            self.dy = -abs(self.dy)
            self.stick = True

        ball = Vec2(self.ball_x, self.ball_y)
        for j, row in enumerate(self.blocks):
            for i, alive in enumerate(row):
                if alive and self.block_rect(i, j).contains(ball):
                    self.dy *= -1.0
                    row[i] = False