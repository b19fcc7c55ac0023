"""Asteroids game state: a ship, its bullets and splitting rocks on a wrapping field."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass

from quadplay.geometry import Vec2

SHIP_HEIGHT = 25.0
SHIP_BASE = 22.0
MAX_SPEED = 5.0
SHOT_INTERVAL = 0.5
BULLET_LIFETIME = 1.5
BULLET_SPEED = 7.0
TURN_STEP = 5.0
ASTEROID_COUNT = 10


def wrap_around(v: Vec2, width: float, height: float) -> Vec2:
    """Move a point that left the field to the opposite edge."""
    x, y = v.x, v.y
    if x > width:
        x = 0.0
    if x < 0.0:
        x = width
    if y > height:
        y = 0.0
    if y < 0.0:
        y = height
    return Vec2(x, y)


@dataclass
class Ship:
    pos: Vec2
    rot: float = 0.0
    vel: Vec2 = Vec2(0.0, 0.0)


@dataclass
class Bullet:
    pos: Vec2
    vel: Vec2
    shot_at: float
    collided: bool = False


@dataclass
class Asteroid:
    pos: Vec2
    vel: Vec2
    rot: float
    rot_speed: float
    size: float
    sides: int
    collided: bool = False


class AsteroidsGame:
    """One round of asteroids on a `width` x `height` field."""

    def __init__(
        self,
        width: float = 800.0,
        height: float = 600.0,
        rng: random.Random | None = None,
        now: float = 0.0,
    ) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("field dimensions must be positive")
        self.width = width
        self.height = height
        self._rng = rng if rng is not None else random.Random()
        self.last_shot = now
        self.reset()

    @property
    def center(self) -> Vec2:
        return Vec2(self.width / 2.0, self.height / 2.0)

    @property
    def won(self) -> bool:
        """True when the round ended with every asteroid destroyed."""
        return self.gameover and not self.asteroids

    def _random_direction(self) -> Vec2:
        while True:
            v = Vec2(self._rng.uniform(-1.0, 1.0), self._rng.uniform(-1.0, 1.0))
            if v.length() > 0.0:
                return v.normalize()

    def reset(self) -> None:
        """Start a new round with a fresh ship and a ring of asteroids."""
        self.ship = Ship(pos=self.center)
        self.bullets: list[Bullet] = []
        self.gameover = False
        short_side = min(self.width, self.height)
        self.asteroids: list[Asteroid] = [
            Asteroid(
                pos=self.center + self._random_direction() * short_side / 2.0,
                vel=Vec2(self._rng.uniform(-1.0, 1.0), self._rng.uniform(-1.0, 1.0)),
                rot=0.0,
                rot_speed=self._rng.uniform(-2.0, 2.0),
                size=short_side / 10.0,
                sides=self._rng.randrange(3, 8),
            )
            for _ in range(ASTEROID_COUNT)
        ]

    def _fragment(self, asteroid: Asteroid, vel: Vec2) -> Asteroid:
        return Asteroid(
            pos=asteroid.pos,
            vel=vel.normalize() * self._rng.uniform(1.0, 3.0),
            rot=self._rng.uniform(0.0, 360.0),
            rot_speed=self._rng.uniform(-2.0, 2.0),
            size=asteroid.size * 0.8,
            sides=asteroid.sides - 1,
        )

    def update(self, frame_t: float, up: bool, left: bool, right: bool, space: bool) -> None:
        """Advance one frame at time `frame_t` with the given keys held."""
        if self.gameover:
            return

        ship = self.ship
        rotation = math.radians(ship.rot)
        heading = Vec2(math.sin(rotation), -math.cos(rotation))

        acc = -ship.vel / 100.0
        if up:
            acc = heading / 3.0

        if space and frame_t - self.last_shot > SHOT_INTERVAL:
            self.bullets.append(
                Bullet(
                    pos=ship.pos + heading * SHIP_HEIGHT / 2.0,
                    vel=heading * BULLET_SPEED,
                    shot_at=frame_t,
                )
            )
            self.last_shot = frame_t

        if right:
            ship.rot += TURN_STEP
        elif left:
            ship.rot -= TURN_STEP

        ship.vel = ship.vel + acc
        if ship.vel.length() > MAX_SPEED:
            ship.vel = ship.vel.normalize() * MAX_SPEED
        ship.pos = wrap_around(ship.pos + ship.vel, self.width, self.height)

        for bullet in self.bullets:
            bullet.pos = bullet.pos + bullet.vel

        for asteroid in self.asteroids:
            asteroid.pos = wrap_around(asteroid.pos + asteroid.vel, self.width, self.height)
            asteroid.rot += asteroid.rot_speed

        self.bullets = [b for b in self.bullets if b.shot_at + BULLET_LIFETIME > frame_t]

        fragments: list[Asteroid] = []
        for asteroid in self.asteroids:
            if (asteroid.pos - ship.pos).length() < asteroid.size + SHIP_HEIGHT / 3.0:
                self.gameover = True
                break
            for bullet in self.bullets:
                if (asteroid.pos - bullet.pos).length() < asteroid.size:
                    asteroid.collided = True
                    bullet.collided = True
                    if asteroid.sides > 3:
                        fragments.append(
                            self._fragment(asteroid, Vec2(bullet.vel.y, -bullet.vel.x))
                        )
                        fragments.append(
                            self._fragment(asteroid, Vec2(-bullet.vel.y, bullet.vel.x))
                        )
                    break

        self.bullets = [
            b for b in self.bullets if b.shot_at + BULLET_LIFETIME > frame_t and not b.collided
        ]
        self.asteroids = [a for a in self.asteroids if not a.collided]
        self.asteroids.extend(fragments)

        if not self.asteroids:
            self.gameover = True