"""Particle emitters: spawning, ageing and animating particles on the CPU."""

from __future__ import annotations

import dataclasses
import math
import random
from dataclasses import dataclass, field

from quadplay.geometry import Vec2
from quadplay.particle_config import BatchedCurve, Color, EmitterConfig

_FULL_UV = (0.0, 0.0, 1.0, 1.0)


@dataclass
class Particle:
    """One live particle.

    `position` is in world space, or relative to the emitter when the emitter
    uses local coordinates.
    """

    position: Vec2
    rotation: float
    size: float
    velocity: Vec2
    angular_velocity: float
    lifetime: float
    initial_size: float
    color: Color
    index: float
    lived: float = 0.0
    progress: float = 0.0
    frame: int = 0
    uv: tuple[float, float, float, float] = field(default=(1.0, 1.0, 0.0, 0.0))


def _randomized(base: float, randomness: float, rng: random.Random) -> float:
    return base - base * rng.uniform(0.0, randomness)


def _initial_velocity(direction: Vec2, spread: float, speed: float, rng: random.Random) -> Vec2:
    angle = rng.uniform(-spread / 2.0, spread / 2.0)
    cos_a, sin_a = math.cos(angle), math.sin(angle)
    rotated = Vec2(
        direction.x * cos_a - direction.y * sin_a,
        direction.x * sin_a + direction.y * cos_a,
    )
    return rotated * speed


class Emitter:
    """Spawns particles according to an EmitterConfig and advances them in time."""

    MAX_PARTICLES = 10000

    def __init__(self, config: EmitterConfig, rng: random.Random | None = None) -> None:
        self.config = config
        self.position = Vec2(0.0, 0.0)
        self.particles: list[Particle] = []
        self._rng = rng if rng is not None else random.Random()
        self._last_emit_time = 0.0
        self._time_passed = 0.0
        self._particles_current_cycle = 0
        self._particles_spawned = 0
        self._size_curve: BatchedCurve | None = None
        self.rebuild_size_curve()

    def reset(self) -> None:
        """Drop all particles and restart the emission cycle."""
        self.particles.clear()
        self._last_emit_time = 0.0
        self._time_passed = 0.0
        self._particles_spawned = 0
        self._particles_current_cycle = 0

    def rebuild_size_curve(self) -> None:
        """Resample the size curve after the config's curve has changed."""
        curve = self.config.size_curve
        self._size_curve = curve.batch() if curve is not None else None

    def emit(self, pos: Vec2, n: int) -> None:
        """Immediately emit `n` particles at offset `pos`, ignoring `emitting` and `amount`."""
        for _ in range(n):
            self._emit_particle(pos)
            self._particles_spawned += 1

    def _emit_particle(self, offset: Vec2) -> None:
        cfg = self.config
        rng = self._rng
        offset = offset + cfg.emission_shape.random_point(rng)
        size = _randomized(cfg.size, cfg.size_randomness, rng)
        rotation = _randomized(cfg.initial_rotation, cfg.initial_rotation_randomness, rng)
        position = offset if cfg.local_coords else self.position + offset

        velocity = _initial_velocity(
            cfg.initial_direction,
            cfg.initial_direction_spread,
            _randomized(cfg.initial_velocity, cfg.initial_velocity_randomness, rng),
            rng,
        )
        angular_velocity = _randomized(
            cfg.initial_angular_velocity, cfg.initial_angular_velocity_randomness, rng
        )
        lifetime = _randomized(cfg.lifetime, cfg.lifetime_randomness, rng)

        particle = Particle(
            position=position,
            rotation=rotation,
            size=size,
            velocity=velocity,
            angular_velocity=angular_velocity,
            lifetime=lifetime,
            initial_size=size,
            color=cfg.colors_curve.start,
            index=float(self._particles_spawned),
        )
        self._particles_spawned += 1
        self._particles_current_cycle += 1
        self.particles.append(particle)

    def _spawn_count(self) -> int:
        cfg = self.config
        if cfg.amount <= 0:
            return 0
        gap = (cfg.lifetime / cfg.amount) * (1.0 - cfg.explosiveness)
        if gap < 0.001:
            return cfg.amount
        return max(int((self._time_passed - self._last_emit_time) / gap), 0)

    def update(self, dt: float) -> None:
        """Spawn due particles, advance every particle by `dt` and drop the dead ones."""
        cfg = self.config
        if cfg.emitting:
            self._time_passed += dt
            for _ in range(self._spawn_count()):
                self._last_emit_time = self._time_passed
                if self._particles_spawned < cfg.amount:
                    self._emit_particle(Vec2(0.0, 0.0))
                if len(self.particles) >= cfg.amount:
                    break

        if cfg.one_shot and self._particles_current_cycle >= cfg.amount:
            self._time_passed = 0.0
            self._last_emit_time = 0.0
            self._particles_current_cycle = 0
            cfg.emitting = False

        for particle in self.particles:
            self._advance(particle, dt)

        survivors: list[Particle] = []
        for particle in self.particles:
            if particle.lived >= particle.lifetime or particle.lived > cfg.lifetime:
                if particle.lived != particle.lifetime:
                    self._particles_spawned = max(self._particles_spawned - 1, 0)
            else:
                survivors.append(particle)
        self.particles = survivors[: self.MAX_PARTICLES]

    def _advance(self, particle: Particle, dt: float) -> None:
        cfg = self.config
        particle.velocity = particle.velocity + particle.velocity * (cfg.linear_accel * dt)
        particle.angular_velocity += particle.angular_velocity * cfg.angular_accel * dt
        particle.angular_velocity *= 1.0 - cfg.angular_damping

        progress = particle.lived / particle.lifetime if particle.lifetime != 0.0 else 1.0
        particle.color = cfg.colors_curve.at(progress)
        particle.position = particle.position + particle.velocity * dt
        particle.rotation += particle.angular_velocity * dt

        scale = self._size_curve.get(progress) if self._size_curve is not None else 1.0
        particle.size = particle.initial_size * scale

        if particle.lifetime != 0.0:
            particle.progress = progress

        particle.lived += dt
        particle.velocity = particle.velocity + cfg.gravity * dt

        atlas = cfg.atlas
        if atlas is not None:
            if particle.lifetime != 0.0:
                particle.frame = atlas.frame_at(particle.lived / particle.lifetime)
            particle.uv = atlas.uv_rect(particle.frame)
        else:
            particle.uv = _FULL_UV

    def step(self, pos: Vec2, dt: float) -> None:
        """Place the emitter at `pos` and advance it by `dt`."""
        self.position = pos
        self.update(dt)


class EmittersCache:
    """Many short-lived copies of one emitter, recycling finished ones."""

    CACHE_DEFAULT_SIZE = 10

    def __init__(self, config: EmitterConfig, rng: random.Random | None = None) -> None:
        self.config = config
        self._rng = rng if rng is not None else random.Random()
        self._cache: list[Emitter] = [
            self._new_emitter(emitting=False) for _ in range(self.CACHE_DEFAULT_SIZE)
        ]
        self._active: list[tuple[Emitter, Vec2]] = []

    def _new_emitter(self, emitting: bool) -> Emitter:
        config = dataclasses.replace(self.config, emitting=emitting)
        return Emitter(config, rng=self._rng)

    @property
    def active(self) -> list[Emitter]:
        """Emitters currently running."""
        return [emitter for emitter, _ in self._active]

    @property
    def cached(self) -> int:
        """Number of idle emitters ready for reuse."""
        return len(self._cache)

    def spawn(self, pos: Vec2) -> None:
        """Start an emitter at `pos`, reusing an idle one when available."""
        emitter = self._cache.pop() if self._cache else self._new_emitter(emitting=True)
        emitter.config.emitting = True
        emitter.reset()
        self._active.append((emitter, pos))

    def step(self, dt: float) -> None:
        """Advance all active emitters; those that stopped emitting go back to the cache."""
        still_active: list[tuple[Emitter, Vec2]] = []
        for emitter, pos in self._active:
            emitter.step(pos, dt)
            if emitter.config.emitting:
                still_active.append((emitter, pos))
            else:
                self._cache.append(emitter)
        self._active = still_active