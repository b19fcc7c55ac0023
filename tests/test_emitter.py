import random

import pytest

from quadplay.emitter import Emitter, EmittersCache
from quadplay.geometry import Vec2
from quadplay.particle_config import (
    AtlasConfig,
    Color,
    ColorCurve,
    Curve,
    EmissionShape,
    EmitterConfig,
)


def burst(**kwargs):
    params = dict(one_shot=True, explosiveness=1.0, amount=5)
    params.update(kwargs)
    return EmitterConfig(**params)


def test_explosive_emitter_spawns_whole_amount():
    emitter = Emitter(burst(amount=7), rng=random.Random(0))
    emitter.step(Vec2(0.0, 0.0), 0.1)
    assert len(emitter.particles) == 7


def test_one_shot_stops_emitting_after_cycle():
    emitter = Emitter(burst(), rng=random.Random(0))
    emitter.step(Vec2(0.0, 0.0), 0.1)
    assert emitter.config.emitting is False
    emitter.step(Vec2(0.0, 0.0), 0.1)
    assert len(emitter.particles) == 5


def test_particles_die_after_lifetime():
    emitter = Emitter(burst(lifetime=1.0), rng=random.Random(0))
    emitter.step(Vec2(0.0, 0.0), 0.6)
    assert len(emitter.particles) == 5
    emitter.step(Vec2(0.0, 0.0), 0.6)
    assert emitter.particles == []


def test_world_coords_particles_start_at_emitter():
    emitter = Emitter(burst(initial_velocity=0.0), rng=random.Random(0))
    emitter.step(Vec2(30.0, 40.0), 0.1)
    assert all(p.position == Vec2(30.0, 40.0) for p in emitter.particles)


def test_local_coords_particles_start_at_origin():
    emitter = Emitter(burst(initial_velocity=0.0, local_coords=True), rng=random.Random(0))
    emitter.step(Vec2(30.0, 40.0), 0.1)
    assert all(p.position == Vec2(0.0, 0.0) for p in emitter.particles)


def test_particles_move_along_initial_direction():
    emitter = Emitter(burst(initial_velocity=50.0), rng=random.Random(0))
    emitter.step(Vec2(10.0, 10.0), 0.1)
    for p in emitter.particles:
        assert p.position.x == pytest.approx(10.0)
        assert p.position.y == pytest.approx(10.0 - 50.0 * 0.1)


def test_gravity_changes_velocity():
    emitter = Emitter(burst(initial_velocity=0.0, gravity=Vec2(0.0, 100.0)), rng=random.Random(0))
    emitter.step(Vec2(0.0, 0.0), 0.5)
    for p in emitter.particles:
        assert p.velocity.y == pytest.approx(100.0 * 0.5)


def test_color_follows_curve():
    red = Color(1.0, 0.0, 0.0)
    green = Color(0.0, 1.0, 0.0)
    blue = Color(0.0, 0.0, 1.0)
    config = burst(lifetime=1.0, colors_curve=ColorCurve(red, green, blue))
    emitter = Emitter(config, rng=random.Random(0))
    emitter.step(Vec2(0.0, 0.0), 0.5)
    assert all(p.color == red for p in emitter.particles)
    emitter.step(Vec2(0.0, 0.0), 0.25)
    assert all(p.color == green for p in emitter.particles)


def test_size_curve_scales_size():
    curve = Curve(points=[(0.0, 0.5), (0.5, 1.0), (1.0, 0.0)])
    emitter = Emitter(burst(size=10.0, size_curve=curve), rng=random.Random(0))
    emitter.step(Vec2(0.0, 0.0), 0.1)
    assert all(p.size == pytest.approx(10.0 * 0.5) for p in emitter.particles)


def test_rebuild_size_curve_uses_new_curve():
    emitter = Emitter(burst(size=10.0), rng=random.Random(0))
    emitter.config.size_curve = Curve(points=[(0.0, 0.25), (1.0, 0.25)])
    emitter.rebuild_size_curve()
    emitter.step(Vec2(0.0, 0.0), 0.1)
    assert all(p.size == pytest.approx(10.0 * 0.25) for p in emitter.particles)


def test_atlas_frame_and_uv():
    atlas = AtlasConfig.from_range(4, 4, 8, None)
    emitter = Emitter(burst(atlas=atlas), rng=random.Random(0))
    emitter.step(Vec2(0.0, 0.0), 0.0)
    for p in emitter.particles:
        assert p.frame == 8
        assert p.uv == atlas.uv_rect(8)


def test_no_atlas_uses_full_texture():
    emitter = Emitter(burst(), rng=random.Random(0))
    emitter.step(Vec2(0.0, 0.0), 0.1)
    assert all(p.uv == (0.0, 0.0, 1.0, 1.0) for p in emitter.particles)


def test_emit_ignores_emitting_flag():
    emitter = Emitter(EmitterConfig(emitting=False), rng=random.Random(0))
    emitter.emit(Vec2(1.0, 2.0), 3)
    assert len(emitter.particles) == 3
    assert all(p.position == Vec2(1.0, 2.0) for p in emitter.particles)


def test_reset_clears_particles():
    emitter = Emitter(burst(), rng=random.Random(0))
    emitter.step(Vec2(0.0, 0.0), 0.1)
    emitter.reset()
    assert emitter.particles == []


def test_continuous_emitter_never_exceeds_amount():
    emitter = Emitter(EmitterConfig(amount=8, lifetime=1.0), rng=random.Random(3))
    for _ in range(50):
        emitter.step(Vec2(0.0, 0.0), 0.05)
        assert len(emitter.particles) <= 8
    assert len(emitter.particles) > 0


def test_rect_shape_points_inside_and_deterministic():
    config_a = burst(initial_velocity=0.0, emission_shape=EmissionShape.rect(4.0, 2.0))
    config_b = burst(initial_velocity=0.0, emission_shape=EmissionShape.rect(4.0, 2.0))
    a = Emitter(config_a, rng=random.Random(42))
    b = Emitter(config_b, rng=random.Random(42))
    a.step(Vec2(0.0, 0.0), 0.1)
    b.step(Vec2(0.0, 0.0), 0.1)
    assert [p.position for p in a.particles] == [p.position for p in b.particles]
    for p in a.particles:
        assert -2.0 <= p.position.x <= 2.0
        assert -1.0 <= p.position.y <= 1.0


def test_cache_recycles_finished_one_shot_emitters():
    cache = EmittersCache(burst(), rng=random.Random(0))
    assert cache.cached == EmittersCache.CACHE_DEFAULT_SIZE
    cache.spawn(Vec2(5.0, 5.0))
    assert len(cache.active) == 1
    assert cache.cached == EmittersCache.CACHE_DEFAULT_SIZE - 1
    cache.step(0.1)
    assert cache.active == []
    assert cache.cached == EmittersCache.CACHE_DEFAULT_SIZE


def test_cache_grows_beyond_default_size():
    cache = EmittersCache(EmitterConfig(), rng=random.Random(0))
    for _ in range(EmittersCache.CACHE_DEFAULT_SIZE + 1):
        cache.spawn(Vec2(0.0, 0.0))
    assert len(cache.active) == EmittersCache.CACHE_DEFAULT_SIZE + 1
    assert cache.cached == 0


def test_cache_places_emitter_at_spawn_position():
    cache = EmittersCache(EmitterConfig(), rng=random.Random(0))
    cache.spawn(Vec2(7.0, 9.0))
    cache.step(0.5)
    (emitter,) = cache.active
    assert emitter.position == Vec2(7.0, 9.0)
    assert emitter.config.emitting is True