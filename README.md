# quadplay

Game logic without a window. `quadplay` gives you the simulation side of a
few small 2D games and effects. You supply the input and the time step, and
you read back the state. Drawing is left to whatever renderer you use.

## What is inside

- `quadplay.geometry`: immutable `Vec2` (with `+`, `-`, `*`, `/`, `length`,
  `normalize`) and `Rect` (with `overlaps` and `contains`).
  `Vec2.normalize` raises `ValueError` for a zero-length vector.
- `quadplay.platformer`: a pixel-stepped collision `World` for platformers.
  It handles tiled static layers (`Tile.EMPTY`, `Tile.SOLID`,
  `Tile.JUMP_THROUGH`), moving `Solid` platforms that carry and push `Actor`s,
  and squish detection.
- `quadplay.particle_config`: the settings for a particle emitter:
  `EmitterConfig`, `Curve` and `BatchedCurve`, `Color`, `ColorCurve`,
  `EmissionShape` (`point`, `rect`, `sphere`), `AtlasConfig` and `BlendMode`.
- `quadplay.emitter`: a CPU particle `Emitter` holding a list of `Particle`s,
  and an `EmittersCache` that reuses emitters once they stop emitting.
- `quadplay.life`: Conway's Game of Life on a flat, row-major list of
  `CellState`, with `random_cells` and `step`.
- `quadplay.snake`: `SnakeGame` and `Direction`, the grid snake with fruit,
  score and speed-up.
- `quadplay.arkanoid`: `Arkanoid`, with a paddle, a ball and a 10×10 block wall.
- `quadplay.asteroids`: `AsteroidsGame` and `wrap_around`, with a ship,
  bullets and splitting asteroids.
- `quadplay.camera`: angle helpers `short_angle_dist`, `angle_lerp` and
  `wrap_rotation`.

## Installing

```
pip install .
```

## Platformer physics

```python
from quadplay.geometry import Vec2
from quadplay.platformer import Tile, World

world = World()
ground = [Tile.EMPTY] * 40 * 4 + [Tile.SOLID] * 40
world.add_static_tiled_layer(ground, 8.0, 8.0, 40, 1)

player = world.add_actor(Vec2(16.0, 24.0), 8, 8)
platform = world.add_solid(Vec2(100.0, 20.0), 32, 8)

on_ground = world.collide_check(player, world.actor_pos(player) + Vec2(0.0, 1.0))
world.move_h(player, 2.5)   # False if blocked
world.move_v(player, 4.0)
world.solid_move(platform, 1.0, 0.0)
print(world.actor_pos(player), world.squished(player))
```

Movement is pixel-exact. Fractional moves build up in a remainder until they
round to a whole pixel. Actors that are descending pass through
`Tile.JUMP_THROUGH` cells; `World.descent` turns that on for an actor.

## Particles

```python
from quadplay.geometry import Vec2
from quadplay.particle_config import Curve, EmitterConfig
from quadplay.emitter import Emitter

config = EmitterConfig(lifetime=0.5, amount=5, initial_velocity=-50.0,
                       size=2.0, size_curve=Curve(points=[(0.0, 0.5), (0.5, 1.0), (1.0, 0.0)]))
emitter = Emitter(config)
for _ in range(60):
    emitter.step(Vec2(50.0, 50.0), 1 / 60)
for particle in emitter.particles:
    print(particle.position, particle.size, particle.color)
```

`Emitter` and `EmittersCache` take an optional `random.Random` so runs can be
made repeatable. `Emitter.emit(pos, n)` spawns particles at once, regardless
of `emitting` and `amount`. Only linear curves are supported:
`Curve.batch` raises `ValueError` for `Interpolation.BEZIER`.

## Games

Each game moves forward one frame per `update` call. You pass in the current
time or the frame delta and the keys that are held.

```python
from quadplay.snake import Direction, SnakeGame

game = SnakeGame()
game.steer(Direction.DOWN)
game.update(now=0.5)
print(game.head, game.score, game.game_over)
```

- `Arkanoid.update(dt, left, right, space)`
- `AsteroidsGame.update(frame_t, up, left, right, space)`; `AsteroidsGame.won`
  tells a win from a loss once `gameover` is set, and `reset` starts a new round.
- `SnakeGame.update(now)` returns True when the snake moved; `reset` starts over.

## What it does not do

There is no window, rendering, sound or input handling, and no command to
run. Particle `BlendMode`, atlas UV rectangles and colours are computed as
data for a renderer to use, but nothing is drawn.

## Tests

```
pip install .[test]
pytest
```