"""Pixel-stepping platformer physics: actors, moving solids and tiled layers."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum

from quadplay.geometry import Rect, Vec2


class Tile(Enum):
    """What occupies a cell of a collision layer, or what a query collided with."""

    EMPTY = "empty"
    SOLID = "solid"
    JUMP_THROUGH = "jump_through"
    COLLIDER = "collider"


def _combine(a: Tile, b: Tile) -> Tile:
    """Merge two probe results: empty and jump-through stay soft, anything else is solid."""
    soft = {Tile.EMPTY, Tile.JUMP_THROUGH}
    if a in soft and b in soft:
        return Tile.JUMP_THROUGH if Tile.JUMP_THROUGH in (a, b) else Tile.EMPTY
    return Tile.SOLID


def _round(value: float) -> int:
    """Round half away from zero."""
    if value >= 0:
        return math.floor(value + 0.5)
    return -math.floor(-value + 0.5)


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


@dataclass(frozen=True)
class Actor:
    """Handle to an actor in a World."""

    index: int


@dataclass(frozen=True)
class Solid:
    """Handle to a moving solid in a World."""

    index: int


@dataclass
class _StaticTiledLayer:
    static_colliders: list[Tile]
    tile_width: float
    tile_height: float
    width: int
    tag: int


@dataclass
class _Collider:
    pos: Vec2
    width: int
    height: int
    collidable: bool = True
    squished: bool = False
    x_remainder: float = 0.0
    y_remainder: float = 0.0
    squishers: set[Solid] = field(default_factory=set)
    descent: bool = False
    seen_wood: bool = False

    def rect(self) -> Rect:
        return Rect(self.pos.x, self.pos.y, float(self.width), float(self.height))


class World:
    """A collision world of static tile layers, moving solids and actors."""

    def __init__(self) -> None:
        self._layers: list[_StaticTiledLayer] = []
        self._solids: list[_Collider] = []
        self._actors: list[_Collider] = []

    def add_static_tiled_layer(self, static_colliders, tile_width, tile_height, width, tag):
        """Add a row-major grid of tiles, `width` tiles per row."""
        self._layers.append(
            _StaticTiledLayer(list(static_colliders), tile_width, tile_height, width, tag)
        )

    def add_actor(self, pos, width, height) -> Actor:
        actor = Actor(len(self._actors))
        inside_wood = self.collide_solids(pos, width, height) == Tile.JUMP_THROUGH
        self._actors.append(
            _Collider(pos=pos, width=width, height=height,
                      descent=inside_wood, seen_wood=inside_wood)
        )
        return actor

    def add_solid(self, pos, width, height) -> Solid:
        solid = Solid(len(self._solids))
        self._solids.append(_Collider(pos=pos, width=width, height=height))
        return solid

    def set_actor_position(self, actor, pos):
        collider = self._actors[actor.index]
        collider.x_remainder = 0.0
        collider.y_remainder = 0.0
        collider.pos = pos

    def descent(self, actor):
        """Let the actor drop through jump-through tiles."""
        self._actors[actor.index].descent = True

    def move_v(self, actor, dy) -> bool:
        """Move vertically pixel by pixel; False when blocked."""
        collider = self._actors[actor.index]
        collider.y_remainder += dy
        steps = _round(collider.y_remainder)
        if steps != 0:
            collider.y_remainder -= steps
            sign = _sign(steps)
            while steps != 0:
                tile = self.collide_solids(
                    collider.pos + Vec2(0.0, float(sign)), collider.width, collider.height
                )
                if tile == Tile.JUMP_THROUGH and collider.descent:
                    collider.seen_wood = True
                if tile == Tile.JUMP_THROUGH and sign < 0:
                    collider.seen_wood = True
                    collider.descent = True
                if tile == Tile.EMPTY or (tile == Tile.JUMP_THROUGH and collider.descent):
                    collider.pos = Vec2(collider.pos.x, collider.pos.y + sign)
                    steps -= sign
                else:
                    return False

        if self.collide_solids(collider.pos, collider.width, collider.height) != Tile.JUMP_THROUGH:
            collider.seen_wood = False
            collider.descent = False
        return True

    def move_h(self, actor, dx) -> bool:
        """Move horizontally pixel by pixel; False when blocked."""
        collider = self._actors[actor.index]
        collider.x_remainder += dx
        steps = _round(collider.x_remainder)
        if steps != 0:
            collider.x_remainder -= steps
            sign = _sign(steps)
            while steps != 0:
                tile = self.collide_solids(
                    collider.pos + Vec2(float(sign), 0.0), collider.width, collider.height
                )
                if tile == Tile.JUMP_THROUGH:
                    collider.descent = True
                    collider.seen_wood = True
                if tile in (Tile.EMPTY, Tile.JUMP_THROUGH):
                    collider.pos = Vec2(collider.pos.x + sign, collider.pos.y)
                    steps -= sign
                else:
                    return False
        return True

    def solid_move(self, solid, dx, dy):
        """Move a solid, carrying actors riding it and pushing actors in its way."""
        collider = self._solids[solid.index]
        collider.x_remainder += dx
        collider.y_remainder += dy
        move_x = _round(collider.x_remainder)
        move_y = _round(collider.y_remainder)

        riding_rect = Rect(collider.pos.x, collider.pos.y - 1.0, float(collider.width), 1.0)
        pushing_rect = Rect(
            collider.pos.x + move_x, collider.pos.y,
            float(collider.width), float(collider.height),
        )

        riding: list[Actor] = []
        pushing: list[Actor] = []
        for index, actor_collider in enumerate(self._actors):
            rider_rect = Rect(
                actor_collider.pos.x,
                actor_collider.pos.y + actor_collider.height - 1.0,
                float(actor_collider.width),
                1.0,
            )
            in_push = pushing_rect.overlaps(actor_collider.rect())
            if riding_rect.overlaps(rider_rect):
                riding.append(Actor(index))
            elif in_push and not actor_collider.squished:
                pushing.append(Actor(index))

            if not in_push:
                actor_collider.squishers.discard(solid)
                if not actor_collider.squishers:
                    actor_collider.squished = False

        collider.collidable = False
        for actor in riding:
            self.move_h(actor, float(move_x))
        for actor in pushing:
            if not self.move_h(actor, float(move_x)):
                squashed = self._actors[actor.index]
                squashed.squished = True
                squashed.squishers.add(solid)
        collider.collidable = True

        if move_x != 0:
            collider.x_remainder -= move_x
        if move_y != 0:
            collider.y_remainder -= move_y
        collider.pos = Vec2(collider.pos.x + move_x, collider.pos.y + move_y)

    def solid_at(self, pos) -> bool:
        return self.tag_at(pos, 1)

    def tag_at(self, pos, tag) -> bool:
        """True when the first non-empty layer cell at `pos` has `tag`, or a solid covers it."""
        for layer in self._layers:
            y = int(pos.y / layer.tile_width)
            x = int(pos.x / layer.tile_height)
            ix = y * layer.width + x
            if 0 <= ix < len(layer.static_colliders) and layer.static_colliders[ix] != Tile.EMPTY:
                return layer.tag == tag

        return any(s.collidable and s.rect().contains(pos) for s in self._solids)

    def collide_solids(self, pos, width, height) -> Tile:
        """Collide a box with tag-1 layers, then with collidable solids."""
        tile = self.collide_tag(1, pos, width, height)
        if tile != Tile.EMPTY:
            return tile
        box = Rect(pos.x, pos.y, float(width), float(height))
        if any(s.collidable and s.rect().overlaps(box) for s in self._solids):
            return Tile.COLLIDER
        return Tile.EMPTY

    def collide_tag(self, tag, pos, width, height) -> Tile:
        """Collide a box with the layers carrying `tag`."""
        for layer in self._layers:
            cells = layer.static_colliders
            layer_width = layer.width
            layer_height = len(cells) // layer_width + 1

            def check(point: Vec2) -> Tile:
                y = int(point.y / layer.tile_width)
                x = int(point.x / layer.tile_height)
                ix = y * layer_width + x
                if (
                    0 <= y < layer_height
                    and 0 <= x < layer_width
                    and 0 <= ix < len(cells)
                    and layer.tag == tag
                    and cells[ix] != Tile.EMPTY
                ):
                    return cells[ix]
                return Tile.EMPTY

            right = pos.x + width - 1.0
            bottom = pos.y + height - 1.0
            tile = Tile.EMPTY
            for corner in (pos, Vec2(right, pos.y), Vec2(right, bottom), Vec2(pos.x, bottom)):
                tile = _combine(tile, check(corner))
            if tile != Tile.EMPTY:
                return tile

            if width > int(layer.tile_width):
                x = pos.x + layer.tile_width
                while x < right:
                    tile = _combine(check(Vec2(x, pos.y)), check(Vec2(x, bottom)))
                    if tile != Tile.EMPTY:
                        return tile
                    x += layer.tile_width

            if height > int(layer.tile_height):
                y = pos.y + layer.tile_height
                while y < bottom:
                    tile = _combine(check(Vec2(pos.x, y)), check(Vec2(right, y)))
                    if tile != Tile.EMPTY:
                        return tile
                    y += layer.tile_height
        return Tile.EMPTY

    def squished(self, actor) -> bool:
        return self._actors[actor.index].squished

    def actor_pos(self, actor) -> Vec2:
        return self._actors[actor.index].pos

    def solid_pos(self, solid) -> Vec2:
        return self._solids[solid.index].pos

    def collide_check(self, actor, pos) -> bool:
        """Would the actor be blocked at `pos`? Jump-through tiles block unless descending."""
        collider = self._actors[actor.index]
        tile = self.collide_solids(pos, collider.width, collider.height)
        if collider.descent:
            return tile in (Tile.SOLID, Tile.COLLIDER)
        return tile in (Tile.SOLID, Tile.COLLIDER, Tile.JUMP_THROUGH)