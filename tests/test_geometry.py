import math

import pytest

from quadplay.geometry import Rect, Vec2


def test_vector_arithmetic_round_trip():
    a = Vec2(1.5, -2.0)
    b = Vec2(3.0, 4.0)
    assert (a + b) - b == a
    assert -(-a) == a
    assert (a * 2) / 2 == a
    assert 2 * a == a * 2


def test_componentwise_multiplication():
    assert Vec2(2.0, 3.0) * Vec2(4.0, 5.0) == Vec2(8.0, 15.0)


def test_length_of_pythagorean_triple():
    assert Vec2(3.0, 4.0).length() == pytest.approx(5.0)


def test_normalize_gives_unit_length_same_direction():
    v = Vec2(-7.0, 2.5)
    n = v.normalize()
    assert n.length() == pytest.approx(1.0)
    assert math.atan2(n.y, n.x) == pytest.approx(math.atan2(v.y, v.x))


def test_normalize_zero_vector_raises():
    with pytest.raises(ValueError):
        Vec2(0.0, 0.0).normalize()


def test_unpacking():
    x, y = Vec2(1.0, 2.0)
    assert (x, y) == (1.0, 2.0)


def test_rect_edges():
    r = Rect(1.0, 2.0, 3.0, 4.0)
    assert (r.left, r.top) == (1.0, 2.0)
    assert r.right == r.x + r.w
    assert r.bottom == r.y + r.h


def test_overlaps_is_symmetric_and_inclusive_on_edges():
    a = Rect(0.0, 0.0, 10.0, 10.0)
    touching = Rect(10.0, 0.0, 5.0, 5.0)
    apart = Rect(10.5, 0.0, 5.0, 5.0)
    assert a.overlaps(touching) and touching.overlaps(a)
    assert not a.overlaps(apart) and not apart.overlaps(a)


def test_overlaps_inner_rect():
    outer = Rect(0.0, 0.0, 10.0, 10.0)
    inner = Rect(2.0, 2.0, 1.0, 1.0)
    assert outer.overlaps(inner)
    assert inner.overlaps(outer)


def test_contains_excludes_right_and_bottom_edges():
    r = Rect(0.0, 0.0, 8.0, 8.0)
    assert r.contains(Vec2(0.0, 0.0))
    assert r.contains(Vec2(7.9, 7.9))
    assert not r.contains(Vec2(8.0, 4.0))
    assert not r.contains(Vec2(4.0, 8.0))
    assert not r.contains(Vec2(-0.1, 4.0))