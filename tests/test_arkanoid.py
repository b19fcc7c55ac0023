import pytest

from quadplay.arkanoid import BLOCKS_H, BLOCKS_W, SCR_W, Arkanoid


def test_starts_with_full_wall_and_stuck_ball():
    game = Arkanoid()
    assert game.remaining_blocks == BLOCKS_W * BLOCKS_H
    assert game.stick is True


def test_stuck_ball_follows_platform():
    game = Arkanoid()
    game.update(0.1, left=False, right=True, space=False)
    assert game.ball_x == game.platform_x
    assert game.stick is True


def test_space_releases_ball_and_ball_moves():
    game = Arkanoid()
    game.update(0.0, left=False, right=False, space=True)
    assert game.stick is False
    x, y = game.ball_x, game.ball_y
    game.update(0.1, left=False, right=False, space=False)
    assert game.ball_x == pytest.approx(x + game.dx * 0.1)
    assert game.ball_y == pytest.approx(y + game.dy * 0.1)


def test_platform_moves_left():
    game = Arkanoid()
    start = game.platform_x
    game.update(0.5, left=True, right=False, space=False)
    assert game.platform_x < start


def test_platform_stops_at_right_edge():
    game = Arkanoid()
    game.platform_x = SCR_W - game.platform_width / 2.0
    before = game.platform_x
    game.update(1.0, left=False, right=True, space=False)
    assert game.platform_x == before


def test_block_hit_removes_block_and_reverses_ball():
    game = Arkanoid()
    game.stick = False
    game.ball_x, game.ball_y = 0.5, 0.3
    dy = game.dy
    game.update(0.0, left=False, right=False, space=False)
    assert game.blocks[0][0] is False
    assert game.dy == -dy
    assert game.remaining_blocks == BLOCKS_W * BLOCKS_H - 1


def test_ball_lost_below_sticks_again():
    game = Arkanoid()
    game.stick = False
    game.ball_x = 1.0
    game.ball_y = 20.5
    game.platform_x = 15.0
    game.update(0.0, left=False, right=False, space=False)
    assert game.stick is True
    assert game.ball_y == 10.0
    assert game.dy < 0


def test_side_wall_bounce():
    game = Arkanoid()
    game.stick = False
    game.ball_x, game.ball_y = SCR_W + 0.1, 12.0
    dx = game.dx
    game.update(0.0, left=False, right=False, space=False)
    assert game.dx == -dx


def test_block_rect_contains_its_own_corner():
    rect = Arkanoid.block_rect(3, 2)
    assert rect.contains(type(rect.__class__)("V", (), {}) and __import_vec(rect.x, rect.y))


def __import_vec(x, y):
    from quadplay.geometry import Vec2

    return Vec2(x, y)