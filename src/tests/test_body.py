from __future__ import annotations

import pytest

from src.flappy.body import Body
from src.flappy.config import GRAVITY, JUMP_FORCE, HEIGHT, BODY_H


def test_gravity_adds_constant_each_tick_after_grace():
    b = Body(y=100.0)
    prev = b.vy
    for _ in range(20):
        b.integrate(HEIGHT, grace_ticks=0)
        assert b.vy > prev
        assert b.vy - prev == pytest.approx(GRAVITY)
        prev = b.vy


def test_position_follows_updated_velocity():
    b = Body(y=100.0, vy=2.0)
    b.integrate(HEIGHT)
    assert b.vy == pytest.approx(2.0 + GRAVITY)
    assert b.y == pytest.approx(100.0 + 2.0 + GRAVITY)


def test_grace_holds_body_at_mid_screen():
    b = Body(y=42.0, vy=7.0)
    for grace in (3, 2, 1):
        b.integrate(HEIGHT, grace_ticks=grace)
        assert b.vy == 0.0
        assert b.y == HEIGHT / 2


def test_jump_overwrites_velocity():
    for vy in (-30.0, 0.0, 12.5):
        b = Body(y=200.0, vy=vy)
        b.jump()
        assert b.vy == JUMP_FORCE
    b.jump()
    b.jump()
    assert b.vy == JUMP_FORCE


def test_out_of_bounds_edges():
    b = Body(y=0.0)
    assert not b.is_out_of_bounds(HEIGHT)
    b.y = -0.1
    assert b.is_out_of_bounds(HEIGHT)
    b.y = HEIGHT - BODY_H           # bottom exactly on the screen edge
    assert not b.is_out_of_bounds(HEIGHT)
    b.y = HEIGHT - BODY_H + 0.5
    assert b.is_out_of_bounds(HEIGHT)


def test_reset_restores_start_pose_and_keeps_x():
    b = Body(y=13.0, vy=-4.0, angle=2.0)
    x0 = b.x
    b.reset(600)
    assert (b.y, b.vy, b.angle) == (300.0, 0.0, 0.0)
    assert b.x == x0


def test_rect_tracks_float_position():
    b = Body(x=150.0, y=99.7, width=30, height=30)
    assert b.rect.topleft == (150, 99)
    assert b.rect.size == (30, 30)
