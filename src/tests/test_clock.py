from __future__ import annotations

import pytest

from src.flappy.clock import RunPhase, SimulationClock
from src.flappy.config import ConfigError, SimConfig

W, H = 960, 540


def _running(**overrides) -> SimulationClock:
    sim = SimulationClock(SimConfig(**overrides), width=W, height=H, seed=5)
    sim.start()
    return sim


def _floating(**overrides) -> SimulationClock:
    """No gravity and a gap as tall as the screen: the body can never die."""
    cfg = dict(gravity=0.0, grace_ticks=0, gap=H, min_height=0)
    cfg.update(overrides)
    return _running(**cfg)


def _crash(sim: SimulationClock):
    """End the run for real: park the first obstacle on the body with its gap at the very bottom."""
    o = sim.stream.obstacles[0]
    o.x = sim.body.x - 10
    o.top_height = sim.height - o.gap
    sim.tick()


def test_idle_ignores_ticks_and_jumps():
    sim = SimulationClock(width=W, height=H, seed=1)
    vy0 = sim.body.vy
    assert sim.phase is RunPhase.IDLE
    assert not sim.jump()
    assert sim.tick() is RunPhase.IDLE
    assert sim.body.vy == vy0
    assert len(sim.stream) == 0
    assert sim.state.elapsed_ticks == 0


def test_start_resets_everything_and_spawns_first_obstacle():
    sim = _running()
    assert sim.phase is RunPhase.RUNNING
    assert sim.state.is_running
    assert sim.state.score == 0
    assert sim.state.grace_ticks == sim.config.grace_ticks
    assert sim.body.y == H / 2 and sim.body.vy == 0.0
    assert [o.x for o in sim.stream] == [W]


def test_start_while_running_is_a_no_op():
    sim = _running()
    for _ in range(5):
        sim.tick()
    assert not sim.start()
    assert sim.state.elapsed_ticks == 5


def test_grace_window_then_gravity():
    sim = _running(grace_ticks=30)
    for _ in range(29):
        sim.tick()
        assert sim.body.y == H / 2
        assert sim.body.vy == 0.0
    sim.tick()
    assert sim.state.grace_ticks == 0
    assert sim.body.vy == pytest.approx(sim.config.gravity)


def test_jump_while_running():
    sim = _running(grace_ticks=0)
    assert sim.jump()
    assert sim.body.vy == sim.config.jump_force
    sim.tick()
    assert sim.body.vy == pytest.approx(sim.config.jump_force + sim.config.gravity)


def test_obstacles_scroll_at_game_speed():
    sim = _running()
    sim.tick()
    assert sim.stream.obstacles[0].x == W - sim.config.game_speed
    assert sim.state.elapsed_ticks == 1


def test_bounds_end_the_run_and_freeze_state():
    sim = _running(grace_ticks=0)
    ended = []
    sim.on_end(ended.append)
    sim.body.y = -50.0

    assert sim.tick() is RunPhase.ENDED
    assert sim.state.end_cause == "bounds"
    assert not sim.state.is_running
    assert len(ended) == 1

    frozen = (sim.body.y, sim.body.vy, sim.state.score, [o.x for o in sim.stream])
    for _ in range(10):
        sim.tick()
        assert not sim.jump()
    assert (sim.body.y, sim.body.vy, sim.state.score, [o.x for o in sim.stream]) == frozen
    assert len(ended) == 1


def test_obstacle_hit_ends_the_run():
    sim = _running(grace_ticks=0)
    o = sim.stream.obstacles[0]
    o.x = sim.body.x - 10
    o.top_height = 300          # gap 300..500, body sits at 270..300
    sim.tick()
    assert sim.phase is RunPhase.ENDED
    assert sim.state.end_cause == "obstacle"
    # the stream is kept for the frozen frame
    assert len(sim.stream) >= 1


def test_each_pass_scores_exactly_one_point():
    sim = _floating(game_speed=10.0)
    seen = []
    sim.on_pass(seen.append)
    for _ in range(300):
        sim.tick()
    assert sim.phase is RunPhase.RUNNING
    assert sim.state.score > 0
    assert seen == list(range(1, sim.state.score + 1))
    for o in sim.stream:
        assert o.passed == (sim.body.x > o.x + o.width)


def test_steady_stream_spacing():
    sim = _floating()
    for _ in range(400):
        sim.tick()
    xs = [o.x for o in sim.stream]
    assert len(xs) >= 2
    for a, b in zip(xs, xs[1:]):
        assert b - a == pytest.approx(sim.config.spacing)


def test_restart_after_end():
    sim = _running(grace_ticks=0)
    sim.state.score = 4
    sim.body.y = H + 10
    sim.tick()
    assert sim.phase is RunPhase.ENDED
    assert sim.final_score == 4

    assert sim.start()
    assert sim.phase is RunPhase.RUNNING
    assert sim.state.score == 0
    assert sim.state.end_cause is None
    assert [o.x for o in sim.stream] == [W]


def test_new_high_score_counts_ties():
    sim = _running()
    sim.state.score = 5
    assert sim.is_new_high_score(4)
    assert sim.is_new_high_score(5)
    assert not sim.is_new_high_score(6)


def test_seeded_runs_repeat():
    a = _running()
    b = _running()
    assert a.stream.obstacles[0].top_height == b.stream.obstacles[0].top_height
    _crash(b)
    assert b.phase is RunPhase.ENDED
    b.start(seed=5)
    assert b.stream.obstacles[0].top_height == a.stream.obstacles[0].top_height


def test_resize_applies_to_next_spawn_without_reset():
    sim = _running()
    sim.tick()
    y = sim.body.y
    sim.resize(1280, 720)
    assert sim.body.y == y
    _, bottom = sim.snapshot().barriers[0]
    assert bottom.bottom == 720
    _crash(sim)
    assert sim.phase is RunPhase.ENDED
    sim.start()
    assert [o.x for o in sim.stream] == [1280]
    assert sim.body.y == 360


def test_bad_geometry_is_rejected_up_front():
    with pytest.raises(ConfigError):
        SimulationClock(width=W, height=350)
    sim = SimulationClock(width=W, height=H)
    with pytest.raises(ConfigError):
        sim.resize(W, 300)
    with pytest.raises(ConfigError):
        SimConfig(game_speed=0).validate(H)


def test_snapshot_is_a_render_view():
    sim = _running()
    snap = sim.snapshot()
    assert snap.phase is RunPhase.RUNNING
    assert snap.score == 0
    assert snap.body_rect == sim.body.rect
    assert len(snap.barriers) == 1
    top, bottom = snap.barriers[0]
    assert top.left == W and bottom.bottom == H
