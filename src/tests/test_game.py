from __future__ import annotations

import logging

from src.flappy.clock import RunPhase, SimulationClock
from src.flappy.game import apply_resize, result_message

W, H = 960, 540


def test_too_short_window_keeps_previous_viewport(caplog):
    sim = SimulationClock(width=W, height=H, seed=4)
    sim.start()
    with caplog.at_level(logging.WARNING, logger="src.flappy.game"):
        assert not apply_resize(sim, W, 300)
    assert (sim.width, sim.height) == (W, H)
    assert "ignoring resize" in caplog.text

    # the run carries on as if nothing happened
    assert sim.tick() is RunPhase.RUNNING


def test_valid_resize_goes_through():
    sim = SimulationClock(width=W, height=H, seed=4)
    assert apply_resize(sim, 1280, 720)
    assert (sim.width, sim.height) == (1280, 720)


def test_result_message_tiers():
    assert result_message(3, new_high=True) == "NEW HIGH SCORE!"
    assert result_message(21, new_high=False) == "AMAZING!"
    assert result_message(11, new_high=False) == "GOOD JOB!"
    assert result_message(10, new_high=False) == "Keep practicing!"
