from __future__ import annotations

from src.flappy.body import Body
from src.flappy.stream import ObstacleStream

W, H, S = 960, 540, 320


def _stream(*xs: float) -> ObstacleStream:
    st = ObstacleStream(seed=3)
    for x in xs:
        st.spawn(W, H, S).x = x
    return st


def test_first_spawn_at_screen_edge():
    st = ObstacleStream(seed=1)
    o = st.spawn_if_needed(W, H, S)
    assert o is not None and o.x == W
    assert len(st) == 1


def test_no_spawn_until_last_has_moved_a_spacing():
    st = _stream(W - S)            # exactly at the threshold: not yet
    assert st.spawn_if_needed(W, H, S) is None
    st.last.x = W - S - 0.5
    assert st.spawn_if_needed(W, H, S) is not None
    assert len(st) == 2


def test_next_spawn_is_one_spacing_behind_last():
    st = _stream(500)
    o = st.spawn_if_needed(W, H, S)
    assert o is not None and o.x == 820
    # independent of the current screen width
    st = _stream(500)
    assert st.spawn_if_needed(2000, H, S).x == 820


def test_tick_moves_everything_left():
    st = _stream(900, 600)
    st.tick(3)
    assert [o.x for o in st] == [897, 597]


def test_tick_removes_several_off_screen_in_one_pass():
    st = _stream(-100, -90, 500)
    keep = st.obstacles[2]
    removed = st.tick(3)
    assert removed == 2
    assert len(st) == 1
    assert st.obstacles[0] is keep


def test_recycled_obstacle_never_scores_or_collides():
    st = _stream(-74)
    o = st.obstacles[0]
    st.tick(2)
    assert len(st) == 0
    body = Body(x=150, y=0)
    assert st.check_and_score(body, lambda: None) == 0
    assert not st.check_collision(body)
    assert not o.passed


def test_score_at_most_once_per_obstacle():
    st = _stream(70, 700)          # first trailing edge at 145 < body.x
    body = Body(x=150, y=200)
    hits = []
    assert st.check_and_score(body, lambda: hits.append(1)) == 1
    assert st.check_and_score(body, lambda: hits.append(1)) == 0
    assert len(hits) == 1
    assert st.obstacles[0].passed and not st.obstacles[1].passed


def test_no_score_until_body_clears_trailing_edge():
    st = _stream(75)               # trailing edge at 150 == body.x
    body = Body(x=150, y=200)
    assert st.check_and_score(body, lambda: None) == 0
    st.tick(0.5)
    assert st.check_and_score(body, lambda: None) == 1


def test_check_collision_any_obstacle():
    st = _stream(900, 140)
    st.obstacles[1].top_height = 300      # gap 300..500, body is above it
    body = Body(x=150, y=100, width=30, height=30)
    assert st.check_collision(body)
    st.obstacles[1].top_height = 100
    assert not st.check_collision(body)


def test_next_ahead_skips_cleared_obstacles():
    st = _stream(50, 400)
    body = Body(x=150, y=200)
    assert st.next_ahead(body) is st.obstacles[1]
    st.obstacles[0].x = 100               # trailing edge 175, still overlapping
    assert st.next_ahead(body) is st.obstacles[0]
    st.clear()
    assert st.next_ahead(body) is None


def test_same_seed_same_heights():
    a, b = ObstacleStream(seed=99), ObstacleStream(seed=99)
    for _ in range(5):
        assert a.spawn(W, H, S).top_height == b.spawn(W, H, S).top_height
    assert a.seed == 99


def test_unseeded_stream_records_its_seed():
    st = ObstacleStream()
    assert isinstance(st.seed, int)
