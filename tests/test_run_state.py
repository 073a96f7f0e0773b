from __future__ import annotations

from runfolio.game.run_state import RunPhase, RunState
from runfolio.settings import RunTuning


def _state() -> RunState:
    return RunState.from_tuning(RunTuning())


def test_lane_is_clamped_after_repeated_steps() -> None:
    st = _state()
    for _ in range(10):
        st.step_right()
    assert st.player_lane == 3.0
    for _ in range(10):
        st.step_left()
        assert -3.0 <= st.player_lane <= 3.0
    assert st.player_lane == -3.0


def test_single_step_moves_one_lane() -> None:
    st = _state()
    st.step_left()
    assert st.player_lane == -1.0
    st.step_right()
    st.step_right()
    assert st.player_lane == 1.0


def test_advance_accumulates_distance_and_forward_position() -> None:
    st = _state()
    st.advance()
    st.advance()
    assert abs(st.distance_traveled - 0.4) < 1e-9
    assert abs(st.character_forward - 0.4) < 1e-9
    assert st.speed == st.base_speed


def test_speed_ramps_once_per_hundred_units() -> None:
    st = _state()
    st.distance_traveled = 99.9
    assert st.advance() is True
    assert abs(st.speed - 0.21) < 1e-9

    # Still inside the 100..199 band: no re-trigger even though floor(distance) == 100.
    assert st.advance() is False
    assert st.advance() is False
    assert abs(st.speed - 0.21) < 1e-9

    st.distance_traveled = 199.95
    assert st.advance() is True
    assert abs(st.speed - 0.22) < 1e-9


def test_speed_never_decreases_while_running() -> None:
    st = _state()
    last = st.speed
    for _ in range(6000):
        st.advance()
        assert st.speed >= last
        last = st.speed
    assert st.speed > st.base_speed


def test_end_and_reset_values() -> None:
    st = _state()
    st.distance_traveled = 123.0
    st.character_forward = 123.0
    st.speed = 0.5
    st.speed_band = 1
    st.player_lane = 2.0
    st.end()
    assert st.phase is RunPhase.ENDED
    assert st.game_over is True

    st.reset_values()
    assert st.phase is RunPhase.RUNNING
    assert st.game_over is False
    assert st.distance_traveled == 0.0
    assert st.character_forward == 0.0
    assert st.speed == st.base_speed
    assert st.speed_band == 0
    assert st.player_lane == 2.0
