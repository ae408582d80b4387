import json

import pytest

from graph import UnknownNodeError
from pathfinding import StepKind, compute_shortest_path
from playback import Recorder, SPEED_PRESETS, Stepper, StepperState


@pytest.fixture
def trace(cycle_graph):
    return compute_shortest_path(cycle_graph, "A", "C")


# ---------------------------------------------------------------------------
# Stepper
# ---------------------------------------------------------------------------
def test_stepper_starts_idle():
    stepper = Stepper()

    assert stepper.state is StepperState.IDLE
    assert stepper.current_step is None
    assert stepper.next_step() is False


def test_start_shows_first_step(trace):
    stepper = Stepper()
    stepper.start(trace)

    assert stepper.state is StepperState.PAUSED
    assert stepper.current_idx == 0
    assert stepper.current_step.kind is StepKind.INITIAL


def test_start_rejects_empty_trace():
    with pytest.raises(ValueError):
        Stepper().start([])


def test_walking_to_the_end_finishes(trace):
    stepper = Stepper()
    stepper.start(trace)

    moves = 0
    while stepper.next_step():
        moves += 1

    assert moves == len(trace) - 1
    assert stepper.is_finished
    assert stepper.current_step.is_final


def test_prev_step_leaves_finished(trace):
    stepper = Stepper()
    stepper.start(trace)
    stepper.jump_to_end()

    assert stepper.prev_step() is True
    assert stepper.state is StepperState.PAUSED
    assert stepper.current_idx == len(trace) - 2


def test_prev_step_at_start(trace):
    stepper = Stepper()
    stepper.start(trace)

    assert stepper.prev_step() is False
    assert stepper.current_idx == 0


def test_goto_step_bounds(trace):
    stepper = Stepper()
    stepper.start(trace)

    assert stepper.goto_step(5) is True
    assert stepper.current_idx == 5
    assert stepper.goto_step(len(trace)) is False
    assert stepper.goto_step(-1) is False
    assert stepper.current_idx == 5


def test_tick_advances_at_speed(trace):
    stepper = Stepper(speed="medium")
    stepper.start(trace)
    stepper.play(now=100.0)

    assert stepper.tick(now=100.2) is False
    assert stepper.tick(now=100.5) is True
    assert stepper.current_idx == 1
    assert stepper.tick(now=100.7) is False


def test_tick_does_nothing_when_paused(trace):
    stepper = Stepper()
    stepper.start(trace)

    assert stepper.tick(now=1000.0) is False
    assert stepper.current_idx == 0


def test_playing_through_stops_at_the_end(trace):
    stepper = Stepper()
    stepper.start(trace)
    stepper.play(now=0.0)

    now = 0.0
    while stepper.is_playing:
        now += stepper.speed
        stepper.tick(now=now)

    assert stepper.is_finished
    assert stepper.current_idx == len(trace) - 1


def test_play_after_finish_replays_from_start(trace):
    stepper = Stepper()
    stepper.start(trace)
    stepper.jump_to_end()

    stepper.toggle_play(now=0.0)

    assert stepper.is_playing
    assert stepper.current_idx == 0


def test_rewind_returns_to_first_step(trace):
    seen = []
    stepper = Stepper(on_step=seen.append)
    stepper.start(trace)
    stepper.jump_to_end()

    stepper.rewind()

    assert stepper.current_idx == 0
    assert stepper.state is StepperState.PAUSED
    assert seen[-1].kind is StepKind.INITIAL


def test_rewind_without_trace_is_a_no_op():
    stepper = Stepper()

    stepper.rewind()

    assert stepper.state is StepperState.IDLE
    assert stepper.current_idx == -1


def test_toggle_play_pauses(trace):
    stepper = Stepper()
    stepper.start(trace)
    stepper.toggle_play(now=0.0)
    stepper.toggle_play(now=0.0)

    assert stepper.state is StepperState.PAUSED


def test_on_step_callback(trace):
    seen = []
    stepper = Stepper(on_step=seen.append)
    stepper.start(trace)
    stepper.next_step()
    stepper.prev_step()

    assert [s.step_number for s in seen] == [0, 1, 0]


def test_reset(trace):
    stepper = Stepper()
    stepper.start(trace)
    stepper.reset()

    assert stepper.state is StepperState.IDLE
    assert stepper.total_steps == 0


def test_speed_presets():
    stepper = Stepper()

    stepper.set_speed("turbo")
    assert stepper.speed == SPEED_PRESETS["turbo"]
    stepper.set_speed("warp")
    assert stepper.speed == SPEED_PRESETS["medium"]
    stepper.set_speed_value(0.0)
    assert stepper.speed == 0.02


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
def test_recorder_metrics(cycle_graph):
    rec = Recorder()
    rec.start(cycle_graph, "A", "C")
    metrics = rec.run_to_completion()

    assert metrics.nodes_visited == 3
    assert metrics.neighbors_checked == 3
    assert metrics.distance_updates == 3
    assert metrics.total_steps == 13
    assert metrics.path_length == 2
    assert metrics.path_cost == 3
    assert metrics.path_found is True
    assert rec.route.path == ("A", "B", "C")
    assert rec.get_metrics() is metrics


def test_recorder_without_path(split_graph):
    rec = Recorder()
    rec.start(split_graph, "A", "D")
    metrics = rec.run_to_completion()

    assert metrics.path_found is False
    assert metrics.path_cost == 0.0
    assert metrics.path_length == 0
    assert rec.route.distance is None


def test_recorder_needs_start():
    with pytest.raises(RuntimeError):
        Recorder().run_to_completion()


def test_recorder_rejects_unknown_nodes(cycle_graph):
    with pytest.raises(UnknownNodeError):
        Recorder().start(cycle_graph, "A", "nowhere")


def test_recorder_export_is_json(split_graph):
    rec = Recorder()
    rec.start(split_graph, "A", "D")
    rec.run_to_completion()

    exported = json.loads(json.dumps(rec.export()))

    assert exported["route"] == {"path": [], "distance": None, "found": False}
    assert len(exported["steps"]) == rec.metrics.total_steps
    assert exported["steps"][-1]["kind"] == "no-path"


def test_recorder_stepper(cycle_graph):
    rec = Recorder()
    rec.start(cycle_graph, "A", "C")
    rec.run_to_completion()

    stepper = rec.stepper(speed="slow")

    assert stepper.total_steps == 13
    assert stepper.speed == SPEED_PRESETS["slow"]
