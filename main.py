"""
main.py — Route Explainer Flask App
===================================
JSON API in front of the shortest-path engine.  A front end draws the
map, lets the user pick two points, runs Dijkstra and replays the trace
step by step.

Routes:
  GET  /api/graph                 – the map (nodes, edges, weights)
  GET  /api/pseudocode            – pseudocode lines for the side panel
  POST /api/config/source_target  – pick start / end
  POST /api/config/speed          – playback speed preset
  POST /api/run                   – run the engine, show step 0
  POST /api/step/next             – advance one step
  POST /api/step/prev             – rewind one step
  POST /api/step/goto             – jump to step N
  POST /api/step/play             – toggle play/pause
  GET  /api/state                 – current session state (for polling)
  POST /api/style                 – how to draw the final route

State management:
  The Flask session holds only the selection and the playback cursor:
    • source / target
    • has_run
    • current_step / is_playing
    • speed
  The trace itself is never stored.  The engine is deterministic, so the
  same (source, target) always gives the same trace; it is recomputed on
  demand and memoised per process.
"""

import logging
from dataclasses import asdict
from functools import lru_cache

from flask import Flask, jsonify, request, session

import config
from graph import GraphError
from graph.samples import load_sample
from pathfinding import PSEUDOCODE
from playback import Recorder, Stepper, StepperState, SPEED_PRESETS
from styling import DEFAULT_STYLE, StyleRequest, complexity_label, get_style_advisor

logger = logging.getLogger(__name__)


app = Flask(__name__)
app.secret_key = config.SECRET_KEY

GRAPH = load_sample(config.DEFAULT_MAP)
style_advisor = get_style_advisor()


# ---------------------------------------------------------------------------
# Session State Helpers
# ---------------------------------------------------------------------------
def get_state() -> dict:
    """Return current session state as a dict."""
    return {
        "source":       session.get("source"),
        "target":       session.get("target"),
        "has_run":      session.get("has_run", False),
        "current_step": session.get("current_step", 0),
        "is_playing":   session.get("is_playing", False),
        "speed":        session.get("speed", config.DEFAULT_SPEED),
    }


def set_state(**kwargs):
    for k, v in kwargs.items():
        session[k] = v


def clear_run():
    set_state(has_run=False, current_step=0, is_playing=False)


@lru_cache(maxsize=128)
def recorded_run(source: str, target: str) -> Recorder:
    rec = Recorder()
    rec.start(GRAPH, source, target)
    rec.run_to_completion()
    return rec


def session_stepper() -> Stepper:
    """Stepper positioned where this session left off.  400 if nothing ran yet."""
    state = get_state()
    if not state["has_run"]:
        raise NoRunError()
    rec = recorded_run(state["source"], state["target"])
    stepper = rec.stepper(speed=state["speed"])
    stepper.goto_step(min(state["current_step"], stepper.total_steps - 1))
    if state["is_playing"] and not stepper.is_finished:
        stepper.play()
    return stepper


def save_stepper(stepper: Stepper):
    set_state(current_step=stepper.current_idx, is_playing=stepper.is_playing)


def json_body() -> dict:
    """Request JSON as a dict.  A missing body is {}; anything else is a 400."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise BadRequestError("Request body must be a JSON object")
    return data


def step_payload(stepper: Stepper) -> dict:
    step = stepper.current_step
    return {
        "step":         step.to_dict() if step else None,
        "current_step": stepper.current_idx,
        "total_steps":  stepper.total_steps,
        "status":       stepper.state.value,
    }


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------
class NoRunError(Exception):
    pass


class BadRequestError(Exception):
    pass


@app.errorhandler(GraphError)
def handle_graph_error(exc):
    return jsonify({"error": str(exc)}), 400


@app.errorhandler(NoRunError)
def handle_no_run(exc):
    return jsonify({"error": "Run the algorithm first"}), 400


@app.errorhandler(BadRequestError)
def handle_bad_request(exc):
    return jsonify({"error": str(exc)}), 400


# ---------------------------------------------------------------------------
# API: Map
# ---------------------------------------------------------------------------
@app.route("/api/graph")
def api_graph():
    return jsonify({
        "name":       config.DEFAULT_MAP,
        "width":      config.MAP_WIDTH,
        "height":     config.MAP_HEIGHT,
        "complexity": complexity_label(GRAPH),
        **GRAPH.to_dict(),
    })


@app.route("/api/pseudocode")
def api_pseudocode():
    return jsonify({"lines": PSEUDOCODE})


# ---------------------------------------------------------------------------
# API: Config Changes
# ---------------------------------------------------------------------------
@app.route("/api/config/source_target", methods=["POST"])
def api_config_source_target():
    data = json_body()
    state = get_state()
    src = data.get("source", state["source"])
    tgt = data.get("target", state["target"])

    for node_id in (src, tgt):
        if node_id is not None and not isinstance(node_id, str):
            raise BadRequestError("Node ids must be strings")
        if node_id is not None and not GRAPH.has_node(node_id):
            return jsonify({"error": f"Unknown node: '{node_id}'"}), 400
    if src is not None and src == tgt:
        return jsonify({"error": "End node cannot be the same as the start node"}), 400

    set_state(source=src, target=tgt)
    clear_run()
    return jsonify({"source": src, "target": tgt})


@app.route("/api/config/speed", methods=["POST"])
def api_config_speed():
    speed = json_body().get("speed", "medium")
    if not isinstance(speed, str) or speed not in SPEED_PRESETS:
        return jsonify({"error": f"Unknown speed: {speed!r}"}), 400
    set_state(speed=speed)
    return jsonify({"speed": speed, "seconds": SPEED_PRESETS[speed]})


# ---------------------------------------------------------------------------
# API: Run Algorithm
# ---------------------------------------------------------------------------
@app.route("/api/run", methods=["POST"])
def api_run():
    state = get_state()
    source, target = state["source"], state["target"]
    if not source or not target:
        return jsonify({"error": "Set source and target first"}), 400

    rec = recorded_run(source, target)
    set_state(has_run=True, current_step=0, is_playing=True)

    stepper = session_stepper()
    payload = step_payload(stepper)
    payload["metrics"] = asdict(rec.metrics)
    payload["route"] = rec.route.to_dict()
    return jsonify(payload)


# ---------------------------------------------------------------------------
# API: Step Navigation
# ---------------------------------------------------------------------------
@app.route("/api/step/next", methods=["POST"])
def api_step_next():
    stepper = session_stepper()
    if not stepper.next_step():
        save_stepper(stepper)
        return jsonify({"error": "Already at last step"}), 400
    save_stepper(stepper)
    return jsonify(step_payload(stepper))


@app.route("/api/step/prev", methods=["POST"])
def api_step_prev():
    stepper = session_stepper()
    if not stepper.prev_step():
        return jsonify({"error": "Already at first step"}), 400
    save_stepper(stepper)
    return jsonify(step_payload(stepper))


@app.route("/api/step/goto", methods=["POST"])
def api_step_goto():
    stepper = session_stepper()
    idx = json_body().get("index", 0)
    if not isinstance(idx, int) or not stepper.goto_step(idx):
        return jsonify({"error": "Invalid step index"}), 400
    save_stepper(stepper)
    return jsonify(step_payload(stepper))


@app.route("/api/step/play", methods=["POST"])
def api_step_play():
    stepper = session_stepper()
    stepper.toggle_play()
    save_stepper(stepper)
    return jsonify({**step_payload(stepper), "is_playing": stepper.is_playing})


@app.route("/api/state")
def api_state():
    state = get_state()
    status = StepperState.IDLE.value
    total = 0
    if state["has_run"]:
        stepper = session_stepper()
        status, total = stepper.state.value, stepper.total_steps
    return jsonify({**state, "status": status, "total_steps": total})


# ---------------------------------------------------------------------------
# API: Route Style
# ---------------------------------------------------------------------------
@app.route("/api/style", methods=["POST"])
def api_style():
    state = get_state()
    if not state["has_run"]:
        raise NoRunError()
    route = recorded_run(state["source"], state["target"]).route
    if not route.found:
        return jsonify({"style": DEFAULT_STYLE.to_dict(), "advisor": "default"})

    occlusion = bool(json_body().get("occlusion", False))
    style_request = StyleRequest(
        map_width=config.MAP_WIDTH,
        map_height=config.MAP_HEIGHT,
        path=route.path,
        complexity=complexity_label(GRAPH),
        occlusion=occlusion,
    )
    style = style_advisor.advise(style_request)
    return jsonify({"style": style.to_dict(), "advisor": style_advisor.name})


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Route Explainer on http://localhost:5000 (map=%s, style=%s)",
                config.DEFAULT_MAP, style_advisor.name)
    app.run(debug=True, host="0.0.0.0", port=5000)
