"""
recorder.py — Run Recorder & Analytics
========================================
Records a complete engine run (all Steps), then computes the numbers
the Analytics panel shows.

Usage:
    rec = Recorder()
    rec.start(graph=g, source="A", target="F")
    rec.run_to_completion()          # runs the engine
    metrics = rec.get_metrics()      # the analytics card
    rec.export()                     # JSON-safe snapshot for save/replay
"""

import logging
import time
from dataclasses import asdict, dataclass
from typing import Any, Callable, Dict, List, Optional

from graph import Graph
from pathfinding import Route, Step, StepKind, check_endpoints, compute_shortest_path
from playback.stepper import Stepper

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Metrics dataclass: what the Analytics panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    source:            str   = ""
    target:            str   = ""
    nodes_visited:     int   = 0
    neighbors_checked: int   = 0
    distance_updates:  int   = 0
    total_steps:       int   = 0          # number of Steps emitted
    path_length:       int   = 0          # number of edges on the final path
    path_cost:         float = 0.0        # total weight of the final path
    path_found:        bool  = False
    wall_time_ms:      float = 0.0        # wall-clock time of the engine run


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        steps   : Full list of Steps from the run.
        metrics : Computed RunMetrics (available after run_to_completion).
        route   : The Route read off the terminal step.
    """

    def __init__(self):
        self.steps:   List[Step]           = []
        self.metrics: Optional[RunMetrics] = None
        self.route:   Optional[Route]      = None

        self._graph:   Optional[Graph] = None
        self._source:  str             = ""
        self._target:  str             = ""

    # ------------------------------------------------------------------
    # Setup & run
    # ------------------------------------------------------------------
    def start(self, graph: Graph, source: str, target: str) -> None:
        """Remember what to run.  Unknown ids fail here, not mid-run."""
        check_endpoints(graph, source, target)
        self._graph   = graph
        self._source  = source
        self._target  = target
        self.steps    = []
        self.metrics  = None
        self.route    = None

    def run_to_completion(self) -> RunMetrics:
        """Run the engine, record every step, compute metrics."""
        if self._graph is None:
            raise RuntimeError("Call start() first.")

        started = time.monotonic()
        self.steps = compute_shortest_path(self._graph, self._source, self._target)
        wall_ms = (time.monotonic() - started) * 1000

        self.route   = Route.from_steps(self.steps)
        self.metrics = self._compute_metrics(wall_ms)
        logger.info(
            "run %s → %s: %d steps, path_found=%s",
            self._source, self._target, len(self.steps), self.route.found,
        )
        return self.metrics

    def get_metrics(self) -> Optional[RunMetrics]:
        return self.metrics

    def stepper(self, on_step: Optional[Callable[[Step], None]] = None, speed: str = "medium") -> Stepper:
        """A Stepper loaded with this run's trace."""
        if not self.steps:
            raise RuntimeError("Call run_to_completion() first.")
        stepper = Stepper(on_step=on_step, speed=speed)
        stepper.start(self.steps)
        return stepper

    # ------------------------------------------------------------------
    # Export (serialisable snapshot)
    # ------------------------------------------------------------------
    def export(self) -> Dict[str, Any]:
        return {
            "source":  self._source,
            "target":  self._target,
            "graph":   self._graph.to_dict() if self._graph else {},
            "metrics": asdict(self.metrics) if self.metrics else {},
            "route":   self.route.to_dict() if self.route else {},
            "steps":   [s.to_dict() for s in self.steps],
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _compute_metrics(self, wall_ms: float) -> RunMetrics:
        last  = self.steps[-1]
        route = self.route
        kinds = [s.kind for s in self.steps]

        return RunMetrics(
            source=self._source,
            target=self._target,
            nodes_visited=len(last.visited),
            neighbors_checked=kinds.count(StepKind.NEIGHBOR),
            distance_updates=kinds.count(StepKind.UPDATE),
            total_steps=len(self.steps),
            path_length=route.hops,
            path_cost=route.distance if route.found else 0.0,
            path_found=route.found,
            wall_time_ms=round(wall_ms, 2),
        )
