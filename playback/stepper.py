"""
stepper.py — Step-by-Step Playback
==================================
The Stepper is the ONLY object a UI interacts with while replaying a run.
It holds the finished trace and exposes a play/pause/next/prev/speed API
over it.  The engine has already done all the work; playing back never
recomputes anything.

State machine:
    IDLE     →  start()            →  PAUSED
    PAUSED   →  play()             →  PLAYING
    PLAYING  →  pause()            →  PAUSED
    PLAYING  →  (last step shown)  →  FINISHED
    FINISHED →  play()             →  PLAYING  (from step 0 again)
    any      →  reset()            →  IDLE

Thread safety:
  This class is NOT thread-safe.  Drive it from one thread (a timer
  callback calling tick(), or request handlers that rebuild it).
"""

import time
from enum import Enum
from typing import Callable, List, Optional, Sequence

from pathfinding import Step


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class StepperState(Enum):
    IDLE     = "idle"
    PAUSED   = "paused"
    PLAYING  = "playing"
    FINISHED = "finished"


# ---------------------------------------------------------------------------
# Speed presets (seconds per step)
# ---------------------------------------------------------------------------
SPEED_PRESETS = {
    "slow":   1.0,    # teaching mode
    "medium": 0.5,
    "fast":   0.15,
    "turbo":  0.05,
}


# ---------------------------------------------------------------------------
# Stepper
# ---------------------------------------------------------------------------
class Stepper:
    """
    Attributes:
        state       : Current StepperState.
        steps       : The trace being replayed.
        current_idx : Index into `steps` that is currently displayed (-1 when idle).
        speed       : Seconds between auto-advance ticks.
        on_step     : Optional callback(Step) fired every time the current step changes.
    """

    def __init__(
        self,
        on_step: Optional[Callable[[Step], None]] = None,
        speed: str = "medium",
    ):
        self.steps:       List[Step]   = []
        self.current_idx: int          = -1
        self.state:       StepperState = StepperState.IDLE
        self.speed:       float        = SPEED_PRESETS.get(speed, SPEED_PRESETS["medium"])
        self.on_step:     Optional[Callable[[Step], None]] = on_step

        self._last_tick:  float = 0.0

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(self, steps: Sequence[Step]) -> None:
        """Load a finished trace and show its first step."""
        if not steps:
            raise ValueError("Cannot play back an empty trace")
        self.steps = list(steps)
        self.state = StepperState.PAUSED
        self._goto(0)

    def reset(self) -> None:
        """Back to IDLE — caller must call start() again."""
        self.steps       = []
        self.current_idx = -1
        self.state       = StepperState.IDLE

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def next_step(self) -> bool:
        """Advance one step forward.  Returns False if already at the end."""
        if self.state == StepperState.IDLE:
            return False
        if self.current_idx >= len(self.steps) - 1:
            self.state = StepperState.FINISHED
            return False
        self._goto(self.current_idx + 1)
        return True

    def prev_step(self) -> bool:
        """Rewind one step.  Returns False if already at the start."""
        if self.current_idx <= 0:
            return False
        self._goto(self.current_idx - 1)
        return True

    def goto_step(self, idx: int) -> bool:
        """Jump to an arbitrary step index."""
        if not 0 <= idx < len(self.steps):
            return False
        self._goto(idx)
        return True

    def rewind(self) -> None:
        """Jump back to step 0."""
        if self.steps:
            self._goto(0)

    def jump_to_end(self) -> None:
        if self.steps:
            self._goto(len(self.steps) - 1)

    # ------------------------------------------------------------------
    # Play / Pause
    # ------------------------------------------------------------------
    def play(self, now: Optional[float] = None) -> None:
        if self.state == StepperState.IDLE:
            return
        if self.state == StepperState.FINISHED:
            self.rewind()
        self.state      = StepperState.PLAYING
        self._last_tick = time.monotonic() if now is None else now

    def pause(self) -> None:
        if self.state == StepperState.PLAYING:
            self.state = StepperState.PAUSED

    def toggle_play(self, now: Optional[float] = None) -> None:
        if self.state == StepperState.PLAYING:
            self.pause()
        else:
            self.play(now)

    # ------------------------------------------------------------------
    # Tick  (call this from your event loop / timer)
    # ------------------------------------------------------------------
    def tick(self, now: Optional[float] = None) -> bool:
        """
        Call periodically (e.g. every 50 ms).  If playing and enough
        time has elapsed, advances one step.  Returns True if a step
        was taken.
        """
        if self.state != StepperState.PLAYING:
            return False
        now = time.monotonic() if now is None else now
        if now - self._last_tick < self.speed:
            return False
        self._last_tick = now
        return self.next_step()

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    def set_speed(self, preset: str) -> None:
        self.speed = SPEED_PRESETS.get(preset, SPEED_PRESETS["medium"])

    def set_speed_value(self, seconds: float) -> None:
        self.speed = max(0.02, seconds)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def current_step(self) -> Optional[Step]:
        if 0 <= self.current_idx < len(self.steps):
            return self.steps[self.current_idx]
        return None

    @property
    def total_steps(self) -> int:
        return len(self.steps)

    @property
    def is_finished(self) -> bool:
        return self.state == StepperState.FINISHED

    @property
    def is_playing(self) -> bool:
        return self.state == StepperState.PLAYING

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _goto(self, idx: int) -> None:
        self.current_idx = idx
        if idx == len(self.steps) - 1:
            self.state = StepperState.FINISHED
        elif self.state == StepperState.FINISHED:
            self.state = StepperState.PAUSED
        if self.on_step:
            self.on_step(self.steps[idx])
