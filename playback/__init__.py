"""
playback/
---------
Recording & playback layer.

    from playback import Stepper, Recorder
"""

from playback.stepper  import Stepper, StepperState, SPEED_PRESETS
from playback.recorder import Recorder, RunMetrics

__all__ = [
    "Stepper",
    "StepperState",
    "SPEED_PRESETS",
    "Recorder",
    "RunMetrics",
]
