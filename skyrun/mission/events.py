"""Mission lifecycle events.

Trackers return these values from update() instead of invoking callbacks,
so the driver decides when and how to react.
"""

from dataclasses import dataclass
from typing import Union

from skyrun.mission.mission import Checkpoint
from skyrun.mission.progress import MissionProgress


@dataclass(frozen=True, eq=False)
class CheckpointReached:
    """The current checkpoint was satisfied.

    Attributes:
        checkpoint: Checkpoint that was reached
        index: Its position in the mission
        score_delta: Points awarded for it
    """
    checkpoint: Checkpoint
    index: int
    score_delta: int


@dataclass(frozen=True)
class MissionCompleted:
    """Every checkpoint was reached."""
    progress: MissionProgress


@dataclass(frozen=True)
class MissionFailed:
    """The mission ended without completing its objectives."""
    reason: str


MissionEvent = Union[CheckpointReached, MissionCompleted, MissionFailed]
