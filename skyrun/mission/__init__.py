"""Mission definitions and progress tracking.

Missions are immutable templates of ordered checkpoints. The tracker walks
through them one tick at a time and reports what happened as event values.

Example:
    >>> from skyrun.mission import MissionProgressTracker, get_mission
    >>>
    >>> tracker = MissionProgressTracker(get_mission("training"))
    >>> tracker.start()
    >>> events = tracker.update(aircraft)
    >>> progress = tracker.snapshot()
"""

from skyrun.mission.catalog import (
    CANYON_RUN,
    FREE_FLIGHT,
    TRAINING_FLIGHT,
    available_missions,
    get_mission,
)
from skyrun.mission.events import (
    CheckpointReached,
    MissionCompleted,
    MissionEvent,
    MissionFailed,
)
from skyrun.mission.mission import Checkpoint, Mission
from skyrun.mission.progress import MissionProgress
from skyrun.mission.tracker import MissionOutcome, MissionProgressTracker

__all__ = [
    # Templates
    "Checkpoint",
    "Mission",
    # Catalog
    "CANYON_RUN",
    "FREE_FLIGHT",
    "TRAINING_FLIGHT",
    "available_missions",
    "get_mission",
    # Tracking
    "MissionOutcome",
    "MissionProgress",
    "MissionProgressTracker",
    # Events
    "CheckpointReached",
    "MissionCompleted",
    "MissionEvent",
    "MissionFailed",
]
