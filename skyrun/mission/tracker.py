"""Mission progress tracking.

The tracker sequences through a mission's checkpoints, scores each one and
detects completion or failure. It is ticked once per frame with an aircraft
snapshot and returns the events produced by that tick.

Lifecycle:
    NOT_STARTED --start()--> IN_PROGRESS --update()--> COMPLETED | FAILED

Once COMPLETED or FAILED the tracker is frozen: update() is a no-op until
start() is called again.

Scoring per checkpoint:
    (100 + floor(speed / 10) + efficiency) * difficulty multiplier
    efficiency = floor(max(0, 30 - seconds since previous checkpoint) * 10),
    only awarded when a previous checkpoint exists.

Example:
    >>> tracker = MissionProgressTracker(mission)
    >>> tracker.start()
    >>> for event in tracker.update(aircraft):
    ...     if isinstance(event, MissionCompleted):
    ...         print(event.progress.score)
"""

import logging
import time
from collections.abc import Callable
from enum import Enum

from beartype import beartype

from skyrun.difficulty import score_multiplier_for
from skyrun.dynamics.state import Aircraft
from skyrun.dynamics.vector_math import safe_truncate_to_int
from skyrun.mission.events import (
    CheckpointReached,
    MissionCompleted,
    MissionEvent,
    MissionFailed,
)
from skyrun.mission.mission import Checkpoint, Mission
from skyrun.mission.progress import MissionProgress

logger = logging.getLogger(__name__)

BASE_CHECKPOINT_SCORE = 100
SPEED_BONUS_DIVISOR = 10.0
EFFICIENCY_WINDOW = 30.0  # [s]
EFFICIENCY_POINTS_PER_SECOND = 10.0

TIME_LIMIT_EXCEEDED = "Time limit exceeded"


class MissionOutcome(Enum):
    """Where the tracker is in its lifecycle."""

    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"


@beartype
class MissionProgressTracker:
    """Stateful checkpoint sequencer for one mission.

    Only the current checkpoint is ever tested, so checkpoints cannot be
    taken out of order even when their capture volumes overlap.

    Args:
        mission: Mission template to track
        clock: Returns the current time [s]; defaults to a monotonic
            wall clock. Drivers that pause can pass simulated time.
    """

    def __init__(
        self,
        mission: Mission,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.mission = mission
        self._clock = clock
        self._index = 0
        self._score = 0
        self._started_at: float | None = None
        self._finished_at: float | None = None
        self._checkpoint_times: dict[str, float] = {}
        self._outcome = MissionOutcome.NOT_STARTED

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def start(self) -> None:
        """Begin (or restart) the mission with a clean slate."""
        self._index = 0
        self._score = 0
        self._checkpoint_times.clear()
        self._finished_at = None
        self._started_at = self._clock()
        self._outcome = MissionOutcome.IN_PROGRESS
        logger.info(
            "Mission '%s' started with %d checkpoints",
            self.mission.id,
            self.mission.checkpoint_count,
        )

    def update(self, aircraft: Aircraft) -> list[MissionEvent]:
        """Advance mission progress from an aircraft snapshot.

        Returns:
            Events produced by this tick (possibly empty)
        """
        if self._outcome is not MissionOutcome.IN_PROGRESS:
            return []

        elapsed = self.elapsed_time
        time_limit = self.mission.time_limit
        if time_limit is not None and elapsed > time_limit:
            return [self._fail(TIME_LIMIT_EXCEEDED)]

        checkpoints = self.mission.checkpoints
        if not checkpoints:
            return [self._complete()]

        checkpoint = checkpoints[self._index]
        if not checkpoint.contains(aircraft):
            return []

        score_delta = self._checkpoint_score(aircraft, elapsed)
        self._checkpoint_times[checkpoint.id] = elapsed
        self._score += score_delta

        events: list[MissionEvent] = [
            CheckpointReached(checkpoint=checkpoint, index=self._index, score_delta=score_delta)
        ]
        logger.info(
            "Checkpoint '%s' reached at %.1fs (+%d)", checkpoint.id, elapsed, score_delta
        )

        self._index += 1
        if self._index >= len(checkpoints):
            events.append(self._complete())
        return events

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def is_objective_complete(self) -> bool:
        """True once every checkpoint has been reached."""
        return self._index >= self.mission.checkpoint_count

    @property
    def outcome(self) -> MissionOutcome:
        return self._outcome

    @property
    def is_finished(self) -> bool:
        """True after completion or failure."""
        return self._outcome in (MissionOutcome.COMPLETED, MissionOutcome.FAILED)

    @property
    def score(self) -> int:
        return self._score

    @property
    def current_index(self) -> int:
        return self._index

    @property
    def current_checkpoint(self) -> Checkpoint | None:
        """Checkpoint being flown to, or None when all are done."""
        if self._index >= self.mission.checkpoint_count:
            return None
        return self.mission.checkpoints[self._index]

    @property
    def checkpoint_times(self) -> dict[str, float]:
        """Elapsed time at which each reached checkpoint was taken [s]."""
        return dict(self._checkpoint_times)

    @property
    def elapsed_time(self) -> float:
        """Seconds since start, frozen once the mission is finished."""
        if self._started_at is None:
            return 0.0
        end = self._finished_at if self._finished_at is not None else self._clock()
        return end - self._started_at

    def snapshot(self) -> MissionProgress:
        """Build a read-only progress snapshot."""
        return MissionProgress(
            mission_id=self.mission.id,
            checkpoints_completed=self._index,
            total_checkpoints=self.mission.checkpoint_count,
            score=self._score,
            time_elapsed=self.elapsed_time,
        )

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _checkpoint_score(self, aircraft: Aircraft, elapsed: float) -> int:
        score = BASE_CHECKPOINT_SCORE
        score += safe_truncate_to_int(aircraft.speed / SPEED_BONUS_DIVISOR)

        if self._index > 0:
            previous_id = self.mission.checkpoints[self._index - 1].id
            previous_time = self._checkpoint_times.get(previous_id)
            if previous_time is not None:
                time_taken = elapsed - previous_time
                efficiency = max(0.0, EFFICIENCY_WINDOW - time_taken) * EFFICIENCY_POINTS_PER_SECOND
                score += safe_truncate_to_int(efficiency)

        multiplier = score_multiplier_for(self.mission.difficulty)
        return safe_truncate_to_int(score * multiplier)

    def _complete(self) -> MissionCompleted:
        self._finished_at = self._clock()
        self._outcome = MissionOutcome.COMPLETED
        progress = self.snapshot()
        logger.info(
            "Mission '%s' complete: score=%d time=%.1fs",
            self.mission.id,
            progress.score,
            progress.time_elapsed,
        )
        return MissionCompleted(progress=progress)

    def _fail(self, reason: str) -> MissionFailed:
        self._finished_at = self._clock()
        self._outcome = MissionOutcome.FAILED
        logger.info("Mission '%s' failed: %s", self.mission.id, reason)
        return MissionFailed(reason=reason)
