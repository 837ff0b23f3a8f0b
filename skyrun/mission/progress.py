"""Read-only mission progress snapshot."""

from dataclasses import dataclass

from skyrun.dynamics.vector_math import safe_truncate_to_int


@dataclass(frozen=True)
class MissionProgress:
    """Progress through a mission at one instant.

    Attributes:
        mission_id: Mission identifier
        checkpoints_completed: Checkpoints reached so far
        total_checkpoints: Checkpoints in the mission
        score: Accumulated score
        time_elapsed: Seconds since the mission started [s]
    """
    mission_id: str
    checkpoints_completed: int
    total_checkpoints: int
    score: int
    time_elapsed: float

    @property
    def percent_complete(self) -> float:
        """Completed fraction in [0, 1]; a mission without checkpoints is complete."""
        if self.total_checkpoints == 0:
            return 1.0
        return self.checkpoints_completed / self.total_checkpoints

    @property
    def elapsed_seconds(self) -> int:
        """Elapsed time as whole seconds, for display."""
        return safe_truncate_to_int(float(self.time_elapsed))
