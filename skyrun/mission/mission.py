"""Mission templates and checkpoint containment.

A mission is an ordered list of checkpoints plus constraints. Checkpoints
are objectives to be reached in sequence; containment is a pure predicate
over an aircraft snapshot.
"""

import math
from dataclasses import dataclass, replace

import numpy as np
from beartype import beartype
from numpy.typing import NDArray

from skyrun.difficulty import Difficulty
from skyrun.dynamics.state import Aircraft, AircraftClass
from skyrun.dynamics.vector_math import IDENTITY_QUATERNION
from skyrun.environment.conditions import EnvironmentConditions

SPEED_TOLERANCE = 0.1  # Fraction of required speed


# =============================================================================
# Checkpoint
# =============================================================================


@beartype
@dataclass(frozen=True, eq=False)
class Checkpoint:
    """Spatial objective within a mission.

    Attributes:
        id: Unique identifier within the mission
        position: Center [m]
        radius: Capture radius [m]
        altitude_min: Lowest accepted altitude [m] (None = no floor)
        altitude_max: Highest accepted altitude [m] (None = no ceiling)
        required_speed: Speed to hold within 10% [m/s] (None = any speed)
        next_direction: Hint toward the following checkpoint, for display only
    """
    id: str
    position: NDArray[np.float64]
    radius: float
    altitude_min: float | None = None
    altitude_max: float | None = None
    required_speed: float | None = None
    next_direction: NDArray[np.float64] | None = None

    def __post_init__(self) -> None:
        if self.position.shape != (3,):
            raise ValueError(f"Checkpoint position must be shape (3,), got {self.position.shape}")
        if not math.isfinite(self.radius) or self.radius <= 0:
            raise ValueError(f"Checkpoint radius must be positive, got {self.radius}")
        if (
            self.altitude_min is not None
            and self.altitude_max is not None
            and self.altitude_min > self.altitude_max
        ):
            raise ValueError(
                f"Altitude band is empty: min={self.altitude_min} > max={self.altitude_max}"
            )
        if self.next_direction is not None and self.next_direction.shape != (3,):
            raise ValueError(
                f"Next direction must be shape (3,), got {self.next_direction.shape}"
            )

    def distance_to(self, aircraft: Aircraft) -> float:
        """Straight-line distance from the aircraft to the center [m]."""
        return float(np.linalg.norm(aircraft.position - self.position))

    def contains(self, aircraft: Aircraft) -> bool:
        """Check position, altitude band and speed constraints together."""
        if not self.distance_to(aircraft) <= self.radius:
            return False

        altitude = aircraft.altitude
        if self.altitude_min is not None and altitude < self.altitude_min:
            return False
        if self.altitude_max is not None and altitude > self.altitude_max:
            return False

        if self.required_speed is not None:
            if abs(aircraft.speed - self.required_speed) > self.required_speed * SPEED_TOLERANCE:
                return False

        return True


# =============================================================================
# Mission
# =============================================================================


@beartype
@dataclass(frozen=True, eq=False)
class Mission:
    """Immutable mission template.

    Attributes:
        id: Mission identifier
        name: Display name
        description: Briefing text
        checkpoints: Objectives, reached strictly in order
        time_limit: Seconds allowed (None = unlimited)
        environment: Weather for the mission
        difficulty: Difficulty tier, drives scoring and stability assist
        start_position: Spawn position [m]
        start_rotation: Spawn orientation quaternion [w, x, y, z]
        required_aircraft: Aircraft class the mission expects (None = any)
    """
    id: str
    name: str
    description: str = ""
    checkpoints: tuple[Checkpoint, ...] = ()
    time_limit: float | None = None
    environment: EnvironmentConditions | None = None
    difficulty: Difficulty = Difficulty.NORMAL
    start_position: NDArray[np.float64] | None = None
    start_rotation: NDArray[np.float64] | None = None
    required_aircraft: AircraftClass | None = None

    def __post_init__(self) -> None:
        if self.time_limit is not None and not self.time_limit > 0:
            raise ValueError(f"Time limit must be positive, got {self.time_limit}")
        ids = [cp.id for cp in self.checkpoints]
        if len(ids) != len(set(ids)):
            raise ValueError(f"Checkpoint ids must be unique, got {ids}")
        # Frozen: fill defaults through object.__setattr__
        if self.environment is None:
            object.__setattr__(self, "environment", EnvironmentConditions.calm())
        if self.start_position is None:
            object.__setattr__(self, "start_position", np.array([0.0, 100.0, 0.0]))
        if self.start_rotation is None:
            object.__setattr__(self, "start_rotation", IDENTITY_QUATERNION.copy())

    @property
    def checkpoint_count(self) -> int:
        """Number of checkpoints."""
        return len(self.checkpoints)

    def with_difficulty(self, difficulty: Difficulty) -> "Mission":
        """Copy of this mission at another difficulty."""
        return replace(self, difficulty=difficulty)
