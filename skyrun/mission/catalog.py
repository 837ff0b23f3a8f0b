"""Built-in missions."""

import numpy as np
from beartype import beartype

from skyrun.difficulty import Difficulty
from skyrun.dynamics.vector_math import quaternion_from_euler
from skyrun.environment.conditions import EnvironmentConditions
from skyrun.mission.mission import Checkpoint, Mission

FREE_FLIGHT = Mission(
    id="free_flight",
    name="Free Flight",
    description="A simple training flight to get familiar with the controls.",
    environment=EnvironmentConditions(
        wind_direction=np.array([1.0, 0.0, 0.0]),
        wind_speed=2.0,
        turbulence=0.1,
        visibility=10000.0,
        time_of_day=12.0,
    ),
    difficulty=Difficulty.NORMAL,
    start_position=np.array([0.0, 100.0, 0.0]),
)

TRAINING_FLIGHT = Mission(
    id="training",
    name="Training Flight",
    description="Learn the basics of flight in calm conditions.",
    checkpoints=(
        Checkpoint(
            id="cp1",
            position=np.array([500.0, 100.0, 0.0]),
            radius=100.0,
            altitude_min=50.0,
            altitude_max=150.0,
        ),
    ),
    environment=EnvironmentConditions(
        wind_direction=np.array([1.0, 0.0, 0.0]),
        wind_speed=2.0,
        turbulence=0.1,
        visibility=10000.0,
        time_of_day=12.0,
    ),
    difficulty=Difficulty.EASY,
    start_position=np.array([0.0, 100.0, 0.0]),
    # Nose toward the checkpoint on +X
    start_rotation=quaternion_from_euler(heading=np.pi / 2),
)

CANYON_RUN = Mission(
    id="canyon",
    name="Canyon Run",
    description="Navigate through a narrow canyon at high speed.",
    checkpoints=(
        Checkpoint(
            id="cp1",
            position=np.array([500.0, 150.0, 0.0]),
            radius=100.0,
            altitude_min=100.0,
            altitude_max=200.0,
            required_speed=50.0,
        ),
        Checkpoint(
            id="cp2",
            position=np.array([1000.0, 100.0, 500.0]),
            radius=100.0,
            altitude_min=50.0,
            altitude_max=150.0,
        ),
    ),
    time_limit=180.0,
    environment=EnvironmentConditions(
        wind_direction=np.array([1.0, 0.0, 1.0]),
        wind_speed=5.0,
        turbulence=0.3,
        visibility=8000.0,
        time_of_day=16.0,
    ),
    difficulty=Difficulty.NORMAL,
    start_position=np.array([0.0, 200.0, 0.0]),
    start_rotation=quaternion_from_euler(heading=np.pi / 2),
)

_MISSIONS: dict[str, Mission] = {
    mission.id: mission for mission in (FREE_FLIGHT, TRAINING_FLIGHT, CANYON_RUN)
}


@beartype
def available_missions() -> list[Mission]:
    """Missions offered to the pilot, in menu order."""
    return [TRAINING_FLIGHT, CANYON_RUN]


@beartype
def get_mission(mission_id: str) -> Mission:
    """Look up a built-in mission by id.

    Raises:
        KeyError: If the id is unknown.
    """
    try:
        return _MISSIONS[mission_id]
    except KeyError as err:
        valid = ", ".join(sorted(_MISSIONS))
        raise KeyError(f"Unknown mission '{mission_id}'. Valid: {valid}") from err
