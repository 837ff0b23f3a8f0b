"""Skyrun - Arcade flight dynamics and mission tracking.

This package provides a simplified aerodynamic flight model, checkpoint
missions with scoring, and a step-driven session that ties them together
for a real-time host loop.

Example:
    >>> from skyrun import ControlInputs, FlightSession, get_mission
    >>>
    >>> session = FlightSession()
    >>> session.start(get_mission("training"))
    >>> session.set_inputs(ControlInputs(throttle=1.0))
    >>> for _ in range(300):
    ...     session.step(1.0 / 60.0)
    >>> print(session.instruments.whole_numbers())
"""

import logging

__version__ = "0.1.0"

# Difficulty tiers
from skyrun.difficulty import Difficulty, score_multiplier_for, stability_assist_for

# Flight dynamics
from skyrun.dynamics import (
    AeroForces,
    Aircraft,
    AircraftClass,
    ControlInputs,
    FlightDynamicsEngine,
    PhysicsConfig,
)

# Environment
from skyrun.environment import EnvironmentConditions

# Missions
from skyrun.mission import (
    CheckpointReached,
    Checkpoint,
    Mission,
    MissionCompleted,
    MissionFailed,
    MissionOutcome,
    MissionProgress,
    MissionProgressTracker,
    available_missions,
    get_mission,
)

# Session
from skyrun.simulation import (
    FlightInstruments,
    FlightSession,
    GameState,
    SessionConfig,
    read_instruments,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    # Difficulty
    "Difficulty",
    "score_multiplier_for",
    "stability_assist_for",
    # Dynamics
    "AeroForces",
    "Aircraft",
    "AircraftClass",
    "ControlInputs",
    "FlightDynamicsEngine",
    "PhysicsConfig",
    # Environment
    "EnvironmentConditions",
    # Missions
    "Checkpoint",
    "CheckpointReached",
    "Mission",
    "MissionCompleted",
    "MissionFailed",
    "MissionOutcome",
    "MissionProgress",
    "MissionProgressTracker",
    "available_missions",
    "get_mission",
    # Session
    "FlightInstruments",
    "FlightSession",
    "GameState",
    "SessionConfig",
    "read_instruments",
]
