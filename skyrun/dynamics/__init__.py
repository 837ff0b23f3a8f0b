"""Dynamics module for aircraft flight simulation.

This module provides the aircraft state, the degenerate-safe vector and
quaternion helpers, and the per-tick flight dynamics engine.

Example:
    >>> from skyrun.dynamics import Aircraft, AircraftClass, ControlInputs, FlightDynamicsEngine
    >>>
    >>> engine = FlightDynamicsEngine(AircraftClass.LIGHT)
    >>> aircraft = Aircraft.for_class(AircraftClass.LIGHT)
    >>> engine.update(aircraft, dt=1.0 / 60.0, inputs=ControlInputs(throttle=1.0))
"""

from skyrun.dynamics.engine import (
    AeroForces,
    FlightDynamicsEngine,
    PhysicsConfig,
    angle_of_attack,
    dynamic_pressure,
)
from skyrun.dynamics.state import (
    AIRCRAFT_COEFFICIENTS,
    Aircraft,
    AircraftClass,
    AircraftCoefficients,
    ControlInputs,
    coefficients_for,
)
from skyrun.dynamics.vector_math import (
    IDENTITY_QUATERNION,
    WORLD_FORWARD,
    WORLD_RIGHT,
    WORLD_UP,
    normalize_quaternion,
    quaternion_from_axis_angle,
    quaternion_from_euler,
    quaternion_multiply,
    rotate_vector,
    safe_clamp,
    safe_normalize,
    safe_truncate_to_int,
    validate_quaternion,
)

__all__ = [
    # State
    "Aircraft",
    "AircraftClass",
    "AircraftCoefficients",
    "AIRCRAFT_COEFFICIENTS",
    "ControlInputs",
    "coefficients_for",
    # Vector and quaternion utilities
    "IDENTITY_QUATERNION",
    "WORLD_FORWARD",
    "WORLD_RIGHT",
    "WORLD_UP",
    "normalize_quaternion",
    "quaternion_from_axis_angle",
    "quaternion_from_euler",
    "quaternion_multiply",
    "rotate_vector",
    "safe_clamp",
    "safe_normalize",
    "safe_truncate_to_int",
    "validate_quaternion",
    # Engine
    "AeroForces",
    "FlightDynamicsEngine",
    "PhysicsConfig",
    "angle_of_attack",
    "dynamic_pressure",
]
