"""Simplified aerodynamic flight dynamics with explicit Euler integration.

Each tick the engine:
- Computes air-relative velocity and airspeed (velocity minus wind)
- Falls back to gravity-only motion below the low-speed threshold
- Computes angle of attack, lift, drag, thrust and weight
- Divides the force sum by the aircraft weight (weight as mass-equivalent)
- Integrates velocity and position with explicit Euler
- Rotates the aircraft from control inputs plus stability assist

Force model:
- Lift = q * S * Cl along world +Y
- Drag = q * S * (Cd0 + Cl^2 / (pi * AR * e)) along body -Z
- Thrust = throttle * max_thrust along body +Z
- Weight = weight * g along world -Y

The model is intentionally simplified; lift and drag directions are fixed
rather than derived from the airflow.

Example:
    >>> from skyrun.dynamics import Aircraft, AircraftClass, FlightDynamicsEngine
    >>>
    >>> engine = FlightDynamicsEngine(AircraftClass.LIGHT)
    >>> aircraft = Aircraft.for_class(AircraftClass.LIGHT)
    >>> aircraft.throttle = 1.0
    >>> for _ in range(300):
    ...     engine.update(aircraft, dt=1.0 / 60.0)
"""

import logging
import math
from dataclasses import dataclass
from typing import NamedTuple

import numpy as np
from beartype import beartype
from numba import njit
from numpy.typing import NDArray

from skyrun.difficulty import Difficulty, stability_assist_for
from skyrun.dynamics.state import (
    Aircraft,
    AircraftClass,
    AircraftCoefficients,
    ControlInputs,
    coefficients_for,
)
from skyrun.dynamics.vector_math import (
    WORLD_FORWARD,
    WORLD_RIGHT,
    WORLD_UP,
    finite_or_zero,
    quaternion_from_axis_angle,
    quaternion_multiply,
    safe_clamp,
    safe_normalize,
    validate_quaternion,
)

logger = logging.getLogger(__name__)

# =============================================================================
# Configuration
# =============================================================================


@beartype
@dataclass(frozen=True)
class PhysicsConfig:
    """Physical constants and tuning gains for the dynamics engine.

    Attributes:
        air_density: Air density [kg/m^3]
        gravity: Gravitational acceleration [m/s^2]
        max_thrust: Thrust at full throttle [N]
        low_speed_threshold: Airspeed at or below which only gravity acts [m/s]
        full_control_airspeed: Airspeed at which controls reach full authority [m/s]
        roll_gain: Roll rate per unit aileron [rad/s]
        pitch_gain: Pitch rate per unit elevator [rad/s]
        yaw_gain: Yaw rate per unit rudder [rad/s]
        stability_gain: Corrective rate per unit of tilt [rad/s]
        input_smoothing: Fraction of the input gap closed per tick (0, 1]
    """
    air_density: float = 1.225
    gravity: float = 9.81
    max_thrust: float = 50000.0
    low_speed_threshold: float = 0.1
    full_control_airspeed: float = 30.0
    roll_gain: float = 2.0
    pitch_gain: float = 1.0
    yaw_gain: float = 1.0
    stability_gain: float = 2.0
    input_smoothing: float = 0.2

    def __post_init__(self) -> None:
        if self.air_density <= 0:
            raise ValueError(f"air_density must be positive, got {self.air_density}")
        if self.gravity < 0:
            raise ValueError(f"gravity must be non-negative, got {self.gravity}")
        if self.max_thrust < 0:
            raise ValueError(f"max_thrust must be non-negative, got {self.max_thrust}")
        if self.low_speed_threshold < 0:
            raise ValueError("low_speed_threshold must be non-negative")
        if self.full_control_airspeed <= 0:
            raise ValueError("full_control_airspeed must be positive")
        if not 0 < self.input_smoothing <= 1:
            raise ValueError(f"input_smoothing must be in (0, 1], got {self.input_smoothing}")


# =============================================================================
# Force Readout
# =============================================================================


class AeroForces(NamedTuple):
    """Forces computed during the last tick, for telemetry."""
    lift: NDArray[np.float64]        # [N]
    drag: NDArray[np.float64]        # [N]
    thrust: NDArray[np.float64]      # [N]
    weight: NDArray[np.float64]      # [N]
    angle_of_attack: float           # [rad]
    airspeed: float                  # [m/s]
    dynamic_pressure: float          # [Pa]

    @property
    def total(self) -> NDArray[np.float64]:
        """Sum of all forces [N]."""
        return self.lift + self.drag + self.thrust + self.weight


# =============================================================================
# Numba Kernels
# =============================================================================


@njit(cache=True)
def _aero_coefficients(
    angle_of_attack: float,
    cl_slope: float,
    cl_max: float,
    cd0: float,
    aspect_ratio: float,
    oswald_efficiency: float,
) -> tuple[float, float]:
    """Lift and total drag coefficients for an angle of attack [rad]."""
    cl = cl_slope * angle_of_attack
    if cl > cl_max:
        cl = cl_max
    elif cl < -cl_max:
        cl = -cl_max

    cdi = (cl * cl) / (np.pi * aspect_ratio * oswald_efficiency)
    return cl, cd0 + cdi


# =============================================================================
# Aerodynamic Helpers
# =============================================================================


@beartype
def angle_of_attack(
    forward: NDArray[np.float64],
    airflow: NDArray[np.float64],
) -> float:
    """Signed angle between the nose and the air-relative velocity.

    Positive when the part of the nose direction perpendicular to the
    airflow points above the horizon.

    Args:
        forward: Unit nose direction (world frame)
        airflow: Unit air-relative velocity direction (world frame)

    Returns:
        Angle of attack [rad]
    """
    cos_angle = safe_clamp(float(np.dot(forward, airflow)), -1.0, 1.0)
    angle = math.acos(cos_angle)

    perpendicular = np.cross(airflow, np.cross(forward, airflow))
    return angle if float(np.dot(perpendicular, WORLD_UP)) > 0 else -angle


@beartype
def dynamic_pressure(air_density: float, airspeed: float) -> float:
    """Dynamic pressure q = 0.5 * rho * v^2 [Pa]."""
    return 0.5 * air_density * airspeed * airspeed


# =============================================================================
# Flight Dynamics Engine
# =============================================================================


@beartype
class FlightDynamicsEngine:
    """Per-tick flight dynamics for one aircraft class.

    The engine never raises for degenerate numbers: NaN vectors, zero
    airspeed and bad time steps are replaced with safe defaults so a
    real-time loop can keep ticking.

    Example:
        >>> engine = FlightDynamicsEngine(AircraftClass.FIGHTER)
        >>> engine.set_difficulty(Difficulty.REALISTIC)
        >>> engine.update(aircraft, dt=1.0 / 60.0, wind=np.array([2.0, 0.0, 0.0]))
    """

    def __init__(
        self,
        aircraft_class: AircraftClass = AircraftClass.LIGHT,
        config: PhysicsConfig | None = None,
        difficulty: Difficulty = Difficulty.NORMAL,
    ) -> None:
        """Initialize engine.

        Args:
            aircraft_class: Aircraft type; its coefficients are resolved once
            config: Physical constants (default: PhysicsConfig())
            difficulty: Initial difficulty, sets the stability assist
        """
        self.aircraft_class = aircraft_class
        self.coefficients: AircraftCoefficients = coefficients_for(aircraft_class)
        self.config = config or PhysicsConfig()
        self.difficulty = difficulty
        self.stability_assist = stability_assist_for(difficulty)
        self.last_forces: AeroForces | None = None

    def set_difficulty(self, level: Difficulty) -> None:
        """Set stability assist from a difficulty level."""
        self.difficulty = level
        self.stability_assist = stability_assist_for(level)
        logger.debug("Stability assist set to %.2f (%s)", self.stability_assist, level.value)

    def set_stability_assist(self, value: float) -> None:
        """Set stability assist directly, clamped to [0, 1]."""
        self.stability_assist = safe_clamp(value, 0.0, 1.0)

    def smooth_controls(self, aircraft: Aircraft, inputs: ControlInputs) -> None:
        """Move the aircraft's control fields toward the requested inputs.

        Each call closes config.input_smoothing of the remaining gap.
        """
        target = inputs.clamped()
        k = self.config.input_smoothing
        aircraft.throttle = aircraft.throttle + (target.throttle - aircraft.throttle) * k
        aircraft.aileron = aircraft.aileron + (target.aileron - aircraft.aileron) * k
        aircraft.elevator = aircraft.elevator + (target.elevator - aircraft.elevator) * k
        aircraft.rudder = aircraft.rudder + (target.rudder - aircraft.rudder) * k

    def update(
        self,
        aircraft: Aircraft,
        dt: float,
        wind: NDArray[np.float64] | None = None,
        inputs: ControlInputs | None = None,
    ) -> None:
        """Advance the aircraft by one tick.

        Args:
            aircraft: Aircraft to mutate in place
            dt: Time step [s]; non-positive or non-finite steps are skipped
            wind: Wind velocity in world frame [m/s] (default: calm)
            inputs: Requested control inputs to smooth toward first
        """
        if not math.isfinite(dt) or dt <= 0:
            logger.debug("Skipping tick with invalid dt=%r", dt)
            return

        wind = np.zeros(3) if wind is None else finite_or_zero(np.asarray(wind, dtype=np.float64))

        self._sanitize(aircraft)
        if inputs is not None:
            self.smooth_controls(aircraft, inputs)

        cfg = self.config
        air_velocity = aircraft.velocity - wind
        airspeed = float(np.linalg.norm(air_velocity))

        weight_force = np.array([0.0, -aircraft.weight * cfg.gravity, 0.0])

        # Low speed: gravity only, orientation untouched
        if airspeed <= cfg.low_speed_threshold:
            zero = np.zeros(3)
            self.last_forces = AeroForces(
                lift=zero,
                drag=zero,
                thrust=zero,
                weight=weight_force,
                angle_of_attack=0.0,
                airspeed=airspeed,
                dynamic_pressure=0.0,
            )
            self._integrate(aircraft, np.array([0.0, -cfg.gravity, 0.0]), dt)
            return

        forward = aircraft.forward
        airflow = safe_normalize(air_velocity, forward)
        alpha = angle_of_attack(forward, airflow)

        coeffs = self.coefficients
        q = dynamic_pressure(cfg.air_density, airspeed)
        cl, cd = _aero_coefficients(
            alpha,
            coeffs.cl_slope,
            coeffs.cl_max,
            coeffs.cd0,
            coeffs.aspect_ratio,
            coeffs.oswald_efficiency,
        )

        lift = WORLD_UP * (q * coeffs.wing_area * cl)
        drag = -forward * (q * coeffs.wing_area * cd)
        thrust = forward * (aircraft.throttle * cfg.max_thrust)

        forces = AeroForces(
            lift=lift,
            drag=drag,
            thrust=thrust,
            weight=weight_force,
            angle_of_attack=alpha,
            airspeed=airspeed,
            dynamic_pressure=q,
        )
        self.last_forces = forces

        # Weight doubles as the mass-equivalent
        acceleration = forces.total / aircraft.weight
        self._integrate(aircraft, acceleration, dt)
        self._update_rotation(aircraft, dt, airspeed)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _sanitize(self, aircraft: Aircraft) -> None:
        """Replace degenerate state with safe defaults before integrating."""
        aircraft.position = finite_or_zero(aircraft.position)
        aircraft.velocity = finite_or_zero(aircraft.velocity)
        aircraft.rotation = validate_quaternion(aircraft.rotation)
        aircraft.throttle = safe_clamp(float(aircraft.throttle), 0.0, 1.0)
        aircraft.aileron = safe_clamp(float(aircraft.aileron), -1.0, 1.0)
        aircraft.elevator = safe_clamp(float(aircraft.elevator), -1.0, 1.0)
        aircraft.rudder = safe_clamp(float(aircraft.rudder), -1.0, 1.0)

    def _integrate(
        self,
        aircraft: Aircraft,
        acceleration: NDArray[np.float64],
        dt: float,
    ) -> None:
        """Explicit Euler step for velocity, then position."""
        velocity = aircraft.velocity + acceleration * dt
        position = aircraft.position + velocity * dt

        if not (np.isfinite(velocity).all() and np.isfinite(position).all()):
            logger.warning("Non-finite integration result, holding position and stopping")
            aircraft.acceleration = np.zeros(3)
            aircraft.velocity = np.zeros(3)
            return

        aircraft.acceleration = acceleration
        aircraft.velocity = velocity
        aircraft.position = position

    def _stability_corrections(self, aircraft: Aircraft) -> tuple[float, float]:
        """Corrective roll and pitch rates toward wings-level flight.

        Roll uses the right wing's height, pitch uses the nose's height.
        Signs follow the rotation conventions: a positive roll rate raises
        the right wing, a positive pitch rate lowers the nose.
        """
        gain = self.config.stability_gain
        right_tilt = float(np.dot(aircraft.right, WORLD_UP))
        nose_tilt = float(np.dot(aircraft.forward, WORLD_UP))
        return -right_tilt * gain, nose_tilt * gain

    def _update_rotation(self, aircraft: Aircraft, dt: float, airspeed: float) -> None:
        """Apply control and stability rotation rates to the orientation."""
        cfg = self.config
        effectiveness = min(airspeed / cfg.full_control_airspeed, 1.0)

        roll_rate = aircraft.aileron * cfg.roll_gain * effectiveness
        pitch_rate = aircraft.elevator * cfg.pitch_gain * effectiveness
        yaw_rate = aircraft.rudder * cfg.yaw_gain * effectiveness

        # Assist fades out as the pilot commands the same axis
        roll_correction, pitch_correction = self._stability_corrections(aircraft)
        roll_rate += roll_correction * self.stability_assist * (1.0 - abs(aircraft.aileron))
        pitch_rate += pitch_correction * self.stability_assist * (1.0 - abs(aircraft.elevator))

        roll_q = quaternion_from_axis_angle(roll_rate * dt, WORLD_FORWARD)
        pitch_q = quaternion_from_axis_angle(pitch_rate * dt, WORLD_RIGHT)
        yaw_q = quaternion_from_axis_angle(yaw_rate * dt, WORLD_UP)

        # Order matters: roll, then pitch, then yaw, all in body axes
        rotation = quaternion_multiply(aircraft.rotation, roll_q)
        rotation = quaternion_multiply(rotation, pitch_q)
        rotation = quaternion_multiply(rotation, yaw_q)

        aircraft.rotation = validate_quaternion(rotation)
