"""Aircraft state and aircraft class definitions.

The Aircraft record holds everything the dynamics engine integrates:
- Position (3): [x, y, z] world frame, Y up [m]
- Velocity (3): [vx, vy, vz] world frame [m/s]
- Acceleration (3): last computed acceleration [m/s^2]
- Rotation (4): [w, x, y, z] unit quaternion, body to world
- Weight (1): static weight used as the mass-equivalent [N]
- Controls (4): smoothed throttle, aileron, elevator, rudder

Body axes: +X right wing, +Y up, +Z nose.

Control fields are written only by the engine's smoothing step. The
presentation layer writes its targets into a ControlInputs record instead.
"""

from dataclasses import dataclass, replace
from enum import Enum

import numpy as np
from beartype import beartype
from numpy.typing import NDArray

from skyrun.dynamics.vector_math import (
    IDENTITY_QUATERNION,
    WORLD_FORWARD,
    WORLD_RIGHT,
    WORLD_UP,
    normalize_quaternion,
    rotate_vector,
    safe_clamp,
)

# =============================================================================
# Aircraft Classes
# =============================================================================


class AircraftClass(Enum):
    """Selectable aircraft types."""

    LIGHT = "light"
    FIGHTER = "fighter"
    TRANSPORT = "transport"


@beartype
@dataclass(frozen=True)
class AircraftCoefficients:
    """Fixed aerodynamic description of an aircraft class.

    Attributes:
        wing_area: Reference wing area [m^2]
        wingspan: Wingspan [m]
        oswald_efficiency: Span efficiency factor [-]
        cd0: Zero-lift drag coefficient [-]
        cl_slope: Lift curve slope [1/rad]
        cl_max: Maximum lift coefficient magnitude [-]
        default_weight: Static weight used when none is given [N]
    """
    wing_area: float
    wingspan: float
    oswald_efficiency: float
    cd0: float
    cl_slope: float
    cl_max: float
    default_weight: float

    def __post_init__(self) -> None:
        if self.wing_area <= 0 or self.wingspan <= 0:
            raise ValueError("Wing area and wingspan must be positive")
        if not 0 < self.oswald_efficiency <= 1:
            raise ValueError(f"Oswald efficiency must be in (0, 1], got {self.oswald_efficiency}")
        if self.cl_max <= 0:
            raise ValueError(f"cl_max must be positive, got {self.cl_max}")

    @property
    def aspect_ratio(self) -> float:
        """Wing aspect ratio b^2 / S."""
        return self.wingspan * self.wingspan / self.wing_area


AIRCRAFT_COEFFICIENTS: dict[AircraftClass, AircraftCoefficients] = {
    AircraftClass.LIGHT: AircraftCoefficients(
        wing_area=16.0,
        wingspan=10.0,
        oswald_efficiency=0.8,
        cd0=0.027,
        cl_slope=5.0,
        cl_max=1.4,
        default_weight=1200.0,
    ),
    AircraftClass.FIGHTER: AircraftCoefficients(
        wing_area=25.0,
        wingspan=12.0,
        oswald_efficiency=0.85,
        cd0=0.022,
        cl_slope=5.5,
        cl_max=1.8,
        default_weight=15000.0,
    ),
    AircraftClass.TRANSPORT: AircraftCoefficients(
        wing_area=150.0,
        wingspan=60.0,
        oswald_efficiency=0.75,
        cd0=0.032,
        cl_slope=4.8,
        cl_max=1.3,
        default_weight=50000.0,
    ),
}


@beartype
def coefficients_for(aircraft_class: AircraftClass) -> AircraftCoefficients:
    """Look up the coefficient record for an aircraft class."""
    return AIRCRAFT_COEFFICIENTS[aircraft_class]


# =============================================================================
# Requested Inputs
# =============================================================================


@beartype
@dataclass(frozen=True)
class ControlInputs:
    """Control targets requested by the pilot.

    Attributes:
        throttle: Requested throttle [0, 1]
        aileron: Requested aileron [-1, 1] (positive rolls about body +Z)
        elevator: Requested elevator [-1, 1] (positive pitches about body +X)
        rudder: Requested rudder [-1, 1] (positive yaws about body +Y)
    """
    throttle: float = 0.0
    aileron: float = 0.0
    elevator: float = 0.0
    rudder: float = 0.0

    def clamped(self) -> "ControlInputs":
        """Return a copy with every target inside its valid range."""
        return replace(
            self,
            throttle=safe_clamp(self.throttle, 0.0, 1.0),
            aileron=safe_clamp(self.aileron, -1.0, 1.0),
            elevator=safe_clamp(self.elevator, -1.0, 1.0),
            rudder=safe_clamp(self.rudder, -1.0, 1.0),
        )


# =============================================================================
# Aircraft State
# =============================================================================


@beartype
@dataclass
class Aircraft:
    """Kinematic and control state of one aircraft.

    Attributes:
        position: [x, y, z] world position [m]
        velocity: [vx, vy, vz] world velocity [m/s]
        acceleration: last computed acceleration [m/s^2]
        rotation: [w, x, y, z] orientation quaternion
        weight: static weight, used as the mass-equivalent [N]
        throttle: smoothed throttle [0, 1]
        aileron: smoothed aileron [-1, 1]
        elevator: smoothed elevator [-1, 1]
        rudder: smoothed rudder [-1, 1]
    """
    position: NDArray[np.float64]
    velocity: NDArray[np.float64]
    acceleration: NDArray[np.float64]
    rotation: NDArray[np.float64]
    weight: float = 1000.0
    throttle: float = 0.0
    aileron: float = 0.0
    elevator: float = 0.0
    rudder: float = 0.0

    def __post_init__(self) -> None:
        """Validate shapes and weight."""
        self.position = np.asarray(self.position, dtype=np.float64)
        self.velocity = np.asarray(self.velocity, dtype=np.float64)
        self.acceleration = np.asarray(self.acceleration, dtype=np.float64)
        self.rotation = normalize_quaternion(np.asarray(self.rotation, dtype=np.float64))

        if self.position.shape != (3,):
            raise ValueError(f"Position must be shape (3,), got {self.position.shape}")
        if self.velocity.shape != (3,):
            raise ValueError(f"Velocity must be shape (3,), got {self.velocity.shape}")
        if self.acceleration.shape != (3,):
            raise ValueError(f"Acceleration must be shape (3,), got {self.acceleration.shape}")
        if self.rotation.shape != (4,):
            raise ValueError(f"Rotation must be shape (4,), got {self.rotation.shape}")
        if not np.isfinite(self.weight) or self.weight <= 0:
            raise ValueError(f"Weight must be finite and positive, got {self.weight}")

    @classmethod
    def at_rest(
        cls,
        position: NDArray[np.float64] | None = None,
        rotation: NDArray[np.float64] | None = None,
        weight: float = 1000.0,
    ) -> "Aircraft":
        """Create a stationary aircraft with neutral controls.

        Args:
            position: Start position [m] (default: 100 m above origin)
            rotation: Start orientation (default: identity, nose along +Z)
            weight: Static weight [N]
        """
        if position is None:
            position = np.array([0.0, 100.0, 0.0])
        if rotation is None:
            rotation = IDENTITY_QUATERNION
        return cls(
            position=position.copy(),
            velocity=np.zeros(3),
            acceleration=np.zeros(3),
            rotation=rotation.copy(),
            weight=weight,
        )

    @classmethod
    def for_class(
        cls,
        aircraft_class: AircraftClass,
        position: NDArray[np.float64] | None = None,
        rotation: NDArray[np.float64] | None = None,
    ) -> "Aircraft":
        """Create a stationary aircraft with the class default weight."""
        return cls.at_rest(
            position=position,
            rotation=rotation,
            weight=coefficients_for(aircraft_class).default_weight,
        )

    def copy(self) -> "Aircraft":
        """Create a copy of this aircraft."""
        return Aircraft(
            position=self.position.copy(),
            velocity=self.velocity.copy(),
            acceleration=self.acceleration.copy(),
            rotation=self.rotation.copy(),
            weight=self.weight,
            throttle=self.throttle,
            aileron=self.aileron,
            elevator=self.elevator,
            rudder=self.rudder,
        )

    @property
    def forward(self) -> NDArray[np.float64]:
        """Nose direction in world frame."""
        return rotate_vector(self.rotation, WORLD_FORWARD)

    @property
    def up(self) -> NDArray[np.float64]:
        """Canopy direction in world frame."""
        return rotate_vector(self.rotation, WORLD_UP)

    @property
    def right(self) -> NDArray[np.float64]:
        """Right wing direction in world frame."""
        return rotate_vector(self.rotation, WORLD_RIGHT)

    @property
    def speed(self) -> float:
        """Ground speed magnitude [m/s]."""
        return float(np.linalg.norm(self.velocity))

    @property
    def altitude(self) -> float:
        """Height above the world origin plane [m]."""
        return float(self.position[1])
