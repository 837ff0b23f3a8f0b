"""Environmental conditions for a mission.

Wind is given as a direction plus a speed; the direction is normalized
before the two are combined, and a zero or NaN direction means no wind.
"""

import math
from dataclasses import dataclass

import numpy as np
from beartype import beartype
from numpy.typing import NDArray

from skyrun.dynamics.vector_math import safe_normalize


@beartype
@dataclass(frozen=True, eq=False)
class EnvironmentConditions:
    """Weather and lighting for one mission.

    Attributes:
        wind_direction: Direction the wind blows toward (any length)
        wind_speed: Wind speed [m/s]
        turbulence: Turbulence intensity [0, 1]
        visibility: Visibility distance [m]
        time_of_day: Local hour [0, 24]
    """
    wind_direction: NDArray[np.float64]
    wind_speed: float = 0.0
    turbulence: float = 0.0
    visibility: float = 10000.0
    time_of_day: float = 12.0

    def __post_init__(self) -> None:
        if self.wind_direction.shape != (3,):
            raise ValueError(f"Wind direction must be shape (3,), got {self.wind_direction.shape}")
        if not math.isfinite(self.wind_speed) or self.wind_speed < 0:
            raise ValueError(f"Wind speed must be finite and non-negative, got {self.wind_speed}")
        if not 0.0 <= self.turbulence <= 1.0:
            raise ValueError(f"Turbulence must be in [0, 1], got {self.turbulence}")
        if not self.visibility > 0:
            raise ValueError(f"Visibility must be positive, got {self.visibility}")
        if not 0.0 <= self.time_of_day <= 24.0:
            raise ValueError(f"Time of day must be in [0, 24], got {self.time_of_day}")

    @classmethod
    def calm(cls) -> "EnvironmentConditions":
        """No wind, clear noon sky."""
        return cls(wind_direction=np.array([1.0, 0.0, 0.0]))

    @property
    def wind_vector(self) -> NDArray[np.float64]:
        """Wind velocity in world frame [m/s]."""
        return safe_normalize(self.wind_direction, np.zeros(3)) * self.wind_speed
