"""Flight instrument values derived from aircraft state.

These are the numbers a HUD shows each frame. Angles come from the
orientation's forward and up vectors rather than Euler decomposition.
"""

import math
from typing import NamedTuple

import numpy as np
from beartype import beartype

from skyrun.dynamics.state import Aircraft
from skyrun.dynamics.vector_math import safe_clamp, safe_truncate_to_int


class InstrumentReadout(NamedTuple):
    """Instrument values as whole numbers."""
    altitude: int
    airspeed: int
    vertical_speed: int
    heading: int
    roll: int
    pitch: int


class FlightInstruments(NamedTuple):
    """Instrument values for one frame."""
    altitude: float        # [m]
    airspeed: float        # [m/s]
    vertical_speed: float  # [m/s]
    heading: float         # [deg] in [0, 360)
    roll: float            # [deg] in (-180, 180]
    pitch: float           # [deg] in [-90, 90]

    def whole_numbers(self) -> InstrumentReadout:
        """Truncate every value to an int, saturating instead of failing."""
        return InstrumentReadout(*(safe_truncate_to_int(float(v)) for v in self))


@beartype
def read_instruments(aircraft: Aircraft) -> FlightInstruments:
    """Compute HUD values for an aircraft."""
    forward = aircraft.forward
    up = aircraft.up

    heading = math.degrees(math.atan2(forward[0], forward[2]))
    if heading < 0:
        heading += 360.0
    # atan2 can round to exactly 360 for tiny negative angles
    if heading >= 360.0:
        heading -= 360.0

    roll = math.degrees(math.atan2(up[0], up[1]))
    pitch = math.degrees(math.asin(safe_clamp(float(forward[1]), -1.0, 1.0)))

    return FlightInstruments(
        altitude=aircraft.altitude,
        airspeed=float(np.linalg.norm(aircraft.velocity)),
        vertical_speed=float(aircraft.velocity[1]),
        heading=heading,
        roll=roll,
        pitch=pitch,
    )
