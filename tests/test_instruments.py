"""Unit tests for HUD instrument values."""

import math

import numpy as np
import pytest

from skyrun.dynamics import Aircraft, quaternion_from_euler
from skyrun.dynamics.vector_math import INT64_MAX
from skyrun.simulation import FlightInstruments, InstrumentReadout, read_instruments


class TestReadInstruments:
    """Test instrument derivation from aircraft state."""

    def test_level_identity(self):
        hud = read_instruments(Aircraft.at_rest())

        assert hud.altitude == 100.0
        assert hud.airspeed == 0.0
        assert hud.vertical_speed == 0.0
        assert hud.heading == pytest.approx(0.0)
        assert hud.roll == pytest.approx(0.0)
        assert hud.pitch == pytest.approx(0.0)

    def test_heading_east(self):
        aircraft = Aircraft.at_rest(rotation=quaternion_from_euler(heading=math.pi / 2))
        assert read_instruments(aircraft).heading == pytest.approx(90.0)

    def test_heading_wraps_to_positive(self):
        aircraft = Aircraft.at_rest(rotation=quaternion_from_euler(heading=-math.pi / 2))
        assert read_instruments(aircraft).heading == pytest.approx(270.0)

    def test_pitch(self):
        aircraft = Aircraft.at_rest(rotation=quaternion_from_euler(pitch=0.3))
        assert read_instruments(aircraft).pitch == pytest.approx(math.degrees(0.3))

    def test_roll_right_wing_down_is_positive(self):
        aircraft = Aircraft.at_rest(rotation=quaternion_from_euler(roll=0.5))
        assert read_instruments(aircraft).roll == pytest.approx(math.degrees(0.5))

    def test_speeds(self):
        aircraft = Aircraft.at_rest()
        aircraft.velocity = np.array([3.0, 4.0, 0.0])

        hud = read_instruments(aircraft)

        assert hud.airspeed == pytest.approx(5.0)
        assert hud.vertical_speed == 4.0


class TestWholeNumbers:
    """Test integer HUD readout."""

    def test_truncates(self):
        hud = FlightInstruments(
            altitude=99.9,
            airspeed=-3.7,
            vertical_speed=0.2,
            heading=359.99,
            roll=-12.5,
            pitch=45.0,
        )
        assert hud.whole_numbers() == InstrumentReadout(99, -3, 0, 359, -12, 45)

    def test_degenerate_values_saturate(self):
        hud = FlightInstruments(
            altitude=float("nan"),
            airspeed=float("inf"),
            vertical_speed=1e30,
            heading=0.0,
            roll=0.0,
            pitch=0.0,
        )
        readout = hud.whole_numbers()

        assert readout.altitude == 0
        assert readout.airspeed == INT64_MAX
        assert readout.vertical_speed == INT64_MAX
