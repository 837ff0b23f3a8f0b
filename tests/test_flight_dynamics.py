"""Unit tests for the flight dynamics engine.

Tests force model signs, degenerate-input guards, control smoothing and
stability assist behavior.
"""

import math

import numpy as np
import pytest
from numpy.testing import assert_allclose

from skyrun.difficulty import Difficulty
from skyrun.dynamics import (
    Aircraft,
    AircraftClass,
    ControlInputs,
    FlightDynamicsEngine,
    PhysicsConfig,
    angle_of_attack,
    dynamic_pressure,
    quaternion_from_euler,
)

DT = 1.0 / 60.0


def cruising_aircraft(speed: float = 50.0, rotation=None) -> Aircraft:
    """Light aircraft moving along +Z at the given speed."""
    aircraft = Aircraft.for_class(AircraftClass.LIGHT, rotation=rotation)
    aircraft.velocity = np.array([0.0, 0.0, speed])
    return aircraft


# =============================================================================
# Configuration Tests
# =============================================================================


class TestPhysicsConfig:
    """Test physics configuration validation."""

    def test_defaults(self):
        config = PhysicsConfig()
        assert config.air_density == 1.225
        assert config.gravity == 9.81
        assert config.max_thrust == 50000.0
        assert config.input_smoothing == 0.2

    def test_invalid_smoothing_raises(self):
        with pytest.raises(ValueError, match="input_smoothing"):
            PhysicsConfig(input_smoothing=0.0)

    def test_negative_gravity_raises(self):
        with pytest.raises(ValueError, match="gravity"):
            PhysicsConfig(gravity=-9.81)

    def test_invalid_density_raises(self):
        with pytest.raises(ValueError, match="air_density"):
            PhysicsConfig(air_density=0.0)


# =============================================================================
# Aerodynamic Helper Tests
# =============================================================================


class TestAerodynamicHelpers:
    """Test angle of attack and dynamic pressure."""

    def test_dynamic_pressure(self):
        assert_allclose(dynamic_pressure(1.225, 10.0), 61.25)

    def test_aligned_airflow_is_zero(self):
        forward = np.array([0.0, 0.0, 1.0])
        assert_allclose(angle_of_attack(forward, forward), 0.0, atol=1e-12)

    def test_descending_airflow_is_positive(self):
        """Air coming from below the nose gives positive angle of attack."""
        forward = np.array([0.0, 0.0, 1.0])
        airflow = np.array([0.0, -0.1, 1.0])
        airflow /= np.linalg.norm(airflow)

        alpha = angle_of_attack(forward, airflow)
        assert alpha > 0
        assert_allclose(alpha, math.atan(0.1))

    def test_climbing_airflow_is_negative(self):
        forward = np.array([0.0, 0.0, 1.0])
        airflow = np.array([0.0, 0.1, 1.0])
        airflow /= np.linalg.norm(airflow)

        assert_allclose(angle_of_attack(forward, airflow), -math.atan(0.1))


# =============================================================================
# Low Speed Tests
# =============================================================================


class TestLowSpeed:
    """Test gravity-only behavior below the airspeed threshold."""

    def test_gravity_only_from_rest(self):
        engine = FlightDynamicsEngine(AircraftClass.LIGHT)
        aircraft = Aircraft.for_class(AircraftClass.LIGHT)
        aircraft.throttle = 1.0
        rotation = aircraft.rotation.copy()

        engine.update(aircraft, 0.1)

        assert_allclose(aircraft.velocity, [0.0, -0.981, 0.0])
        assert_allclose(aircraft.position, [0.0, 100.0 - 0.0981, 0.0])
        assert_allclose(aircraft.rotation, rotation)

        forces = engine.last_forces
        assert_allclose(forces.thrust, np.zeros(3))
        assert_allclose(forces.lift, np.zeros(3))
        assert forces.dynamic_pressure == 0.0

    def test_wind_counts_toward_airspeed(self):
        engine = FlightDynamicsEngine(AircraftClass.LIGHT)
        aircraft = Aircraft.for_class(AircraftClass.LIGHT)

        engine.update(aircraft, DT, wind=np.array([10.0, 0.0, 0.0]))

        assert_allclose(engine.last_forces.airspeed, 10.0)
        assert engine.last_forces.dynamic_pressure > 0


# =============================================================================
# Time Step Tests
# =============================================================================


class TestTimeStep:
    """Test handling of unusual time steps."""

    @pytest.mark.parametrize("dt", [0.0, -1.0, float("nan"), float("inf")])
    def test_invalid_dt_is_noop(self, dt):
        engine = FlightDynamicsEngine()
        aircraft = cruising_aircraft()
        before = aircraft.copy()

        engine.update(aircraft, dt)

        assert_allclose(aircraft.position, before.position)
        assert_allclose(aircraft.velocity, before.velocity)
        assert_allclose(aircraft.rotation, before.rotation)

    @pytest.mark.parametrize("dt", [0.5, 2.0])
    def test_long_step_integrates_full_dt(self, dt):
        """A long frame is integrated as given, not shortened."""
        engine = FlightDynamicsEngine()
        aircraft = Aircraft.for_class(AircraftClass.LIGHT)

        engine.update(aircraft, dt)

        assert_allclose(aircraft.velocity, [0.0, -9.81 * dt, 0.0])
        assert_allclose(aircraft.position, [0.0, 100.0 - 9.81 * dt * dt, 0.0])


# =============================================================================
# Degenerate State Tests
# =============================================================================


class TestDegenerateState:
    """Test that corrupted state never propagates."""

    def test_nan_state_is_sanitized(self):
        engine = FlightDynamicsEngine()
        aircraft = Aircraft.for_class(AircraftClass.LIGHT)
        aircraft.position = np.array([np.nan, 100.0, np.nan])
        aircraft.velocity = np.full(3, np.nan)
        aircraft.rotation = np.full(4, np.nan)
        aircraft.throttle = float("nan")
        aircraft.aileron = float("nan")

        engine.update(aircraft, DT)

        assert np.isfinite(aircraft.position).all()
        assert np.isfinite(aircraft.velocity).all()
        assert_allclose(aircraft.rotation, [1.0, 0.0, 0.0, 0.0])
        assert aircraft.throttle == 0.0
        assert aircraft.aileron == 0.0

    def test_overflow_stops_aircraft(self):
        engine = FlightDynamicsEngine()
        aircraft = Aircraft.for_class(AircraftClass.LIGHT)
        aircraft.velocity = np.array([1e308, 1e308, 0.0])

        with np.errstate(all="ignore"):
            engine.update(aircraft, DT)

        assert_allclose(aircraft.velocity, np.zeros(3))
        assert_allclose(aircraft.position, [0.0, 100.0, 0.0])
        assert np.isfinite(aircraft.rotation).all()

    def test_out_of_range_controls_are_clamped(self):
        engine = FlightDynamicsEngine()
        aircraft = cruising_aircraft()
        aircraft.throttle = 5.0
        aircraft.rudder = -3.0

        engine.update(aircraft, DT)

        assert aircraft.throttle == 1.0
        assert aircraft.rudder == -1.0


# =============================================================================
# Control Tests
# =============================================================================


class TestControlSmoothing:
    """Test easing of smoothed controls toward requested inputs."""

    def test_one_tick_closes_twenty_percent(self):
        engine = FlightDynamicsEngine()
        aircraft = Aircraft.for_class(AircraftClass.LIGHT)

        engine.smooth_controls(aircraft, ControlInputs(throttle=1.0, aileron=-1.0))

        assert_allclose(aircraft.throttle, 0.2)
        assert_allclose(aircraft.aileron, -0.2)
        assert aircraft.elevator == 0.0

    def test_two_ticks(self):
        engine = FlightDynamicsEngine()
        aircraft = Aircraft.for_class(AircraftClass.LIGHT)
        inputs = ControlInputs(throttle=1.0)

        engine.smooth_controls(aircraft, inputs)
        engine.smooth_controls(aircraft, inputs)

        assert_allclose(aircraft.throttle, 0.36)

    def test_update_applies_smoothing(self):
        engine = FlightDynamicsEngine()
        aircraft = Aircraft.for_class(AircraftClass.LIGHT)

        engine.update(aircraft, DT, inputs=ControlInputs(throttle=1.0))

        assert_allclose(aircraft.throttle, 0.2)

    def test_positive_elevator_lowers_nose(self):
        engine = FlightDynamicsEngine(difficulty=Difficulty.REALISTIC)
        aircraft = cruising_aircraft()
        aircraft.elevator = 1.0

        engine.update(aircraft, DT)

        assert aircraft.forward[1] < 0

    def test_positive_aileron_raises_right_wing(self):
        engine = FlightDynamicsEngine(difficulty=Difficulty.REALISTIC)
        aircraft = cruising_aircraft()
        aircraft.aileron = 1.0

        engine.update(aircraft, DT)

        assert aircraft.right[1] > 0


class TestStabilityAssist:
    """Test the wings-level assist."""

    def test_difficulty_sets_assist(self):
        engine = FlightDynamicsEngine()
        assert engine.stability_assist == 0.3

        engine.set_difficulty(Difficulty.EASY)
        assert engine.stability_assist == 0.7

        engine.set_difficulty(Difficulty.REALISTIC)
        assert engine.stability_assist == 0.0

    def test_direct_assist_is_clamped(self):
        engine = FlightDynamicsEngine()
        engine.set_stability_assist(2.0)
        assert engine.stability_assist == 1.0

    def test_assist_reduces_bank(self):
        rotation = quaternion_from_euler(roll=0.5)

        assisted = FlightDynamicsEngine()
        assisted.set_stability_assist(1.0)
        unassisted = FlightDynamicsEngine(difficulty=Difficulty.REALISTIC)

        a = cruising_aircraft(rotation=rotation)
        b = cruising_aircraft(rotation=rotation)
        for _ in range(60):
            assisted.update(a, DT)
            unassisted.update(b, DT)

        assert abs(a.right[1]) < abs(b.right[1])

    def test_level_flight_stays_level(self):
        engine = FlightDynamicsEngine()
        engine.set_stability_assist(1.0)
        aircraft = cruising_aircraft()

        for _ in range(60):
            engine.update(aircraft, DT)

        assert_allclose(aircraft.right[1], 0.0, atol=1e-9)


# =============================================================================
# Flight Tests
# =============================================================================


class TestFlight:
    """Test multi-second flights."""

    def test_full_throttle_five_seconds(self):
        """Light aircraft at rest, full throttle, 300 ticks at 60 Hz."""
        engine = FlightDynamicsEngine(AircraftClass.LIGHT)
        aircraft = Aircraft.for_class(AircraftClass.LIGHT)
        inputs = ControlInputs(throttle=1.0)

        for _ in range(300):
            engine.update(aircraft, DT, inputs=inputs)

        assert np.isfinite(aircraft.position).all()
        assert np.isfinite(aircraft.velocity).all()
        assert aircraft.position[2] > 10.0
        assert aircraft.speed > 0.0
        assert_allclose(aircraft.throttle, 1.0, atol=1e-6)

    def test_quaternion_stays_unit_under_controls(self):
        engine = FlightDynamicsEngine(AircraftClass.FIGHTER)
        aircraft = Aircraft.for_class(AircraftClass.FIGHTER)
        inputs = ControlInputs(throttle=1.0, aileron=0.5, elevator=-0.3, rudder=0.2)

        for _ in range(300):
            engine.update(aircraft, DT, wind=np.array([3.0, 0.0, 1.0]), inputs=inputs)
            assert abs(np.linalg.norm(aircraft.rotation) - 1.0) <= 1e-3

        assert np.isfinite(aircraft.position).all()

    def test_forces_recorded(self):
        engine = FlightDynamicsEngine()
        aircraft = cruising_aircraft()
        aircraft.throttle = 0.5

        engine.update(aircraft, DT)

        forces = engine.last_forces
        assert_allclose(forces.airspeed, 50.0)
        assert_allclose(forces.thrust, [0.0, 0.0, 25000.0])
        assert forces.drag[2] < 0
        assert_allclose(forces.weight, [0.0, -1200.0 * 9.81, 0.0])
        assert_allclose(forces.total, forces.lift + forces.drag + forces.thrust + forces.weight)
