#!/usr/bin/env python
"""Basic flight dynamics example for Skyrun.

This example drives the dynamics engine directly, without missions:

1. Create a light aircraft at rest, 100 m up
2. Push the throttle to full and let the engine ease toward it
3. Step the engine at 60 Hz for five seconds
4. Print the forces and state at each second
"""

import numpy as np

from skyrun.dynamics import Aircraft, AircraftClass, ControlInputs, FlightDynamicsEngine

DT = 1.0 / 60.0


def main() -> None:
    """Run the basic flight example."""

    print("=" * 60)
    print("BASIC FLIGHT DYNAMICS")
    print("=" * 60)

    engine = FlightDynamicsEngine(AircraftClass.LIGHT)
    aircraft = Aircraft.for_class(AircraftClass.LIGHT)
    inputs = ControlInputs(throttle=1.0)

    coeffs = engine.coefficients
    print(f"\nAircraft class:  {engine.aircraft_class.value}")
    print(f"Wing area:       {coeffs.wing_area:.1f} m^2")
    print(f"Aspect ratio:    {coeffs.aspect_ratio:.2f}")
    print(f"Weight:          {aircraft.weight:.0f} N")
    print(f"Stability assist: {engine.stability_assist:.1f}")

    print("\n   t [s]   alt [m]   speed [m/s]   AoA [deg]   throttle")
    print("-" * 60)

    for tick in range(1, 5 * 60 + 1):
        engine.update(aircraft, DT, inputs=inputs)

        if tick % 60 == 0:
            forces = engine.last_forces
            aoa = np.degrees(forces.angle_of_attack) if forces is not None else 0.0
            print(
                f"   {tick * DT:5.1f}   {aircraft.altitude:7.1f}   {aircraft.speed:11.2f}"
                f"   {aoa:9.2f}   {aircraft.throttle:8.3f}"
            )

    finite = bool(np.isfinite(aircraft.position).all() and np.isfinite(aircraft.velocity).all())
    print()
    print(f"State finite:       {finite}")
    print(f"Quaternion norm:    {np.linalg.norm(aircraft.rotation):.6f}")

    print()
    print("=" * 60)
    print("Flight complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
