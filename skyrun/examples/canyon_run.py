#!/usr/bin/env python
"""Canyon run telemetry example.

Flies the canyon mission at realistic difficulty with a pause in the
middle, then saves the recorded telemetry:

1. Start the canyon mission with a difficulty override
2. Fly 20 seconds, pause for a few frames, resume
3. Convert the telemetry history to a DataFrame
4. Summarize and save it as CSV
"""

from pathlib import Path

from skyrun import ControlInputs, Difficulty, FlightSession, get_mission
from skyrun.dynamics import safe_clamp

DT = 1.0 / 30.0
TARGET_ALTITUDE = 150.0  # [m]


def main() -> None:
    """Run the canyon run example."""

    print("=" * 60)
    print("CANYON RUN TELEMETRY")
    print("=" * 60)

    session = FlightSession()
    session.start(get_mission("canyon"), difficulty=Difficulty.REALISTIC)

    mission = session.mission
    print(f"\nMission:     {mission.name}")
    print(f"Time limit:  {mission.time_limit:.0f} s")
    print(f"Difficulty:  {mission.difficulty.value}")
    print(f"Wind:        {mission.environment.wind_vector.round(2)} m/s")

    def fly(seconds: float) -> None:
        for _ in range(int(seconds / DT)):
            error = session.aircraft.altitude - TARGET_ALTITUDE
            session.set_inputs(ControlInputs(
                throttle=0.8,
                elevator=safe_clamp(error * 0.02, -0.5, 0.5),
            ))
            session.step(DT)

    fly(10.0)
    session.pause()
    paused_at = session.mission_time
    for _ in range(30):
        session.step(DT)
    print(f"\nPaused at {paused_at:.2f} s, still {session.mission_time:.2f} s after 30 frames")
    session.resume()
    fly(10.0)

    df = session.to_dataframe()
    print(f"\nRecorded {df.height} samples")
    print(f"   Max altitude:  {df['y'].max():.1f} m")
    print(f"   Max airspeed:  {df['airspeed'].max():.1f} m/s")
    print(f"   Final score:   {session.progress.score}")
    print(f"   State:         {session.state.value}")

    output_dir = Path("outputs/canyon_run")
    output_dir.mkdir(parents=True, exist_ok=True)
    df.write_csv(output_dir / "telemetry.csv")
    print(f"\nData saved: {output_dir}/telemetry.csv")

    print()
    print("=" * 60)
    print("Telemetry complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
