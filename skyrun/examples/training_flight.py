#!/usr/bin/env python
"""Training mission example.

Flies the built-in training mission with a simple altitude-hold autopilot
standing in for the pilot:

1. Start a session on the training mission
2. Each frame, set throttle and elevator from the altitude error
3. Step the session until the mission ends or a minute passes
4. Print events as they arrive and the final progress
"""

from skyrun import ControlInputs, FlightSession, GameState, get_mission
from skyrun.dynamics import safe_clamp
from skyrun.mission import CheckpointReached, MissionCompleted, MissionFailed

DT = 1.0 / 60.0
TARGET_ALTITUDE = 100.0  # [m]
ALTITUDE_GAIN = 0.02     # elevator per meter of error
MAX_TIME = 60.0          # [s]


def autopilot(altitude: float) -> ControlInputs:
    """Full throttle, elevator proportional to altitude error.

    Positive elevator pitches the nose down.
    """
    error = altitude - TARGET_ALTITUDE
    return ControlInputs(throttle=1.0, elevator=safe_clamp(error * ALTITUDE_GAIN, -0.5, 0.5))


def main() -> None:
    """Run the training mission example."""

    mission = get_mission("training")

    print("=" * 60)
    print(f"MISSION: {mission.name.upper()}")
    print("=" * 60)
    print(f"\n{mission.description}")
    print(f"Checkpoints: {mission.checkpoint_count}")
    print(f"Difficulty:  {mission.difficulty.value}")

    session = FlightSession()
    session.brief(mission)
    session.start()

    print("\nFlying...")
    while session.state is GameState.PLAYING and session.mission_time < MAX_TIME:
        session.set_inputs(autopilot(session.aircraft.altitude))
        for event in session.step(DT):
            if isinstance(event, CheckpointReached):
                print(f"   Checkpoint {event.checkpoint.id} reached (+{event.score_delta})")
            elif isinstance(event, MissionCompleted):
                print("   Mission complete")
            elif isinstance(event, MissionFailed):
                print(f"   Mission failed: {event.reason}")

    hud = session.instruments.whole_numbers()
    progress = session.progress

    print("\nResults:")
    print("-" * 40)
    print(f"   State:        {session.state.value}")
    print(f"   Checkpoints:  {progress.checkpoints_completed}/{progress.total_checkpoints}")
    print(f"   Score:        {progress.score}")
    print(f"   Time:         {progress.elapsed_seconds} s")
    print(f"   Altitude:     {hud.altitude} m")
    print(f"   Airspeed:     {hud.airspeed} m/s")
    print(f"   Heading:      {hud.heading} deg")

    print()
    print("=" * 60)
    print("Training flight finished!")
    print("=" * 60)


if __name__ == "__main__":
    main()
