"""Step-driven flight session tying dynamics, missions and game state together.

The session owns the game state, the aircraft, the dynamics engine and the
mission tracker. The host application owns the loop and calls step() once
per frame; presentation code only reads state back and writes requested
control inputs.

Architecture:
    The host calls:
    - session.set_inputs(inputs)  -> requested control targets
    - session.step(dt)            -> advance physics and mission, get events
    - session.instruments         -> HUD values
    - session.progress            -> mission progress snapshot

Mission time is simulated time accumulated from dt while PLAYING, so
paused time never counts against a time limit.

Example:
    >>> from skyrun.simulation import FlightSession, GameState
    >>> from skyrun.mission import get_mission
    >>> from skyrun.dynamics import ControlInputs
    >>>
    >>> session = FlightSession()
    >>> session.start(get_mission("training"))
    >>> session.set_inputs(ControlInputs(throttle=0.8))
    >>>
    >>> while session.state is GameState.PLAYING:
    ...     events = session.step(1.0 / 60.0)
"""

import logging
import math
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple

from beartype import beartype

from skyrun.difficulty import Difficulty
from skyrun.dynamics.engine import FlightDynamicsEngine, PhysicsConfig
from skyrun.dynamics.state import Aircraft, AircraftClass, ControlInputs
from skyrun.mission.catalog import FREE_FLIGHT
from skyrun.mission.events import MissionCompleted, MissionEvent, MissionFailed
from skyrun.mission.mission import Mission
from skyrun.mission.progress import MissionProgress
from skyrun.mission.tracker import MissionProgressTracker
from skyrun.simulation.instruments import FlightInstruments, read_instruments

logger = logging.getLogger(__name__)

# =============================================================================
# Configuration
# =============================================================================


@beartype
@dataclass(frozen=True)
class SessionConfig:
    """Session configuration.

    Attributes:
        physics: Constants passed to the dynamics engine
        record_history: Keep one telemetry sample per step
    """
    physics: PhysicsConfig = field(default_factory=PhysicsConfig)
    record_history: bool = True


# =============================================================================
# Game State
# =============================================================================


class GameState(Enum):
    """Top-level game states."""

    MENU = "menu"
    BRIEFING = "briefing"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"
    MISSION_COMPLETE = "mission_complete"


class TelemetrySample(NamedTuple):
    """State recorded after one step."""
    time: float
    x: float
    y: float
    z: float
    vx: float
    vy: float
    vz: float
    airspeed: float
    throttle: float
    score: int
    checkpoints_completed: int


# =============================================================================
# Session
# =============================================================================


@beartype
class FlightSession:
    """One pilot, one aircraft, one mission at a time.

    Example:
        >>> session = FlightSession(aircraft_class=AircraftClass.FIGHTER)
        >>> session.start(CANYON_RUN)
        >>> session.step(1.0 / 60.0)
        >>> session.pause()
        >>> session.resume()
    """

    def __init__(
        self,
        mission: Mission | None = None,
        aircraft_class: AircraftClass = AircraftClass.LIGHT,
        config: SessionConfig | None = None,
    ) -> None:
        """Initialize session in the MENU state.

        Args:
            mission: Mission to fly by default (default: free flight)
            aircraft_class: Aircraft type
            config: Session configuration
        """
        self.config = config or SessionConfig()
        self._mission = mission or FREE_FLIGHT
        self._aircraft_class = aircraft_class
        self._engine = FlightDynamicsEngine(
            aircraft_class,
            config=self.config.physics,
            difficulty=self._mission.difficulty,
        )
        self._aircraft = self._spawn_aircraft()
        self._inputs = ControlInputs()
        self._mission_time = 0.0
        self._tracker = MissionProgressTracker(self._mission, clock=self._mission_clock)
        self._state = GameState.MENU
        self._outbox: deque[MissionEvent] = deque()
        self._history: list[TelemetrySample] = []

    # -------------------------------------------------------------------------
    # State transitions
    # -------------------------------------------------------------------------

    def brief(self, mission: Mission | None = None) -> bool:
        """Select a mission and show its briefing.

        Returns:
            True if the session moved to BRIEFING
        """
        if self._state in (GameState.PLAYING, GameState.PAUSED):
            logger.debug("Ignoring briefing request while %s", self._state.value)
            return False
        if mission is not None:
            self._mission = mission
        self._set_state(GameState.BRIEFING)
        return True

    def start(
        self,
        mission: Mission | None = None,
        aircraft_class: AircraftClass | None = None,
        difficulty: Difficulty | None = None,
    ) -> None:
        """Start a mission from a clean slate.

        Args:
            mission: Mission to fly (default: the selected mission)
            aircraft_class: Aircraft type (default: mission requirement, else current)
            difficulty: Override for the mission's difficulty

        Raises:
            ValueError: If aircraft_class conflicts with the mission's requirement.
        """
        if mission is not None:
            self._mission = mission
        if difficulty is not None:
            self._mission = self._mission.with_difficulty(difficulty)

        required = self._mission.required_aircraft
        if aircraft_class is None:
            aircraft_class = required or self._aircraft_class
        elif required is not None and aircraft_class is not required:
            raise ValueError(
                f"Mission '{self._mission.id}' requires {required.value}, got {aircraft_class.value}"
            )

        if aircraft_class is not self._aircraft_class:
            self._aircraft_class = aircraft_class
            self._engine = FlightDynamicsEngine(aircraft_class, config=self.config.physics)
        self._engine.set_difficulty(self._mission.difficulty)

        self._aircraft = self._spawn_aircraft()
        self._inputs = ControlInputs()
        self._mission_time = 0.0
        self._outbox.clear()
        self._history = []

        self._tracker = MissionProgressTracker(self._mission, clock=self._mission_clock)
        self._tracker.start()
        self._set_state(GameState.PLAYING)

    def retry(self) -> None:
        """Restart the current mission; nothing carries over."""
        self.start()

    def pause(self) -> bool:
        """Pause if playing. Returns True if the state changed."""
        if self._state is not GameState.PLAYING:
            return False
        self._set_state(GameState.PAUSED)
        return True

    def resume(self) -> bool:
        """Resume if paused. Returns True if the state changed."""
        if self._state is not GameState.PAUSED:
            return False
        self._set_state(GameState.PLAYING)
        return True

    def return_to_menu(self) -> None:
        """Abandon any flight and go back to the menu."""
        self._set_state(GameState.MENU)

    # -------------------------------------------------------------------------
    # Simulation
    # -------------------------------------------------------------------------

    def set_inputs(self, inputs: ControlInputs) -> None:
        """Set requested control targets; the engine eases toward them."""
        self._inputs = inputs.clamped()

    def step(self, dt: float) -> list[MissionEvent]:
        """Advance one frame.

        Args:
            dt: Wall-clock time since the previous frame [s]

        Returns:
            Mission events produced this frame (empty unless PLAYING)
        """
        if self._state is not GameState.PLAYING:
            return []
        if not math.isfinite(dt) or dt <= 0:
            logger.debug("Ignoring step with invalid dt=%r", dt)
            return []

        self._mission_time += dt

        wind = self._mission.environment.wind_vector
        self._engine.update(self._aircraft, dt, wind=wind, inputs=self._inputs)

        events = self._tracker.update(self._aircraft)
        for event in events:
            if isinstance(event, MissionCompleted):
                self._set_state(GameState.MISSION_COMPLETE)
            elif isinstance(event, MissionFailed):
                self._set_state(GameState.GAME_OVER)
        self._outbox.extend(events)

        if self.config.record_history:
            self._record()
        return events

    def poll_events(self) -> list[MissionEvent]:
        """Drain and return every event not yet polled."""
        events = list(self._outbox)
        self._outbox.clear()
        return events

    # -------------------------------------------------------------------------
    # Read-only views
    # -------------------------------------------------------------------------

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def mission(self) -> Mission:
        return self._mission

    @property
    def aircraft_class(self) -> AircraftClass:
        return self._aircraft_class

    @property
    def aircraft(self) -> Aircraft:
        """Copy of the aircraft state; mutating it has no effect."""
        return self._aircraft.copy()

    @property
    def inputs(self) -> ControlInputs:
        return self._inputs

    @property
    def engine(self) -> FlightDynamicsEngine:
        return self._engine

    @property
    def tracker(self) -> MissionProgressTracker:
        return self._tracker

    @property
    def mission_time(self) -> float:
        """Simulated seconds flown in the current mission [s]."""
        return self._mission_time

    @property
    def progress(self) -> MissionProgress:
        return self._tracker.snapshot()

    @property
    def instruments(self) -> FlightInstruments:
        return read_instruments(self._aircraft)

    @property
    def history(self) -> list[TelemetrySample]:
        return list(self._history)

    def to_dataframe(self):
        """Convert recorded telemetry to a Polars DataFrame."""
        import polars as pl

        return pl.DataFrame(
            self._history,
            schema=list(TelemetrySample._fields),
            orient="row",
        )

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _mission_clock(self) -> float:
        return self._mission_time

    def _spawn_aircraft(self) -> Aircraft:
        return Aircraft.for_class(
            self._aircraft_class,
            position=self._mission.start_position,
            rotation=self._mission.start_rotation,
        )

    def _set_state(self, state: GameState) -> None:
        if state is not self._state:
            logger.info("Game state %s -> %s", self._state.value, state.value)
        self._state = state

    def _record(self) -> None:
        a = self._aircraft
        progress = self._tracker.snapshot()
        self._history.append(TelemetrySample(
            time=self._mission_time,
            x=float(a.position[0]),
            y=float(a.position[1]),
            z=float(a.position[2]),
            vx=float(a.velocity[0]),
            vy=float(a.velocity[1]),
            vz=float(a.velocity[2]),
            airspeed=a.speed,
            throttle=float(a.throttle),
            score=progress.score,
            checkpoints_completed=progress.checkpoints_completed,
        ))
