"""Simulation module for step-driven flight sessions.

Provides the session driver where host code owns the frame loop and the
session maintains aircraft, mission and game state.

Example:
    >>> from skyrun.simulation import FlightSession, GameState
    >>> from skyrun.dynamics import ControlInputs
    >>>
    >>> session = FlightSession()
    >>> session.start()
    >>> session.set_inputs(ControlInputs(throttle=0.8))
    >>>
    >>> # Host loop
    >>> for _ in range(600):
    ...     events = session.step(1.0 / 60.0)
    ...     hud = session.instruments.whole_numbers()
"""

from skyrun.simulation.instruments import (
    FlightInstruments,
    InstrumentReadout,
    read_instruments,
)
from skyrun.simulation.session import (
    FlightSession,
    GameState,
    SessionConfig,
    TelemetrySample,
)

__all__ = [
    "FlightInstruments",
    "FlightSession",
    "GameState",
    "InstrumentReadout",
    "SessionConfig",
    "TelemetrySample",
    "read_instruments",
]
