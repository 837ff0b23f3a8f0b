"""Environment models for flight simulation.

Provides the per-mission weather description, including the wind vector
fed to the dynamics engine.

Example:
    >>> from skyrun.environment import EnvironmentConditions
    >>>
    >>> env = EnvironmentConditions(wind_direction=np.array([1.0, 0.0, 1.0]), wind_speed=5.0)
    >>> wind = env.wind_vector  # [m/s]
"""

from skyrun.environment.conditions import EnvironmentConditions

__all__ = [
    "EnvironmentConditions",
]
