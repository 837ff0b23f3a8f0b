"""Vector and quaternion utilities with degenerate-input guards.

Every helper here is safe to call from inside the per-tick update: NaN,
near-zero vectors and drifting quaternions are replaced with usable
defaults instead of propagating through the simulation.

Conventions:
- Vectors are float64 arrays of shape (3,), Y axis up, Z axis forward.
- Quaternions are scalar-first: q = [w, x, y, z].
- Quaternion products are Hamilton products; q1 * q2 applies q2 first
  when rotating a vector.
"""

import logging
import math

import numpy as np
from beartype import beartype
from numpy.typing import NDArray

logger = logging.getLogger(__name__)

# =============================================================================
# Constants
# =============================================================================

WORLD_RIGHT = np.array([1.0, 0.0, 0.0])
WORLD_UP = np.array([0.0, 1.0, 0.0])
WORLD_FORWARD = np.array([0.0, 0.0, 1.0])
IDENTITY_QUATERNION = np.array([1.0, 0.0, 0.0, 0.0])

MIN_DIRECTION_LENGTH = 1e-3
QUATERNION_ZERO_TOLERANCE = 1e-5
QUATERNION_NORM_TOLERANCE = 1e-3

INT64_MAX = 2**63 - 1
INT64_MIN = -(2**63)


# =============================================================================
# Scalar Guards
# =============================================================================


@beartype
def safe_clamp(value: float, lo: float, hi: float) -> float:
    """Clamp value to [lo, hi].

    NaN maps to 0.0 clamped into the range, so a corrupted control input
    lands on neutral rather than a surface stop.

    Raises:
        ValueError: If lo > hi.
    """
    if lo > hi:
        raise ValueError(f"Invalid clamp range: lo={lo} > hi={hi}")
    if math.isnan(value):
        value = 0.0
    return float(min(max(value, lo), hi))


@beartype
def safe_truncate_to_int(value: float) -> int:
    """Truncate a float toward zero, saturating at the int64 range.

    NaN becomes 0, +inf and overflow become INT64_MAX, -inf and underflow
    become INT64_MIN.
    """
    if math.isnan(value):
        return 0
    if value >= INT64_MAX:
        return INT64_MAX
    if value <= INT64_MIN:
        return INT64_MIN
    return int(value)


# =============================================================================
# Vector Utilities
# =============================================================================


@beartype
def safe_normalize(
    v: NDArray[np.float64],
    fallback: NDArray[np.float64],
) -> NDArray[np.float64]:
    """Normalize a vector, returning fallback for NaN or near-zero input.

    Args:
        v: Vector to normalize
        fallback: Direction to use when v has no usable direction

    Returns:
        Unit vector along v, or a copy of fallback
    """
    if np.isnan(v).any():
        return fallback.copy()
    length = float(np.linalg.norm(v))
    if length < MIN_DIRECTION_LENGTH:
        return fallback.copy()
    return v / length


@beartype
def finite_or_zero(v: NDArray[np.float64]) -> NDArray[np.float64]:
    """Replace non-finite components of a vector with zero."""
    if np.isfinite(v).all():
        return v
    logger.debug("Replacing non-finite vector components: %s", v)
    return np.where(np.isfinite(v), v, 0.0)


# =============================================================================
# Quaternion Utilities
# =============================================================================


@beartype
def normalize_quaternion(q: NDArray[np.float64]) -> NDArray[np.float64]:
    """Normalize a quaternion to unit length."""
    norm = np.linalg.norm(q)
    if norm < 1e-10:
        return IDENTITY_QUATERNION.copy()
    return q / norm


@beartype
def validate_quaternion(q: NDArray[np.float64]) -> NDArray[np.float64]:
    """Return an orientation that is safe to integrate.

    - Any NaN component, or all components within 1e-5 of zero: identity.
    - Magnitude more than 1e-3 away from 1: renormalized.
    - Otherwise the input is returned unchanged.
    """
    if np.isnan(q).any() or np.all(np.abs(q) < QUATERNION_ZERO_TOLERANCE):
        logger.debug("Degenerate quaternion %s replaced with identity", q)
        return IDENTITY_QUATERNION.copy()
    if not np.isfinite(q).all():
        logger.debug("Infinite quaternion %s replaced with identity", q)
        return IDENTITY_QUATERNION.copy()
    norm = float(np.linalg.norm(q))
    if abs(norm - 1.0) > QUATERNION_NORM_TOLERANCE:
        return q / norm
    return q


@beartype
def quaternion_multiply(q1: NDArray[np.float64], q2: NDArray[np.float64]) -> NDArray[np.float64]:
    """Multiply two quaternions (Hamilton product).

    Args:
        q1: First quaternion [w, x, y, z]
        q2: Second quaternion [w, x, y, z]

    Returns:
        Product quaternion q1 * q2
    """
    w1, x1, y1, z1 = q1
    w2, x2, y2, z2 = q2

    return np.array([
        w1*w2 - x1*x2 - y1*y2 - z1*z2,
        w1*x2 + x1*w2 + y1*z2 - z1*y2,
        w1*y2 - x1*z2 + y1*w2 + z1*x2,
        w1*z2 + x1*y2 - y1*x2 + z1*w2,
    ])


@beartype
def quaternion_from_axis_angle(angle: float, axis: NDArray[np.float64]) -> NDArray[np.float64]:
    """Build the quaternion rotating by angle [rad] about axis.

    A degenerate axis yields the identity rotation.
    """
    unit_axis = safe_normalize(axis, np.zeros(3))
    if not unit_axis.any():
        return IDENTITY_QUATERNION.copy()
    half = 0.5 * angle
    s = math.sin(half)
    return np.array([math.cos(half), unit_axis[0] * s, unit_axis[1] * s, unit_axis[2] * s])


@beartype
def rotate_vector(q: NDArray[np.float64], v: NDArray[np.float64]) -> NDArray[np.float64]:
    """Rotate vector v by unit quaternion q (computes q v q*)."""
    w = q[0]
    u = q[1:4]
    t = 2.0 * np.cross(u, v)
    return v + w * t + np.cross(u, t)


@beartype
def quaternion_from_euler(
    heading: float = 0.0,
    pitch: float = 0.0,
    roll: float = 0.0,
) -> NDArray[np.float64]:
    """Build an orientation from heading, pitch and roll [rad].

    Heading turns about world up (0 faces +Z, pi/2 faces +X), pitch raises
    the nose, roll banks right wing down.

    Returns:
        Quaternion [w, x, y, z]
    """
    q_heading = quaternion_from_axis_angle(heading, WORLD_UP)
    q_pitch = quaternion_from_axis_angle(-pitch, WORLD_RIGHT)
    q_roll = quaternion_from_axis_angle(-roll, WORLD_FORWARD)
    q = quaternion_multiply(quaternion_multiply(q_heading, q_pitch), q_roll)
    return normalize_quaternion(q)
