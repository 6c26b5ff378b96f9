"""
Arc helpers for the position engine

Pure functions used to linearize a circular or helical arc: plane projection,
sweep normalization, step count selection and point generation.
"""

import math

import numpy as np

from .state import Plane

TWO_PI = 2 * math.pi

# Indices into (x, y, z) of the first in-plane axis, the second in-plane axis
# and the elevation axis. Arc centers (i, j, k) use the same indices.
PLANE_AXES: dict[Plane, tuple[int, int, int]] = {
    Plane.XY: (0, 1, 2),
    Plane.XZ: (2, 0, 1),
    Plane.YZ: (1, 2, 0),
}


def project(plane: Plane, xyz) -> tuple[float, float, float]:
    """Map an (x, y, z) triple to (in-plane 1, in-plane 2, elevation)."""
    a, b, c = PLANE_AXES[plane]
    return xyz[a], xyz[b], xyz[c]


def unproject(plane: Plane, a1: float, a2: float, a3: float) -> tuple[float, float, float]:
    """Inverse of :func:`project`."""
    a, b, c = PLANE_AXES[plane]
    xyz = [0.0, 0.0, 0.0]
    xyz[a], xyz[b], xyz[c] = a1, a2, a3
    return xyz[0], xyz[1], xyz[2]


def sweep_angle(theta1: float, theta2: float, clockwise: bool, turns: int = 0) -> float:
    """
    Signed angle swept from theta1 to theta2.

    The raw difference is moved by one full turn when its sign disagrees with
    the direction (negative for clockwise), then ``turns`` extra revolutions
    are added in the direction of travel.
    """
    sweep = theta2 - theta1
    if sweep < 0 and not clockwise:
        sweep += TWO_PI
    elif sweep > 0 and clockwise:
        sweep -= TWO_PI

    if clockwise:
        sweep -= TWO_PI * turns
    else:
        sweep += TWO_PI * turns
    return sweep


def arc_step_count(
    sweep: float,
    radius: float,
    rise: float,
    max_deviation: float,
    min_line_length: float,
) -> int:
    """
    Number of chords used to approximate an arc.

    The upper bound keeps the sagitta of every chord within ``max_deviation``;
    the count is then capped so that no chord of the helix (``rise`` is the
    elevation change) is shorter than ``min_line_length``.

    Returns 0 for a zero sweep or an arc shorter than ``min_line_length``.
    """
    if sweep == 0:
        return 0

    steps = 1
    if max_deviation < radius:
        steps = math.ceil(abs(sweep) / (2 * math.acos(1 - max_deviation / radius)))

    arc_length = abs(sweep) * math.sqrt(radius**2 + (rise / sweep) ** 2)
    steps = min(steps, math.floor(arc_length / min_line_length))
    return int(steps)


def interpolate_arc(
    center: tuple[float, float],
    radius: float,
    theta1: float,
    sweep: float,
    elevation: tuple[float, float],
    steps: int,
) -> np.ndarray:
    """
    Points along an arc in plane coordinates.

    Returns: array of shape (steps + 1, 3) holding (in-plane 1, in-plane 2,
    elevation) from the start angle to the end angle inclusive.
    """
    if steps < 1:
        raise ValueError("steps must be at least 1")
    c1, c2 = center
    s3, e3 = elevation
    fractions = np.arange(steps + 1, dtype=float) / steps
    angles = theta1 + sweep * fractions
    return np.column_stack(
        (
            c1 + radius * np.cos(angles),
            c2 + radius * np.sin(angles),
            s3 + (e3 - s3) * fractions,
        )
    )
