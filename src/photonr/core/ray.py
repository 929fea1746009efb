"""Ray data structure and vector utilities for CPU path tracing.

This module provides the fundamental Ray dataclass and vector utility functions
for Monte Carlo ray tracing. Vectors, points and colors are all plain NumPy
arrays of shape (3,) so they can be added, scaled and multiplied component-wise
without any wrapper type.

Randomness never comes from global state: every sampling function takes the
caller's ``numpy.random.Generator`` so that each render worker owns an
independent stream.

Example:
    >>> import numpy as np
    >>> origin = vec3(0.0, 0.0, 0.0)
    >>> direction = vec3(0.0, 0.0, -1.0)
    >>> ray = Ray(origin=origin, direction=direction)
    >>> point = ray.point_at(5.0)  # Point 5 units along the ray
    >>> rng = np.random.default_rng(42)
    >>> unit = random_unit_vector(rng)
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

# Points, vectors and colors share one representation
Vec3 = npt.NDArray[np.float64]

# Threshold below which a vector component is treated as zero
NEAR_ZERO_EPSILON = 1e-8


def vec3(x: float, y: float, z: float) -> Vec3:
    """Build a 3-component float64 vector."""
    return np.array((x, y, z), dtype=np.float64)


@dataclass(frozen=True, eq=False)
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction vector of the ray. Not required to be
            normalized; hit parameters are expressed in units of this vector.
    """

    origin: Vec3
    direction: Vec3

    def point_at(self, t: float) -> Vec3:
        """Compute the point along the ray at parameter t.

        Args:
            t: The parameter value. Positive values are in front of the origin.

        Returns:
            The point origin + t * direction.
        """
        return self.origin + t * self.direction


# =============================================================================
# Vector Utility Functions
# =============================================================================


def dot(a: Vec3, b: Vec3) -> float:
    """Compute the dot product of two vectors."""
    return float(a[0] * b[0] + a[1] * b[1] + a[2] * b[2])


def length_squared(v: Vec3) -> float:
    """Compute the squared length of a vector.

    Cheaper than length() when only comparing magnitudes.
    """
    return dot(v, v)


def length(v: Vec3) -> float:
    """Compute the Euclidean length of a vector."""
    return math.sqrt(length_squared(v))


def normalize(v: Vec3) -> Vec3:
    """Normalize a vector to unit length.

    The vector must not be zero-length.

    Args:
        v: The input vector.

    Returns:
        A unit vector in the same direction as v.
    """
    return v / length(v)


def reflect(incident: Vec3, normal: Vec3) -> Vec3:
    """Reflect an incident vector about a normal.

    The normal should be unit length for correct results.

    Args:
        incident: The incoming direction vector (pointing toward the surface).
        normal: The surface normal.

    Returns:
        The reflected direction vector, incident - 2 (incident . normal) normal.
    """
    return incident - 2.0 * dot(incident, normal) * normal


def near_zero(v: Vec3) -> bool:
    """Check if a vector is near zero in all components.

    Useful for detecting degenerate scatter directions.
    """
    return bool(np.all(np.abs(v) < NEAR_ZERO_EPSILON))


# =============================================================================
# Random Sampling Utilities for Monte Carlo
# =============================================================================


def random_in_unit_sphere(rng: np.random.Generator) -> Vec3:
    """Generate a random point strictly inside the unit sphere.

    Uses rejection sampling over the [-1, 1) cube. The loop has no iteration
    cap: capping it would bias the distribution toward the cube corners.

    Args:
        rng: The generator owned by the calling worker.

    Returns:
        A random point with 0 < length < 1.
    """
    while True:
        p = rng.uniform(-1.0, 1.0, 3)
        lensq = length_squared(p)
        # The lower bound keeps normalize() away from a zero vector
        if 1e-160 < lensq < 1.0:
            return p


def random_unit_vector(rng: np.random.Generator) -> Vec3:
    """Generate a random unit vector uniformly distributed on the sphere.

    This is the normalized version of random_in_unit_sphere().

    Args:
        rng: The generator owned by the calling worker.

    Returns:
        A random unit vector.
    """
    return normalize(random_in_unit_sphere(rng))
